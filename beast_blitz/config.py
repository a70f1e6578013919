"""Difficulty tiers and session tuning."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ROUNDING_MODES = ("truncate", "round_up")


@dataclass(frozen=True)
class TierConfig:
    """Immutable per-tier tuning.

    Attributes:
        columns: Grid column count.
        rows: Grid row count.
        countdown_seconds: Time allowed per round.
        points_per_round: Base points for a solved round.
        riddle_pool: Name of the riddle template pool ("elementary" or "advanced").
        max_selections: Largest answer set a riddle may ask for.
        combo_threshold: Streak length at which combo multipliers begin.
    """

    columns: int
    rows: int
    countdown_seconds: float
    points_per_round: int
    riddle_pool: str
    max_selections: int
    combo_threshold: int = 3

    @property
    def cell_count(self) -> int:
        return self.columns * self.rows


class DifficultyTier(Enum):
    NOVICE = "Beginner"
    VETERAN = "Advanced"

    @property
    def config(self) -> TierConfig:
        return _TIER_CONFIGS[self]

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def is_advanced(self) -> bool:
        return self is DifficultyTier.VETERAN

    @property
    def cell_count(self) -> int:
        return self.config.cell_count

    @property
    def description(self) -> str:
        cfg = self.config
        return (
            f"{cfg.columns}×{cfg.rows} Grid • {cfg.countdown_seconds:g}s Timer"
            f" • {cfg.points_per_round} pts/round"
        )


_TIER_CONFIGS: dict[DifficultyTier, TierConfig] = {
    DifficultyTier.NOVICE: TierConfig(
        columns=4,
        rows=5,
        countdown_seconds=15.0,
        points_per_round=10,
        riddle_pool="elementary",
        max_selections=5,
    ),
    DifficultyTier.VETERAN: TierConfig(
        columns=6,
        rows=6,
        countdown_seconds=20.0,
        points_per_round=20,
        riddle_pool="advanced",
        max_selections=8,
    ),
}


@dataclass(frozen=True)
class SessionConfig:
    """Immutable session tuning shared by both tiers.

    Attributes:
        transition_delay: Seconds between a solved round and the next grid.
        max_multiplier: Cap on the combo multiplier (in halves).
        rounding: How odd half-point results are settled, "truncate" or "round_up".
    """

    transition_delay: float = 1.0
    max_multiplier: int = 5
    rounding: str = "truncate"

    def __post_init__(self) -> None:
        if self.transition_delay <= 0:
            raise ValueError(
                f"transition_delay must be > 0, got {self.transition_delay}"
            )
        if self.max_multiplier < 2:
            raise ValueError(f"max_multiplier must be >= 2, got {self.max_multiplier}")
        if self.rounding not in ROUNDING_MODES:
            raise ValueError(
                f"rounding must be one of {ROUNDING_MODES}, got {self.rounding!r}"
            )
