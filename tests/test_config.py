"""Tests for DifficultyTier and SessionConfig."""
import dataclasses

import pytest

from beast_blitz.config import DifficultyTier, SessionConfig, TierConfig


@pytest.mark.parametrize("tier", list(DifficultyTier))
def test_cell_count_is_columns_times_rows(tier):
    cfg = tier.config
    assert cfg.cell_count == cfg.columns * cfg.rows
    assert tier.cell_count == cfg.cell_count


def test_novice_values():
    cfg = DifficultyTier.NOVICE.config
    assert (cfg.columns, cfg.rows) == (4, 5)
    assert cfg.cell_count == 20
    assert cfg.countdown_seconds == 15.0
    assert cfg.points_per_round == 10
    assert cfg.riddle_pool == "elementary"
    assert cfg.max_selections == 5
    assert cfg.combo_threshold == 3


def test_veteran_values():
    cfg = DifficultyTier.VETERAN.config
    assert (cfg.columns, cfg.rows) == (6, 6)
    assert cfg.cell_count == 36
    assert cfg.countdown_seconds == 20.0
    assert cfg.points_per_round == 20
    assert cfg.riddle_pool == "advanced"
    assert cfg.max_selections == 8
    assert cfg.combo_threshold == 3


def test_display_and_description():
    assert DifficultyTier.NOVICE.display_name == "Beginner"
    assert DifficultyTier.VETERAN.display_name == "Advanced"
    assert DifficultyTier.NOVICE.description == "4×5 Grid • 15s Timer • 10 pts/round"
    assert DifficultyTier.VETERAN.description == "6×6 Grid • 20s Timer • 20 pts/round"


def test_is_advanced():
    assert DifficultyTier.VETERAN.is_advanced
    assert not DifficultyTier.NOVICE.is_advanced


def test_tier_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DifficultyTier.NOVICE.config.rows = 9  # type: ignore[misc]


def test_session_config_defaults():
    cfg = SessionConfig()
    assert cfg.transition_delay == 1.0
    assert cfg.max_multiplier == 5
    assert cfg.rounding == "truncate"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"transition_delay": 0},
        {"max_multiplier": 1},
        {"rounding": "bankers"},
    ],
)
def test_session_config_validation(kwargs):
    with pytest.raises(ValueError):
        SessionConfig(**kwargs)


def test_custom_tier_config_cell_count():
    cfg = TierConfig(columns=3, rows=2, countdown_seconds=5.0,
                     points_per_round=1, riddle_pool="elementary", max_selections=2)
    assert cfg.cell_count == 6
