"""Result records and the per-tier leaderboards built from them."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from beast_blitz.config import DifficultyTier
from beast_blitz.store import KeyValueStore
from beast_blitz.types import StoreError

logger = logging.getLogger(__name__)

MAX_RECORDS = 10

_KEYS: dict[DifficultyTier, str] = {
    DifficultyTier.NOVICE: "results.novice",
    DifficultyTier.VETERAN: "results.veteran",
}


@dataclass(frozen=True)
class ResultRecord:
    """Snapshot of a finished session.

    Attributes:
        points: Final score.
        timestamp: When the session ended.
        player_name: Display name at archive time.
        advanced: True for the veteran tier.
        rounds_completed: Rounds solved before the session ended.
        max_combo_streak: Longest streak that reached the combo threshold.
    """

    points: int
    timestamp: datetime
    player_name: str
    advanced: bool
    rounds_completed: int
    max_combo_streak: int

    @property
    def tier(self) -> DifficultyTier:
        return DifficultyTier.VETERAN if self.advanced else DifficultyTier.NOVICE

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": self.points,
            "timestamp": self.timestamp.isoformat(),
            "player_name": self.player_name,
            "advanced": self.advanced,
            "rounds_completed": self.rounds_completed,
            "max_combo_streak": self.max_combo_streak,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResultRecord:
        return cls(
            points=int(data["points"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            player_name=str(data["player_name"]),
            advanced=_flag(data["advanced"]),
            rounds_completed=int(data["rounds_completed"]),
            max_combo_streak=int(data["max_combo_streak"]),
        )


def _flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a JSON boolean, got {value!r}")
    return value


def _ranked(records: list[ResultRecord]) -> list[ResultRecord]:
    # sorted() is stable: equal points keep insertion order.
    return sorted(records, key=lambda r: r.points, reverse=True)


class ResultStore:
    """Top-ten leaderboards per tier, persisted as JSON through a KeyValueStore.

    Persistence is best effort: unreadable data reads as an empty board and
    failed writes are logged, never raised.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def results_for(self, tier: DifficultyTier) -> list[ResultRecord]:
        key = _KEYS[tier]
        try:
            raw = self._store.get(key)
        except (StoreError, OSError) as exc:
            logger.warning("could not read %s: %s", key, exc)
            return []
        if raw is None:
            return []
        try:
            records = [ResultRecord.from_dict(item) for item in json.loads(raw)]
        except (ValueError, TypeError, KeyError) as exc:
            logger.warning("discarding unreadable leaderboard %s: %s", key, exc)
            return []
        return _ranked(records)

    def best_score_for(self, tier: DifficultyTier) -> int:
        records = self.results_for(tier)
        return records[0].points if records else 0

    def archive_result(self, record: ResultRecord) -> list[ResultRecord]:
        """Insert ``record`` into its tier's board and persist the top ten."""
        tier = record.tier
        records = self.results_for(tier)
        records.append(record)
        records = _ranked(records)[:MAX_RECORDS]
        payload = json.dumps([r.to_dict() for r in records])
        try:
            self._store.set(_KEYS[tier], payload)
        except (StoreError, OSError) as exc:
            logger.warning("could not archive result for %s: %s", tier.name, exc)
        return records

    def clear_all(self) -> None:
        for key in _KEYS.values():
            try:
                self._store.delete(key)
            except (StoreError, OSError) as exc:
                logger.warning("could not clear %s: %s", key, exc)
