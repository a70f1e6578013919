"""In-process pub/sub bus carrying session notifications to the presentation layer."""
from __future__ import annotations

from typing import Any, Callable

_Handler = Callable[[str, dict[str, Any]], None]

SCORE_CHANGED = "score_changed"
STREAK_CHANGED = "streak_changed"
TIME_REMAINING_CHANGED = "time_remaining_changed"
RIDDLE_GENERATED = "riddle_generated"
GRID_REFRESHED = "grid_refreshed"
ROUND_COMPLETED = "round_completed"
SESSION_TERMINATED = "session_terminated"
COMBO_TRIGGERED = "combo_triggered"

ALL_SIGNALS = (
    SCORE_CHANGED,
    STREAK_CHANGED,
    TIME_REMAINING_CHANGED,
    RIDDLE_GENERATED,
    GRID_REFRESHED,
    ROUND_COMPLETED,
    SESSION_TERMINATED,
    COMBO_TRIGGERED,
)


class SignalBus:
    """Synchronous bus. ``publish`` returns only after every handler has run."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {}

    def subscribe(self, signal_name: str, handler: _Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def subscribe_all(self, handler: _Handler) -> None:
        for signal_name in ALL_SIGNALS:
            self.subscribe(signal_name, handler)

    def unsubscribe(self, signal_name: str, handler: _Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def subscribers(self, signal_name: str) -> list[_Handler]:
        return list(self._subscribers.get(signal_name, []))

    def publish(self, signal_name: str, **data: Any) -> None:
        # Copy so a handler may unsubscribe itself mid-dispatch.
        for handler in list(self._subscribers.get(signal_name, [])):
            handler(signal_name, data)
