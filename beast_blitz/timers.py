"""Tick-counted one-shot timers and the system that drives them."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from beast_blitz.types import System, TickContext


@dataclass
class Timer:
    """One-shot countdown. Fires when remaining reaches 0, then is dropped."""

    name: str
    remaining: int


class TimerSet:
    """Named timers; at most one running timer per name."""

    def __init__(self) -> None:
        self._timers: dict[str, Timer] = {}

    def start(self, name: str, ticks: int) -> Timer:
        """Start ``name`` with ``ticks`` remaining, replacing any running one."""
        if ticks <= 0:
            raise ValueError(f"ticks must be positive, got {ticks}")
        timer = Timer(name=name, remaining=ticks)
        self._timers[name] = timer
        return timer

    def cancel(self, name: str) -> bool:
        """Stop ``name``. Returns False if it was not running."""
        return self._timers.pop(name, None) is not None

    def cancel_all(self) -> None:
        self._timers.clear()

    def is_running(self, name: str) -> bool:
        return name in self._timers

    def remaining(self, name: str) -> int:
        timer = self._timers.get(name)
        return timer.remaining if timer is not None else 0

    def names(self) -> list[str]:
        return list(self._timers)

    def _current(self, timer: Timer) -> bool:
        return self._timers.get(timer.name) is timer

    def _pop(self, timer: Timer) -> None:
        if self._current(timer):
            del self._timers[timer.name]


def make_timer_system(
    timers: TimerSet,
    on_fire: Callable[[TickContext, Timer], None],
    on_tick: Callable[[TickContext, Timer], None] | None = None,
) -> System:
    """Return a system that decrements timers and fires callbacks at zero.

    A timer is removed before ``on_fire`` runs, so it fires exactly once.
    Timers cancelled or restarted by an earlier callback in the same tick
    are skipped.
    """

    def timer_system(ctx: TickContext) -> None:
        for timer in list(timers._timers.values()):
            if not timers._current(timer):
                continue
            timer.remaining -= 1
            if timer.remaining <= 0:
                timers._pop(timer)
                on_fire(ctx, timer)
            elif on_tick is not None:
                on_tick(ctx, timer)

    return timer_system
