"""Shared type aliases and exceptions for beast_blitz."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]
    random: _random.Random


class EmptyCatalogueError(LookupError):
    """Raised when sampling from a catalogue with no specimens."""


class InvalidTransition(RuntimeError):
    """Raised when the session state machine is asked for an illegal move."""

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot move session from {current!r} to {target!r}")


class StoreError(Exception):
    """Raised by key-value stores when a read or write cannot be completed."""


System = Callable[[TickContext], None]
