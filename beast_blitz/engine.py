"""Engine - the fixed-rate game loop that paces countdowns and pauses.

Durations in the game are given in seconds and run as whole ticks, so
the engine owns both the tick counter and the seconds/ticks conversion.
It also owns the seeded random source every grid and riddle draws from.
"""

import logging
import os
import random
import time
from typing import Callable

from beast_blitz.types import System, TickContext

logger = logging.getLogger(__name__)

# 0.1 s per tick, the countdown granularity of the game.
DEFAULT_TPS = 10

Hook = Callable[[TickContext], None]


class Engine:
    def __init__(self, tps: int = DEFAULT_TPS, seed: int | None = None) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._dt = 1.0 / tps
        self._tick_number = 0
        self._systems: list[System] = []
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    def ticks_for(self, seconds: float) -> int:
        """Whole ticks covering ``seconds``; never less than one."""
        return max(1, round(seconds * self._tps))

    def seconds_for(self, ticks: int) -> float:
        return ticks / self._tps

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Hook) -> None:
        """Run ``hook`` before the first tick of ``run``/``run_forever``."""
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        """Run ``hook`` after ``run``/``run_forever`` returns from its last tick."""
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _context(self) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt=self._dt,
            elapsed=self._tick_number * self._dt,
            request_stop=self._request_stop,
            random=self._rng,
        )

    def _tick(self) -> None:
        self._tick_number += 1
        ctx = self._context()
        for system in self._systems:
            system(ctx)
            if self._stop_requested:
                break

    def _fire(self, hooks: list[Hook]) -> None:
        ctx = self._context()
        for hook in hooks:
            hook(ctx)

    def step(self) -> None:
        """Advance one tick without start/stop hooks."""
        self._stop_requested = False
        self._tick()

    def run(self, n: int) -> None:
        """Run at most ``n`` ticks back to back, ignoring wall time."""
        self._stop_requested = False
        self._fire(self._start_hooks)
        for _ in range(n):
            self._tick()
            if self._stop_requested:
                break
        self._fire(self._stop_hooks)

    def run_forever(self) -> None:
        """Run in real time, one tick every ``dt`` seconds, until a stop request."""
        self._stop_requested = False
        self._fire(self._start_hooks)
        logger.debug("engine running at %d tps (seed=%d)", self._tps, self._seed)

        deadline = time.monotonic()
        while not self._stop_requested:
            self._tick()
            deadline += self._dt
            delay = deadline - time.monotonic()
            if delay > 0 and not self._stop_requested:
                time.sleep(delay)
            elif delay < -self._dt:
                # Fell behind; pace from now rather than bursting to catch up.
                deadline = time.monotonic()
        self._fire(self._stop_hooks)
