"""SessionRunner - hosts a GameSession on its engine's loop.

Player input is queued through ``start``/``submit``/``terminate``, which
are safe to call from another thread, and applied at the next tick. A run
stops by itself once the session has terminated. Stopping a run while a
session is still going terminates it, so every played session is archived.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from beast_blitz import signals
from beast_blitz.catalogue import Specimen
from beast_blitz.commands import (
    Command,
    CommandQueue,
    StartSession,
    SubmitSelections,
    TerminateSession,
    make_command_system,
)
from beast_blitz.config import DifficultyTier
from beast_blitz.session import GameSession
from beast_blitz.types import TickContext

logger = logging.getLogger(__name__)


class SessionRunner:
    def __init__(self, session: GameSession, queue: CommandQueue | None = None) -> None:
        self.session = session
        self.queue = queue if queue is not None else CommandQueue()
        self.rejected: list[Command] = []
        self.last_result: dict[str, Any] | None = None
        self._finished = False

        engine = session.engine
        engine.add_system(
            make_command_system(self.queue, session, on_reject=self.rejected.append)
        )
        engine.add_system(self._stop_when_finished)
        engine.on_start(self._on_run_start)
        engine.on_stop(self._on_run_stop)
        session.bus.subscribe(signals.SESSION_TERMINATED, self._on_terminated)

    # --- Input ---

    def start(self, tier: DifficultyTier) -> None:
        self.queue.enqueue(StartSession(tier))

    def submit(self, specimens: Iterable[Specimen]) -> None:
        self.queue.enqueue(SubmitSelections(tuple(specimens)))

    def terminate(self) -> None:
        self.queue.enqueue(TerminateSession())

    # --- Running ---

    def play(self, tier: DifficultyTier, max_ticks: int | None = None) -> dict[str, Any] | None:
        """Play one session and return its ``session_terminated`` payload.

        With ``max_ticks`` the ticks run back to back and the session is cut
        off after that many; without it the engine runs in real time until
        the session ends.
        """
        self.last_result = None
        self.start(tier)
        if max_ticks is None:
            self.session.engine.run_forever()
        else:
            self.session.engine.run(max_ticks)
        return self.last_result

    def _on_terminated(self, name: str, data: dict[str, Any]) -> None:
        self._finished = True
        self.last_result = dict(data)

    def _stop_when_finished(self, ctx: TickContext) -> None:
        # A start applied in the same tick keeps the run going.
        if self._finished and not self.session.is_active:
            ctx.request_stop()

    def _on_run_start(self, ctx: TickContext) -> None:
        self._finished = False
        logger.debug("runner started at tick %d", ctx.tick_number)

    def _on_run_stop(self, ctx: TickContext) -> None:
        if self.session.is_active:
            logger.info("run stopped at tick %d mid-session", ctx.tick_number)
            self.session.terminate_session()
        dropped = self.queue.clear()
        if dropped:
            logger.debug("dropped %d unapplied commands", dropped)
