"""Player commands queued from any thread and applied inside the tick loop.

A host whose input arrives outside the loop (a UI thread, a network
handler) enqueues commands; the command system applies them to the
session at the start of the next tick, so they never race the countdown.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Union

if TYPE_CHECKING:
    from beast_blitz.catalogue import Specimen
    from beast_blitz.config import DifficultyTier
    from beast_blitz.session import GameSession
    from beast_blitz.types import System, TickContext


@dataclass(frozen=True)
class StartSession:
    tier: DifficultyTier

    def apply(self, session: GameSession) -> bool:
        session.start_session(self.tier)
        return True


@dataclass(frozen=True)
class SubmitSelections:
    specimens: tuple[Specimen, ...]

    def apply(self, session: GameSession) -> bool:
        # False when the submission resolved nothing.
        return session.submit_selections(self.specimens)


@dataclass(frozen=True)
class TerminateSession:
    def apply(self, session: GameSession) -> bool:
        was_active = session.is_active
        session.terminate_session()
        return was_active


Command = Union[StartSession, SubmitSelections, TerminateSession]
_COMMAND_TYPES = (StartSession, SubmitSelections, TerminateSession)


class CommandQueue:
    """FIFO of pending commands.

    ``enqueue`` may be called from another thread (``deque.append`` and
    ``popleft`` are atomic); commands only touch the session in ``drain``.
    """

    def __init__(self) -> None:
        self._pending: deque[Command] = deque()

    def enqueue(self, cmd: Command) -> None:
        if not isinstance(cmd, _COMMAND_TYPES):
            raise TypeError(f"Not a session command: {type(cmd).__qualname__}")
        self._pending.append(cmd)

    def pending(self) -> int:
        return len(self._pending)

    def clear(self) -> int:
        """Drop every pending command. Returns how many were dropped."""
        dropped = len(self._pending)
        self._pending.clear()
        return dropped

    def drain(self, session: GameSession) -> list[tuple[Command, bool]]:
        """Apply pending commands in arrival order. Returns ``[(cmd, accepted)]``."""
        results: list[tuple[Command, bool]] = []
        while self._pending:
            cmd = self._pending.popleft()
            results.append((cmd, cmd.apply(session)))
        return results


def make_command_system(
    queue: CommandQueue,
    session: GameSession,
    on_accept: Callable[[Command], None] | None = None,
    on_reject: Callable[[Command], None] | None = None,
) -> System:
    """Return a system that applies queued commands to ``session`` each tick."""

    def command_system(ctx: TickContext) -> None:
        for cmd, accepted in queue.drain(session):
            callback = on_accept if accepted else on_reject
            if callback is not None:
                callback(cmd)

    return command_system
