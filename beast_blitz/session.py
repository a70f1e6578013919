"""GameSession - the round lifecycle, countdown, scoring and archiving.

States::

    idle -> active -> (transition <-> active) -> terminated

A round is resolved at most once: the first of submission, timeout or
termination to reach it closes the round and cancels the countdown, and
every later attempt is ignored. The pause between a solved round and the
next grid is a cancellable timer, so tearing the session down before it
fires discards the next round.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable

from beast_blitz import signals
from beast_blitz.catalogue import Specimen, SpecimenCatalogue, default_catalogue
from beast_blitz.config import DifficultyTier, SessionConfig
from beast_blitz.engine import DEFAULT_TPS, Engine
from beast_blitz.preferences import Preferences
from beast_blitz.results import ResultRecord, ResultStore
from beast_blitz.riddles import Riddle, RiddleGenerator
from beast_blitz.scoring import combo_multiplier, round_points
from beast_blitz.signals import SignalBus
from beast_blitz.store import KeyValueStore, MemoryStore
from beast_blitz.timers import Timer, TimerSet, make_timer_system
from beast_blitz.types import InvalidTransition, TickContext

logger = logging.getLogger(__name__)

COUNTDOWN = "countdown"
NEXT_ROUND = "next_round"


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    TRANSITION = "transition"
    TERMINATED = "terminated"


_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    SessionState.IDLE: frozenset({SessionState.ACTIVE}),
    SessionState.ACTIVE: frozenset(
        {SessionState.TRANSITION, SessionState.TERMINATED, SessionState.IDLE}
    ),
    SessionState.TRANSITION: frozenset(
        {SessionState.ACTIVE, SessionState.TERMINATED, SessionState.IDLE}
    ),
    SessionState.TERMINATED: frozenset({SessionState.IDLE}),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GameSession:
    """Owns the grid, riddle, score, streak and countdown of one player.

    The session registers its timer system on ``engine``; the engine
    paces the countdown and its random source feeds grid sampling
    and riddle selection. Notifications go out through ``bus``.
    """

    def __init__(
        self,
        engine: Engine,
        results: ResultStore,
        preferences: Preferences,
        catalogue: SpecimenCatalogue | None = None,
        riddles: RiddleGenerator | None = None,
        bus: SignalBus | None = None,
        config: SessionConfig | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._engine = engine
        self._results = results
        self._preferences = preferences
        self._catalogue = catalogue if catalogue is not None else default_catalogue()
        self._riddles = riddles if riddles is not None else RiddleGenerator(engine.random)
        self.bus: SignalBus = bus if bus is not None else SignalBus()
        self.config: SessionConfig = config if config is not None else SessionConfig()
        self._now = now

        self._state = SessionState.IDLE
        self._tier = DifficultyTier.NOVICE
        self._score = 0
        self._streak = 0
        self._rounds_completed = 0
        self._max_combo = 0
        self._grid: list[Specimen] = []
        self._riddle: Riddle | None = None
        self._round_open = False
        self._generation = 0

        self._timers = TimerSet()
        engine.add_system(
            make_timer_system(self._timers, self._on_timer_fired, self._on_timer_tick)
        )

    # --- Read-only state ---

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def tier(self) -> DifficultyTier:
        return self._tier

    @property
    def score(self) -> int:
        return self._score

    @property
    def streak(self) -> int:
        return self._streak

    @property
    def rounds_completed(self) -> int:
        return self._rounds_completed

    @property
    def max_combo(self) -> int:
        return self._max_combo

    @property
    def grid(self) -> list[Specimen]:
        return list(self._grid)

    @property
    def riddle(self) -> Riddle | None:
        return self._riddle

    @property
    def is_active(self) -> bool:
        return self._state in (SessionState.ACTIVE, SessionState.TRANSITION)

    @property
    def time_remaining(self) -> float:
        """Seconds left on the countdown; 0.0 when no round is running."""
        return self._engine.seconds_for(self._timers.remaining(COUNTDOWN))

    # --- Lifecycle ---

    def _move(self, target: SessionState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise InvalidTransition(self._state.value, target.value)
        self._state = target

    def start_session(self, tier: DifficultyTier) -> None:
        if self._state is not SessionState.IDLE:
            # Abandon whatever was running; nothing is archived.
            self._timers.cancel_all()
            self._round_open = False
            self._move(SessionState.IDLE)
        self._generation += 1
        self._tier = tier
        self._score = 0
        self._streak = 0
        self._rounds_completed = 0
        self._max_combo = 0
        self._grid = []
        self._riddle = None
        self._move(SessionState.ACTIVE)
        logger.info("session started on %s tier", tier.name.lower())
        self._begin_round()

    def _begin_round(self) -> None:
        """Deal a fresh grid and riddle and start the countdown.

        Handlers of the round's notifications may end or restart the
        session; once that happens this round is abandoned.
        """
        if not self.is_active:
            return
        # A pending pause must not deal a second grid later.
        self._timers.cancel(NEXT_ROUND)
        if self._state is SessionState.TRANSITION:
            self._move(SessionState.ACTIVE)
        generation = self._generation
        cfg = self._tier.config
        rng = self._engine.random

        self._grid = [
            self._catalogue.random_specimen(rng) for _ in range(cfg.cell_count)
        ]
        self.bus.publish(signals.GRID_REFRESHED, specimens=list(self._grid))
        if generation != self._generation or not self.is_active:
            return

        riddle = self._riddles.generate(self._tier, self._grid)
        self._riddle = riddle
        self._round_open = True
        self._timers.start(COUNTDOWN, self._engine.ticks_for(cfg.countdown_seconds))
        logger.debug(
            "round %d: %r (%d answers)",
            self._rounds_completed + 1,
            riddle.question,
            len(riddle.answers),
        )
        self.bus.publish(signals.RIDDLE_GENERATED, riddle=riddle)
        if generation != self._generation or not self._round_open:
            return
        self.bus.publish(signals.TIME_REMAINING_CHANGED, seconds=self.time_remaining)

    def _resolve_round(self) -> bool:
        """Close the current round. False if it was already closed."""
        if not self._round_open:
            return False
        self._round_open = False
        self._timers.cancel(COUNTDOWN)
        return True

    def submit_selections(self, selected: Iterable[Specimen]) -> bool:
        """Judge the player's selection. Returns False if it was ignored."""
        riddle = self._riddle
        if riddle is None or not self.is_active:
            return False
        if not self._resolve_round():
            return False
        chosen = frozenset(s.name for s in selected)
        if chosen == riddle.answer_names:
            self._on_success(riddle)
        else:
            self._on_failure(riddle)
        return True

    def _on_success(self, riddle: Riddle) -> None:
        cfg = self._tier.config
        self._rounds_completed += 1
        self._streak += 1

        points = round_points(
            cfg.points_per_round,
            self._streak,
            cfg.combo_threshold,
            cap=self.config.max_multiplier,
            rounding=self.config.rounding,
        )
        multiplier = combo_multiplier(
            self._streak, cfg.combo_threshold, self.config.max_multiplier
        )
        self._score += points
        if multiplier:
            self._max_combo = max(self._max_combo, self._streak)

        self._move(SessionState.TRANSITION)
        self._timers.start(
            NEXT_ROUND, self._engine.ticks_for(self.config.transition_delay)
        )

        if multiplier:
            self.bus.publish(signals.COMBO_TRIGGERED, multiplier=multiplier)
        self.bus.publish(signals.SCORE_CHANGED, score=self._score)
        self.bus.publish(signals.STREAK_CHANGED, streak=self._streak)
        self.bus.publish(
            signals.ROUND_COMPLETED,
            successful=True,
            correct_specimens=list(riddle.answers),
        )

    def _on_failure(self, riddle: Riddle) -> None:
        generation = self._generation
        self._streak = 0
        self.bus.publish(signals.STREAK_CHANGED, streak=0)
        self.bus.publish(
            signals.ROUND_COMPLETED,
            successful=False,
            correct_specimens=list(riddle.answers),
        )
        if generation == self._generation:
            self.terminate_session()

    def _on_timeout(self) -> None:
        riddle = self._riddle
        if riddle is None or not self._resolve_round():
            return
        logger.debug("round %d timed out", self._rounds_completed + 1)
        self.bus.publish(signals.TIME_REMAINING_CHANGED, seconds=0.0)
        self._on_failure(riddle)

    def terminate_session(self) -> None:
        if not self.is_active:
            return
        self._move(SessionState.TERMINATED)
        self._round_open = False
        self._timers.cancel_all()

        is_high_score = self._score > self._results.best_score_for(self._tier)
        record = ResultRecord(
            points=self._score,
            timestamp=self._now(),
            player_name=self._preferences.player_name,
            advanced=self._tier.is_advanced,
            rounds_completed=self._rounds_completed,
            max_combo_streak=self._max_combo,
        )
        self._results.archive_result(record)
        logger.info(
            "session ended: %d points over %d rounds%s",
            self._score,
            self._rounds_completed,
            " (new best)" if is_high_score else "",
        )
        self.bus.publish(
            signals.SESSION_TERMINATED,
            final_score=self._score,
            rounds_completed=self._rounds_completed,
            is_high_score=is_high_score,
        )

    # --- Timer callbacks ---

    def _on_timer_tick(self, ctx: TickContext, timer: Timer) -> None:
        if timer.name == COUNTDOWN:
            self.bus.publish(signals.TIME_REMAINING_CHANGED, seconds=self.time_remaining)

    def _on_timer_fired(self, ctx: TickContext, timer: Timer) -> None:
        if timer.name == COUNTDOWN:
            self._on_timeout()
        elif timer.name == NEXT_ROUND:
            self._begin_round()


def create_session(
    store: KeyValueStore | None = None,
    seed: int | None = None,
    tps: int = DEFAULT_TPS,
    config: SessionConfig | None = None,
    bus: SignalBus | None = None,
) -> GameSession:
    """Wire an engine, stores and a session with the stock catalogue."""
    store = store if store is not None else MemoryStore()
    engine = Engine(tps=tps, seed=seed)
    return GameSession(
        engine,
        ResultStore(store),
        Preferences(store),
        bus=bus,
        config=config,
    )
