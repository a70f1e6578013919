"""Tests for SessionRunner: queued input, run boundaries and threaded hosts."""
import threading
import time

from beast_blitz import signals
from beast_blitz.catalogue import default_catalogue
from beast_blitz.commands import SubmitSelections
from beast_blitz.config import DifficultyTier, SessionConfig
from beast_blitz.results import ResultStore
from beast_blitz.runner import SessionRunner
from beast_blitz.session import SessionState, create_session
from beast_blitz.store import MemoryStore

CATALOGUE = default_catalogue()


class ScriptedPlayer:
    """Answers ``correct`` riddles right, then one wrong."""

    def __init__(self, runner, correct):
        self.runner = runner
        self.correct = correct
        self.answered = 0
        runner.session.bus.subscribe(signals.RIDDLE_GENERATED, self.on_riddle)

    def on_riddle(self, name, data):
        riddle = data["riddle"]
        if self.answered < self.correct:
            self.runner.submit(riddle.answers)
        else:
            wrong = next(s for s in CATALOGUE if s.name not in riddle.answer_names)
            self.runner.submit([wrong])
        self.answered += 1


def _runner(seed=3, store=None, **kwargs):
    store = store if store is not None else MemoryStore()
    session = create_session(store=store, seed=seed, **kwargs)
    return SessionRunner(session), store


# --- Bounded runs ---

def test_play_runs_until_session_ends():
    runner, store = _runner()
    ScriptedPlayer(runner, correct=3)

    result = runner.play(DifficultyTier.NOVICE, max_ticks=10_000)

    assert result == {"final_score": 30, "rounds_completed": 3, "is_high_score": True}
    assert runner.session.state is SessionState.TERMINATED
    # Three pauses of ten ticks, plus the ticks that applied input.
    assert runner.session.engine.tick_number < 100
    [record] = ResultStore(store).results_for(DifficultyTier.NOVICE)
    assert record.points == 30


def test_cut_off_run_archives_the_session():
    runner, store = _runner()
    result = runner.play(DifficultyTier.VETERAN, max_ticks=20)

    assert runner.session.state is SessionState.TERMINATED
    assert result == {"final_score": 0, "rounds_completed": 0, "is_high_score": False}
    assert len(ResultStore(store).results_for(DifficultyTier.VETERAN)) == 1


def test_unanswered_round_times_out():
    runner, _ = _runner()
    result = runner.play(DifficultyTier.NOVICE, max_ticks=1_000)
    assert result["rounds_completed"] == 0
    # Start applied on tick 1, 150-tick countdown expires on tick 151.
    assert runner.session.engine.tick_number == 151


def test_zero_tick_run_drops_queued_start():
    runner, store = _runner()
    assert runner.play(DifficultyTier.NOVICE, max_ticks=0) is None
    assert runner.session.state is SessionState.IDLE
    assert runner.queue.pending() == 0
    assert store.keys() == []


def test_late_submission_is_recorded_as_rejected():
    runner, _ = _runner()
    runner.session.bus.subscribe(
        signals.RIDDLE_GENERATED,
        lambda n, d: runner.submit([]) or runner.submit(d["riddle"].answers),
    )
    runner.play(DifficultyTier.NOVICE, max_ticks=100)
    assert runner.session.rounds_completed == 0
    assert len(runner.rejected) == 1
    assert isinstance(runner.rejected[0], SubmitSelections)


def test_runner_plays_consecutive_sessions():
    store = MemoryStore()
    runner, _ = _runner(store=store)
    player = ScriptedPlayer(runner, correct=1)
    runner.play(DifficultyTier.NOVICE, max_ticks=1_000)
    player.answered, player.correct = 0, 2
    second = runner.play(DifficultyTier.NOVICE, max_ticks=1_000)

    assert second["final_score"] == 20
    assert second["is_high_score"] is True
    points = [r.points for r in ResultStore(store).results_for(DifficultyTier.NOVICE)]
    assert points == [20, 10]


# --- Real-time runs ---

def test_realtime_play_stops_on_its_own():
    config = SessionConfig(transition_delay=0.01)
    runner, _ = _runner(tps=1000, config=config)
    ScriptedPlayer(runner, correct=2)

    start = time.monotonic()
    result = runner.play(DifficultyTier.NOVICE)
    assert result["final_score"] == 20
    # Two 10-tick pauses at 1000 tps.
    assert time.monotonic() - start >= 0.015


def test_terminate_from_another_thread():
    runner, store = _runner(tps=1000)

    def quit_soon():
        time.sleep(0.05)
        runner.terminate()

    worker = threading.Thread(target=quit_soon)
    worker.start()
    result = runner.play(DifficultyTier.NOVICE)
    worker.join()

    assert result == {"final_score": 0, "rounds_completed": 0, "is_high_score": False}
    assert runner.session.state is SessionState.TERMINATED
    # Well short of the 15000-tick countdown.
    assert runner.session.engine.tick_number < 15_000
    assert len(ResultStore(store).results_for(DifficultyTier.NOVICE)) == 1
