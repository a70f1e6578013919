"""Autoplay -- headless sessions with a scripted player.

Demonstrates:
- Hosting a session with SessionRunner and a shared MemoryStore
- Answering through the runner's queue from a riddle_generated handler
- Subscribing to every session signal
- Running back to back, or in real time with --realtime
- Reading the leaderboard after a few sessions

The scripted player answers correctly for ``--rounds`` rounds and then
picks one wrong animal, ending the session.

Run: python -m examples.autoplay --tier veteran --seed 7
"""

import argparse
import logging

from beast_blitz import (
    DifficultyTier,
    MemoryStore,
    ResultStore,
    SessionRunner,
    create_session,
    default_catalogue,
    signals,
)

# Upper bound for back-to-back runs; a session never gets close.
MAX_TICKS = 100_000


def describe(signal_name: str, data: dict) -> None:
    if signal_name == signals.TIME_REMAINING_CHANGED:
        return
    if signal_name == signals.RIDDLE_GENERATED:
        riddle = data["riddle"]
        print(f"  riddle: {riddle.question} ({len(riddle.answers)} cells)")
    elif signal_name == signals.GRID_REFRESHED:
        print(f"  grid:   {', '.join(s.name for s in data['specimens'])}")
    elif signal_name == signals.ROUND_COMPLETED:
        outcome = "solved" if data["successful"] else "missed"
        print(f"  round {outcome}")
    else:
        print(f"  {signal_name}: {data}")


class ScriptedPlayer:
    def __init__(self, runner: SessionRunner, rounds: int) -> None:
        self.runner = runner
        self.rounds = rounds
        self.solved = 0
        self.catalogue = default_catalogue()
        runner.session.bus.subscribe(signals.RIDDLE_GENERATED, self.on_riddle)

    def on_riddle(self, signal_name: str, data: dict) -> None:
        riddle = data["riddle"]
        if self.solved < self.rounds:
            self.runner.submit(riddle.answers)
            self.solved += 1
        else:
            wrong = next(s for s in self.catalogue if s.name not in riddle.answer_names)
            self.runner.submit([wrong])


def play(tier: DifficultyTier, seed: int, rounds: int, store: MemoryStore, realtime: bool) -> None:
    runner = SessionRunner(create_session(store=store, seed=seed))
    runner.session.bus.subscribe_all(describe)
    ScriptedPlayer(runner, rounds)
    runner.play(tier, max_ticks=None if realtime else MAX_TICKS)
    print(f"  ({runner.session.engine.tick_number} ticks)")


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Beast Blitz with a scripted player")
    parser.add_argument("--tier", choices=["novice", "veteran"], default="novice")
    parser.add_argument("--seed", type=int, default=1)
    parser.add_argument("--rounds", type=int, default=5)
    parser.add_argument("--sessions", type=int, default=3)
    parser.add_argument("--realtime", action="store_true", help="pace ticks with the wall clock")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    tier = DifficultyTier[args.tier.upper()]
    store = MemoryStore()

    for i in range(args.sessions):
        print(f"=== Session {i + 1} ({tier.display_name}: {tier.description}) ===")
        play(tier, args.seed + i, args.rounds + i, store, args.realtime)

    print("\n=== Leaderboard ===")
    for rank, record in enumerate(ResultStore(store).results_for(tier), start=1):
        print(
            f"  {rank:2d}. {record.player_name:<10} {record.points:5d} pts"
            f"  {record.rounds_completed} rounds  best combo {record.max_combo_streak}"
        )


if __name__ == "__main__":
    main()
