"""Play random command streams against :mod:`blockfall` and log the results.

Run with::

    PYTHONPATH=src python examples/simulate_games.py

Pass ``--help`` to see options for the number of games, frame budget and
logging verbosity.
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass

from blockfall import Command, GameSession, LevelUp, LinesCleared, SessionConfig


LOGGER = logging.getLogger(__name__)

FRAME = 1 / 60
PLAYER_COMMANDS = (
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.ROTATE,
    Command.SOFT_DROP,
    Command.HARD_DROP,
)


@dataclass
class GameSummary:
    score: int = 0
    level: int = 1
    lines: int = 0
    frames: int = 0
    clears: int = 0
    level_ups: int = 0
    game_over: bool = False


def play_game(
    session: GameSession,
    rng: random.Random,
    *,
    max_frames: int,
    command_chance: float = 0.1,
) -> GameSummary:
    """Restart ``session`` and play random commands until game over or ``max_frames``."""

    summary = GameSummary()

    def record(event) -> None:
        if isinstance(event, LinesCleared):
            summary.clears += 1
        elif isinstance(event, LevelUp):
            summary.level_ups += 1

    session.restart()
    session.events.subscribe(record)
    try:
        for frame in range(max_frames):
            if rng.random() < command_chance:
                session.handle(rng.choice(PLAYER_COMMANDS))
            session.tick(FRAME)
            summary.frames = frame + 1
            if session.game_over:
                summary.game_over = True
                break
    finally:
        session.events.unsubscribe(record)

    summary.score = session.score
    summary.level = session.level
    summary.lines = session.lines
    return summary


def log_summary(summary: GameSummary, *, index: int) -> None:
    LOGGER.info(
        "Game %d: score=%d level=%d lines=%d clears=%d frames=%d%s",
        index,
        summary.score,
        summary.level,
        summary.lines,
        summary.clears,
        summary.frames,
        " (game over)" if summary.game_over else "",
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--games", type=int, default=5, help="How many games to play.")
    parser.add_argument("--max-frames", type=int, default=60 * 60 * 5, help="Frame budget per game.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for pieces and commands.")
    parser.add_argument(
        "--command-chance",
        type=float,
        default=0.1,
        help="Probability of issuing a random command on each frame.",
    )
    parser.add_argument("--hard-drop-locks", action="store_true", help="Lock the piece on hard drop.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    session = GameSession(SessionConfig(seed=args.seed, hard_drop_locks=args.hard_drop_locks))
    rng = random.Random(args.seed)
    best = 0
    for index in range(1, args.games + 1):
        summary = play_game(session, rng, max_frames=args.max_frames, command_chance=args.command_chance)
        log_summary(summary, index=index)
        best = max(best, summary.score)
    LOGGER.info("Best score over %d game(s): %d", args.games, best)


if __name__ == "__main__":
    main()
