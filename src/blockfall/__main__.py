"""Headless ASCII demo for the game engine.

Run with: `python -m blockfall`

Plays a short scripted session against a seeded game and prints the final
frame: the board with the active piece overlaid, followed by the counters and
the upcoming queue.  Useful as a smoke test without a display.
"""

from __future__ import annotations

import argparse
import logging
from itertools import cycle

from . import Command, GameSession, SessionConfig, render_grid


FRAME = 1 / 60
SCRIPT = (
    Command.ROTATE,
    Command.MOVE_LEFT,
    Command.MOVE_LEFT,
    Command.HARD_DROP,
    Command.MOVE_RIGHT,
    Command.MOVE_RIGHT,
    Command.MOVE_RIGHT,
    Command.HARD_DROP,
)


def _print_grid(grid: list[list[int]]) -> None:
    for row in grid:
        print("".join("#" if cell else "." for cell in row))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=0, help="Seed for the piece queue.")
    parser.add_argument("--seconds", type=float, default=30.0, help="Simulated play time.")
    parser.add_argument(
        "--command-every",
        type=int,
        default=20,
        help="Issue the next scripted command every N frames.",
    )
    parser.add_argument("--hard-drop-locks", action="store_true", help="Lock on hard drop.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g. DEBUG, INFO).")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s")

    session = GameSession(SessionConfig(seed=args.seed, hard_drop_locks=args.hard_drop_locks))
    commands = cycle(SCRIPT)
    frames = int(args.seconds / FRAME)
    for frame in range(frames):
        if args.command_every > 0 and frame % args.command_every == 0:
            session.handle(next(commands))
        session.tick(FRAME)
        if session.game_over:
            break

    _print_grid(render_grid(session.board, session.active))
    print(f"score={session.score} level={session.level} lines={session.lines} phase={session.phase.value}")
    print("next: " + " ".join(kind.value for kind in session.upcoming))


if __name__ == "__main__":
    main()
