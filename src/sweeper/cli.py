"""
Text-mode driver for the sweeper engine.

Usage:
    sweeper [--rows N] [--cols N] [--mines N] [--seed S] [--verbose]

Commands:
    r ROW COL   reveal
    f ROW COL   toggle flag
    c ROW COL   chord open
    n           new game
    q           quit
"""
import argparse
import logging
import random
import sys
from typing import Iterable, Optional, TextIO

import numpy as np

from .board import BoardConfig, ConfigError
from .cell import (
    DETONATED_CODE,
    FLAGGED_CODE,
    HIDDEN_CODE,
    MINE_CODE,
    WRONG_FLAG_CODE,
)
from .clock import MonotonicTimer
from .session import GameSession, GameStatus

logger = logging.getLogger(__name__)

SYMBOLS = {
    HIDDEN_CODE: ".",
    FLAGGED_CODE: "F",
    WRONG_FLAG_CODE: "X",
    MINE_CODE: "*",
    DETONATED_CODE: "#",
    0: " ",
}

GESTURES = {
    "r": "reveal",
    "f": "toggle_flag",
    "c": "chord_open",
}


# ============================================================================
# Rendering
# ============================================================================

def render_board(codes: np.ndarray) -> str:
    """Render a snapshot as ASCII rows."""
    lines = []
    for row in codes:
        lines.append(" ".join(SYMBOLS.get(int(val), str(int(val))) for val in row))
    return "\n".join(lines)


def render_status(session: GameSession) -> str:
    """Counter line: flags remaining, elapsed time and status."""
    return (
        f"[{session.flags_remaining:03d}] "
        f"[{session.elapsed_seconds:03d}] "
        f"{session.status.name}"
    )


# ============================================================================
# Command Loop
# ============================================================================

def run(session: GameSession, lines: Iterable[str], out: TextIO) -> None:
    """
    Feed commands to a session until input ends or 'q' is read.

    Args:
        session: Session to drive.
        lines: Command lines.
        out: Where the board is printed.
    """
    timer = session.timer if isinstance(session.timer, MonotonicTimer) else None
    print(render_board(session.snapshot()), file=out)
    print(render_status(session), file=out)

    for line in lines:
        parts = line.split()
        if not parts:
            continue
        command = parts[0].lower()
        if command == "q":
            break
        if timer is not None:
            timer.pump(session)
        before = session.status

        if command == "n":
            session.reset()
        elif command in GESTURES and len(parts) == 3:
            try:
                row, col = int(parts[1]), int(parts[2])
            except ValueError:
                print("Row and column must be integers", file=out)
                continue
            getattr(session, GESTURES[command])(row, col)
        else:
            print("Commands: r ROW COL | f ROW COL | c ROW COL | n | q", file=out)
            continue

        print(render_board(session.snapshot()), file=out)
        print(render_status(session), file=out)
        if session.status == before:
            continue
        if session.status == GameStatus.WON:
            print(f"You win! Time: {session.score}s", file=out)
        elif session.status == GameStatus.LOST:
            print("Boom. Type 'n' for a new game.", file=out)


def main(argv: Optional[list] = None) -> int:
    """Console entry point."""
    parser = argparse.ArgumentParser(description="Play minesweeper in the terminal")
    parser.add_argument("--rows", type=int, default=16, help="Board rows")
    parser.add_argument("--cols", type=int, default=16, help="Board columns")
    parser.add_argument("--mines", type=int, default=40, help="Number of mines")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = BoardConfig(args.rows, args.cols, args.mines)
    except ConfigError as error:
        logger.error("Invalid board: %s", error)
        return 2

    session = GameSession(config, rng=random.Random(args.seed), timer=MonotonicTimer())
    run(session, sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
