"""
Command-line entry point.

Usage:
    python main.py [--width W] [--height H] [--mines N] [--seed S]
                   [--log-file PATH]

Arrow keys move, ``f`` flags, space reveals, ``q`` quits.
"""
import argparse
import curses
import logging
import random
import sys
from typing import List, Optional

from .board import CLASSIC, Board, BoardConfig, GameState
from .game_loop import GameLoop
from .render import render_lines
from .terminal import CursesTerminal, TerminalError


logger = logging.getLogger(__name__)

MESSAGES = {
    GameState.LOSE: "GAME OVER!",
    GameState.WIN: "YOU WIN!",
}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Minesweeper in the terminal"
    )
    parser.add_argument(
        "--width", type=int, default=CLASSIC.width, help="Board columns"
    )
    parser.add_argument(
        "--height", type=int, default=CLASSIC.height, help="Board rows"
    )
    parser.add_argument(
        "--mines", type=int, default=CLASSIC.num_mines,
        help="Number of mines (clamped to the number of cells)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )
    parser.add_argument(
        "--log-file", default=None, help="Write debug logs to this file"
    )
    return parser


def configure_logging(path: Optional[str]) -> None:
    """Send logs to a file; the screen belongs to curses."""
    if path is None:
        return
    logging.basicConfig(
        filename=path,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def play(board: Board) -> GameState:
    """Run one interactive game inside a curses session."""
    def session(window: "curses.window") -> GameState:
        terminal = CursesTerminal(window)
        return GameLoop(board).run(terminal, terminal)

    return curses.wrapper(session)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, play one game and print the result."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_file)

    try:
        config = BoardConfig(args.width, args.height, args.mines)
    except ValueError as exc:
        parser.error(str(exc))

    rng = random.Random(args.seed) if args.seed is not None else None
    board = Board(config, rng=rng)

    try:
        state = play(board)
    except (TerminalError, curses.error) as exc:
        logger.error("Terminal failure: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if state in MESSAGES:
        # curses restores the old screen on exit, so repeat the last frame.
        print("\n".join(render_lines(board)))
        print(MESSAGES[state])
    return 0


if __name__ == "__main__":
    sys.exit(main())
