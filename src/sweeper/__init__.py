"""
Terminal Minesweeper.

Provides the board model, the key-driven game loop, frame rendering and
the terminal interfaces the loop draws to and reads from.
"""
import logging

from .tile import Tile, Visibility
from .board import (
    Board,
    BoardConfig,
    Direction,
    GameState,
    CLASSIC,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .game_loop import GameLoop, Key, KeyBindings, KeyPress
from .render import render_lines, status_line, draw
from .terminal import InputSource, Terminal, TerminalError

__all__ = [
    "Tile",
    "Visibility",
    "Board",
    "BoardConfig",
    "Direction",
    "GameState",
    "CLASSIC",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "GameLoop",
    "Key",
    "KeyBindings",
    "KeyPress",
    "render_lines",
    "status_line",
    "draw",
    "InputSource",
    "Terminal",
    "TerminalError",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
