"""
Pytest configuration and shared fixtures.
"""
import curses
import random
import sys
from pathlib import Path
from typing import Iterable, List

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import (  # noqa: E402
    Board,
    BoardConfig,
    InputSource,
    KeyPress,
    Terminal,
    Tile,
)


# ============================================================================
# Terminal Doubles
# ============================================================================

class RecordingTerminal(Terminal):
    """Terminal that keeps every frame in memory."""

    def __init__(self) -> None:
        self.frames: List[List[str]] = []
        self.flushes = 0

    def clear_screen(self) -> None:
        self.frames.append([])

    def write_line(self, text: str) -> None:
        self.frames[-1].append(text)

    def flush(self) -> None:
        self.flushes += 1

    @property
    def last_frame(self) -> List[str]:
        return self.frames[-1]


class ScriptedInput(InputSource):
    """Input source replaying a fixed list of key presses."""

    def __init__(self, presses: Iterable[KeyPress]) -> None:
        self.presses = list(presses)
        self.reads = 0

    def read_key(self) -> KeyPress:
        if self.reads >= len(self.presses):
            raise AssertionError("game asked for more keys than scripted")
        press = self.presses[self.reads]
        self.reads += 1
        return press


class FakeWindow:
    """Minimal curses window double."""

    def __init__(self, keys=(), fail_on=None) -> None:
        self.keys = list(keys)
        self.fail_on = fail_on
        self.lines = {}
        self.refreshed = 0
        self.reads = 0

    def _maybe_fail(self, name: str) -> None:
        if self.fail_on == name:
            raise curses.error(f"{name} failed")

    def keypad(self, flag: bool) -> None:
        pass

    def erase(self) -> None:
        self._maybe_fail("erase")
        self.lines.clear()

    def addstr(self, row: int, col: int, text: str) -> None:
        self._maybe_fail("addstr")
        self.lines[row] = text

    def refresh(self) -> None:
        self._maybe_fail("refresh")
        self.refreshed += 1

    def getch(self) -> int:
        self._maybe_fail("getch")
        self.reads += 1
        return self.keys.pop(0)

    def getmaxyx(self):
        return 24, 80


@pytest.fixture
def no_cursor(monkeypatch: pytest.MonkeyPatch) -> None:
    """curs_set needs an initialized screen; skip it."""
    monkeypatch.setattr(curses, "curs_set", lambda visibility: None)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create the classic 16x16 board with 32 mines."""
    return Board(rng=random.Random(1234))


@pytest.fixture
def center_mine_board() -> Board:
    """3x3 board with a single mine in the middle."""
    return Board.from_mines(BoardConfig(3, 3), [(1, 1)])


@pytest.fixture
def empty_board() -> Board:
    """Create a 3x3 board with no mines for cascade testing."""
    return Board(BoardConfig(3, 3, 0))


@pytest.fixture
def wall_board() -> Board:
    """
    5x3 board with a wall of mines down column 2.

        0 1 2 3 4
      0 . 2 * 2 .
      1 . 3 * 3 .
      2 . 2 * 2 .
    """
    return Board.from_mines(BoardConfig(5, 3), [(2, 0), (2, 1), (2, 2)])


# ============================================================================
# Tile Fixtures
# ============================================================================

@pytest.fixture
def hidden_tile() -> Tile:
    """Create a hidden tile."""
    return Tile()


@pytest.fixture
def mine_tile() -> Tile:
    """Create a tile containing a mine."""
    return Tile(is_mine=True)


# ============================================================================
# Terminal Fixtures
# ============================================================================

@pytest.fixture
def terminal() -> RecordingTerminal:
    return RecordingTerminal()


def count_mines(board: Board) -> int:
    return sum(1 for _, _, tile in board.tiles() if tile.is_mine)


def brute_force_count(board: Board, x: int, y: int) -> int:
    """Count adjacent mines without using the board's neighbor helper."""
    count = 0
    for ny in range(y - 1, y + 2):
        for nx in range(x - 1, x + 2):
            if (nx, ny) == (x, y):
                continue
            tile = board.get_tile(nx, ny)
            if tile is not None and tile.is_mine:
                count += 1
    return count
