"""
Tile module for Minesweeper.

A tile is one grid cell: its contents (mine, or safe with a neighbor
count) and its visibility (hidden, flagged or open).
"""
from dataclasses import dataclass
from enum import Enum, auto


# ============================================================================
# Constants
# ============================================================================

class Visibility(Enum):
    """What the player can see of a tile."""

    HIDDEN = auto()
    FLAGGED = auto()
    OPEN = auto()


GLYPH_HIDDEN = "#"
GLYPH_FLAG = "F"
GLYPH_MINE = "*"
GLYPH_EMPTY = " "


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass
class Tile:
    """
    A single cell of the board.

    Attributes:
        is_mine: Whether this tile holds a mine.
        adjacent_mines: Mines among the (up to 8) neighbors. Only
            meaningful for safe tiles.
        visibility: Current visibility.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    visibility: Visibility = Visibility.HIDDEN

    def open(self) -> bool:
        """
        Open this tile if it is hidden.

        Returns:
            True if the tile changed, False if it was already open or
            flagged.
        """
        if self.visibility != Visibility.HIDDEN:
            return False
        self.visibility = Visibility.OPEN
        return True

    def toggle_flag(self) -> bool:
        """
        Flag a hidden tile or unflag a flagged one.

        Returns:
            True if the flag was toggled, False if the tile is open.
        """
        if self.visibility == Visibility.OPEN:
            return False
        if self.visibility == Visibility.HIDDEN:
            self.visibility = Visibility.FLAGGED
        else:
            self.visibility = Visibility.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        return self.visibility == Visibility.HIDDEN

    @property
    def is_flagged(self) -> bool:
        return self.visibility == Visibility.FLAGGED

    @property
    def is_open(self) -> bool:
        return self.visibility == Visibility.OPEN

    @property
    def is_empty(self) -> bool:
        """Check if this is a safe tile with no adjacent mines."""
        return not self.is_mine and self.adjacent_mines == 0

    def glyph(self) -> str:
        """Single character shown for this tile in a frame."""
        if self.visibility == Visibility.HIDDEN:
            return GLYPH_HIDDEN
        if self.visibility == Visibility.FLAGGED:
            return GLYPH_FLAG
        if self.is_mine:
            return GLYPH_MINE
        if self.adjacent_mines == 0:
            return GLYPH_EMPTY
        return str(self.adjacent_mines)

    def to_observation(self) -> int:
        """
        Encode the visible state of the tile as an integer.

        Returns:
            -1: Hidden tile
            -2: Flagged tile
            0-8: Open safe tile with its adjacent mine count
            9: Open mine
        """
        if self.visibility == Visibility.HIDDEN:
            return -1
        if self.visibility == Visibility.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines
