"""
Board module for Minesweeper.

Implements the grid with mine placement, neighbor counts, the cursor,
flood-fill revealing and win/lose evaluation.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .tile import Tile, Visibility


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


class GameState(Enum):
    """Outcome of a game tick."""

    CONTINUE = auto()
    WIN = auto()
    LOSE = auto()
    QUIT = auto()

    @property
    def is_terminal(self) -> bool:
        return self is not GameState.CONTINUE


class Direction(Enum):
    """Cursor movement directions as (dx, dy) steps."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    A mine count larger than the number of cells is clamped down to the
    cell count rather than rejected.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 16
    height: int = 16
    num_mines: int = 32

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        if self.num_mines > self.size:
            logger.warning(
                "Clamping %d mines to %d cells", self.num_mines, self.size
            )
            object.__setattr__(self, "num_mines", self.size)

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.width * self.height


# Preset difficulty levels
CLASSIC = BoardConfig(16, 16, 32)
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Tiles live in a flat list indexed ``x + y * width``. Mines are placed
    and neighbor counts derived once, at construction.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: Optional[random.Random] = field(default=None, repr=False)
    cursor_x: int = 0
    cursor_y: int = 0
    flag_count: int = 0
    _tiles: List[Tile] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Place mines and derive counts after dataclass creation."""
        if not self._tiles:
            self._tiles = self._shuffled_tiles()
        self._calculate_adjacent_mines()
        logger.debug(
            "Created %dx%d board with %d mines",
            self.width, self.height, self.mine_count,
        )

    @classmethod
    def from_mines(
        cls,
        config: BoardConfig,
        positions: Iterable[Tuple[int, int]],
    ) -> "Board":
        """
        Build a board with mines at explicit positions.

        Args:
            config: Board dimensions. Its mine count is replaced by the
                number of distinct positions.
            positions: (x, y) positions of the mines.

        Returns:
            A board with all tiles hidden and counts derived.
        """
        mines = set(positions)
        for x, y in mines:
            if not (0 <= x < config.width and 0 <= y < config.height):
                raise ValueError(f"Mine position ({x}, {y}) is off the board")
        config = BoardConfig(config.width, config.height, len(mines))
        tiles = [
            Tile(is_mine=(index % config.width, index // config.width) in mines)
            for index in range(config.size)
        ]
        return cls(config=config, _tiles=tiles)

    # ========================================================================
    # Mine Placement (Low-level)
    # ========================================================================

    def _shuffled_tiles(self) -> List[Tile]:
        """Lay out mines and safe tiles, then permute them uniformly."""
        rng = self.rng or random.Random()
        tiles = [Tile(is_mine=True) for _ in range(self.config.num_mines)]
        tiles.extend(
            Tile() for _ in range(self.config.size - self.config.num_mines)
        )
        rng.shuffle(tiles)
        return tiles

    def _calculate_adjacent_mines(self) -> None:
        """Bump the count of every safe neighbor of every mine."""
        for y in range(self.height):
            for x in range(self.width):
                if not self._tile(x, y).is_mine:
                    continue
                for nx, ny in self.neighbors(x, y):
                    neighbor = self._tile(nx, ny)
                    if not neighbor.is_mine:
                        neighbor.adjacent_mines += 1

    # ========================================================================
    # Grid Utilities (Low-level)
    # ========================================================================

    def _index(self, x: int, y: int) -> int:
        return x + y * self.width

    def _tile(self, x: int, y: int) -> Tile:
        return self._tiles[self._index(x, y)]

    def is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """
        Get in-bounds neighboring positions.

        Args:
            x: Column of the center tile.
            y: Row of the center tile.

        Returns:
            Up to 8 (x, y) tuples; fewer on edges and corners.
        """
        result = []
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.is_valid_position(nx, ny):
                result.append((nx, ny))
        return result

    # ========================================================================
    # Player Actions (Mid-level)
    # ========================================================================

    def move_cursor(self, direction: Direction) -> None:
        """Move the cursor one tile, wrapping around at every edge."""
        dx, dy = direction.value
        self.cursor_x = (self.cursor_x + dx) % self.width
        self.cursor_y = (self.cursor_y + dy) % self.height

    def toggle_flag(self) -> bool:
        """
        Flag or unflag the tile under the cursor.

        Returns:
            True if the flag was toggled, False if the tile is open.
        """
        tile = self._tile(self.cursor_x, self.cursor_y)
        if not tile.toggle_flag():
            return False
        if tile.is_flagged:
            self.flag_count += 1
        else:
            self.flag_count -= 1
        assert self.flag_count >= 0, "flag count went negative"
        return True

    def reveal(self) -> int:
        """
        Open the tile under the cursor, flooding through empty tiles.

        Flagged tiles are never opened, even when the flood reaches
        them. A position may be queued more than once; only hidden tiles
        are acted on.

        Returns:
            Number of tiles opened.
        """
        start = (self.cursor_x, self.cursor_y)
        if not self._tile(*start).is_hidden:
            return 0

        opened = 0
        queue = deque([start])
        while queue:
            x, y = queue.popleft()
            tile = self._tile(x, y)
            if not tile.open():
                continue
            opened += 1
            if not tile.is_empty:
                continue
            for nx, ny in self.neighbors(x, y):
                if not self._tile(nx, ny).is_open:
                    queue.append((nx, ny))

        logger.debug("Reveal at %s opened %d tiles", start, opened)
        return opened

    def evaluate(self) -> GameState:
        """
        Decide whether the game is lost, won or still going.

        A detonated mine takes precedence over a win. On a loss every
        mine is opened so the whole field can be shown.
        """
        explored = True
        for tile in self._tiles:
            if tile.is_mine:
                if tile.is_open:
                    self._open_all_mines()
                    return GameState.LOSE
            elif not tile.is_open:
                explored = False
        return GameState.WIN if explored else GameState.CONTINUE

    def _open_all_mines(self) -> None:
        for tile in self._tiles:
            if tile.is_mine:
                tile.visibility = Visibility.OPEN

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mine_count(self) -> int:
        return self.config.num_mines

    @property
    def remaining(self) -> int:
        """Mines minus flags. Negative when over-flagged."""
        return self.mine_count - self.flag_count

    @property
    def cursor(self) -> Tuple[int, int]:
        return self.cursor_x, self.cursor_y

    def get_tile(self, x: int, y: int) -> Optional[Tile]:
        """Get tile at position, or None if invalid."""
        if not self.is_valid_position(x, y):
            return None
        return self._tile(x, y)

    def tiles(self) -> Iterator[Tuple[int, int, Tile]]:
        """Iterate (x, y, tile) in row-major order."""
        for index, tile in enumerate(self._tiles):
            yield index % self.width, index // self.width, tile

    def get_observation(self) -> np.ndarray:
        """
        Get the visible board as a numpy array.

        Returns:
            int8 array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = open with adjacent count
                9 = open mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for x, y, tile in self.tiles():
            obs[y, x] = tile.to_observation()
        return obs
