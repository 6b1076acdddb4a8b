"""
Game loop for Minesweeper.

Turns key presses into board actions and reports the resulting game
state after each one.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from .board import Board, Direction, GameState
from .render import draw

if TYPE_CHECKING:
    from .terminal import InputSource, Terminal


logger = logging.getLogger(__name__)


# ============================================================================
# Keys
# ============================================================================

class Key(Enum):
    """Kinds of key press an input source can produce."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    CHAR = auto()
    ESCAPE = auto()


@dataclass(frozen=True)
class KeyPress:
    """One key press. ``char`` is set only for ``Key.CHAR``."""

    key: Key
    char: Optional[str] = None

    @classmethod
    def of(cls, char: str) -> "KeyPress":
        """Key press for a printable character."""
        return cls(Key.CHAR, char)


ARROWS = {
    Key.UP: Direction.UP,
    Key.DOWN: Direction.DOWN,
    Key.LEFT: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
}


@dataclass(frozen=True)
class KeyBindings:
    """Characters bound to the non-movement actions."""

    quit: str = "q"
    flag: str = "f"
    reveal: str = " "


# ============================================================================
# Game Loop
# ============================================================================

class GameLoop:
    """
    Drives a single game on one board.

    Every key except quit is followed by an evaluation of the board, so
    the returned state is always current. Once a terminal state is
    reached further keys are ignored.
    """

    def __init__(
        self,
        board: Board,
        bindings: Optional[KeyBindings] = None,
    ) -> None:
        """
        Initialize the loop.

        Args:
            board: Board to play on. The loop is its only owner.
            bindings: Character bindings (default: q / f / space).
        """
        self.board = board
        self.bindings = bindings or KeyBindings()
        self._state = GameState.CONTINUE

    @property
    def state(self) -> GameState:
        return self._state

    def handle(self, press: KeyPress) -> GameState:
        """
        Apply one key press to the board.

        Args:
            press: The key read from the input source.

        Returns:
            The game state after the key.
        """
        if self._state.is_terminal:
            return self._state

        if press.key is Key.CHAR and press.char == self.bindings.quit:
            self._state = GameState.QUIT
            logger.debug("Player quit")
            return self._state

        if press.key in ARROWS:
            self.board.move_cursor(ARROWS[press.key])
        elif press.key is Key.CHAR and press.char == self.bindings.flag:
            self.board.toggle_flag()
        elif press.key is Key.CHAR and press.char == self.bindings.reveal:
            self.board.reveal()

        self._state = self.board.evaluate()
        if self._state.is_terminal:
            logger.info("Game ended: %s", self._state.name)
        return self._state

    def run(self, terminal: "Terminal", source: "InputSource") -> GameState:
        """
        Play until the game ends or the player quits.

        Draws one frame up front and one after every key, including the
        final one.

        Returns:
            The terminal game state.
        """
        draw(self.board, terminal)
        while not self._state.is_terminal:
            self.handle(source.read_key())
            draw(self.board, terminal)
        return self._state
