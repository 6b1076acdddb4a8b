"""
Terminal capabilities for the game.

Defines the abstract output (``Terminal``) and input (``InputSource``)
interfaces the game loop talks to, plus a curses implementation of both.
"""
import curses
from abc import ABC, abstractmethod
from typing import Dict

from .game_loop import Key, KeyPress


ESCAPE_CODE = 27

CURSES_KEYS: Dict[int, Key] = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    ESCAPE_CODE: Key.ESCAPE,
}


class TerminalError(RuntimeError):
    """The terminal could not be read from or drawn to."""


# ============================================================================
# Interfaces
# ============================================================================

class Terminal(ABC):
    """Somewhere a frame can be drawn, one line at a time."""

    @abstractmethod
    def clear_screen(self) -> None:
        pass

    @abstractmethod
    def write_line(self, text: str) -> None:
        pass

    @abstractmethod
    def flush(self) -> None:
        pass


class InputSource(ABC):
    """Blocking source of key presses."""

    @abstractmethod
    def read_key(self) -> KeyPress:
        """Wait for and return the next key press."""
        pass


# ============================================================================
# Curses Backend
# ============================================================================

class CursesTerminal(Terminal, InputSource):
    """
    Terminal and input source backed by a curses window.

    Meant to be created inside ``curses.wrapper`` so the terminal is
    restored however the session ends. Any ``curses.error`` is raised as
    ``TerminalError``.
    """

    def __init__(self, window: "curses.window") -> None:
        self.window = window
        self._row = 0
        try:
            curses.curs_set(0)
        except curses.error:
            # Some terminals cannot hide the cursor; drawing still works.
            pass
        self.window.keypad(True)

    def clear_screen(self) -> None:
        self._row = 0
        try:
            self.window.erase()
        except curses.error as exc:
            raise TerminalError(f"failed to clear screen: {exc}") from exc

    def write_line(self, text: str) -> None:
        try:
            self.window.addstr(self._row, 0, text)
        except curses.error as exc:
            height, width = self.window.getmaxyx()
            raise TerminalError(
                f"failed to draw line {self._row} "
                f"(terminal is {width}x{height}): {exc}"
            ) from exc
        self._row += 1

    def flush(self) -> None:
        try:
            self.window.refresh()
        except curses.error as exc:
            raise TerminalError(f"failed to flush: {exc}") from exc

    def read_key(self) -> KeyPress:
        code = -1
        # -1 means the blocking read was interrupted (e.g. by a resize).
        while code == -1:
            try:
                code = self.window.getch()
            except curses.error as exc:
                raise TerminalError(f"failed to read key: {exc}") from exc
        return decode_key(code)


def decode_key(code: int) -> KeyPress:
    """Map a curses key code to a key press."""
    if code in CURSES_KEYS:
        return KeyPress(CURSES_KEYS[code])
    if 0 <= code < curses.KEY_MIN:
        return KeyPress.of(chr(code))
    # Function keys and other specials have no binding.
    return KeyPress(Key.CHAR, "")
