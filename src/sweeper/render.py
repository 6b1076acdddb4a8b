"""
Text rendering of a board.

Each tile is printed as its glyph followed by a one-character gap, and
each row starts with a gap. On the cursor row the gaps on either side of
the cursor tile become ``(`` and ``)``.
"""
from typing import TYPE_CHECKING, List

from .board import Board

if TYPE_CHECKING:
    from .terminal import Terminal


def _gap(cursor_x: int, x: int) -> str:
    """Gap printed after column ``x`` (``x == -1`` is the row prefix)."""
    if cursor_x == x:
        return ")"
    if cursor_x == x + 1:
        return "("
    return " "


def render_row(board: Board, y: int) -> str:
    """Render a single grid row."""
    on_cursor_row = board.cursor_y == y
    parts = [_gap(board.cursor_x, -1) if on_cursor_row else " "]
    for x in range(board.width):
        parts.append(board.get_tile(x, y).glyph())
        parts.append(_gap(board.cursor_x, x) if on_cursor_row else " ")
    return "".join(parts)


def status_line(board: Board) -> str:
    return (
        f"Mines: {board.mine_count}, Flags: {board.flag_count}, "
        f"Remaining: {board.remaining}"
    )


def render_lines(board: Board) -> List[str]:
    """
    Render a full frame.

    Returns:
        One line per row, a blank line, then the status line.
    """
    lines = [render_row(board, y) for y in range(board.height)]
    lines.append("")
    lines.append(status_line(board))
    return lines


def draw(board: Board, terminal: "Terminal") -> None:
    """Clear the terminal and write one frame to it."""
    terminal.clear_screen()
    for line in render_lines(board):
        terminal.write_line(line)
    terminal.flush()
