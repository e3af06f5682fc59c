"""
Plain-text rendering of a minefield.

Symbols:
    .  closed cell
    F  flag
    *  open mine
    X  the mine that lost the game
    f  flag on a cell without a mine (shown once the game is lost)
    1-8 open cell with adjacent mines, blank for zero
"""
from typing import FrozenSet

from .board import Minefield, Position


def _symbol(
    minefield: Minefield,
    row: int,
    col: int,
    value: int,
    wrong_flags: FrozenSet[Position],
) -> str:
    if value == -1:
        return "."
    if value == -2:
        if (row, col) in wrong_flags:
            return "f"
        return "F"
    if value == 9:
        return "X" if minefield.exploded == (row, col) else "*"
    if value == 0:
        return " "
    return str(value)


def render_text(minefield: Minefield, show_coordinates: bool = False) -> str:
    """
    Render the board as an ASCII string, one line per row.

    Args:
        minefield: Board to render.
        show_coordinates: Prefix rows with their index and add a header of
            column indices (last digit only).
    """
    obs = minefield.get_observation()
    label_width = len(str(minefield.height - 1))
    wrong_flags: FrozenSet[Position] = frozenset()
    if minefield.is_lost:
        wrong_flags = minefield.misflagged_positions()
    lines = []

    if show_coordinates:
        header = " ".join(str(col % 10) for col in range(minefield.width))
        lines.append(" " * (label_width + 1) + header)

    for row in range(minefield.height):
        row_str = " ".join(
            _symbol(minefield, row, col, obs[row, col], wrong_flags)
            for col in range(minefield.width)
        )
        if show_coordinates:
            row_str = f"{row:>{label_width}} {row_str}"
        lines.append(row_str.rstrip())

    return "\n".join(lines)
