"""
Exceptions raised by the minefield engine.

Only conditions that reject a call outright are exceptions. Ordinary
no-ops (game already over, flagged target, open cell) are reported as
status values on the operation results instead.
"""


class MinefieldError(Exception):
    """Base class for all minefield errors."""


class InvalidConfiguration(MinefieldError, ValueError):
    """Board dimensions or mine layout violate the board constraints."""


class OutOfBounds(MinefieldError, IndexError):
    """Coordinates fall outside the grid."""

    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside the {height}x{width} grid"
        )
        self.row = row
        self.col = col
