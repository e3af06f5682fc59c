"""
Cell module for the minefield engine.

Represents individual grid positions with their visibility
(closed/open/flagged) and content (mine/adjacency count).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

class Visibility(Enum):
    """Possible visual states of a cell."""

    CLOSED = auto()
    OPEN = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the minefield grid.

    Attributes:
        has_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        visibility: Current visual state (closed, open, or flagged).
    """

    has_mine: bool = False
    adjacent_mines: int = 0
    visibility: Visibility = Visibility.CLOSED

    def open(self) -> bool:
        """
        Open this cell.

        Returns:
            True if the cell was opened, False if it was already open
            or is flagged.
        """
        if self.visibility != Visibility.CLOSED:
            return False
        self.visibility = Visibility.OPEN
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is open.
        """
        if self.visibility == Visibility.OPEN:
            return False
        if self.visibility == Visibility.CLOSED:
            self.visibility = Visibility.FLAGGED
        else:
            self.visibility = Visibility.CLOSED
        return True

    @property
    def is_closed(self) -> bool:
        return self.visibility == Visibility.CLOSED

    @property
    def is_open(self) -> bool:
        return self.visibility == Visibility.OPEN

    @property
    def is_flagged(self) -> bool:
        return self.visibility == Visibility.FLAGGED

    def to_observation(self) -> int:
        """
        Convert cell to its observation value.

        Returns:
            -1: Closed cell
            -2: Flagged cell
            0-8: Open cell with adjacent mine count
            9: Open mine
        """
        if self.visibility == Visibility.CLOSED:
            return -1
        if self.visibility == Visibility.FLAGGED:
            return -2
        if self.has_mine:
            return 9
        return self.adjacent_mines


@dataclass(frozen=True)
class CellView:
    """
    Read-only snapshot of a cell handed to callers.

    ``has_mine`` and ``adjacent_mines`` are None while the cell's
    content is still hidden from the player.
    """

    row: int
    col: int
    visibility: Visibility
    has_mine: Optional[bool] = None
    adjacent_mines: Optional[int] = None
