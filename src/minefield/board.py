"""
Minefield module.

Implements the game grid with lazy first-click-safe mine placement,
flood-fill opening, flagging, chording and win/loss tracking.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellView
from .config import BoardConfig
from .errors import InvalidConfiguration, OutOfBounds

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    NOT_STARTED = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()


class OpenStatus(Enum):
    """Outcome of an open or chord request."""

    OPENED = auto()
    FLAGGED = auto()
    ALREADY_OPEN = auto()
    NOT_CHORDABLE = auto()
    GAME_OVER = auto()


class FlagStatus(Enum):
    """Outcome of a flag toggle request."""

    ADDED = auto()
    REMOVED = auto()
    CELL_ALREADY_OPEN = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class OpenResult:
    """
    Result of opening or chording a cell.

    Attributes:
        status: What the request did.
        state: Game state after the request.
        changed: Cells whose visibility changed, in the order they changed.
    """

    status: OpenStatus
    state: GameState
    changed: Tuple[Position, ...] = ()


@dataclass(frozen=True)
class ToggleResult:
    """Result of toggling a flag."""

    status: FlagStatus
    state: GameState


# ============================================================================
# Minefield Class
# ============================================================================

@dataclass(eq=False)
class Minefield:
    """
    Minesweeper minefield.

    Mines are placed on the first ``open`` so that the opened cell and its
    neighbors are always safe. Randomness comes from ``rng`` (or a generator
    seeded with ``seed``), never from global state.

    Attributes:
        config: Board dimensions and mine count.
        seed: Seed for the generator built when ``rng`` is not given;
            passing both raises InvalidConfiguration.
        rng: Random generator used for mine placement.
        reveal_mines_on_loss: Open every closed mine when the game is lost.
        flag_mines_on_win: Flag every closed mine when the game is won.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    seed: Optional[int] = None
    rng: Optional[np.random.Generator] = field(default=None, repr=False)
    reveal_mines_on_loss: bool = True
    flag_mines_on_win: bool = True
    _grid: List[List[Cell]] = field(default_factory=list, init=False, repr=False)
    _state: GameState = field(default=GameState.NOT_STARTED, init=False)
    _mines_placed: bool = field(default=False, init=False, repr=False)
    _opened_count: int = field(default=0, init=False)
    _flag_count: int = field(default=0, init=False)
    _exploded: Optional[Position] = field(default=None, init=False)

    def __post_init__(self) -> None:
        """Initialize the generator and the grid."""
        if self.rng is not None and self.seed is not None:
            raise InvalidConfiguration("Pass either seed or rng, not both")
        if self.rng is None:
            self.rng = np.random.default_rng(self.seed)
        self._init_grid()

    @classmethod
    def create(
        cls, width: int, height: int, num_mines: int, **kwargs
    ) -> "Minefield":
        """
        Build a minefield from raw dimensions.

        Raises:
            InvalidConfiguration: If the dimensions or mine count are invalid.
        """
        return cls(BoardConfig(width, height, num_mines), **kwargs)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def _all_positions(self) -> Iterable[Position]:
        for row in range(self.config.height):
            for col in range(self.config.width):
                yield row, col

    def _place_mines(self, row: int, col: int) -> None:
        """
        Place mines uniformly at random, keeping the first click safe.

        Args:
            row: Row of the first opened cell.
            col: Column of the first opened cell.
        """
        positions = self._get_valid_mine_positions(row, col)
        picks = self.rng.choice(
            len(positions), size=self.config.num_mines, replace=False
        )
        self._set_mines(positions[index] for index in picks)
        logger.debug(
            "Placed %d mines among %d eligible cells (first open at %s)",
            self.config.num_mines, len(positions), (row, col),
        )

    def _get_valid_mine_positions(self, row: int, col: int) -> List[Position]:
        """Get all positions a mine may occupy for a first open at (row, col)."""
        safe = {(row, col), *self.neighbors(row, col)}
        positions = [pos for pos in self._all_positions() if pos not in safe]
        if len(positions) < self.config.num_mines:
            # Crowded board: only the opened cell itself stays clear
            positions = [pos for pos in self._all_positions() if pos != (row, col)]
        return positions

    def _set_mines(self, positions: Iterable[Position]) -> None:
        for row, col in positions:
            self._grid[row][col].has_mine = True
        self._calculate_adjacent_mines()
        self._mines_placed = True

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row, col in self._all_positions():
            self._grid[row][col].adjacent_mines = self._count_adjacent_mines(
                row, col
            )

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].has_mine:
                count += 1
        return count

    def lay_mines(self, positions: Iterable[Position]) -> None:
        """
        Place mines at known positions instead of at random.

        The next ``open`` starts the game without random placement.

        Args:
            positions: Exactly ``num_mines`` distinct in-bounds positions.

        Raises:
            InvalidConfiguration: If mines already exist or the positions
                are invalid.
        """
        if self._mines_placed:
            raise InvalidConfiguration("Mines have already been placed")

        positions = [tuple(pos) for pos in positions]
        for pos in positions:
            if len(pos) != 2:
                raise InvalidConfiguration(
                    f"Mine position {pos} is not a (row, col) pair"
                )
        if len(set(positions)) != len(positions):
            raise InvalidConfiguration("Duplicate mine positions")
        if len(positions) != self.config.num_mines:
            raise InvalidConfiguration(
                f"Expected {self.config.num_mines} mine positions, "
                f"got {len(positions)}"
            )
        for row, col in positions:
            if not self._is_valid_position(row, col):
                raise InvalidConfiguration(
                    f"Mine position ({row}, {col}) is outside the grid"
                )

        self._set_mines(positions)
        logger.debug("Laid %d mines at fixed positions", len(positions))

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the up to 8 in-grid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def _check_bounds(self, row: int, col: int) -> None:
        if not self._is_valid_position(row, col):
            raise OutOfBounds(row, col, self.config.height, self.config.width)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def open(self, row: int, col: int) -> OpenResult:
        """
        Open the cell at the given position.

        The first open places the mines around a safe neighborhood and
        starts the game. Opening a cell with no adjacent mines floods
        outward; opening a mine loses the game.

        Args:
            row: Row index to open.
            col: Column index to open.

        Returns:
            The request status, resulting state and changed cells.

        Raises:
            OutOfBounds: If the position is outside the grid.
        """
        self._check_bounds(row, col)
        if self.is_over:
            return OpenResult(OpenStatus.GAME_OVER, self._state)

        cell = self._grid[row][col]
        if cell.is_flagged:
            return OpenResult(OpenStatus.FLAGGED, self._state)
        if cell.is_open:
            return OpenResult(OpenStatus.ALREADY_OPEN, self._state)

        if self._state == GameState.NOT_STARTED:
            self._start(row, col)

        changed: List[Position] = []
        self._open_cell(row, col, changed)
        return OpenResult(OpenStatus.OPENED, self._state, tuple(changed))

    def _start(self, row: int, col: int) -> None:
        """Handle first open: place mines if needed and start playing."""
        if not self._mines_placed:
            self._place_mines(row, col)
        self._state = GameState.PLAYING
        logger.debug("Game started at %s", (row, col))

    def _open_cell(self, row: int, col: int, changed: List[Position]) -> None:
        """Open a single closed cell and handle consequences."""
        cell = self._grid[row][col]
        if not cell.open():
            return
        changed.append((row, col))

        if cell.has_mine:
            self._lose(row, col, changed)
            return

        self._opened_count += 1
        if cell.adjacent_mines == 0:
            self._flood_fill(row, col, changed)

        self._check_win_condition(changed)

    def _flood_fill(self, row: int, col: int, changed: List[Position]) -> None:
        """
        Open the connected empty region around an already opened empty cell.

        Only closed cells are opened and only newly opened empty cells are
        queued, so every cell is visited at most once.
        """
        pending = deque([(row, col)])
        while pending:
            current_row, current_col = pending.popleft()
            for neighbor_row, neighbor_col in self.neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if not neighbor.open():
                    continue
                self._opened_count += 1
                changed.append((neighbor_row, neighbor_col))
                if neighbor.adjacent_mines == 0:
                    pending.append((neighbor_row, neighbor_col))

    def _lose(self, row: int, col: int, changed: List[Position]) -> None:
        self._state = GameState.LOST
        self._exploded = (row, col)
        logger.debug("Mine opened at %s, game lost", (row, col))

        if not self.reveal_mines_on_loss:
            return
        for mine_row, mine_col in self._all_positions():
            mine = self._grid[mine_row][mine_col]
            if mine.has_mine and mine.open():
                changed.append((mine_row, mine_col))

    def _check_win_condition(self, changed: List[Position]) -> None:
        """Check if all non-mine cells are open."""
        if self._opened_count != self.config.safe_cells:
            return

        self._state = GameState.WON
        logger.debug("All %d safe cells open, game won", self._opened_count)

        if not self.flag_mines_on_win:
            return
        for mine_row, mine_col in self._all_positions():
            mine = self._grid[mine_row][mine_col]
            if mine.has_mine and mine.is_closed:
                mine.toggle_flag()
                self._flag_count += 1
                changed.append((mine_row, mine_col))

    def toggle_flag(self, row: int, col: int) -> ToggleResult:
        """
        Toggle flag on a cell.

        Flagging before the first open is allowed and does not place mines.

        Args:
            row: Row index.
            col: Column index.

        Raises:
            OutOfBounds: If the position is outside the grid.
        """
        self._check_bounds(row, col)
        if self.is_over:
            return ToggleResult(FlagStatus.GAME_OVER, self._state)

        cell = self._grid[row][col]
        if not cell.toggle_flag():
            return ToggleResult(FlagStatus.CELL_ALREADY_OPEN, self._state)

        if cell.is_flagged:
            self._flag_count += 1
            return ToggleResult(FlagStatus.ADDED, self._state)
        self._flag_count -= 1
        return ToggleResult(FlagStatus.REMOVED, self._state)

    def chord(self, row: int, col: int) -> OpenResult:
        """
        Chord action: open all closed neighbors if the flag count matches.

        A misplaced flag makes the chord open a mine and lose the game;
        neighbors after that mine (in ``neighbors`` order) stay closed.

        Args:
            row: Row index of an open numbered cell.
            col: Column index of an open numbered cell.

        Raises:
            OutOfBounds: If the position is outside the grid.
        """
        self._check_bounds(row, col)
        if self.is_over:
            return OpenResult(OpenStatus.GAME_OVER, self._state)
        if not self._can_chord(row, col):
            return OpenResult(OpenStatus.NOT_CHORDABLE, self._state)

        changed: List[Position] = []
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self.is_over:
                break
            self._open_cell(neighbor_row, neighbor_col, changed)

        return OpenResult(OpenStatus.OPENED, self._state, tuple(changed))

    def _can_chord(self, row: int, col: int) -> bool:
        """Check if chord action is valid."""
        cell = self._grid[row][col]
        if not cell.is_open or cell.adjacent_mines == 0:
            return False
        flag_count = self._count_adjacent_flags(row, col)
        return flag_count == cell.adjacent_mines

    def _count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_flagged:
                count += 1
        return count

    def reset(self) -> None:
        """Reset to a fresh, unstarted game with the same configuration."""
        self._init_grid()
        self._state = GameState.NOT_STARTED
        self._mines_placed = False
        self._opened_count = 0
        self._flag_count = 0
        self._exploded = None
        logger.debug("Minefield reset")

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
    def num_mines(self) -> int:
        return self.config.num_mines

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self._state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._state == GameState.LOST

    @property
    def is_over(self) -> bool:
        """Check if the game has ended either way."""
        return self._state in (GameState.WON, GameState.LOST)

    @property
    def is_cleared(self) -> bool:
        """Check if every safe cell has been opened."""
        return self._opened_count == self.config.safe_cells

    @property
    def opened_count(self) -> int:
        """Number of safe cells opened so far."""
        return self._opened_count

    @property
    def flag_count(self) -> int:
        return self._flag_count

    @property
    def exploded(self) -> Optional[Position]:
        """Position of the mine that lost the game, if any."""
        return self._exploded

    def remaining_mine_count(self) -> int:
        """
        Mines left to flag, as shown on a mine counter.

        Goes negative when more cells are flagged than there are mines.
        """
        return self.config.num_mines - self._flag_count

    def cell(self, row: int, col: int) -> CellView:
        """
        Get a read-only view of the cell at position.

        Mine and adjacency values are included once the cell is open or
        the game is over.

        Raises:
            OutOfBounds: If the position is outside the grid.
        """
        self._check_bounds(row, col)
        cell = self._grid[row][col]
        if cell.is_open or self.is_over:
            return CellView(
                row, col, cell.visibility, cell.has_mine, cell.adjacent_mines
            )
        return CellView(row, col, cell.visibility)

    def mine_positions(self) -> FrozenSet[Position]:
        """Positions of all placed mines (empty before placement)."""
        return frozenset(
            (row, col)
            for row, col in self._all_positions()
            if self._grid[row][col].has_mine
        )

    def misflagged_positions(self) -> FrozenSet[Position]:
        """Positions flagged without a mine underneath."""
        return frozenset(
            (row, col)
            for row, col in self._all_positions()
            if self._grid[row][col].is_flagged
            and not self._grid[row][col].has_mine
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array for redraw.

        Returns:
            2D numpy array where:
                -1 = closed
                -2 = flagged
                0-8 = open with adjacent count
                9 = open mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for row, col in self._all_positions():
            obs[row, col] = self._grid[row][col].to_observation()
        return obs
