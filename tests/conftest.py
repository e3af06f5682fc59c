"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src and the project root (main.py) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from minefield import BoardConfig, Cell, Minefield


# ============================================================================
# Minefield Fixtures
# ============================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    """Deterministic random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def default_board(rng: np.random.Generator) -> Minefield:
    """Create a default 10x10 board with 10 mines."""
    return Minefield(rng=rng)


@pytest.fixture
def corner_mine_board() -> Minefield:
    """3x3 board with its single mine laid at (2, 2)."""
    board = Minefield(BoardConfig(3, 3, 1))
    board.lay_mines([(2, 2)])
    return board


@pytest.fixture
def wall_board() -> Minefield:
    """
    5x5 board with a row of mines across the middle, gap in the center.

    Layout (M = mine):
        . . . . .
        . . . . .
        M M . M M
        . . . . .
        . . . . .
    """
    board = Minefield(BoardConfig(5, 5, 4))
    board.lay_mines([(2, 0), (2, 1), (2, 3), (2, 4)])
    return board


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def closed_cell() -> Cell:
    """Create a closed cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(has_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Location for a stored configuration file."""
    return tmp_path / "minefield" / "config.json"
