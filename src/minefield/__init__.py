"""
Minefield engine.

Provides core Minesweeper logic including grid management, cell state,
board configuration and text rendering.
"""
from .cell import Cell, CellView, Visibility
from .config import (
    BoardConfig,
    EASY,
    MEDIUM,
    HARD,
    PRESETS,
    DEFAULT_CONFIG,
    DEFAULT_CONFIG_PATH,
    load_config,
    save_config,
    preset_name,
)
from .errors import MinefieldError, InvalidConfiguration, OutOfBounds
from .board import (
    Minefield,
    GameState,
    OpenStatus,
    FlagStatus,
    OpenResult,
    ToggleResult,
    Position,
)
from .text import render_text

__all__ = [
    "Cell",
    "CellView",
    "Visibility",
    "BoardConfig",
    "EASY",
    "MEDIUM",
    "HARD",
    "PRESETS",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "save_config",
    "preset_name",
    "MinefieldError",
    "InvalidConfiguration",
    "OutOfBounds",
    "Minefield",
    "GameState",
    "OpenStatus",
    "FlagStatus",
    "OpenResult",
    "ToggleResult",
    "Position",
    "render_text",
]
