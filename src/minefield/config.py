"""
Board configuration for the minefield engine.

Holds the validated board dimensions, the difficulty presets, and the
JSON persistence of the last-used configuration.
"""
import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a minefield.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 10
    height: int = 10
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.num_mines < 1:
            raise InvalidConfiguration("Board must contain at least one mine")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be opened to win."""
        return self.total_cells - self.num_mines


# Preset difficulty levels
EASY = BoardConfig(10, 10, 10)
MEDIUM = BoardConfig(16, 16, 40)
HARD = BoardConfig(30, 16, 99)

PRESETS: Dict[str, BoardConfig] = {
    "easy": EASY,
    "medium": MEDIUM,
    "hard": HARD,
}

DEFAULT_CONFIG = EASY
DEFAULT_CONFIG_PATH = Path.home() / ".minefield" / "config.json"


def preset_name(config: BoardConfig) -> Optional[str]:
    """Return the preset name matching ``config``, or None if custom."""
    for name, preset in PRESETS.items():
        if preset == config:
            return name
    return None


# ============================================================================
# Persistence
# ============================================================================

def save_config(
    config: BoardConfig, path: Union[str, Path] = DEFAULT_CONFIG_PATH
) -> Path:
    """
    Write the configuration to ``path`` as JSON.

    Args:
        config: Configuration to persist.
        path: Destination file; parent directories are created.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(asdict(config), f, indent=2)
    logger.debug("Saved config %s to %s", config, path)
    return path


def load_config(path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> BoardConfig:
    """
    Read a configuration previously written by :func:`save_config`.

    A missing, unreadable or invalid file yields ``DEFAULT_CONFIG``.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("No stored config at %s, using default %s", path, DEFAULT_CONFIG)
        return DEFAULT_CONFIG

    try:
        with open(path) as f:
            data = json.load(f)
        config = BoardConfig(
            width=int(data["width"]),
            height=int(data["height"]),
            num_mines=int(data["num_mines"]),
        )
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.warning(
            "Ignoring stored config at %s (%s), using default %s",
            path, exc, DEFAULT_CONFIG,
        )
        return DEFAULT_CONFIG

    logger.debug("Loaded config %s from %s", config, path)
    return config
