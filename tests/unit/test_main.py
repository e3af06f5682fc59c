"""
Unit tests for the terminal front-end helpers.
"""
import argparse
from pathlib import Path

import pytest
from main import parse_command, resolve_config
from minefield import HARD, BoardConfig, InvalidConfiguration, save_config


def _args(config_path: Path, **overrides) -> argparse.Namespace:
    values = {
        "config": config_path,
        "preset": None,
        "width": None,
        "height": None,
        "mines": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestParseCommand:
    """Test typed command parsing."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("o 3 4", ("o", 3, 4)),
            ("F 0 9", ("f", 0, 9)),
            ("c 1 1\n", ("c", 1, 1)),
            ("r", ("r", None, None)),
            ("q", ("q", None, None)),
        ],
    )
    def test_valid_commands(self, line: str, expected: tuple) -> None:
        assert parse_command(line) == expected

    @pytest.mark.parametrize("line", ["", "x 1 2", "o 1", "o a b"])
    def test_invalid_commands(self, line: str) -> None:
        with pytest.raises(ValueError):
            parse_command(line)


class TestResolveConfig:
    """Test board selection from arguments and stored config."""

    def test_stored_config_used_by_default(self, config_path: Path) -> None:
        save_config(BoardConfig(8, 8, 9), config_path)
        assert resolve_config(_args(config_path)) == BoardConfig(8, 8, 9)

    def test_preset_overrides_stored(self, config_path: Path) -> None:
        save_config(BoardConfig(8, 8, 9), config_path)
        assert resolve_config(_args(config_path, preset="hard")) == HARD

    def test_explicit_sizes_fill_from_stored(self, config_path: Path) -> None:
        save_config(BoardConfig(8, 8, 9), config_path)
        config = resolve_config(_args(config_path, width=20, mines=30))
        assert config == BoardConfig(20, 8, 30)

    @pytest.mark.parametrize("option", ["width", "height", "mines"])
    def test_explicit_zero_is_rejected(self, config_path: Path, option: str) -> None:
        """A zero size must not fall back to the stored value."""
        save_config(BoardConfig(8, 8, 5), config_path)
        with pytest.raises(InvalidConfiguration):
            resolve_config(_args(config_path, **{option: 0}))
