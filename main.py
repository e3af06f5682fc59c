#!/usr/bin/env python3
"""
Minefield - terminal front-end.

Usage:
    python main.py play [--preset {easy,medium,hard}] [--seed N]
    python main.py play --width W --height H --mines M
    python main.py config [--config PATH]
"""
import argparse
import logging
from pathlib import Path
from typing import Optional, Tuple

from minefield import (
    BoardConfig,
    DEFAULT_CONFIG_PATH,
    GameState,
    Minefield,
    MinefieldError,
    OpenStatus,
    FlagStatus,
    PRESETS,
    load_config,
    preset_name,
    render_text,
    save_config,
)

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  o ROW COL   open a cell
  f ROW COL   toggle a flag
  c ROW COL   chord an open number
  r           restart with the same board
  q           quit"""


def resolve_config(args: argparse.Namespace) -> BoardConfig:
    """Pick the board from explicit sizes, a preset, or the stored config."""
    stored = load_config(args.config)
    explicit = (args.width, args.height, args.mines)
    if any(value is not None for value in explicit):
        return BoardConfig(
            width=args.width if args.width is not None else stored.width,
            height=args.height if args.height is not None else stored.height,
            num_mines=args.mines if args.mines is not None else stored.num_mines,
        )
    if args.preset:
        return PRESETS[args.preset]
    return stored


def parse_command(line: str) -> Tuple[str, Optional[int], Optional[int]]:
    """
    Split a typed command into its verb and coordinates.

    Raises:
        ValueError: If the command is malformed.
    """
    parts = line.split()
    if not parts:
        raise ValueError("Empty command")
    verb = parts[0].lower()
    if verb in ("r", "q", "h"):
        return verb, None, None
    if verb not in ("o", "f", "c") or len(parts) != 3:
        raise ValueError(f"Unknown command: {line.strip()}")
    return verb, int(parts[1]), int(parts[2])


def print_board(minefield: Minefield) -> None:
    print(render_text(minefield, show_coordinates=True))
    print(
        f"Mines left: {minefield.remaining_mine_count()} | "
        f"State: {minefield.state.name}"
    )


def play(args: argparse.Namespace) -> None:
    """Play a game in the terminal."""
    config = resolve_config(args)
    minefield = Minefield(config, seed=args.seed)
    name = preset_name(config) or "custom"
    print(
        f"Board: {config.width}x{config.height} with {config.num_mines} mines ({name})"
    )
    print(HELP_TEXT)

    while True:
        print()
        print_board(minefield)
        try:
            line = input("> ")
        except EOFError:
            break

        try:
            verb, row, col = parse_command(line)
        except ValueError as exc:
            print(exc)
            continue

        if verb == "q":
            break
        if verb == "h":
            print(HELP_TEXT)
            continue
        if verb == "r":
            minefield.reset()
            continue

        try:
            if verb == "f":
                result = minefield.toggle_flag(row, col)
                if result.status == FlagStatus.CELL_ALREADY_OPEN:
                    print("Cell is already open")
                continue
            if verb == "o":
                result = minefield.open(row, col)
            else:
                result = minefield.chord(row, col)
        except MinefieldError as exc:
            print(exc)
            continue

        if result.status == OpenStatus.FLAGGED:
            print("Cell is flagged, unflag it first")
        elif result.status == OpenStatus.NOT_CHORDABLE:
            print("Flag count does not match, cannot chord")
        elif result.status == OpenStatus.GAME_OVER:
            print("Game is over, press r to restart")

        if result.state == GameState.WON and result.changed:
            print("*** WIN! ***")
        elif result.state == GameState.LOST and result.changed:
            print(f"*** BOOM at {minefield.exploded} ***")

    path = save_config(config, args.config)
    logger.info("Saved board configuration to %s", path)


def show_config(args: argparse.Namespace) -> None:
    """Print the stored board configuration."""
    config = load_config(args.config)
    name = preset_name(config) or "custom"
    print(f"Stored config ({args.config}):")
    print(f"  Width: {config.width}")
    print(f"  Height: {config.height}")
    print(f"  Mines: {config.num_mines} ({name})")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minefield - terminal Minesweeper")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path of the stored board configuration",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--preset", choices=sorted(PRESETS), default=None, help="Difficulty preset"
    )
    play_parser.add_argument("--width", type=int, default=None, help="Columns")
    play_parser.add_argument("--height", type=int, default=None, help="Rows")
    play_parser.add_argument("--mines", type=int, default=None, help="Mine count")
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for mine placement"
    )

    # Config command
    subparsers.add_parser("config", help="Show the stored configuration")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "config":
            show_config(args)
        else:
            parser.print_help()
    except MinefieldError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
