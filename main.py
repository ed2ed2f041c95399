#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}] [--seed N]
    python main.py play --width 20 --height 10 --mines 30 [--safe-start]
    python main.py simulate [--games N] [--seed N]
"""
import argparse
import logging
from typing import List, Optional

import numpy as np

from minesweeper import (
    BoardConfig,
    ConfigurationError,
    Game,
    MinesweeperEnv,
    PRESETS,
    render_text,
)

logger = logging.getLogger(__name__)

PLAY_HELP = "Commands: r X Y (reveal), f X Y (flag), c X Y (chord), n (new game), q (quit)"


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Custom dimensions win over the difficulty preset."""
    custom = (args.width, args.height, args.mines)
    if any(value is not None for value in custom):
        preset = PRESETS[args.difficulty]
        return BoardConfig(
            width=preset.width if args.width is None else args.width,
            height=preset.height if args.height is None else args.height,
            num_mines=preset.num_mines if args.mines is None else args.mines,
        )
    return PRESETS[args.difficulty]


def show(game: Game) -> None:
    """Print the board and the stats line."""
    stats = game.get_stats()
    print(render_text(game.get_observation(), coordinates=True))
    print(
        f"{game.get_status().name} | "
        f"Mines left: {stats.mines_remaining} | "
        f"Time: {stats.duration}s"
    )


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    game = Game(build_config(args), rng=args.seed, safe_first_click=args.safe_start)
    print(PLAY_HELP)
    show(game)

    while True:
        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue

        command, *coords = line.split()
        if command == "q":
            break
        if command == "n":
            game.initialize()
            show(game)
            continue

        try:
            x, y = (int(value) for value in coords)
        except ValueError:
            print(PLAY_HELP)
            continue

        if command == "r":
            game.reveal(x, y)
        elif command == "f":
            game.toggle_flag(x, y)
        elif command == "c":
            game.chord(x, y)
        else:
            print(PLAY_HELP)
            continue

        show(game)
        if game.is_won:
            print("\n*** WIN! ***")
        elif game.is_lost:
            print("\n*** LOST (hit mine) ***")


def simulate(args: argparse.Namespace) -> None:
    """Play random games through the gymnasium environment."""
    env = MinesweeperEnv(config=build_config(args), safe_first_click=args.safe_start)
    rng = np.random.default_rng(args.seed)

    wins = 0
    total_revealed = 0
    obs, info = env.reset(seed=args.seed)

    for game in range(args.games):
        if game:
            obs, info = env.reset()
        done = False
        while not done:
            valid = np.flatnonzero(env.get_action_mask())
            action = int(rng.choice(valid))
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info["game_state"] == "WON":
            wins += 1
        total_revealed += info["revealed"]
        logger.debug("Game %d: %s", game + 1, info["game_state"])

    print(f"Results over {args.games} random games:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg revealed: {total_revealed / args.games:.1f} cells")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    """Board selection flags shared by every command."""
    parser.add_argument(
        "--difficulty",
        choices=sorted(PRESETS),
        default="easy",
        help="Difficulty preset",
    )
    parser.add_argument("--width", type=int, help="Custom board width")
    parser.add_argument("--height", type=int, help="Custom board height")
    parser.add_argument("--mines", type=int, help="Custom mine count")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--safe-start", action="store_true", help="First reveal is never a mine"
    )


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper - play or simulate")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games and report the win rate"
    )
    add_board_arguments(simulate_parser)
    simulate_parser.add_argument(
        "--games", type=positive_int, default=100, help="Number of games to play"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.command == "play":
            play(args)
        elif args.command == "simulate":
            simulate(args)
        else:
            parser.print_help()
    except ConfigurationError as error:
        parser.error(str(error))


if __name__ == "__main__":
    main()
