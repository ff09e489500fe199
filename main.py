#!/usr/bin/env python3
"""
Minesweeper engine - command line entry point.

Usage:
    python main.py simulate [--difficulty D] [--games N] [--seed S]
    python main.py simulate --difficulty custom --width W --height H --mines M
    python main.py presets
"""
import argparse
import logging
from typing import Dict, Optional

import numpy as np

from minesweeper import (
    Difficulty,
    GameSettings,
    InvalidSettingsError,
    MinesweeperEnv,
    PRESETS,
)
from minesweeper.environment import OPEN


def settings_from_args(args: argparse.Namespace) -> Optional[GameSettings]:
    """Build explicit settings for a custom game from the CLI options."""
    if Difficulty(args.difficulty) is not Difficulty.CUSTOM:
        return None
    if None in (args.width, args.height, args.mines):
        raise InvalidSettingsError(
            "Custom difficulty requires --width, --height and --mines"
        )
    return GameSettings(args.width, args.height, args.mines)


def simulate_games(
    env: MinesweeperEnv,
    num_games: int,
    seed: Optional[int] = None,
) -> Dict[str, float]:
    """
    Play games by opening uniformly random hidden cells.

    Returns:
        Win rate, average steps and average revealed cells.
    """
    rng = np.random.default_rng(seed)
    wins = 0
    total_steps = 0
    total_revealed = 0

    for game in range(num_games):
        game_seed = None if seed is None else seed + game
        obs, info = env.reset(seed=game_seed)
        done = False

        while not done:
            mask = env.get_action_mask()
            open_actions = np.where(mask[: env.action_space.n // 3])[0]
            cell_index = rng.choice(open_actions)
            action = OPEN * (env.action_space.n // 3) + int(cell_index)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        wins += info["game_state"] == "won"
        total_steps += info["steps"]
        total_revealed += info["revealed"]

    return {
        "win_rate": wins / num_games,
        "avg_steps": total_steps / num_games,
        "avg_revealed": total_revealed / num_games,
    }


def simulate(args: argparse.Namespace) -> None:
    """Run random-policy games and print the results."""
    settings = settings_from_args(args)
    env = MinesweeperEnv(args.difficulty, settings)
    board = env.settings

    print(
        f"Simulating {args.games} {args.difficulty} games "
        f"({board.width}x{board.height}, {board.mines} mines)..."
    )
    results = simulate_games(env, args.games, args.seed)

    print("Results:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")


def presets(args: argparse.Namespace) -> None:
    """Print the difficulty table."""
    print(f"{'Difficulty':<14} {'Width':>6} {'Height':>7} {'Mines':>6}")
    print("-" * 36)
    for difficulty, settings in PRESETS.items():
        print(
            f"{difficulty.value:<14} {settings.width:>6} "
            f"{settings.height:>7} {settings.mines:>6}"
        )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Minesweeper engine - simulate games and list presets"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    simulate_parser = subparsers.add_parser(
        "simulate", help="Play games with a random policy"
    )
    simulate_parser.add_argument(
        "--difficulty",
        choices=[difficulty.value for difficulty in Difficulty],
        default=Difficulty.BEGINNER.value,
        help="Difficulty preset",
    )
    simulate_parser.add_argument("--width", type=int, help="Custom width")
    simulate_parser.add_argument("--height", type=int, help="Custom height")
    simulate_parser.add_argument("--mines", type=int, help="Custom mine count")
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )

    subparsers.add_parser("presets", help="List difficulty presets")
    return parser


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "simulate":
        try:
            simulate(args)
        except InvalidSettingsError as error:
            parser.error(str(error))
    elif args.command == "presets":
        presets(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
