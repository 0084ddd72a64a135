#!/usr/bin/env python3
"""
Colored Minesweeper - terminal entry point.

Usage:
    python main.py play [--width W] [--height H] [--difficulty D] [--colors ...]
    python main.py demo [--games N] [--delay S] [--max-steps N]
"""
import argparse
import logging
import os
import time
from typing import List, Optional

import numpy as np

from src.trapsweeper import (
    GameSession,
    GridConfig,
    InputPolicy,
    TrapColor,
    TrapsweeperEnv,
    render_ansi,
)

HELP = (
    "Commands: r X Y (reveal/chord), f X Y (flag forward), "
    "b X Y (flag backward), t X Y COLOR (toggle a color flag), q (quit)"
)


def clear_screen() -> None:
    os.system('cls' if os.name == 'nt' else 'clear')


def build_config(args: argparse.Namespace) -> GridConfig:
    """Create the grid configuration from command line arguments."""
    colors = tuple(TrapColor[name.upper()] for name in args.colors)
    return GridConfig(args.width, args.height, args.difficulty, colors)


def show(session: GameSession) -> None:
    """Print the grid with a status line."""
    print(render_ansi(session.grid, session.config))
    print(
        f"\n{session.state.name} | flags left: {session.remaining_flags} "
        f"| {session.duration:.0f}s"
    )


def apply_command(session: GameSession, words: List[str]) -> Optional[str]:
    """
    Apply one typed command to the session.

    Returns:
        An error message, or None if the command was applied.
    """
    command = words[0].lower()
    if command not in ("r", "f", "b", "t") or len(words) < 3:
        return HELP
    try:
        x, y = int(words[1]), int(words[2])
    except ValueError:
        return "Coordinates must be integers"

    if command == "r":
        session.reveal(x, y)
    elif command == "f":
        session.flag(x, y, 1)
    elif command == "b":
        session.flag(x, y, -1)
    else:
        if len(words) < 4:
            return "Tool flag needs a color"
        try:
            color = TrapColor[words[3].upper()]
            session.flag_or_toggle(x, y, color)
        except (KeyError, ValueError):
            return f"Unknown or disabled color: {words[3]}"
    return None


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    policy = InputPolicy(chord_on_flag=args.chord_on_flag)
    session = GameSession(
        build_config(args),
        rng=np.random.default_rng(args.seed),
        policy=policy,
    )
    print(HELP)

    while not (session.is_won or session.is_lost):
        show(session)
        words = input("> ").split()
        if not words:
            continue
        if words[0].lower() == "q":
            return
        error = apply_command(session, words)
        if error:
            print(error)

    show(session)
    print("\n*** WIN! ***" if session.is_won else "\n*** LOST (hit mine) ***")


def demo(args: argparse.Namespace) -> None:
    """Watch a random policy play through the environment."""
    env = TrapsweeperEnv(build_config(args), render_mode="ansi")
    env.action_space.seed(args.seed)
    wins = 0

    for game in range(args.games):
        obs, info = env.reset(seed=None if args.seed is None else args.seed + game)
        done = False
        step = 0

        while not done and step < args.max_steps:
            action = env.sample_valid_action()
            kind, x, y = env.decode_action(action)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{args.games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            if kind == 0:
                move = "reveal"
            else:
                move = f"flag {env.config.colors[kind - 1].name.lower()}"
            print(f"Last move: {move} ({x}, {y}) | reward {reward:+.1f}\n")
            show(env.session)
            time.sleep(args.delay)

        if info.get("game_state") == "WON":
            wins += 1
            print("\n*** WIN! ***")
        elif info.get("game_state") == "LOST":
            print("\n*** LOST (hit mine) ***")
        else:
            print(f"\n*** Stopped after {step} steps ***")
        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{args.games} wins ===")


def add_grid_arguments(parser: argparse.ArgumentParser) -> None:
    """Add grid configuration options to a subcommand."""
    parser.add_argument("--width", type=int, default=30, help="Columns (10-50)")
    parser.add_argument("--height", type=int, default=15, help="Rows (5-30)")
    parser.add_argument(
        "--difficulty", type=float, default=0.1, help="Fraction of mines"
    )
    parser.add_argument(
        "--colors",
        nargs="+",
        choices=[color.name.lower() for color in TrapColor],
        default=["red", "yellow", "green"],
        help="Enabled trap colors, in flag cycle order",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Colored Minesweeper - play or watch in the terminal"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log game events"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    add_grid_arguments(play_parser)
    play_parser.add_argument(
        "--chord-on-flag",
        action="store_true",
        help="Flagging a revealed cell chords it",
    )

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Watch random play")
    add_grid_arguments(demo_parser)
    demo_parser.add_argument(
        "--games", type=int, default=3, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.1, help="Delay between moves"
    )
    demo_parser.add_argument(
        "--max-steps", type=int, default=2000, help="Step limit per game"
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "demo":
        demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
