#!/usr/bin/env python3
"""Estimate the win probability of a hand on a given board."""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from holdem.game.cards import Hand, parse_cards
from holdem.game.equity import EquityConfig, EquityCalculator
from holdem.game.evaluator import evaluate_hand, hand_class
from holdem.game.table import MIN_PLAYERS, MAX_PLAYERS
from holdem.log import setup_logging


def main():
    parser = argparse.ArgumentParser(
        description="Estimate Texas Hold'em win probability against random hands"
    )
    parser.add_argument(
        "--hand",
        required=True,
        help="Hole cards (e.g., 'AsKs', or 'AA' / 'AKs' / 'AKo')",
    )
    parser.add_argument(
        "-b", "--board",
        default="",
        help="Community cards (e.g., 'QsJsTs' or 'Qs Js Ts')",
    )
    parser.add_argument(
        "-n", "--players",
        type=int,
        default=2,
        help="Players at the table including you (default: 2)",
    )
    parser.add_argument(
        "-t", "--trials",
        type=int,
        default=10000,
        help="Number of Monte Carlo trials (default: 10000)",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=1,
        help="Worker processes (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for reproducible results",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        help="Stop after this many seconds, keeping finished batches",
    )
    parser.add_argument(
        "--partial-board",
        action="store_true",
        help="Evaluate against the known board only",
    )
    parser.add_argument(
        "--standard",
        action="store_true",
        help="Rank hands on the full standard scale (treys)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    console = Console()
    setup_logging(args.verbose, console)

    if not MIN_PLAYERS <= args.players <= MAX_PLAYERS:
        console.print(
            f"[red]Invalid number of players. The number must be between "
            f"{MIN_PLAYERS} and {MAX_PLAYERS}.[/]"
        )
        return 1

    try:
        hand = Hand.from_string(args.hand)
        board = parse_cards(args.board)
        config = EquityConfig(
            num_trials=args.trials,
            complete_board=not args.partial_board,
            ranking="standard" if args.standard else "reference",
            workers=args.workers,
            time_limit=args.time_limit,
        )
        strength = evaluate_hand(hand, board)
        with console.status("Simulating..."):
            result = EquityCalculator(config).simulate(hand, board, args.players, args.seed)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    console.print(f"[bold]Hand:[/] {hand.pretty()} ({hand.canonical})")
    if board:
        console.print(f"[bold]Board:[/] {' '.join(c.pretty() for c in board)}")
    console.print(f"[bold]Current hand:[/] {strength}")
    if len(board) >= 3:
        console.print(f"[bold]Standard class:[/] {hand_class(hand, board)}")
    console.print()

    table = Table(title=f"Equity vs {args.players - 1} opponent(s)", show_header=False)
    table.add_column("Stat", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Trials", f"{result.trials}")
    table.add_row("Wins", f"{result.wins} ({result.win_rate:.1%})")
    table.add_row("Split pots", f"{result.splits} ({result.split_rate:.1%})")
    table.add_row("Losses", f"{result.losses}")
    table.add_row("Win probability", f"[bold]{result.percentage}%[/]")

    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
