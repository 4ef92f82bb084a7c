#!/usr/bin/env python3
"""Play one hand street by street, showing the win probability at each."""

import argparse
import sys
from pathlib import Path

import numpy as np
from rich.console import Console
from rich.prompt import Prompt

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from holdem.game.equity import EquityConfig
from holdem.game.table import Table, Street, MIN_PLAYERS, MAX_PLAYERS
from holdem.log import setup_logging


STREET_TITLES = {
    Street.FLOP: "Community Cards (Flop)",
    Street.TURN: "Community Cards (Turn)",
    Street.RIVER: "Community Cards (River)",
}

PROBABILITY_TITLES = {
    Street.PREFLOP: "Preflop Probability of Winning",
    Street.FLOP: "Probability of Winning After Flop",
    Street.TURN: "Probability of Winning After Turn",
    Street.RIVER: "Final Probability of Winning After River",
}


def main():
    parser = argparse.ArgumentParser(
        description="Play a hand of Texas Hold'em against bots"
    )
    parser.add_argument(
        "-n", "--players",
        type=int,
        help=f"Number of players ({MIN_PLAYERS}-{MAX_PLAYERS}), prompted if omitted",
    )
    parser.add_argument(
        "-t", "--trials",
        type=int,
        default=10000,
        help="Monte Carlo trials per estimate (default: 10000)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the deal and the simulations",
    )
    parser.add_argument(
        "--partial-board",
        action="store_true",
        help="Do not complete the board in simulations",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    console = Console()
    setup_logging(args.verbose, console)

    num_players = args.players
    if num_players is None:
        answer = Prompt.ask(
            f"Enter the number of players ({MIN_PLAYERS}-{MAX_PLAYERS})",
            console=console,
        )
        try:
            num_players = int(answer)
        except ValueError:
            num_players = None
    if num_players is None or not MIN_PLAYERS <= num_players <= MAX_PLAYERS:
        console.print(
            f"[red]Invalid number of players. The number must be between "
            f"{MIN_PLAYERS} and {MAX_PLAYERS}.[/]"
        )
        return 1

    try:
        config = EquityConfig(
            num_trials=args.trials,
            complete_board=not args.partial_board,
        )
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    rng = np.random.default_rng(args.seed)
    table = Table(num_players, rng)

    console.print("[bold]** Your Hand **[/]")
    console.print(table.hero.pretty())

    _show_probability(console, table, config, args.seed)
    if _folds(console):
        return 0

    while table.street is not Street.RIVER:
        street = table.advance()
        console.print(f"[bold]** {STREET_TITLES[street]} **[/]")
        console.print(" ".join(c.pretty() for c in table.board))
        _show_probability(console, table, config, args.seed)
        if street is not Street.RIVER and _folds(console):
            return 0

    console.print()
    for seat, hand in enumerate(table.opponents, start=2):
        console.print(f"Bot {seat}: {hand.pretty()}")

    winner = table.winner()
    if winner is None:
        console.print("[bold green]** Player 1 wins **[/]")
    else:
        console.print(f"[bold red]** Bot {winner + 2} wins **[/]")

    return 0


def _show_probability(console: Console, table: Table, config: EquityConfig, seed) -> None:
    """Estimate and print the hero's win probability."""
    with console.status("Simulating..."):
        probability = table.win_probability(config, seed)

    console.print(f"[bold]** {PROBABILITY_TITLES[table.street]} **[/]")
    if table.street is Street.PREFLOP:
        console.print(
            f"Your preflop probability of winning against "
            f"{table.num_players - 1} players is: [cyan]{probability}%[/]"
        )
    else:
        console.print(f"Your probability of winning is: [cyan]{probability}%[/]")


def _folds(console: Console) -> bool:
    """Ask fold or continue; True when the player folds."""
    action = Prompt.ask(
        "Enter your action (F to fold / C to continue)",
        choices=["F", "C", "f", "c"],
        show_choices=False,
        console=console,
    )
    if action.upper() == "F":
        console.print("You have folded. The game ends here.")
        return True
    return False


if __name__ == "__main__":
    sys.exit(main())
