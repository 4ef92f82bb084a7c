"""Dealing state for a single hand played street by street."""

from enum import Enum
from typing import Optional

import numpy as np

from .cards import Card, Hand, HAND_SIZE, new_shuffled_deck
from .equity import EquityConfig, EquityCalculator
from .showdown import find_winner


MIN_PLAYERS = 2
MAX_PLAYERS = 6


class Street(Enum):
    """Betting streets, valued by board size."""
    PREFLOP = 0
    FLOP = 3
    TURN = 4
    RIVER = 5

    @property
    def board_size(self) -> int:
        return self.value


STREET_ORDER = [Street.PREFLOP, Street.FLOP, Street.TURN, Street.RIVER]


class Table:
    """
    One hand at an N-handed table.

    Seat 0 is the hero; the other seats are opponents. Hole cards are
    dealt in seat order, then the board a street at a time.
    """

    def __init__(self, num_players: int, rng: Optional[np.random.Generator] = None):
        if not MIN_PLAYERS <= num_players <= MAX_PLAYERS:
            raise ValueError(
                f"Number of players must be between {MIN_PLAYERS} and {MAX_PLAYERS}, "
                f"got {num_players}"
            )
        self.num_players = num_players
        self.deck = new_shuffled_deck(rng)
        self.hands = [Hand(*self.deck.deal(HAND_SIZE)) for _ in range(num_players)]
        self.board: list[Card] = []
        self.street = Street.PREFLOP

    @property
    def hero(self) -> Hand:
        return self.hands[0]

    @property
    def opponents(self) -> list[Hand]:
        return self.hands[1:]

    def advance(self) -> Street:
        """Deal the next street's community cards."""
        if self.street is Street.RIVER:
            raise ValueError("Board is complete, no street after the river")
        nxt = STREET_ORDER[STREET_ORDER.index(self.street) + 1]
        self.board.extend(self.deck.deal(nxt.board_size - len(self.board)))
        self.street = nxt
        return nxt

    def win_probability(self, config: Optional[EquityConfig] = None, seed=None) -> int:
        """Hero's estimated win percentage given the current board."""
        calculator = EquityCalculator(config)
        return calculator.win_probability(self.hero, self.board, self.num_players, seed)

    def winner(self) -> Optional[int]:
        """
        Showdown on the river.

        Returns:
            None if the hero wins, otherwise the index into opponents
        """
        if self.street is not Street.RIVER:
            raise ValueError(f"Showdown needs the full board, currently {self.street.name}")
        return find_winner(self.hero, self.opponents, self.board)
