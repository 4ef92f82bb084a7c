"""Game representation module."""

from .cards import (
    Card, Hand, Deck, Rank, Suit,
    InvalidHandError, ExhaustedDeckError,
    card_mask, new_shuffled_deck, parse_cards,
)
from .evaluator import HandLevel, HandStrength, evaluate, evaluate_hand, standard_rank, hand_class
from .showdown import Ordering, Outcome, ShowdownResult, compare, is_better, find_winner, showdown
from .equity import EquityConfig, EquityCalculator, SimulationResult, estimate_win_probability
from .table import Street, Table

__all__ = [
    "Card",
    "Hand",
    "Deck",
    "Rank",
    "Suit",
    "InvalidHandError",
    "ExhaustedDeckError",
    "card_mask",
    "new_shuffled_deck",
    "parse_cards",
    "HandLevel",
    "HandStrength",
    "evaluate",
    "evaluate_hand",
    "standard_rank",
    "hand_class",
    "Ordering",
    "Outcome",
    "ShowdownResult",
    "compare",
    "is_better",
    "find_winner",
    "showdown",
    "EquityConfig",
    "EquityCalculator",
    "SimulationResult",
    "estimate_win_probability",
    "Street",
    "Table",
]
