"""
Hand strength evaluation.

Ranks any 2-7 card hand into a HandStrength that orders hands of the
same size against each other. The scale has eight categories: straight
flushes count as plain flushes and the ace-low straight is not
recognised. For the full standard scale on 5-7 cards, use
standard_rank(), backed by treys.
"""

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence

from treys import Evaluator

from .cards import Card, Hand, InvalidHandError, RANK_STR, HAND_SIZE, BOARD_SIZE


MIN_CARDS = 2
MAX_CARDS = 7
STRAIGHT_LENGTH = 5


class HandLevel(IntEnum):
    """Combination levels, weakest first. Level 5 is unused."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8


LEVEL_NAMES = {
    HandLevel.HIGH_CARD: "High Card",
    HandLevel.ONE_PAIR: "Pair",
    HandLevel.TWO_PAIR: "Two Pair",
    HandLevel.THREE_OF_A_KIND: "Three of a Kind",
    HandLevel.STRAIGHT: "Straight",
    HandLevel.FLUSH: "Flush",
    HandLevel.FULL_HOUSE: "Full House",
    HandLevel.FOUR_OF_A_KIND: "Four of a Kind",
}


@dataclass(frozen=True, order=True)
class HandStrength:
    """
    Totally ordered hand strength.

    Fields compare in declaration order, so an absent secondary rank (-1)
    sorts below any present one.
    """
    combination_level: HandLevel
    primary_rank: int
    secondary_rank: int = -1
    kickers: tuple[int, ...] = ()

    @property
    def name(self) -> str:
        return LEVEL_NAMES[self.combination_level]

    def __str__(self) -> str:
        if self.secondary_rank == -1:
            return f"{self.name} ({RANK_STR[self.primary_rank]})"
        return f"{self.name} ({RANK_STR[self.primary_rank]}, {RANK_STR[self.secondary_rank]})"


def _kickers(ranks: Sequence[int], used: Iterable[int], size: int) -> tuple[int, ...]:
    """Highest `size` ranks (ranks sorted high to low) not in `used`."""
    excluded = set(used)
    return tuple(r for r in ranks if r not in excluded)[:size]


def _straight_top(rank_counts: Counter) -> int:
    """Top rank of the highest five-rank run, or -1."""
    consecutive = 0
    for rank in range(14, 1, -1):
        if rank_counts[rank] > 0:
            consecutive += 1
            if consecutive >= STRAIGHT_LENGTH:
                return rank + STRAIGHT_LENGTH - 1
        else:
            consecutive = 0
    return -1


def evaluate(cards: Iterable[Card]) -> HandStrength:
    """
    Evaluate 2-7 distinct cards.

    Args:
        cards: Hole cards plus whatever community cards are known

    Returns:
        HandStrength for the best category found

    Raises:
        InvalidHandError: on fewer than 2, more than 7 or repeated cards
    """
    cards = list(cards)
    if not MIN_CARDS <= len(cards) <= MAX_CARDS:
        raise InvalidHandError(
            f"Hand must have {MIN_CARDS}-{MAX_CARDS} cards, got {len(cards)}"
        )
    if len(set(cards)) != len(cards):
        raise InvalidHandError(f"Duplicate cards detected: {cards}")

    ranks = sorted((c.rank for c in cards), reverse=True)
    rank_counts = Counter(ranks)
    suit_counts = Counter(c.suit for c in cards)

    # Flush
    for suit, count in suit_counts.items():
        if count >= BOARD_SIZE:
            suited = sorted((c.rank for c in cards if c.suit == suit), reverse=True)
            return HandStrength(HandLevel.FLUSH, suited[0], kickers=tuple(suited[1:BOARD_SIZE]))

    # Multiples
    trips = sorted((r for r, n in rank_counts.items() if n == 3), reverse=True)
    pairs = sorted((r for r, n in rank_counts.items() if n == 2), reverse=True)
    for rank, count in rank_counts.items():
        if count == 4:
            return HandStrength(
                HandLevel.FOUR_OF_A_KIND, rank,
                kickers=_kickers(ranks, [rank], BOARD_SIZE - 4),
            )
    if trips and pairs:
        return HandStrength(HandLevel.FULL_HOUSE, trips[0], pairs[0])
    if trips:
        return HandStrength(
            HandLevel.THREE_OF_A_KIND, trips[0],
            kickers=_kickers(ranks, [trips[0]], BOARD_SIZE - 3),
        )

    top = _straight_top(rank_counts)
    if top != -1:
        return HandStrength(HandLevel.STRAIGHT, top)

    if len(pairs) >= 2:
        return HandStrength(
            HandLevel.TWO_PAIR, pairs[0], pairs[1],
            kickers=_kickers(ranks, pairs[:2], BOARD_SIZE - 4),
        )
    if pairs:
        return HandStrength(
            HandLevel.ONE_PAIR, pairs[0],
            kickers=_kickers(ranks, pairs, BOARD_SIZE - 2),
        )

    return HandStrength(HandLevel.HIGH_CARD, ranks[0], kickers=tuple(ranks[1:BOARD_SIZE]))


def evaluate_hand(hand: Hand, community: Sequence[Card]) -> HandStrength:
    """Evaluate hole cards together with the community cards."""
    return evaluate([*hand.cards, *community])


_treys_evaluator = Evaluator()


def _check_board(board: Sequence[Card]) -> None:
    total = HAND_SIZE + len(board)
    if not BOARD_SIZE <= total <= MAX_CARDS:
        raise ValueError(
            f"Standard ranking needs 5-7 cards in total, got {total}"
        )


def standard_rank(hand: Hand, board: Sequence[Card]) -> int:
    """
    Rank on the full standard scale via treys.

    Lower is better: 1 is a royal flush, 7462 the worst high card.
    """
    _check_board(board)
    return _treys_evaluator.evaluate(hand.to_treys(), [c.to_treys() for c in board])


def hand_class(hand: Hand, board: Sequence[Card]) -> str:
    """Standard hand class name, e.g. 'Straight Flush'."""
    rank = standard_rank(hand, board)
    return _treys_evaluator.class_to_string(_treys_evaluator.get_rank_class(rank))
