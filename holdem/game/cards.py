"""Card, hand and deck representation."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional

import numpy as np
from treys import Card as TreysCard


NUM_CARDS = 52
NUM_RANKS = 13
NUM_SUITS = 4
HAND_SIZE = 2
BOARD_SIZE = 5


class InvalidHandError(ValueError):
    """Raised when a set of cards cannot form an evaluable hand."""


class ExhaustedDeckError(ValueError):
    """Raised when a deal asks for more cards than the deck has left."""


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


# Mapping for string conversion
RANK_STR = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9",
    10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"
}
STR_RANK = {v: k for k, v in RANK_STR.items()}

SUIT_STR = {0: "c", 1: "d", 2: "h", 3: "s"}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}

# Console rendering
RANK_LABEL = {**RANK_STR, 10: "10"}
SUIT_SYMBOL = {0: "♣", 1: "♦", 2: "♥", 3: "♠"}


@dataclass(frozen=True)
class Card:
    """A playing card."""
    rank: int  # 2-14
    suit: int  # 0-3

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @property
    def index(self) -> int:
        """Dense position of this card in the 52-card domain."""
        return (self.rank - Rank.TWO) * NUM_SUITS + self.suit

    @classmethod
    def from_index(cls, index: int) -> "Card":
        if not 0 <= index < NUM_CARDS:
            raise ValueError(f"Invalid card index: {index}")
        return cls(rank=index // NUM_SUITS + Rank.TWO, suit=index % NUM_SUITS)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Th', '10h', '2c'."""
        s = s.strip()
        if s[:2] == "10":
            s = "T" + s[2:]
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s}")
        rank_char = s[0].upper()
        suit_char = s[1].lower()

        if rank_char not in STR_RANK:
            raise ValueError(f"Invalid rank: {rank_char}")
        if suit_char not in STR_SUIT:
            raise ValueError(f"Invalid suit: {suit_char}")

        return cls(rank=STR_RANK[rank_char], suit=STR_SUIT[suit_char])

    def pretty(self) -> str:
        """Console form, e.g. '[ 10♥ ]'."""
        return f"[ {RANK_LABEL[self.rank]}{SUIT_SYMBOL[self.suit]} ]"

    def to_treys(self) -> int:
        """Convert to treys library card format."""
        return TreysCard.new(str(self))


FULL_DECK: tuple[Card, ...] = tuple(Card.from_index(i) for i in range(NUM_CARDS))


@dataclass
class Hand:
    """A two-card starting hand."""
    card1: Card
    card2: Card

    def __post_init__(self):
        if self.card1 == self.card2:
            raise InvalidHandError(f"Hand repeats card {self.card1}")
        # Ensure card1 has higher or equal rank
        if self.card1.rank < self.card2.rank:
            self.card1, self.card2 = self.card2, self.card1

    @property
    def cards(self) -> tuple[Card, Card]:
        return (self.card1, self.card2)

    @property
    def is_pair(self) -> bool:
        """Check if hand is a pocket pair."""
        return self.card1.rank == self.card2.rank

    @property
    def is_suited(self) -> bool:
        """Check if hand is suited."""
        return self.card1.suit == self.card2.suit

    @property
    def canonical(self) -> str:
        """
        Get canonical hand notation (e.g., 'AKs', 'QQ', '72o').

        This groups equivalent hands regardless of specific suits.
        """
        r1 = RANK_STR[self.card1.rank]
        r2 = RANK_STR[self.card2.rank]

        if self.is_pair:
            return f"{r1}{r2}"
        elif self.is_suited:
            return f"{r1}{r2}s"
        else:
            return f"{r1}{r2}o"

    def pretty(self) -> str:
        return f"{self.card1.pretty()} {self.card2.pretty()}"

    def __str__(self) -> str:
        return f"{self.card1}{self.card2}"

    def __repr__(self) -> str:
        return f"Hand({self.card1}, {self.card2})"

    @classmethod
    def from_string(cls, s: str) -> "Hand":
        """Parse hand from string like 'AsKh', '10h9h', 'AA' or 'AKs'."""
        s = s.strip()
        ranks = s[:2].upper()
        known_ranks = len(ranks) == 2 and all(r in STR_RANK for r in ranks)

        if len(s) == 2 and known_ranks and ranks[0] == ranks[1]:
            # Pair: 'AA'
            rank = STR_RANK[ranks[0]]
            return cls(
                Card(rank, Suit.SPADES),
                Card(rank, Suit.HEARTS)
            )
        if len(s) == 3 and known_ranks and ranks[0] != ranks[1] and s[2].lower() in "so":
            # Suited or offsuit: 'AKs' or 'AKo'
            r1 = STR_RANK[ranks[0]]
            r2 = STR_RANK[ranks[1]]

            if s[2].lower() == "s":
                return cls(Card(r1, Suit.SPADES), Card(r2, Suit.SPADES))
            else:
                return cls(Card(r1, Suit.SPADES), Card(r2, Suit.HEARTS))

        # Specific cards: 'AsKh', '10h 9h'
        cards = parse_cards(s)
        if len(cards) != HAND_SIZE:
            raise ValueError(f"Invalid hand string: {s}")
        return cls(*cards)

    def to_treys(self) -> list[int]:
        """Convert to treys library format."""
        return [self.card1.to_treys(), self.card2.to_treys()]


def parse_cards(s: str) -> list[Card]:
    """
    Parse a run of cards like 'AsKhTd', 'As Kh Td' or '10h 9h'.

    Returns an empty list for an empty string.
    """
    cards = []
    for token in s.replace(",", " ").split():
        while token:
            size = 3 if token.startswith("10") else 2
            cards.append(Card.from_string(token[:size]))
            token = token[size:]
    return cards


def card_mask(cards: Iterable[Card]) -> np.ndarray:
    """Boolean mask over the 52-card domain, True for each given card."""
    mask = np.zeros(NUM_CARDS, dtype=bool)
    for card in cards:
        mask[card.index] = True
    return mask


class Deck:
    """
    A standard 52-card deck dealt from a cursor.

    Dealt cards stay in ``cards`` behind the cursor, so dealt plus
    remaining is always the full domain.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.cards: list[Card] = []
        self.position = 0
        self.reset()

    def reset(self) -> None:
        """Reset deck to full 52 cards in domain order."""
        self.cards = list(FULL_DECK)
        self.position = 0

    def shuffle(self) -> None:
        """Reset and apply a uniform random permutation."""
        order = self.rng.permutation(NUM_CARDS)
        self.cards = [FULL_DECK[i] for i in order]
        self.position = 0

    def deal(self, n: int = 1, skip: Optional[np.ndarray] = None) -> list[Card]:
        """
        Deal the next n cards.

        Args:
            n: Number of cards to deal
            skip: Optional mask (see card_mask) of cards to pass over

        Raises:
            ExhaustedDeckError: if fewer than n usable cards remain
        """
        dealt: list[Card] = []
        while len(dealt) < n:
            if self.position >= NUM_CARDS:
                raise ExhaustedDeckError(
                    f"Cannot deal {n} cards, deck ran out after {len(dealt)}"
                )
            card = self.cards[self.position]
            self.position += 1
            if skip is None or not skip[card.index]:
                dealt.append(card)
        return dealt

    @property
    def dealt(self) -> list[Card]:
        return self.cards[:self.position]

    @property
    def remaining(self) -> list[Card]:
        return self.cards[self.position:]

    def __len__(self) -> int:
        return NUM_CARDS - self.position


def new_shuffled_deck(rng: Optional[np.random.Generator] = None) -> Deck:
    """Create a deck and shuffle it."""
    deck = Deck(rng)
    deck.shuffle()
    return deck

