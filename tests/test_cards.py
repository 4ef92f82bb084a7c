"""Tests for card, hand and deck representation."""

import numpy as np
import pytest

from holdem.game.cards import (
    Card, Hand, Deck, Rank, Suit, FULL_DECK,
    InvalidHandError, ExhaustedDeckError,
    card_mask, new_shuffled_deck, parse_cards,
)


class TestCard:
    def test_from_string(self):
        card = Card.from_string("As")
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_from_string_ten(self):
        card = Card.from_string("Th")
        assert card.rank == Rank.TEN
        assert card.suit == Suit.HEARTS

    def test_from_string_ten_digits(self):
        assert Card.from_string("10h") == Card.from_string("Th")

    def test_from_string_lowercase(self):
        card = Card.from_string("kd")
        assert card.rank == Rank.KING
        assert card.suit == Suit.DIAMONDS

    def test_str(self):
        card = Card(Rank.ACE, Suit.SPADES)
        assert str(card) == "As"

    def test_pretty(self):
        assert Card(Rank.TEN, Suit.HEARTS).pretty() == "[ 10♥ ]"
        assert Card(Rank.ACE, Suit.SPADES).pretty() == "[ A♠ ]"

    def test_from_string_invalid_rank(self):
        with pytest.raises(ValueError):
            Card.from_string("Xs")

    def test_from_string_invalid_suit(self):
        with pytest.raises(ValueError):
            Card.from_string("Ax")

    def test_equality(self):
        card1 = Card.from_string("As")
        card2 = Card.from_string("As")
        assert card1 == card2
        assert hash(card1) == hash(card2)

    def test_index_round_trip(self):
        indices = [card.index for card in FULL_DECK]
        assert indices == list(range(52))
        assert Card.from_index(51) == Card.from_string("As")
        assert Card.from_index(0) == Card.from_string("2c")

    def test_from_index_invalid(self):
        with pytest.raises(ValueError):
            Card.from_index(52)

    def test_to_treys(self):
        card = Card.from_string("As")
        treys_card = card.to_treys()
        assert isinstance(treys_card, int)


class TestHand:
    def test_from_string_specific(self):
        hand = Hand.from_string("AsKh")
        assert hand.card1.rank == Rank.ACE
        assert hand.card2.rank == Rank.KING

    def test_from_string_pair(self):
        hand = Hand.from_string("AA")
        assert hand.card1.rank == Rank.ACE
        assert hand.card2.rank == Rank.ACE
        assert hand.is_pair

    def test_from_string_suited(self):
        hand = Hand.from_string("AKs")
        assert hand.is_suited
        assert not hand.is_pair

    def test_from_string_offsuit(self):
        hand = Hand.from_string("AKo")
        assert not hand.is_suited
        assert not hand.is_pair

    def test_canonical(self):
        assert Hand.from_string("AsAh").canonical == "AA"
        assert Hand.from_string("AsKs").canonical == "AKs"
        assert Hand.from_string("AsKh").canonical == "AKo"

    def test_card_ordering(self):
        # Lower card first in string should still have higher rank first
        hand = Hand.from_string("KsAs")
        assert hand.card1.rank == Rank.ACE
        assert hand.card2.rank == Rank.KING

    def test_repeated_card_rejected(self):
        with pytest.raises(InvalidHandError):
            Hand.from_string("AsAs")

    def test_from_string_ten_digits(self):
        hand = Hand.from_string("10h9h")
        assert hand.card1 == Card.from_string("Th")
        assert hand.card2 == Card.from_string("9h")
        assert Hand.from_string("10h 9h") == hand

    @pytest.mark.parametrize("s", [
        "AK",       # two different ranks is not a pair
        "AKx",      # suffix must be s or o
        "AAs",      # a pair cannot be suited
        "XXo",
        "As",
        "AsKhQ",
        "AsKhQd",
        "",
    ])
    def test_invalid_string(self, s):
        with pytest.raises(ValueError):
            Hand.from_string(s)

    def test_str(self):
        hand = Hand.from_string("AsKh")
        assert str(hand) == "AsKh"


class TestParseCards:
    def test_compact(self):
        assert parse_cards("AsKhTd") == [
            Card.from_string("As"), Card.from_string("Kh"), Card.from_string("Td"),
        ]

    def test_spaced_and_tens(self):
        assert parse_cards("10h 9h, 2c") == [
            Card.from_string("Th"), Card.from_string("9h"), Card.from_string("2c"),
        ]

    def test_empty(self):
        assert parse_cards("") == []


class TestDeck:
    def test_full_deck(self):
        deck = Deck()
        assert len(deck) == 52
        assert len(set(deck.cards)) == 52

    def test_deal(self, rng):
        deck = new_shuffled_deck(rng)
        cards = deck.deal(5)
        assert len(cards) == 5
        assert len(deck) == 47
        assert deck.dealt == cards

    def test_deal_too_many(self):
        deck = Deck()
        with pytest.raises(ExhaustedDeckError):
            deck.deal(53)

    def test_exhausted_is_value_error(self):
        deck = Deck()
        deck.deal(52)
        with pytest.raises(ValueError):
            deck.deal(1)

    def test_deal_whole_deck_covers_domain(self):
        for seed in range(5):
            deck = new_shuffled_deck(np.random.default_rng(seed))
            dealt = deck.deal(52)
            assert sorted(c.index for c in dealt) == list(range(52))
            assert len(deck) == 0

    def test_dealt_plus_remaining_is_domain(self, rng):
        deck = new_shuffled_deck(rng)
        deck.deal(17)
        assert set(deck.dealt) | set(deck.remaining) == set(FULL_DECK)
        assert not set(deck.dealt) & set(deck.remaining)

    def test_deal_skips_unavailable(self, rng):
        deck = new_shuffled_deck(rng)
        known = [deck.cards[0], deck.cards[2]]
        dealt = deck.deal(3, skip=card_mask(known))
        assert dealt == [deck.cards[1], deck.cards[3], deck.cards[4]]
        assert not set(dealt) & set(known)

    def test_deal_with_skip_exhausts(self):
        deck = Deck()
        known = card_mask(FULL_DECK[:50])
        with pytest.raises(ExhaustedDeckError):
            deck.deal(3, skip=known)

    def test_shuffle(self, rng):
        deck1 = Deck()
        deck2 = Deck(rng)
        deck2.shuffle()

        # Cards should be in different order after shuffle (very likely)
        same_order = all(
            c1 == c2 for c1, c2 in zip(deck1.cards[:10], deck2.cards[:10])
        )
        assert not same_order

    def test_shuffle_is_seeded(self):
        deck1 = new_shuffled_deck(np.random.default_rng(7))
        deck2 = new_shuffled_deck(np.random.default_rng(7))
        assert deck1.cards == deck2.cards

    def test_reset(self, rng):
        deck = new_shuffled_deck(rng)
        deck.deal(20)
        assert len(deck) == 32

        deck.reset()
        assert len(deck) == 52
        assert deck.cards == list(FULL_DECK)


class TestCardMask:
    def test_mask(self):
        mask = card_mask([Card.from_string("2c"), Card.from_string("As")])
        assert mask.dtype == bool
        assert mask.sum() == 2
        assert mask[0] and mask[51]
