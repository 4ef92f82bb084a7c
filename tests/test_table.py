"""Tests for street-by-street dealing."""

import numpy as np
import pytest

from holdem.game.equity import EquityConfig
from holdem.game.table import Table, Street


class TestTable:
    def test_deals_hole_cards(self, rng):
        table = Table(4, rng)
        assert len(table.hands) == 4
        assert len(table.opponents) == 3
        assert table.hero is table.hands[0]
        assert table.street is Street.PREFLOP
        assert table.board == []
        assert len(table.deck) == 52 - 8

    def test_cards_are_distinct(self, rng):
        table = Table(6, rng)
        while table.street is not Street.RIVER:
            table.advance()
        all_cards = [c for h in table.hands for c in h.cards] + table.board
        assert len(all_cards) == 17
        assert len(set(all_cards)) == 17

    def test_streets_in_order(self, rng):
        table = Table(2, rng)
        assert table.advance() is Street.FLOP
        assert len(table.board) == 3
        assert table.advance() is Street.TURN
        assert len(table.board) == 4
        assert table.advance() is Street.RIVER
        assert len(table.board) == 5

    def test_no_street_after_river(self, rng):
        table = Table(2, rng)
        for _ in range(3):
            table.advance()
        with pytest.raises(ValueError):
            table.advance()

    @pytest.mark.parametrize("num_players", [1, 7])
    def test_player_count(self, num_players):
        with pytest.raises(ValueError, match="between 2 and 6"):
            Table(num_players)

    def test_same_seed_same_deal(self):
        a = Table(3, np.random.default_rng(5))
        b = Table(3, np.random.default_rng(5))
        assert a.hands == b.hands

    def test_win_probability_each_street(self, rng):
        table = Table(3, rng)
        config = EquityConfig(num_trials=200)
        while True:
            assert 0 <= table.win_probability(config, seed=1) <= 100
            if table.street is Street.RIVER:
                break
            table.advance()

    def test_winner_needs_river(self, rng):
        table = Table(2, rng)
        with pytest.raises(ValueError, match="full board"):
            table.winner()

    def test_winner_at_river(self, rng):
        table = Table(5, rng)
        for _ in range(3):
            table.advance()
        winner = table.winner()
        assert winner is None or 0 <= winner < 4
