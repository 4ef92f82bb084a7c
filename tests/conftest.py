"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from holdem.game.cards import Hand, parse_cards


@pytest.fixture
def rng():
    """Seeded generator so shuffles are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def cards():
    """Parse a card run like 'As Kh Td'."""
    return parse_cards


@pytest.fixture
def hand():
    """Build a Hand from a string like 'AsKh'."""
    return Hand.from_string
