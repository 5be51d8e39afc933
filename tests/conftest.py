"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from coach.game.cards import parse_cards


@pytest.fixture
def cards():
    """Parse card text like 'As Kd 7h' into a list of cards."""
    return parse_cards


@pytest.fixture
def rng():
    """Seeded generator so simulations are reproducible."""
    return np.random.default_rng(1234)
