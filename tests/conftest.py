"""Pytest fixtures for strategy trainer tests."""

import os

# Keep API tests off any local Redis; must run before config is imported
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from random import Random

from hypothesis import strategies as st

from core.cards import Card, Deck, Rank, Suit, create_deck
from core.hand import Hand
from core.strategy import BasicStrategy
from core.training import TrainingSession


def make_cards(*labels: str) -> tuple[Card, ...]:
    """Build cards from strings like 'A♠', '10D'."""
    return tuple(Card.from_string(label) for label in labels)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return create_deck(rng)


@pytest.fixture
def ordered_deck():
    """An unshuffled deck, suit-major and rank-minor."""
    return Deck.ordered()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand(make_cards("A♠", "K♥"))


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand(make_cards("A♠", "6♥"))


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand(make_cards("10♠", "6♥"))


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return Hand(make_cards("8♠", "8♥"))


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand(make_cards("10♠", "6♥", "K♣"))


@pytest.fixture
def basic_strategy():
    """Basic strategy tables."""
    return BasicStrategy()


@pytest.fixture
def session(rng):
    """A new training session."""
    return TrainingSession(rng=rng)


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=2, max_cards=5):
    """Generate a random hand's cards."""
    return tuple(draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards)))
