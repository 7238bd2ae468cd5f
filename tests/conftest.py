"""Pytest fixtures for blackjack table tests."""

import pytest
from random import Random

from hypothesis import strategies as st

from blackjack.cards import Card, Rank, Suit
from blackjack.game.events import EventEmitter
from blackjack.hand import Hand
from blackjack.store import InMemorySessionStore
from blackjack.table import BlackjackTable


class StackedDeck:
    """Deck that deals a fixed sequence of cards, in order."""

    def __init__(self, cards: str = "") -> None:
        self._cards = [Card.from_string(c) for c in cards.split()]
        self.drawn = 0

    def push(self, cards: str) -> None:
        """Queue more cards to be dealt."""
        self._cards.extend(Card.from_string(c) for c in cards.split())

    def draw(self) -> Card:
        if not self._cards:
            raise IndexError("Stacked deck ran out of cards")
        self.drawn += 1
        return self._cards.pop(0)


def make_hand(cards: str) -> Hand:
    """Build a hand from a string like 'A K 5'."""
    return Hand(cards=[Card.from_string(c) for c in cards.split()])


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck():
    """An empty stacked deck; tests push the cards they need."""
    return StackedDeck()


@pytest.fixture
def events():
    """A fresh event emitter."""
    return EventEmitter()


@pytest.fixture
def store():
    """An in-memory session store."""
    return InMemorySessionStore()


@pytest.fixture
def table(store, deck, events):
    """A table dealing from the stacked deck."""
    return BlackjackTable(store=store, deck=deck, events=events)


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand(cards=[Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)])


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand(cards=[Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand(cards=[Card(Rank.TEN, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


# Hypothesis strategies for property-based testing
cards = st.builds(Card, st.sampled_from(list(Rank)), st.sampled_from(list(Suit)))
card_lists = st.lists(cards, min_size=0, max_size=12)
