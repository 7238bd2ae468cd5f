"""Tests for Card and the infinite deck."""

import pytest
from collections import Counter
from random import Random

from blackjack.cards import Card, InfiniteDeck, Rank, Suit, draw_card


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Test card blackjack values."""
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.NINE, Suit.HEARTS).value == 9
        assert Card(Rank.TEN, Suit.HEARTS).value == 10
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 11

    def test_thirteen_ranks(self):
        """Test the rank universe."""
        assert len(Rank) == 13
        assert [str(r) for r in Rank] == [
            "A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K",
        ]

    def test_card_is_ace(self):
        """Test ace detection."""
        assert Card(Rank.ACE, Suit.SPADES).is_ace
        assert not Card(Rank.KING, Suit.SPADES).is_ace

    def test_card_from_string(self):
        """Test creating cards from strings."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("2H") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string("10D") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("Kc") == Card(Rank.KING, Suit.CLUBS)
        assert Card.from_string("TH") == Card(Rank.TEN, Suit.HEARTS)

    def test_card_from_string_with_symbols(self):
        """Test creating cards from strings with suit symbols."""
        assert Card.from_string("A♠") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)

    def test_card_from_bare_rank(self):
        """Test that a bare rank gets the default suit."""
        assert Card.from_string("Q").rank == Rank.QUEEN
        assert Card.from_string("10").rank == Rank.TEN

    def test_card_from_invalid_string(self):
        """Test invalid card strings."""
        with pytest.raises(ValueError):
            Card.from_string("")
        with pytest.raises(ValueError):
            Card.from_string("1S")
        with pytest.raises(ValueError):
            Card.from_string("ZZ")

    def test_card_str(self):
        """Test string representation."""
        assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "10♥"


class TestInfiniteDeck:
    """Tests for drawing with replacement."""

    def test_draw_returns_card(self, rng):
        """Test that a draw yields a card."""
        assert isinstance(draw_card(rng), Card)

    def test_same_seed_same_cards(self):
        """Test that draws are deterministic given the random source."""
        a = InfiniteDeck(Random(7))
        b = InfiniteDeck(Random(7))
        assert [a.draw() for _ in range(20)] == [b.draw() for _ in range(20)]

    def test_never_runs_out(self, rng):
        """Test that the deck has no depletion."""
        deck = InfiniteDeck(rng)
        cards = [deck.draw() for _ in range(500)]
        assert len(cards) == 500

    def test_duplicates_allowed(self, rng):
        """Test that more than four of a rank can be drawn."""
        deck = InfiniteDeck(rng)
        counts = Counter(deck.draw().rank for _ in range(1000))
        assert max(counts.values()) > 4

    def test_every_rank_drawn(self, rng):
        """Test that the draw covers all thirteen ranks."""
        deck = InfiniteDeck(rng)
        ranks = {deck.draw().rank for _ in range(1000)}
        assert ranks == set(Rank)

    def test_roughly_uniform(self, rng):
        """Test that ranks are drawn uniformly."""
        deck = InfiniteDeck(rng)
        n = 13000
        counts = Counter(deck.draw().rank for _ in range(n))
        for rank in Rank:
            assert 800 < counts[rank] < 1200
