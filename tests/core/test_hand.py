"""Tests for Hand evaluation."""

import itertools

from hypothesis import given
from hypothesis import strategies as st

from blackjack.cards import Card, Rank, Suit
from blackjack.hand import Hand, Outcome, evaluate_hands, evaluate_natural, hand_value
from conftest import card_lists, make_hand


class TestHandValue:
    """Tests for hand_value."""

    def test_empty_hand(self, empty_hand):
        """Test empty hand properties."""
        assert len(empty_hand) == 0
        assert empty_hand.value == 0
        assert hand_value([]) == 0
        assert not empty_hand.is_soft
        assert not empty_hand.is_blackjack
        assert not empty_hand.is_busted
        assert empty_hand.upcard is None

    def test_add_card(self, empty_hand):
        """Test adding cards to hand."""
        empty_hand.add_card(Card(Rank.TEN, Suit.SPADES))
        assert len(empty_hand) == 1
        assert empty_hand.value == 10

    def test_hard_hand_value(self, hard_16_hand):
        """Test hard hand value calculation."""
        assert hard_16_hand.value == 16
        assert not hard_16_hand.is_soft

    def test_soft_hand_value(self, soft_17_hand):
        """Test soft hand value calculation."""
        assert soft_17_hand.value == 17
        assert soft_17_hand.is_soft

    def test_blackjack(self, blackjack_hand):
        """Test blackjack detection."""
        assert blackjack_hand.is_blackjack
        assert blackjack_hand.value == 21

    def test_not_blackjack_three_cards(self):
        """Test that 21 with 3+ cards is not blackjack."""
        hand = make_hand("7 7 7")
        assert hand.value == 21
        assert not hand.is_blackjack

    def test_bust(self):
        """Test bust detection."""
        hand = make_hand("10 6 K")
        assert hand.is_busted
        assert hand.value == 26

    def test_soft_to_hard_transition(self):
        """Test ace switching from 11 to 1."""
        hand = make_hand("A")
        assert hand.value == 11
        assert hand.is_soft

        hand.add_card(Card.from_string("5H"))
        assert hand.value == 16
        assert hand.is_soft

        hand.add_card(Card.from_string("8C"))
        assert hand.value == 14
        assert not hand.is_soft

    def test_multiple_aces(self):
        """Test hand with multiple aces."""
        assert make_hand("A A").value == 12
        assert make_hand("A A A").value == 13
        assert make_hand("A A A 9").value == 12
        assert make_hand("A A 9").value == 21

    def test_all_aces_as_one_bust(self):
        """Test that a bust with aces reports the all-ones total."""
        assert make_hand("A K Q 5").value == 26

    def test_face_cards_count_ten(self):
        """Test J/Q/K values."""
        assert make_hand("J Q K").value == 30

    def test_str(self, blackjack_hand):
        """Test display string."""
        assert str(blackjack_hand) == "A♠ K♥ (21)"

    def test_copy_is_independent(self, hard_16_hand):
        """Test that a copy does not share its card list."""
        copy = hard_16_hand.copy()
        copy.add_card(Card.from_string("2"))
        assert len(hard_16_hand) == 2
        assert len(copy) == 3


class TestHandValueProperties:
    """Property-based checks of the ace adjustment."""

    @given(card_lists, st.randoms())
    def test_order_does_not_matter(self, cards, random):
        """Test that value is invariant to card order."""
        shuffled = list(cards)
        random.shuffle(shuffled)
        assert hand_value(shuffled) == hand_value(cards)

    @given(card_lists)
    def test_no_aces_is_plain_sum(self, cards):
        """Test that an ace-free hand is the sum of its face values."""
        cards = [c for c in cards if not c.is_ace]
        assert hand_value(cards) == sum(c.value for c in cards)

    @given(card_lists)
    def test_best_total(self, cards):
        """Test against every 1/11 assignment of the aces."""
        aces = sum(1 for c in cards if c.is_ace)
        others = sum(c.value for c in cards if not c.is_ace)
        totals = {
            others + sum(choice)
            for choice in itertools.product((1, 11), repeat=aces)
        }
        safe = [t for t in totals if t <= 21]

        if safe:
            assert hand_value(cards) == max(safe)
        else:
            assert hand_value(cards) == others + aces
            assert hand_value(cards) > 21


class TestEvaluateHands:
    """Tests for hand comparison."""

    def test_player_wins_higher_value(self):
        """Test player wins with higher value."""
        assert evaluate_hands(make_hand("10 9"), make_hand("10 8")) is Outcome.PLAYER_WIN

    def test_dealer_wins_higher_value(self):
        """Test dealer wins with higher value."""
        assert evaluate_hands(make_hand("10 7"), make_hand("10 9")) is Outcome.DEALER_WIN

    def test_push(self):
        """Test push (tie)."""
        assert evaluate_hands(make_hand("10 8"), make_hand("10 8")) is Outcome.PUSH

    def test_player_bust_loses(self):
        """Test player busting loses."""
        assert evaluate_hands(make_hand("10 6 K"), make_hand("10 7")) is Outcome.PLAYER_BUST

    def test_dealer_bust_player_wins(self):
        """Test dealer busting means player wins."""
        assert evaluate_hands(make_hand("10 7"), make_hand("10 6 K")) is Outcome.PLAYER_WIN

    def test_both_bust_player_loses(self):
        """Test both busting means player loses."""
        assert evaluate_hands(make_hand("10 6 K"), make_hand("10 6 Q")) is Outcome.PLAYER_BUST

    def test_three_card_21_ties_two_card_21(self):
        """Test that totals alone decide a stand, naturals are not special here."""
        assert evaluate_hands(make_hand("7 7 7"), make_hand("A K")) is Outcome.PUSH

    def test_natural_against_dealer_21(self):
        """Test natural push."""
        assert evaluate_natural(make_hand("A K"), make_hand("A Q")) is Outcome.PUSH

    def test_natural_wins(self):
        """Test natural blackjack."""
        assert evaluate_natural(make_hand("A K"), make_hand("9 8")) is Outcome.PLAYER_BLACKJACK


class TestOutcome:
    """Tests for outcome classification."""

    def test_wins_and_losses(self):
        assert Outcome.PLAYER_BLACKJACK.player_won
        assert Outcome.PLAYER_WIN.player_won
        assert Outcome.PLAYER_BUST.player_lost
        assert Outcome.DEALER_WIN.player_lost
        assert not Outcome.PUSH.player_won
        assert not Outcome.PUSH.player_lost
