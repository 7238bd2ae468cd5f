"""Dealer play policy."""

from enum import Enum, auto

from blackjack.cards import Card, CardSource
from blackjack.hand import Hand

# House rule: the dealer stands on any 17, soft or hard.
DEALER_STANDS_ON = 17


class DealerState(Enum):
    """Dealer policy states."""

    DRAWING = auto()
    DONE = auto()


def dealer_state(hand: Hand) -> DealerState:
    """Return where the policy is for the given dealer hand."""
    if hand.value < DEALER_STANDS_ON:
        return DealerState.DRAWING
    return DealerState.DONE


def dealer_should_hit(hand: Hand) -> bool:
    """Determine if the dealer should hit."""
    return dealer_state(hand) is DealerState.DRAWING


def play_dealer(hand: Hand, deck: CardSource) -> list[Card]:
    """
    Draw for the dealer until the hand reaches 17 or more.

    Mutates ``hand`` and returns the drawn cards in order.
    """
    drawn: list[Card] = []
    while dealer_should_hit(hand):
        card = deck.draw()
        hand.add_card(card)
        drawn.append(card)
    return drawn
