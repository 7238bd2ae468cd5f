"""Blackjack table core - presentation-agnostic."""

from blackjack.cards import Card, InfiniteDeck, Rank, Suit, draw_card
from blackjack.dealer import play_dealer
from blackjack.errors import BlackjackError, NoActiveSession, SessionAlreadyActive
from blackjack.hand import Hand, Outcome, hand_value
from blackjack.table import BlackjackTable, PlayResult

__all__ = [
    "Card",
    "InfiniteDeck",
    "Rank",
    "Suit",
    "draw_card",
    "play_dealer",
    "BlackjackError",
    "NoActiveSession",
    "SessionAlreadyActive",
    "Hand",
    "Outcome",
    "hand_value",
    "BlackjackTable",
    "PlayResult",
]
