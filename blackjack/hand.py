"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

from blackjack.cards import Card


class Outcome(Enum):
    """Terminal outcome of a round, from the player's side."""

    PLAYER_BLACKJACK = "player_blackjack"
    PLAYER_WIN = "player_win"
    PLAYER_BUST = "player_bust"
    DEALER_WIN = "dealer_win"
    PUSH = "push"

    def __str__(self) -> str:
        return self.value

    @property
    def player_won(self) -> bool:
        """Check if the outcome counts as a player win."""
        return self in (Outcome.PLAYER_BLACKJACK, Outcome.PLAYER_WIN)

    @property
    def player_lost(self) -> bool:
        """Check if the outcome counts as a player loss."""
        return self in (Outcome.PLAYER_BUST, Outcome.DEALER_WIN)


def hand_value(cards: Iterable[Card]) -> int:
    """
    Calculate the best value of a set of cards.

    Returns the highest value that doesn't bust, or the lowest bust value.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        total += card.value

    # Reduce aces from 11 to 1 as needed
    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return total


@dataclass
class Hand:
    """A blackjack hand with value calculation."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def copy(self) -> "Hand":
        """Return an independent copy of the hand."""
        return Hand(cards=list(self.cards))

    @property
    def value(self) -> int:
        """Best hand value."""
        return hand_value(self.cards)

    @property
    def is_soft(self) -> bool:
        """
        Check if the hand is soft (has an ace counted as 11).

        A hand is soft if it contains an ace that can be counted as 11
        without busting.
        """
        if not any(card.is_ace for card in self.cards):
            return False

        total_hard = sum(1 if card.is_ace else card.value for card in self.cards)
        return total_hard + 10 <= 21

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return len(self.cards) == 2 and self.value == 21

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    @property
    def upcard(self) -> Card | None:
        """The first card, the only one shown while the dealer's hand is hidden."""
        return self.cards[0] if self.cards else None

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        return f"{cards_str} ({self.value})"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


def evaluate_hands(player_hand: Hand, dealer_hand: Hand) -> Outcome:
    """
    Compare finished player and dealer hands.

    The player bust is checked first; a busted player loses even when the
    dealer busts too.
    """
    if player_hand.is_busted:
        return Outcome.PLAYER_BUST

    if dealer_hand.is_busted:
        return Outcome.PLAYER_WIN

    player_value = player_hand.value
    dealer_value = dealer_hand.value

    if player_value > dealer_value:
        return Outcome.PLAYER_WIN
    if dealer_value > player_value:
        return Outcome.DEALER_WIN
    return Outcome.PUSH


def evaluate_natural(player_hand: Hand, dealer_hand: Hand) -> Outcome:
    """Resolve a natural on the deal: push against a dealer 21, else blackjack."""
    if dealer_hand.value == 21:
        return Outcome.PUSH
    return Outcome.PLAYER_BLACKJACK
