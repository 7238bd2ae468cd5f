"""Card model and the infinite-deck card source."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Protocol


class Suit(Enum):
    """Card suits. Display only, never scored."""

    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """The thirteen card ranks."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the base point value (Ace = 11, face cards = 10)."""
        if self == Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


_SUIT_ALIASES = {
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit = Suit.SPADES

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the base blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """
        Create a card from a string like '10H', 'A♠', 'Kc' or a bare rank 'Q'.

        A bare rank gets the default suit.
        """
        s = s.strip().upper()
        if not s:
            raise ValueError("Invalid card string: empty")

        if s[-1] in _SUIT_ALIASES and len(s) > 1:
            rank_str, suit = s[:-1], _SUIT_ALIASES[s[-1]]
        else:
            rank_str, suit = s, Suit.SPADES

        if rank_str == "T":
            rank_str = "10"
        try:
            rank = Rank(rank_str)
        except ValueError:
            raise ValueError(f"Invalid rank: {rank_str}") from None

        return cls(rank, suit)


class CardSource(Protocol):
    """Anything the table can draw cards from."""

    def draw(self) -> Card: ...


def draw_card(rng: Random) -> Card:
    """Draw a uniformly random card with replacement."""
    return Card(rng.choice(list(Rank)), rng.choice(list(Suit)))


class InfiniteDeck:
    """
    Card source with no depletion.

    Every draw is independent of the previous ones, so there is nothing to
    shuffle or reset.
    """

    def __init__(self, rng: Random | None = None) -> None:
        self._rng = rng or Random()

    def draw(self) -> Card:
        """Draw a card."""
        return draw_card(self._rng)
