"""Round state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Round state machine states.

    Flow: DEALING → PLAYER_TURN → DEALER_TURN → RESOLVED
    """

    # Cards being dealt
    DEALING = auto()

    # Player hits or stands
    PLAYER_TURN = auto()

    # Dealer draws to 17
    DEALER_TURN = auto()

    # Outcome decided, session is removed
    RESOLVED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

