"""Round state machine and events."""

from blackjack.game.events import EventEmitter, EventType, GameEvent
from blackjack.game.round import BlackjackRound
from blackjack.game.state import GameState

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "BlackjackRound",
    "GameState",
]
