"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


class TokenRequest(BaseModel):
    """Request a player token."""

    player_key: str = Field(..., min_length=1, max_length=100, description="Caller identity, e.g. a chat user ID")


class TokenResponse(BaseModel):
    """Signed player token, sent back as X-Player-Token."""

    token: str


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    value: int


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    value: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool
    hidden_cards: int = 0


class PlayResponse(BaseModel):
    """A player's table after start, hit or stand."""

    active: bool
    outcome: Literal["player_blackjack", "player_win", "player_bust", "dealer_win", "push"] | None
    player_hand: HandResponse
    dealer_hand: HandResponse
    dealer_showing: CardResponse | None


class ActiveSessionsResponse(BaseModel):
    """Count of games in progress."""

    active: int


class StatsResponse(BaseModel):
    """Outcome statistics."""

    games_played: int
    wins: int
    losses: int
    pushes: int
    blackjacks: int
    busts: int
    win_rate: float


class StatsSummaryResponse(StatsResponse):
    """Outcome statistics across all players."""

    players: int
