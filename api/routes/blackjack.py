"""Blackjack API endpoints."""

from fastapi import APIRouter, Depends
from typing import Annotated

from api.schemas import (
    ActiveSessionsResponse,
    CardResponse,
    HandResponse,
    PlayResponse,
    TokenRequest,
    TokenResponse,
)
from api.session import get_player_key, get_player_signer, get_table
from blackjack.cards import Card
from blackjack.hand import Hand
from blackjack.table import BlackjackTable, PlayResult

router = APIRouter()

Table = Annotated[BlackjackTable, Depends(get_table)]
PlayerKey = Annotated[str, Depends(get_player_key)]


def _card_to_response(card: Card) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(rank=str(card.rank), suit=str(card.suit), value=card.value)


def _hand_to_response(hand: Hand, hidden_cards: int = 0) -> HandResponse:
    """Convert a Hand to HandResponse."""
    return HandResponse(
        cards=[_card_to_response(c) for c in hand.cards],
        value=hand.value,
        is_soft=hand.is_soft,
        is_blackjack=hand.is_blackjack,
        is_busted=hand.is_busted,
        hidden_cards=hidden_cards,
    )


def _play_response(result: PlayResult) -> PlayResponse:
    """Convert a PlayResult to PlayResponse, hiding the hole card while active."""
    visible = result.visible_dealer_cards
    dealer_showing = result.dealer_showing

    return PlayResponse(
        active=result.active,
        outcome=result.outcome.value if result.outcome else None,
        player_hand=_hand_to_response(result.player),
        dealer_hand=_hand_to_response(
            Hand(cards=visible),
            hidden_cards=len(result.dealer) - len(visible),
        ),
        dealer_showing=_card_to_response(dealer_showing) if dealer_showing else None,
    )


@router.post("/token")
async def issue_token(request: TokenRequest) -> TokenResponse:
    """Issue a signed token for a player key."""
    return TokenResponse(token=get_player_signer().sign(request.player_key))


@router.post("/start")
def start_game(table: Table, player_key: PlayerKey) -> PlayResponse:
    """Deal a new game."""
    return _play_response(table.start(player_key))


@router.post("/hit")
def hit(table: Table, player_key: PlayerKey) -> PlayResponse:
    """Draw a card."""
    return _play_response(table.hit(player_key))


@router.post("/stand")
def stand(table: Table, player_key: PlayerKey) -> PlayResponse:
    """Stand and let the dealer play."""
    return _play_response(table.stand(player_key))


@router.get("/state")
def get_state(table: Table, player_key: PlayerKey) -> PlayResponse:
    """Get the player's game in progress."""
    return _play_response(table.peek(player_key))


@router.get("/sessions")
def active_sessions(table: Table) -> ActiveSessionsResponse:
    """Count games in progress."""
    return ActiveSessionsResponse(active=len(table.active_players()))
