"""One player's blackjack round, driven by a state machine."""

from typing import Any

from transitions import Machine

from blackjack.cards import Card, CardSource, Rank, Suit
from blackjack.dealer import play_dealer
from blackjack.errors import NoActiveSession
from blackjack.game.events import EventEmitter, EventType
from blackjack.game.state import GameState
from blackjack.hand import Hand, Outcome, evaluate_hands, evaluate_natural


class BlackjackRound:
    """
    A single round between one player and the dealer.

    The round owns both hands and nothing else: cards come from the injected
    deck and every step is reported through the injected event emitter.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal_done", "source": "dealing", "dest": "player_turn"},
        {"trigger": "natural", "source": "dealing", "dest": "resolved"},
        {"trigger": "player_action", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "player_busts", "source": "player_turn", "dest": "resolved"},
        {"trigger": "player_stands", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "resolved"},
    ]

    def __init__(
        self,
        player_key: str,
        deck: CardSource,
        events: EventEmitter | None = None,
        state: GameState = GameState.DEALING,
        player: Hand | None = None,
        dealer: Hand | None = None,
        outcome: Outcome | None = None,
    ) -> None:
        """
        Initialize a round.

        Args:
            player_key: Identity of the player owning the round
            deck: Card source for every draw
            events: Emitter to report to (a private one if not provided)
            state: State to resume from
            player: Player hand to resume with
            dealer: Dealer hand to resume with
            outcome: Outcome of an already resolved round
        """
        self.player_key = player_key
        self.deck = deck
        self.events = events or EventEmitter()
        self.player = player or Hand()
        self.dealer = dealer or Hand()
        self.outcome = outcome

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=state.name.lower(),
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> GameState:
        """Get current round state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore[attr-defined]

    @property
    def finished(self) -> bool:
        """Whether the round has reached an outcome."""
        return self.state is GameState.RESOLVED

    def deal(self) -> Outcome | None:
        """
        Deal two cards to the player, then two to the dealer.

        Returns:
            The outcome if the player was dealt a natural, None otherwise
        """
        if self.state is not GameState.DEALING:
            raise RuntimeError(f"Cannot deal in state {self.state}")

        self._deal_card(self.player)
        self._deal_card(self.player)
        self._deal_card(self.dealer)
        self._deal_card(self.dealer, face_up=False)

        self.events.emit_new(
            EventType.ROUND_STARTED,
            player_key=self.player_key,
            player_value=self.player.value,
            dealer_showing=str(self.dealer.upcard),
        )

        if self.player.value == 21:
            self.events.emit_new(EventType.PLAYER_BLACKJACK, player_key=self.player_key)
            self._reveal_hole_card()
            self.natural()
            return self._resolve(evaluate_natural(self.player, self.dealer))

        self.deal_done()
        return None

    def hit(self) -> Outcome | None:
        """
        Player takes another card.

        Returns:
            ``Outcome.PLAYER_BUST`` if the card busted the player, None otherwise
        """
        self._require_player_turn()

        self._deal_card(self.player)
        self.events.emit_new(
            EventType.PLAYER_HIT,
            player_key=self.player_key,
            hand_value=self.player.value,
        )

        if self.player.is_busted:
            self.events.emit_new(
                EventType.PLAYER_BUSTS,
                player_key=self.player_key,
                hand_value=self.player.value,
            )
            self.player_busts()
            return self._resolve(Outcome.PLAYER_BUST)

        self.player_action()
        return None

    def stand(self) -> Outcome:
        """Player stands; the dealer plays out and the round resolves."""
        self._require_player_turn()

        self.events.emit_new(
            EventType.PLAYER_STAND,
            player_key=self.player_key,
            hand_value=self.player.value,
        )
        self.player_stands()

        self._reveal_hole_card()
        for card in play_dealer(self.dealer, self.deck):
            self.events.emit_new(
                EventType.DEALER_HITS,
                card=str(card),
                hand_value=self.dealer.value,
            )

        if self.dealer.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer.value)

        self.dealer_done()
        return self._resolve(evaluate_hands(self.player, self.dealer))

    def _require_player_turn(self) -> None:
        if self.state is not GameState.PLAYER_TURN:
            raise NoActiveSession(self.player_key)

    def _deal_card(self, hand: Hand, face_up: bool = True) -> Card:
        """Deal a card to a hand."""
        card = self.deck.draw()
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand="dealer" if hand is self.dealer else "player",
            hand_value=hand.value if face_up or hand is not self.dealer else None,
        )
        return card

    def _reveal_hole_card(self) -> None:
        if len(self.dealer.cards) >= 2:
            self.events.emit_new(
                EventType.DEALER_REVEALS,
                card=str(self.dealer.cards[1]),
                hand_value=self.dealer.value,
            )

    def _resolve(self, outcome: Outcome) -> Outcome:
        self.outcome = outcome
        self.events.emit_new(
            EventType.ROUND_ENDED,
            player_key=self.player_key,
            outcome=outcome,
            player_value=self.player.value,
            dealer_value=self.dealer.value,
        )
        return outcome

    def to_dict(self) -> dict[str, Any]:
        """Serialize the round for session storage."""
        return {
            "player_key": self.player_key,
            "state": self.state.name,
            "player": [_serialize_card(c) for c in self.player.cards],
            "dealer": [_serialize_card(c) for c in self.dealer.cards],
            "outcome": self.outcome.value if self.outcome else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        deck: CardSource,
        events: EventEmitter | None = None,
    ) -> "BlackjackRound":
        """Restore a round from session storage."""
        return cls(
            player_key=data["player_key"],
            deck=deck,
            events=events,
            state=GameState[data["state"]],
            player=Hand(cards=[_deserialize_card(c) for c in data["player"]]),
            dealer=Hand(cards=[_deserialize_card(c) for c in data["dealer"]]),
            outcome=Outcome(data["outcome"]) if data.get("outcome") else None,
        )


def _serialize_card(card: Card) -> dict[str, str]:
    """Serialize a card to a dict."""
    return {"rank": card.rank.value, "suit": card.suit.name}


def _deserialize_card(data: dict[str, str]) -> Card:
    """Deserialize a card from a dict."""
    return Card(Rank(data["rank"]), Suit[data["suit"]])
