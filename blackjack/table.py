"""Blackjack table: per-player sessions over a session store."""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from blackjack.cards import Card, CardSource, InfiniteDeck
from blackjack.errors import NoActiveSession, SessionAlreadyActive
from blackjack.game.events import EventEmitter, EventHandler, EventType
from blackjack.game.round import BlackjackRound
from blackjack.hand import Hand, Outcome
from blackjack.store import InMemorySessionStore, SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayResult:
    """Snapshot of a player's table after an operation."""

    player_key: str
    player: Hand
    dealer: Hand
    outcome: Outcome | None = None

    @property
    def active(self) -> bool:
        """Whether the session is still waiting for hit or stand."""
        return self.outcome is None

    @property
    def dealer_showing(self) -> Card | None:
        """The dealer's face-up card."""
        return self.dealer.upcard

    @property
    def visible_dealer_cards(self) -> list[Card]:
        """Dealer cards the player may see: the upcard until the round ends."""
        if self.active:
            return self.dealer.cards[:1]
        return list(self.dealer.cards)

    @classmethod
    def from_round(cls, game: BlackjackRound) -> "PlayResult":
        return cls(
            player_key=game.player_key,
            player=game.player.copy(),
            dealer=game.dealer.copy(),
            outcome=game.outcome,
        )


class BlackjackTable:
    """
    Runs blackjack sessions, at most one active per player key.

    The table owns its store, deck and event emitter, so independent tables
    never share state. Operations on the same key are serialized.
    """

    def __init__(
        self,
        store: SessionStore | None = None,
        deck: CardSource | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        """
        Initialize a table.

        Args:
            store: Where active sessions live (in-memory if not provided)
            deck: Card source (an infinite deck if not provided)
            events: Emitter every round reports to
        """
        self.store = store or InMemorySessionStore()
        self.deck = deck or InfiniteDeck()
        self.events = events or EventEmitter()
        self._locks: dict[str, tuple[threading.Lock, int]] = {}
        self._locks_guard = threading.Lock()

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events from every round at this table."""
        self.events.subscribe(handler, event_type)

    @contextmanager
    def _player_lock(self, player_key: str) -> Iterator[None]:
        """
        Hold the player's lock for the duration of an operation.

        An entry lives only while some thread holds or waits for it.
        """
        with self._locks_guard:
            lock, users = self._locks.get(player_key, (threading.Lock(), 0))
            self._locks[player_key] = (lock, users + 1)

        try:
            with lock:
                yield
        finally:
            with self._locks_guard:
                lock, users = self._locks[player_key]
                if users == 1:
                    del self._locks[player_key]
                else:
                    self._locks[player_key] = (lock, users - 1)

    def _load(self, player_key: str) -> BlackjackRound:
        data = self.store.get(player_key)
        if data is None:
            logger.debug("no active session for %s", player_key)
            raise NoActiveSession(player_key)
        return BlackjackRound.from_dict(data, deck=self.deck, events=self.events)

    def _save(self, game: BlackjackRound) -> None:
        if game.finished:
            self.store.delete(game.player_key)
            logger.info("session %s resolved: %s", game.player_key, game.outcome)
        else:
            self.store.set(game.player_key, game.to_dict())

    def start(self, player_key: str) -> PlayResult:
        """
        Start a new game for the player.

        Raises:
            SessionAlreadyActive: The player has an unresolved game
        """
        with self._player_lock(player_key):
            game = BlackjackRound(player_key, deck=self.deck, events=self.events)

            # Claim the key before dealing so a concurrent start cannot slip in
            if not self.store.add(player_key, game.to_dict()):
                logger.debug("rejected start for %s: game in progress", player_key)
                raise SessionAlreadyActive(player_key)

            try:
                game.deal()
            except Exception:
                self.store.delete(player_key)
                raise

            logger.info("session %s started", player_key)
            self._save(game)
            return PlayResult.from_round(game)

    def hit(self, player_key: str) -> PlayResult:
        """
        Draw a card for the player.

        Raises:
            NoActiveSession: The player has no game in progress
        """
        with self._player_lock(player_key):
            game = self._load(player_key)
            game.hit()
            self._save(game)
            return PlayResult.from_round(game)

    def stand(self, player_key: str) -> PlayResult:
        """
        End the player's turn and let the dealer play it out.

        Raises:
            NoActiveSession: The player has no game in progress
        """
        with self._player_lock(player_key):
            game = self._load(player_key)
            game.stand()
            self._save(game)
            return PlayResult.from_round(game)

    def peek(self, player_key: str) -> PlayResult:
        """
        Return the player's active game without changing it.

        Raises:
            NoActiveSession: The player has no game in progress
        """
        with self._player_lock(player_key):
            return PlayResult.from_round(self._load(player_key))

    def active_players(self) -> list[str]:
        """Keys of all players with a game in progress."""
        return self.store.keys()
