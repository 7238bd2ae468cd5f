"""Player tokens and the process-wide blackjack table."""

import logging

from fastapi import Header, HTTPException
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from typing import Annotated

from api.stats import StatsRecorder
from blackjack.game.events import EventType
from blackjack.store import create_session_store
from blackjack.table import BlackjackTable
from config import config

logger = logging.getLogger(__name__)

# Player tokens outlive single games; a day matches a chat session well enough
TOKEN_MAX_AGE = 24 * 3600


class PlayerSigner:
    """Sign and verify player keys using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key, salt="player")

    def sign(self, player_key: str) -> str:
        """Create a signed token from a player key."""
        return self._serializer.dumps(player_key)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract the player key from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to TOKEN_MAX_AGE)

        Returns:
            The player key if valid, None otherwise
        """
        max_age = max_age or TOKEN_MAX_AGE
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global instances
_player_signer: PlayerSigner | None = None
_table: BlackjackTable | None = None
_stats: StatsRecorder | None = None


def get_player_signer() -> PlayerSigner:
    """Get or create the player signer."""
    global _player_signer
    if _player_signer is None:
        _player_signer = PlayerSigner()
    return _player_signer


def get_stats() -> StatsRecorder:
    """Get or create the outcome statistics recorder."""
    global _stats
    if _stats is None:
        _stats = StatsRecorder()
    return _stats


def get_table() -> BlackjackTable:
    """Get or create the blackjack table, wired to the statistics recorder."""
    global _table
    if _table is None:
        store = create_session_store(
            backend=config.session.backend,
            redis_url=config.redis.url,
            ttl=config.session.ttl,
        )
        _table = BlackjackTable(store=store)
        _table.subscribe(get_stats().record, EventType.ROUND_ENDED)
        logger.info("Blackjack table ready (%s)", type(store).__name__)
    return _table


def get_player_key(
    token: Annotated[str, Header(alias="X-Player-Token")],
) -> str:
    """Resolve the player key from the X-Player-Token header."""
    player_key = get_player_signer().unsign(token)
    if player_key is None:
        raise HTTPException(status_code=401, detail="Invalid or expired player token")
    return player_key
