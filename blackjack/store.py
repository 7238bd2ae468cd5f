"""Session stores holding active rounds, keyed by player."""

import json
import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any

import redis

logger = logging.getLogger(__name__)

DEFAULT_TTL = 3600
CONNECT_TIMEOUT = 2.0


class SessionStore(ABC):
    """Abstract session store."""

    def __init__(self, ttl: int = DEFAULT_TTL) -> None:
        self.ttl = ttl

    @abstractmethod
    def get(self, key: str) -> dict[str, Any] | None:
        """Get session data."""
        ...

    @abstractmethod
    def add(self, key: str, data: dict[str, Any], ttl: int | None = None) -> bool:
        """
        Store session data only if no session exists for the key.

        Returns:
            True if the data was stored, False if the key was taken
        """
        ...

    @abstractmethod
    def set(self, key: str, data: dict[str, Any], ttl: int | None = None) -> None:
        """Set session data."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete session."""
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        """List keys of all live sessions."""
        ...

    def exists(self, key: str) -> bool:
        """Check if session exists."""
        return self.get(key) is not None


class InMemorySessionStore(SessionStore):
    """In-process session store. Contents are lost on restart."""

    def __init__(self, ttl: int = DEFAULT_TTL) -> None:
        super().__init__(ttl)
        self._sessions: dict[str, tuple[dict[str, Any], datetime]] = {}
        self._lock = threading.Lock()

    def _expiry(self, ttl: int | None) -> datetime:
        return datetime.now() + timedelta(seconds=ttl or self.ttl)

    def _live(self, key: str) -> dict[str, Any] | None:
        # Caller holds the lock
        entry = self._sessions.get(key)
        if entry is None:
            return None
        data, expiry = entry
        if expiry < datetime.now():
            del self._sessions[key]
            logger.debug("session %s expired", key)
            return None
        return data

    def get(self, key: str) -> dict[str, Any] | None:
        """Get session data."""
        with self._lock:
            return self._live(key)

    def add(self, key: str, data: dict[str, Any], ttl: int | None = None) -> bool:
        """Store session data only if no live session exists for the key."""
        with self._lock:
            if self._live(key) is not None:
                return False
            self._sessions[key] = (data, self._expiry(ttl))
            return True

    def set(self, key: str, data: dict[str, Any], ttl: int | None = None) -> None:
        """Set session data."""
        with self._lock:
            self._sessions[key] = (data, self._expiry(ttl))

    def delete(self, key: str) -> None:
        """Delete session."""
        with self._lock:
            self._sessions.pop(key, None)

    def keys(self) -> list[str]:
        """List keys of all live sessions."""
        with self._lock:
            return [key for key in list(self._sessions) if self._live(key) is not None]

    def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        with self._lock:
            expired = [key for key, (_, expiry) in self._sessions.items() if expiry < now]
            for key in expired:
                del self._sessions[key]
        return len(expired)


class RedisSessionStore(SessionStore):
    """Redis-backed session store, shareable between processes."""

    def __init__(self, redis_client: redis.Redis, ttl: int = DEFAULT_TTL) -> None:
        super().__init__(ttl)
        self._redis = redis_client
        self._prefix = "blackjack:session:"

    def _key(self, key: str) -> str:
        """Get Redis key for session."""
        return f"{self._prefix}{key}"

    def get(self, key: str) -> dict[str, Any] | None:
        """Get session data."""
        data = self._redis.get(self._key(key))
        if data is None:
            return None
        return json.loads(data)

    def add(self, key: str, data: dict[str, Any], ttl: int | None = None) -> bool:
        """Store session data only if the key is free (SET NX)."""
        stored = self._redis.set(
            self._key(key),
            json.dumps(data),
            ex=ttl or self.ttl,
            nx=True,
        )
        return bool(stored)

    def set(self, key: str, data: dict[str, Any], ttl: int | None = None) -> None:
        """Set session data."""
        self._redis.setex(self._key(key), ttl or self.ttl, json.dumps(data))

    def delete(self, key: str) -> None:
        """Delete session."""
        self._redis.delete(self._key(key))

    def exists(self, key: str) -> bool:
        """Check if session exists."""
        return self._redis.exists(self._key(key)) > 0

    def keys(self) -> list[str]:
        """List keys of all live sessions."""
        keys = []
        for raw in self._redis.scan_iter(match=f"{self._prefix}*"):
            name = raw.decode() if isinstance(raw, bytes) else raw
            keys.append(name[len(self._prefix):])
        return keys


def create_session_store(
    backend: str = "memory",
    redis_url: str | None = None,
    ttl: int = DEFAULT_TTL,
) -> SessionStore:
    """
    Build the configured session store.

    A Redis backend that cannot be reached falls back to the in-memory store.
    """
    if backend == "redis":
        if not redis_url:
            raise ValueError("Redis backend requires a URL")
        client = redis.Redis.from_url(redis_url, socket_connect_timeout=CONNECT_TIMEOUT)
        try:
            client.ping()
        except redis.RedisError as exc:
            logger.warning("Redis unavailable (%s), using in-memory sessions", exc)
        else:
            logger.info("Using Redis session store")
            return RedisSessionStore(client, ttl=ttl)
    elif backend != "memory":
        raise ValueError(f"Unknown session backend: {backend}")

    return InMemorySessionStore(ttl=ttl)
