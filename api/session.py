"""Signed session ids and storage for serialized trainers."""

import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any
from uuid import uuid4

import redis.asyncio as redis
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from config import config
from trainer.storage import (
    BestStreakStore,
    CachedBestStreakStore,
    create_best_streak_store,
)

logger = logging.getLogger(__name__)

SessionData = dict[str, Any]


class SessionSigner:
    """Sign session ids so clients cannot invent or guess them."""

    SALT = "strategy-trainer-session"

    def __init__(self, secret_key: str | None = None) -> None:
        self._serializer = URLSafeTimedSerializer(
            secret_key or config.security.secret_key, salt=self.SALT
        )

    def sign(self, session_id: str) -> str:
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Recover the session id from a token.

        Args:
            token: Value of the ``X-Session-ID`` header
            max_age: Oldest acceptable token in seconds (session TTL if None)

        Returns:
            The session id, or None if the token is forged or expired
        """
        try:
            return self._serializer.loads(token, max_age=max_age or config.session_ttl)
        except (BadSignature, SignatureExpired):
            return None


_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class SessionStore(ABC):
    """Key/value store for session documents with a time to live."""

    @abstractmethod
    async def get(self, session_id: str) -> SessionData | None: ...

    @abstractmethod
    async def set(self, session_id: str, data: SessionData, ttl: int | None = None) -> None: ...

    @abstractmethod
    async def delete(self, session_id: str) -> None: ...


class InMemorySessionStore(SessionStore):
    """Process-local store used when Redis is not reachable."""

    def __init__(self) -> None:
        # session id -> (document, monotonic expiry)
        self._sessions: dict[str, tuple[SessionData, float]] = {}

    async def get(self, session_id: str) -> SessionData | None:
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        data, expires_at = entry
        if expires_at <= time.monotonic():
            del self._sessions[session_id]
            return None
        return data

    async def set(self, session_id: str, data: SessionData, ttl: int | None = None) -> None:
        self.purge_expired()
        self._sessions[session_id] = (data, time.monotonic() + (ttl or config.session_ttl))

    async def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        """Drop expired sessions and return how many were removed."""
        now = time.monotonic()
        expired = [sid for sid, (_, expires_at) in self._sessions.items() if expires_at <= now]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)


class RedisSessionStore(SessionStore):
    """Sessions as JSON strings under ``strategy_trainer:session:<id>``."""

    PREFIX = "strategy_trainer:session:"

    def __init__(self, redis_client: redis.Redis) -> None:
        self._redis = redis_client

    async def get(self, session_id: str) -> SessionData | None:
        raw = await self._redis.get(self.PREFIX + session_id)
        return None if raw is None else json.loads(raw)

    async def set(self, session_id: str, data: SessionData, ttl: int | None = None) -> None:
        await self._redis.set(
            self.PREFIX + session_id,
            json.dumps(data),
            ex=ttl or config.session_ttl,
        )

    async def delete(self, session_id: str) -> None:
        await self._redis.delete(self.PREFIX + session_id)


_session_store: SessionStore | None = None


async def get_session_store() -> SessionStore:
    """Connect to Redis once, falling back to process memory."""
    global _session_store
    if _session_store is None:
        try:
            client = redis.from_url(config.redis.url)
            await client.ping()
            _session_store = RedisSessionStore(client)
        except (redis.RedisError, OSError) as exc:
            logger.info("Redis unavailable (%s), using in-memory sessions", exc)
            _session_store = InMemorySessionStore()
    return _session_store


# One record for the whole app, read once and shared by every session
_best_streak_store: BestStreakStore | None = None


def get_best_streak_store() -> BestStreakStore:
    global _best_streak_store
    if _best_streak_store is None:
        _best_streak_store = CachedBestStreakStore(
            create_best_streak_store(config.storage, config.redis)
        )
    return _best_streak_store


async def create_session(data: SessionData | None = None) -> str:
    """Store a new session document and return its signed token."""
    store = await get_session_store()
    token = get_session_signer().sign(str(uuid4()))
    await store.set(token, data or {})
    return token


def extract_session_id(token: str) -> str | None:
    """Return the raw id behind a signed token, or None if it is not valid."""
    return get_session_signer().unsign(token)
