"""Tests for session management."""

import json
import time
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio

import api.session as session_module
from api.session import (
    InMemorySessionStore,
    RedisSessionStore,
    SessionSigner,
    create_session,
    extract_session_id,
    get_best_streak_store,
    get_session_signer,
)
from config import AppConfig, StorageConfig
from trainer.storage import (
    CachedBestStreakStore,
    InMemoryBestStreakStore,
    JsonFileBestStreakStore,
)


class TestSessionSigner:
    """Tests for SessionSigner class."""

    def test_round_trip(self):
        """Test that unsign recovers the signed session ID."""
        signer = SessionSigner(secret_key="test-secret")

        token = signer.sign("session-456")

        assert token != "session-456"
        assert signer.unsign(token, max_age=3600) == "session-456"

    def test_garbage_token_returns_none(self):
        signer = SessionSigner(secret_key="test-secret")
        assert signer.unsign("not-a-token", max_age=3600) is None

    def test_wrong_secret_returns_none(self):
        """Test that a token from another server is rejected."""
        token = SessionSigner(secret_key="secret-one").sign("session")
        assert SessionSigner(secret_key="secret-two").unsign(token, max_age=3600) is None

    def test_expired_token_returns_none(self):
        """Test that tokens older than max_age are rejected."""
        signer = SessionSigner(secret_key="test-secret")
        token = signer.sign("session")

        with patch("time.time", return_value=time.time() + 7200):
            assert signer.unsign(token, max_age=3600) is None

    def test_signer_is_singleton(self, monkeypatch):
        monkeypatch.setattr(session_module, "_session_signer", None)
        assert get_session_signer() is get_session_signer()


class TestInMemorySessionStore:
    """Tests for InMemorySessionStore class."""

    @pytest_asyncio.fixture
    async def store(self):
        return InMemorySessionStore()

    @pytest.mark.asyncio
    async def test_set_get_delete(self, store):
        """Test the basic session lifecycle."""
        await store.set("s1", {"trainer": {"state": "waiting"}}, ttl=3600)

        assert await store.get("s1") == {"trainer": {"state": "waiting"}}

        await store.delete("s1")
        assert await store.get("s1") is None
        await store.delete("s1")

    @pytest.mark.asyncio
    async def test_expired_session_is_dropped(self, store):
        """Test that expired sessions are not returned."""
        await store.set("s1", {"data": 1}, ttl=-1)

        assert await store.get("s1") is None
        assert "s1" not in store._sessions

    @pytest.mark.asyncio
    async def test_purge_expired(self, store):
        """Test bulk removal of expired sessions."""
        await store.set("long", {}, ttl=3600)
        store._sessions["short-1"] = ({}, 0.0)
        store._sessions["short-2"] = ({}, 0.0)

        assert store.purge_expired() == 2

        assert list(store._sessions) == ["long"]

    @pytest.mark.asyncio
    async def test_set_purges_expired_sessions(self, store):
        """Test that storing a session drops ones that were never read again."""
        await store.set("abandoned", {}, ttl=-1)

        await store.set("fresh", {}, ttl=3600)

        assert "abandoned" not in store._sessions
        assert await store.get("fresh") == {}


class TestRedisSessionStore:
    """Tests for RedisSessionStore with a mocked asyncio client."""

    @pytest.mark.asyncio
    async def test_set_uses_prefixed_key_and_ttl(self):
        client = AsyncMock()

        await RedisSessionStore(client).set("abc", {"trainer": {}}, ttl=60)

        client.set.assert_awaited_once_with(
            "strategy_trainer:session:abc", json.dumps({"trainer": {}}), ex=60
        )

    @pytest.mark.asyncio
    async def test_get(self):
        client = AsyncMock()
        client.get.return_value = json.dumps({"created_at": 1})
        store = RedisSessionStore(client)

        assert await store.get("abc") == {"created_at": 1}

        client.get.return_value = None
        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_delete(self):
        client = AsyncMock()
        await RedisSessionStore(client).delete("abc")
        client.delete.assert_awaited_once_with("strategy_trainer:session:abc")


class TestModuleFunctions:
    """Tests for module-level session functions."""

    @pytest.mark.asyncio
    async def test_create_session_returns_signed_id(self, monkeypatch):
        """Test that create_session stores data under a signed token."""
        store = InMemorySessionStore()
        monkeypatch.setattr(session_module, "_session_store", store)

        token = await create_session({"test": "data"})

        assert len(extract_session_id(token)) == 36
        assert await store.get(token) == {"test": "data"}

    def test_extract_session_id_invalid_returns_none(self):
        assert extract_session_id("invalid-token") is None

    def test_best_streak_store_is_singleton(self, monkeypatch):
        """Test the shared best streak store is built once."""
        monkeypatch.setattr(session_module, "_best_streak_store", None)
        monkeypatch.setattr(
            session_module, "config", AppConfig(storage=StorageConfig(backend="memory"))
        )

        first = get_best_streak_store()

        assert isinstance(first, CachedBestStreakStore)
        assert isinstance(first.backend, InMemoryBestStreakStore)
        assert get_best_streak_store() is first

    def test_best_streak_store_follows_config(self, monkeypatch, tmp_path):
        path = str(tmp_path / "stats.json")
        monkeypatch.setattr(session_module, "_best_streak_store", None)
        monkeypatch.setattr(
            session_module,
            "config",
            AppConfig(storage=StorageConfig(backend="file", file_path=path)),
        )

        store = get_best_streak_store()

        assert isinstance(store.backend, JsonFileBestStreakStore)
        assert store.backend.path == path
