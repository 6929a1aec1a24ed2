"""Persistence for the single best-streak record."""

import json
import logging
import os
from abc import ABC, abstractmethod

import redis

from config import StorageConfig, RedisConfig

logger = logging.getLogger(__name__)

DEFAULT_KEY = "best_streak"


class BestStreakStore(ABC):
    """
    Abstract best-streak store.

    Stores never raise on I/O problems: reads fall back to 0 and writes are
    best effort.
    """

    @abstractmethod
    def load(self) -> int:
        """Return the persisted best streak, or 0 if there is none."""
        ...

    @abstractmethod
    def save(self, value: int) -> None:
        """Overwrite the persisted best streak."""
        ...


class InMemoryBestStreakStore(BestStreakStore):
    """In-process store for tests and local development."""

    def __init__(self, initial: int = 0) -> None:
        self._value = initial

    def load(self) -> int:
        return self._value

    def save(self, value: int) -> None:
        self._value = value


class JsonFileBestStreakStore(BestStreakStore):
    """Best streak kept in a small JSON document on disk."""

    def __init__(self, path: str | None = None, key: str = DEFAULT_KEY) -> None:
        """
        Args:
            path: Path to the stats file. Defaults to
                ~/.strategy_trainer_stats.json
            key: Name of the record inside the document
        """
        if path is None:
            path = os.path.join(os.path.expanduser("~"), ".strategy_trainer_stats.json")
        self.path = path
        self.key = key

    def _read_document(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> int:
        value = self._read_document().get(self.key, 0)
        try:
            return max(int(value), 0)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed %r value in %s", self.key, self.path)
            return 0

    def save(self, value: int) -> None:
        data = self._read_document()
        data[self.key] = value
        try:
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as exc:
            logger.warning("Could not write %s: %s", self.path, exc)


class RedisBestStreakStore(BestStreakStore):
    """Redis-backed store using a synchronous client."""

    def __init__(self, redis_client: redis.Redis, key: str = DEFAULT_KEY) -> None:
        self._redis = redis_client
        self._key = f"strategy_trainer:{key}"

    def load(self) -> int:
        try:
            value = self._redis.get(self._key)
        except redis.RedisError as exc:
            logger.warning("Could not read best streak from Redis: %s", exc)
            return 0
        if value is None:
            return 0
        try:
            return max(int(value), 0)
        except ValueError:
            logger.warning("Ignoring malformed best streak in Redis: %r", value)
            return 0

    def save(self, value: int) -> None:
        try:
            self._redis.set(self._key, value)
        except redis.RedisError as exc:
            logger.warning("Could not write best streak to Redis: %s", exc)


class CachedBestStreakStore(BestStreakStore):
    """
    Read-once view over another store.

    The backing store is read on the first ``load`` only; later reads come
    from memory and writes go through to the backing store. Trackers that
    share one cached store see each other's records without further I/O.
    """

    def __init__(self, backend: BestStreakStore) -> None:
        self.backend = backend
        self._value: int | None = None

    def load(self) -> int:
        if self._value is None:
            self._value = self.backend.load()
        return self._value

    def save(self, value: int) -> None:
        self._value = value
        self.backend.save(value)


def create_best_streak_store(
    storage: StorageConfig,
    redis_config: RedisConfig | None = None,
) -> BestStreakStore:
    """
    Build the store selected by configuration.

    Falls back to an in-memory store when Redis is selected but unreachable.
    """
    if storage.backend == "file":
        logger.info("Persisting best streak to %s", storage.file_path)
        return JsonFileBestStreakStore(storage.file_path, key=storage.key)

    if storage.backend == "redis":
        redis_config = redis_config or RedisConfig()
        try:
            client = redis.Redis.from_url(redis_config.url)
            client.ping()
        except redis.RedisError as exc:
            logger.warning("Redis unavailable (%s), keeping best streak in memory", exc)
            return InMemoryBestStreakStore()
        logger.info("Persisting best streak to Redis at %s:%s", redis_config.host, redis_config.port)
        return RedisBestStreakStore(client, key=storage.key)

    return InMemoryBestStreakStore()
