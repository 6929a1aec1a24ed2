"""Application settings read from environment variables."""

import os
import secrets
from dataclasses import dataclass, field
from typing import Literal

STORAGE_BACKENDS = ("memory", "file", "redis")


def _env(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default))


def _env_int(name: str, default: int):
    return field(default_factory=lambda: int(os.getenv(name, str(default))))


def _env_flag(name: str, default: bool):
    return field(
        default_factory=lambda: os.getenv(name, str(default)).lower() == "true"
    )


def _parse_cors_origins() -> list[str]:
    """Split the comma separated CORS_ORIGINS variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _default_stats_file() -> str:
    return os.getenv(
        "BEST_STREAK_FILE",
        os.path.join(os.path.expanduser("~"), ".strategy_trainer_stats.json"),
    )


@dataclass(frozen=True)
class CORSConfig:
    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    enabled: bool = _env_flag("RATE_LIMIT_ENABLED", True)
    requests_per_minute: int = _env_int("RATE_LIMIT_RPM", 60)


@dataclass(frozen=True)
class SecurityConfig:
    """Secret used to sign session ids; random per process unless set."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY") or secrets.token_urlsafe(32)
    )


@dataclass(frozen=True)
class RedisConfig:
    host: str = _env("REDIS_HOST", "localhost")
    port: int = _env_int("REDIS_PORT", 6379)
    db: int = _env_int("REDIS_DB", 0)
    password: str | None = field(default_factory=lambda: os.getenv("REDIS_PASSWORD"))

    @property
    def url(self) -> str:
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


@dataclass(frozen=True)
class StorageConfig:
    """Where the best streak survives between runs."""

    backend: Literal["memory", "file", "redis"] = field(
        default_factory=lambda: os.getenv("BEST_STREAK_BACKEND", "file").lower()  # type: ignore[return-value]
    )
    file_path: str = field(default_factory=_default_stats_file)
    key: str = _env("BEST_STREAK_KEY", "best_streak")

    def __post_init__(self) -> None:
        if self.backend not in STORAGE_BACKENDS:
            raise ValueError(f"Unknown best streak backend: {self.backend}")


@dataclass(frozen=True)
class LogConfig:
    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class AppConfig:
    """All settings for the trainer API."""

    debug: bool = _env_flag("DEBUG", False)
    host: str = _env("HOST", "0.0.0.0")
    port: int = _env_int("PORT", 8000)
    session_ttl: int = 3600  # seconds

    redis: RedisConfig = field(default_factory=RedisConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LogConfig = field(default_factory=LogConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


config = AppConfig()
