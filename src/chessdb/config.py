from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATA_DIR = Path(os.getenv("CHESSDB_DATA_DIR", "data"))
DEFAULT_CACHE_TTL_S = 300
DEFAULT_CACHE_MAX_ENTRIES = 256


def _env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(name: str, default: int) -> int:
    return int(_env(name, str(default)))


@dataclass(slots=True)
class PostgresSettings:
    """PostgreSQL connection settings."""

    dsn: str | None = field(default_factory=lambda: _env("CHESSDB_POSTGRES_DSN"))
    host: str | None = field(default_factory=lambda: _env("CHESSDB_POSTGRES_HOST"))
    port: int = field(default_factory=lambda: _env_int("CHESSDB_POSTGRES_PORT", 5432))
    db: str | None = field(default_factory=lambda: _env("CHESSDB_POSTGRES_DB"))
    user: str | None = field(default_factory=lambda: _env("CHESSDB_POSTGRES_USER"))
    password: str | None = field(default_factory=lambda: _env("CHESSDB_POSTGRES_PASSWORD"))
    sslmode: str = field(default_factory=lambda: _env("CHESSDB_POSTGRES_SSLMODE", "disable"))
    connect_timeout_s: int = field(
        default_factory=lambda: _env_int("CHESSDB_POSTGRES_CONNECT_TIMEOUT", 5)
    )

    @property
    def is_configured(self) -> bool:
        """True when a DSN, or at least a host and database name, is set."""
        return bool(self.dsn) or bool(self.host and self.db)


@dataclass(slots=True)
class Settings:
    """Central configuration for storage, caching and logging."""

    duckdb_path: Path = field(
        default_factory=lambda: Path(
            _env("CHESSDB_DUCKDB_PATH", str(DEFAULT_DATA_DIR / "chessdb.duckdb"))
        )
    )
    postgres: PostgresSettings = field(default_factory=PostgresSettings)
    cache_ttl_s: int = field(
        default_factory=lambda: _env_int("CHESSDB_CACHE_TTL_S", DEFAULT_CACHE_TTL_S)
    )
    cache_max_entries: int = field(
        default_factory=lambda: _env_int("CHESSDB_CACHE_MAX_ENTRIES", DEFAULT_CACHE_MAX_ENTRIES)
    )
    log_level: str = field(default_factory=lambda: _env("CHESSDB_LOG_LEVEL", "INFO"))


def get_settings() -> Settings:
    """Return a Settings instance reflecting the current environment."""
    load_dotenv()
    return Settings()
