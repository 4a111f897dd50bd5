"""Open the database connection the repository reads through."""

from __future__ import annotations

from typing import Any

import duckdb
import psycopg2
from psycopg2.extensions import connection as PgConnection  # noqa: N812

from chessdb.config import PostgresSettings, Settings
from chessdb.utils.logger import get_logger

logger = get_logger(__name__)

Connection = duckdb.DuckDBPyConnection | PgConnection


def _connection_kwargs(settings: PostgresSettings) -> dict[str, Any] | None:
    if settings.dsn:
        return {"dsn": settings.dsn}
    if not settings.host or not settings.db:
        return None
    return {
        "host": settings.host,
        "port": settings.port,
        "dbname": settings.db,
        "user": settings.user,
        "password": settings.password,
        "sslmode": settings.sslmode,
        "connect_timeout": settings.connect_timeout_s,
    }


def get_connection(settings: Settings) -> Connection:
    """Return a Postgres connection when configured, else a DuckDB one."""
    if settings.postgres.is_configured:
        logger.info("Connecting to Postgres at %s", settings.postgres.host or "dsn")
        conn = psycopg2.connect(**_connection_kwargs(settings.postgres))
        conn.autocommit = True
        return conn
    db_path = settings.duckdb_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Opening DuckDB at %s", db_path)
    return duckdb.connect(str(db_path))


def placeholder_for(conn: object) -> str:
    """Return the parameter placeholder used by the connection's driver."""
    if isinstance(conn, PgConnection):
        return "%s"
    return "?"
