"""Run SelectQuery values against a DB-API connection."""

from __future__ import annotations

from chessdb.db.connection import placeholder_for
from chessdb.db.select_query import SelectQuery
from chessdb.utils.logger import get_logger

logger = get_logger(__name__)


class QueryExecutor:
    """Execute read-only queries, one cursor per statement."""

    def __init__(self, conn: object) -> None:
        self._conn = conn
        self._placeholder = placeholder_for(conn)

    def fetch_all(self, query: SelectQuery) -> list[dict[str, object]]:
        """Return every row of ``query`` as a dictionary."""
        sql, params = query.render(self._placeholder)
        logger.debug("Executing %s with %s", sql, params)
        cursor = self._conn.cursor()
        try:
            cursor.execute(sql, list(params))
            columns = [desc[0] for desc in cursor.description]
            return [dict(zip(columns, row, strict=True)) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def fetch_one(self, query: SelectQuery) -> dict[str, object] | None:
        rows = self.fetch_all(query.limit(1))
        return rows[0] if rows else None

    def fetch_total(self, query: SelectQuery) -> int:
        """Return the ``total`` column of a query built with ``count()``."""
        row = self.fetch_one(query)
        return int(row["total"]) if row else 0
