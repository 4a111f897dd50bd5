"""Move popularity and outcome statistics for a position."""

from __future__ import annotations

from chessdb.db.query_executor import QueryExecutor
from chessdb.db.select_query import SelectQuery
from chessdb.position_key import PositionDescriptor, PositionKey, position_key
from chessdb.results import RESULT_COUNTERS


def _counter(code: int) -> str:
    return f"COUNT(*) FILTER (WHERE result = {code})"


def _counter_columns() -> tuple[str, ...]:
    counters = tuple(f"{_counter(code)} AS {name}" for name, code in RESULT_COUNTERS)
    total = " + ".join(_counter(code) for _, code in RESULT_COUNTERS)
    return (*counters, f"{total} AS total_count")


def matched_moves_query(key: PositionKey) -> SelectQuery:
    """Return ``(result, candidate_move)`` for every move matching ``key``."""
    query = SelectQuery(
        source="moves AS m",
        columns=("g.result AS result", f"{key.candidate_column} AS candidate_move"),
    ).join("JOIN games AS g ON g.id = m.game_id")
    return key.narrow(query)


def popular_moves_query(descriptor: PositionDescriptor) -> SelectQuery:
    """Return per-candidate outcome counts, most played first."""
    matched = matched_moves_query(position_key(descriptor))
    return (
        SelectQuery.derived(matched, "counts")
        .select("candidate_move", *_counter_columns())
        .grouped("candidate_move")
        .order_by("total_count DESC", "candidate_move ASC")
    )


class PopularMoves:
    def __init__(self, executor: QueryExecutor) -> None:
        self._executor = executor

    def for_position(self, descriptor: PositionDescriptor) -> list[dict[str, object]]:
        return self._executor.fetch_all(popular_moves_query(descriptor))
