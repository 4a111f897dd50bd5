"""Position search and count over moves joined to their games."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from chessdb.db.query_executor import QueryExecutor
from chessdb.db.select_query import SelectQuery
from chessdb.filter_chain import FilterChain, chain_of
from chessdb.pagination import paged, pagination_chain
from chessdb.utils.build_once import build_once
from chessdb.utils.logger import get_logger

logger = get_logger(__name__)

MOVE_COLUMNS = (
    "m.id",
    "m.game_id",
    "m.fen_position",
    "m.san",
    "m.next_san",
    "CAST(m.active_colour AS INTEGER) AS active_colour",
    "m.fullmove_number",
    "m.castling_availability",
    "m.halfmove_clock",
    "m.en_passant",
)

POSITION_GAME_COLUMNS = (
    "g.white",
    "g.black",
    "g.result",
    "g.white_elo",
    "g.black_elo",
    "g.event",
    "g.site",
    'g."date"',
    "g.eco",
)

Narrow = Callable[[SelectQuery, Any], SelectQuery]


def base_move_query() -> SelectQuery:
    return SelectQuery(source="moves AS m", columns=MOVE_COLUMNS)


def base_position_query() -> SelectQuery:
    return (
        base_move_query()
        .select(*MOVE_COLUMNS, *POSITION_GAME_COLUMNS)
        .join("JOIN games AS g ON g.id = m.game_id")
    )


def match_column(query: SelectQuery, column: str, value: Any) -> SelectQuery:
    """Narrow by equality, matching SQL NULL when ``value`` is None."""
    if value is None:
        return query.where(f"{column} IS NULL")
    return query.where(f"{column} = ?", value)


def match_active_colour(query: SelectQuery, value: Any) -> SelectQuery:
    # active_colour is stored as a bit; compare textual forms.
    return query.where("CAST(m.active_colour AS VARCHAR) = ?", str(value))


def _castling_availability(query: SelectQuery, value: Any) -> SelectQuery:
    return match_column(query, "m.castling_availability", value)


def _fen_position(query: SelectQuery, value: Any) -> SelectQuery:
    return query.where("m.fen_position = ?", value)


def _en_passant(query: SelectQuery, value: Any) -> SelectQuery:
    return match_column(query, "m.en_passant", value)


def position_filters() -> list[tuple[tuple[str, ...], Narrow]]:
    """Return the position filter catalog as ``(key_path, narrow)`` pairs."""
    return [
        (("position", "active_colour"), match_active_colour),
        (("position", "castling_availability"), _castling_availability),
        (("position", "fen_position"), _fen_position),
        (("position", "en_passant"), _en_passant),
    ]


@build_once
def position_filter_chain() -> FilterChain[SelectQuery]:
    chain = chain_of(position_filters())
    logger.debug("Built position filter chain with %d filters", len(chain))
    return chain


def position_search_query(
    criteria: Mapping[str, Any] | None,
    chain: FilterChain[SelectQuery] | None = None,
) -> SelectQuery:
    """Return one page of positions matching ``criteria``, by move id."""
    chain = position_filter_chain() if chain is None else chain
    filters = pagination_chain().compose(chain)
    return filters.apply(paged(base_position_query().order_by("m.id")), criteria)


def position_count_query(
    criteria: Mapping[str, Any] | None,
    chain: FilterChain[SelectQuery] | None = None,
) -> SelectQuery:
    chain = position_filter_chain() if chain is None else chain
    return chain.apply(base_position_query(), criteria).count()


def moves_in_game_query(game_id: int) -> SelectQuery:
    """Return every move of a game in play order."""
    return (
        base_move_query()
        .where("m.game_id = ?", game_id)
        .order_by("m.fullmove_number", "m.active_colour")
    )


class PositionQueries:
    """Run position searches and counts through an executor."""

    def __init__(
        self,
        executor: QueryExecutor,
        chain: FilterChain[SelectQuery] | None = None,
    ) -> None:
        self._executor = executor
        self._chain = position_filter_chain() if chain is None else chain

    def search(self, criteria: Mapping[str, Any] | None) -> list[dict[str, object]]:
        return self._executor.fetch_all(position_search_query(criteria, self._chain))

    def count(self, criteria: Mapping[str, Any] | None) -> int:
        return self._executor.fetch_total(position_count_query(criteria, self._chain))

    def moves_in_game(self, game_id: int) -> list[dict[str, object]]:
        return self._executor.fetch_all(moves_in_game_query(game_id))
