"""Game search and count."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from chessdb.db.query_executor import QueryExecutor
from chessdb.db.select_query import SelectQuery
from chessdb.filter_chain import FilterChain, chain_of
from chessdb.pagination import paged, pagination_chain
from chessdb.results import result_code
from chessdb.utils.build_once import build_once
from chessdb.utils.logger import get_logger

logger = get_logger(__name__)

GAME_COLUMNS = (
    "g.id",
    "g.event",
    "g.site",
    'g."date"',
    'g."round"',
    "g.white",
    "g.black",
    "g.result",
    "g.white_elo",
    "g.black_elo",
    "g.eco",
    "g.event_date",
)

Narrow = Callable[[SelectQuery, Any], SelectQuery]


def base_game_query() -> SelectQuery:
    return SelectQuery(source="games AS g", columns=GAME_COLUMNS)


def _equals(column: str) -> Narrow:
    def narrow(query: SelectQuery, value: Any) -> SelectQuery:
        return query.where(f"{column} = ?", value)

    return narrow


def _either_colour(query: SelectQuery, player: Any) -> SelectQuery:
    return query.where("(g.white = ? OR g.black = ?)", player, player)


def _minimum_elo(query: SelectQuery, elo: Any) -> SelectQuery:
    return query.where("g.white_elo >= ? AND g.black_elo >= ?", elo, elo)


def _maximum_elo(query: SelectQuery, elo: Any) -> SelectQuery:
    return query.where("g.white_elo <= ? AND g.black_elo <= ?", elo, elo)


def _from_date(query: SelectQuery, value: Any) -> SelectQuery:
    return query.where('g."date" >= ?', value)


def _to_date(query: SelectQuery, value: Any) -> SelectQuery:
    return query.where('g."date" <= ?', value)


def _result(query: SelectQuery, value: Any) -> SelectQuery:
    return query.where("g.result = ?", result_code(value))


def game_filters() -> list[tuple[tuple[str, ...], Narrow]]:
    """Return the game filter catalog as ``(key_path, narrow)`` pairs."""
    return [
        (("white",), _equals("g.white")),
        (("black",), _equals("g.black")),
        (("either_colour",), _either_colour),
        (("opponent",), _either_colour),
        (("minimum_elo",), _minimum_elo),
        (("maximum_elo",), _maximum_elo),
        (("event",), _equals("g.event")),
        (("site",), _equals("g.site")),
        (("from_date",), _from_date),
        (("to_date",), _to_date),
        (("round",), _equals('g."round"')),
        (("result",), _result),
        (("eco",), _equals("g.eco")),
    ]


@build_once
def game_filter_chain() -> FilterChain[SelectQuery]:
    chain = chain_of(game_filters())
    logger.debug("Built game filter chain with %d filters", len(chain))
    return chain


def game_search_query(
    criteria: Mapping[str, Any] | None,
    chain: FilterChain[SelectQuery] | None = None,
) -> SelectQuery:
    """Return one ordered page of games matching ``criteria``."""
    filters = pagination_chain().compose(game_filter_chain() if chain is None else chain)
    return filters.apply(paged(base_game_query().order_by("g.id")), criteria)


def game_count_query(
    criteria: Mapping[str, Any] | None,
    chain: FilterChain[SelectQuery] | None = None,
) -> SelectQuery:
    chain = game_filter_chain() if chain is None else chain
    return chain.apply(base_game_query(), criteria).count()


class GameQueries:
    """Run game searches and counts through an executor."""

    def __init__(
        self,
        executor: QueryExecutor,
        chain: FilterChain[SelectQuery] | None = None,
    ) -> None:
        self._executor = executor
        self._chain = game_filter_chain() if chain is None else chain

    def search(self, criteria: Mapping[str, Any] | None) -> list[dict[str, object]]:
        return self._executor.fetch_all(game_search_query(criteria, self._chain))

    def count(self, criteria: Mapping[str, Any] | None) -> int:
        return self._executor.fetch_total(game_count_query(criteria, self._chain))

    def game(self, game_id: int) -> dict[str, object] | None:
        return self._executor.fetch_one(base_game_query().where("g.id = ?", game_id))
