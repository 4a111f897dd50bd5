"""Read-only repository over the games and moves tables."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from chessdb.config import Settings
from chessdb.db.connection import get_connection
from chessdb.db.query_executor import QueryExecutor
from chessdb.db.select_query import SelectQuery
from chessdb.filter_chain import FilterChain
from chessdb.game_queries import GameQueries, game_filter_chain
from chessdb.popular_moves import PopularMoves
from chessdb.position_key import PositionDescriptor
from chessdb.position_queries import PositionQueries, position_filter_chain

Criteria = Mapping[str, Any] | None


@dataclass(frozen=True)
class QueryChains:
    """Filter chains shared by every repository in the process."""

    games: FilterChain[SelectQuery]
    positions: FilterChain[SelectQuery]


def default_query_chains() -> QueryChains:
    """Return the process-wide game and position chains."""
    return QueryChains(games=game_filter_chain(), positions=position_filter_chain())


class ChessRepository:
    """Single entry point for game, position and popularity reads."""

    def __init__(self, conn: object, *, chains: QueryChains | None = None) -> None:
        self._conn = conn
        self._chains = chains or default_query_chains()
        executor = QueryExecutor(conn)
        self._games = GameQueries(executor, self._chains.games)
        self._positions = PositionQueries(executor, self._chains.positions)
        self._popular_moves = PopularMoves(executor)

    @classmethod
    def from_settings(cls, settings: Settings) -> ChessRepository:
        return cls(get_connection(settings))

    @property
    def connection(self) -> object:
        return self._conn

    def game(self, game_id: int) -> dict[str, object] | None:
        """Return one game by id, or None."""
        return self._games.game(game_id)

    def moves_in_game(self, game_id: int) -> list[dict[str, object]]:
        """Return a game's moves ordered by fullmove number and side to move."""
        return self._positions.moves_in_game(game_id)

    def game_search(self, criteria: Criteria) -> list[dict[str, object]]:
        return self._games.search(criteria)

    def game_count(self, criteria: Criteria) -> int:
        return self._games.count(criteria)

    def position_search(self, criteria: Criteria) -> list[dict[str, object]]:
        return self._positions.search(criteria)

    def position_count(self, criteria: Criteria) -> int:
        return self._positions.count(criteria)

    def popular_moves(self, descriptor: PositionDescriptor) -> list[dict[str, object]]:
        """Return outcome counts per candidate move, most played first."""
        return self._popular_moves.for_position(descriptor)

    def close(self) -> None:
        self._conn.close()
