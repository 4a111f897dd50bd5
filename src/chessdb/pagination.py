"""Offset pagination as a filter chain."""

from __future__ import annotations

from chessdb.db.select_query import SelectQuery
from chessdb.filter_chain import Filter, FilterChain
from chessdb.utils.build_once import build_once

PAGE_SIZE = 20
OFFSET_KEY_PATH = ("pagination", "offset")


def _apply_offset(query: SelectQuery, offset: object) -> SelectQuery:
    return query.offset(offset)


@build_once
def pagination_chain() -> FilterChain[SelectQuery]:
    """Return the single-filter chain reading ``pagination.offset``."""
    return FilterChain().extend(Filter(OFFSET_KEY_PATH, _apply_offset))


def paged(query: SelectQuery) -> SelectQuery:
    return query.limit(PAGE_SIZE)
