"""Immutable SELECT statement builder."""

from __future__ import annotations

from dataclasses import dataclass, replace

QMARK = "?"


@dataclass(frozen=True)
class SelectQuery:
    """A SELECT statement assembled from immutable parts.

    Every builder method returns a new instance, so a query value can be
    shared between threads and narrowed independently by each caller.
    Clauses are written with ``?`` placeholders; :meth:`render` swaps them
    for the driver's placeholder.
    """

    source: str
    columns: tuple[str, ...] = ("*",)
    joins: tuple[str, ...] = ()
    conditions: tuple[str, ...] = ()
    params: tuple[object, ...] = ()
    source_params: tuple[object, ...] = ()
    group_by: tuple[str, ...] = ()
    ordering: tuple[str, ...] = ()
    limit_value: int | None = None
    offset_value: int | None = None

    @classmethod
    def derived(cls, inner: SelectQuery, alias: str) -> SelectQuery:
        """Return a query selecting from ``inner`` as a derived table."""
        inner_sql, inner_params = inner.render(QMARK)
        return cls(source=f"({inner_sql}) AS {alias}", source_params=inner_params)

    def select(self, *columns: str) -> SelectQuery:
        return replace(self, columns=columns)

    def join(self, clause: str) -> SelectQuery:
        return replace(self, joins=(*self.joins, clause))

    def where(self, clause: str, *params: object) -> SelectQuery:
        """Return a query further restricted by ``clause`` (AND-combined)."""
        return replace(
            self,
            conditions=(*self.conditions, clause),
            params=(*self.params, *params),
        )

    def grouped(self, *columns: str) -> SelectQuery:
        return replace(self, group_by=(*self.group_by, *columns))

    def order_by(self, *columns: str) -> SelectQuery:
        return replace(self, ordering=(*self.ordering, *columns))

    def limit(self, value: int) -> SelectQuery:
        return replace(self, limit_value=value)

    def offset(self, value: int) -> SelectQuery:
        return replace(self, offset_value=value)

    def count(self) -> SelectQuery:
        """Return a query counting the rows this query would match."""
        return replace(
            self,
            columns=("COUNT(*) AS total",),
            ordering=(),
            limit_value=None,
            offset_value=None,
        )

    def render(self, placeholder: str = QMARK) -> tuple[str, tuple[object, ...]]:
        """Return the SQL text and its bound parameters."""
        parts = [f"SELECT {', '.join(self.columns)}", f"FROM {self.source}"]
        parts.extend(self.joins)
        params: list[object] = [*self.source_params, *self.params]
        if self.conditions:
            parts.append("WHERE " + " AND ".join(self.conditions))
        if self.group_by:
            parts.append("GROUP BY " + ", ".join(self.group_by))
        if self.ordering:
            parts.append("ORDER BY " + ", ".join(self.ordering))
        if self.limit_value is not None:
            parts.append("LIMIT ?")
            params.append(self.limit_value)
        if self.offset_value is not None:
            parts.append("OFFSET ?")
            params.append(self.offset_value)
        sql = " ".join(parts)
        if placeholder != QMARK:
            sql = sql.replace(QMARK, placeholder)
        return sql, tuple(params)
