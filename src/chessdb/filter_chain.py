"""Compose optional query narrowing from a sparse criteria mapping.

A :class:`Filter` pairs a key path into the criteria with a pure function
that narrows a query by the value found there. A :class:`FilterChain` applies
its filters in order and skips every filter whose key path is missing, so an
empty criteria mapping leaves the query untouched.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

Q = TypeVar("Q")

_MISSING = object()


def lookup(criteria: Mapping[str, Any] | None, key_path: tuple[str, ...]) -> object:
    """Return the value at ``key_path`` or the module's missing sentinel."""
    value: object = criteria
    for key in key_path:
        if not isinstance(value, Mapping) or key not in value:
            return _MISSING
        value = value[key]
    return value


def is_missing(value: object) -> bool:
    return value is _MISSING


@dataclass(frozen=True)
class Filter(Generic[Q]):
    """One optional narrowing step keyed by a path into the criteria."""

    key_path: tuple[str, ...]
    narrow: Callable[[Q, Any], Q]

    def apply(self, query: Q, criteria: Mapping[str, Any] | None) -> Q:
        value = lookup(criteria, self.key_path)
        if is_missing(value):
            return query
        return self.narrow(query, value)


@dataclass(frozen=True)
class FilterChain(Generic[Q]):
    """An ordered, immutable sequence of filters."""

    filters: tuple[Filter[Q], ...] = ()

    def extend(self, unit: Filter[Q]) -> FilterChain[Q]:
        return FilterChain((*self.filters, unit))

    def compose(self, other: FilterChain[Q]) -> FilterChain[Q]:
        """Return a chain running this chain's filters, then ``other``'s."""
        return FilterChain((*self.filters, *other.filters))

    def apply(self, query: Q, criteria: Mapping[str, Any] | None) -> Q:
        for unit in self.filters:
            query = unit.apply(query, criteria)
        return query

    @property
    def key_paths(self) -> tuple[tuple[str, ...], ...]:
        return tuple(unit.key_path for unit in self.filters)

    def __iter__(self) -> Iterator[Filter[Q]]:
        return iter(self.filters)

    def __len__(self) -> int:
        return len(self.filters)


def chain_of(
    filters: Iterable[tuple[tuple[str, ...], Callable[[Q, Any], Q]]],
) -> FilterChain[Q]:
    """Build a chain from ``(key_path, narrow)`` pairs."""
    chain: FilterChain[Q] = FilterChain()
    for key_path, narrow in filters:
        chain = chain.extend(Filter(key_path, narrow))
    return chain
