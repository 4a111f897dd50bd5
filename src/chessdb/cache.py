"""In-memory fetch-or-compute result cache."""

from __future__ import annotations

import time as time_module
from collections import OrderedDict
from collections.abc import Callable, Hashable
from threading import Lock
from typing import TypeVar

from chessdb.config import DEFAULT_CACHE_MAX_ENTRIES, DEFAULT_CACHE_TTL_S

T = TypeVar("T")

_MISS = object()


class ResultCache:
    """TTL-bounded LRU cache guarded by a lock."""

    def __init__(
        self,
        ttl_s: float = DEFAULT_CACHE_TTL_S,
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time_module.time,
    ) -> None:
        self._ttl_s = ttl_s
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[Hashable, tuple[float, object]] = OrderedDict()
        self._lock = Lock()

    def get(self, key: Hashable, default: object = None) -> object:
        now = self._clock()
        with self._lock:
            cached = self._entries.get(key)
            if cached is None:
                return default
            cached_at, value = cached
            if now - cached_at > self._ttl_s:
                self._entries.pop(key, None)
                return default
            self._entries.move_to_end(key)
            return value

    def set(self, key: Hashable, value: object) -> None:
        with self._lock:
            self._entries[key] = (self._clock(), value)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def fetch(self, key: Hashable, compute: Callable[[], T]) -> T:
        """Return the cached value for ``key``, computing and storing it on a miss."""
        value = self.get(key, _MISS)
        if value is not _MISS:
            return value  # type: ignore[return-value]
        computed = compute()
        self.set(key, computed)
        return computed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
