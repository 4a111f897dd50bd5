"""Lock-guarded, build-once memoization for zero-argument factories."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from threading import Lock
from typing import TypeVar

T = TypeVar("T")


def build_once(factory: Callable[[], T]) -> Callable[[], T]:
    """Return a wrapper that calls ``factory`` at most once per process.

    Concurrent first callers block on a lock while the single build runs and
    then all receive the same instance.
    """
    lock = Lock()
    built: list[T] = []

    @wraps(factory)
    def wrapper() -> T:
        if built:
            return built[0]
        with lock:
            if not built:
                built.append(factory())
        return built[0]

    return wrapper
