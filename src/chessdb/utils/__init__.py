"""Utility exports for the chessdb package."""

from .build_once import build_once
from .logger import get_logger, set_level

__all__ = [
    "build_once",
    "get_logger",
    "set_level",
]
