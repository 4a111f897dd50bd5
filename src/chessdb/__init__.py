"""chessdb: game and position search with move-popularity statistics."""

from chessdb.filter_chain import Filter, FilterChain
from chessdb.position_key import PositionDescriptor, descriptor_from_fen
from chessdb.repository import ChessRepository

__all__ = [
    "ChessRepository",
    "Filter",
    "FilterChain",
    "PositionDescriptor",
    "descriptor_from_fen",
]
