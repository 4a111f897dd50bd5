"""Normalize a position descriptor into the rows it selects.

The starting position is matched structurally (every game's first ply) and
its candidate move is the ply itself. Any other position is matched on the
full ``(fen_position, castling_availability, active_colour, en_passant)``
tuple and its candidate move is the one played next.
"""

from __future__ import annotations

from dataclasses import dataclass

import chess

from chessdb.db.select_query import SelectQuery
from chessdb.position_queries import match_active_colour, match_column

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

WHITE_TO_MOVE = 0
BLACK_TO_MOVE = 1

# Castling availability bits, in FEN order.
CASTLING_BITS: tuple[tuple[chess.Color, bool, int], ...] = (
    (chess.WHITE, True, 1),
    (chess.WHITE, False, 2),
    (chess.BLACK, True, 4),
    (chess.BLACK, False, 8),
)


@dataclass(frozen=True)
class PositionDescriptor:
    """A board state as supplied by a caller."""

    fen: str
    castling_availability: int | None = None
    active_colour: int | None = None
    en_passant: int | None = None


@dataclass(frozen=True)
class InitialPosition:
    """The canonical starting position, before any ply."""

    candidate_column = "m.san"

    def narrow(self, query: SelectQuery) -> SelectQuery:
        return query.where("m.fullmove_number = ?", 1)

    @property
    def cache_key(self) -> tuple[object, ...]:
        return ("initial",)


@dataclass(frozen=True)
class ExactPosition:
    """Any position other than the start, matched on its full state."""

    fen: str
    castling_availability: int | None
    active_colour: int | None
    en_passant: int | None

    candidate_column = "m.next_san"

    def narrow(self, query: SelectQuery) -> SelectQuery:
        query = query.where("m.fen_position = ?", self.fen)
        query = match_column(query, "m.castling_availability", self.castling_availability)
        if self.active_colour is None:
            query = query.where("m.active_colour IS NULL")
        else:
            query = match_active_colour(query, self.active_colour)
        query = match_column(query, "m.en_passant", self.en_passant)
        return query.where("m.next_san IS NOT NULL")

    @property
    def cache_key(self) -> tuple[object, ...]:
        return ("exact", self.fen, self.castling_availability, self.active_colour, self.en_passant)


PositionKey = InitialPosition | ExactPosition


def position_key(descriptor: PositionDescriptor) -> PositionKey:
    if descriptor.fen == STARTING_POSITION_FEN:
        return InitialPosition()
    return ExactPosition(
        fen=descriptor.fen,
        castling_availability=descriptor.castling_availability,
        active_colour=descriptor.active_colour,
        en_passant=descriptor.en_passant,
    )


def castling_bitmask(board: chess.Board) -> int:
    mask = 0
    for colour, kingside, bit in CASTLING_BITS:
        if kingside and board.has_kingside_castling_rights(colour):
            mask |= bit
        elif not kingside and board.has_queenside_castling_rights(colour):
            mask |= bit
    return mask


def descriptor_from_fen(fen: str) -> PositionDescriptor:
    """Split a full FEN record into a position descriptor.

    Raises ``ValueError`` when python-chess cannot parse the record.
    """
    board = chess.Board(fen.strip())
    en_passant = None if board.ep_square is None else chess.square_file(board.ep_square)
    return PositionDescriptor(
        fen=board.board_fen(),
        castling_availability=castling_bitmask(board),
        active_colour=WHITE_TO_MOVE if board.turn == chess.WHITE else BLACK_TO_MOVE,
        en_passant=en_passant,
    )
