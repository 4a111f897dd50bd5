"""Stored game result codes.

One table serves both the ``result`` search filter and the popular-moves
counters: 0 means black won, 1 means white won, 2 means a draw.
"""

from __future__ import annotations

BLACK_WON = 0
WHITE_WON = 1
DRAW = 2

RESULT_CODES: dict[str, int] = {
    "0-1": BLACK_WON,
    "1-0": WHITE_WON,
    "1/2-1/2": DRAW,
}

# (counter column, stored code) in output order.
RESULT_COUNTERS: tuple[tuple[str, int], ...] = (
    ("black_won", BLACK_WON),
    ("white_won", WHITE_WON),
    ("draw", DRAW),
)


def result_code(value: object) -> object:
    """Map a PGN result token to its stored code.

    Integer codes pass through. Tokens outside the table are returned as-is
    and left for the database to reject.
    """
    if isinstance(value, str):
        return RESULT_CODES.get(value.strip(), value)
    return value
