"""DDL for the games and moves tables."""

from __future__ import annotations

import duckdb

GAMES_SCHEMA = """
CREATE TABLE IF NOT EXISTS games (
    id BIGINT PRIMARY KEY,
    event VARCHAR,
    site VARCHAR,
    "date" DATE,
    "round" VARCHAR,
    white VARCHAR,
    black VARCHAR,
    result SMALLINT,
    white_elo SMALLINT,
    black_elo SMALLINT,
    eco VARCHAR(10),
    event_date DATE
);
"""

# DuckDB rejects ON DELETE CASCADE, so the foreign key is declared plain here.
MOVES_SCHEMA = """
CREATE TABLE IF NOT EXISTS moves (
    id BIGINT PRIMARY KEY,
    game_id BIGINT NOT NULL REFERENCES games (id),
    fen_position VARCHAR(72) NOT NULL,
    san VARCHAR,
    next_san VARCHAR,
    active_colour SMALLINT NOT NULL,
    fullmove_number SMALLINT NOT NULL,
    castling_availability SMALLINT NOT NULL,
    halfmove_clock SMALLINT,
    en_passant SMALLINT
);
"""

MOVES_INDEXES = (
    "CREATE INDEX IF NOT EXISTS moves_position_idx "
    "ON moves (fen_position, castling_availability, active_colour, en_passant)",
    "CREATE INDEX IF NOT EXISTS moves_game_id_idx ON moves (game_id)",
    "CREATE INDEX IF NOT EXISTS moves_fullmove_number_idx ON moves (fullmove_number)",
)


def init_schema(conn: duckdb.DuckDBPyConnection) -> None:
    """Create the games and moves tables when they do not exist."""
    conn.execute(GAMES_SCHEMA)
    conn.execute(MOVES_SCHEMA)
    for statement in MOVES_INDEXES:
        conn.execute(statement)
