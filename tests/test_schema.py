import unittest

import duckdb

from chessdb.db.schema import init_schema


class SchemaTests(unittest.TestCase):
    def test_init_schema_is_idempotent(self) -> None:
        conn = duckdb.connect(":memory:")
        init_schema(conn)
        init_schema(conn)

        tables = {row[0] for row in conn.execute("SHOW TABLES").fetchall()}
        conn.close()

        self.assertEqual(tables, {"games", "moves"})

    def test_moves_must_reference_a_game(self) -> None:
        conn = duckdb.connect(":memory:")
        init_schema(conn)

        with self.assertRaises(duckdb.Error):
            conn.execute(
                "INSERT INTO moves (id, game_id, fen_position, active_colour, "
                "fullmove_number, castling_availability) "
                "VALUES (1, 42, '8/8/8/8/8/8/8/8', 0, 1, 0)"
            )
        conn.close()


if __name__ == "__main__":
    unittest.main()
