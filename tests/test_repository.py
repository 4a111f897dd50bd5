from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import duckdb

from chessdb.config import PostgresSettings, Settings
from chessdb.db.schema import init_schema
from chessdb.game_queries import game_filter_chain
from chessdb.pagination import PAGE_SIZE
from chessdb.position_key import PositionDescriptor
from chessdb.position_queries import position_filter_chain
from chessdb.repository import ChessRepository, default_query_chains
from tests.fixture_helpers import START, bulk_games, insert_games, seeded_connection


class ChessRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.repository = ChessRepository(seeded_connection())

    def tearDown(self) -> None:
        self.repository.close()

    def test_game_reads(self) -> None:
        game = self.repository.game(5)

        assert game is not None
        self.assertEqual((game["white"], game["black"]), ("Carlsen, M", "Anand, V"))
        self.assertEqual(self.repository.game_count({"eco": "A10"}), 1)
        self.assertEqual(
            [row["id"] for row in self.repository.game_search({"opponent": "Karpov, A"})],
            [1, 2],
        )

    def test_none_criteria_means_unfiltered(self) -> None:
        self.assertEqual(self.repository.game_count(None), 6)
        self.assertEqual(self.repository.position_count(None), 14)

    def test_position_reads(self) -> None:
        self.assertEqual(
            [move["san"] for move in self.repository.moves_in_game(2)],
            ["d4", "Nf6"],
        )
        self.assertEqual(
            self.repository.position_count({"position": {"en_passant": 2}}),
            2,
        )

    def test_popular_moves(self) -> None:
        rows = self.repository.popular_moves(PositionDescriptor(fen=START))

        self.assertEqual([row["candidate_move"] for row in rows], ["e4", "c4", "d4"])


class GamePaginationTests(unittest.TestCase):
    def test_pages_tile_the_filtered_set(self) -> None:
        conn = duckdb.connect(":memory:")
        init_schema(conn)
        insert_games(conn, bulk_games(45))
        repository = ChessRepository(conn)

        pages = [
            [row["id"] for row in repository.game_search({"pagination": {"offset": offset}})]
            for offset in (0, 20, 40, 60)
        ]
        repository.close()

        self.assertEqual([len(page) for page in pages], [PAGE_SIZE, PAGE_SIZE, 5, 0])
        self.assertEqual([game_id for page in pages for game_id in page], list(range(1, 46)))


class QueryChainTests(unittest.TestCase):
    def test_default_chains_are_shared(self) -> None:
        chains = default_query_chains()

        self.assertIs(chains.games, game_filter_chain())
        self.assertIs(chains.positions, position_filter_chain())

    def test_from_settings_opens_configured_connection(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            settings = Settings(
                duckdb_path=Path(tmp_dir) / "nested" / "chess.duckdb",
                postgres=PostgresSettings(dsn=None, host=None, db=None),
            )
            conn = MagicMock()
            with patch("chessdb.repository.get_connection", return_value=conn) as opener:
                repository = ChessRepository.from_settings(settings)

        opener.assert_called_once_with(settings)
        self.assertIs(repository.connection, conn)


if __name__ == "__main__":
    unittest.main()
