from __future__ import annotations

import unittest

from chessdb.position_key import (
    BLACK_TO_MOVE,
    STARTING_POSITION_FEN,
    WHITE_TO_MOVE,
    ExactPosition,
    InitialPosition,
    PositionDescriptor,
    descriptor_from_fen,
    position_key,
)
from tests.fixture_helpers import AFTER_E4


class PositionKeyTests(unittest.TestCase):
    def test_starting_fen_selects_initial_variant(self) -> None:
        key = position_key(
            PositionDescriptor(
                fen=STARTING_POSITION_FEN, castling_availability=3, active_colour=1, en_passant=2
            )
        )

        self.assertEqual(key, InitialPosition())
        self.assertEqual(key.candidate_column, "m.san")
        self.assertEqual(key.cache_key, ("initial",))

    def test_other_fen_selects_exact_variant(self) -> None:
        key = position_key(
            PositionDescriptor(fen=AFTER_E4, castling_availability=15, active_colour=1, en_passant=4)
        )

        self.assertEqual(key, ExactPosition(AFTER_E4, 15, 1, 4))
        self.assertEqual(key.candidate_column, "m.next_san")
        self.assertEqual(key.cache_key, ("exact", AFTER_E4, 15, 1, 4))

    def test_full_starting_fen_record_is_not_the_placement(self) -> None:
        full = f"{STARTING_POSITION_FEN} w KQkq - 0 1"

        self.assertIsInstance(position_key(PositionDescriptor(fen=full)), ExactPosition)


class DescriptorFromFenTests(unittest.TestCase):
    def test_parses_starting_position(self) -> None:
        descriptor = descriptor_from_fen(f"{STARTING_POSITION_FEN} w KQkq - 0 1")

        self.assertEqual(
            descriptor,
            PositionDescriptor(
                fen=STARTING_POSITION_FEN,
                castling_availability=15,
                active_colour=WHITE_TO_MOVE,
                en_passant=None,
            ),
        )
        self.assertIsInstance(position_key(descriptor), InitialPosition)

    def test_parses_en_passant_file_and_side_to_move(self) -> None:
        descriptor = descriptor_from_fen(f"{AFTER_E4} b KQkq e3 0 1")

        self.assertEqual(descriptor.fen, AFTER_E4)
        self.assertEqual(descriptor.active_colour, BLACK_TO_MOVE)
        self.assertEqual(descriptor.en_passant, 4)

    def test_castling_bits(self) -> None:
        descriptor = descriptor_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1")

        self.assertEqual(descriptor.castling_availability, 1 | 8)

    def test_rejects_garbage(self) -> None:
        with self.assertRaises(ValueError):
            descriptor_from_fen("not a fen record")


if __name__ == "__main__":
    unittest.main()
