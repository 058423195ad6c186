"""Tests for bitboard utilities and coordinate mapping."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from checkers.core.bitboard import (
    NUM_SQUARES, BLACK_START, WHITE_START,
    InvalidCoordinate, to_index, sq_to_rowcol, rowcol_to_sq,
    sq_to_algebraic, algebraic_to_sq, is_valid_sq,
    bit, popcount, lsb, iter_bits
)


class TestToIndex:
    def test_corners(self):
        assert to_index('A', 1) == 0
        assert to_index('H', 1) == 7
        assert to_index('A', 8) == 56
        assert to_index('H', 8) == 63

    def test_lowercase_column(self):
        assert to_index('c', 3) == to_index('C', 3) == 18

    def test_b3_is_square_17(self):
        assert to_index('B', 3) == 17

    @pytest.mark.parametrize("column,row", [
        ('I', 1), ('Z', 4), ('@', 2), ('A', 0), ('A', 9), ('H', -1), ('', 3), ('AB', 3),
    ])
    def test_out_of_range(self, column, row):
        with pytest.raises(InvalidCoordinate):
            to_index(column, row)

    @pytest.mark.parametrize("row", [3.5, "3", None, True])
    def test_row_must_be_int(self, row):
        with pytest.raises(InvalidCoordinate):
            to_index('A', row)

    def test_invalid_coordinate_is_value_error(self):
        with pytest.raises(ValueError):
            to_index('J', 1)

    def test_round_trip_all_squares(self):
        for col in "ABCDEFGH":
            for row in range(1, 9):
                sq = to_index(col, row)
                assert 0 <= sq < NUM_SQUARES
                assert sq_to_algebraic(sq) == f"{col}{row}"


class TestAlgebraic:
    def test_parse(self):
        assert algebraic_to_sq('c3') == 18
        assert algebraic_to_sq(' H8 ') == 63

    @pytest.mark.parametrize("text", ['c', 'cc', 'z9', 'a10', '3c', '', 'c³', 'c\u0663'])
    def test_parse_invalid(self, text):
        with pytest.raises(InvalidCoordinate):
            algebraic_to_sq(text)

    def test_rowcol(self):
        assert sq_to_rowcol(17) == (2, 1)
        assert rowcol_to_sq(3, 2) == 26
        assert is_valid_sq(7, 7)
        assert not is_valid_sq(8, 0)
        assert not is_valid_sq(0, -1)


class TestBitOperations:
    def test_bit(self):
        assert bit(0) == 1
        assert bit(3) == 8
        assert bit(63) == 1 << 63

    def test_popcount(self):
        assert popcount(0) == 0
        assert popcount(0b1111) == 4
        assert popcount(BLACK_START | WHITE_START) == 24

    def test_iter_bits(self):
        assert list(iter_bits(0b1010101)) == [0, 2, 4, 6]

    def test_iter_bits_numpy_int64(self):
        import numpy as np
        assert list(iter_bits(np.int64(0b1010101))) == [0, 2, 4, 6]

    def test_lsb(self):
        assert lsb(0) == -1
        assert lsb(bit(40) | bit(50)) == 40


class TestStartingPosition:
    def test_black_squares(self):
        assert list(iter_bits(BLACK_START)) == [1, 3, 5, 7, 8, 10, 12, 14, 17, 19, 21, 23]

    def test_white_squares(self):
        assert list(iter_bits(WHITE_START)) == [40, 42, 44, 46, 49, 51, 53, 55, 56, 58, 60, 62]

    def test_only_dark_squares(self):
        for sq in iter_bits(BLACK_START | WHITE_START):
            row, col = sq_to_rowcol(sq)
            assert (row + col) % 2 == 1
