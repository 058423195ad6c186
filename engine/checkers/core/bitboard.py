"""
Bitboard utilities for English draughts.

Board layout (8 rows x 8 cols = 64 squares, one bit per square):

  8 | 56 57 58 59 60 61 62 63
  7 | 48 49 50 51 52 53 54 55
  6 | 40 41 42 43 44 45 46 47
  5 | 32 33 34 35 36 37 38 39
  4 | 24 25 26 27 28 29 30 31
  3 | 16 17 18 19 20 21 22 23
  2 |  8  9 10 11 12 13 14 15
  1 |  0  1  2  3  4  5  6  7
    +------------------------
       A  B  C  D  E  F  G  H

Square index = row * 8 + col (row 0 = rank 1, Black's home edge).
Only dark squares, where (row + col) is odd, are ever occupied.
"""

from typing import Iterator

# Board dimensions
ROWS = 8
COLS = 8
NUM_SQUARES = ROWS * COLS  # 64

FULL_MASK = (1 << NUM_SQUARES) - 1

COLUMN_LETTERS = "ABCDEFGH"

# Diagonal steps (row_delta, col_delta)
DIAGONALS = [(1, 1), (1, -1), (-1, 1), (-1, -1)]


def _home_rows_mask(rows: range) -> int:
    mask = 0
    for row in rows:
        for col in range((row + 1) % 2, COLS, 2):
            mask |= 1 << (row * COLS + col)
    return mask


# Starting positions: three rows of dark squares on each side
BLACK_START = _home_rows_mask(range(0, 3))
WHITE_START = _home_rows_mask(range(5, 8))


class InvalidCoordinate(ValueError):
    """Column or row outside the board."""


def to_index(column: str, row: int) -> int:
    """
    Map a column letter (A-H, any case) and a row number (1-8) to a
    square index.

    Raises InvalidCoordinate when either part is off the board.
    """
    if not isinstance(column, str) or len(column) != 1:
        raise InvalidCoordinate(f"Invalid column: {column!r}")
    if not isinstance(row, int) or isinstance(row, bool):
        raise InvalidCoordinate(f"Invalid row: {row!r}")
    letter = column.upper()
    if letter not in COLUMN_LETTERS or not 1 <= row <= ROWS:
        raise InvalidCoordinate(f"Invalid board position: {column}{row}")
    return (row - 1) * COLS + (ord(letter) - ord('A'))


def sq_to_rowcol(sq: int) -> tuple[int, int]:
    """Convert square index to (row, col)."""
    return sq // COLS, sq % COLS


def rowcol_to_sq(row: int, col: int) -> int:
    """Convert (row, col) to square index."""
    return row * COLS + col


def sq_to_algebraic(sq: int) -> str:
    """Convert square index to board notation (e.g., 'C3')."""
    row, col = sq_to_rowcol(sq)
    return COLUMN_LETTERS[col] + str(row + 1)


def algebraic_to_sq(s: str) -> int:
    """Convert board notation (e.g., 'c3') to square index."""
    s = s.strip()
    if len(s) < 2 or not (s[1:].isascii() and s[1:].isdigit()):
        raise InvalidCoordinate(f"Invalid board position: {s!r}")
    return to_index(s[0], int(s[1:]))


def is_valid_sq(row: int, col: int) -> bool:
    """Check if (row, col) is on the board."""
    return 0 <= row < ROWS and 0 <= col < COLS


def bit(sq: int) -> int:
    """Return bitboard with single bit set at square."""
    return 1 << sq


def popcount(bb: int) -> int:
    """Count number of set bits."""
    return bin(bb).count('1')


def lsb(bb: int) -> int:
    """Return index of least significant bit (or -1 if empty)."""
    bb = int(bb)  # Handle numpy int64
    if bb == 0:
        return -1
    return (bb & -bb).bit_length() - 1


def iter_bits(bb: int) -> Iterator[int]:
    """Iterate over indices of set bits."""
    bb = int(bb)  # Handle numpy int64
    while bb:
        sq = lsb(bb)
        yield sq
        bb &= bb - 1  # Clear LSB
