"""
Board state representation for English draughts.

Three bitboards hold the whole position: Black's pieces, White's
pieces, and the crowned subset of either side.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional
import numpy as np

from .bitboard import (
    ROWS, COLS, FULL_MASK, BLACK_START, WHITE_START, COLUMN_LETTERS,
    bit, popcount, iter_bits, sq_to_rowcol
)


class Player(IntEnum):
    """Side to move. Black starts on rows 1-3 and moves first."""
    BLACK = 1
    WHITE = 2

    @property
    def forward(self) -> int:
        """Row delta of a non-king step."""
        return 1 if self is Player.BLACK else -1

    @property
    def promotion_row(self) -> int:
        return ROWS - 1 if self is Player.BLACK else 0

    @property
    def opponent(self) -> Player:
        return Player.WHITE if self is Player.BLACK else Player.BLACK


class Piece(IntEnum):
    """Contents of a square, as reported by piece_at and to_grid."""
    EMPTY = 0
    BLACK_MAN = 1
    WHITE_MAN = 2
    BLACK_KING = 3
    WHITE_KING = 4

    @property
    def symbol(self) -> str:
        return ".bwBW"[self]


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    BLACK_WINS = "black_wins"
    WHITE_WINS = "white_wins"

    @property
    def winner(self) -> Optional[Player]:
        if self is GameStatus.BLACK_WINS:
            return Player.BLACK
        if self is GameStatus.WHITE_WINS:
            return Player.WHITE
        return None


@dataclass
class BoardState:
    """
    Occupancy of the 64 squares.

    Attributes:
        black_pieces: Bitboard of Black's pieces (men and kings)
        white_pieces: Bitboard of White's pieces (men and kings)
        kings: Bitboard of crowned pieces of either colour

    Invariants: black_pieces & white_pieces == 0 and kings is a subset
    of black_pieces | white_pieces. Only the move applicator mutates a
    board during play.
    """
    black_pieces: int = BLACK_START
    white_pieces: int = WHITE_START
    kings: int = 0

    @classmethod
    def initial(cls) -> BoardState:
        """Create a board in the starting position."""
        return cls()

    @classmethod
    def empty_board(cls) -> BoardState:
        return cls(black_pieces=0, white_pieces=0, kings=0)

    @classmethod
    def from_squares(
        cls,
        black: tuple[int, ...] = (),
        white: tuple[int, ...] = (),
        kings: tuple[int, ...] = (),
    ) -> BoardState:
        """Build a position from square lists (handy for set-ups)."""
        board = cls.empty_board()
        for sq in black:
            board.black_pieces |= bit(sq)
        for sq in white:
            board.white_pieces |= bit(sq)
        for sq in kings:
            board.kings |= bit(sq)
        board.check_invariants()
        return board

    @property
    def occupied(self) -> int:
        """Bitboard of all occupied squares."""
        return self.black_pieces | self.white_pieces

    @property
    def empty(self) -> int:
        """Bitboard of all empty squares."""
        return (~self.occupied) & FULL_MASK

    def pieces_of(self, player: Player) -> int:
        return self.black_pieces if player == Player.BLACK else self.white_pieces

    def opponent_of(self, player: Player) -> int:
        return self.white_pieces if player == Player.BLACK else self.black_pieces

    def set_pieces(self, player: Player, mask: int) -> None:
        if player == Player.BLACK:
            self.black_pieces = mask
        else:
            self.white_pieces = mask

    def is_king(self, sq: int) -> bool:
        return bool(self.kings & bit(sq))

    def piece_at(self, sq: int) -> Piece:
        """Return what stands on a square."""
        mask = bit(sq)
        king = bool(self.kings & mask)
        if self.black_pieces & mask:
            return Piece.BLACK_KING if king else Piece.BLACK_MAN
        if self.white_pieces & mask:
            return Piece.WHITE_KING if king else Piece.WHITE_MAN
        return Piece.EMPTY

    def count(self, player: Player) -> int:
        """Number of pieces a side has left."""
        return popcount(self.pieces_of(player))

    def check_invariants(self) -> None:
        if self.black_pieces & self.white_pieces:
            raise ValueError("A square holds both a black and a white piece")
        if self.kings & ~self.occupied:
            raise ValueError("King flag set on an empty square")
        if self.occupied & ~FULL_MASK:
            raise ValueError("Piece outside the 64 board squares")

    def copy(self) -> BoardState:
        return BoardState(
            black_pieces=self.black_pieces,
            white_pieces=self.white_pieces,
            kings=self.kings,
        )

    def to_grid(self) -> np.ndarray:
        """
        Convert the board to an (8, 8) int8 array of Piece codes.

        Row 0 of the array is rank 1 (Black's home edge).
        """
        grid = np.zeros((ROWS, COLS), dtype=np.int8)
        for sq in iter_bits(self.occupied):
            row, col = sq_to_rowcol(sq)
            grid[row, col] = self.piece_at(sq)
        return grid

    def __hash__(self) -> int:
        return hash((self.black_pieces, self.white_pieces, self.kings))

    def __repr__(self) -> str:
        """Pretty print the board, rank 8 at the top."""
        lines = ["  " + " ".join(COLUMN_LETTERS)]
        for row in range(ROWS - 1, -1, -1):
            rank = f"{row + 1} "
            for col in range(COLS):
                rank += self.piece_at(row * COLS + col).symbol + " "
            lines.append(rank + str(row + 1))
        lines.append("  " + " ".join(COLUMN_LETTERS))
        return "\n".join(lines)


def initialize_board() -> BoardState:
    """Starting layout: 12 black men on rows 1-3, 12 white men on rows 6-8."""
    return BoardState.initial()


def is_over(board: BoardState) -> GameStatus:
    """
    Report the game result from piece counts alone.

    A side wins once the other has no pieces left. Running out of
    legal moves is not treated as a loss.
    """
    if board.black_pieces == 0:
        return GameStatus.WHITE_WINS
    if board.white_pieces == 0:
        return GameStatus.BLACK_WINS
    return GameStatus.IN_PROGRESS
