"""
Move validation and application for English draughts.

Handles simple moves, single jumps, promotion, and the check for a
follow-up jump that keeps a capture chain going.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .bitboard import (
    NUM_SQUARES, DIAGONALS,
    bit, sq_to_rowcol, rowcol_to_sq, sq_to_algebraic, algebraic_to_sq,
    is_valid_sq, InvalidCoordinate
)
from .state import BoardState, Player

logger = logging.getLogger(__name__)


class IllegalReason(Enum):
    OUT_OF_RANGE = "square off the board"
    NO_PIECE = "no piece of yours on the start square"
    OCCUPIED = "destination is not empty"
    NOT_DIAGONAL = "move is not diagonal"
    WRONG_DIRECTION = "men only move forward"
    NOTHING_TO_CAPTURE = "no opponent piece to jump"
    BAD_DISTANCE = "move must be one or two squares"


@dataclass(frozen=True)
class Illegal:
    reason: IllegalReason


@dataclass(frozen=True)
class Simple:
    pass


@dataclass(frozen=True)
class Capture:
    captured: int


MoveClass = Union[Illegal, Simple, Capture]


@dataclass(frozen=True)
class AppliedMove:
    """Record of a move the applicator carried out."""
    player: Player
    start: int
    end: int
    captured: Optional[int] = None
    promoted: bool = False

    def __str__(self) -> str:
        sep = "x" if self.captured is not None else "-"
        return f"{sq_to_algebraic(self.start)}{sep}{sq_to_algebraic(self.end)}"


def algebraic_to_move(s: str) -> tuple[int, int]:
    """Parse 'c3-d4', 'C3 D4' or 'c3xe5' into (start, end)."""
    parts = s.strip().replace('x', '-').replace('X', '-').replace(' ', '-').split('-')
    parts = [p for p in parts if p]
    if len(parts) != 2:
        raise InvalidCoordinate(f"Invalid move format: {s}")
    return algebraic_to_sq(parts[0]), algebraic_to_sq(parts[1])


class MoveRules:
    """Rule checks over raw bitboards."""

    @staticmethod
    def validate_masks(
        own_pieces: int,
        opponent_pieces: int,
        kings: int,
        start: int,
        end: int,
        player: Player,
    ) -> MoveClass:
        """
        Classify a proposed move as Illegal, Simple or Capture.

        Pure function of its inputs; the board is never touched.
        """
        if not (0 <= start < NUM_SQUARES and 0 <= end < NUM_SQUARES):
            return Illegal(IllegalReason.OUT_OF_RANGE)

        start_mask = bit(start)
        end_mask = bit(end)

        if not own_pieces & start_mask:
            return Illegal(IllegalReason.NO_PIECE)

        if (own_pieces | opponent_pieces) & end_mask:
            return Illegal(IllegalReason.OCCUPIED)

        start_row, start_col = sq_to_rowcol(start)
        end_row, end_col = sq_to_rowcol(end)
        row_diff = end_row - start_row
        col_diff = end_col - start_col

        if abs(row_diff) != abs(col_diff):
            return Illegal(IllegalReason.NOT_DIAGONAL)

        is_king = bool(kings & start_mask)
        forward = Player(player).forward

        if abs(row_diff) == 1:
            if is_king or row_diff == forward:
                return Simple()
            return Illegal(IllegalReason.WRONG_DIRECTION)

        if abs(row_diff) == 2:
            mid = rowcol_to_sq((start_row + end_row) // 2, (start_col + end_col) // 2)
            if not opponent_pieces & bit(mid):
                return Illegal(IllegalReason.NOTHING_TO_CAPTURE)
            if is_king or row_diff == 2 * forward:
                return Capture(mid)
            return Illegal(IllegalReason.WRONG_DIRECTION)

        return Illegal(IllegalReason.BAD_DISTANCE)

    @staticmethod
    def has_further_capture_masks(
        own_pieces: int,
        opponent_pieces: int,
        kings: int,
        square: int,
        player: Player,
    ) -> bool:
        """
        Check whether the piece on `square` can jump again.

        Men only look along their forward diagonals, so a chain never
        reverses direction unless the piece is a king.
        """
        is_king = bool(kings & bit(square))
        forward = Player(player).forward
        occupied = own_pieces | opponent_pieces
        row, col = sq_to_rowcol(square)

        for dr, dc in DIAGONALS:
            if not is_king and dr != forward:
                continue

            end_row, end_col = row + 2 * dr, col + 2 * dc
            if not is_valid_sq(end_row, end_col):
                continue

            mid_sq = rowcol_to_sq(row + dr, col + dc)
            end_sq = rowcol_to_sq(end_row, end_col)
            if opponent_pieces & bit(mid_sq) and not occupied & bit(end_sq):
                return True

        return False

    @staticmethod
    def apply(
        board: BoardState,
        start: int,
        end: int,
        captured: Optional[int],
        player: Player,
    ) -> AppliedMove:
        """
        Apply an already validated move to the board in place.

        Order matters: relocate, carry the king flag, remove the
        captured piece, then check promotion on the landing square.
        """
        player = Player(player)
        start_mask = bit(start)
        end_mask = bit(end)

        board.set_pieces(player, (board.pieces_of(player) & ~start_mask) | end_mask)

        # King-ness follows the piece
        if board.kings & start_mask:
            board.kings = (board.kings & ~start_mask) | end_mask

        if captured is not None:
            cap_mask = bit(captured)
            opponent = player.opponent
            board.set_pieces(opponent, board.pieces_of(opponent) & ~cap_mask)
            board.kings &= ~cap_mask

        promoted = False
        if sq_to_rowcol(end)[0] == player.promotion_row and not board.kings & end_mask:
            board.kings |= end_mask
            promoted = True
            logger.info("%s piece promoted to king on %s",
                        player.name.capitalize(), sq_to_algebraic(end))

        return AppliedMove(player, start, end, captured, promoted)


# Convenience functions
def validate(board: BoardState, start: int, end: int, player: Player) -> MoveClass:
    """Classify a proposed move for `player` on `board`."""
    result = MoveRules.validate_masks(
        board.pieces_of(player), board.opponent_of(player), board.kings,
        start, end, player
    )
    if isinstance(result, Illegal):
        logger.debug("Rejected %s for %s: %s", (start, end), Player(player).name,
                     result.reason.value)
    return result


def apply(
    board: BoardState,
    start: int,
    end: int,
    captured: Optional[int],
    player: Player,
) -> BoardState:
    """Apply a validated move in place and return the board."""
    MoveRules.apply(board, start, end, captured, player)
    return board


def apply_move(board: BoardState, start: int, end: int, move: MoveClass,
               player: Player) -> AppliedMove:
    """Apply a Simple or Capture classification and return its record."""
    if isinstance(move, Illegal):
        raise ValueError(f"Cannot apply an illegal move: {move.reason.value}")
    captured = move.captured if isinstance(move, Capture) else None
    return MoveRules.apply(board, start, end, captured, player)


def has_further_capture(board: BoardState, square: int, player: Player) -> bool:
    """Check whether the piece on `square` has another jump available."""
    return MoveRules.has_further_capture_masks(
        board.pieces_of(player), board.opponent_of(player), board.kings,
        square, player
    )
