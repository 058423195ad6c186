"""
Turn handling for a game of English draughts.

A Game owns one board and drives the capture chain: after a jump, the
same piece must keep jumping while another capture is available.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Optional

from .bitboard import sq_to_rowcol, sq_to_algebraic
from .state import BoardState, Player, GameStatus, is_over
from .moves import (
    MoveClass, Illegal, IllegalReason, Capture, AppliedMove,
    validate, apply_move, has_further_capture
)

logger = logging.getLogger(__name__)


class GameOverError(RuntimeError):
    """Raised when a move is submitted after the game has been decided."""


@dataclass
class GameConfig:
    """Rule switches for a game."""
    # A continuation jump that lands on the far row ends the multi-jump even
    # if another jump exists. The opening jump of a turn never stops there.
    stop_chain_on_promotion: bool = True


@dataclass(frozen=True)
class TurnResult:
    """
    Outcome of one call to Game.play.

    Attributes:
        move_class: Classification returned by the validator
        applied: The move that was carried out, or None if rejected
        turn_over: True once the side to move has changed
        chain_square: Square the chained piece must jump from next
        status: Game status after the call
    """
    move_class: MoveClass
    applied: Optional[AppliedMove]
    turn_over: bool
    chain_square: Optional[int]
    status: GameStatus

    @property
    def accepted(self) -> bool:
        return self.applied is not None


@dataclass
class Game:
    """
    A single game session.

    Attributes:
        config: Rule switches
        board: Current position
        current_player: Side to move (Black moves first)
        chain_square: Square of a piece in the middle of a multi-jump
        ply: Number of completed turns
        moves: Every move applied so far, jumps listed individually
    """
    config: GameConfig = field(default_factory=GameConfig)
    board: BoardState = field(default_factory=BoardState.initial)
    current_player: Player = Player.BLACK
    chain_square: Optional[int] = None
    ply: int = 0
    moves: list[AppliedMove] = field(default_factory=list)

    @property
    def status(self) -> GameStatus:
        return is_over(self.board)

    @property
    def in_chain(self) -> bool:
        return self.chain_square is not None

    def play(self, start: int, end: int) -> TurnResult:
        """
        Validate and apply one move or jump for the side to move.

        While a chain is pending only a capture by the chained piece is
        accepted. Rejected input leaves the board untouched.
        """
        if self.status is not GameStatus.IN_PROGRESS:
            raise GameOverError(f"Game is over: {self.status.value}")

        player = self.current_player
        continuing = self.in_chain

        if self.in_chain and start != self.chain_square:
            return self._rejected(Illegal(IllegalReason.NO_PIECE))

        move = validate(self.board, start, end, player)
        if isinstance(move, Illegal):
            return self._rejected(move)
        if self.in_chain and not isinstance(move, Capture):
            return self._rejected(Illegal(IllegalReason.NOTHING_TO_CAPTURE))

        applied = apply_move(self.board, start, end, move, player)
        self.moves.append(applied)
        logger.debug("%s plays %s", player.name.capitalize(), applied)

        if isinstance(move, Capture) and self._chain_continues(applied, continuing):
            self.chain_square = end
            logger.info("%s can make another jump from %s",
                        player.name.capitalize(), sq_to_algebraic(end))
            return TurnResult(move, applied, False, end, self.status)

        self._end_turn()
        return TurnResult(move, applied, True, None, self.status)

    def abort_chain(self) -> None:
        """Give up the rest of a multi-jump. Jumps already made stand."""
        if not self.in_chain:
            raise ValueError("No capture chain in progress")
        logger.info("%s abandons the capture chain on %s",
                    self.current_player.name.capitalize(),
                    sq_to_algebraic(self.chain_square))
        self._end_turn()

    def _chain_continues(self, applied: AppliedMove, continuing: bool) -> bool:
        landed_row, _ = sq_to_rowcol(applied.end)
        if (continuing and self.config.stop_chain_on_promotion
                and landed_row == applied.player.promotion_row):
            return False
        return has_further_capture(self.board, applied.end, applied.player)

    def _end_turn(self) -> None:
        self.chain_square = None
        self.ply += 1
        status = self.status
        if status is not GameStatus.IN_PROGRESS:
            logger.info("Game over after %d turns: %s", self.ply, status.value)
            return
        self.current_player = self.current_player.opponent

    def _rejected(self, move: Illegal) -> TurnResult:
        return TurnResult(move, None, False, self.chain_square, self.status)
