"""Core game logic: bitboards, board state, move rules, and turns."""

from .bitboard import *
from .state import BoardState, Player, Piece, GameStatus, initialize_board, is_over
from .moves import (
    MoveRules, MoveClass, Illegal, IllegalReason, Simple, Capture, AppliedMove,
    validate, apply, apply_move, has_further_capture
)
from .game import Game, GameConfig, GameOverError, TurnResult
