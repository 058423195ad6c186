#!/usr/bin/env python3
"""
Terminal-based draughts client.

Two players share the keyboard. All rule decisions are made by
checkers.core.Game; this module only reads input and prints the board.
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from checkers.core.game import Game, GameConfig
from checkers.core.state import BoardState, Piece
from checkers.core.moves import algebraic_to_move
from checkers.core.bitboard import (
    ROWS, COLS, COLUMN_LETTERS, InvalidCoordinate,
    algebraic_to_sq, sq_to_algebraic
)

HELP_TEXT = (
    "Enter moves like 'c3-d4' (or 'c3 d4').\n"
    "During a multi-jump enter only the next landing square, e.g. 'e5'.\n"
    "'a' abandons a multi-jump, 'h' shows this help, 'q' quits."
)


def render_board(board: BoardState, highlight: Optional[int] = None,
                 color: bool = True) -> str:
    """Render the board with rank 8 at the top.

    Symbols:
        b/w = Black/White man
        B/W = Black/White king
        .   = empty square
    """
    # ANSI color codes
    GREEN = '\033[92m' if color else ''
    RESET = '\033[0m' if color else ''

    grid = board.to_grid()
    header = "  " + " ".join(COLUMN_LETTERS)
    lines = [header]
    for row in range(ROWS - 1, -1, -1):
        line = f"{row + 1} "
        for col in range(COLS):
            sym = Piece(int(grid[row, col])).symbol
            if highlight == row * COLS + col:
                line += f"{GREEN}{sym}{RESET} "
            else:
                line += f"{sym} "
        lines.append(line + str(row + 1))
    lines.append(header)
    return "\n".join(lines)


def parse_command(input_str: str, chain_square: Optional[int]):
    """Turn a line of input into a command string or a (start, end) pair.

    Returns None (after printing why) when the text is not understood.
    """
    input_str = input_str.strip().lower()

    if input_str in ['q', 'quit', 'exit']:
        return 'quit'
    if input_str in ['h', 'help', '?']:
        return 'help'
    if input_str in ['a', 'abort']:
        return 'abort'

    try:
        if chain_square is not None and len(input_str.split()) == 1 and '-' not in input_str:
            return chain_square, algebraic_to_sq(input_str)
        return algebraic_to_move(input_str)
    except InvalidCoordinate as e:
        print(f"{e}. Please try again.")
        return None


def play_game(config: GameConfig, color: bool = True,
              read_line: Callable[[str], str] = input) -> Game:
    """Run a hot-seat game until one side has no pieces left or a player quits."""
    game = Game(config=config)

    print("\n=== Draughts ===")
    print(HELP_TEXT)

    while game.status.winner is None:
        print()
        print(render_board(game.board, game.chain_square, color))
        name = game.current_player.name.capitalize()
        if game.in_chain:
            print(f"{name} can make another jump from {sq_to_algebraic(game.chain_square)}.")
        else:
            print(f"{name}'s turn.")

        try:
            user_input = read_line("> ")
        except EOFError:
            return game

        command = parse_command(user_input, game.chain_square)
        if command is None:
            continue
        if command == 'quit':
            print("Thanks for playing!")
            return game
        if command == 'help':
            print(HELP_TEXT)
            continue
        if command == 'abort':
            if game.in_chain:
                game.abort_chain()
            else:
                print("No multi-jump to abandon.")
            continue

        start, end = command
        result = game.play(start, end)
        if not result.accepted:
            print(f"Invalid move ({result.move_class.reason.value}). Try again.")
            continue
        if result.applied.promoted:
            print(f"{name} piece promoted to king!")

    print()
    print(render_board(game.board, color=color))
    print(f"{game.status.winner.name.capitalize()} wins!")
    return game


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Draughts Terminal Client')
    parser.add_argument('--continue-after-promotion', action='store_true',
                        help='Keep jumping after a piece is crowned mid-chain')
    parser.add_argument('--no-color', action='store_true', help='Disable ANSI colors')
    parser.add_argument('--log-level', type=str, default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level for engine messages')

    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    config = GameConfig(stop_chain_on_promotion=not args.continue_after_promotion)
    play_game(config, color=not args.no_color)


if __name__ == '__main__':
    main()
