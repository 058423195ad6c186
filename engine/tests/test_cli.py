"""Tests for the terminal client."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from cli import play
from cli.play import render_board, parse_command, play_game
from checkers.core.game import GameConfig
from checkers.core.state import BoardState, Player


def scripted(lines):
    """Return a read_line replacement that raises EOFError when exhausted."""
    it = iter(lines)

    def read_line(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return read_line


class TestRender:
    def test_initial_board(self):
        lines = render_board(BoardState.initial(), color=False).splitlines()
        assert lines[0] == "  A B C D E F G H"
        assert lines[1] == "8 w . w . w . w . 8"
        assert lines[8] == "1 . b . b . b . b 1"
        assert lines[9] == lines[0]

    def test_kings_uppercase(self):
        board = BoardState.from_squares(black=(1,), white=(62,), kings=(1, 62))
        lines = render_board(board, color=False).splitlines()
        assert lines[1] == "8 . . . . . . W . 8"
        assert lines[8] == "1 . B . . . . . . 1"

    def test_highlight(self):
        text = render_board(BoardState.initial(), highlight=1, color=True)
        assert '\033[92mb\033[0m' in text


class TestParseCommand:
    def test_commands(self):
        assert parse_command('q', None) == 'quit'
        assert parse_command(' HELP ', None) == 'help'
        assert parse_command('a', 28) == 'abort'

    def test_move(self):
        assert parse_command('b3-c4', None) == (17, 26)

    def test_chain_landing_square(self):
        assert parse_command('g6', 28) == (28, 46)

    def test_invalid(self, capsys):
        assert parse_command('z9-a1', None) is None
        assert 'try again' in capsys.readouterr().out

    def test_unicode_digit_is_rejected(self, capsys):
        assert parse_command('c\u00b3-d4', None) is None
        assert 'try again' in capsys.readouterr().out


class TestPlayGame:
    def test_scripted_moves(self, capsys):
        game = play_game(GameConfig(), color=False,
                         read_line=scripted(['c\u00b3-d4', 'c3-d4', 'b3-c4', 'c6-d5', 'q']))
        assert game.ply == 2
        assert game.current_player is Player.BLACK
        out = capsys.readouterr().out
        assert 'Invalid move' in out
        assert 'Thanks for playing!' in out

    def test_eof_ends_game(self):
        game = play_game(GameConfig(), color=False, read_line=scripted([]))
        assert game.ply == 0

    def test_abort_without_chain(self, capsys):
        play_game(GameConfig(), color=False, read_line=scripted(['a']))
        assert 'No multi-jump to abandon.' in capsys.readouterr().out


class TestMain:
    def test_flags_reach_config(self, monkeypatch):
        seen = {}

        def fake_play_game(config, color=True):
            seen['config'] = config
            seen['color'] = color

        monkeypatch.setattr(play, 'play_game', fake_play_game)
        play.main(['--continue-after-promotion', '--no-color', '--log-level', 'DEBUG'])
        assert seen['config'].stop_chain_on_promotion is False
        assert seen['color'] is False
