"""
终局判定测试
"""

import pytest

from xiangqi_core.fen import decode, initial_board
from xiangqi_core.rules import game_result, terminal_winner
from xiangqi_core.types import GameResult, Side, Square

# 黑将被自己的四个士围死，无子可动
BLACK_SMOTHERED_FEN = "3ka4/3a1a3/4a4/9/9/9/9/9/9/4K4 b - - 0 1"


class TestMissingGeneral:
    """将/帅被吃"""

    @pytest.mark.parametrize("side_to_move", list(Side))
    def test_red_general_missing(self, side_to_move):
        board = initial_board()
        board.remove(Square(9, 4))
        assert terminal_winner(board, side_to_move) == Side.BLACK

    @pytest.mark.parametrize("side_to_move", list(Side))
    def test_black_general_missing(self, side_to_move):
        board = initial_board()
        board.remove(Square(0, 4))
        assert terminal_winner(board, side_to_move) == Side.RED

    def test_both_missing_reports_black(self):
        board = initial_board()
        board.remove(Square(9, 4))
        board.remove(Square(0, 4))
        assert terminal_winner(board, Side.RED) == Side.BLACK


class TestNoMoves:
    """无子可动判负"""

    def test_smothered_side_to_move_loses(self):
        board = decode(BLACK_SMOTHERED_FEN)
        assert terminal_winner(board, Side.BLACK) == Side.RED
        assert game_result(board, Side.BLACK) == GameResult.RED_WIN

    def test_other_side_to_move_continues(self):
        board = decode(BLACK_SMOTHERED_FEN)
        assert terminal_winner(board, Side.RED) is None


class TestOngoing:
    def test_initial_position(self):
        board = initial_board()
        assert terminal_winner(board, Side.RED) is None
        assert game_result(board, Side.BLACK) == GameResult.ONGOING

    def test_bare_generals(self):
        """只剩两个将，仍可走棋"""
        board = decode("4k4/9/9/9/9/9/9/9/9/4K4 w - - 0 1")
        assert terminal_winner(board, Side.RED) is None

    def test_does_not_mutate_board(self):
        board = decode(BLACK_SMOTHERED_FEN)
        snapshot = board.copy()
        terminal_winner(board, Side.BLACK)
        assert board == snapshot
