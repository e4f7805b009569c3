"""
终局判定

- 一方的将/帅被吃掉，另一方立即获胜
- 轮到走棋的一方没有任何走法时判负（困毙同样算负，与国际象棋的逼和不同）
"""

from xiangqi_core.board import Board
from xiangqi_core.moves import all_moves
from xiangqi_core.types import GameResult, PieceKind, Side


def terminal_winner(board: Board, side_to_move: Side) -> Side | None:
    """判断胜方，未分胜负返回 None

    每次走棋后都应以即将走棋的一方重新调用。
    """
    has_general = {Side.RED: False, Side.BLACK: False}
    for _, piece in board.pieces():
        if piece.kind == PieceKind.GENERAL:
            has_general[piece.side] = True

    # 双方都没有将的局面在正常对局中不可达，按先判红方处理
    if not has_general[Side.RED]:
        return Side.BLACK
    if not has_general[Side.BLACK]:
        return Side.RED

    if not all_moves(board, side_to_move):
        return side_to_move.opposite

    return None


def game_result(board: Board, side_to_move: Side) -> GameResult:
    """判断游戏结果"""
    return GameResult.for_winner(terminal_winner(board, side_to_move))
