"""
走法生成

按棋子类型生成伪合法走法（不考虑将军和将帅对面）
"""

from typing import Callable

from xiangqi_core.board import Board
from xiangqi_core.types import Move, Piece, PieceKind, Side, Square

ORTHOGONAL = [(-1, 0), (1, 0), (0, -1), (0, 1)]
DIAGONAL = [(-1, -1), (-1, 1), (1, -1), (1, 1)]

# 马：(马脚偏移, 目标位置偏移列表)
HORSE_LEGS = [
    ((-1, 0), [(-2, -1), (-2, 1)]),  # 向上的马脚
    ((1, 0), [(2, -1), (2, 1)]),  # 向下的马脚
    ((0, -1), [(-1, -2), (1, -2)]),  # 向左的马脚
    ((0, 1), [(-1, 2), (1, 2)]),  # 向右的马脚
]


def _add_if_valid(board: Board, piece: Piece, origin: Square, dest: Square, moves: set[Move]) -> None:
    """目标在棋盘内，且为空或对方棋子时加入走法"""
    if not dest.is_valid():
        return
    target = board.get(dest)
    if target is None or target.side != piece.side:
        moves.add(Move(origin, dest))


def _general_moves(board: Board, piece: Piece, origin: Square) -> set[Move]:
    moves: set[Move] = set()
    # 上下左右一格，限制在九宫格内
    for offset in ORTHOGONAL:
        dest = origin + offset
        if dest.is_in_palace(piece.side):
            _add_if_valid(board, piece, origin, dest, moves)
    return moves


def _advisor_moves(board: Board, piece: Piece, origin: Square) -> set[Move]:
    moves: set[Move] = set()
    # 斜走一格，限制在九宫格内
    for offset in DIAGONAL:
        dest = origin + offset
        if dest.is_in_palace(piece.side):
            _add_if_valid(board, piece, origin, dest, moves)
    return moves


def _elephant_moves(board: Board, piece: Piece, origin: Square) -> set[Move]:
    moves: set[Move] = set()
    # 走田字，不能过河，需检查象眼
    for dr, dc in DIAGONAL:
        dest = origin + (2 * dr, 2 * dc)
        if not (dest.is_valid() and dest.is_on_own_side(piece.side)):
            continue
        if board.get(origin + (dr, dc)) is None:
            _add_if_valid(board, piece, origin, dest, moves)
    return moves


def _horse_moves(board: Board, piece: Piece, origin: Square) -> set[Move]:
    moves: set[Move] = set()
    # 马走日字，蹩马腿时该方向的两个落点都不可走
    for leg_offset, jump_offsets in HORSE_LEGS:
        leg = origin + leg_offset
        if not leg.is_valid() or board.get(leg) is not None:
            continue
        for offset in jump_offsets:
            _add_if_valid(board, piece, origin, origin + offset, moves)
    return moves


def _chariot_moves(board: Board, piece: Piece, origin: Square) -> set[Move]:
    moves: set[Move] = set()
    # 横竖直走，遇子停止
    for dr, dc in ORTHOGONAL:
        dest = origin + (dr, dc)
        while dest.is_valid():
            target = board.get(dest)
            if target is None:
                moves.add(Move(origin, dest))
            else:
                if target.side != piece.side:
                    moves.add(Move(origin, dest))
                break
            dest = dest + (dr, dc)
    return moves


def _cannon_moves(board: Board, piece: Piece, origin: Square) -> set[Move]:
    moves: set[Move] = set()
    # 横竖直走，吃子需隔一个棋子（炮架）
    for dr, dc in ORTHOGONAL:
        found_screen = False
        dest = origin + (dr, dc)
        while dest.is_valid():
            target = board.get(dest)
            if not found_screen:
                if target is None:
                    moves.add(Move(origin, dest))
                else:
                    found_screen = True
            elif target is not None:
                if target.side != piece.side:
                    moves.add(Move(origin, dest))
                break
            dest = dest + (dr, dc)
    return moves


def _soldier_moves(board: Board, piece: Piece, origin: Square) -> set[Move]:
    moves: set[Move] = set()
    # 始终可以向前走一格
    _add_if_valid(board, piece, origin, origin + (piece.side.forward, 0), moves)
    # 过河后可以左右走
    if not origin.is_on_own_side(piece.side):
        for dc in (-1, 1):
            _add_if_valid(board, piece, origin, origin + (0, dc), moves)
    return moves


MoveGenerator = Callable[[Board, Piece, Square], set[Move]]

GENERATORS: dict[PieceKind, MoveGenerator] = {
    PieceKind.GENERAL: _general_moves,
    PieceKind.ADVISOR: _advisor_moves,
    PieceKind.ELEPHANT: _elephant_moves,
    PieceKind.HORSE: _horse_moves,
    PieceKind.CHARIOT: _chariot_moves,
    PieceKind.CANNON: _cannon_moves,
    PieceKind.SOLDIER: _soldier_moves,
}


def pseudo_legal_moves(board: Board, square: Square) -> set[Move]:
    """获取某个点上棋子的所有伪合法走法

    空位或越界坐标返回空集合，不抛异常。
    """
    square = Square(*square)
    piece = board.get(square)
    if piece is None:
        return set()
    return GENERATORS[piece.kind](board, piece, square)


def all_moves(board: Board, side: Side) -> set[Move]:
    """获取某一方的所有伪合法走法"""
    moves: set[Move] = set()
    for sq, piece in board.pieces(side):
        moves |= GENERATORS[piece.kind](board, piece, sq)
    return moves


def moves_by_origin(board: Board, side: Side) -> dict[Square, set[Move]]:
    """按起点分组的走法，用于界面高亮"""
    return {sq: GENERATORS[piece.kind](board, piece, sq) for sq, piece in board.pieces(side)}


def is_pseudo_legal(board: Board, move: Move, side: Side) -> bool:
    """检查走法是否在该方的走法集合中（用于校验外部传入的走法）"""
    piece = board.get(move.from_sq)
    if piece is None or piece.side != side:
        return False
    return move in pseudo_legal_moves(board, move.from_sq)
