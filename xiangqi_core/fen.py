"""FEN 局面编码与解析

格式：``<棋盘> <走子方> - - 0 1``

- 棋盘部分 10 行，以 ``/`` 分隔，从 row 0（黑方底线）开始
- 数字 1-9 表示连续空位，字母表示棋子
- 大写 = 红方，小写 = 黑方
- 走子方：``w`` = 红方，``b`` = 黑方

后面的两个 ``-`` 和回合计数只是占位，本模块不追踪它们。
"""

from __future__ import annotations

from xiangqi_core.board import Board
from xiangqi_core.errors import FormatError
from xiangqi_core.types import BOARD_COLS, BOARD_ROWS, MAX_PIECES, Piece, PieceKind, Side, Square

# =============================================================================
# 常量定义
# =============================================================================

# 棋子类型 -> 字符（编码只输出这些字符）
PIECE_TO_CHAR: dict[PieceKind, str] = {
    PieceKind.GENERAL: "k",
    PieceKind.ADVISOR: "a",
    PieceKind.ELEPHANT: "b",
    PieceKind.HORSE: "n",
    PieceKind.CHARIOT: "r",
    PieceKind.CANNON: "c",
    PieceKind.SOLDIER: "p",
}

# 字符 -> 棋子类型，额外接受旧写法 e(象) / h(马)
CHAR_TO_PIECE: dict[str, PieceKind] = {v: k for k, v in PIECE_TO_CHAR.items()}
CHAR_TO_PIECE.update({"e": PieceKind.ELEPHANT, "h": PieceKind.HORSE})

RANK_SEPARATOR = "/"

SIDE_TO_CHAR: dict[Side, str] = {Side.RED: "w", Side.BLACK: "b"}
CHAR_TO_SIDE: dict[str, Side] = {"w": Side.RED, "r": Side.RED, "b": Side.BLACK}

INITIAL_FEN = "rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w - - 0 1"


# =============================================================================
# 解析
# =============================================================================


def decode(text: str) -> Board:
    """解析 FEN 字符串的棋盘部分

    Args:
        text: FEN 字符串，走子方等尾部字段可有可无

    Returns:
        Board

    Raises:
        FormatError: 行数不是 10、某行列数不是 9、出现未知字符或棋子超过 32 个
    """
    fields = text.split()
    if not fields:
        raise FormatError("Empty FEN")

    ranks = fields[0].split(RANK_SEPARATOR)
    if len(ranks) != BOARD_ROWS:
        raise FormatError(f"Invalid board: expected {BOARD_ROWS} ranks, got {len(ranks)}")

    board = Board()
    total = 0
    for row, rank_str in enumerate(ranks):
        col = 0
        for ch in rank_str:
            if ch in "123456789":
                col += int(ch)
            elif ch.isascii() and ch.lower() in CHAR_TO_PIECE:
                if col >= BOARD_COLS:
                    raise FormatError(f"Rank {row} has more than {BOARD_COLS} columns")
                total += 1
                if total > MAX_PIECES:
                    raise FormatError(f"Too many pieces: more than {MAX_PIECES}")
                side = Side.RED if ch.isupper() else Side.BLACK
                board.set(Square(row, col), Piece(CHAR_TO_PIECE[ch.lower()], side))
                col += 1
            else:
                raise FormatError(f"Invalid character in rank {row}: {ch!r}")

            if col > BOARD_COLS:
                raise FormatError(f"Rank {row} has more than {BOARD_COLS} columns")

        if col != BOARD_COLS:
            raise FormatError(f"Rank {row} has {col} columns, expected {BOARD_COLS}")

    return board


def decode_side(text: str) -> Side:
    """解析走子方字段，缺省为红方"""
    fields = text.split()
    if len(fields) < 2:
        return Side.RED
    side = CHAR_TO_SIDE.get(fields[1].lower())
    if side is None:
        raise FormatError(f"Invalid side to move: {fields[1]!r}")
    return side


# =============================================================================
# 生成
# =============================================================================


def piece_to_char(piece: Piece) -> str:
    """棋子转 FEN 字符"""
    char = PIECE_TO_CHAR[piece.kind]
    return char.upper() if piece.side == Side.RED else char


def encode(board: Board, side: Side) -> str:
    """棋盘转 FEN 字符串

    Args:
        board: 棋盘
        side: 走子方

    Returns:
        FEN 字符串，例如初始局面返回 INITIAL_FEN
    """
    ranks = []
    for row in range(BOARD_ROWS):
        rank_str = ""
        empty_count = 0
        for piece in board.rank(row):
            if piece is None:
                empty_count += 1
            else:
                if empty_count > 0:
                    rank_str += str(empty_count)
                    empty_count = 0
                rank_str += piece_to_char(piece)
        if empty_count > 0:
            rank_str += str(empty_count)
        ranks.append(rank_str)
    return f"{RANK_SEPARATOR.join(ranks)} {SIDE_TO_CHAR[side]} - - 0 1"


def initial_board() -> Board:
    """标准开局棋盘"""
    return decode(INITIAL_FEN)
