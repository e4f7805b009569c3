"""棋盘文本显示"""

from xiangqi_core.board import Board
from xiangqi_core.types import BOARD_COLS, BOARD_ROWS, PieceKind, Side, Square

# 棋子符号映射
PIECE_SYMBOLS = {
    # 红方
    (Side.RED, PieceKind.GENERAL): "帥",
    (Side.RED, PieceKind.ADVISOR): "仕",
    (Side.RED, PieceKind.ELEPHANT): "相",
    (Side.RED, PieceKind.HORSE): "傌",
    (Side.RED, PieceKind.CHARIOT): "俥",
    (Side.RED, PieceKind.CANNON): "炮",
    (Side.RED, PieceKind.SOLDIER): "兵",
    # 黑方
    (Side.BLACK, PieceKind.GENERAL): "將",
    (Side.BLACK, PieceKind.ADVISOR): "士",
    (Side.BLACK, PieceKind.ELEPHANT): "象",
    (Side.BLACK, PieceKind.HORSE): "馬",
    (Side.BLACK, PieceKind.CHARIOT): "車",
    (Side.BLACK, PieceKind.CANNON): "砲",
    (Side.BLACK, PieceKind.SOLDIER): "卒",
}

EMPTY_SYMBOL = "・"
HIGHLIGHT_SYMBOL = "＊"


def render_board(board: Board, highlights: set[Square] | None = None, markup: bool = False) -> str:
    """返回棋盘的文本表示

    Args:
        board: 棋盘
        highlights: 需要标记的目标点（空位显示为 ＊）
        markup: 是否输出 rich 标记（红方棋子着红色）
    """
    highlights = highlights or set()
    lines = ["  ａ ｂ ｃ ｄ ｅ ｆ ｇ ｈ ｉ"]
    for row in range(BOARD_ROWS):
        cells = []
        for col in range(BOARD_COLS):
            sq = Square(row, col)
            piece = board.get(sq)
            if piece is None:
                cells.append(HIGHLIGHT_SYMBOL if sq in highlights else EMPTY_SYMBOL)
                continue
            symbol = PIECE_SYMBOLS[(piece.side, piece.kind)]
            if markup:
                style = "bold red" if piece.side == Side.RED else "bold"
                if sq in highlights:
                    style += " reverse"
                symbol = f"[{style}]{symbol}[/]"
            cells.append(symbol)
        lines.append(f"{BOARD_ROWS - 1 - row} " + " ".join(cells))
        if row == 4:
            lines.append("  " + "～" * (BOARD_COLS * 2 - 1))
    return "\n".join(lines)
