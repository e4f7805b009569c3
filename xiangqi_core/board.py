"""
棋盘类定义

10 行 x 9 列的交叉点网格，每个点上为一个棋子或空
"""

from typing import Iterator

from xiangqi_core.types import (
    BOARD_COLS,
    BOARD_ROWS,
    MAX_PIECES,
    Move,
    Piece,
    PieceKind,
    Side,
    Square,
)


class Board:
    """象棋棋盘

    坐标系统：
    - row 0-9: 0 是黑方底线，9 是红方底线
    - col 0-8: 从左到右

    棋盘本身不知道轮到谁走，也不保存历史；这些由调用方（Game）持有。
    """

    def __init__(self):
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_COLS for _ in range(BOARD_ROWS)
        ]
        self._count = 0

    def get(self, sq: Square) -> Piece | None:
        """获取指定位置的棋子，越界返回 None"""
        row, col = sq
        if not (0 <= row < BOARD_ROWS and 0 <= col < BOARD_COLS):
            return None
        return self._grid[row][col]

    def set(self, sq: Square, piece: Piece | None) -> None:
        """设置指定位置的棋子（None 表示清空）"""
        row, col = sq
        if not (0 <= row < BOARD_ROWS and 0 <= col < BOARD_COLS):
            raise ValueError(f"Square off board: {sq}")
        previous = self._grid[row][col]
        if piece is not None and previous is None and self._count >= MAX_PIECES:
            raise ValueError(f"Board already holds {MAX_PIECES} pieces")
        self._count += (piece is not None) - (previous is not None)
        self._grid[row][col] = piece

    def remove(self, sq: Square) -> Piece | None:
        """移除并返回指定位置的棋子"""
        piece = self.get(sq)
        if piece is not None:
            self.set(sq, None)
        return piece

    def apply(self, move: Move) -> Piece | None:
        """执行走棋，返回被吃的棋子（如果有）

        目标点上原有的棋子直接被覆盖。
        """
        piece = self.get(move.from_sq)
        if piece is None:
            raise ValueError(f"No piece at square {move.from_sq}")
        captured = self.remove(move.to_sq)
        self.set(move.from_sq, None)
        self.set(move.to_sq, piece)
        return captured

    def undo(self, move: Move, captured: Piece | None) -> None:
        """撤销走棋"""
        piece = self.get(move.to_sq)
        if piece is None:
            raise ValueError(f"No piece at square {move.to_sq}")
        self.set(move.to_sq, captured)
        self.set(move.from_sq, piece)

    def pieces(self, side: Side | None = None) -> Iterator[tuple[Square, Piece]]:
        """按行优先顺序遍历棋子，可按阵营过滤"""
        for row in range(BOARD_ROWS):
            for col in range(BOARD_COLS):
                piece = self._grid[row][col]
                if piece is not None and (side is None or piece.side == side):
                    yield Square(row, col), piece

    def find_general(self, side: Side) -> Square | None:
        """找到指定阵营的将/帅位置"""
        for sq, piece in self.pieces(side):
            if piece.kind == PieceKind.GENERAL:
                return sq
        return None

    def rank(self, row: int) -> list[Piece | None]:
        """返回某一行的拷贝"""
        return list(self._grid[row])

    def piece_count(self, side: Side | None = None) -> int:
        if side is None:
            return self._count
        return sum(1 for _ in self.pieces(side))

    def copy(self) -> "Board":
        """创建棋盘拷贝（棋子是不可变值，浅拷贝每行即可）"""
        new_board = Board.__new__(Board)
        new_board._grid = [list(row) for row in self._grid]
        new_board._count = self._count
        return new_board

    def to_dict(self) -> dict:
        """序列化为字典"""
        return {
            "pieces": [
                {
                    "kind": piece.kind.value,
                    "side": piece.side.value,
                    "square": {"row": sq.row, "col": sq.col},
                }
                for sq, piece in self.pieces()
            ]
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __iter__(self) -> Iterator[tuple[Square, Piece]]:
        return self.pieces()

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"Board({self._count} pieces)"
