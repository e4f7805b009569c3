"""
核心类型定义

定义象棋中所有基础数据类型

坐标系统：
- row 0-9: 0 是黑方底线（远离红方），9 是红方底线
- col 0-8: 从左到右
"""

from enum import Enum
from typing import NamedTuple

from xiangqi_core.errors import FormatError

BOARD_ROWS = 10
BOARD_COLS = 9
MAX_PIECES = 32

# 河界在 row 4 与 row 5 之间
RIVER_TOP_ROW = 4
RIVER_BOTTOM_ROW = 5

PALACE_COLS = (3, 5)

# ICCS 记谱：列 a-i，行 0-9（从红方底线数起）
FILE_CHARS = "abcdefghi"


class Side(Enum):
    """阵营"""

    RED = "red"
    BLACK = "black"

    @property
    def opposite(self) -> "Side":
        """获取对方阵营"""
        return Side.BLACK if self == Side.RED else Side.RED

    @property
    def forward(self) -> int:
        """前进方向的行增量"""
        return -1 if self == Side.RED else 1


class PieceKind(Enum):
    """棋子类型"""

    # 将/帅
    GENERAL = "general"
    # 士/仕
    ADVISOR = "advisor"
    # 象/相
    ELEPHANT = "elephant"
    # 马
    HORSE = "horse"
    # 车
    CHARIOT = "chariot"
    # 炮
    CANNON = "cannon"
    # 卒/兵
    SOLDIER = "soldier"


class Square(NamedTuple):
    """棋盘交叉点 (row, col)"""

    row: int
    col: int

    def is_valid(self) -> bool:
        """检查位置是否在棋盘范围内"""
        return 0 <= self.row < BOARD_ROWS and 0 <= self.col < BOARD_COLS

    def is_in_palace(self, side: Side) -> bool:
        """检查位置是否在该方九宫格内"""
        if not (PALACE_COLS[0] <= self.col <= PALACE_COLS[1]):
            return False
        if side == Side.RED:
            return 7 <= self.row <= 9
        return 0 <= self.row <= 2

    def is_on_own_side(self, side: Side) -> bool:
        """检查位置是否在己方半场（未过河）"""
        if side == Side.RED:
            return RIVER_BOTTOM_ROW <= self.row < BOARD_ROWS
        return 0 <= self.row <= RIVER_TOP_ROW

    def __add__(self, other: tuple[int, int]) -> "Square":
        """位置加偏移量"""
        return Square(self.row + other[0], self.col + other[1])

    def to_iccs(self) -> str:
        """转换为 ICCS 坐标，例如 Square(9, 4) -> 'e0'"""
        return f"{FILE_CHARS[self.col]}{BOARD_ROWS - 1 - self.row}"

    @classmethod
    def from_iccs(cls, text: str) -> "Square":
        """从 ICCS 坐标解析"""
        if len(text) != 2 or text[0] not in FILE_CHARS or text[1] not in "0123456789":
            raise FormatError(f"Invalid square: {text!r}")
        return cls(BOARD_ROWS - 1 - int(text[1]), FILE_CHARS.index(text[0]))


class Piece(NamedTuple):
    """棋子（不可变值）"""

    kind: PieceKind
    side: Side

    def __repr__(self) -> str:
        return f"{self.kind.value}({self.side.value})"


class Move(NamedTuple):
    """走棋动作

    不记录被吃的棋子，吃子由执行时的棋盘内容决定
    """

    from_sq: Square
    to_sq: Square

    def to_iccs(self) -> str:
        """转换为 ICCS 记谱，例如 'h2e2'"""
        return self.from_sq.to_iccs() + self.to_sq.to_iccs()

    @classmethod
    def from_iccs(cls, text: str) -> "Move":
        """从 ICCS 记谱解析，允许 'h2e2' 或 'h2-e2'"""
        cleaned = text.strip().lower().replace("-", "")
        if len(cleaned) != 4:
            raise FormatError(f"Invalid move notation: {text!r}")
        return cls(Square.from_iccs(cleaned[:2]), Square.from_iccs(cleaned[2:]))

    def to_dict(self) -> dict:
        """序列化为字典"""
        return {
            "from": {"row": self.from_sq.row, "col": self.from_sq.col},
            "to": {"row": self.to_sq.row, "col": self.to_sq.col},
        }


class GameResult(Enum):
    """游戏结果"""

    ONGOING = "ongoing"
    RED_WIN = "red_win"
    BLACK_WIN = "black_win"

    @classmethod
    def for_winner(cls, winner: Side | None) -> "GameResult":
        if winner is None:
            return cls.ONGOING
        return cls.RED_WIN if winner == Side.RED else cls.BLACK_WIN
