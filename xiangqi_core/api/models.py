"""
API 请求/响应模型

Pydantic models for API validation.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from xiangqi_core.ai.base import Difficulty


class GameMode(str, Enum):
    """游戏模式"""

    HUMAN_VS_HUMAN = "human_vs_human"
    HUMAN_VS_AI = "human_vs_ai"
    AI_VS_AI = "ai_vs_ai"


class SquareModel(BaseModel):
    """棋盘位置"""

    row: int = Field(ge=0, le=9)
    col: int = Field(ge=0, le=8)


class MoveModel(BaseModel):
    """走法信息"""

    model_config = ConfigDict(populate_by_name=True)

    from_sq: SquareModel = Field(alias="from")
    to_sq: SquareModel = Field(alias="to")


class MoveRequest(MoveModel):
    """走棋请求"""


class CreateGameRequest(BaseModel):
    """创建游戏请求"""

    mode: GameMode = GameMode.HUMAN_VS_AI
    # AI 执红还是执黑（仅 human_vs_ai 模式）
    ai_side: str = Field(default="black", pattern="^(red|black)$")
    difficulty: Difficulty = Difficulty.MEDIUM
    strategy: str = "random"
    # 起始局面，缺省为标准开局
    fen: str | None = None
    seed: int | None = None


class PieceModel(BaseModel):
    """棋子信息"""

    kind: str
    side: str
    square: SquareModel


class GameStateResponse(BaseModel):
    """游戏状态响应"""

    game_id: str
    mode: str
    fen: str
    pieces: list[PieceModel]
    current_turn: str
    result: str
    winner: str | None
    legal_moves: list[MoveModel]
    last_move: MoveModel | None
    move_count: int


class MoveResponse(BaseModel):
    """走棋响应"""

    success: bool
    game_state: GameStateResponse | None = None
    error: str | None = None
    ai_move: MoveModel | None = None


class HighlightResponse(BaseModel):
    """某个棋子可走的目标点"""

    row: int
    col: int
    destinations: list[SquareModel]


class AIInfoResponse(BaseModel):
    """AI 信息响应"""

    available_strategies: list[str]
    difficulties: list[str]
