"""
外部文本服务建议者

把 FEN 和难度拼成提示语，交给注入的 ``complete(system, prompt)`` 调用，
再把返回的 JSON 解析成走法。这里不做任何网络请求，传输由调用方提供。
"""

from typing import ClassVar, Protocol

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from xiangqi_core.ai.base import Difficulty, MoveSuggester, SuggesterConfig, SuggesterRegistry
from xiangqi_core.board import Board
from xiangqi_core.fen import encode
from xiangqi_core.types import Move, Side, Square


class TextCompletion(Protocol):
    """外部文本服务"""

    def __call__(self, system: str, prompt: str) -> str: ...


DIFFICULTY_HINTS = {
    Difficulty.EASY: "make decent but non-optimal moves",
    Difficulty.MEDIUM: "play standard solid moves",
    Difficulty.HARD: "play the best possible move you can find",
}


class SquarePayload(BaseModel):
    row: int = Field(ge=0, le=9)
    col: int = Field(ge=0, le=8)


class MovePayload(BaseModel):
    """外部服务返回的走法 ``{"from": {...}, "to": {...}}``"""

    from_sq: SquarePayload = Field(alias="from")
    to_sq: SquarePayload = Field(alias="to")

    def to_move(self) -> Move:
        return Move(
            Square(self.from_sq.row, self.from_sq.col),
            Square(self.to_sq.row, self.to_sq.col),
        )


def build_system_instruction(side: Side, difficulty: Difficulty) -> str:
    """生成系统提示语"""
    case = "uppercase" if side == Side.RED else "lowercase"
    return (
        "You are a Xiangqi (Chinese Chess) engine.\n"
        f"Play a move for {side.name} ({case} pieces). The board is given in FEN.\n"
        f"Difficulty: {difficulty.value}, {DIFFICULTY_HINTS[difficulty]}.\n"
        'Output strict JSON: {"from": {"row": number, "col": number}, '
        '"to": {"row": number, "col": number}}.\n'
        "Row indices are 0-9 (0 is top, 9 is bottom). Col indices are 0-8 (0 is left)."
    )


def build_prompt(board: Board, side: Side) -> str:
    """生成用户提示语"""
    return f"Current FEN: {encode(board, side)}\nIt is {side.value}'s turn. What is your move?"


def parse_suggestion(text: str | None) -> Move | None:
    """解析外部服务返回的 JSON，格式不对返回 None"""
    if not text:
        return None
    try:
        payload = MovePayload.model_validate_json(text)
    except ValidationError as e:
        logger.warning(f"Unparseable move suggestion: {e.error_count()} error(s) in {text!r}")
        return None
    return payload.to_move()


@SuggesterRegistry.register
class LLMSuggester(MoveSuggester):
    """通过外部文本服务获取建议"""

    name: ClassVar[str] = "llm"

    def __init__(self, config: SuggesterConfig | None = None, complete: TextCompletion | None = None):
        super().__init__(config)
        self.complete = complete

    def suggest(self, board: Board, side: Side) -> Move | None:
        if self.complete is None:
            logger.warning("LLMSuggester has no completion transport configured")
            return None

        system = build_system_instruction(side, self.config.difficulty)
        prompt = build_prompt(board, side)
        try:
            reply = self.complete(system, prompt)
        except Exception:
            # 外部服务的任何失败都不能中断对局
            logger.exception("Move suggestion service failed")
            return None
        return parse_suggestion(reply)
