"""
走法建议接口

走法的搜索和评估交给外部服务，这里只定义可插拔的建议者接口和注册机制。
所有建议都是不可信输入，使用前必须经过 referee 校验。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from xiangqi_core.board import Board
from xiangqi_core.types import Move, Side


class Difficulty(str, Enum):
    """难度等级（只影响给外部服务的提示语）"""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass
class SuggesterConfig:
    """建议者配置"""

    name: str = "AI"
    difficulty: Difficulty = Difficulty.MEDIUM
    # 随机种子
    seed: int | None = None


class MoveSuggester(ABC):
    """走法建议者接口

    所有实现必须继承此类
    """

    # 名称，用于注册和识别
    name: ClassVar[str] = "base"

    def __init__(self, config: SuggesterConfig | None = None):
        self.config = config or SuggesterConfig()

    @abstractmethod
    def suggest(self, board: Board, side: Side) -> Move | None:
        """给出一步建议走法

        Args:
            board: 当前棋盘（不得修改）
            side: 走子方

        Returns:
            建议的走法，无法给出时返回 None
        """


class SuggesterRegistry:
    """管理建议者的注册和创建"""

    _suggesters: ClassVar[dict[str, type[MoveSuggester]]] = {}

    @classmethod
    def register(cls, suggester_class: type[MoveSuggester]) -> type[MoveSuggester]:
        """注册建议者（可用作装饰器）"""
        cls._suggesters[suggester_class.name] = suggester_class
        return suggester_class

    @classmethod
    def create(cls, name: str, config: SuggesterConfig | None = None) -> MoveSuggester:
        """创建指定名称的建议者实例"""
        if name not in cls._suggesters:
            available = ", ".join(cls._suggesters.keys())
            raise ValueError(f"Unknown suggester: {name}. Available: {available}")
        return cls._suggesters[name](config)

    @classmethod
    def list_names(cls) -> list[str]:
        """列出所有已注册的建议者"""
        return list(cls._suggesters.keys())
