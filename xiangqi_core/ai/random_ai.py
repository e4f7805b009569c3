"""
随机建议者

随机选择一步走法，也是外部建议无效时的替补
"""

import random
from typing import ClassVar

from xiangqi_core.ai.base import MoveSuggester, SuggesterConfig, SuggesterRegistry
from xiangqi_core.board import Board
from xiangqi_core.moves import all_moves
from xiangqi_core.types import Move, Side


@SuggesterRegistry.register
class RandomSuggester(MoveSuggester):
    """随机建议者"""

    name: ClassVar[str] = "random"

    def __init__(self, config: SuggesterConfig | None = None):
        super().__init__(config)
        self._rng = random.Random(self.config.seed)

    def suggest(self, board: Board, side: Side) -> Move | None:
        moves = all_moves(board, side)
        if not moves:
            return None
        # 集合无序，排序后再选以保证同一种子结果可复现
        return self._rng.choice(sorted(moves))
