"""
游戏管理器

管理游戏实例和 AI 配置
"""

import random
from threading import Lock, RLock

from loguru import logger

from xiangqi_core.ai import LLMSuggester, MoveSuggester, SuggesterRegistry, play_suggested_move
from xiangqi_core.ai.base import Difficulty, SuggesterConfig
from xiangqi_core.ai.llm import TextCompletion
from xiangqi_core.api.models import GameMode
from xiangqi_core.game import Game, GameConfig
from xiangqi_core.types import Move, Side, Square


class GameManager:
    """游戏管理器

    管理多个游戏实例和对应的 AI 配置
    """

    def __init__(self, completion: TextCompletion | None = None):
        # 外部文本服务（供 llm 策略使用）
        self.completion = completion
        self._lock = Lock()
        self._games: dict[str, Game] = {}
        self._game_modes: dict[str, GameMode] = {}
        self._suggesters: dict[str, dict[Side, MoveSuggester]] = {}
        self._rngs: dict[str, random.Random] = {}
        # 每局一把锁，走棋、AI 应着和悔棋在锁内完成
        self._game_locks: dict[str, RLock] = {}

    def create_game(
        self,
        mode: GameMode,
        ai_side: str = "black",
        difficulty: Difficulty = Difficulty.MEDIUM,
        strategy: str = "random",
        fen: str | None = None,
        seed: int | None = None,
    ) -> Game:
        """创建新游戏

        Raises:
            FormatError: fen 格式错误
            ValueError: 未知策略
        """
        config = GameConfig(seed=seed)
        game = Game.from_fen(fen, config=config) if fen else Game(config=config)

        if mode == GameMode.HUMAN_VS_AI:
            ai_sides = [Side.RED if ai_side == "red" else Side.BLACK]
        elif mode == GameMode.AI_VS_AI:
            ai_sides = [Side.RED, Side.BLACK]
        else:
            ai_sides = []

        suggesters = {
            side: self._create_suggester(strategy, difficulty, seed) for side in ai_sides
        }

        with self._lock:
            self._games[game.game_id] = game
            self._game_modes[game.game_id] = mode
            self._suggesters[game.game_id] = suggesters
            self._rngs[game.game_id] = random.Random(seed)
            self._game_locks[game.game_id] = RLock()

        logger.info(f"Created game {game.game_id} ({mode.value}, strategy={strategy})")
        return game

    def _create_suggester(self, strategy: str, difficulty: Difficulty, seed: int | None) -> MoveSuggester:
        config = SuggesterConfig(name=strategy, difficulty=difficulty, seed=seed)
        suggester = SuggesterRegistry.create(strategy, config)
        if isinstance(suggester, LLMSuggester):
            suggester.complete = self.completion
        return suggester

    def get_game(self, game_id: str) -> Game | None:
        """获取游戏实例"""
        return self._games.get(game_id)

    def get_mode(self, game_id: str) -> GameMode | None:
        """获取游戏模式"""
        return self._game_modes.get(game_id)

    def is_ai_turn(self, game_id: str) -> bool:
        """检查是否是 AI 的回合"""
        game = self._games.get(game_id)
        if not game:
            return False
        return game.current_turn in self._suggesters.get(game_id, {})

    def game_lock(self, game_id: str) -> RLock:
        """获取某局的锁，同一局的读改写操作需要在锁内进行"""
        with self._lock:
            return self._game_locks.setdefault(game_id, RLock())

    def play_ai_move(self, game_id: str) -> Move | None:
        """让 AI 走一步（建议走法经过校验），返回实际走法"""
        game = self._games.get(game_id)
        if not game:
            return None

        with self.game_lock(game_id):
            suggester = self._suggesters.get(game_id, {}).get(game.current_turn)
            if not suggester:
                return None
            return play_suggested_move(game, suggester, self._rngs[game_id])

    def make_move(
        self, game_id: str, from_row: int, from_col: int, to_row: int, to_col: int
    ) -> bool:
        """执行走棋"""
        game = self._games.get(game_id)
        if not game:
            return False

        move = Move(Square(from_row, from_col), Square(to_row, to_col))
        with self.game_lock(game_id):
            return game.make_move(move)

    def undo_move(self, game_id: str) -> bool:
        """悔棋"""
        game = self._games.get(game_id)
        if not game:
            return False

        with self.game_lock(game_id):
            return game.undo_move()

    def delete_game(self, game_id: str) -> bool:
        """删除游戏"""
        with self._lock:
            if game_id not in self._games:
                return False

            del self._games[game_id]
            self._game_modes.pop(game_id, None)
            self._suggesters.pop(game_id, None)
            self._rngs.pop(game_id, None)
            self._game_locks.pop(game_id, None)
        return True

    def list_games(self) -> list[str]:
        """列出所有游戏 ID"""
        return list(self._games.keys())
