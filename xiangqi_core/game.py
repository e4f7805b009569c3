"""
游戏管理类

管理棋盘、走子方和历史记录。棋盘规则本身不保存任何状态，
回合、历史、胜负都由这里持有。
"""

from dataclasses import dataclass
from uuid import uuid4

import arrow
from loguru import logger

from xiangqi_core.board import Board
from xiangqi_core.fen import decode, decode_side, encode, initial_board
from xiangqi_core.moves import all_moves, pseudo_legal_moves
from xiangqi_core.rules import terminal_winner
from xiangqi_core.types import GameResult, Move, Piece, Side, Square


@dataclass
class MoveRecord:
    """走棋记录"""

    move: Move
    piece: Piece
    captured: Piece | None
    side: Side
    played_at: arrow.Arrow

    @property
    def notation(self) -> str:
        notation = self.move.to_iccs()
        if self.captured is not None:
            notation += "x"
        return notation

    def to_dict(self) -> dict:
        return {
            "move": self.move.to_dict(),
            "notation": self.notation,
            "piece": self.piece.kind.value,
            "side": self.side.value,
            "captured": self.captured.kind.value if self.captured else None,
            "played_at": self.played_at.isoformat(),
        }


@dataclass
class GameConfig:
    """游戏配置"""

    # 随机种子（用于外部走法无效时的替补走法）
    seed: int | None = None
    # 最多保留的历史步数，None 表示不限
    max_history: int | None = None


class Game:
    """象棋游戏"""

    def __init__(
        self,
        game_id: str | None = None,
        config: GameConfig | None = None,
        board: Board | None = None,
        turn: Side = Side.RED,
    ):
        self.game_id = game_id or str(uuid4())
        self.config = config or GameConfig()
        self.board = board if board is not None else initial_board()
        self.current_turn = turn
        self.move_history: list[MoveRecord] = []
        self.created_at = arrow.utcnow()
        self.winner = terminal_winner(self.board, self.current_turn)

    @classmethod
    def from_fen(cls, fen: str, game_id: str | None = None, config: GameConfig | None = None) -> "Game":
        """从 FEN 创建游戏

        Raises:
            FormatError: FEN 格式错误
        """
        return cls(game_id=game_id, config=config, board=decode(fen), turn=decode_side(fen))

    @property
    def result(self) -> GameResult:
        return GameResult.for_winner(self.winner)

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @property
    def last_move(self) -> Move | None:
        if not self.move_history:
            return None
        return self.move_history[-1].move

    def legal_moves(self) -> set[Move]:
        """获取当前方的所有走法"""
        return all_moves(self.board, self.current_turn)

    def moves_from(self, square: Square) -> set[Move]:
        """获取当前方某个棋子的走法（用于高亮），对方棋子或空位返回空集合"""
        piece = self.board.get(square)
        if piece is None or piece.side != self.current_turn:
            return set()
        return pseudo_legal_moves(self.board, square)

    def make_move(self, move: Move) -> bool:
        """执行走棋

        返回：是否成功
        """
        if self.is_over:
            return False

        if move not in self.legal_moves():
            return False

        move = Move(Square(*move.from_sq), Square(*move.to_sq))
        piece = self.board.get(move.from_sq)
        captured = self.board.apply(move)
        self.move_history.append(
            MoveRecord(move, piece, captured, self.current_turn, arrow.utcnow())
        )
        if self.config.max_history is not None and len(self.move_history) > self.config.max_history:
            del self.move_history[0]
        logger.debug(f"Game {self.game_id}: {self.current_turn.value} played {move.to_iccs()}")

        # 切换回合，并以即将走棋的一方判定胜负
        self.current_turn = self.current_turn.opposite
        self.winner = terminal_winner(self.board, self.current_turn)
        if self.winner is not None:
            logger.info(f"Game {self.game_id} over: {self.winner.value} wins")

        return True

    def undo_move(self) -> bool:
        """撤销上一步"""
        if not self.move_history:
            return False

        record = self.move_history.pop()
        self.board.undo(record.move, record.captured)
        self.current_turn = record.side
        self.winner = None
        return True

    def fen(self) -> str:
        """当前局面的 FEN"""
        return encode(self.board, self.current_turn)

    def to_dict(self) -> dict:
        """序列化为字典"""
        return {
            "game_id": self.game_id,
            "board": self.board.to_dict(),
            "fen": self.fen(),
            "current_turn": self.current_turn.value,
            "result": self.result.value,
            "winner": self.winner.value if self.winner else None,
            "move_count": len(self.move_history),
            "created_at": self.created_at.isoformat(),
            "legal_moves": [m.to_dict() for m in sorted(self.legal_moves())],
        }

    def get_move_history(self) -> list[dict]:
        """获取走棋历史"""
        return [record.to_dict() for record in self.move_history]

    def __repr__(self) -> str:
        return (
            f"Game({self.game_id}, turn={self.current_turn.value}, moves={len(self.move_history)})"
        )
