"""
FastAPI 应用

主应用和路由定义
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from xiangqi_core import __version__
from xiangqi_core.ai import SuggesterRegistry
from xiangqi_core.ai.base import Difficulty
from xiangqi_core.api.game_manager import GameManager
from xiangqi_core.api.models import (
    AIInfoResponse,
    CreateGameRequest,
    GameMode,
    GameStateResponse,
    HighlightResponse,
    MoveModel,
    MoveRequest,
    MoveResponse,
    PieceModel,
    SquareModel,
)
from xiangqi_core.errors import FormatError
from xiangqi_core.game import Game
from xiangqi_core.types import Move, Square


def create_app(manager: GameManager | None = None) -> FastAPI:
    """创建 FastAPI 应用"""
    manager = manager or GameManager()

    app = FastAPI(
        title="Xiangqi API",
        description="Chinese Chess (Xiangqi) rules engine API",
        version=__version__,
    )
    app.state.game_manager = manager

    # CORS 配置
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _get_game_or_404(game_id: str) -> Game:
        game = manager.get_game(game_id)
        if not game:
            raise HTTPException(status_code=404, detail="Game not found")
        return game

    def _state(game: Game) -> GameStateResponse:
        mode = manager.get_mode(game.game_id) or GameMode.HUMAN_VS_HUMAN
        return _game_to_response(game, mode)

    # 路由
    @app.get("/")
    def root():
        """API 根路径"""
        return {"message": "Xiangqi API", "version": __version__}

    @app.get("/health")
    def health():
        """健康检查"""
        return {"status": "healthy"}

    @app.get("/ai/info", response_model=AIInfoResponse)
    def get_ai_info():
        """获取 AI 信息"""
        return AIInfoResponse(
            available_strategies=SuggesterRegistry.list_names(),
            difficulties=[d.value for d in Difficulty],
        )

    @app.post("/games", response_model=GameStateResponse)
    def create_game(request: CreateGameRequest):
        """创建新游戏"""
        try:
            game = manager.create_game(
                mode=request.mode,
                ai_side=request.ai_side,
                difficulty=request.difficulty,
                strategy=request.strategy,
                fen=request.fen,
                seed=request.seed,
            )
        except FormatError as e:
            raise HTTPException(status_code=400, detail=f"Invalid FEN: {e}") from e
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        return _game_to_response(game, request.mode)

    @app.get("/games")
    def list_games():
        """列出所有游戏"""
        return {"games": manager.list_games()}

    @app.get("/games/{game_id}", response_model=GameStateResponse)
    def get_game(game_id: str):
        """获取游戏状态"""
        return _state(_get_game_or_404(game_id))

    @app.get("/games/{game_id}/fen")
    def get_fen(game_id: str):
        """获取当前局面 FEN"""
        return {"fen": _get_game_or_404(game_id).fen()}

    @app.get("/games/{game_id}/moves", response_model=HighlightResponse)
    def get_moves(game_id: str, row: int, col: int):
        """获取某个棋子可走的目标点（用于高亮）"""
        game = _get_game_or_404(game_id)
        moves = game.moves_from(Square(row, col))
        return HighlightResponse(
            row=row,
            col=col,
            destinations=[_square_model(m.to_sq) for m in sorted(moves)],
        )

    @app.post("/games/{game_id}/move", response_model=MoveResponse)
    def make_move(game_id: str, request: MoveRequest):
        """执行走棋"""
        game = _get_game_or_404(game_id)

        # 检查、走棋、AI 应着在同一把锁内完成
        with manager.game_lock(game_id):
            # 检查游戏是否结束
            if game.is_over:
                return MoveResponse(success=False, error="Game has ended")

            # 检查是否是 AI 的回合
            if manager.is_ai_turn(game_id):
                return MoveResponse(success=False, error="It's AI's turn")

            success = manager.make_move(
                game_id,
                request.from_sq.row,
                request.from_sq.col,
                request.to_sq.row,
                request.to_sq.col,
            )
            if not success:
                return MoveResponse(success=False, error="Invalid move")

            # 如果游戏还在进行且是 AI 回合，让 AI 走棋
            ai_move = None
            if not game.is_over and manager.is_ai_turn(game_id):
                ai_move = manager.play_ai_move(game_id)

            return MoveResponse(
                success=True,
                game_state=_state(game),
                ai_move=_move_model(ai_move) if ai_move else None,
            )

    @app.post("/games/{game_id}/ai-move", response_model=MoveResponse)
    def request_ai_move(game_id: str):
        """请求 AI 走棋（用于 AI vs AI 模式）"""
        game = _get_game_or_404(game_id)

        with manager.game_lock(game_id):
            if game.is_over:
                return MoveResponse(success=False, error="Game has ended")

            if not manager.is_ai_turn(game_id):
                return MoveResponse(success=False, error="Not AI's turn")

            ai_move = manager.play_ai_move(game_id)
            if not ai_move:
                return MoveResponse(success=False, error="AI could not find a move")

            return MoveResponse(success=True, game_state=_state(game), ai_move=_move_model(ai_move))

    @app.post("/games/{game_id}/undo", response_model=MoveResponse)
    def undo_move(game_id: str):
        """悔棋"""
        game = _get_game_or_404(game_id)
        with manager.game_lock(game_id):
            if not manager.undo_move(game_id):
                return MoveResponse(success=False, error="Nothing to undo")
            return MoveResponse(success=True, game_state=_state(game))

    @app.get("/games/{game_id}/history")
    def get_history(game_id: str):
        """获取走棋历史（含 ICCS 记谱）"""
        game = _get_game_or_404(game_id)
        with manager.game_lock(game_id):
            return {"game_id": game_id, "moves": game.get_move_history()}

    @app.delete("/games/{game_id}")
    def delete_game(game_id: str):
        """删除游戏"""
        if not manager.delete_game(game_id):
            raise HTTPException(status_code=404, detail="Game not found")
        return {"message": "Game deleted"}

    return app


def _square_model(sq: Square) -> SquareModel:
    return SquareModel(row=sq.row, col=sq.col)


def _move_model(move: Move) -> MoveModel:
    return MoveModel(from_sq=_square_model(move.from_sq), to_sq=_square_model(move.to_sq))


def _game_to_response(game: Game, mode: GameMode) -> GameStateResponse:
    """将游戏对象转换为响应模型"""
    pieces = [
        PieceModel(kind=piece.kind.value, side=piece.side.value, square=_square_model(sq))
        for sq, piece in game.board.pieces()
    ]

    return GameStateResponse(
        game_id=game.game_id,
        mode=mode.value,
        fen=game.fen(),
        pieces=pieces,
        current_turn=game.current_turn.value,
        result=game.result.value,
        winner=game.winner.value if game.winner else None,
        legal_moves=[_move_model(m) for m in sorted(game.legal_moves())],
        last_move=_move_model(game.last_move) if game.last_move else None,
        move_count=len(game.move_history),
    )
