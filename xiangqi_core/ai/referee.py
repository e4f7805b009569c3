"""
外部走法校验

外部建议的走法一律视为不可信：必须在走子方的走法集合中才会被采用，
否则随机替换为一步可走的走法。
"""

import random

from loguru import logger

from xiangqi_core.ai.base import MoveSuggester
from xiangqi_core.board import Board
from xiangqi_core.game import Game
from xiangqi_core.moves import all_moves
from xiangqi_core.types import Move, Side, Square


def resolve_suggestion(
    board: Board,
    side: Side,
    suggested: Move | None,
    rng: random.Random | None = None,
) -> Move | None:
    """校验建议走法

    Returns:
        合法的建议走法；不合法时返回随机的一步走法；无棋可走时返回 None
    """
    moves = all_moves(board, side)
    if suggested is not None and suggested in moves:
        return Move(Square(*suggested.from_sq), Square(*suggested.to_sq))

    if not moves:
        return None

    fallback = (rng or random.Random()).choice(sorted(moves))
    if suggested is None:
        logger.warning(f"No usable suggestion for {side.value}, falling back to {fallback.to_iccs()}")
    else:
        logger.warning(
            f"Rejected suggestion {suggested} for {side.value}, falling back to {fallback.to_iccs()}"
        )
    return fallback


def play_suggested_move(game: Game, suggester: MoveSuggester, rng: random.Random | None = None) -> Move | None:
    """让建议者为当前方走一步，返回实际执行的走法"""
    if game.is_over:
        return None

    side = game.current_turn
    suggested = suggester.suggest(game.board.copy(), side)
    move = resolve_suggestion(game.board, side, suggested, rng)
    if move is None:
        return None
    game.make_move(move)
    return move
