"""
Xiangqi Core

Chinese Chess rules engine: board, FEN codec, pseudo-legal move generation
and terminal-state detection.
"""

from xiangqi_core.board import Board
from xiangqi_core.errors import FormatError
from xiangqi_core.fen import INITIAL_FEN, decode, decode_side, encode, initial_board
from xiangqi_core.game import Game, GameConfig
from xiangqi_core.moves import all_moves, is_pseudo_legal, moves_by_origin, pseudo_legal_moves
from xiangqi_core.rules import game_result, terminal_winner
from xiangqi_core.types import GameResult, Move, Piece, PieceKind, Side, Square

__version__ = "0.1.0"

__all__ = [
    "INITIAL_FEN",
    "Board",
    "FormatError",
    "Game",
    "GameConfig",
    "GameResult",
    "Move",
    "Piece",
    "PieceKind",
    "Side",
    "Square",
    "all_moves",
    "decode",
    "decode_side",
    "encode",
    "game_result",
    "initial_board",
    "is_pseudo_legal",
    "moves_by_origin",
    "pseudo_legal_moves",
    "terminal_winner",
]
