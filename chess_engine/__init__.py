"""Chess rules engine with a minimax / alpha-beta playing bot."""

from chess_engine.core import (
    STARTING_FEN,
    CastlingRights,
    CastlingSide,
    ChessBoard,
    ChessBot,
    Color,
    Difficulty,
    GameStatus,
    KingNotFoundError,
    Move,
    Piece,
    PieceType,
    Square,
)
from chess_engine.main import GameSession

__version__ = "1.0.0"
