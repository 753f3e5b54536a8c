"""Core engine components: rules engine, evaluators and search bot."""

from .board import ChessBoard, KingNotFoundError, STARTING_FEN
from .evaluator import MaterialEvaluator, PositionalEvaluator
from .search import ChessBot, Difficulty
from .types import CastlingRights, CastlingSide, Color, GameStatus, Move, Piece, PieceType, Square
