"""Static evaluators: material only, and material plus piece-square tables."""

from typing import Dict, List, Optional

from chess_engine.config import CONFIG
from chess_engine.core.board import ChessBoard
from chess_engine.core.types import Color, PieceType

# Piece-square tables from white's point of view, row 0 = rank 8.

PST_PAWN = [
    [ 0,  0,  0,  0,  0,  0,  0,  0],
    [50, 50, 50, 50, 50, 50, 50, 50],
    [10, 10, 20, 30, 30, 20, 10, 10],
    [ 5,  5, 10, 25, 25, 10,  5,  5],
    [ 0,  0,  0, 20, 20,  0,  0,  0],
    [ 5, -5,-10,  0,  0,-10, -5,  5],
    [ 5, 10, 10,-20,-20, 10, 10,  5],
    [ 0,  0,  0,  0,  0,  0,  0,  0],
]

PST_KNIGHT = [
    [-50,-40,-30,-30,-30,-30,-40,-50],
    [-40,-20,  0,  0,  0,  0,-20,-40],
    [-30,  0, 10, 15, 15, 10,  0,-30],
    [-30,  5, 15, 20, 20, 15,  5,-30],
    [-30,  0, 15, 20, 20, 15,  0,-30],
    [-30,  5, 10, 15, 15, 10,  5,-30],
    [-40,-20,  0,  5,  5,  0,-20,-40],
    [-50,-40,-30,-30,-30,-30,-40,-50],
]

PST_BISHOP = [
    [-20,-10,-10,-10,-10,-10,-10,-20],
    [-10,  0,  0,  0,  0,  0,  0,-10],
    [-10,  0, 10, 10, 10, 10,  0,-10],
    [-10,  5,  5, 10, 10,  5,  5,-10],
    [-10,  0,  5, 10, 10,  5,  0,-10],
    [-10, 10,  5, 10, 10,  5, 10,-10],
    [-10,  5,  0,  0,  0,  0,  5,-10],
    [-20,-10,-10,-10,-10,-10,-10,-20],
]

PST_ROOK = [
    [ 0,  0,  0,  0,  0,  0,  0,  0],
    [ 5, 10, 10, 10, 10, 10, 10,  5],
    [-5,  0,  0,  0,  0,  0,  0, -5],
    [-5,  0,  0,  0,  0,  0,  0, -5],
    [-5,  0,  0,  0,  0,  0,  0, -5],
    [-5,  0,  0,  0,  0,  0,  0, -5],
    [-5,  0,  0,  0,  0,  0,  0, -5],
    [ 0,  0,  0,  5,  5,  0,  0,  0],
]

PST_QUEEN = [
    [-20,-10,-10, -5, -5,-10,-10,-20],
    [-10,  0,  0,  0,  0,  0,  0,-10],
    [-10,  0,  5,  5,  5,  5,  0,-10],
    [ -5,  0,  5,  5,  5,  5,  0, -5],
    [  0,  0,  5,  5,  5,  5,  0, -5],
    [-10,  5,  5,  5,  5,  5,  0,-10],
    [-10,  0,  5,  0,  0,  0,  0,-10],
    [-20,-10,-10, -5, -5,-10,-10,-20],
]

PST_KING = [
    [-30,-40,-40,-50,-50,-40,-40,-30],
    [-30,-40,-40,-50,-50,-40,-40,-30],
    [-30,-40,-40,-50,-50,-40,-40,-30],
    [-30,-40,-40,-50,-50,-40,-40,-30],
    [-20,-30,-30,-40,-40,-30,-30,-20],
    [-10,-20,-20,-20,-20,-20,-20,-10],
    [ 20, 20,  0,  0,  0,  0, 20, 20],
    [ 20, 30, 10,  0,  0, 10, 30, 20],
]

PST: Dict[PieceType, List[List[int]]] = {
    PieceType.PAWN: PST_PAWN,
    PieceType.KNIGHT: PST_KNIGHT,
    PieceType.BISHOP: PST_BISHOP,
    PieceType.ROOK: PST_ROOK,
    PieceType.QUEEN: PST_QUEEN,
    PieceType.KING: PST_KING,
}


def pst_bonus(piece_type: PieceType, color: Color, row: int, col: int) -> int:
    """Table bonus for a piece, mirroring the rank for black."""
    r = row if color is Color.WHITE else 7 - row
    return PST[piece_type][r][col]


class MaterialEvaluator:
    """Sum of piece values in centipawns, positive favors white."""

    def __init__(self, piece_values: Optional[Dict[str, int]] = None):
        self.piece_values = piece_values or CONFIG.eval.piece_values

    def value(self, piece_type: PieceType) -> int:
        return self.piece_values[piece_type.name]

    def evaluate(self, board: ChessBoard) -> int:
        score = 0
        for _, piece in board.pieces():
            val = self.value(piece.type)
            score += val if piece.color is Color.WHITE else -val
        return score


class PositionalEvaluator(MaterialEvaluator):
    """Material plus piece-square table bonuses, positive favors white."""

    def evaluate(self, board: ChessBoard) -> int:
        score = 0
        for sq, piece in board.pieces():
            val = self.value(piece.type) + pst_bonus(piece.type, piece.color, sq.row, sq.col)
            score += val if piece.color is Color.WHITE else -val
        return score
