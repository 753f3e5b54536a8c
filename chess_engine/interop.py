"""Conversion to and from python-chess boards."""

import chess

from chess_engine.core.board import ChessBoard


def to_python_chess(board: ChessBoard) -> chess.Board:
    """Current position as a python-chess board (no move stack)."""
    return chess.Board(board.get_fen())


def from_python_chess(board: chess.Board) -> ChessBoard:
    """Replay a python-chess game from its root so history and notation carry over."""
    root = board.root()
    ours = ChessBoard(root.fen(en_passant="fen"))
    for move in board.move_stack:
        if not ours.make_uci_move(move.uci()):
            raise ValueError(f"Move {move.uci()} rejected at {ours.get_fen()}")
    return ours
