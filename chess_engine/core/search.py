import enum
import logging
import random
import time
from contextlib import contextmanager
from typing import List, Optional, Tuple, Union

from chess_engine.config import CONFIG, SearchConfig
from chess_engine.core.board import ChessBoard
from chess_engine.core.evaluator import MaterialEvaluator, PositionalEvaluator
from chess_engine.core.types import Color, Move
from chess_engine.core.utils import format_search_info

_log = logging.getLogger(__name__)

INF = 1000000


class Difficulty(str, enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@contextmanager
def played(board: ChessBoard, move: Move):
    """Make `move` for the duration of the block; always undone on exit.

    A make that raises has already restored the board, so there is nothing to undo.
    """
    board.make_move(move)
    try:
        yield
    finally:
        board.undo_move()


class ChessBot:
    def __init__(self, difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
                 config: Optional[SearchConfig] = None, rng: Optional[random.Random] = None):
        try:
            self.difficulty = Difficulty(difficulty)
        except ValueError:
            raise ValueError(f"Unknown difficulty: {difficulty!r}") from None
        self.cfg = config or CONFIG.search
        self.rng = rng or random.Random(self.cfg.seed)
        self.material = MaterialEvaluator()
        self.positional = PositionalEvaluator() if CONFIG.eval.use_positional else self.material
        self.nodes = 0

    @property
    def mate_score(self) -> int:
        return self.cfg.mate_score

    def get_best_move(self, board: ChessBoard) -> Optional[Move]:
        """Pick a move for the side to move, or None when it has none.

        The board is borrowed: every move tried is undone before returning.
        """
        moves = board.get_all_legal_moves()
        if not moves:
            return None

        if self.difficulty is Difficulty.EASY:
            return self.rng.choice(moves)

        self.nodes = 0
        start_time = time.perf_counter()
        if self.difficulty is Difficulty.MEDIUM:
            depth = self.cfg.medium_depth
            best_move, score = self._search_root(board, moves, depth, use_alpha_beta=False)
        else:
            depth = self.cfg.hard_depth
            best_move, score = self._search_root(board, moves, depth, use_alpha_beta=True)

        elapsed = time.perf_counter() - start_time
        _log.info(format_search_info(self.difficulty.value, depth, score, self.nodes,
                                     elapsed, best_move, self.mate_score))
        return best_move

    def _search_root(self, board: ChessBoard, moves: List[Move], depth: int,
                     use_alpha_beta: bool) -> Tuple[Optional[Move], int]:
        maximizing = board.turn is Color.WHITE
        best_move = None
        best_score = -INF if maximizing else INF

        for move in self._order_moves(moves):
            with played(board, move):
                if use_alpha_beta:
                    score = self._alpha_beta(board, depth - 1, -INF, INF, not maximizing)
                else:
                    score = self._minimax(board, depth - 1, not maximizing)

            if (score > best_score) if maximizing else (score < best_score):
                best_score = score
                best_move = move

        return best_move, best_score

    def _terminal_score(self, board: ChessBoard, moves: List[Move], bonus: int = 0) -> Optional[int]:
        """Score for a finished game, or None while play goes on."""
        status = board.get_game_status(moves)
        if not status.game_over:
            return None
        if status.is_checkmate:
            mate = self.mate_score + bonus
            return mate if status.winner is Color.WHITE else -mate
        return 0

    def _minimax(self, board: ChessBoard, depth: int, maximizing: bool) -> int:
        self.nodes += 1
        if depth == 0:
            return self.material.evaluate(board)

        moves = board.get_all_legal_moves()
        terminal = self._terminal_score(board, moves)
        if terminal is not None:
            return terminal

        best = -INF if maximizing else INF
        for move in moves:
            with played(board, move):
                score = self._minimax(board, depth - 1, not maximizing)
            best = max(best, score) if maximizing else min(best, score)
        return best

    def _alpha_beta(self, board: ChessBoard, depth: int, alpha: int, beta: int,
                    maximizing: bool) -> int:
        self.nodes += 1
        if depth == 0:
            return self.positional.evaluate(board)

        moves = board.get_all_legal_moves()
        # Remaining depth is added to mate scores so faster mates rank higher.
        terminal = self._terminal_score(board, moves, bonus=depth)
        if terminal is not None:
            return terminal

        if maximizing:
            max_eval = -INF
            for move in self._order_moves(moves):
                with played(board, move):
                    val = self._alpha_beta(board, depth - 1, alpha, beta, False)
                max_eval = max(max_eval, val)
                alpha = max(alpha, val)
                if beta <= alpha:
                    break
            return max_eval

        min_eval = INF
        for move in self._order_moves(moves):
            with played(board, move):
                val = self._alpha_beta(board, depth - 1, alpha, beta, True)
            min_eval = min(min_eval, val)
            beta = min(beta, val)
            if beta <= alpha:
                break
        return min_eval

    def _order_moves(self, moves: List[Move]) -> List[Move]:
        # sorted() is stable, so equally scored moves keep generation order.
        return sorted(moves, key=self._mvv_lva, reverse=True)

    def _mvv_lva(self, move: Move) -> float:
        score = 0.0
        if move.captured:
            score += self.material.value(move.captured.type) - self.material.value(move.piece.type) / 10
        if move.promotion:
            score += self.material.value(move.promotion)
        return score
