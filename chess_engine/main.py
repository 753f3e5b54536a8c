import json
import logging
from typing import Optional, Union

from chess_engine.core.board import ChessBoard, SquareLike
from chess_engine.core.search import ChessBot, Difficulty
from chess_engine.core.types import Color, GameStatus, Move, PieceType

_log = logging.getLogger(__name__)


class GameSession:
    """A game driver owning one board and, against the computer, one bot.

    With `difficulty=None` both sides are played through `play()`.
    """

    def __init__(self, difficulty: Optional[Union[Difficulty, str]] = None,
                 player_color: Union[Color, str] = Color.WHITE):
        self.board = ChessBoard()
        self.player_color = Color(player_color)
        self.bot = ChessBot(difficulty) if difficulty else None

    @property
    def vs_computer(self) -> bool:
        return self.bot is not None

    @property
    def status(self) -> GameStatus:
        return self.board.get_game_status()

    def new_game(self):
        self.board.reset()

    def play(self, from_sq: SquareLike, to_sq: SquareLike,
             promotion: Optional[Union[PieceType, str]] = None) -> Optional[Move]:
        """Play a human move; None if it is illegal or not the human's turn."""
        if self.vs_computer and self.board.turn is not self.player_color:
            return None
        move = self.board.find_move(from_sq, to_sq, promotion)
        if move is None:
            return None
        self.board.make_move(move)
        return move

    def play_bot(self) -> Optional[Move]:
        """Let the bot answer; None when it is not its turn or the game is over."""
        if not self.vs_computer or self.board.turn is self.player_color:
            return None
        move = self.bot.get_best_move(self.board)
        if move is not None:
            self.board.make_move(move)
            _log.info("Bot plays %s", move.notation)
        return move

    def undo(self) -> int:
        """Take back the last move; against the computer, back to the player's turn.

        Returns the number of moves undone.
        """
        if self.board.undo_move() is None:
            return 0
        undone = 1
        if (self.vs_computer and self.board.turn is not self.player_color
                and self.board.undo_move() is not None):
            undone += 1
        return undone

    def pgn(self, **metadata: str) -> str:
        return self.board.to_pgn(metadata)

    def save(self) -> str:
        return json.dumps({
            "engineState": self.board.serialize(),
            "difficulty": self.bot.difficulty.value if self.bot else None,
            "playerColor": self.player_color.value,
        })

    @classmethod
    def restore(cls, text: str) -> "GameSession":
        try:
            data = json.loads(text)
            session = cls(data.get("difficulty"), data.get("playerColor", Color.WHITE.value))
            session.board = ChessBoard.deserialize(data["engineState"])
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Invalid saved session: {e}") from e
        return session

    def print_board(self):
        self.board.print_board()
