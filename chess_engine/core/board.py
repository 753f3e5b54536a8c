"""Rules engine: board state, legal move generation, make/undo and game status."""

from __future__ import annotations

import datetime
import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Union

from chess_engine.config import CONFIG
from chess_engine.core.types import (
    FILE_LETTERS,
    CastlingRights,
    CastlingSide,
    Color,
    GameStatus,
    Move,
    Piece,
    PieceType,
    Square,
    opponent,
)

_log = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

KNIGHT_OFFSETS = ((-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1))
STRAIGHT_DIRS = ((0, 1), (0, -1), (1, 0), (-1, 0))
DIAG_DIRS = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ALL_DIRS = STRAIGHT_DIRS + DIAG_DIRS

BACK_RANK = (
    PieceType.ROOK, PieceType.KNIGHT, PieceType.BISHOP, PieceType.QUEEN,
    PieceType.KING, PieceType.BISHOP, PieceType.KNIGHT, PieceType.ROOK,
)
PROMOTION_TYPES = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)

# (king destination col, rook origin col, rook destination col, cols that must be empty)
CASTLING_LAYOUT = {
    CastlingSide.KINGSIDE: (6, 7, 5, (5, 6)),
    CastlingSide.QUEENSIDE: (2, 0, 3, (1, 2, 3)),
}
KING_HOME_COL = 4

Board = List[List[Optional[Piece]]]
SquareLike = Union[Square, str]


class KingNotFoundError(RuntimeError):
    """The board has no king of the requested color."""


def _in_bounds(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


def _back_row(color: Color) -> int:
    return 7 if color is Color.WHITE else 0


def _as_square(square: SquareLike) -> Square:
    return Square.from_algebraic(square) if isinstance(square, str) else Square(*square)


def _as_piece_type(value: Union[PieceType, str]) -> PieceType:
    """Accept a PieceType, its value ("queen") or its letter ("q")."""
    if isinstance(value, PieceType):
        return value
    try:
        return PieceType(value.lower())
    except ValueError:
        return PieceType.from_letter(value)


class ChessBoard:
    def __init__(self, fen: Optional[str] = None):
        """Initialize from FEN or the standard starting position."""
        self.reset()
        if fen:
            self.set_fen(fen)

    def reset(self):
        """Reset to the initial position."""
        self.board: Board = self._initial_board()
        self.turn = Color.WHITE
        self.castling_rights = CastlingRights()
        self.en_passant_target: Optional[Square] = None
        self.move_history: List[Move] = []
        self.half_move_clock = 0
        self.full_move_number = 1

    @staticmethod
    def _initial_board() -> Board:
        board: Board = [[None] * 8 for _ in range(8)]
        for col, pt in enumerate(BACK_RANK):
            board[0][col] = Piece(pt, Color.BLACK)
            board[1][col] = Piece(PieceType.PAWN, Color.BLACK)
            board[6][col] = Piece(PieceType.PAWN, Color.WHITE)
            board[7][col] = Piece(pt, Color.WHITE)
        return board

    def piece_at(self, square: SquareLike) -> Optional[Piece]:
        try:
            sq = _as_square(square)
        except ValueError:
            return None
        return self.board[sq.row][sq.col] if sq.in_bounds() else None

    def pieces(self) -> Iterator[tuple]:
        """Yield (square, piece) for every occupied square, rank 8 first."""
        for row in range(8):
            for col in range(8):
                piece = self.board[row][col]
                if piece is not None:
                    yield Square(row, col), piece

    # ── Attacks ────────────────────────────────────────────────────────────

    def find_king(self, color: Color) -> Square:
        for sq, piece in self.pieces():
            if piece.type is PieceType.KING and piece.color is color:
                return sq
        raise KingNotFoundError(f"King not found for {color.value}")

    def is_square_attacked(self, square: Square, by_color: Color) -> bool:
        row, col = square
        for dr, dc in KNIGHT_OFFSETS:
            r, c = row + dr, col + dc
            if _in_bounds(r, c):
                p = self.board[r][c]
                if p and p.color is by_color and p.type is PieceType.KNIGHT:
                    return True

        # Attacking pawns sit one row "behind" the square from their own point of view.
        pawn_row = row + (1 if by_color is Color.WHITE else -1)
        for dc in (-1, 1):
            if _in_bounds(pawn_row, col + dc):
                p = self.board[pawn_row][col + dc]
                if p and p.color is by_color and p.type is PieceType.PAWN:
                    return True

        for dr, dc in ALL_DIRS:
            r, c = row + dr, col + dc
            if _in_bounds(r, c):
                p = self.board[r][c]
                if p and p.color is by_color and p.type is PieceType.KING:
                    return True

        for directions, sliders in (
            (STRAIGHT_DIRS, (PieceType.ROOK, PieceType.QUEEN)),
            (DIAG_DIRS, (PieceType.BISHOP, PieceType.QUEEN)),
        ):
            for dr, dc in directions:
                r, c = row + dr, col + dc
                while _in_bounds(r, c):
                    p = self.board[r][c]
                    if p:
                        if p.color is by_color and p.type in sliders:
                            return True
                        break
                    r, c = r + dr, c + dc
        return False

    def is_in_check(self, color: Color) -> bool:
        return self.is_square_attacked(self.find_king(color), opponent(color))

    # ── Move generation ────────────────────────────────────────────────────

    def _pseudo_legal_moves(self, square: Square) -> List[Move]:
        piece = self.board[square.row][square.col]
        if piece is None:
            return []
        if piece.type is PieceType.PAWN:
            return self._pawn_moves(square, piece)
        if piece.type is PieceType.KNIGHT:
            return self._step_moves(square, piece, KNIGHT_OFFSETS)
        if piece.type is PieceType.BISHOP:
            return self._sliding_moves(square, piece, DIAG_DIRS)
        if piece.type is PieceType.ROOK:
            return self._sliding_moves(square, piece, STRAIGHT_DIRS)
        if piece.type is PieceType.QUEEN:
            return self._sliding_moves(square, piece, ALL_DIRS)
        return self._step_moves(square, piece, ALL_DIRS) + self._castling_moves(square, piece)

    def _pawn_moves(self, sq: Square, piece: Piece) -> List[Move]:
        moves = []
        white = piece.color is Color.WHITE
        direction = -1 if white else 1
        start_row = 6 if white else 1
        promo_row = 0 if white else 7
        # En passant lands on rank 6 for white, rank 3 for black.
        ep_row = 2 if white else 5

        def add(to: Square, captured: Optional[Piece] = None):
            if to.row == promo_row:
                for promo in PROMOTION_TYPES:
                    moves.append(Move(sq, to, piece, captured=captured, promotion=promo))
            else:
                moves.append(Move(sq, to, piece, captured=captured))

        r1 = sq.row + direction
        if _in_bounds(r1, sq.col) and self.board[r1][sq.col] is None:
            add(Square(r1, sq.col))
            r2 = sq.row + 2 * direction
            if sq.row == start_row and self.board[r2][sq.col] is None:
                moves.append(Move(sq, Square(r2, sq.col), piece))

        for dc in (-1, 1):
            c = sq.col + dc
            if not _in_bounds(r1, c):
                continue
            target = self.board[r1][c]
            if target is not None:
                if target.color is not piece.color:
                    add(Square(r1, c), target)
            elif self.en_passant_target == (r1, c) and r1 == ep_row:
                passed = self.board[sq.row][c]
                if passed and passed.type is PieceType.PAWN and passed.color is not piece.color:
                    moves.append(Move(sq, Square(r1, c), piece, captured=passed, is_en_passant=True))
        return moves

    def _step_moves(self, sq: Square, piece: Piece, offsets) -> List[Move]:
        moves = []
        for dr, dc in offsets:
            r, c = sq.row + dr, sq.col + dc
            if not _in_bounds(r, c):
                continue
            target = self.board[r][c]
            if target is None or target.color is not piece.color:
                moves.append(Move(sq, Square(r, c), piece, captured=target))
        return moves

    def _sliding_moves(self, sq: Square, piece: Piece, directions) -> List[Move]:
        moves = []
        for dr, dc in directions:
            r, c = sq.row + dr, sq.col + dc
            while _in_bounds(r, c):
                target = self.board[r][c]
                if target is None:
                    moves.append(Move(sq, Square(r, c), piece))
                else:
                    if target.color is not piece.color:
                        moves.append(Move(sq, Square(r, c), piece, captured=target))
                    break
                r, c = r + dr, c + dc
        return moves

    def _castling_moves(self, sq: Square, king: Piece) -> List[Move]:
        row = _back_row(king.color)
        if sq != (row, KING_HOME_COL):
            return []
        opp = opponent(king.color)
        if self.is_square_attacked(sq, opp):
            return []
        moves = []
        rook = Piece(PieceType.ROOK, king.color)
        for side, (king_to, rook_from, _, between) in CASTLING_LAYOUT.items():
            if not self.castling_rights.has(king.color, side):
                continue
            if self.board[row][rook_from] != rook:
                continue
            if any(self.board[row][c] is not None for c in between):
                continue
            # The king's transit and landing squares; b1/b8 only needs to be empty.
            path = range(min(KING_HOME_COL, king_to), max(KING_HOME_COL, king_to) + 1)
            if any(self.is_square_attacked(Square(row, c), opp) for c in path if c != KING_HOME_COL):
                continue
            moves.append(Move(sq, Square(row, king_to), king, castling=side))
        return moves

    def _is_king_safe_after(self, move: Move) -> bool:
        self._apply(move)
        try:
            return not self.is_in_check(move.piece.color)
        finally:
            self._revert(move)

    def get_legal_moves(self, square: SquareLike) -> List[Move]:
        """Legal moves of the piece on `square`; empty unless it belongs to the side to move."""
        try:
            sq = _as_square(square)
        except ValueError:
            return []
        if not sq.in_bounds():
            return []
        piece = self.board[sq.row][sq.col]
        if piece is None or piece.color is not self.turn:
            return []
        return [m for m in self._pseudo_legal_moves(sq) if self._is_king_safe_after(m)]

    def get_all_legal_moves(self, color: Optional[Color] = None) -> List[Move]:
        saved_turn = self.turn
        self.turn = color or self.turn
        try:
            moves = []
            for sq, piece in list(self.pieces()):
                if piece.color is self.turn:
                    moves.extend(self.get_legal_moves(sq))
            return moves
        finally:
            self.turn = saved_turn

    def find_move(self, from_sq: SquareLike, to_sq: SquareLike,
                  promotion: Optional[Union[PieceType, str]] = None) -> Optional[Move]:
        """Resolve a (from, to[, promotion]) choice against the legal moves.

        A promotion without an explicit choice resolves to the queen.
        Unparseable squares or promotion choices give None.
        """
        try:
            to_sq = _as_square(to_sq)
            wanted = _as_piece_type(promotion) if promotion else PieceType.QUEEN
        except ValueError:
            return None
        candidates = [m for m in self.get_legal_moves(from_sq) if m.to_sq == to_sq]
        if not candidates:
            return None
        if candidates[0].promotion is None:
            return candidates[0]
        return next((m for m in candidates if m.promotion is wanted), None)

    def make_uci_move(self, move_str: str) -> bool:
        """Play a UCI move (e.g. 'e2e4', 'e7e8q'). Returns True if legal."""
        if len(move_str) not in (4, 5):
            return False
        try:
            from_sq = Square.from_algebraic(move_str[:2])
            to_sq = Square.from_algebraic(move_str[2:4])
            promotion = PieceType.from_letter(move_str[4]) if len(move_str) == 5 else None
        except ValueError:
            return False
        move = self.find_move(from_sq, to_sq, promotion or None)
        if move is None or (move.promotion is None) != (promotion is None):
            return False
        self.make_move(move)
        return True

    # ── Make / undo ────────────────────────────────────────────────────────

    def _apply(self, move: Move):
        """Board-only mutation; clocks and rights are handled by make_move."""
        row = move.from_sq.row
        if move.is_en_passant:
            self.board[row][move.to_sq.col] = None
        if move.castling:
            _, rook_from, rook_to, _ = CASTLING_LAYOUT[move.castling]
            self.board[row][rook_to] = self.board[row][rook_from]
            self.board[row][rook_from] = None
        self.board[move.to_sq.row][move.to_sq.col] = (
            Piece(move.promotion, move.piece.color) if move.promotion else move.piece
        )
        self.board[row][move.from_sq.col] = None

    def _revert(self, move: Move):
        row = move.from_sq.row
        self.board[row][move.from_sq.col] = move.piece
        if move.is_en_passant:
            self.board[move.to_sq.row][move.to_sq.col] = None
            self.board[row][move.to_sq.col] = move.captured
        else:
            self.board[move.to_sq.row][move.to_sq.col] = move.captured
        if move.castling:
            _, rook_from, rook_to, _ = CASTLING_LAYOUT[move.castling]
            self.board[row][rook_from] = self.board[row][rook_to]
            self.board[row][rook_to] = None

    def make_move(self, move: Move):
        """Apply a move produced by get_legal_moves / get_all_legal_moves.

        Either the move is fully made and recorded, or the board is left as it was.
        """
        move.prev_castling_rights = self.castling_rights
        move.prev_en_passant_target = self.en_passant_target
        move.prev_half_move_clock = self.half_move_clock
        move.is_check = move.is_checkmate = False
        full_move_number = self.full_move_number

        move.notation = self._notation(move)
        self._apply(move)
        try:
            self._update_castling_rights(move)

            if move.piece.type is PieceType.PAWN and abs(move.to_sq.row - move.from_sq.row) == 2:
                self.en_passant_target = Square((move.from_sq.row + move.to_sq.row) // 2, move.from_sq.col)
            else:
                self.en_passant_target = None

            if move.piece.type is PieceType.PAWN or move.captured:
                self.half_move_clock = 0
            else:
                self.half_move_clock += 1

            if move.piece.color is Color.BLACK:
                self.full_move_number += 1

            opp = opponent(move.piece.color)
            if self.is_in_check(opp):
                if self.get_all_legal_moves(opp):
                    move.is_check = True
                    move.notation += "+"
                else:
                    move.is_checkmate = True
                    move.notation += "#"
        except Exception:
            self._revert(move)
            self.castling_rights = move.prev_castling_rights
            self.en_passant_target = move.prev_en_passant_target
            self.half_move_clock = move.prev_half_move_clock
            self.full_move_number = full_move_number
            raise

        self.turn = opp
        self.move_history.append(move)

    def _update_castling_rights(self, move: Move):
        rights = self.castling_rights
        color = move.piece.color
        if move.piece.type is PieceType.KING:
            rights = rights.revoke(color)
        elif move.piece.type is PieceType.ROOK and move.from_sq.row == _back_row(color):
            rights = self._revoke_corner(rights, color, move.from_sq.col)
        if move.captured and move.captured.type is PieceType.ROOK:
            victim = move.captured.color
            if move.to_sq.row == _back_row(victim):
                rights = self._revoke_corner(rights, victim, move.to_sq.col)
        self.castling_rights = rights

    @staticmethod
    def _revoke_corner(rights: CastlingRights, color: Color, col: int) -> CastlingRights:
        if col == 0:
            return rights.revoke(color, CastlingSide.QUEENSIDE)
        if col == 7:
            return rights.revoke(color, CastlingSide.KINGSIDE)
        return rights

    def undo_move(self) -> Optional[Move]:
        """Pop the last move and restore the exact pre-move state."""
        if not self.move_history:
            return None
        move = self.move_history.pop()
        self._revert(move)
        if move.prev_castling_rights is not None:
            self.castling_rights = move.prev_castling_rights
        self.en_passant_target = move.prev_en_passant_target
        if move.prev_half_move_clock is not None:
            self.half_move_clock = move.prev_half_move_clock
        self.turn = move.piece.color
        if self.turn is Color.BLACK:
            self.full_move_number -= 1
        return move

    # ── Notation ───────────────────────────────────────────────────────────

    def _notation(self, move: Move) -> str:
        """SAN without the check suffix, computed on the pre-move board."""
        if move.castling is CastlingSide.KINGSIDE:
            return "O-O"
        if move.castling is CastlingSide.QUEENSIDE:
            return "O-O-O"

        san = ""
        if move.piece.type is not PieceType.PAWN:
            san += move.piece.type.letter
            rivals = self._rival_origins(move)
            if rivals:
                same_file = any(sq.col == move.from_sq.col for sq in rivals)
                same_rank = any(sq.row == move.from_sq.row for sq in rivals)
                if not same_file:
                    san += FILE_LETTERS[move.from_sq.col]
                elif not same_rank:
                    san += str(8 - move.from_sq.row)
                else:
                    san += move.from_sq.algebraic

        if move.is_capture:
            if move.piece.type is PieceType.PAWN:
                san += FILE_LETTERS[move.from_sq.col]
            san += "x"
        san += move.to_sq.algebraic
        if move.promotion:
            san += "=" + move.promotion.letter
        return san

    def _rival_origins(self, move: Move) -> List[Square]:
        """Other same-type pieces that could legally reach the same destination."""
        rivals = []
        for sq, piece in self.pieces():
            if sq == move.from_sq or piece != move.piece:
                continue
            if any(m.to_sq == move.to_sq and self._is_king_safe_after(m)
                   for m in self._pseudo_legal_moves(sq)):
                rivals.append(sq)
        return rivals

    # ── Game status ────────────────────────────────────────────────────────

    def get_game_status(self, legal_moves: Optional[List[Move]] = None) -> GameStatus:
        """Derive the status of the side to move.

        Callers that already hold the side's legal moves may pass them in.
        """
        in_check = self.is_in_check(self.turn)
        if legal_moves is None:
            legal_moves = self.get_all_legal_moves(self.turn)
        has_moves = len(legal_moves) > 0
        is_checkmate = in_check and not has_moves
        is_stalemate = not in_check and not has_moves
        is_draw = is_stalemate or self.is_insufficient_material() or self.half_move_clock >= 100
        return GameStatus(
            is_check=in_check,
            is_checkmate=is_checkmate,
            is_stalemate=is_stalemate,
            is_draw=is_draw,
            game_over=is_checkmate or is_draw,
            winner=opponent(self.turn) if is_checkmate else None,
        )

    def is_insufficient_material(self) -> bool:
        pieces = list(self.pieces())
        if len(pieces) == 2:
            return True
        if len(pieces) == 3:
            return any(p.type in (PieceType.BISHOP, PieceType.KNIGHT) for _, p in pieces)
        if len(pieces) == 4:
            bishops = [(sq, p) for sq, p in pieces if p.type is PieceType.BISHOP]
            if len(bishops) == 2 and bishops[0][1].color is not bishops[1][1].color:
                (a, _), (b, _) = bishops
                return (a.row + a.col) % 2 == (b.row + b.col) % 2
        return False

    def is_game_over(self) -> bool:
        """Check if the game has ended."""
        return self.get_game_status().game_over

    def captured_pieces(self, color: Color) -> List[Piece]:
        """Pieces of `color` taken so far, in capture order."""
        return [m.captured for m in self.move_history if m.captured and m.captured.color is color]

    # ── PGN ────────────────────────────────────────────────────────────────

    def to_pgn(self, metadata: Optional[Dict[str, str]] = None) -> str:
        """Export the game as PGN with the seven-tag roster."""
        pgn_cfg = CONFIG.pgn
        result = self.get_game_status().result
        headers = {
            "Event": pgn_cfg.event,
            "Site": pgn_cfg.site,
            "Date": datetime.date.today().strftime("%Y.%m.%d"),
            "Round": pgn_cfg.round,
            "White": pgn_cfg.white,
            "Black": pgn_cfg.black,
            "Result": result,
        }
        headers.update(metadata or {})
        headers["Result"] = result
        tags = "\n".join(f'[{k} "{v}"]' for k, v in headers.items())

        # Number from the move the recorded history starts at.
        black_moves = sum(1 for m in self.move_history if m.piece.color is Color.BLACK)
        number = self.full_move_number - black_moves
        tokens = []
        for i, move in enumerate(self.move_history):
            if move.piece.color is Color.WHITE:
                tokens.append(f"{number}.")
            elif i == 0:
                tokens.append(f"{number}...")
            tokens.append(move.notation or "??")
            if move.piece.color is Color.BLACK:
                number += 1
        tokens.append(result)
        return f"{tags}\n\n{' '.join(tokens)}"

    # ── FEN ────────────────────────────────────────────────────────────────

    def get_fen(self) -> str:
        """Return the current FEN (the en-passant field is set after every double push)."""
        rows = []
        for row in self.board:
            text, empty = "", 0
            for piece in row:
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    text += str(empty)
                    empty = 0
                text += piece.symbol
            rows.append(text + (str(empty) if empty else ""))
        rights = "".join(
            letter for letter, color, side in (
                ("K", Color.WHITE, CastlingSide.KINGSIDE),
                ("Q", Color.WHITE, CastlingSide.QUEENSIDE),
                ("k", Color.BLACK, CastlingSide.KINGSIDE),
                ("q", Color.BLACK, CastlingSide.QUEENSIDE),
            ) if self.castling_rights.has(color, side)
        ) or "-"
        ep = self.en_passant_target.algebraic if self.en_passant_target else "-"
        return " ".join([
            "/".join(rows), self.turn.value[0], rights, ep,
            str(self.half_move_clock), str(self.full_move_number),
        ])

    def set_fen(self, fen: str):
        """Set board state from a FEN string. Clears the move history."""
        fields = fen.split()
        if len(fields) == 4:
            fields += ["0", "1"]
        if len(fields) != 6:
            raise ValueError(f"Invalid FEN: {fen!r}")
        placement, turn, rights, ep, half, full = fields

        ranks = placement.split("/")
        if len(ranks) != 8:
            raise ValueError(f"Invalid FEN placement: {placement!r}")
        board: Board = []
        for rank in ranks:
            row: List[Optional[Piece]] = []
            for ch in rank:
                if ch.isdigit():
                    row.extend([None] * int(ch))
                else:
                    row.append(Piece.from_symbol(ch))
            if len(row) != 8:
                raise ValueError(f"Invalid FEN rank: {rank!r}")
            board.append(row)

        if turn not in ("w", "b"):
            raise ValueError(f"Invalid FEN side to move: {turn!r}")
        if rights != "-" and (not rights or set(rights) - set("KQkq")):
            raise ValueError(f"Invalid FEN castling field: {rights!r}")
        try:
            half_move_clock, full_move_number = int(half), int(full)
        except ValueError:
            raise ValueError(f"Invalid FEN clocks: {half!r} {full!r}") from None

        self.board = board
        self.turn = Color.WHITE if turn == "w" else Color.BLACK
        self.castling_rights = CastlingRights(
            white_kingside="K" in rights, white_queenside="Q" in rights,
            black_kingside="k" in rights, black_queenside="q" in rights,
        )
        self.en_passant_target = None if ep == "-" else Square.from_algebraic(ep)
        self.half_move_clock = half_move_clock
        self.full_move_number = full_move_number
        self.move_history = []

    # ── Serialization ──────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board": [[p.to_dict() if p else None for p in row] for row in self.board],
            "currentTurn": self.turn.value,
            "castlingRights": self.castling_rights.to_dict(),
            "enPassantTarget": self.en_passant_target.to_dict() if self.en_passant_target else None,
            "moveHistory": [m.to_dict() for m in self.move_history],
            "halfMoveClock": self.half_move_clock,
            "fullMoveNumber": self.full_move_number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChessBoard":
        board = cls()
        try:
            grid = [[Piece.from_dict(p) if p else None for p in row] for row in data["board"]]
            if len(grid) != 8 or any(len(row) != 8 for row in grid):
                raise ValueError("board must be 8x8")
            board.board = grid
            board.turn = Color(data["currentTurn"])
            board.castling_rights = CastlingRights.from_dict(data["castlingRights"])
            ep = data.get("enPassantTarget")
            board.en_passant_target = Square.from_dict(ep) if ep else None
            board.move_history = [Move.from_dict(m) for m in data.get("moveHistory") or []]
            board.half_move_clock = int(data["halfMoveClock"])
            board.full_move_number = int(data["fullMoveNumber"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid serialized game: {e}") from e
        return board

    def serialize(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def deserialize(cls, text: str) -> "ChessBoard":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid serialized game: {e}") from e
        if not isinstance(data, dict):
            raise ValueError("Invalid serialized game: expected a JSON object")
        board = cls.from_dict(data)
        _log.debug("Restored game at move %d (%s to move)", board.full_move_number, board.turn.value)
        return board

    def clone(self) -> "ChessBoard":
        return ChessBoard.from_dict(self.to_dict())

    def __str__(self) -> str:
        """ASCII representation, rank 8 at the top."""
        return "\n".join(
            " ".join(p.symbol if p else "." for p in row) for row in self.board
        )

    def print_board(self):
        """Print ASCII representation."""
        print(self)
