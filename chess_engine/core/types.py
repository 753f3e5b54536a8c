"""Value types shared by the rules engine and the search bot."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Any, Dict, NamedTuple, Optional

FILE_LETTERS = "abcdefgh"


class Color(str, enum.Enum):
    WHITE = "white"
    BLACK = "black"


class PieceType(str, enum.Enum):
    KING = "king"
    QUEEN = "queen"
    ROOK = "rook"
    BISHOP = "bishop"
    KNIGHT = "knight"
    PAWN = "pawn"

    @property
    def letter(self) -> str:
        """Upper-case letter used in FEN and SAN ("N" for knight)."""
        return "N" if self is PieceType.KNIGHT else self.value[0].upper()

    @classmethod
    def from_letter(cls, letter: str) -> "PieceType":
        for pt in cls:
            if pt.letter == letter.upper():
                return pt
        raise ValueError(f"Unknown piece letter: {letter!r}")


class CastlingSide(str, enum.Enum):
    KINGSIDE = "kingside"
    QUEENSIDE = "queenside"


def opponent(color: Color) -> Color:
    return Color.BLACK if color is Color.WHITE else Color.WHITE


class Square(NamedTuple):
    row: int
    col: int

    @classmethod
    def from_algebraic(cls, name: str) -> "Square":
        if len(name) != 2 or name[0] not in FILE_LETTERS or name[1] not in "12345678":
            raise ValueError(f"Invalid square: {name!r}")
        return cls(8 - int(name[1]), FILE_LETTERS.index(name[0]))

    @property
    def algebraic(self) -> str:
        return f"{FILE_LETTERS[self.col]}{8 - self.row}"

    def in_bounds(self) -> bool:
        return 0 <= self.row < 8 and 0 <= self.col < 8

    def to_dict(self) -> Dict[str, int]:
        return {"row": self.row, "col": self.col}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Square":
        square = cls(int(data["row"]), int(data["col"]))
        if not square.in_bounds():
            raise ValueError(f"Square off the board: {data!r}")
        return square


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @property
    def symbol(self) -> str:
        letter = self.type.letter
        return letter if self.color is Color.WHITE else letter.lower()

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        color = Color.WHITE if symbol.isupper() else Color.BLACK
        return cls(PieceType.from_letter(symbol), color)

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type.value, "color": self.color.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Piece":
        return cls(PieceType(data["type"]), Color(data["color"]))


@dataclass(frozen=True)
class CastlingRights:
    white_kingside: bool = True
    white_queenside: bool = True
    black_kingside: bool = True
    black_queenside: bool = True

    def has(self, color: Color, side: CastlingSide) -> bool:
        return getattr(self, f"{color.value}_{side.value}")

    def revoke(self, color: Color, side: Optional[CastlingSide] = None) -> "CastlingRights":
        """Return a copy with one side (or both sides) of `color` withdrawn."""
        sides = [side] if side else list(CastlingSide)
        return replace(self, **{f"{color.value}_{s.value}": False for s in sides})

    def to_dict(self) -> Dict[str, Dict[str, bool]]:
        return {
            c.value: {s.value: self.has(c, s) for s in CastlingSide}
            for c in Color
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CastlingRights":
        return cls(**{
            f"{c.value}_{s.value}": bool(data[c.value][s.value])
            for c in Color for s in CastlingSide
        })


@dataclass(eq=False)
class Move:
    """A candidate or played move.

    Generated fresh by the rules engine. `make_move` fills in the notation,
    the check flags and the pre-move snapshot that `undo_move` restores.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Optional[Piece] = None
    is_en_passant: bool = False
    castling: Optional[CastlingSide] = None
    promotion: Optional[PieceType] = None
    notation: Optional[str] = None
    is_check: bool = False
    is_checkmate: bool = False
    prev_castling_rights: Optional[CastlingRights] = None
    prev_en_passant_target: Optional[Square] = None
    prev_half_move_clock: Optional[int] = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None or self.is_en_passant

    def uci(self) -> str:
        promo = self.promotion.letter.lower() if self.promotion else ""
        return f"{self.from_sq.algebraic}{self.to_sq.algebraic}{promo}"

    def __repr__(self) -> str:
        return f"Move({self.notation or self.uci()})"

    # Wire layout matches the persisted game blob: absent/false fields are omitted.
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "from": self.from_sq.to_dict(),
            "to": self.to_sq.to_dict(),
            "piece": self.piece.to_dict(),
        }
        if self.captured:
            data["captured"] = self.captured.to_dict()
        if self.is_en_passant:
            data["isEnPassant"] = True
        if self.castling:
            data["isCastling"] = self.castling.value
        if self.promotion:
            data["promotion"] = self.promotion.value
        if self.is_check:
            data["isCheck"] = True
        if self.is_checkmate:
            data["isCheckmate"] = True
        if self.prev_castling_rights is not None:
            data["prevCastlingRights"] = self.prev_castling_rights.to_dict()
        if self.prev_half_move_clock is not None:
            data["prevEnPassantTarget"] = (
                self.prev_en_passant_target.to_dict() if self.prev_en_passant_target else None
            )
            data["prevHalfMoveClock"] = self.prev_half_move_clock
        if self.notation is not None:
            data["notation"] = self.notation
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Move":
        prev_ep = data.get("prevEnPassantTarget")
        prev_rights = data.get("prevCastlingRights")
        return cls(
            from_sq=Square.from_dict(data["from"]),
            to_sq=Square.from_dict(data["to"]),
            piece=Piece.from_dict(data["piece"]),
            captured=Piece.from_dict(data["captured"]) if data.get("captured") else None,
            is_en_passant=bool(data.get("isEnPassant", False)),
            castling=CastlingSide(data["isCastling"]) if data.get("isCastling") else None,
            promotion=PieceType(data["promotion"]) if data.get("promotion") else None,
            notation=data.get("notation"),
            is_check=bool(data.get("isCheck", False)),
            is_checkmate=bool(data.get("isCheckmate", False)),
            prev_castling_rights=CastlingRights.from_dict(prev_rights) if prev_rights else None,
            prev_en_passant_target=Square.from_dict(prev_ep) if prev_ep else None,
            prev_half_move_clock=data.get("prevHalfMoveClock"),
        )


@dataclass(frozen=True)
class GameStatus:
    is_check: bool
    is_checkmate: bool
    is_stalemate: bool
    is_draw: bool
    game_over: bool
    winner: Optional[Color] = None

    @property
    def result(self) -> str:
        """PGN result token."""
        if self.is_checkmate:
            return "1-0" if self.winner is Color.WHITE else "0-1"
        if self.is_draw:
            return "1/2-1/2"
        return "*"
