"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessprog.core.enums import Color, PieceType

# Diagram character <-> (Color, PieceType); upper case is white.
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

# Material weights used by the evaluator.
PIECE_SCORES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.KNIGHT: 3,
    PieceType.QUEEN: 9,
    PieceType.KING: 400,
}

PIECE_NAMES: dict[PieceType, str] = {
    PieceType.PAWN: "pawn",
    PieceType.BISHOP: "bishop",
    PieceType.ROOK: "rook",
    PieceType.KNIGHT: "knight",
    PieceType.QUEEN: "queen",
    PieceType.KING: "king",
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a piece on the board."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """Diagram character (upper case = white, lower case = black)."""
        return _CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from a diagram character, e.g. 'Q' -> white queen."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def score(self) -> int:
        return PIECE_SCORES[self.piece_type]

    @property
    def is_pawn(self) -> bool:
        return self.piece_type == PieceType.PAWN

    @property
    def is_king(self) -> bool:
        return self.piece_type == PieceType.KING

    def promoted(self, piece_type: PieceType) -> Piece:
        return Piece(self.color, piece_type)
