"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color. White advances towards row 7, black towards row 0."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Row delta of a forward step for this side."""
        return 1 if self == Color.WHITE else -1

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Piece kinds."""

    PAWN = 1
    BISHOP = 2
    ROOK = 3
    KNIGHT = 4
    QUEEN = 5
    KING = 6


class GameStatus(IntEnum):
    """Board state as seen by the side to move."""

    ONGOING = 0
    CHECK = 1
    MATE_WHITE_WINS = 2
    MATE_BLACK_WINS = 3
    TIE = 4

    @property
    def is_terminal(self) -> bool:
        return self in (
            GameStatus.MATE_WHITE_WINS,
            GameStatus.MATE_BLACK_WINS,
            GameStatus.TIE,
        )
