"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessprog.core.enums import PieceType
from chessprog.core.piece import PIECE_NAMES
from chessprog.core.types import Position

# Promotion variants, in the order the generator emits them.
PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Move:
    """A displacement of one piece from *init_pos* to *next_pos*.

    ``via`` lists intermediate landing squares of a multi-leg capture and is
    empty for every move produced by the generator.
    """

    init_pos: Position
    next_pos: Position
    promotion: PieceType | None = None
    via: tuple[Position, ...] = ()

    def __str__(self) -> str:
        text = f"<{_cell(self.init_pos)}> to <{_cell(self.next_pos)}>"
        if self.promotion is not None:
            text += f" {PIECE_NAMES[self.promotion]}"
        return text

    @property
    def landings(self) -> tuple[Position, ...]:
        """Every square the piece lands on, ending with *next_pos*."""
        return (*self.via, self.next_pos)


def _cell(pos: Position) -> str:
    return f"{chr(ord('a') + pos.x)},{pos.y + 1}"
