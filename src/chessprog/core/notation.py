"""Board diagrams and textual move notation.

A *placement* string lists rows from 8 down to 1 separated by ``/``; digits
stand for runs of empty squares and letters for pieces (upper case white),
e.g. the starting position :data:`STARTING_PLACEMENT`.
"""

from __future__ import annotations

import re

from chessprog.core.board import Board
from chessprog.core.enums import PieceType
from chessprog.core.move import Move
from chessprog.core.piece import PIECE_NAMES, Piece
from chessprog.core.types import BOARD_SIZE, Position, parse_position

STARTING_PLACEMENT = "1b1k1q1r/p1p1p1p1/1p1p1p1p/8/8/P1P1P1P1/1P1P1P1P/R1Q1K1B1"

_PROMOTION_BY_NAME: dict[str, PieceType] = {
    name: pt
    for pt, name in PIECE_NAMES.items()
    if pt not in (PieceType.PAWN, PieceType.KING)
}

_MOVE_RE = re.compile(
    r"^\s*(?P<init><[^>]*>|[a-h][1-8])\s+to\s+(?P<next><[^>]*>|[a-h][1-8])"
    r"(?:\s+(?P<promotion>[a-z]+))?\s*$"
)


def board_from_placement(placement: str) -> Board:
    """Parse a placement string into a :class:`Board`."""
    rows = placement.strip().split("/")
    if len(rows) != BOARD_SIZE:
        raise ValueError(f"Invalid placement (must contain 8 rows): {placement!r}")
    board = Board()
    for row_idx, row_text in enumerate(rows):
        y = BOARD_SIZE - 1 - row_idx
        x = 0
        for ch in row_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= BOARD_SIZE):
                    raise ValueError(f"Invalid placement digit {ch!r}: {placement!r}")
                x += step
            else:
                if x >= BOARD_SIZE:
                    raise ValueError(f"Invalid placement row width: {placement!r}")
                board[Position(x, y)] = Piece.from_char(ch)
                x += 1
            if x > BOARD_SIZE:
                raise ValueError(f"Invalid placement row width: {placement!r}")
        if x != BOARD_SIZE:
            raise ValueError(f"Invalid placement row width: {placement!r}")
    return board


def board_to_placement(board: Board) -> str:
    """Serialise *board* to a placement string."""
    rows: list[str] = []
    for y in range(BOARD_SIZE - 1, -1, -1):
        empty = 0
        row = ""
        for x in range(BOARD_SIZE):
            piece = board[Position(x, y)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def move_to_text(move: Move) -> str:
    """``<a,3> to <b,4>`` with an optional promotion name."""
    return str(move)


def parse_move(text: str) -> Move:
    """Parse ``'<a,3> to <b,4>'``, ``'a3 to b4'`` or ``'<g,7> to <h,8> queen'``."""
    match = _MOVE_RE.match(text)
    if match is None:
        raise ValueError(f"Invalid move: {text!r}")

    promotion: PieceType | None = None
    name = match.group("promotion")
    if name is not None:
        try:
            promotion = _PROMOTION_BY_NAME[name]
        except KeyError:
            raise ValueError(f"Invalid promotion piece: {name!r}") from None

    return Move(
        parse_position(match.group("init")),
        parse_position(match.group("next")),
        promotion,
    )
