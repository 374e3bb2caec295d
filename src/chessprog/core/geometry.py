"""Pure board predicates.

Every query first checks :func:`is_on_board`; squares outside the grid or
on a light square are never vacant and never occupied.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessprog.core.board import Board
from chessprog.core.enums import Color, PieceType
from chessprog.core.piece import PIECE_SCORES, Piece
from chessprog.core.types import BOARD_SIZE, Position, is_playable


@dataclass(slots=True)
class Army:
    """Census of one side's remaining pieces."""

    pawns: int = 0
    bishops: int = 0
    rooks: int = 0
    knights: int = 0
    queens: int = 0
    kings: int = 0

    def count(self, piece_type: PieceType) -> int:
        return getattr(self, _ARMY_FIELDS[piece_type])

    @property
    def material(self) -> int:
        return sum(self.count(pt) * score for pt, score in PIECE_SCORES.items())

    @property
    def total(self) -> int:
        return sum(self.count(pt) for pt in PieceType)


_ARMY_FIELDS: dict[PieceType, str] = {
    PieceType.PAWN: "pawns",
    PieceType.BISHOP: "bishops",
    PieceType.ROOK: "rooks",
    PieceType.KNIGHT: "knights",
    PieceType.QUEEN: "queens",
    PieceType.KING: "kings",
}


def is_on_board(pos: Position) -> bool:
    return is_playable(pos.x, pos.y)


def piece_at(board: Board, pos: Position) -> Piece | None:
    """The piece on *pos*, or ``None`` for empty and off-board squares."""
    if not is_on_board(pos):
        return None
    return board[pos]


def is_vacant(board: Board, pos: Position) -> bool:
    return is_on_board(pos) and board[pos] is None


def is_occupied_by_current_player(board: Board, color: Color, pos: Position) -> bool:
    piece = piece_at(board, pos)
    return piece is not None and piece.color == color


def is_occupied_by_enemy(board: Board, color: Color, pos: Position) -> bool:
    piece = piece_at(board, pos)
    return piece is not None and piece.color != color


def is_occupied_by_king(board: Board, pos: Position) -> bool:
    """Occupied by a king of either color."""
    piece = piece_at(board, pos)
    return piece is not None and piece.piece_type == PieceType.KING


def is_occupied_by(
    board: Board, color: Color, piece_type: PieceType, pos: Position
) -> bool:
    return piece_at(board, pos) == Piece(color, piece_type)


def is_occupied_by_pawn(board: Board, color: Color, pos: Position) -> bool:
    return is_occupied_by(board, color, PieceType.PAWN, pos)


def is_occupied_by_bishop(board: Board, color: Color, pos: Position) -> bool:
    return is_occupied_by(board, color, PieceType.BISHOP, pos)


def is_occupied_by_rook(board: Board, color: Color, pos: Position) -> bool:
    return is_occupied_by(board, color, PieceType.ROOK, pos)


def is_occupied_by_knight(board: Board, color: Color, pos: Position) -> bool:
    return is_occupied_by(board, color, PieceType.KNIGHT, pos)


def is_occupied_by_queen(board: Board, color: Color, pos: Position) -> bool:
    return is_occupied_by(board, color, PieceType.QUEEN, pos)


def is_occupied_by_king_of(board: Board, color: Color, pos: Position) -> bool:
    return is_occupied_by(board, color, PieceType.KING, pos)


def is_on_opposite_edge(color: Color, row: int) -> bool:
    """Is *row* the far rank for *color* (where its pawns promote)?"""
    return row == (BOARD_SIZE - 1 if color == Color.WHITE else 0)


def would_promote(piece: Piece, dest: Position) -> bool:
    return piece.piece_type == PieceType.PAWN and is_on_opposite_edge(
        piece.color, dest.y
    )


def get_king_position(board: Board, color: Color) -> Position:
    """The unique king of *color*; raises ``KingNotFoundError`` if absent."""
    return board.king_position(color)


def army_counts(board: Board, color: Color) -> Army:
    army = Army()
    for _, piece in board.pieces(color):
        field_name = _ARMY_FIELDS[piece.piece_type]
        setattr(army, field_name, getattr(army, field_name) + 1)
    return army
