"""Legal and pseudo-legal move generation + check detection."""

from __future__ import annotations

from collections.abc import Iterator

from chessprog.core.board import Board
from chessprog.core.enums import Color, PieceType
from chessprog.core.errors import allocation_guard
from chessprog.core.geometry import (
    is_occupied_by,
    is_occupied_by_enemy,
    is_vacant,
    piece_at,
    would_promote,
)
from chessprog.core.move import PROMOTION_TYPES, Move
from chessprog.core.piece import Piece
from chessprog.core.types import Position

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_SLIDING_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


class MoveGenerator:
    """Generates legal moves on a :class:`Board`.

    The generator speculatively moves pieces on the board to test for
    self-check but always restores it before returning.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self, color: Color) -> list[Move]:
        """All legal moves for *color*, in row-major square order."""
        moves: list[Move] = []
        with allocation_guard("generating moves"):
            for pos, piece in self._board.pieces(color):
                self._gen_piece(pos, piece, moves)
        return moves

    def legal_moves_for_square(self, pos: Position) -> list[Move]:
        """Legal moves of the piece on *pos*; empty for vacant or off-board squares."""
        piece = piece_at(self._board, pos)
        if piece is None:
            return []
        moves: list[Move] = []
        with allocation_guard("generating moves"):
            self._gen_piece(pos, piece, moves)
        return moves

    def has_legal_move(self, color: Color) -> bool:
        """Whether *color* can move at all. Stops at the first legal move."""
        for pos, piece in self._board.pieces(color):
            for target in self._pseudo_targets(pos, piece):
                if self._leaves_king_safe(pos, target, piece):
                    return True
        return False

    # -- Check detection (public) ------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked? Raises ``KingNotFoundError`` without a king."""
        return self.is_king_under_check(color, self._board.king_position(color))

    def is_king_under_check(self, color: Color, king_pos: Position) -> bool:
        """Would a king of *color* standing on *king_pos* be attacked?"""
        enemy = color.opposite
        return (
            self._pawn_threat(enemy, king_pos)
            or self._ray_threat(enemy, king_pos, BISHOP_DIRS, PieceType.BISHOP)
            or self._ray_threat(enemy, king_pos, ROOK_DIRS, PieceType.ROOK)
            or self._offset_threat(enemy, king_pos, KNIGHT_OFFSETS, PieceType.KNIGHT)
            or self._offset_threat(enemy, king_pos, KING_OFFSETS, PieceType.KING)
        )

    def _pawn_threat(self, enemy: Color, pos: Position) -> bool:
        # Enemy pawns capture on their forward diagonals.
        row = pos.y - enemy.forward
        board = self._board
        return is_occupied_by(
            board, enemy, PieceType.PAWN, Position(pos.x - 1, row)
        ) or is_occupied_by(board, enemy, PieceType.PAWN, Position(pos.x + 1, row))

    def _ray_threat(
        self,
        enemy: Color,
        pos: Position,
        directions: tuple[tuple[int, int], ...],
        slider: PieceType,
    ) -> bool:
        board = self._board
        for dx, dy in directions:
            current = pos.offset(dx, dy)
            while is_vacant(board, current):
                current = current.offset(dx, dy)
            if is_occupied_by(board, enemy, slider, current) or is_occupied_by(
                board, enemy, PieceType.QUEEN, current
            ):
                return True
        return False

    def _offset_threat(
        self,
        enemy: Color,
        pos: Position,
        offsets: tuple[tuple[int, int], ...],
        piece_type: PieceType,
    ) -> bool:
        board = self._board
        return any(
            is_occupied_by(board, enemy, piece_type, pos.offset(dx, dy))
            for dx, dy in offsets
        )

    # -- Piece-specific generators (private) -------------------------------

    def _gen_piece(self, pos: Position, piece: Piece, moves: list[Move]) -> None:
        for target in self._pseudo_targets(pos, piece):
            if not self._leaves_king_safe(pos, target, piece):
                continue
            if would_promote(piece, target):
                for pt in PROMOTION_TYPES:
                    moves.append(Move(pos, target, pt))
            else:
                moves.append(Move(pos, target))

    def _pseudo_targets(self, pos: Position, piece: Piece) -> Iterator[Position]:
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            return self._gen_pawn(pos, piece.color)
        if ptype == PieceType.KNIGHT:
            return self._gen_offsets(pos, piece.color, KNIGHT_OFFSETS)
        if ptype == PieceType.KING:
            return self._gen_offsets(pos, piece.color, KING_OFFSETS)
        return self._gen_sliding(pos, piece.color, _SLIDING_DIRS[ptype])

    def _gen_pawn(self, pos: Position, color: Color) -> Iterator[Position]:
        # Straight-ahead squares are never playable; a pawn steps onto a
        # vacant forward diagonal or captures on it.
        board = self._board
        for dx in (-1, 1):
            target = pos.offset(dx, color.forward)
            if is_vacant(board, target) or is_occupied_by_enemy(board, color, target):
                yield target

    def _gen_offsets(
        self,
        pos: Position,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
    ) -> Iterator[Position]:
        board = self._board
        for dx, dy in offsets:
            target = pos.offset(dx, dy)
            if is_vacant(board, target) or is_occupied_by_enemy(board, color, target):
                yield target

    def _gen_sliding(
        self,
        pos: Position,
        color: Color,
        directions: tuple[tuple[int, int], ...],
    ) -> Iterator[Position]:
        board = self._board
        for dx, dy in directions:
            target = pos.offset(dx, dy)
            while is_vacant(board, target):
                yield target
                target = target.offset(dx, dy)
            if is_occupied_by_enemy(board, color, target):
                yield target

    # -- Self-check filter -------------------------------------------------

    def _leaves_king_safe(self, start: Position, dest: Position, piece: Piece) -> bool:
        board = self._board
        king_pos = dest if piece.is_king else board.find_king(piece.color)
        if king_pos is None:
            return True

        captured = board[dest]
        board[start] = None
        board[dest] = piece
        try:
            return not self.is_king_under_check(piece.color, king_pos)
        finally:
            board[dest] = captured
            board[start] = piece
