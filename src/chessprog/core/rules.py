"""High-level rules: check, mate, tie, elimination and setup validation."""

from __future__ import annotations

from chessprog.core.board import Board
from chessprog.core.enums import Color, GameStatus, PieceType
from chessprog.core.geometry import Army, army_counts, is_on_opposite_edge
from chessprog.core.move_generator import MoveGenerator
from chessprog.core.piece import Piece
from chessprog.core.types import Position, is_playable

# Maximum number of pieces of each kind a side may field.
ARMY_CAPS: dict[PieceType, int] = {
    PieceType.PAWN: 8,
    PieceType.BISHOP: 2,
    PieceType.ROOK: 2,
    PieceType.KNIGHT: 2,
    PieceType.QUEEN: 1,
    PieceType.KING: 1,
}


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    # game_status reports a stuck side outside check as TIE, while
    # is_player_victor counts any stuck opponent as beaten.

    @staticmethod
    def army_counts(board: Board, color: Color) -> Army:
        return army_counts(board, color)

    @staticmethod
    def is_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def is_stuck(board: Board, color: Color) -> bool:
        return not MoveGenerator(board).has_legal_move(color)

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        gen = MoveGenerator(board)
        return gen.is_in_check(color) and not gen.has_legal_move(color)

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        gen = MoveGenerator(board)
        return not gen.is_in_check(color) and not gen.has_legal_move(color)

    @staticmethod
    def is_eliminated(board: Board, color: Color) -> bool:
        """No pawns and no king left."""
        army = army_counts(board, color)
        return army.pawns == 0 and army.kings == 0

    @staticmethod
    def is_player_victor(board: Board, color: Color) -> bool:
        """Has *color* won: the opponent is eliminated or cannot move."""
        opponent = color.opposite
        return Rules.is_eliminated(board, opponent) or Rules.is_stuck(board, opponent)

    @staticmethod
    def game_status(board: Board, color: Color) -> GameStatus:
        """Status of the game with *color* to move."""
        gen = MoveGenerator(board)
        can_move = gen.has_legal_move(color)
        if gen.is_in_check(color):
            if can_move:
                return GameStatus.CHECK
            return (
                GameStatus.MATE_BLACK_WINS
                if color == Color.WHITE
                else GameStatus.MATE_WHITE_WINS
            )
        if not can_move:
            return GameStatus.TIE
        return GameStatus.ONGOING

    # -- Setup validation ---------------------------------------------------

    @staticmethod
    def has_valid_edges(board: Board) -> bool:
        """No pawn stands on the rank it would promote on."""
        return not any(
            piece.is_pawn and is_on_opposite_edge(piece.color, pos.y)
            for pos, piece in board.occupied()
        )

    @staticmethod
    def is_valid_starting_position(board: Board) -> bool:
        """Exactly one king per side, army caps respected, valid edges."""
        for color in Color:
            army = army_counts(board, color)
            if army.kings != 1:
                return False
            if any(army.count(pt) > cap for pt, cap in ARMY_CAPS.items()):
                return False
        return Rules.has_valid_edges(board)

    @staticmethod
    def can_place(board: Board, pos: Position, piece: Piece) -> bool:
        """Would setting *piece* on *pos* keep the board a valid setup?"""
        if not is_playable(pos.x, pos.y):
            return False
        if board[pos] == piece:
            return True
        if piece.is_pawn and is_on_opposite_edge(piece.color, pos.y):
            return False
        army = army_counts(board, piece.color)
        return army.count(piece.piece_type) < ARMY_CAPS[piece.piece_type]
