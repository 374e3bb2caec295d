"""Core domain layer - board model, move generation and reversible steps.

Quick start::

    from chessprog.core import Board, Color, MoveGenerator

    board = Board.initial()
    for move in MoveGenerator(board).generate_legal_moves(Color.WHITE):
        print(move)
"""

from chessprog.core.board import Board
from chessprog.core.enums import Color, GameStatus, PieceType
from chessprog.core.errors import (
    AllocationError,
    ChessError,
    InvalidMoveError,
    InvalidPlacementError,
    KingNotFoundError,
)
from chessprog.core.geometry import Army, army_counts, get_king_position
from chessprog.core.move import PROMOTION_TYPES, Move
from chessprog.core.move_generator import MoveGenerator
from chessprog.core.notation import (
    STARTING_PLACEMENT,
    board_from_placement,
    board_to_placement,
    move_to_text,
    parse_move,
)
from chessprog.core.piece import Piece
from chessprog.core.rules import Rules
from chessprog.core.step import (
    GameStep,
    applied_step,
    create_game_step,
    do_step,
    undo_step,
)
from chessprog.core.types import Position, parse_position, position_name

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "PieceType",
    # Errors
    "AllocationError",
    "ChessError",
    "InvalidMoveError",
    "InvalidPlacementError",
    "KingNotFoundError",
    # Types / helpers
    "Position",
    "parse_position",
    "position_name",
    # Domain objects
    "Army",
    "Board",
    "GameStep",
    "Move",
    "MoveGenerator",
    "PROMOTION_TYPES",
    "Piece",
    "Rules",
    "army_counts",
    "get_king_position",
    # Steps
    "applied_step",
    "create_game_step",
    "do_step",
    "undo_step",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_placement",
    "board_to_placement",
    "move_to_text",
    "parse_move",
]
