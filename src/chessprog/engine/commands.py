"""Command API consumed by console and GUI front ends.

Every query takes the board and the side explicitly; the facade keeps no
game state of its own beyond the default search limits.  Bad input such as
an off-board square or an illegal move is answered with ``False`` or an
empty list instead of an exception.
"""

from __future__ import annotations

import logging

from chessprog.core.board import Board
from chessprog.core.enums import Color, GameStatus
from chessprog.core.geometry import Army, is_on_board, piece_at
from chessprog.core.move import Move
from chessprog.core.move_generator import MoveGenerator
from chessprog.core.rules import Rules
from chessprog.core.step import GameStep, create_game_step, do_step, undo_step
from chessprog.core.types import Position
from chessprog.engine.minimax import MinimaxEngine
from chessprog.engine.search import Depth, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)


class ChessEngine:
    """Stateless facade over move generation, stepping and search."""

    __slots__ = ("_limits", "_engine")

    def __init__(
        self,
        limits: SearchLimits | None = None,
        engine: MinimaxEngine | None = None,
    ) -> None:
        self._limits = limits or SearchLimits()
        self._engine = engine or MinimaxEngine(self._limits)

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @limits.setter
    def limits(self, value: SearchLimits) -> None:
        self._limits = value

    def set_depth(self, depth: Depth) -> None:
        """Change the default search depth; *depth* is 1..4 or ``"best"``."""
        self._limits = self._limits.with_depth(depth)

    # ── Move generation ──────────────────────────────────────────────────

    def get_legal_moves(self, board: Board, color: Color) -> list[Move]:
        return MoveGenerator(board).generate_legal_moves(color)

    def get_legal_moves_for_square(self, board: Board, pos: Position) -> list[Move]:
        if not is_on_board(pos):
            return []
        return MoveGenerator(board).legal_moves_for_square(pos)

    def is_legal_move(self, board: Board, color: Color, move: Move) -> bool:
        piece = piece_at(board, move.init_pos)
        if piece is None or piece.color != color:
            return False
        return move in MoveGenerator(board).legal_moves_for_square(move.init_pos)

    # ── Stepping ─────────────────────────────────────────────────────────

    def apply_move(self, board: Board, move: Move) -> GameStep:
        """Apply *move* to *board* and return the step needed to undo it.

        The move is not checked for legality; use :meth:`is_legal_move`.
        A move that starts on an empty square or lands off the board or on
        a piece of its own color raises ``InvalidMoveError`` before the
        board is touched.
        """
        step = create_game_step(board, move)
        do_step(board, step)
        return step

    def undo_move(self, board: Board, step: GameStep) -> None:
        undo_step(board, step)

    # ── Search ───────────────────────────────────────────────────────────

    def search(
        self,
        board: Board,
        color: Color,
        depth: Depth | None = None,
    ) -> SearchResult:
        return self._engine.search(board, color, self._limits_for(depth))

    def evaluate_move(
        self,
        board: Board,
        color: Color,
        move: Move,
        depth: Depth | None = None,
    ) -> int | None:
        """Score of *color* playing *move*, from *color*'s point of view.

        Returns ``None`` when *move* is not a legal move of *color*.
        """
        if not self.is_legal_move(board, color, move):
            _LOGGER.debug("Not scoring illegal move %s for %s", move, color)
            return None
        return self._engine.evaluate_move(board, color, move, self._limits_for(depth))

    def best_moves(
        self,
        board: Board,
        color: Color,
        depth: Depth | None = None,
    ) -> list[Move]:
        """Every move of *color* that ties for the highest score."""
        return self._engine.best_moves(board, color, self._limits_for(depth))

    def run_engine_move(self, board: Board, color: Color) -> Move | None:
        """Pick *color*'s move and play it on *board*.

        Returns the move played, or ``None`` when *color* cannot move.
        """
        result = self.search(board, color)
        if result.best_move is None:
            _LOGGER.info("Engine has no move for %s", color)
            return None
        self.apply_move(board, result.best_move)
        _LOGGER.info("Engine played %s (score %d)", result.best_move, result.score)
        return result.best_move

    # ── Position queries ─────────────────────────────────────────────────

    def army_counts(self, board: Board, color: Color) -> Army:
        return Rules.army_counts(board, color)

    def is_valid_starting_position(self, board: Board) -> bool:
        return Rules.is_valid_starting_position(board)

    def game_status(self, board: Board, color: Color) -> GameStatus:
        return Rules.game_status(board, color)

    # ── Internal ─────────────────────────────────────────────────────────

    def _limits_for(self, depth: Depth | None) -> SearchLimits:
        if depth is None:
            return self._limits
        return self._limits.with_depth(depth)
