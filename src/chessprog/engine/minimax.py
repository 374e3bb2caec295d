"""Minimax search with alpha-beta pruning over material scores."""

from __future__ import annotations

import logging

from chessprog.core.board import Board
from chessprog.core.enums import Color
from chessprog.core.errors import AllocationError, KingNotFoundError, allocation_guard
from chessprog.core.geometry import army_counts
from chessprog.core.move import Move
from chessprog.core.move_generator import MoveGenerator
from chessprog.core.step import applied_step
from chessprog.engine.search import IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

WINNING_SCORE = 1000
LOSING_SCORE = -1000
DRAW_SCORE = 0
_INF_SCORE = 1_000_000


def get_score(board: Board, for_color: Color) -> int:
    """Material balance from *for_color*'s point of view.

    A side left with neither pawns nor a king is eliminated: the score is
    :data:`WINNING_SCORE` for its opponent and :data:`LOSING_SCORE` for it.
    """
    own = army_counts(board, for_color)
    other = army_counts(board, for_color.opposite)
    if other.pawns == 0 and other.kings == 0:
        return WINNING_SCORE
    if own.pawns == 0 and own.kings == 0:
        return LOSING_SCORE
    return own.material - other.material


class MinimaxEngine(IEngine):
    """Depth-bounded minimax with alpha-beta pruning.

    Levels alternate between maximising (even) and minimising (odd); the
    root's children are searched from level 1.  Every score is given from
    the point of view of the side that moves at the root.  The board is
    mutated in place through :func:`applied_step` and is always restored.
    """

    __slots__ = ("_limits", "_max_depth", "_stalemate_is_draw", "_nodes")

    def __init__(self, limits: SearchLimits | None = None) -> None:
        self._limits = limits or SearchLimits()
        self._max_depth = self._limits.max_depth
        self._stalemate_is_draw = self._limits.stalemate_is_draw
        self._nodes = 0

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @property
    def nodes(self) -> int:
        """Nodes visited by the most recent query."""
        return self._nodes

    # -- Queries ------------------------------------------------------------

    def search(
        self,
        board: Board,
        color: Color,
        limits: SearchLimits | None = None,
    ) -> SearchResult:
        """Pick *color*'s move and report its score."""
        self._begin(limits)
        try:
            with allocation_guard("searching"):
                best_move, score = self._search_root(board, color)
        except AllocationError:
            _LOGGER.error("Search aborted: out of memory")
            raise

        _LOGGER.debug(
            "Search %s depth=%d nodes=%d score=%d best=%s",
            color,
            self._max_depth,
            self._nodes,
            score,
            best_move,
        )
        return SearchResult(best_move, score, self._max_depth, self._nodes)

    def minimax(
        self,
        board: Board,
        color: Color,
        limits: SearchLimits | None = None,
    ) -> Move | None:
        """Root driver: the best move for *color*, or ``None`` if it cannot move."""
        return self.search(board, color, limits).best_move

    def evaluate_move(
        self,
        board: Board,
        color: Color,
        move: Move,
        limits: SearchLimits | None = None,
    ) -> int:
        """Score of *color* playing *move*, searched to the configured depth."""
        self._begin(limits)
        with allocation_guard("scoring a move"):
            gen = MoveGenerator(board)
            with applied_step(board, move):
                return self._child_value(
                    gen, board, 1, -_INF_SCORE, _INF_SCORE, color.opposite, color
                )

    def best_moves(
        self,
        board: Board,
        color: Color,
        limits: SearchLimits | None = None,
    ) -> list[Move]:
        """All of *color*'s moves tied at the highest score, in generation order."""
        moves = MoveGenerator(board).generate_legal_moves(color)
        scores = [self.evaluate_move(board, color, move, limits) for move in moves]
        if not scores:
            return []
        top = max(scores)
        return [move for move, score in zip(moves, scores) if score == top]

    # -- Alpha-beta ---------------------------------------------------------

    def alphabeta(
        self,
        board: Board,
        level: int,
        alpha: int,
        beta: int,
        color_to_move: Color,
    ) -> int:
        """Value of the node where *color_to_move* is to play at *level*.

        The root mover is *color_to_move* on even levels and its opponent on
        odd ones.  A node whose mover has no legal move is scored like the
        stuck shortcut rather than by material: ``LOSING_SCORE`` or
        ``WINNING_SCORE`` for the root mover, or ``DRAW_SCORE`` for a
        stalemate when ``stalemate_is_draw`` is set.
        """
        self._nodes += 1
        root =color_to_move if level % 2 == 0 else color_to_move.opposite

        if level >= self._max_depth:
            return get_score(board, root)

        gen = MoveGenerator(board)
        moves = gen.generate_legal_moves(color_to_move)
        if not moves:
            return self._stuck_score(gen, color_to_move, root)

        opponent = color_to_move.opposite
        maximizing = level % 2 == 0
        value = -_INF_SCORE if maximizing else _INF_SCORE

        for move in moves:
            if beta <= alpha:
                break
            with applied_step(board, move):
                if gen.has_legal_move(opponent):
                    child = self.alphabeta(board, level + 1, alpha, beta, opponent)
                else:
                    child = self._stuck_score(gen, opponent, root)
                    if child != DRAW_SCORE:
                        return child

            if maximizing:
                value = max(value, child)
                alpha = max(alpha, value)
            else:
                value = min(value, child)
                beta = min(beta, value)

        return value

    # -- Internals ----------------------------------------------------------

    def _begin(self, limits: SearchLimits | None) -> None:
        active = limits or self._limits
        self._max_depth = active.max_depth
        self._stalemate_is_draw = active.stalemate_is_draw
        self._nodes = 0

    def _search_root(self, board: Board, color: Color) -> tuple[Move | None, int]:
        gen = MoveGenerator(board)
        moves = gen.generate_legal_moves(color)
        if not moves:
            return None, self._stuck_score(gen, color, color)

        alpha = -_INF_SCORE
        beta = _INF_SCORE
        best_move: Move | None = None
        best_score = -_INF_SCORE
        opponent = color.opposite

        for move in moves:
            with applied_step(board, move):
                if gen.has_legal_move(opponent):
                    value = self.alphabeta(board, 1, alpha, beta, opponent)
                else:
                    value = self._stuck_score(gen, opponent, color)

            if value > best_score:
                best_score = value
                best_move = move
                if value == WINNING_SCORE:
                    break
            alpha = max(alpha, value)

        return best_move, best_score

    def _child_value(
        self,
        gen: MoveGenerator,
        board: Board,
        level: int,
        alpha: int,
        beta: int,
        mover: Color,
        root: Color,
    ) -> int:
        # A side left without a legal move ends the line before the depth cut.
        if not gen.has_legal_move(mover):
            return self._stuck_score(gen, mover, root)
        return self.alphabeta(board, level, alpha, beta, mover)

    def _stuck_score(self, gen: MoveGenerator, stuck: Color, root: Color) -> int:
        """Score of a node where *stuck* has no legal move."""
        if self._stalemate_is_draw and not self._is_in_check(gen, stuck):
            return DRAW_SCORE
        return LOSING_SCORE if stuck == root else WINNING_SCORE

    @staticmethod
    def _is_in_check(gen: MoveGenerator, color: Color) -> bool:
        # A side whose king is gone counts as mated.
        try:
            return gen.is_in_check(color)
        except KingNotFoundError:
            return True
