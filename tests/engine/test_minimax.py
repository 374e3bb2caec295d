"""Tests for the minimax / alpha-beta engine."""

from __future__ import annotations

import random

import pytest

from chessprog.core.board import Board
from chessprog.core.enums import Color, PieceType
from chessprog.core.errors import AllocationError
from chessprog.core.move import Move
from chessprog.core.move_generator import MoveGenerator
from chessprog.core.notation import board_from_placement
from chessprog.core.piece import Piece
from chessprog.core.rules import Rules
from chessprog.core.step import applied_step
from chessprog.core.types import Position, playable_positions
from chessprog.engine.minimax import (
    DRAW_SCORE,
    LOSING_SCORE,
    WINNING_SCORE,
    MinimaxEngine,
    get_score,
)
from chessprog.engine.search import SearchLimits

_RANDOM_KINDS = (PieceType.PAWN, PieceType.PAWN, PieceType.BISHOP, PieceType.QUEEN)

STALEMATED_WHITE = "3k4/8/8/8/8/4p3/8/4K3"
MATED_WHITE = "3k4/8/8/8/8/2q5/8/K7"
STALEMATE_IN_ONE = "7k/8/8/4P3/8/8/8/4K3"
QUEEN_EN_PRISE = "3k4/8/8/8/3q4/2P5/8/4K3"


def _stuck(mover: Color, root: Color) -> int:
    return LOSING_SCORE if mover == root else WINNING_SCORE


def _reference(board: Board, level: int, depth: int, mover: Color, root: Color) -> int:
    """Plain minimax without pruning, scored for *root*."""
    if level >= depth:
        return get_score(board, root)
    moves = MoveGenerator(board).generate_legal_moves(mover)
    if not moves:
        return _stuck(mover, root)
    values = [
        _reference_child(board, move, level, depth, mover, root) for move in moves
    ]
    return max(values) if level % 2 == 0 else min(values)


def _reference_child(
    board: Board, move: Move, level: int, depth: int, mover: Color, root: Color
) -> int:
    opponent = mover.opposite
    with applied_step(board, move):
        if not MoveGenerator(board).has_legal_move(opponent):
            return _stuck(opponent, root)
        return _reference(board, level + 1, depth, opponent, root)


def _reference_root(board: Board, color: Color, depth: int) -> tuple[Move | None, int]:
    moves = MoveGenerator(board).generate_legal_moves(color)
    if not moves:
        return None, LOSING_SCORE
    best_move, best = None, None
    for move in moves:
        value = _reference_child(board, move, 0, depth, color, color)
        if best is None or value > best:
            best_move, best = move, value
    return best_move, best


def _random_board(rng: random.Random) -> Board:
    """Two kings plus a handful of pawns, bishops and queens."""
    squares = list(playable_positions())
    while True:
        board = Board()
        rng.shuffle(squares)
        board[squares[0]] = Piece(Color.WHITE, PieceType.KING)
        board[squares[1]] = Piece(Color.BLACK, PieceType.KING)
        for pos in squares[2 : 2 + rng.randint(1, 4)]:
            piece = Piece(rng.choice(list(Color)), rng.choice(_RANDOM_KINDS))
            if Rules.can_place(board, pos, piece):
                board[pos] = piece
        if not Rules.is_valid_starting_position(board):
            continue
        # Black must not be in check with white to move.
        if MoveGenerator(board).is_in_check(Color.BLACK):
            continue
        return board


class TestGetScore:
    def test_initial_is_balanced(self, initial_board: Board) -> None:
        assert get_score(initial_board, Color.WHITE) == 0

    def test_material_difference(self) -> None:
        board = board_from_placement(QUEEN_EN_PRISE)
        assert get_score(board, Color.WHITE) == -8
        assert get_score(board, Color.BLACK) == 8

    def test_elimination(self) -> None:
        board = board_from_placement("3k4/8/8/8/8/8/8/Q7")
        assert get_score(board, Color.BLACK) == WINNING_SCORE
        assert get_score(board, Color.WHITE) == LOSING_SCORE


class TestMinimaxSearch:
    def test_returns_legal_move_from_start(self, initial_board: Board) -> None:
        engine = MinimaxEngine(SearchLimits(max_depth=2))
        result = engine.search(initial_board, Color.WHITE)

        assert result.best_move in MoveGenerator(initial_board).generate_legal_moves(
            Color.WHITE
        )
        assert result.depth == 2
        assert result.nodes > 0

    def test_search_restores_board(self, initial_board: Board) -> None:
        before = initial_board.copy()
        MinimaxEngine(SearchLimits(max_depth=3)).search(initial_board, Color.BLACK)
        assert initial_board == before

    def test_captures_hanging_queen(self) -> None:
        board = board_from_placement(QUEEN_EN_PRISE)
        result = MinimaxEngine().search(board, Color.WHITE)
        assert result.best_move == Move(Position(2, 2), Position(3, 3))
        assert result.score == 1

    def test_is_deterministic(self, initial_board: Board) -> None:
        engine = MinimaxEngine(SearchLimits(max_depth=3))
        first = engine.search(initial_board, Color.WHITE)
        second = engine.search(initial_board, Color.WHITE)
        assert first == second

    def test_ties_go_to_first_move(self, initial_board: Board) -> None:
        result = MinimaxEngine().search(initial_board, Color.WHITE)
        assert result.best_move == Move(Position(0, 2), Position(1, 3))
        assert result.score == 0

    def test_minimax_returns_move(self) -> None:
        board = board_from_placement(QUEEN_EN_PRISE)
        assert MinimaxEngine().minimax(board, Color.WHITE) == Move(
            Position(2, 2), Position(3, 3)
        )

    def test_per_query_limits_override(self, initial_board: Board) -> None:
        engine = MinimaxEngine(SearchLimits(max_depth=1))
        result = engine.search(initial_board, Color.WHITE, SearchLimits(max_depth=3))
        assert result.depth == 3
        assert engine.limits.max_depth == 1


class TestStuckDetection:
    def test_stuck_root_has_no_move(self) -> None:
        board = board_from_placement(STALEMATED_WHITE)
        result = MinimaxEngine().search(board, Color.WHITE)
        assert result.best_move is None
        assert result.score == LOSING_SCORE

    def test_mated_root_has_no_move(self) -> None:
        board = board_from_placement(MATED_WHITE)
        assert MinimaxEngine().minimax(board, Color.WHITE) is None

    def test_leaving_opponent_stuck_wins(self) -> None:
        board = board_from_placement(STALEMATE_IN_ONE)
        result = MinimaxEngine().search(board, Color.WHITE)
        assert result.best_move == Move(Position(4, 4), Position(5, 5))
        assert result.score == WINNING_SCORE

    def test_stalemate_as_draw_at_root(self) -> None:
        board = board_from_placement(STALEMATED_WHITE)
        limits = SearchLimits(max_depth=1, stalemate_is_draw=True)
        result = MinimaxEngine(limits).search(board, Color.WHITE)
        assert result.best_move is None
        assert result.score == DRAW_SCORE

    def test_checkmate_still_loses_when_stalemate_is_draw(self) -> None:
        board = board_from_placement(MATED_WHITE)
        limits = SearchLimits(max_depth=1, stalemate_is_draw=True)
        assert MinimaxEngine(limits).search(board, Color.WHITE).score == LOSING_SCORE

    @pytest.mark.parametrize(
        ("level", "expected"), [(0, LOSING_SCORE), (1, WINNING_SCORE), (2, LOSING_SCORE)]
    )
    def test_alphabeta_on_stuck_node(self, level: int, expected: int) -> None:
        board = board_from_placement(STALEMATED_WHITE)
        engine = MinimaxEngine(SearchLimits(max_depth=4))
        score = engine.alphabeta(board, level, -(10**6), 10**6, Color.WHITE)
        assert score == expected

    def test_alphabeta_on_stuck_node_as_draw(self) -> None:
        board = board_from_placement(STALEMATED_WHITE)
        limits = SearchLimits(max_depth=4, stalemate_is_draw=True)
        score = MinimaxEngine(limits).alphabeta(board, 1, -(10**6), 10**6, Color.WHITE)
        assert score == DRAW_SCORE

    def test_stalemate_as_draw_avoids_stalemating(self) -> None:
        board = board_from_placement(STALEMATE_IN_ONE)
        limits = SearchLimits(max_depth=1, stalemate_is_draw=True)
        result = MinimaxEngine(limits).search(board, Color.WHITE)
        assert result.best_move == Move(Position(4, 0), Position(3, 1))
        assert result.score == 1


class TestEvaluateMove:
    def test_scores_from_mover_view(self) -> None:
        board = board_from_placement(QUEEN_EN_PRISE)
        engine = MinimaxEngine()
        capture = Move(Position(2, 2), Position(3, 3))
        retreat = Move(Position(2, 2), Position(1, 3))
        assert engine.evaluate_move(board, Color.WHITE, capture) == 1
        assert engine.evaluate_move(board, Color.WHITE, retreat) == -8

    def test_best_moves_returns_all_ties(self, initial_board: Board) -> None:
        engine = MinimaxEngine()
        moves = engine.best_moves(initial_board, Color.WHITE)
        assert moves == MoveGenerator(initial_board).generate_legal_moves(Color.WHITE)

    def test_best_moves_single_winner(self) -> None:
        board = board_from_placement(QUEEN_EN_PRISE)
        assert MinimaxEngine().best_moves(board, Color.WHITE) == [
            Move(Position(2, 2), Position(3, 3))
        ]

    def test_best_moves_for_stuck_side_is_empty(self) -> None:
        board = board_from_placement(STALEMATED_WHITE)
        assert MinimaxEngine().best_moves(board, Color.WHITE) == []


class TestAllocationFailure:
    def test_memory_error_becomes_allocation_error(
        self, initial_board: Board, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _exhausted(self: MoveGenerator, color: Color) -> bool:
            raise MemoryError

        before = initial_board.copy()
        monkeypatch.setattr(MoveGenerator, "has_legal_move", _exhausted)

        with pytest.raises(AllocationError):
            MinimaxEngine(SearchLimits(max_depth=2)).search(initial_board, Color.WHITE)
        assert initial_board == before


class TestAlphaBetaMatchesMinimax:
    @pytest.mark.parametrize("seed", range(12))
    @pytest.mark.parametrize("depth", [1, 2])
    def test_small_boards(self, seed: int, depth: int) -> None:
        board = _random_board(random.Random(seed))
        self._check(board, depth)

    @pytest.mark.slow
    @pytest.mark.parametrize("seed", range(100, 120))
    def test_small_boards_depth_three(self, seed: int) -> None:
        board = _random_board(random.Random(seed))
        self._check(board, 3)

    def _check(self, board: Board, depth: int) -> None:
        before = board.copy()
        expected = _reference_root(board.copy(), Color.WHITE, depth)

        result = MinimaxEngine(SearchLimits(max_depth=depth)).search(board, Color.WHITE)

        assert (result.best_move, result.score) == expected, repr(board)
        assert board == before
