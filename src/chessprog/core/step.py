"""GameStep - the reversible board edit derived from a :class:`Move`."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from chessprog.core.board import Board
from chessprog.core.errors import InvalidMoveError, allocation_guard
from chessprog.core.geometry import (
    is_occupied_by_current_player,
    is_on_board,
    piece_at,
    would_promote,
)
from chessprog.core.move import Move
from chessprog.core.piece import Piece
from chessprog.core.types import Position


@dataclass(frozen=True, slots=True)
class GameStep:
    """Everything needed to apply a move and to take it back exactly."""

    start_pos: Position
    end_pos: Position
    moving_piece: Piece
    placed_piece: Piece
    captured_positions: tuple[Position, ...] = ()
    captured_pieces: tuple[Piece, ...] = ()

    @property
    def is_promotion(self) -> bool:
        return self.placed_piece != self.moving_piece

    @property
    def is_capture(self) -> bool:
        return bool(self.captured_positions)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _leg_squares(start: Position, end: Position) -> Iterator[Position]:
    """Squares entered on the way from *start* to *end*, *end* included."""
    dx = end.x - start.x
    dy = end.y - start.y
    if dx != 0 and dy != 0 and abs(dx) != abs(dy):
        # Not a straight line (knight jump): only the landing square counts.
        yield end
        return
    step_x = _sign(dx)
    step_y = _sign(dy)
    current = start
    while current != end:
        current = current.offset(step_x, step_y)
        yield current


def create_game_step(board: Board, move: Move) -> GameStep:
    """Diff *move* against *board* and record what it moves and destroys."""
    piece = piece_at(board, move.init_pos)
    if piece is None:
        raise InvalidMoveError(f"No piece on {move.init_pos}")
    for landing in move.landings:
        if not is_on_board(landing):
            raise InvalidMoveError(f"Move lands off the board at {landing}")
        if is_occupied_by_current_player(board, piece.color, landing):
            raise InvalidMoveError(f"Move lands on its own piece at {landing}")

    placed = piece
    if move.promotion is not None and would_promote(piece, move.next_pos):
        placed = piece.promoted(move.promotion)

    captured_positions: list[Position] = []
    captured_pieces: list[Piece] = []
    with allocation_guard("building a game step"):
        leg_start = move.init_pos
        for landing in move.landings:
            for square in _leg_squares(leg_start, landing):
                target = piece_at(board, square)
                if target is not None and target.color != piece.color:
                    captured_positions.append(square)
                    captured_pieces.append(target)
            leg_start = landing

    return GameStep(
        start_pos=move.init_pos,
        end_pos=move.next_pos,
        moving_piece=piece,
        placed_piece=placed,
        captured_positions=tuple(captured_positions),
        captured_pieces=tuple(captured_pieces),
    )


def do_step(board: Board, step: GameStep) -> None:
    """Execute *step* on *board*."""
    board[step.start_pos] = None
    for pos in step.captured_positions:
        board[pos] = None
    board[step.end_pos] = step.placed_piece


def undo_step(board: Board, step: GameStep) -> None:
    """Take back *step*; the exact inverse of :func:`do_step`."""
    board[step.end_pos] = None
    board[step.start_pos] = step.moving_piece
    for pos, piece in zip(step.captured_positions, step.captured_pieces):
        board[pos] = piece


@contextmanager
def applied_step(board: Board, move: Move) -> Iterator[GameStep]:
    """Apply *move* for the duration of the ``with`` block, then undo it."""
    step = create_game_step(board, move)
    do_step(board, step)
    try:
        yield step
    finally:
        undo_step(board, step)
