"""Game state machine: setup, play, move history and result."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum, auto

from chessprog.core.board import Board
from chessprog.core.enums import Color, GameStatus
from chessprog.core.errors import ChessError
from chessprog.core.geometry import piece_at
from chessprog.core.move import Move
from chessprog.core.piece import Piece
from chessprog.core.rules import Rules
from chessprog.core.step import GameStep
from chessprog.core.types import Position
from chessprog.engine.commands import ChessEngine
from chessprog.game.settings import GameSettings

_LOGGER = logging.getLogger(__name__)


class InvalidSetupError(ChessError, ValueError):
    """The board cannot be used to start a game."""


class GamePhase(IntEnum):
    SETUP = auto()
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    step: GameStep
    color: Color


@dataclass
class GameState:
    """Owns the board, the side to move and the move history.

    A game begins in :attr:`GamePhase.SETUP`, where pieces are placed
    freely within the army limits.  :meth:`start` validates the position
    and switches to :attr:`GamePhase.PLAYING`; from then on the board only
    changes through :meth:`submit_move` and :meth:`undo_last_move`.
    """

    settings: GameSettings = field(default_factory=GameSettings)
    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = field(init=False)
    phase: GamePhase = field(default=GamePhase.SETUP, init=False)
    status: GameStatus = field(default=GameStatus.ONGOING, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    engine: ChessEngine = field(init=False)

    def __post_init__(self) -> None:
        self.side_to_move = self.settings.next_player
        self.engine = ChessEngine(self.settings.search_limits())

    # ── Setup phase ──────────────────────────────────────────────────────

    def clear(self) -> None:
        """Empty the board and return to the setup phase."""
        self.board.clear()
        self.move_history.clear()
        self.phase = GamePhase.SETUP
        self.status = GameStatus.ONGOING

    def load_initial(self) -> None:
        """Reset to the standard starting position, still in setup."""
        self.board = Board.initial()
        self.move_history.clear()
        self.phase = GamePhase.SETUP
        self.status = GameStatus.ONGOING

    def set_piece(self, pos: Position, piece: Piece) -> bool:
        """Place *piece* on *pos*; ``False`` if the placement is refused."""
        if self.phase != GamePhase.SETUP:
            _LOGGER.warning("Cannot place %s on %s outside setup", piece, pos)
            return False
        if not Rules.can_place(self.board, pos, piece):
            _LOGGER.warning("Placement of %s on %s rejected", piece, pos)
            return False
        self.board[pos] = piece
        return True

    def remove_piece(self, pos: Position) -> Piece | None:
        """Lift the piece on *pos* during setup and return it."""
        if self.phase != GamePhase.SETUP:
            _LOGGER.warning("Cannot remove a piece from %s outside setup", pos)
            return None
        piece = piece_at(self.board, pos)
        if piece is not None:
            self.board[pos] = None
        return piece

    def set_next_player(self, color: Color) -> None:
        if self.phase != GamePhase.SETUP:
            _LOGGER.warning("Cannot change the side to move outside setup")
            return
        self.side_to_move = color

    def start(self) -> None:
        """Validate the setup and begin play.

        Raises:
            InvalidSetupError: a side lacks its single king, exceeds an army
                limit, or has a pawn on its promotion rank.
        """
        if self.phase != GamePhase.SETUP:
            raise InvalidSetupError("The game has already started")
        if not Rules.is_valid_starting_position(self.board):
            _LOGGER.warning("Rejected starting position:\n%r", self.board)
            raise InvalidSetupError("Invalid starting position")
        self.phase = GamePhase.PLAYING
        self._update_status()

    # ── Play phase ───────────────────────────────────────────────────────

    def submit_move(self, move: Move) -> bool:
        """Play *move* for the side to move; ``False`` if it is not legal."""
        if self.phase != GamePhase.PLAYING:
            return False
        if not self.engine.is_legal_move(self.board, self.side_to_move, move):
            return False

        step = self.engine.apply_move(self.board, move)
        self.move_history.append(MoveRecord(move, step, self.side_to_move))
        self.side_to_move = self.side_to_move.opposite
        self._update_status()
        return True

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        if self.phase == GamePhase.SETUP or not self.move_history:
            return None

        record = self.move_history.pop()
        self.engine.undo_move(self.board, record.step)
        self.side_to_move = record.color
        self.phase = GamePhase.PLAYING
        self._update_status()
        return record.move

    def engine_move(self) -> Move | None:
        """Let the engine play the side to move. ``None`` if it cannot move."""
        if self.phase != GamePhase.PLAYING:
            return None
        result = self.engine.search(self.board, self.side_to_move)
        if result.best_move is None:
            return None
        self.submit_move(result.best_move)
        return result.best_move

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def is_engine_turn(self) -> bool:
        return self.phase == GamePhase.PLAYING and (
            self.settings.engine_color == self.side_to_move
        )

    @property
    def winner(self) -> Color | None:
        if self.status == GameStatus.MATE_WHITE_WINS:
            return Color.WHITE
        if self.status == GameStatus.MATE_BLACK_WINS:
            return Color.BLACK
        return None

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def legal_moves(self) -> list[Move]:
        """Legal moves of the side to move."""
        return self.engine.get_legal_moves(self.board, self.side_to_move)

    # ── Internal ─────────────────────────────────────────────────────────

    def _update_status(self) -> None:
        self.status = Rules.game_status(self.board, self.side_to_move)
        if self.status.is_terminal:
            self.phase = GamePhase.GAME_OVER
            _LOGGER.info("Game over: %s", self.status.name)
