"""Tests for GameState setup and play phases."""

import pytest

from chessprog.core.board import Board
from chessprog.core.enums import Color, GameStatus, PieceType
from chessprog.core.move import Move
from chessprog.core.notation import board_from_placement
from chessprog.core.piece import Piece
from chessprog.core.types import Position
from chessprog.game.settings import GameMode, GameSettings
from chessprog.game.state import GamePhase, GameState, InvalidSetupError

WQ = Piece(Color.WHITE, PieceType.QUEEN)
FIRST_MOVE = Move(Position(0, 2), Position(1, 3))


def _started(placement: str | None = None, **settings: object) -> GameState:
    state = GameState(GameSettings(**settings))
    if placement is not None:
        state.board = board_from_placement(placement)
    state.start()
    return state


class TestSetupPhase:
    def test_initial_state(self) -> None:
        state = GameState()
        assert state.phase == GamePhase.SETUP
        assert state.side_to_move == Color.WHITE
        assert state.board == Board.initial()

    def test_next_player_from_settings(self) -> None:
        state = GameState(GameSettings(next_player=Color.BLACK))
        assert state.side_to_move == Color.BLACK

    def test_set_and_remove_piece(self) -> None:
        state = GameState()
        state.clear()

        assert state.set_piece(Position(2, 2), WQ)
        assert state.board[Position(2, 2)] == WQ
        assert state.remove_piece(Position(2, 2)) == WQ
        assert state.board[Position(2, 2)] is None

    def test_set_piece_enforces_caps(self) -> None:
        state = GameState()
        assert not state.set_piece(Position(3, 3), WQ)

    def test_set_piece_rejects_unplayable_square(self) -> None:
        state = GameState()
        state.clear()
        assert not state.set_piece(Position(1, 0), WQ)

    def test_rejected_placement_is_logged(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        state = GameState()
        with caplog.at_level("WARNING", logger="chessprog.game.state"):
            state.set_piece(Position(3, 3), WQ)
        assert "rejected" in caplog.text

    def test_start_validates_position(self) -> None:
        state = GameState()
        state.clear()
        with pytest.raises(InvalidSetupError):
            state.start()
        assert state.phase == GamePhase.SETUP

    def test_start_begins_play(self) -> None:
        state = GameState()
        state.start()
        assert state.phase == GamePhase.PLAYING
        assert state.status == GameStatus.ONGOING

    def test_cannot_start_twice(self) -> None:
        state = _started()
        with pytest.raises(InvalidSetupError):
            state.start()

    def test_setup_frozen_during_play(self) -> None:
        state = _started()
        assert not state.set_piece(Position(3, 3), WQ)
        assert state.remove_piece(Position(0, 2)) is None
        state.set_next_player(Color.BLACK)
        assert state.side_to_move == Color.WHITE

    def test_set_next_player(self) -> None:
        state = GameState()
        state.set_next_player(Color.BLACK)
        state.start()
        assert state.legal_moves()[0].init_pos.y == 5

    def test_load_initial_after_clear(self) -> None:
        state = GameState()
        state.clear()
        state.load_initial()
        assert state.board == Board.initial()


class TestPlayPhase:
    def test_submit_before_start_is_rejected(self) -> None:
        state = GameState()
        assert not state.submit_move(FIRST_MOVE)

    def test_submit_legal_move(self) -> None:
        state = _started()
        assert state.submit_move(FIRST_MOVE)
        assert state.side_to_move == Color.BLACK
        assert state.ply_count == 1
        assert state.move_history[0].color == Color.WHITE
        assert state.board[Position(1, 3)] == Piece(Color.WHITE, PieceType.PAWN)

    def test_submit_illegal_move(self) -> None:
        state = _started()
        assert not state.submit_move(Move(Position(0, 2), Position(0, 3)))
        assert not state.submit_move(Move(Position(1, 5), Position(0, 4)))
        assert state.ply_count == 0
        assert state.side_to_move == Color.WHITE

    def test_undo_last_move(self) -> None:
        state = _started()
        state.submit_move(FIRST_MOVE)
        assert state.undo_last_move() == FIRST_MOVE
        assert state.board == Board.initial()
        assert state.side_to_move == Color.WHITE

    def test_undo_without_history(self) -> None:
        assert _started().undo_last_move() is None

    def test_engine_move(self) -> None:
        state = _started("3k4/8/8/8/3q4/2P5/8/4K3")
        assert state.engine_move() == Move(Position(2, 2), Position(3, 3))
        assert state.side_to_move == Color.BLACK

    def test_engine_turn(self) -> None:
        state = _started(game_mode=GameMode.PLAYER_VS_AI, user_color=Color.BLACK)
        assert state.is_engine_turn
        state.engine_move()
        assert not state.is_engine_turn


class TestGameOver:
    def test_checkmate_ends_game(self) -> None:
        state = _started("7k/8/8/8/7Q/8/8/4K3")
        assert state.submit_move(Move(Position(7, 3), Position(5, 5)))
        assert state.status == GameStatus.MATE_WHITE_WINS
        assert state.is_game_over
        assert state.winner == Color.WHITE

    def test_stalemate_is_a_tie(self) -> None:
        state = _started("7k/8/8/4P3/8/8/8/4K3")
        assert state.submit_move(Move(Position(4, 4), Position(5, 5)))
        assert state.status == GameStatus.TIE
        assert state.is_game_over
        assert state.winner is None

    def test_no_moves_after_game_over(self) -> None:
        state = _started("7k/8/8/4P3/8/8/8/4K3")
        state.submit_move(Move(Position(4, 4), Position(5, 5)))
        assert not state.submit_move(Move(Position(4, 0), Position(3, 1)))
        assert state.engine_move() is None

    def test_undo_reopens_game(self) -> None:
        state = _started("7k/8/8/8/7Q/8/8/4K3")
        state.submit_move(Move(Position(7, 3), Position(5, 5)))
        state.undo_last_move()
        assert state.phase == GamePhase.PLAYING
        assert state.status == GameStatus.ONGOING
