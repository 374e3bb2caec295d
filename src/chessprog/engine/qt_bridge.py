"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessprog.core.board import Board
from chessprog.core.enums import Color
from chessprog.engine.minimax import MinimaxEngine
from chessprog.engine.search import SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Each request searches a private copy of the board, so the caller may
    keep mutating its own board while the worker thread runs.
    """

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_no_move = pyqtSignal(int, int, int, int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_engine", "_limits")

    def __init__(
        self,
        *,
        max_depth: int = 1,
        stalemate_is_draw: bool = False,
    ) -> None:
        super().__init__()
        self._limits = SearchLimits(
            max_depth=max_depth, stalemate_is_draw=stalemate_is_draw
        )
        self._engine = MinimaxEngine(self._limits)

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(object, object, int)
    def request_move(
        self, board_obj: object, color_obj: object, request_id: int
    ) -> None:
        """Search for *color_obj*'s best move on *board_obj* and emit the result."""
        if not isinstance(board_obj, Board):
            self.search_error.emit(request_id, "Engine received invalid board")
            return
        if not isinstance(color_obj, Color):
            self.search_error.emit(request_id, "Engine received invalid color")
            return

        try:
            result = self._engine.search(board_obj.copy(), color_obj, self._limits)
        except Exception as exc:
            _LOGGER.exception("Engine search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if result.best_move is None:
            self.search_no_move.emit(
                request_id,
                result.score,
                result.depth,
                result.nodes,
            )
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot(int)
    def set_depth(self, max_depth: int) -> None:
        """Update the search depth (takes effect on the next search)."""
        self._limits = self._limits.with_depth(max_depth)
