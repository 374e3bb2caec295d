"""Chess engine package: search implementation, command API and Qt worker bridge."""

from chessprog.engine.commands import ChessEngine
from chessprog.engine.minimax import (
    DRAW_SCORE,
    LOSING_SCORE,
    WINNING_SCORE,
    MinimaxEngine,
    get_score,
)
from chessprog.engine.qt_bridge import EngineWorker
from chessprog.engine.search import (
    DIFFICULTY_BEST,
    MAX_DEPTH,
    IEngine,
    SearchLimits,
    SearchResult,
    resolve_depth,
)

__all__ = [
    "ChessEngine",
    "DIFFICULTY_BEST",
    "DRAW_SCORE",
    "EngineWorker",
    "IEngine",
    "LOSING_SCORE",
    "MAX_DEPTH",
    "MinimaxEngine",
    "SearchLimits",
    "SearchResult",
    "WINNING_SCORE",
    "get_score",
    "resolve_depth",
]
