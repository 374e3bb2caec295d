"""Game layer: settings and the setup / play state machine."""

from chessprog.game.settings import GameMode, GameSettings, SettingsError
from chessprog.game.state import GamePhase, GameState, InvalidSetupError, MoveRecord

__all__ = [
    "GameMode",
    "GamePhase",
    "GameSettings",
    "GameState",
    "InvalidSetupError",
    "MoveRecord",
    "SettingsError",
]
