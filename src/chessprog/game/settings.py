"""Game configuration chosen before play starts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from chessprog.core.enums import Color
from chessprog.core.errors import ChessError
from chessprog.engine.search import DIFFICULTY_BEST, Depth, SearchLimits, resolve_depth


class SettingsError(ChessError, ValueError):
    """A game setting holds a value outside its allowed range."""


class GameMode(IntEnum):
    TWO_PLAYERS = auto()
    PLAYER_VS_AI = auto()


@dataclass(slots=True, frozen=True)
class GameSettings:
    """Mode, difficulty and colors for a single game.

    Args:
        game_mode: Whether the engine plays one of the sides.
        difficulty: Search depth 1..4, or ``"best"``.
        user_color: The human's side in :attr:`GameMode.PLAYER_VS_AI`.
        next_player: The side that moves first.
        stalemate_is_draw: Score a stuck side outside check as a draw
            instead of a loss when searching.
    """

    game_mode: GameMode = GameMode.TWO_PLAYERS
    difficulty: Depth = 1
    user_color: Color = Color.WHITE
    next_player: Color = Color.WHITE
    stalemate_is_draw: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.game_mode, GameMode):
            raise SettingsError(f"Invalid game mode: {self.game_mode!r}")
        if not isinstance(self.user_color, Color):
            raise SettingsError(f"Invalid user color: {self.user_color!r}")
        if not isinstance(self.next_player, Color):
            raise SettingsError(f"Invalid next player: {self.next_player!r}")
        try:
            resolve_depth(self.difficulty)
        except ValueError as exc:
            raise SettingsError(str(exc)) from exc

    @property
    def depth(self) -> int:
        """Search depth in plies, with ``"best"`` resolved."""
        return resolve_depth(self.difficulty)

    @property
    def is_best(self) -> bool:
        return self.difficulty == DIFFICULTY_BEST

    @property
    def engine_color(self) -> Color | None:
        """The side played by the engine, or ``None`` in a two-player game."""
        if self.game_mode == GameMode.PLAYER_VS_AI:
            return self.user_color.opposite
        return None

    def search_limits(self) -> SearchLimits:
        return SearchLimits(self.depth, self.stalemate_is_draw)
