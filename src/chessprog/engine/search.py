"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Protocol, TypeAlias

if TYPE_CHECKING:
    from chessprog.core.board import Board
    from chessprog.core.enums import Color
    from chessprog.core.move import Move

MAX_DEPTH = 4
DIFFICULTY_BEST = "best"

# A search depth as callers spell it: 1..MAX_DEPTH or "best".
Depth: TypeAlias = int | str


def resolve_depth(depth: Depth) -> int:
    """Map a caller-facing depth to a ply count; ``"best"`` is :data:`MAX_DEPTH`."""
    if depth == DIFFICULTY_BEST:
        return MAX_DEPTH
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise ValueError(f"Invalid search depth: {depth!r}")
    if not (1 <= depth <= MAX_DEPTH):
        raise ValueError(f"Search depth must be between 1 and {MAX_DEPTH}: {depth}")
    return depth


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single engine query."""

    max_depth: int = 1
    stalemate_is_draw: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "max_depth", resolve_depth(self.max_depth))

    @classmethod
    def for_depth(
        cls, depth: Depth, *, stalemate_is_draw: bool = False
    ) -> SearchLimits:
        return cls(resolve_depth(depth), stalemate_is_draw)

    def with_depth(self, depth: Depth) -> SearchLimits:
        return replace(self, max_depth=resolve_depth(depth))


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score: int
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for engines used by the command API and the game layer."""

    def search(
        self,
        board: Board,
        color: Color,
        limits: SearchLimits | None = None,
    ) -> SearchResult: ...
