"""Board coordinates and helpers.

Coordinates are ``(x, y)`` with ``x`` the column (a-h) and ``y`` the row
(1-8), both 0-indexed.  Only squares with ``(x + y)`` even are playable:
a1, c1, ..., b2, d2, ... - the dark squares of a checkers board.
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8


@dataclass(frozen=True, slots=True)
class Position:
    """A square on the board (column, row). Immutable value object."""

    x: int
    y: int

    def __str__(self) -> str:
        return position_name(self)

    def offset(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)


def is_in_bounds(x: int, y: int) -> bool:
    """Inside the 8x8 grid, ignoring square color."""
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def is_playable(x: int, y: int) -> bool:
    """Inside the grid and on a dark square."""
    return is_in_bounds(x, y) and (x + y) % 2 == 0


def position_name(pos: Position) -> str:
    """Short name, e.g. ``Position(0, 0)`` -> ``'a1'``."""
    return chr(ord("a") + pos.x) + str(pos.y + 1)


def parse_position(text: str) -> Position:
    """Parse ``'a1'`` or the bracketed ``'<a,1>'`` form.

    Both forms map to the same ``(column, row)`` convention.
    """
    name = text.strip()
    if name.startswith("<") and name.endswith(">"):
        parts = name[1:-1].split(",")
        if len(parts) != 2:
            raise ValueError(f"Invalid position: {text!r}")
        name = parts[0].strip() + parts[1].strip()
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid position: {text!r}")
    return Position(ord(name[0]) - ord("a"), int(name[1]) - 1)


def playable_positions() -> tuple[Position, ...]:
    """Every playable square in row-major order (row 0 first)."""
    return tuple(
        Position(x, y)
        for y in range(BOARD_SIZE)
        for x in range(BOARD_SIZE)
        if (x + y) % 2 == 0
    )
