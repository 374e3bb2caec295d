"""Exception hierarchy for the rules engine."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


class ChessError(Exception):
    """Base class for every error raised by :mod:`chessprog`."""


class AllocationError(ChessError, MemoryError):
    """Resource exhaustion while building moves or searching.

    Fatal for the running query: callers are expected to end the session.
    """


class InvalidPlacementError(ChessError, ValueError):
    """A piece was written to an unplayable square or duplicates a king."""


class KingNotFoundError(ChessError, ValueError):
    """A query needed the king of a color that is not on the board."""


class InvalidMoveError(ChessError, ValueError):
    """A move does not describe a displacement of a piece on the board."""


@contextmanager
def allocation_guard(action: str) -> Iterator[None]:
    """Re-raise a ``MemoryError`` from *action* as :class:`AllocationError`."""
    try:
        yield
    except AllocationError:
        raise
    except MemoryError as exc:
        raise AllocationError(f"Out of memory while {action}") from exc
