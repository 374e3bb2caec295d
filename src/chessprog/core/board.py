"""Board - piece placement on the playable squares of an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from chessprog.core.enums import Color, PieceType
from chessprog.core.errors import InvalidPlacementError, KingNotFoundError
from chessprog.core.piece import Piece
from chessprog.core.types import BOARD_SIZE, Position, is_in_bounds, is_playable

_COLOR_COUNT = 2


class Board:
    """Mutable board with a per-color king index.

    Pieces may only stand on playable squares and each color has at most
    one king; both rules are enforced on every write.
    """

    __slots__ = ("_squares", "_king_positions")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * (BOARD_SIZE * BOARD_SIZE)
        # [color] -> king position cache (None if king missing).
        self._king_positions: list[Position | None] = [None] * _COLOR_COUNT

    @staticmethod
    def _index(pos: Position) -> int:
        return pos.y * BOARD_SIZE + pos.x

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        if not is_in_bounds(pos.x, pos.y):
            raise IndexError(f"Position off the board: {pos!r}")
        return self._squares[self._index(pos)]

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        if not is_in_bounds(pos.x, pos.y):
            raise InvalidPlacementError(f"Position off the board: {pos!r}")

        idx = self._index(pos)
        old_piece = self._squares[idx]
        if old_piece == piece:
            return

        if piece is not None:
            if not is_playable(pos.x, pos.y):
                raise InvalidPlacementError(f"{pos} is not a playable square")
            if piece.piece_type == PieceType.KING:
                current = self._king_positions[int(piece.color)]
                if current is not None and current != pos:
                    raise InvalidPlacementError(
                        f"{piece.color.name} king already on {current}"
                    )

        if old_piece is not None and old_piece.piece_type == PieceType.KING:
            self._king_positions[int(old_piece.color)] = None

        self._squares[idx] = piece

        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_positions[int(piece.color)] = pos

    def is_empty(self, pos: Position) -> bool:
        return self[pos] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Position, Piece]]:
        """Occupied squares in row-major order (row 0 first, column ascending)."""
        squares = self._squares
        for idx, piece in enumerate(squares):
            if piece is not None:
                yield Position(idx % BOARD_SIZE, idx // BOARD_SIZE), piece

    def pieces(self, color: Color) -> list[tuple[Position, Piece]]:
        """*color*'s pieces in row-major order."""
        return [(pos, piece) for pos, piece in self.occupied() if piece.color == color]

    def find_king(self, color: Color) -> Position | None:
        return self._king_positions[int(color)]

    def king_position(self, color: Color) -> Position:
        """Return the single king square for *color*."""
        pos = self._king_positions[int(color)]
        if pos is None:
            raise KingNotFoundError(f"No {color.name} king on board")
        return pos

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._king_positions = self._king_positions.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * (BOARD_SIZE * BOARD_SIZE)
        self._king_positions = [None] * _COLOR_COUNT

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position (three rows per side)."""
        b = cls()
        back_rank = (
            (0, PieceType.ROOK),
            (2, PieceType.QUEEN),
            (4, PieceType.KING),
            (6, PieceType.BISHOP),
        )
        for x, pt in back_rank:
            b[Position(x, 0)] = Piece(Color.WHITE, pt)
            b[Position(BOARD_SIZE - 1 - x, BOARD_SIZE - 1)] = Piece(Color.BLACK, pt)

        for x in range(1, BOARD_SIZE, 2):
            b[Position(x, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Position(x, 5)] = Piece(Color.BLACK, PieceType.PAWN)
        for x in range(0, BOARD_SIZE, 2):
            b[Position(x, 2)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Position(x, 6)] = Piece(Color.BLACK, PieceType.PAWN)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for y in range(BOARD_SIZE - 1, -1, -1):
            row = []
            for x in range(BOARD_SIZE):
                p = self._squares[y * BOARD_SIZE + x]
                if p is not None:
                    row.append(str(p))
                else:
                    row.append("." if (x + y) % 2 == 0 else " ")
            rows.append(f"{y + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
