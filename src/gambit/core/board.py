"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional pieces, indexed by :class:`Square`."""

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq.row][sq.col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._grid[sq.row][sq.col] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq.row][sq.col] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares in row-major order, optionally for one *color*."""
        for row in range(8):
            for col in range(8):
                piece = self._grid[row][col]
                if piece is None:
                    continue
                if color is None or piece.color == color:
                    yield Square(row, col), piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [
            sq
            for sq, piece in self.occupied(color)
            if piece.piece_type == piece_type
        ]

    def find_king(self, color: Color) -> Square | None:
        for sq, piece in self.occupied(color):
            if piece.piece_type == PieceType.KING:
                return sq
        return None

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self.find_king(color)
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col in range(8):
            b._grid[1][col] = Piece(Color.BLACK, PieceType.PAWN)
            b._grid[6][col] = Piece(Color.WHITE, PieceType.PAWN)

        for col, pt in enumerate(_BACK_RANK):
            b._grid[0][col] = Piece(Color.BLACK, pt)
            b._grid[7][col] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
