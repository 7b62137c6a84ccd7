"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a candidate or completed move.

    ``piece`` is the piece as it stood on ``from_sq`` before moving (a pawn
    for promotions); ``captured`` includes the pawn taken en passant.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    is_en_passant: bool = False
    is_castling: bool = False
    promote_to: PieceType | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_sq.name}{self.to_sq.name}"
        if self.promote_to is not None:
            base += _PROMO_CHARS.get(self.promote_to, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
