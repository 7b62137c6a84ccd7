"""Pseudo-legal move generation + attack detection."""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.types import Square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

_SLIDING_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.ROOK: ROOK_DIRS,
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}

KING_HOME_COL = 4

# kingside flag -> (rook column, columns that must be empty)
_CASTLING_LANES: dict[bool, tuple[int, tuple[int, ...]]] = {
    True: (7, (5, 6)),
    False: (0, (1, 2, 3)),
}


class MoveGenerator:
    """Generates pseudo-legal destinations for pieces on a :class:`Board`.

    The generator is a pure function of the board, the castling rights and
    the en-passant target; it never checks whether the mover's own king is
    left attacked. That filtering belongs to the game state machine.
    """

    __slots__ = ("_board", "_castling", "_en_passant")

    def __init__(
        self,
        board: Board,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
    ) -> None:
        self._board = board
        self._castling = castling
        self._en_passant = en_passant

    # -- Public API ---------------------------------------------------------

    def destinations(self, from_sq: Square) -> list[Square]:
        """All pseudo-legal destinations of the piece on *from_sq*."""
        return self._generate(from_sq, include_castling=True)

    def attacks(self, from_sq: Square) -> list[Square]:
        """Squares attacked by the piece on *from_sq*.

        Same as :meth:`destinations` except that castling is left out and a
        pawn attacks its two forward diagonals only.
        """
        piece = self._board[from_sq]
        if piece is None:
            return []
        if piece.piece_type == PieceType.PAWN:
            return self._pawn_attacks(from_sq, piece.color)
        return self._generate(from_sq, include_castling=False)

    # -- Attack detection ---------------------------------------------------

    def is_square_attacked(self, target: Square, by_color: Color) -> bool:
        """Is *target* attacked by any piece of *by_color*?"""
        for sq, _ in self._board.occupied(by_color):
            if target in self.attacks(sq):
                return True
        return False

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?

        Raises:
            ValueError: *color* has no king on the board.
        """
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    # -- Piece-specific generators (private) -------------------------------

    def _generate(self, from_sq: Square, include_castling: bool) -> list[Square]:
        piece = self._board[from_sq]
        if piece is None:
            return []

        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            return self._gen_pawn(from_sq, piece.color)
        if ptype == PieceType.KNIGHT:
            return self._gen_stepping(from_sq, piece.color, KNIGHT_OFFSETS)
        if ptype == PieceType.KING:
            moves = self._gen_stepping(from_sq, piece.color, KING_OFFSETS)
            if include_castling:
                moves.extend(self._gen_castling(from_sq, piece.color))
            return moves
        return self._gen_sliding(from_sq, piece.color, _SLIDING_DIRS[ptype])

    def _gen_pawn(self, sq: Square, color: Color) -> list[Square]:
        board = self._board
        moves: list[Square] = []
        forward = color.forward
        start_row = 6 if color == Color.WHITE else 1

        one_step = sq.offset(forward, 0)
        if one_step.is_valid and board.is_empty(one_step):
            moves.append(one_step)
            if sq.row == start_row:
                two_step = sq.offset(2 * forward, 0)
                if board.is_empty(two_step):
                    moves.append(two_step)

        for cap_sq in self._pawn_attacks(sq, color):
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    moves.append(cap_sq)
            elif cap_sq == self._en_passant:
                moves.append(cap_sq)
        return moves

    @staticmethod
    def _pawn_attacks(sq: Square, color: Color) -> list[Square]:
        forward = color.forward
        return [
            cap_sq
            for cap_sq in (sq.offset(forward, -1), sq.offset(forward, 1))
            if cap_sq.is_valid
        ]

    def _gen_stepping(
        self,
        sq: Square,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
    ) -> list[Square]:
        board = self._board
        moves: list[Square] = []
        for d_row, d_col in offsets:
            to_sq = sq.offset(d_row, d_col)
            if not to_sq.is_valid:
                continue
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(to_sq)
        return moves

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        directions: tuple[tuple[int, int], ...],
    ) -> list[Square]:
        board = self._board
        moves: list[Square] = []
        for d_row, d_col in directions:
            to_sq = sq.offset(d_row, d_col)
            while to_sq.is_valid:
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    to_sq = to_sq.offset(d_row, d_col)
                    continue
                if target.color != color:
                    moves.append(to_sq)
                break
        return moves

    def _gen_castling(self, king_sq: Square, color: Color) -> list[Square]:
        home_row = color.home_row
        if king_sq != Square(home_row, KING_HOME_COL):
            return []

        board = self._board
        moves: list[Square] = []
        for kingside, (rook_col, lane) in _CASTLING_LANES.items():
            if not self._castling & CastlingRights.for_side(color, kingside):
                continue
            rook = board[Square(home_row, rook_col)]
            if rook is None or rook.color != color or rook.piece_type != PieceType.ROOK:
                continue
            if all(board.is_empty(Square(home_row, col)) for col in lane):
                step = 2 if kingside else -2
                moves.append(king_sq.offset(0, step))
        return moves
