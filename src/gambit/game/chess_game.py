"""ChessGame — the rules state machine: legality, special moves, status."""

from __future__ import annotations

import logging

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, GameResult, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import state_from_fen, state_to_fen
from gambit.core.state import GameState
from gambit.core.types import Square

_LOGGER = logging.getLogger(__name__)

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    Square(7, 0): CastlingRights.WHITE_QUEENSIDE,
    Square(7, 7): CastlingRights.WHITE_KINGSIDE,
    Square(0, 0): CastlingRights.BLACK_QUEENSIDE,
    Square(0, 7): CastlingRights.BLACK_KINGSIDE,
}


def play_on_board(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    en_passant: Square | None,
) -> Move:
    """Relocate the piece on *from_sq* to *to_sq* on an owned *board*.

    Applies castling, en-passant and promotion side effects (in that order)
    and returns the completed :class:`Move`. No legality checks are made.
    """
    piece = board[from_sq]
    if piece is None:
        raise ValueError(f"No piece on {from_sq}")

    captured = board[to_sq]
    is_castling = False
    is_en_passant = False
    promote_to: PieceType | None = None
    placed = piece

    if piece.piece_type == PieceType.KING and abs(to_sq.col - from_sq.col) == 2:
        kingside = to_sq.col > from_sq.col
        rook_from = Square(from_sq.row, 7 if kingside else 0)
        rook_to = Square(from_sq.row, 5 if kingside else 3)
        board[rook_to] = board[rook_from]
        board[rook_from] = None
        is_castling = True

    if piece.piece_type == PieceType.PAWN:
        if en_passant is not None and to_sq == en_passant and captured is None:
            # The captured pawn sits behind the destination.
            behind = Square(to_sq.row - piece.color.forward, to_sq.col)
            captured = board[behind]
            board[behind] = None
            is_en_passant = True

        final_row = 0 if piece.color == Color.WHITE else 7
        if to_sq.row == final_row:
            promote_to = PieceType.QUEEN
            placed = piece.promoted(PieceType.QUEEN)

    board[to_sq] = placed
    board[from_sq] = None

    return Move(
        from_sq=from_sq,
        to_sq=to_sq,
        piece=piece,
        captured=captured,
        is_en_passant=is_en_passant,
        is_castling=is_castling,
        promote_to=promote_to,
    )


class ChessGame:
    """Owns one :class:`GameState` and mutates it one legal move at a time.

    Every state handed out is a deep copy, so callers (and search branches)
    can never corrupt the canonical game. The side to move's legal moves are
    generated at most once per position and shared with :meth:`copy`, so a
    search that lists the moves and then plays one on a copy does not filter
    them a second time.
    """

    __slots__ = ("_state", "_legal")

    def __init__(self, state: GameState | None = None) -> None:
        self._state = state.copy() if state is not None else GameState()
        self._legal: list[Move] | None = None
        self._update_status()

    @classmethod
    def from_fen(cls, fen: str) -> ChessGame:
        return cls(state_from_fen(fen))

    def to_fen(self) -> str:
        return state_to_fen(self._state)

    # ── Queries ──────────────────────────────────────────────────────────

    def get_game_state(self) -> GameState:
        """Deep-copy snapshot of the current state."""
        return self._state.copy()

    @property
    def current_player(self) -> Color:
        return self._state.current_player

    @property
    def status(self) -> GameStatus:
        return self._state.status

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    @property
    def history(self) -> tuple[Move, ...]:
        return tuple(self._state.history)

    @property
    def result(self) -> GameResult:
        if self._state.is_checkmate:
            if self._state.current_player == Color.WHITE:
                return GameResult.BLACK_WINS
            return GameResult.WHITE_WINS
        if self._state.is_stalemate:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    def get_possible_moves(self, from_sq: Square) -> list[Square]:
        """Legal destinations for the side to move's piece on *from_sq*."""
        return [move.to_sq for move in self._moves_from(from_sq)]

    def get_all_legal_moves(self, color: Color) -> list[Move]:
        """Every legal move of *color*, scanning origins row-major.

        Only the side to move has legal moves; any other *color* yields [].
        """
        if color != self._state.current_player:
            return []
        return list(self._legal_moves())

    # ── Mutation ─────────────────────────────────────────────────────────

    def make_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Apply a move if it is legal. Returns ``False`` (and changes
        nothing) otherwise."""
        state = self._state
        piece = state.board[from_sq]
        if piece is None or piece.color != state.current_player:
            _LOGGER.debug("Rejected %s%s: no movable piece", from_sq, to_sq)
            return False

        if all(move.to_sq != to_sq for move in self._moves_from(from_sq)):
            _LOGGER.debug("Rejected %s%s: not a legal destination", from_sq, to_sq)
            return False

        board = state.board.copy()
        move = play_on_board(board, from_sq, to_sq, state.en_passant)

        state.board = board
        state.history.append(move)
        state.castling = self._next_castling(move)
        state.en_passant = self._next_en_passant(move)
        if piece.color == Color.BLACK:
            state.fullmove_number += 1
        state.current_player = piece.color.opposite
        self._legal = None
        self._update_status()
        return True

    def apply_move(self, move: Move) -> bool:
        """Replay *move* through :meth:`make_move`.

        Only the squares are used; capture and promotion are recomputed
        from the board.
        """
        return self.make_move(move.from_sq, move.to_sq)

    def reset(self) -> None:
        """Discard the game and return to the initial position."""
        self._state = GameState()
        self._legal = None

    def copy(self) -> ChessGame:
        """Independent game over a deep copy of the state."""
        game = ChessGame.__new__(ChessGame)
        game._state = self._state.copy()
        # Moves are immutable and the list is replaced, never mutated.
        game._legal = self._legal
        return game

    # ── Legality filter ──────────────────────────────────────────────────

    def _legal_moves(self) -> list[Move]:
        if self._legal is None:
            moves: list[Move] = []
            for sq, _ in self._state.board.occupied(self._state.current_player):
                moves.extend(self._legal_moves_from(sq))
            self._legal = moves
        return self._legal

    def _moves_from(self, from_sq: Square) -> list[Move]:
        if self._legal is None:
            return self._legal_moves_from(from_sq)
        return [move for move in self._legal if move.from_sq == from_sq]

    def _generator(self, board: Board | None = None) -> MoveGenerator:
        state = self._state
        return MoveGenerator(
            state.board if board is None else board,
            state.castling,
            state.en_passant,
        )

    def _legal_moves_from(self, from_sq: Square) -> list[Move]:
        state = self._state
        piece = state.board[from_sq]
        if piece is None or piece.color != state.current_player:
            return []

        gen = self._generator()
        legal: list[Move] = []
        for to_sq in gen.destinations(from_sq):
            if piece.piece_type == PieceType.KING and abs(to_sq.col - from_sq.col) == 2:
                if not self._castling_path_safe(gen, from_sq, to_sq, piece.color):
                    continue
            board = state.board.copy()
            move = play_on_board(board, from_sq, to_sq, state.en_passant)
            if not MoveGenerator(board).is_in_check(piece.color):
                legal.append(move)
        return legal

    @staticmethod
    def _castling_path_safe(
        gen: MoveGenerator,
        king_sq: Square,
        to_sq: Square,
        color: Color,
    ) -> bool:
        """The king may not castle out of, or across, an attacked square."""
        crossed = Square(king_sq.row, (king_sq.col + to_sq.col) // 2)
        opponent = color.opposite
        return not (
            gen.is_square_attacked(king_sq, opponent)
            or gen.is_square_attacked(crossed, opponent)
        )

    # ── Bookkeeping ──────────────────────────────────────────────────────

    def _next_castling(self, move: Move) -> CastlingRights:
        castling = self._state.castling
        if move.piece.piece_type == PieceType.KING:
            castling &= ~CastlingRights.both(move.piece.color)

        # Moving off a corner, or capturing onto one, ends that right.
        for sq in (move.from_sq, move.to_sq):
            if sq in _ROOK_CORNERS:
                castling &= ~_ROOK_CORNERS[sq]
        return castling

    @staticmethod
    def _next_en_passant(move: Move) -> Square | None:
        if (
            move.piece.piece_type == PieceType.PAWN
            and abs(move.to_sq.row - move.from_sq.row) == 2
        ):
            return Square((move.from_sq.row + move.to_sq.row) // 2, move.from_sq.col)
        return None

    def _update_status(self) -> None:
        state = self._state
        side = state.current_player
        in_check = self._generator().is_in_check(side)
        has_moves = any(
            self._legal_moves_from(sq) for sq, _ in state.board.occupied(side)
        )

        if has_moves:
            state.status = GameStatus.CHECK if in_check else GameStatus.NORMAL
            return

        self._legal = []
        if in_check:
            state.status = GameStatus.CHECKMATE
            _LOGGER.debug("Checkmate: %s has no legal moves", side)
        else:
            state.status = GameStatus.STALEMATE
            _LOGGER.debug("Stalemate: %s has no legal moves", side)
