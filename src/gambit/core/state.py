"""GameState — the complete game aggregate (board + turn + rights + history)."""

from __future__ import annotations

from dataclasses import dataclass, field

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, GameStatus
from gambit.core.move import Move
from gambit.core.types import Square


@dataclass
class GameState:
    """Board, side to move, castling rights, en-passant target and history.

    Instances handed out by :class:`~gambit.game.chess_game.ChessGame` are
    snapshots: mutating them never affects the game they came from.
    """

    board: Board = field(default_factory=Board.initial)
    current_player: Color = Color.WHITE
    history: list[Move] = field(default_factory=list)
    status: GameStatus = GameStatus.NORMAL
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    fullmove_number: int = 1

    # ── Status flags ─────────────────────────────────────────────────────

    @property
    def is_check(self) -> bool:
        """Whether the side to move's king is attacked (also true when mated)."""
        return self.status in (GameStatus.CHECK, GameStatus.CHECKMATE)

    @property
    def is_checkmate(self) -> bool:
        return self.status == GameStatus.CHECKMATE

    @property
    def is_stalemate(self) -> bool:
        return self.status == GameStatus.STALEMATE

    @property
    def is_game_over(self) -> bool:
        return self.status in (GameStatus.CHECKMATE, GameStatus.STALEMATE)

    def can_castle(self, color: Color, kingside: bool) -> bool:
        return bool(self.castling & CastlingRights.for_side(color, kingside))

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> GameState:
        """Deep copy: new grid and new history list.

        Pieces and moves are immutable, so sharing them is safe.
        """
        return GameState(
            board=self.board.copy(),
            current_player=self.current_player,
            history=list(self.history),
            status=self.status,
            castling=self.castling,
            en_passant=self.en_passant,
            fullmove_number=self.fullmove_number,
        )
