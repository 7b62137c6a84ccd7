"""Fixed-depth minimax search with alpha-beta pruning."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gambit.core.board import Board
from gambit.core.enums import Color, GameStatus
from gambit.core.move import Move
from gambit.engine.evaluation import evaluate_board
from gambit.engine.search import IEngine, SearchLimits, SearchResult

if TYPE_CHECKING:
    from gambit.game.chess_game import ChessGame

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 10_000_000
MATE_SCORE = 1_000_000


class MinimaxEngine(IEngine):
    """Chooses moves for one side by searching every line to a fixed depth.

    Each explored move is played on its own :meth:`ChessGame.copy`, so
    sibling branches never share mutable state. Ties between equally scored
    moves keep the first one found (row-major origin order, then generation
    order), which makes the search deterministic.
    """

    __slots__ = ("_color", "_limits", "_nodes")

    def __init__(
        self,
        color: Color = Color.BLACK,
        limits: SearchLimits | None = None,
    ) -> None:
        self._color = color
        self._limits = limits or SearchLimits()
        self._nodes = 0

    @property
    def color(self) -> Color:
        return self._color

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @property
    def nodes(self) -> int:
        """Number of :meth:`minimax` calls made by the last search."""
        return self._nodes

    # ── Public API ───────────────────────────────────────────────────────

    def get_best_move(self, game: ChessGame) -> Move | None:
        """Best move for the engine's side, or ``None`` when it has none."""
        return self.search(game).best_move

    def search(self, game: ChessGame) -> SearchResult:
        max_depth = self._limits.max_depth
        if max_depth < 1:
            raise ValueError("Search depth must be >= 1")
        if game.current_player != self._color:
            raise ValueError(
                f"Engine plays {self._color} but {game.current_player} is to move"
            )

        self._nodes = 0
        root_moves = game.get_all_legal_moves(self._color)
        if not root_moves:
            score = self._leaf_score(game, max_depth)
            _LOGGER.debug("No legal moves for %s (score %d)", self._color, score)
            return SearchResult(None, score, 0, self._nodes)

        alpha = -_INF_SCORE
        beta = _INF_SCORE
        best_score = -_INF_SCORE
        best_move: Move | None = None

        for move in root_moves:
            child = game.copy()
            child.apply_move(move)
            score = self.minimax(child, max_depth - 1, alpha, beta, maximizing=False)

            if score > best_score:
                best_score = score
                best_move = move
            if self._limits.alpha_beta and score > alpha:
                alpha = score

        _LOGGER.debug(
            "Best move for %s: %s (score %d, depth %d, %d nodes)",
            self._color,
            best_move,
            best_score,
            max_depth,
            self._nodes,
        )
        return SearchResult(best_move, best_score, max_depth, self._nodes)

    def minimax(
        self,
        game: ChessGame,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
    ) -> int:
        """Score *game* from the engine's side, searching *depth* more plies."""
        self._nodes += 1

        if depth == 0 or game.is_game_over:
            return self._leaf_score(game, depth)

        side = self._color if maximizing else self._color.opposite
        moves = game.get_all_legal_moves(side)
        if not moves:
            return self._leaf_score(game, depth)

        prune = self._limits.alpha_beta
        if maximizing:
            best = -_INF_SCORE
            for move in moves:
                child = game.copy()
                child.apply_move(move)
                value = self.minimax(child, depth - 1, alpha, beta, False)
                best = max(best, value)
                if prune:
                    alpha = max(alpha, value)
                    if beta <= alpha:
                        break
            return best

        best = _INF_SCORE
        for move in moves:
            child = game.copy()
            child.apply_move(move)
            value = self.minimax(child, depth - 1, alpha, beta, True)
            best = min(best, value)
            if prune:
                beta = min(beta, value)
                if beta <= alpha:
                    break
        return best

    def evaluate_position(self, board: Board) -> int:
        """Material + positional score, positive when the engine is ahead."""
        return evaluate_board(board, self._color)

    # ── Internal ─────────────────────────────────────────────────────────

    def _leaf_score(self, game: ChessGame, depth: int) -> int:
        if game.status == GameStatus.CHECKMATE:
            # More remaining depth means the mate happens sooner.
            mate = MATE_SCORE + depth
            return -mate if game.current_player == self._color else mate
        return self.evaluate_position(game.get_game_state().board)
