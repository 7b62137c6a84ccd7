"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.game.chess_game import ChessGame


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation.

    ``alpha_beta=False`` searches the full minimax tree; the chosen move and
    score are identical, only the node count grows.
    """

    max_depth: int = 4
    alpha_beta: bool = True


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score: int
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for chess engines used by the game layer."""

    def search(self, game: ChessGame) -> SearchResult: ...
