"""Human and engine players."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from gambit.core.enums import Color
from gambit.engine.minimax import MinimaxEngine
from gambit.engine.search import SearchLimits
from gambit.game.interfaces import IPlayer

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.game.chess_game import ChessGame


class HumanPlayer(IPlayer):
    """Moves come from the board UI through ``GameController.submit_move``."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, game: ChessGame) -> Move | None:
        return None


class AIPlayer(IPlayer):
    """Plays *color* with a :class:`MinimaxEngine`.

    Without *dispatch* the search runs inside :meth:`request_move` and the
    chosen move is returned, so a headless controller plays it at once.
    With *dispatch* the game copy is handed over instead (typically queued to
    an ``EngineWorker`` on a ``QThread``) and the move is expected back via
    ``GameController.submit_move``; *on_cancel* then drops a pending search.
    """

    __slots__ = ("_engine", "_name", "_dispatch", "_on_cancel")

    def __init__(
        self,
        color: Color,
        limits: SearchLimits | None = None,
        *,
        name: str = "",
        dispatch: Callable[[ChessGame], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._engine = MinimaxEngine(color, limits)
        self._name = name or f"Minimax (depth {self._engine.limits.max_depth})"
        self._dispatch = dispatch
        self._on_cancel = on_cancel

    @property
    def color(self) -> Color:
        return self._engine.color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def limits(self) -> SearchLimits:
        return self._engine.limits

    def request_move(self, game: ChessGame) -> Move | None:
        if self._dispatch is not None:
            self._dispatch(game)
            return None
        return self._engine.get_best_move(game)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
