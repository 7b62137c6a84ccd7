"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.engine.minimax import MinimaxEngine
from gambit.engine.search import IEngine, SearchLimits
from gambit.game.chess_game import ChessGame

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move the worker to a ``QThread`` and invoke :meth:`request_move` through
    a queued signal. A search always runs to completion; :meth:`cancel` only
    marks the running request so its result is dropped.
    """

    best_move_ready = pyqtSignal(int, object, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, int)
    search_error = pyqtSignal(int, str)

    def __init__(self, *, max_depth: int = 4) -> None:
        super().__init__()
        self._limits = SearchLimits(max_depth=max_depth)
        self._engine: IEngine | None = None
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, game_obj: object, request_id: int) -> None:
        """Search for the side to move in *game_obj* and emit the result."""
        if not isinstance(game_obj, ChessGame):
            self.search_error.emit(request_id, "Engine received invalid game")
            return

        self._cancel_event.clear()
        engine = self._engine or MinimaxEngine(game_obj.current_player, self._limits)
        try:
            result = engine.search(game_obj.copy())
        except ValueError as exc:
            _LOGGER.warning("Engine search %d rejected: %s", request_id, exc)
            self.search_error.emit(request_id, str(exc))
            return
        except Exception as exc:
            # An exception escaping a slot on a worker thread aborts the process.
            _LOGGER.exception("Engine search %d failed", request_id)
            self.search_error.emit(request_id, f"{type(exc).__name__}: {exc}")
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id, result.score)
            return

        self.best_move_ready.emit(request_id, result.best_move, result.score, result.nodes)

    @pyqtSlot()
    def cancel(self) -> None:
        """Discard the result of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_depth(self, max_depth: int) -> None:
        """Update the search depth (takes effect on the next search)."""
        self._limits = SearchLimits(max_depth=max_depth)
