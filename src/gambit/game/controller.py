"""GameController — the facade a presentation layer talks to.

Coordinates players, the ChessGame and the engine, and reports through
plain callback lists so a UI or a test can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from gambit.core.enums import Color, GameResult
from gambit.core.move import Move
from gambit.core.state import GameState
from gambit.core.types import Square
from gambit.engine.minimax import MinimaxEngine
from gambit.engine.search import SearchLimits
from gambit.game.chess_game import ChessGame
from gambit.game.interfaces import GamePhase, IPlayer

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, GameState], None]  # move, snapshot after it
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Runs a game between two players: validates moves, switches turns,
    asks the engine for moves, notifies listeners.

    Methods are meant to be called from a single thread (the main/UI
    thread). AI moves computed elsewhere come back through
    :meth:`submit_move`.
    """

    __slots__ = ("_game", "_players", "_phase", "_limits", "events")

    def __init__(self, limits: SearchLimits | None = None) -> None:
        self._game = ChessGame()
        self._players: dict[Color, IPlayer] = {}
        self._phase = GamePhase.NOT_STARTED
        self._limits = limits or SearchLimits()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        """Deep-copy snapshot; mutating it never affects the game."""
        return self._game.get_game_state()

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def result(self) -> GameResult:
        return self._game.result

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._game.current_player)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        fen: str | None = None,
    ) -> None:
        """Set up a new game (from *fen* when given) and prompt the first mover."""
        self._cancel_pending()
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._game = ChessGame.from_fen(fen) if fen else ChessGame()
        _LOGGER.info("New game: %s vs %s", white.name, black.name)
        self._start()

    def reset(self) -> None:
        """Discard the current game and restart from the initial position."""
        self._cancel_pending()
        self._game.reset()
        _LOGGER.info("Game reset")
        self._start()

    # ── Moves ────────────────────────────────────────────────────────────

    def possible_moves(self, from_sq: Square) -> list[Square]:
        """Legal destinations for the piece on *from_sq*."""
        if self._phase == GamePhase.GAME_OVER:
            return []
        return self._game.get_possible_moves(from_sq)

    def submit_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Submit a move for the side to move. Returns True if legal and applied.

        Engine players that answer synchronously are then asked in turn, so
        this returns once a human (or a dispatched search) is to move or the
        game is over.
        """
        if self._phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False
        if not self._play(from_sq, to_sq):
            return False
        if self._phase != GamePhase.GAME_OVER:
            self._prompt_current_player()
        return True

    def engine_move(self) -> Move | None:
        """Engine's choice for the side to move (not applied)."""
        if self._game.is_game_over:
            return None
        engine = MinimaxEngine(self._game.current_player, self._limits)
        return engine.get_best_move(self._game)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _start(self) -> None:
        if self._game.is_game_over:
            self._emit_game_over(self._game.result)
            return
        self._prompt_current_player()

    def _play(self, from_sq: Square, to_sq: Square) -> bool:
        if not self._game.make_move(from_sq, to_sq):
            return False

        move = self._game.history[-1]
        self._emit_move(move)
        if self._game.is_game_over:
            result = self._game.result
            _LOGGER.info("Game over after %s: %s", move, result.name)
            self._emit_game_over(result)
        return True

    def _prompt_current_player(self) -> None:
        """Ask players for moves until one answers later or the game ends."""
        while True:
            cp = self.current_player
            if cp is None:
                return

            phase = GamePhase.AWAITING_MOVE if cp.is_human else GamePhase.THINKING
            self._set_phase(phase)
            move = cp.request_move(self._game.copy())
            if move is None:
                return
            if not self._play(move.from_sq, move.to_sq):
                raise ValueError(f"{cp.name} chose an illegal move: {move}")
            if self._phase == GamePhase.GAME_OVER:
                return

    def _cancel_pending(self) -> None:
        cp = self.current_player
        if cp is not None and self._phase == GamePhase.THINKING:
            cp.cancel()

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._game.get_game_state())

    def _emit_game_over(self, result: GameResult) -> None:
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
