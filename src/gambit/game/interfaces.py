"""Player contract and controller phases."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from gambit.core.enums import Color

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.game.chess_game import ChessGame


class GamePhase(IntEnum):
    NOT_STARTED = auto()
    AWAITING_MOVE = auto()  # a human is to move
    THINKING = auto()  # the engine is to move
    GAME_OVER = auto()


class IPlayer(ABC):
    """One side of a controlled game.

    The controller calls :meth:`request_move` whenever this player is to
    move. A player that can answer on the spot returns its move and the
    controller plays it; one that answers later (a human at the board, an
    engine on a worker thread) returns ``None`` and hands the move to
    ``GameController.submit_move`` once it has one.
    """

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, game: ChessGame) -> Move | None:
        """Choose a move in *game*, a private copy the player may consume."""

    def cancel(self) -> None:
        """Stop waiting for a move that was requested but not delivered."""
