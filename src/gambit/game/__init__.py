"""Game management layer — rules state machine, players, controller.

Quick start::

    from gambit.game import AIPlayer, GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=AIPlayer(Color.BLACK),
    )
"""

from gambit.game.chess_game import ChessGame, play_on_board
from gambit.game.controller import GameController, GameEvents
from gambit.game.interfaces import GamePhase, IPlayer
from gambit.game.player import AIPlayer, HumanPlayer

__all__ = [
    # Interfaces
    "GamePhase",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "ChessGame",
    "GameController",
    "GameEvents",
    "HumanPlayer",
    "play_on_board",
]
