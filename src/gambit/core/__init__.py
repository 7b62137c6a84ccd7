"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from gambit.core import Board, MoveGenerator, parse_square

    board = Board.initial()
    gen = MoveGenerator(board)
    print(gen.destinations(parse_square("g1")))
"""

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, GameResult, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import STARTING_FEN, state_from_fen, state_to_fen
from gambit.core.piece import Piece
from gambit.core.state import GameState
from gambit.core.types import Square, is_valid_square, parse_square

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Square",
    "is_valid_square",
    "parse_square",
    # Domain objects
    "Board",
    "GameState",
    "Move",
    "MoveGenerator",
    "Piece",
    # Notation
    "STARTING_FEN",
    "state_from_fen",
    "state_to_fen",
]
