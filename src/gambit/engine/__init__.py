"""Chess engine package: minimax search, evaluation and Qt worker bridge."""

from gambit.engine.evaluation import PIECE_VALUES, evaluate_board
from gambit.engine.minimax import MATE_SCORE, MinimaxEngine
from gambit.engine.qt_bridge import EngineWorker
from gambit.engine.search import IEngine, SearchLimits, SearchResult

__all__ = [
    "EngineWorker",
    "IEngine",
    "MATE_SCORE",
    "MinimaxEngine",
    "PIECE_VALUES",
    "SearchLimits",
    "SearchResult",
    "evaluate_board",
]
