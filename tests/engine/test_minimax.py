"""Tests for the minimax search engine."""

import pytest

from gambit.core.enums import Color, GameStatus
from gambit.core.notation import STARTING_FEN
from gambit.core.types import parse_square
from gambit.engine import MATE_SCORE, MinimaxEngine, SearchLimits, evaluate_board
from gambit.game.chess_game import ChessGame

BACK_RANK = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"
FOOLS_MATE = "rnbqkbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class TestSearchBasics:
    def test_returns_legal_move_from_start(self) -> None:
        game = ChessGame()
        engine = MinimaxEngine(Color.WHITE, SearchLimits(max_depth=2))

        result = engine.search(game)

        assert result.best_move in game.get_all_legal_moves(Color.WHITE)
        assert result.depth == 2
        assert result.nodes > 0
        assert engine.nodes == result.nodes

    def test_black_engine_after_first_move(self) -> None:
        game = ChessGame()
        game.make_move(parse_square("e2"), parse_square("e4"))
        engine = MinimaxEngine(Color.BLACK, SearchLimits(max_depth=1))

        move = engine.get_best_move(game)

        assert move is not None
        assert move.piece.color == Color.BLACK
        assert game.copy().apply_move(move)

    def test_search_leaves_game_untouched(self) -> None:
        game = ChessGame.from_fen(BACK_RANK)
        MinimaxEngine(Color.WHITE, SearchLimits(max_depth=2)).search(game)
        assert game.to_fen() == BACK_RANK
        assert game.history == ()

    def test_deterministic(self) -> None:
        limits = SearchLimits(max_depth=2)
        first = MinimaxEngine(Color.WHITE, limits).get_best_move(ChessGame())
        second = MinimaxEngine(Color.WHITE, limits).get_best_move(ChessGame())
        assert first == second

    def test_rejects_zero_depth(self) -> None:
        engine = MinimaxEngine(Color.WHITE, SearchLimits(max_depth=0))
        with pytest.raises(ValueError, match="depth"):
            engine.search(ChessGame())

    def test_rejects_wrong_side(self) -> None:
        engine = MinimaxEngine(Color.BLACK)
        with pytest.raises(ValueError, match="to move"):
            engine.search(ChessGame())

    def test_default_limits(self) -> None:
        engine = MinimaxEngine()
        assert engine.color == Color.BLACK
        assert engine.limits == SearchLimits(max_depth=4, alpha_beta=True)


class TestTactics:
    def test_takes_hanging_queen(self) -> None:
        game = ChessGame.from_fen("4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1")
        engine = MinimaxEngine(Color.WHITE, SearchLimits(max_depth=2))
        move = engine.get_best_move(game)
        assert move is not None
        assert move.uci == "d1d5"

    def test_finds_mate_in_one(self) -> None:
        game = ChessGame.from_fen(BACK_RANK)
        engine = MinimaxEngine(Color.WHITE, SearchLimits(max_depth=2))

        result = engine.search(game)

        assert result.best_move is not None
        assert result.best_move.uci == "a1a8"
        assert result.score == MATE_SCORE + 1
        game.apply_move(result.best_move)
        assert game.status == GameStatus.CHECKMATE

    def test_mate_score_reflects_remaining_depth(self) -> None:
        game = ChessGame.from_fen(BACK_RANK)
        result = MinimaxEngine(Color.WHITE, SearchLimits(max_depth=3)).search(game)
        assert result.best_move is not None
        assert result.best_move.uci == "a1a8"
        assert result.score == MATE_SCORE + 2


class TestNoMoves:
    def test_checkmated_side(self) -> None:
        game = ChessGame.from_fen(FOOLS_MATE)
        result = MinimaxEngine(Color.WHITE, SearchLimits(max_depth=3)).search(game)
        assert result.best_move is None
        assert result.score == -(MATE_SCORE + 3)
        assert result.depth == 0

    def test_stalemated_side_uses_evaluation(self) -> None:
        game = ChessGame.from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        engine = MinimaxEngine(Color.BLACK, SearchLimits(max_depth=2))

        result = engine.search(game)

        board = game.get_game_state().board
        assert result.best_move is None
        assert result.score == evaluate_board(board, Color.BLACK)
        assert result.score == engine.evaluate_position(board)
        assert result.score < 0


class TestAlphaBeta:
    @pytest.mark.parametrize(
        "fen, color, depth",
        [
            (STARTING_FEN, Color.WHITE, 2),
            ("4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1", Color.WHITE, 2),
            (BACK_RANK, Color.WHITE, 3),
        ],
    )
    def test_pruning_keeps_choice_and_score(
        self, fen: str, color: Color, depth: int
    ) -> None:
        pruned = MinimaxEngine(color, SearchLimits(max_depth=depth))
        full = MinimaxEngine(color, SearchLimits(max_depth=depth, alpha_beta=False))

        a = pruned.search(ChessGame.from_fen(fen))
        b = full.search(ChessGame.from_fen(fen))

        assert a.best_move == b.best_move
        assert a.score == b.score
        assert a.nodes < b.nodes
