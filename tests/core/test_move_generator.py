"""Tests for pseudo-legal move generation and attack detection."""

import pytest

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import STARTING_FEN, state_from_fen
from gambit.core.types import (
    A1, A8, B3, C1, C2, D3, D5, D6, E1, E2, E3, E4, E5, E6, F3, G1, H3,
    Square,
    parse_square,
)


def _gen(fen: str) -> MoveGenerator:
    state = state_from_fen(fen)
    return MoveGenerator(state.board, state.castling, state.en_passant)


def _names(squares: list[Square]) -> set[str]:
    return {sq.name for sq in squares}


class TestPawn:
    def test_single_and_double_push(self) -> None:
        gen = _gen(STARTING_FEN)
        assert gen.destinations(E2) == [E3, E4]

    def test_black_pawn_moves_down(self) -> None:
        gen = _gen(STARTING_FEN)
        assert _names(gen.destinations(parse_square("d7"))) == {"d6", "d5"}

    def test_blocked_pawn(self) -> None:
        gen = _gen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert gen.destinations(E2) == []

    def test_double_push_needs_both_squares_empty(self) -> None:
        gen = _gen("4k3/8/8/8/4n3/8/4P3/4K3 w - - 0 1")
        assert gen.destinations(E2) == [E3]

    def test_no_double_push_off_start_rank(self) -> None:
        gen = _gen("4k3/8/8/8/8/4P3/8/4K3 w - - 0 1")
        assert gen.destinations(E3) == [E4]

    def test_diagonal_capture(self) -> None:
        gen = _gen("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")
        assert set(gen.destinations(E4)) == {E5, D5}

    def test_no_diagonal_onto_own_piece(self) -> None:
        gen = _gen("4k3/8/8/3P4/4P3/8/8/4K3 w - - 0 1")
        assert gen.destinations(E4) == [E5]

    def test_en_passant_target_is_capturable(self) -> None:
        gen = _gen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        assert set(gen.destinations(E5)) == {E6, D6}

    def test_no_en_passant_without_target(self) -> None:
        gen = _gen("4k3/8/8/3pP3/8/8/8/4K3 w - - 0 1")
        assert gen.destinations(E5) == [E6]


class TestPieces:
    def test_knight_from_start(self) -> None:
        gen = _gen(STARTING_FEN)
        assert gen.destinations(G1) == [F3, H3]

    def test_knight_in_corner(self) -> None:
        gen = _gen("4k3/8/8/8/8/8/8/N3K3 w - - 0 1")
        assert set(gen.destinations(A1)) == {B3, C2}

    def test_rook_stops_before_own_piece(self) -> None:
        gen = _gen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        # a2..a8 plus b1, c1, d1
        assert len(gen.destinations(A1)) == 10
        assert E1 not in gen.destinations(A1)

    def test_rook_captures_then_stops(self) -> None:
        gen = _gen("4k3/8/8/r7/8/8/8/R3K3 w - - 0 1")
        dests = _names(gen.destinations(A1))
        assert "a5" in dests
        assert "a6" not in dests

    def test_bishop_in_center(self) -> None:
        gen = _gen("4k3/8/8/8/3B4/8/8/4K3 w - - 0 1")
        assert len(gen.destinations(parse_square("d4"))) == 13

    def test_queen_in_center(self) -> None:
        gen = _gen("4k3/8/8/8/3Q4/8/8/4K3 w - - 0 1")
        assert len(gen.destinations(parse_square("d4"))) == 27

    def test_king_steps(self) -> None:
        gen = _gen("4k3/8/8/8/3K4/8/8/8 w - - 0 1")
        assert len(gen.destinations(parse_square("d4"))) == 8

    def test_empty_square_has_no_destinations(self) -> None:
        gen = _gen(STARTING_FEN)
        assert gen.destinations(E4) == []


class TestCastlingGeneration:
    def test_both_sides_offered(self) -> None:
        gen = _gen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        dests = gen.destinations(E1)
        assert G1 in dests
        assert C1 in dests

    def test_not_offered_without_rights(self) -> None:
        gen = _gen("r3k2r/8/8/8/8/8/8/R3K2R w - - 0 1")
        dests = gen.destinations(E1)
        assert G1 not in dests
        assert C1 not in dests

    def test_blocked_kingside(self) -> None:
        gen = _gen("r3k2r/8/8/8/8/8/8/R3KB1R w KQkq - 0 1")
        dests = gen.destinations(E1)
        assert G1 not in dests
        assert C1 in dests

    def test_queenside_needs_b_file_empty(self) -> None:
        gen = _gen("r3k2r/8/8/8/8/8/8/RN2K2R w KQkq - 0 1")
        assert C1 not in gen.destinations(E1)

    def test_missing_rook_blocks_castling(self) -> None:
        gen = _gen("r3k2r/8/8/8/8/8/8/R3K3 w KQkq - 0 1")
        assert G1 not in gen.destinations(E1)

    def test_king_off_home_square(self) -> None:
        state = state_from_fen("r3k2r/8/8/8/8/8/8/R2K3R w KQkq - 0 1")
        gen = MoveGenerator(state.board, CastlingRights.ALL)
        dests = gen.destinations(parse_square("d1"))
        assert parse_square("f1") not in dests
        assert parse_square("b1") not in dests

    def test_black_castling(self) -> None:
        gen = _gen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
        assert _names(gen.destinations(parse_square("e8"))) >= {"g8", "c8"}


class TestAttacks:
    def test_pawn_attacks_diagonals_only(self) -> None:
        gen = _gen(STARTING_FEN)
        assert set(gen.attacks(E2)) == {D3, F3}

    def test_attacks_exclude_castling(self) -> None:
        gen = _gen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        assert G1 not in gen.attacks(E1)

    def test_square_attacked_from_start(self) -> None:
        gen = _gen(STARTING_FEN)
        assert gen.is_square_attacked(F3, Color.WHITE)
        assert gen.is_square_attacked(E3, Color.WHITE)
        # Reachable by a pawn push, but not attacked.
        assert not gen.is_square_attacked(E4, Color.WHITE)

    def test_in_check(self) -> None:
        gen = _gen("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3")
        assert gen.is_in_check(Color.WHITE)
        assert not gen.is_in_check(Color.BLACK)

    def test_sliding_attack_blocked(self) -> None:
        gen = _gen("r3k3/8/8/8/8/8/P7/4K3 w - - 0 1")
        assert not gen.is_square_attacked(A1, Color.BLACK)
        assert gen.is_square_attacked(parse_square("a2"), Color.BLACK)
        assert not gen.is_square_attacked(A8, Color.WHITE)

    def test_missing_king_fails_loudly(self) -> None:
        with pytest.raises(ValueError, match="No WHITE king"):
            MoveGenerator(Board()).is_in_check(Color.WHITE)
