"""FEN parsing and serialization."""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.move_generator import MoveGenerator
from gambit.core.piece import Piece
from gambit.core.state import GameState
from gambit.core.types import Square, parse_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def state_from_fen(fen: str) -> GameState:
    """Parse a FEN string into a :class:`GameState`.

    The returned status is always ``NORMAL``; the game state machine
    recomputes it when it adopts the state. The halfmove clock is accepted
    but not tracked.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement (first FEN rank is rank 8 = row 0)
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[Square(row, col)] = Piece.from_char(ch)
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    for color in Color:
        if len(board.pieces(color, PieceType.KING)) != 1:
            raise ValueError(f"FEN must have exactly one {color} king: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    if MoveGenerator(board).is_in_check(side.opposite):
        raise ValueError(f"Side not to move is in check: {fen!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        # White to move captures onto rank 6 (row 2), black onto rank 3 (row 5).
        expected_row = 2 if side == Color.WHITE else 5
        if ep.row != expected_row:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5–6. Clocks (optional)
    if len(parts) > 4 and int(parts[4]) < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")

    if len(parts) > 5:
        fullmove = int(parts[5])
        if fullmove < 1:
            raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")
    else:
        fullmove = 1

    return GameState(
        board=board,
        current_player=side,
        castling=castling,
        en_passant=ep,
        fullmove_number=fullmove,
    )


def state_to_fen(state: GameState) -> str:
    """Serialise a :class:`GameState` to FEN (halfmove clock written as 0)."""
    # 1. Board
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = state.board[Square(row, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if state.current_player == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if state.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = state.en_passant.name if state.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} 0 {state.fullmove_number}"
