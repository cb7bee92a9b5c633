"""Long-algebraic move notation and position-string parsing.

Formatting is a pure function of the move data; it is never consulted for
legality.
"""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import CastlingSide, Color, PieceType
from gambit.core.errors import MalformedPositionError, OutOfBoundsError
from gambit.core.types import Square, parse_square, square_name

_PIECE_LETTER: dict[PieceType, str] = {
    PieceType.PAWN: "",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

_CASTLE: dict[CastlingSide, str] = {
    CastlingSide.KINGSIDE: "O-O",
    CastlingSide.QUEENSIDE: "O-O-O",
}


def check_suffix(gives_check: bool, reply_exists: bool) -> str:
    """'#' for mate, '+' for check, '' otherwise."""
    if not gives_check:
        return ""
    return "+" if reply_exists else "#"


def format_move(
    piece_type: PieceType,
    from_sq: Square,
    to_sq: Square,
    *,
    capture: bool = False,
    promotion: PieceType | None = None,
    suffix: str = "",
) -> str:
    """E.g. ``e2-e4``, ``Ng1xf3``, ``e7-e8=Q+``."""
    text = _PIECE_LETTER[piece_type] + square_name(from_sq)
    text += ("x" if capture else "-") + square_name(to_sq)
    if promotion is not None:
        text += "=" + _PIECE_LETTER[promotion]
    return text + suffix


def format_castle(side: CastlingSide, suffix: str = "") -> str:
    return _CASTLE[side] + suffix


def parse_move_text(text: str) -> tuple[Square, Square, str | None]:
    """Split ``"e2e4"`` / ``"e7e8q"`` into squares and a promotion letter.

    Dashes and ``x`` separators (``"e2-e4"``, ``"d4xe5"``) are accepted too.
    """
    compact = text.strip().replace("-", "").replace("x", "")
    if len(compact) not in (4, 5):
        raise OutOfBoundsError(f"Invalid move text: {text!r}")
    from_sq = parse_square(compact[0:2])
    to_sq = parse_square(compact[2:4])
    promotion = compact[4] if len(compact) == 5 else None
    return from_sq, to_sq, promotion


def parse_position(text: str) -> tuple[Board, Color, Square | None]:
    """Parse ``"<placement> <w|b>"`` into a board, side to move and ep target.

    Trailing FEN fields are tolerated; of those only the en-passant field is
    used. Castling availability is derived from piece histories instead.
    """
    parts = text.split()
    if not (2 <= len(parts) <= 6):
        raise MalformedPositionError(f"Invalid position (need 2-6 fields): {text!r}")

    board = Board.from_placement(parts[0])

    if parts[1] == "w":
        side = Color.WHITE
    elif parts[1] == "b":
        side = Color.BLACK
    else:
        raise MalformedPositionError(f"Invalid side-to-move field: {parts[1]!r}")

    ep: Square | None = None
    if len(parts) > 3 and parts[3] != "-":
        try:
            ep = parse_square(parts[3])
        except OutOfBoundsError:
            raise MalformedPositionError(
                f"Invalid en-passant square: {parts[3]!r}"
            ) from None
        expected_rank = 5 if side == Color.WHITE else 2
        if ep.rank != expected_rank:
            raise MalformedPositionError(
                f"Invalid en-passant square for side-to-move: {parts[3]!r}"
            )
    return board, side, ep
