"""Special moves: castling, en passant and promotion."""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import CastlingSide, Color, PieceType
from gambit.core.errors import (
    CastlingInCheckError,
    CastlingPathBlockedError,
    CastlingThroughCheckError,
    IllegalCastlingError,
    InvalidPromotionError,
    KingMovedError,
    RookUnavailableError,
)
from gambit.core.move import Move
from gambit.core.move_generator import is_square_attacked
from gambit.core.piece import Piece
from gambit.core.types import Square

# ── Castling ─────────────────────────────────────────────────────────────────

_KING_HOME_FILE = 4

# side -> (rook home file, king step direction)
_CASTLING_GEOMETRY: dict[CastlingSide, tuple[int, int]] = {
    CastlingSide.KINGSIDE: (7, 1),
    CastlingSide.QUEENSIDE: (0, -1),
}


def castling_side(king: Piece, to_sq: Square) -> CastlingSide | None:
    """Which castling a king move requests, if it is two files on one rank."""
    if king.piece_type != PieceType.KING or to_sq.rank != king.square.rank:
        return None
    df = to_sq.file - king.square.file
    if df == 2:
        return CastlingSide.KINGSIDE
    if df == -2:
        return CastlingSide.QUEENSIDE
    return None


def rook_home(color: Color, side: CastlingSide) -> Square:
    return Square(_CASTLING_GEOMETRY[side][0], color.home_rank)


def castling_squares(color: Color, side: CastlingSide) -> tuple[Square, Square]:
    """(king destination, rook destination) for *color* castling on *side*."""
    step = _CASTLING_GEOMETRY[side][1]
    rank = color.home_rank
    king_to = Square(_KING_HOME_FILE + 2 * step, rank)
    rook_to = Square(_KING_HOME_FILE + step, rank)
    return king_to, rook_to


def castling_obstacle(
    board: Board, king: Piece, side: CastlingSide
) -> IllegalCastlingError | None:
    """First unmet castling precondition, checked in rule order, or ``None``."""
    color = king.color
    home = Square(_KING_HOME_FILE, color.home_rank)
    if king.has_moved or king.square != home:
        return KingMovedError(f"{color} king has already moved")

    rook_sq = rook_home(color, side)
    rook = board[rook_sq]
    if (
        rook is None
        or rook.color != color
        or rook.piece_type != PieceType.ROOK
        or rook.has_moved
    ):
        return RookUnavailableError(
            f"No unmoved {color} rook on {rook_sq.name} to castle with"
        )

    step = _CASTLING_GEOMETRY[side][1]
    file = home.file + step
    while file != rook_sq.file:
        between = Square(file, home.rank)
        if not board.is_empty(between):
            return CastlingPathBlockedError(
                f"Castling path blocked on {between.name}"
            )
        file += step

    opponent = color.opposite
    if is_square_attacked(board, home, opponent):
        return CastlingInCheckError(f"{color} king is in check")

    for df in (step, 2 * step):
        transit = Square(home.file + df, home.rank)
        if is_square_attacked(board, transit, opponent):
            return CastlingThroughCheckError(
                f"{color} king would cross attacked square {transit.name}"
            )
    return None


def castling_moves(board: Board, king: Piece) -> list[Move]:
    """Castling candidates whose preconditions all hold right now."""
    moves: list[Move] = []
    for side in CastlingSide:
        if castling_obstacle(board, king, side) is None:
            king_to, _ = castling_squares(king.color, side)
            moves.append(Move(king.square, king_to, castling=side))
    return moves


def castle(board: Board, king: Piece, side: CastlingSide) -> Piece:
    """Relocate king and rook in one step; returns the rook.

    Preconditions must already have been checked with :func:`castling_obstacle`.
    """
    rook = board[rook_home(king.color, side)]
    assert rook is not None
    king_from = king.square
    rook_from = rook.square
    king_to, rook_to = castling_squares(king.color, side)

    board[king_to] = king
    board[king_from] = None
    board[rook_to] = rook
    board[rook_from] = None
    king.history.append(king_from)
    rook.history.append(rook_from)
    return rook


# ── En passant ───────────────────────────────────────────────────────────────


def en_passant_target(piece: Piece, from_sq: Square, to_sq: Square) -> Square | None:
    """Square skipped by a pawn double step, or ``None`` for any other move."""
    if piece.piece_type != PieceType.PAWN or abs(to_sq.rank - from_sq.rank) != 2:
        return None
    return Square(from_sq.file, (from_sq.rank + to_sq.rank) // 2)


def en_passant_victim_square(from_sq: Square, to_sq: Square) -> Square:
    """Where the pawn captured en passant stands: beside the capturer."""
    return Square(to_sq.file, from_sq.rank)


def en_passant_victim(
    board: Board, pawn: Piece, to_sq: Square, target: Square | None
) -> Piece | None:
    """The enemy pawn a diagonal step onto *to_sq* would take en passant.

    *target* is the square recorded at the double step. It only counts when
    it lies directly ahead of the enemy pawn from the capturer's side, i.e.
    one rank forward of the capturing pawn.
    """
    if target is None or to_sq != target or not board.is_empty(to_sq):
        return None
    if to_sq.rank != pawn.square.rank + pawn.color.forward:
        return None
    victim = board[en_passant_victim_square(pawn.square, to_sq)]
    if (
        victim is None
        or victim.color == pawn.color
        or victim.piece_type != PieceType.PAWN
    ):
        return None
    return victim


# ── Promotion ────────────────────────────────────────────────────────────────

_PROMOTION_CHARS: dict[str, PieceType] = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}
PROMOTION_TYPES: tuple[PieceType, ...] = tuple(_PROMOTION_CHARS.values())


def parse_promotion(value: PieceType | str) -> PieceType:
    """Accept a :class:`PieceType` or a letter such as 'q' or 'N'."""
    if isinstance(value, PieceType):
        kind = value
    elif isinstance(value, str) and value.lower() in _PROMOTION_CHARS:
        kind = _PROMOTION_CHARS[value.lower()]
    else:
        raise InvalidPromotionError(f"Invalid promotion piece: {value!r}")
    if kind not in PROMOTION_TYPES:
        raise InvalidPromotionError(f"Cannot promote to {kind.name.lower()}")
    return kind


def is_promotion_square(piece: Piece, to_sq: Square) -> bool:
    """Whether *piece* reaching *to_sq* must promote."""
    return (
        piece.piece_type == PieceType.PAWN
        and to_sq.rank == piece.color.opposite.home_rank
    )


def promote(board: Board, pawn: Piece, kind: PieceType) -> Piece:
    """Replace *pawn* on its square with a new piece of *kind*."""
    promoted = Piece(pawn.color, kind, pawn.square)
    board[pawn.square] = promoted
    return promoted
