"""Pseudo-legal move generation, one function per piece kind.

Generators take the board as an argument; pieces keep no reference to it.
Results ignore self-check but respect board bounds and occupancy.
"""

from __future__ import annotations

from collections.abc import Callable

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

Generator = Callable[[Piece, Board], list[Move]]


def pawn_moves(piece: Piece, board: Board) -> list[Move]:
    moves: list[Move] = []
    sq = piece.square
    step = piece.color.forward

    one_step = sq.offset(0, step)
    if one_step is not None and board.is_empty(one_step):
        moves.append(Move(sq, one_step, quiet_only=True))
        if not piece.has_moved:
            two_step = one_step.offset(0, step)
            if two_step is not None and board.is_empty(two_step):
                moves.append(Move(sq, two_step, quiet_only=True))

    # Diagonals are listed even when empty: they are the squares a pawn
    # attacks, and the legality filter decides whether they are playable.
    for df in (-1, 1):
        cap_sq = sq.offset(df, step)
        if cap_sq is None:
            continue
        target = board[cap_sq]
        if target is None or target.color != piece.color:
            moves.append(Move(sq, cap_sq, capture_only=True))
    return moves


def _leaper_moves(
    piece: Piece, board: Board, offsets: tuple[tuple[int, int], ...]
) -> list[Move]:
    moves: list[Move] = []
    sq = piece.square
    for df, dr in offsets:
        to_sq = sq.offset(df, dr)
        if to_sq is None:
            continue
        target = board[to_sq]
        if target is None or target.color != piece.color:
            moves.append(Move(sq, to_sq))
    return moves


def _sliding_moves(
    piece: Piece, board: Board, directions: tuple[tuple[int, int], ...]
) -> list[Move]:
    moves: list[Move] = []
    sq = piece.square
    for df, dr in directions:
        to_sq = sq.offset(df, dr)
        while to_sq is not None:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
                to_sq = to_sq.offset(df, dr)
                continue
            if target.color != piece.color:
                moves.append(Move(sq, to_sq))
            break
    return moves


def knight_moves(piece: Piece, board: Board) -> list[Move]:
    return _leaper_moves(piece, board, KNIGHT_OFFSETS)


def king_moves(piece: Piece, board: Board) -> list[Move]:
    """Single steps only; castling is handled in :mod:`gambit.core.special`."""
    return _leaper_moves(piece, board, KING_OFFSETS)


def bishop_moves(piece: Piece, board: Board) -> list[Move]:
    return _sliding_moves(piece, board, BISHOP_DIRS)


def rook_moves(piece: Piece, board: Board) -> list[Move]:
    return _sliding_moves(piece, board, ROOK_DIRS)


def queen_moves(piece: Piece, board: Board) -> list[Move]:
    return _sliding_moves(piece, board, QUEEN_DIRS)


GENERATORS: dict[PieceType, Generator] = {
    PieceType.PAWN: pawn_moves,
    PieceType.KNIGHT: knight_moves,
    PieceType.BISHOP: bishop_moves,
    PieceType.ROOK: rook_moves,
    PieceType.QUEEN: queen_moves,
    PieceType.KING: king_moves,
}


def piece_moves(piece: Piece, board: Board) -> list[Move]:
    """Pseudo-legal moves for a single piece."""
    return GENERATORS[piece.piece_type](piece, board)


def pseudo_legal_moves(board: Board, color: Color) -> list[Move]:
    """All pseudo-legal moves for *color* (may leave own king attacked)."""
    moves: list[Move] = []
    for piece in board.pieces(color):
        moves.extend(piece_moves(piece, board))
    return moves


# -- Attack detection ---------------------------------------------------------


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Brute force: any pseudo-legal move of *by_color* that may capture and
    lands on *sq*. Pawn pushes never attack.
    """
    for piece in board.pieces(by_color):
        for move in piece_moves(piece, board):
            if move.to_sq == sq and move.is_attack:
                return True
    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?"""
    return is_square_attacked(board, board.king_square(color), color.opposite)
