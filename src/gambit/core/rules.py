"""Legality filter and terminal-state rules."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from gambit.core.board import Board
from gambit.core.enums import Color, GameResult, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import is_in_check, piece_moves
from gambit.core.piece import Piece
from gambit.core.special import (
    castling_moves,
    en_passant_victim,
    en_passant_victim_square,
)
from gambit.core.types import Square

LegalMoves = dict[Square, list[Move]]


@contextmanager
def simulate(board: Board, move: Move) -> Iterator[None]:
    """Temporarily play *move* on *board*; the prior layout is restored on exit.

    Handles plain moves, captures and en passant (``move.en_passant``).
    Castling is never simulated: its own preconditions cover king safety.
    """
    piece = board[move.from_sq]
    assert piece is not None
    if move.en_passant:
        capture_sq = en_passant_victim_square(move.from_sq, move.to_sq)
    else:
        capture_sq = move.to_sq
    captured = board[capture_sq]

    if captured is not None:
        board[capture_sq] = None
    board[move.to_sq] = piece
    board[move.from_sq] = None
    try:
        yield
    finally:
        board[move.to_sq] = None
        board[move.from_sq] = piece
        if captured is not None:
            board[capture_sq] = captured


def _playable(
    board: Board, piece: Piece, move: Move, en_passant: Square | None
) -> Move | None:
    """Resolve capture flags against the board; ``None`` if unplayable."""
    target = board[move.to_sq]
    if move.capture_only and target is None:
        if en_passant_victim(board, piece, move.to_sq, en_passant) is None:
            return None
        return replace(move, en_passant=True)
    if target is not None and target.piece_type == PieceType.KING:
        return None
    return move


def legal_moves_for(
    board: Board, piece: Piece, en_passant: Square | None = None
) -> list[Move]:
    """Legal moves of one piece: pseudo-legal moves that keep its king safe."""
    legal: list[Move] = []
    color = piece.color
    for candidate in piece_moves(piece, board):
        move = _playable(board, piece, candidate, en_passant)
        if move is None:
            continue
        with simulate(board, move):
            safe = not is_in_check(board, color)
        if safe:
            legal.append(move)
    if piece.piece_type == PieceType.KING:
        legal.extend(castling_moves(board, piece))
    return legal


def legal_moves(
    board: Board, color: Color, en_passant: Square | None = None
) -> LegalMoves:
    """All legal moves of *color*, keyed by source square."""
    by_square: LegalMoves = {}
    for piece in board.pieces(color):
        moves = legal_moves_for(board, piece, en_passant)
        if moves:
            by_square[piece.square] = moves
    return by_square


class Rules:
    """Static rule-checker that operates on a board and the side to move."""

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return is_in_check(board, color)

    @staticmethod
    def is_checkmate(
        board: Board, color: Color, en_passant: Square | None = None
    ) -> bool:
        if not is_in_check(board, color):
            return False
        return not legal_moves(board, color, en_passant)

    @staticmethod
    def is_stalemate(
        board: Board, color: Color, en_passant: Square | None = None
    ) -> bool:
        if is_in_check(board, color):
            return False
        return not legal_moves(board, color, en_passant)

    @staticmethod
    def game_result(
        board: Board, color: Color, en_passant: Square | None = None
    ) -> GameResult:
        """Determine the result with *color* to move."""
        if legal_moves(board, color, en_passant):
            return GameResult.IN_PROGRESS
        if is_in_check(board, color):
            return GameResult.win_for(color.opposite)
        return GameResult.DRAW  # stalemate
