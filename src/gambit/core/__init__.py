"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from gambit.core import Board, Color, legal_moves

    board = Board.initial()
    for square, moves in legal_moves(board, Color.WHITE).items():
        print(square, [str(m) for m in moves])
"""

from gambit.core.board import STANDARD_PLACEMENT, Board
from gambit.core.enums import CastlingSide, Color, GameResult, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import (
    is_in_check,
    is_square_attacked,
    piece_moves,
    pseudo_legal_moves,
)
from gambit.core.notation import (
    format_castle,
    format_move,
    parse_move_text,
    parse_position,
)
from gambit.core.piece import Piece, PieceView
from gambit.core.rules import Rules, legal_moves, legal_moves_for, simulate
from gambit.core.types import (
    Square,
    make_square,
    parse_square,
    square_name,
    to_square,
)

__all__ = [
    # Enums
    "CastlingSide",
    "Color",
    "GameResult",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Square",
    "make_square",
    "parse_square",
    "square_name",
    "to_square",
    # Domain objects
    "Board",
    "Move",
    "Piece",
    "PieceView",
    "Rules",
    "STANDARD_PLACEMENT",
    # Move generation / legality
    "is_in_check",
    "is_square_attacked",
    "legal_moves",
    "legal_moves_for",
    "piece_moves",
    "pseudo_legal_moves",
    "simulate",
    # Notation
    "format_castle",
    "format_move",
    "parse_move_text",
    "parse_position",
]
