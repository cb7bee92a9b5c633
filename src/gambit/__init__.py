"""gambit — a rules engine for standard chess."""

from gambit.core.enums import CastlingSide, Color, GameResult, GameStatus, PieceType
from gambit.core.errors import (
    CastlingInCheckError,
    CastlingPathBlockedError,
    CastlingThroughCheckError,
    ChessError,
    EmptyHistoryError,
    FriendlyCaptureError,
    GameOverError,
    IllegalCastlingError,
    IllegalMoveError,
    InvalidPromotionError,
    KingCaptureError,
    KingMovedError,
    MalformedPositionError,
    MoveNotLegalError,
    NoPieceAtSourceError,
    OutOfBoundsError,
    RookUnavailableError,
    WrongTurnError,
)
from gambit.core.move import Move
from gambit.core.piece import PieceView
from gambit.core.types import Square, parse_square, to_square
from gambit.game import GameEvents, GameSettings, GameState, MoveRecord

__all__ = [
    "CastlingInCheckError",
    "CastlingPathBlockedError",
    "CastlingSide",
    "CastlingThroughCheckError",
    "ChessError",
    "Color",
    "EmptyHistoryError",
    "FriendlyCaptureError",
    "GameEvents",
    "GameOverError",
    "GameResult",
    "GameSettings",
    "GameState",
    "GameStatus",
    "IllegalCastlingError",
    "IllegalMoveError",
    "InvalidPromotionError",
    "KingCaptureError",
    "KingMovedError",
    "MalformedPositionError",
    "Move",
    "MoveNotLegalError",
    "MoveRecord",
    "NoPieceAtSourceError",
    "OutOfBoundsError",
    "PieceType",
    "PieceView",
    "RookUnavailableError",
    "Square",
    "WrongTurnError",
    "parse_square",
    "to_square",
]
