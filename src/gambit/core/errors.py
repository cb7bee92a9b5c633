"""Exception hierarchy raised by the rules engine.

Every error is raised before the engine mutates any state, so callers can
report it and carry on with the same game.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all engine failures."""


class OutOfBoundsError(ChessError, ValueError):
    """Coordinate outside the 8x8 grid or malformed square name."""


class MalformedPositionError(ChessError, ValueError):
    """Position string could not be parsed into a board."""


class GameOverError(ChessError):
    """A move was attempted after the game reached a terminal outcome."""


class EmptyHistoryError(ChessError):
    """``undo()`` was called with no moves on the ledger."""


# ── Move failures ────────────────────────────────────────────────────────────


class IllegalMoveError(ChessError):
    """Base class for rejected moves."""


class NoPieceAtSourceError(IllegalMoveError):
    pass


class WrongTurnError(IllegalMoveError):
    pass


class FriendlyCaptureError(IllegalMoveError):
    pass


class KingCaptureError(IllegalMoveError):
    pass


class MoveNotLegalError(IllegalMoveError):
    """The move is not among the legal moves from its source square."""


class InvalidPromotionError(IllegalMoveError, ValueError):
    """Unknown promotion piece, or a king/pawn was requested."""


# ── Castling ─────────────────────────────────────────────────────────────────


class IllegalCastlingError(IllegalMoveError):
    """Base class for unmet castling preconditions."""


class KingMovedError(IllegalCastlingError):
    pass


class RookUnavailableError(IllegalCastlingError):
    """The castling rook is missing or has already moved."""


class CastlingPathBlockedError(IllegalCastlingError):
    pass


class CastlingInCheckError(IllegalCastlingError):
    pass


class CastlingThroughCheckError(IllegalCastlingError):
    """A square the king crosses (or lands on) is attacked."""
