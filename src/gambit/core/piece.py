"""Piece identity object and its read-only view."""

from __future__ import annotations

from dataclasses import dataclass, field

from gambit.core.enums import Color, PieceType
from gambit.core.errors import MalformedPositionError
from gambit.core.types import Square

# Placement character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class PieceView:
    """Snapshot of a piece handed out to renderers."""

    kind: PieceType
    color: Color
    square: Square


@dataclass(eq=False, slots=True)
class Piece:
    """A chess piece living on one board square.

    Pieces compare by identity: undo relinks the exact instance that was
    captured or replaced, never a look-alike.
    """

    color: Color
    piece_type: PieceType
    square: Square
    # Squares this piece has left, oldest first.
    history: list[Square] = field(default_factory=list)

    @property
    def has_moved(self) -> bool:
        return bool(self.history)

    @property
    def view(self) -> PieceView:
        return PieceView(self.piece_type, self.color, self.square)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Placement character (uppercase = white, lowercase = black)."""
        return _CHARS[(self.color, self.piece_type)]

    def __repr__(self) -> str:
        return f"Piece({self}@{self.square.name})"

    @classmethod
    def from_char(cls, char: str, square: Square) -> Piece:
        """Create piece from placement character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise MalformedPositionError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype, square)
