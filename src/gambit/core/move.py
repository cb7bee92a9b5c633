"""Candidate move value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import CastlingSide
from gambit.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A candidate move from one square to another.

    ``quiet_only`` marks pawn pushes, ``capture_only`` pawn diagonals.
    ``en_passant`` and ``castling`` are filled in by the legality filter,
    never by the raw generators.
    """

    from_sq: Square
    to_sq: Square
    quiet_only: bool = False
    capture_only: bool = False
    en_passant: bool = False
    castling: CastlingSide | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"

    @property
    def is_attack(self) -> bool:
        """Whether this move could capture on its destination square."""
        return not self.quiet_only
