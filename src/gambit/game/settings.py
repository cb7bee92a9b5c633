"""Game configuration."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import PieceType

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w"


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Immutable engine options.

    Args:
        start_position: Position string used when none is passed explicitly.
        default_promotion: Piece a pawn becomes when the caller names none.
    """

    start_position: str = STARTING_POSITION
    default_promotion: PieceType = PieceType.QUEEN

    def __post_init__(self) -> None:
        if self.default_promotion in (PieceType.PAWN, PieceType.KING):
            raise ValueError(
                f"Invalid default promotion: {self.default_promotion.name.lower()}"
            )

    # Common presets
    @classmethod
    def standard(cls) -> GameSettings:
        return cls()

    @classmethod
    def underpromote_to_knight(cls) -> GameSettings:
        return cls(default_promotion=PieceType.KNIGHT)
