"""Square type and coordinate helpers.

Board layout (file, rank), both zero-based from white's side:
    a1=(0, 0), b1=(1, 0), ..., h1=(7, 0)
    ...
    a8=(0, 7), ..., h8=(7, 7)
"""

from __future__ import annotations

from typing import NamedTuple, TypeAlias

from gambit.core.errors import OutOfBoundsError

_FILES = "abcdefgh"
_RANKS = "12345678"


class Square(NamedTuple):
    """A board coordinate: file index and rank index, each 0–7."""

    file: int
    rank: int

    @property
    def name(self) -> str:
        """Human-readable name, e.g. Square(4, 3) → 'e4'."""
        return square_name(self)

    def offset(self, df: int, dr: int) -> Square | None:
        """Shifted square, or ``None`` when it falls off the board."""
        af = self.file + df
        ar = self.rank + dr
        if 0 <= af < 8 and 0 <= ar < 8:
            return Square(af, ar)
        return None

    def __str__(self) -> str:
        return square_name(self)


# Anything a caller may hand us where a square is expected.
SquareLike: TypeAlias = "Square | tuple[int, int] | str"


def is_valid_square(file: int, rank: int) -> bool:
    """Check whether a (file, rank) pair lies on the board."""
    return 0 <= file < 8 and 0 <= rank < 8


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and rank (0–7)."""
    if not is_valid_square(file, rank):
        raise OutOfBoundsError(f"Square out of bounds: ({file}, {rank})")
    return Square(file, rank)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. Square(0, 0) → 'a1'."""
    return _FILES[sq.file] + _RANKS[sq.rank]


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(4, 3)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise OutOfBoundsError(f"Invalid square name: {name!r}")
    return Square(_FILES.index(name[0]), _RANKS.index(name[1]))


def to_square(value: SquareLike) -> Square:
    """Coerce a :class:`Square`, a ``(file, rank)`` pair or a name like 'e4'."""
    if isinstance(value, str):
        return parse_square(value)
    try:
        file, rank = value
    except (TypeError, ValueError):
        raise OutOfBoundsError(f"Invalid square: {value!r}") from None
    if not isinstance(file, int) or not isinstance(rank, int):
        raise OutOfBoundsError(f"Invalid square: {value!r}")
    return make_square(file, rank)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Square(f, 0) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(f, 1) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(f, 2) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(f, 3) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(f, 4) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(f, 5) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(f, 6) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Square(f, 7) for f in range(8))

ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(f, r) for r in range(8) for f in range(8)
)
