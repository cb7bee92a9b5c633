"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from gambit.core.enums import Color, PieceType
from gambit.core.errors import MalformedPositionError
from gambit.core.piece import Piece
from gambit.core.types import ALL_SQUARES, Square

STANDARD_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


class Board:
    """Mutable 8x8 grid of piece references with a king square cache.

    Writing a piece into a slot also moves the piece's stored square there;
    clearing a slot leaves the removed piece's square untouched.
    """

    __slots__ = ("_grid", "_king_squares")

    def __init__(self) -> None:
        # [rank][file]
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq.rank][sq.file]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._grid[sq.rank][sq.file]
        if (
            old_piece is not None
            and old_piece.piece_type == PieceType.KING
            and self._king_squares[old_piece.color] == sq
        ):
            self._king_squares[old_piece.color] = None

        self._grid[sq.rank][sq.file] = piece
        if piece is None:
            return

        piece.square = sq
        if piece.piece_type == PieceType.KING:
            self._king_squares[piece.color] = sq

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq.rank][sq.file] is None

    def __iter__(self) -> Iterator[Piece]:
        """All pieces on the board, a1 to h8."""
        for row in self._grid:
            for piece in row:
                if piece is not None:
                    yield piece

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> list[Piece]:
        """All of *color*'s pieces on the board."""
        return [p for p in self if p.color == color]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[color]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    def snapshot(self) -> tuple[tuple[Square, int, Square, int], ...]:
        """Structural fingerprint: which piece instance sits where.

        Includes each piece's stored square and history length so a probe
        that forgets to restore either shows up.
        """
        return tuple(
            (sq, id(piece), piece.square, len(piece.history))
            for sq in ALL_SQUARES
            if (piece := self[sq]) is not None
        )

    # -- Factory ------------------------------------------------------------

    @classmethod
    def from_placement(cls, placement: str) -> Board:
        """Parse the placement field of a position string (rank 8 first)."""
        ranks = placement.split("/")
        if len(ranks) != 8:
            raise MalformedPositionError(
                f"Placement must contain 8 ranks: {placement!r}"
            )
        board = cls()
        kings = {Color.WHITE: 0, Color.BLACK: 0}
        for rank_idx, rank_text in enumerate(ranks):
            rank = 7 - rank_idx
            file = 0
            for ch in rank_text:
                if ch in "0123456789":
                    step = int(ch)
                    if not (1 <= step <= 8):
                        raise MalformedPositionError(
                            f"Invalid empty-square count {ch!r}: {placement!r}"
                        )
                    file += step
                else:
                    if file >= 8:
                        raise MalformedPositionError(
                            f"Invalid rank width: {rank_text!r}"
                        )
                    piece = Piece.from_char(ch, Square(file, rank))
                    if piece.piece_type == PieceType.KING:
                        kings[piece.color] += 1
                    board[piece.square] = piece
                    file += 1
                if file > 8:
                    raise MalformedPositionError(f"Invalid rank width: {rank_text!r}")
            if file != 8:
                raise MalformedPositionError(f"Invalid rank width: {rank_text!r}")

        for color, count in kings.items():
            if count != 1:
                raise MalformedPositionError(
                    f"Expected exactly one {color.name} king, found {count}"
                )
        return board

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        return cls.from_placement(STANDARD_PLACEMENT)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return all(
            a is b
            for row_a, row_b in zip(self._grid, other._grid)
            for a, b in zip(row_a, row_b)
        )

    def ascii(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self._grid[rank][file]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

    def __repr__(self) -> str:
        return self.ascii()
