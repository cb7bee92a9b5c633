"""Game state machine — applies moves, tracks check and outcome, undoes moves."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from gambit.core.board import Board
from gambit.core.enums import CastlingSide, Color, GameResult, GameStatus, PieceType
from gambit.core.errors import (
    EmptyHistoryError,
    FriendlyCaptureError,
    GameOverError,
    IllegalMoveError,
    KingCaptureError,
    MoveNotLegalError,
    NoPieceAtSourceError,
    WrongTurnError,
)
from gambit.core.move import Move
from gambit.core.move_generator import is_in_check, is_square_attacked
from gambit.core.notation import (
    check_suffix,
    format_castle,
    format_move,
    parse_move_text,
    parse_position,
)
from gambit.core.piece import Piece, PieceView
from gambit.core.rules import LegalMoves, legal_moves
from gambit.core.special import (
    castle,
    castling_obstacle,
    castling_side,
    en_passant_target,
    en_passant_victim_square,
    is_promotion_square,
    parse_promotion,
    promote,
)
from gambit.core.types import Square, SquareLike, to_square
from gambit.game.settings import GameSettings

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history.

    Holds the original piece instances so undo can relink them.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    notation: str
    captured: Piece | None = None
    promotion: Piece | None = None
    rook: Piece | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_castling(self) -> bool:
        return self.rook is not None

    def __str__(self) -> str:
        return self.notation


MoveCallback = Callable[[MoveRecord], None]
GameOverCallback = Callable[[GameResult], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_undo: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


class GameState:
    """A chess game: board, side to move, check, outcome and history.

    Every public operation either completes or raises before touching any
    state. Single-threaded; callers drive all transitions.
    """

    def __init__(
        self,
        position: str | None = None,
        *,
        settings: GameSettings | None = None,
    ) -> None:
        self.settings = settings if settings is not None else GameSettings()
        board, side, ep = parse_position(
            position if position is not None else self.settings.start_position
        )
        self._board = board
        self._side = side
        self._start_en_passant = ep
        self._en_passant = ep
        self._history: list[MoveRecord] = []
        self._result = GameResult.IN_PROGRESS
        self._check: Color | None = None
        self._legal: LegalMoves = {}
        self.events = GameEvents()

        self._refresh()
        if not self._legal:
            self._result = self._terminal_result(side, self._check is not None)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def side_to_move(self) -> Color:
        return self._side

    @property
    def check(self) -> Color | None:
        """Color currently in check, if any."""
        return self._check

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def is_game_over(self) -> bool:
        return self._result != GameResult.IN_PROGRESS

    @property
    def status(self) -> GameStatus:
        if self._result == GameResult.DRAW:
            return GameStatus.STALEMATE
        if self._result != GameResult.IN_PROGRESS:
            return GameStatus.CHECKMATE
        if self._check is not None:
            return GameStatus.CHECK
        return GameStatus.ONGOING

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def en_passant(self) -> Square | None:
        return self._en_passant

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self._history)

    def square(self, coord: SquareLike) -> PieceView | None:
        piece = self._board[to_square(coord)]
        return piece.view if piece is not None else None

    def legal_moves(self, coord: SquareLike) -> list[Move]:
        """Legal moves from *coord* for the side to move."""
        return list(self._legal.get(to_square(coord), ()))

    def all_legal_moves(self) -> list[Move]:
        return [m for moves in self._legal.values() for m in moves]

    def is_square_attacked(self, coord: SquareLike, by_color: Color) -> bool:
        return is_square_attacked(self._board, to_square(coord), by_color)

    def in_check(self, color: Color) -> bool:
        return is_in_check(self._board, color)

    # ── Move application ─────────────────────────────────────────────────

    def move(
        self,
        from_sq: SquareLike,
        to_sq: SquareLike,
        promotion: PieceType | str | None = None,
    ) -> MoveRecord:
        """Validate and apply a move, returning its history record."""
        if self.is_game_over:
            raise GameOverError(f"Game is over: {self._result.name}")
        src = to_square(from_sq)
        dst = to_square(to_sq)

        try:
            piece = self._mover(src)
            side = castling_side(piece, dst)
            if side is not None:
                obstacle = castling_obstacle(self._board, piece, side)
                if obstacle is not None:
                    raise obstacle
                return self._apply_castle(piece, side)

            self._check_target(piece, dst)
            move = self._find_legal(src, dst)
            kind = parse_promotion(promotion) if promotion is not None else None
            if not is_promotion_square(piece, dst):
                kind = None
            elif kind is None:
                kind = self.settings.default_promotion
        except IllegalMoveError as exc:
            _LOGGER.debug("Rejected %s-%s: %s", src.name, dst.name, exc)
            raise
        return self._apply(piece, move, kind)

    def play(self, *moves: str) -> list[MoveRecord]:
        """Apply moves written like ``"e2e4"`` or ``"e7e8q"`` in order."""
        records: list[MoveRecord] = []
        for text in moves:
            from_sq, to_sq, promotion = parse_move_text(text)
            records.append(self.move(from_sq, to_sq, promotion))
        return records

    def undo(self) -> MoveRecord:
        """Reverse the most recent move exactly and return its record."""
        if not self._history:
            raise EmptyHistoryError("No moves to undo")

        record = self._history.pop()
        board = self._board
        piece = record.piece

        board[record.to_sq] = None
        if record.rook is not None:
            rook = record.rook
            board[rook.square] = None
            board[rook.history.pop()] = rook
        board[record.from_sq] = piece
        piece.history.pop()
        if record.promotion is not None:
            record.promotion.history.clear()
        if record.captured is not None:
            board[record.captured.square] = record.captured

        self._en_passant = self._derive_en_passant()
        self._side = piece.color
        self._result = GameResult.IN_PROGRESS
        self._refresh()

        _LOGGER.debug("Undid %s", record.notation)
        for callback in self.events.on_undo:
            callback(record)
        return record

    # ── Internal ─────────────────────────────────────────────────────────

    def _mover(self, src: Square) -> Piece:
        piece = self._board[src]
        if piece is None:
            raise NoPieceAtSourceError(f"No piece on {src.name}")
        if piece.color != self._side:
            raise WrongTurnError(f"It is {self._side}'s turn, not {piece.color}'s")
        return piece

    def _check_target(self, piece: Piece, dst: Square) -> None:
        target = self._board[dst]
        if target is not None:
            if target.color == piece.color:
                raise FriendlyCaptureError(f"Cannot capture own piece on {dst.name}")
            if target.piece_type == PieceType.KING:
                raise KingCaptureError(f"Cannot capture the king on {dst.name}")

    def _find_legal(self, src: Square, dst: Square) -> Move:
        for move in self._legal.get(src, ()):
            if move.to_sq == dst and move.castling is None:
                return move
        raise MoveNotLegalError(f"Illegal move: {src.name}-{dst.name}")

    def _apply(self, piece: Piece, move: Move, kind: PieceType | None) -> MoveRecord:
        board = self._board
        from_sq, to_sq = move.from_sq, move.to_sq

        if move.en_passant:
            captured = board[en_passant_victim_square(from_sq, to_sq)]
        else:
            captured = board[to_sq]
        if captured is not None:
            board[captured.square] = None
        board[to_sq] = piece
        board[from_sq] = None
        piece.history.append(from_sq)

        promoted = promote(board, piece, kind) if kind is not None else None
        self._en_passant = en_passant_target(piece, from_sq, to_sq)

        opponent = piece.color.opposite
        reply, gives_check = self._evaluate(opponent)
        notation = format_move(
            piece.piece_type,
            from_sq,
            to_sq,
            capture=captured is not None,
            promotion=kind,
            suffix=check_suffix(gives_check, bool(reply)),
        )
        record = MoveRecord(
            from_sq=from_sq,
            to_sq=to_sq,
            piece=piece,
            notation=notation,
            captured=captured,
            promotion=promoted,
        )
        self._advance(record, reply, gives_check)
        return record

    def _apply_castle(self, king: Piece, side: CastlingSide) -> MoveRecord:
        from_sq = king.square
        rook = castle(self._board, king, side)
        self._en_passant = None

        opponent = king.color.opposite
        reply, gives_check = self._evaluate(opponent)
        record = MoveRecord(
            from_sq=from_sq,
            to_sq=king.square,
            piece=king,
            notation=format_castle(side, check_suffix(gives_check, bool(reply))),
            rook=rook,
        )
        self._advance(record, reply, gives_check)
        return record

    def _evaluate(self, color: Color) -> tuple[LegalMoves, bool]:
        """Legal replies and check state for *color* on the current board."""
        return (
            legal_moves(self._board, color, self._en_passant),
            is_in_check(self._board, color),
        )

    def _advance(self, record: MoveRecord, reply: LegalMoves, in_check: bool) -> None:
        mover = record.piece.color
        opponent = mover.opposite
        self._history.append(record)
        self._check = opponent if in_check else None

        if reply:
            self._side = opponent
            self._legal = reply
        else:
            self._legal = {}
            self._result = self._terminal_result(opponent, in_check)

        _LOGGER.debug("Applied %s", record.notation)
        for callback in self.events.on_move:
            callback(record)

        if self.is_game_over:
            _LOGGER.info("Game over after %s: %s", record.notation, self._result.name)
            for game_over_callback in self.events.on_game_over:
                game_over_callback(self._result)

    def _refresh(self) -> None:
        """Recompute check and the legal-move cache for the side to move."""
        self._check = self._side if is_in_check(self._board, self._side) else None
        self._legal = legal_moves(self._board, self._side, self._en_passant)

    def _derive_en_passant(self) -> Square | None:
        if not self._history:
            return self._start_en_passant
        last = self._history[-1]
        return en_passant_target(last.piece, last.from_sq, last.to_sq)

    @staticmethod
    def _terminal_result(stuck: Color, in_check: bool) -> GameResult:
        """Outcome when *stuck* has no legal move."""
        if in_check:
            return GameResult.win_for(stuck.opposite)
        return GameResult.DRAW
