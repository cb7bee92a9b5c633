"""Tests for GameState: queries, move validation, outcomes and events."""

import logging

import pytest

from gambit.core.enums import Color, GameResult, GameStatus, PieceType
from gambit.core.errors import (
    ChessError,
    FriendlyCaptureError,
    GameOverError,
    IllegalMoveError,
    KingCaptureError,
    MalformedPositionError,
    MoveNotLegalError,
    NoPieceAtSourceError,
    OutOfBoundsError,
    WrongTurnError,
)
from gambit.core.piece import PieceView
from gambit.core.types import E1, E2, E3, E4, Square
from gambit.game.settings import GameSettings
from gambit.game.state import GameState, MoveRecord

FOOLS_MATE = ("f2f3", "e7e5", "g2g4", "d8h4")


class TestInitialState:
    def test_defaults(self, game: GameState) -> None:
        assert game.side_to_move == Color.WHITE
        assert game.result == GameResult.IN_PROGRESS
        assert game.status == GameStatus.ONGOING
        assert game.check is None
        assert game.en_passant is None
        assert game.history == ()
        assert game.ply_count == 0
        assert not game.is_game_over

    def test_twenty_legal_moves(self, game: GameState) -> None:
        assert len(game.all_legal_moves()) == 20

    def test_square_lookup(self, game: GameState) -> None:
        view = game.square("e1")
        assert view == PieceView(PieceType.KING, Color.WHITE, E1)
        assert game.square((4, 0)) == view
        assert game.square(E1) == view
        assert game.square("e4") is None

    def test_square_out_of_bounds(self, game: GameState) -> None:
        with pytest.raises(OutOfBoundsError):
            game.square("z9")
        with pytest.raises(OutOfBoundsError):
            game.square((8, 0))

    def test_legal_moves_per_square(self, game: GameState) -> None:
        assert {m.to_sq for m in game.legal_moves("e2")} == {E3, E4}
        assert game.legal_moves((4, 1)) == game.legal_moves("e2")
        assert game.legal_moves("e7") == []
        assert game.legal_moves("e4") == []
        assert game.legal_moves("e1") == []

    def test_attack_queries(self, game: GameState) -> None:
        assert game.is_square_attacked("f3", Color.WHITE)
        assert not game.is_square_attacked("e4", Color.WHITE)
        assert game.is_square_attacked("f6", Color.BLACK)
        assert not game.in_check(Color.WHITE)
        assert not game.in_check(Color.BLACK)

    def test_custom_position(self) -> None:
        game = GameState("4k3/8/8/8/8/8/4P3/4K3 b")
        assert game.side_to_move == Color.BLACK
        assert game.square("e2") == PieceView(PieceType.PAWN, Color.WHITE, E2)

    def test_position_from_settings(self) -> None:
        settings = GameSettings(start_position="4k3/8/8/8/8/8/4P3/4K3 w")
        game = GameState(settings=settings)
        assert len(list(game.board)) == 3

    @pytest.mark.parametrize(
        "position", ["8/8/8 w", "4k3/8/8/8/8/8/8/4K3 x", "8/8/8/8/8/8/8/8 w"]
    )
    def test_malformed_position(self, position: str) -> None:
        with pytest.raises(MalformedPositionError):
            GameState(position)


class TestMove:
    def test_pawn_double_step(self, game: GameState) -> None:
        record = game.move("e2", "e4")
        assert isinstance(record, MoveRecord)
        assert record.notation == "e2-e4"
        assert str(record) == "e2-e4"
        assert not record.is_capture
        assert game.side_to_move == Color.BLACK
        assert game.en_passant == E3
        assert game.history == (record,)
        assert record.piece.history == [E2]
        assert game.square("e4") == PieceView(PieceType.PAWN, Color.WHITE, E4)
        assert game.square("e2") is None

    def test_en_passant_target_cleared(self, game: GameState) -> None:
        game.play("e2e4", "g8f6")
        assert game.en_passant is None

    def test_accepts_tuples_and_squares(self, game: GameState) -> None:
        game.move((6, 0), Square(5, 2))
        assert game.square("f3") is not None

    def test_capture_notation(self, game: GameState) -> None:
        records = game.play("e2e4", "d7d5", "e4d5")
        assert records[-1].notation == "e4xd5"
        assert records[-1].is_capture
        captured = records[-1].captured
        assert captured is not None
        assert captured.color == Color.BLACK
        assert len(game.board.pieces(Color.BLACK)) == 15

    def test_check_is_reported(self, game: GameState) -> None:
        records = game.play("e2e4", "f7f6", "d1h5")
        assert records[-1].notation == "Qd1-h5+"
        assert game.check == Color.BLACK
        assert game.status == GameStatus.CHECK
        assert game.in_check(Color.BLACK)
        assert game.result == GameResult.IN_PROGRESS

    def test_check_cleared_after_reply(self, game: GameState) -> None:
        game.play("e2e4", "f7f6", "d1h5", "g7g6")
        assert game.check is None
        assert game.status == GameStatus.ONGOING

    def test_pieces_stay_in_sync_with_slots(self, game: GameState) -> None:
        game.play("e2e4", "d7d5", "e4d5", "d8d5", "b1c3", "d5a5")
        for piece in game.board:
            assert game.board[piece.square] is piece
        assert game.board.king_square(Color.WHITE) == E1


class TestRejectedMoves:
    @pytest.mark.parametrize(
        ("src", "dst", "error"),
        [
            ("e3", "e4", NoPieceAtSourceError),
            ("e7", "e5", WrongTurnError),
            ("d1", "d2", FriendlyCaptureError),
            ("e2", "e5", MoveNotLegalError),
            ("g1", "g3", MoveNotLegalError),
            ("e2", "e9", OutOfBoundsError),
            ((8, 1), (4, 3), OutOfBoundsError),
        ],
    )
    def test_error_kinds(
        self,
        game: GameState,
        fingerprint,
        src: object,
        dst: object,
        error: type[Exception],
    ) -> None:
        before = fingerprint(game)
        with pytest.raises(error):
            game.move(src, dst)  # type: ignore[arg-type]
        assert fingerprint(game) == before

    def test_errors_share_a_base(self, game: GameState) -> None:
        with pytest.raises(IllegalMoveError):
            game.move("e2", "e5")
        with pytest.raises(ChessError):
            game.move("e3", "e4")

    def test_king_capture(self, fingerprint) -> None:
        game = GameState("4k3/8/8/8/8/8/4Q3/4K3 w")
        before = fingerprint(game)
        with pytest.raises(KingCaptureError):
            game.move("e2", "e8")
        assert fingerprint(game) == before

    def test_pinned_piece(self, fingerprint) -> None:
        game = GameState("4k3/4r3/8/8/8/8/4N3/4K3 w")
        before = fingerprint(game)
        with pytest.raises(MoveNotLegalError):
            game.move("e2", "c3")
        assert fingerprint(game) == before

    def test_must_answer_check(self, game: GameState) -> None:
        game.play("e2e4", "f7f6", "d1h5")
        with pytest.raises(MoveNotLegalError):
            game.move("a7", "a6")

    def test_rejection_is_logged(
        self, game: GameState, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="gambit.game.state"):
            with pytest.raises(MoveNotLegalError):
                game.move("e2", "e5")
        assert "Rejected e2-e5" in caplog.text


class TestOutcomes:
    def test_fools_mate(self, game: GameState) -> None:
        records = game.play(*FOOLS_MATE)
        assert records[-1].notation == "Qd8-h4#"
        assert game.result == GameResult.BLACK_WINS
        assert game.status == GameStatus.CHECKMATE
        assert game.check == Color.WHITE
        assert game.is_game_over
        assert game.all_legal_moves() == []
        # The turn does not pass once the game has ended.
        assert game.side_to_move == Color.BLACK

    def test_no_moves_after_game_over(self, game: GameState, fingerprint) -> None:
        game.play(*FOOLS_MATE)
        before = fingerprint(game)
        with pytest.raises(GameOverError):
            game.move("a2", "a3")
        with pytest.raises(GameOverError):
            game.move("z9", "a3")
        assert fingerprint(game) == before

    def test_stalemate_by_move(self) -> None:
        game = GameState("k7/8/8/8/8/8/8/1Q5K w")
        record = game.move("b1", "b6")
        assert record.notation == "Qb1-b6"
        assert game.result == GameResult.DRAW
        assert game.status == GameStatus.STALEMATE
        assert game.check is None
        assert game.side_to_move == Color.WHITE

    def test_stalemate_on_construction(self) -> None:
        game = GameState("7k/8/5KQ1/8/8/8/8/8 b")
        assert game.result == GameResult.DRAW
        assert game.status == GameStatus.STALEMATE
        assert game.check is None
        assert game.all_legal_moves() == []

    def test_checkmate_on_construction(self) -> None:
        game = GameState("R2k4/8/3K4/8/8/8/8/8 b")
        assert game.result == GameResult.WHITE_WINS
        assert game.check == Color.BLACK
        with pytest.raises(GameOverError):
            game.move("d8", "e8")


class TestEvents:
    def test_move_and_undo_callbacks(self, game: GameState) -> None:
        moved: list[MoveRecord] = []
        undone: list[MoveRecord] = []
        game.events.on_move.append(moved.append)
        game.events.on_undo.append(undone.append)

        record = game.move("e2", "e4")
        assert moved == [record]
        assert game.undo() is record
        assert undone == [record]

    def test_game_over_callback(self, game: GameState) -> None:
        results: list[GameResult] = []
        game.events.on_game_over.append(results.append)
        game.play(*FOOLS_MATE[:-1])
        assert results == []
        game.play(FOOLS_MATE[-1])
        assert results == [GameResult.BLACK_WINS]

    def test_rejected_move_fires_nothing(self, game: GameState) -> None:
        moved: list[MoveRecord] = []
        game.events.on_move.append(moved.append)
        with pytest.raises(MoveNotLegalError):
            game.move("e2", "e5")
        assert moved == []

    def test_game_over_is_logged(
        self, game: GameState, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="gambit.game.state"):
            game.play(*FOOLS_MATE)
        assert "BLACK_WINS" in caplog.text


class TestSettings:
    def test_rejects_king_promotion_default(self) -> None:
        with pytest.raises(ValueError):
            GameSettings(default_promotion=PieceType.KING)

    def test_rejects_pawn_promotion_default(self) -> None:
        with pytest.raises(ValueError):
            GameSettings(default_promotion=PieceType.PAWN)

    def test_presets(self) -> None:
        assert GameSettings.standard().default_promotion == PieceType.QUEEN
        underpromote = GameSettings.underpromote_to_knight()
        assert underpromote.default_promotion == PieceType.KNIGHT

    def test_settings_are_frozen(self) -> None:
        settings = GameSettings()
        with pytest.raises(AttributeError):
            settings.default_promotion = PieceType.ROOK  # type: ignore[misc]
