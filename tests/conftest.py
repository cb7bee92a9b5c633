"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from gambit.core.enums import Color
from gambit.game.state import GameState

Fingerprint = Callable[[GameState], tuple[Any, ...]]


@pytest.fixture
def game() -> GameState:
    """A fresh game from the standard starting position."""
    return GameState()


@pytest.fixture
def fingerprint() -> Fingerprint:
    """Everything ``undo()`` must restore, as one comparable tuple."""

    def _take(state: GameState) -> tuple[Any, ...]:
        board = state.board
        return (
            board.snapshot(),
            board.king_square(Color.WHITE),
            board.king_square(Color.BLACK),
            state.side_to_move,
            state.en_passant,
            state.check,
            state.result,
            len(state.history),
            frozenset(state.all_legal_moves()),
        )

    return _take
