"""Game layer — the stateful engine callers drive.

Quick start::

    from gambit.game import GameState

    game = GameState()
    game.move("e2", "e4")
    print(game.history[-1].notation)  # e2-e4
    game.undo()
"""

from gambit.game.settings import STARTING_POSITION, GameSettings
from gambit.game.state import GameEvents, GameState, MoveRecord

__all__ = [
    "GameEvents",
    "GameSettings",
    "GameState",
    "MoveRecord",
    "STARTING_POSITION",
]
