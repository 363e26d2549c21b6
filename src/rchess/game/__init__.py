"""Game layer: move history on top of the pure rules core.

Quick start::

    from rchess.game import GameState

    game = GameState()
    game.push_san("e4")
    game.push_uci("e7e5")
    game.undo()
"""

from rchess.game.state import REPETITION_DRAW_COUNT, GameState, MoveRecord

__all__ = [
    "GameState",
    "MoveRecord",
    "REPETITION_DRAW_COUNT",
]
