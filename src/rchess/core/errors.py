"""Exception taxonomy for the rules core.

``DecodeError`` and ``IllegalMoveError`` describe bad caller input and are
recoverable: reject the input and ask again. ``InvariantViolation`` means a
position reached a state legal play can never produce (wrong king count,
for instance) and points at a bug upstream.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rchess.core.types import is_on_board

if TYPE_CHECKING:
    from rchess.core.move import Move


class ChessError(Exception):
    """Base class for every error raised by :mod:`rchess`."""


class DecodeError(ChessError, ValueError):
    """A FEN field failed validation."""

    def __init__(self, field: str, value: str, reason: str = "") -> None:
        self.field = field
        self.value = value
        self.reason = reason
        message = f"Invalid FEN {field}: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class IllegalMoveError(ChessError, ValueError):
    """A move is not in the legal move list of the position it was applied to."""

    def __init__(self, move: Move | str, fen: str, reason: str = "") -> None:
        self.move = move
        self.fen = fen
        message = f"Illegal move {_move_text(move)} in position {fen!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InvariantViolation(ChessError, RuntimeError):
    """Internal consistency check failed."""


def _move_text(move: Move | str) -> str:
    if isinstance(move, str):
        return move
    if is_on_board(move.from_sq) and is_on_board(move.to_sq):
        return str(move)
    return repr(move)
