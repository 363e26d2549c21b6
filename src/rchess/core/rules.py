"""Rules engine: validated move application and game status."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from rchess.core.enums import Color, Outcome, PieceType
from rchess.core.errors import IllegalMoveError, InvariantViolation
from rchess.core.move import Move
from rchess.core.move_generator import has_legal_move, is_in_check, legal_moves
from rchess.core.notation.fen import encode
from rchess.core.position import Position
from rchess.core.types import is_light_square

_LOGGER = logging.getLogger(__name__)

FIFTY_MOVE_HALFMOVES: Final = 100  # 50 full moves by each side

_MINOR_PIECES = (PieceType.KNIGHT, PieceType.BISHOP)


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Outcome of a position, plus the winning side for checkmate."""

    outcome: Outcome
    winner: Color | None = None

    @property
    def loser(self) -> Color | None:
        """The checkmated side (always the side to move), if any."""
        return None if self.winner is None else self.winner.opposite

    @property
    def is_over(self) -> bool:
        return self.outcome.is_over

    def __str__(self) -> str:
        if self.outcome is Outcome.CHECKMATE:
            return f"checkmate, {self.winner} wins"
        return self.outcome.value.replace("_", " ")


IN_PROGRESS: Final = GameStatus(Outcome.IN_PROGRESS)


def apply_move(position: Position, move: Move) -> Position:
    """Play a legal *move* and return the successor position.

    Raises :class:`IllegalMoveError` if *move* is not in
    ``legal_moves(position)``; *position* itself is never modified.
    Raises :class:`InvariantViolation` if either side lacks exactly one king.
    """
    check_kings(position)
    if move not in legal_moves(position):
        fen = encode(position)
        _LOGGER.debug("Rejected move %r in %s", move, fen)
        raise IllegalMoveError(move, fen)
    return position.play(move)


# -- Predicates --------------------------------------------------------------


def is_check(position: Position) -> bool:
    return is_in_check(position)


def is_checkmate(position: Position) -> bool:
    return is_in_check(position) and not has_legal_move(position)


def is_stalemate(position: Position) -> bool:
    return not is_in_check(position) and not has_legal_move(position)


def is_fifty_move_draw(position: Position) -> bool:
    return position.halfmove_clock >= FIFTY_MOVE_HALFMOVES


def is_insufficient_material(position: Position) -> bool:
    """Neither side can ever mate: K v K, K+minor v K, K+B v K+B on one square color.

    Errs towards ``False``; a position reported here is always a dead draw.
    """
    others = [
        (sq, piece)
        for sq, piece in position.board.occupied()
        if piece.piece_type != PieceType.KING
    ]
    if not others:
        return True
    if len(others) == 1:
        return others[0][1].piece_type in _MINOR_PIECES
    if len(others) == 2:
        (sq_a, a), (sq_b, b) = others
        return (
            a.piece_type == PieceType.BISHOP
            and b.piece_type == PieceType.BISHOP
            and a.color != b.color
            and is_light_square(sq_a) == is_light_square(sq_b)
        )
    return False


# -- Status ------------------------------------------------------------------


def check_kings(position: Position) -> None:
    """Raise :class:`InvariantViolation` unless each side has exactly one king."""
    board = position.board
    for color in Color:
        count = len(board.king_squares(color))
        if count != 1:
            _LOGGER.warning("Position has %d %s kings", count, color)
            raise InvariantViolation(
                f"Expected exactly one {color.name} king, found {count}"
            )


def game_status(position: Position) -> GameStatus:
    """Classify *position*.

    Checkmate and stalemate take precedence over the fifty-move rule,
    which in turn is reported before insufficient material.
    """
    check_kings(position)

    if not has_legal_move(position):
        if is_in_check(position):
            return GameStatus(Outcome.CHECKMATE, position.side_to_move.opposite)
        return GameStatus(Outcome.STALEMATE)

    if is_fifty_move_draw(position):
        return GameStatus(Outcome.DRAW_BY_FIFTY_MOVE)

    if is_insufficient_material(position):
        return GameStatus(Outcome.DRAW_BY_INSUFFICIENT_MATERIAL)

    return IN_PROGRESS
