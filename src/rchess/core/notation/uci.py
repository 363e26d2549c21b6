"""Long algebraic (UCI) move text."""

from __future__ import annotations

from rchess.core.errors import IllegalMoveError
from rchess.core.move import Move
from rchess.core.move_generator import legal_moves
from rchess.core.notation.fen import encode
from rchess.core.piece import piece_type_from_letter
from rchess.core.position import Position
from rchess.core.types import parse_square


def move_to_uci(move: Move) -> str:
    return move.uci


def parse_uci(position: Position, text: str) -> Move:
    """Resolve UCI text such as ``e2e4`` or ``e7e8q`` to a legal :class:`Move`.

    The move flag (double push, en passant, castling) is recovered from the
    legal move list. Malformed text raises :class:`ValueError`; well-formed
    text naming no legal move raises :class:`IllegalMoveError`.
    """
    if len(text) not in (4, 5):
        raise ValueError(f"Invalid UCI move: {text!r}")
    from_sq = parse_square(text[0:2])
    to_sq = parse_square(text[2:4])
    promotion = None
    if len(text) == 5:
        promotion = piece_type_from_letter(text[4])
        if promotion is None:
            raise ValueError(f"Invalid UCI promotion: {text!r}")

    for move in legal_moves(position):
        if (move.from_sq, move.to_sq, move.promotion) == (from_sq, to_sq, promotion):
            return move
    raise IllegalMoveError(text, encode(position))
