"""Position - complete, immutable game state snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from rchess.core.board import Board
from rchess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from rchess.core.move import Move
from rchess.core.piece import Piece
from rchess.core.types import (
    A1,
    A8,
    D1,
    D8,
    E1,
    E8,
    F1,
    F8,
    H1,
    H8,
    Square,
    file_of,
    make_square,
    rank_of,
)

# Castling right lost when a piece leaves or lands on each home square.
_RIGHTS_LOST_AT: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    E1: CastlingRights.WHITE_BOTH,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
    E8: CastlingRights.BLACK_BOTH,
}

# (rook from, rook to) per castle flag and color.
_CASTLE_ROOK_SLIDES: dict[tuple[MoveFlag, Color], tuple[Square, Square]] = {
    (MoveFlag.CASTLE_KINGSIDE, Color.WHITE): (H1, F1),
    (MoveFlag.CASTLE_QUEENSIDE, Color.WHITE): (A1, D1),
    (MoveFlag.CASTLE_KINGSIDE, Color.BLACK): (H8, F8),
    (MoveFlag.CASTLE_QUEENSIDE, Color.BLACK): (A8, D8),
}


def en_passant_victim(move: Move) -> Square:
    """Square of the pawn removed by an en-passant capture."""
    return make_square(file_of(move.to_sq), rank_of(move.from_sq))


def board_after_move(board: Board, move: Move) -> Board:
    """Piece placement after *move*, with no legality checking."""
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on origin square of {move}")

    placed = piece
    if move.promotion is not None:
        placed = Piece(piece.color, move.promotion)

    changes: dict[Square, Piece | None] = {move.from_sq: None, move.to_sq: placed}
    if move.flag == MoveFlag.EN_PASSANT:
        changes[en_passant_victim(move)] = None
    elif move.is_castle:
        rook_from, rook_to = _CASTLE_ROOK_SLIDES[(move.flag, piece.color)]
        changes[rook_to] = board[rook_from]
        changes[rook_from] = None
    return board.with_changes(changes)


@dataclass(frozen=True, slots=True)
class Position:
    """Board plus everything else needed to judge or resume play.

    Positions never change after construction. :meth:`play` and
    :func:`rchess.core.rules.apply_move` return successors instead.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def initial(cls) -> Position:
        return cls()

    def piece_at(self, sq: Square) -> Piece | None:
        return self.board[sq]

    def is_capture(self, move: Move) -> bool:
        return move.flag == MoveFlag.EN_PASSANT or self.board[move.to_sq] is not None

    def play(self, move: Move) -> Position:
        """Successor position after *move*.

        The move is trusted: no legality check happens here. Callers that
        accept outside input go through :func:`rchess.core.rules.apply_move`.
        """
        piece = self.board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on origin square of {move}")

        castling = self.castling
        for sq in (move.from_sq, move.to_sq):
            lost = _RIGHTS_LOST_AT.get(sq)
            if lost is not None:
                castling &= ~lost

        en_passant: Square | None = None
        if move.flag == MoveFlag.DOUBLE_PAWN:
            en_passant = (move.from_sq + move.to_sq) // 2

        if piece.piece_type == PieceType.PAWN or self.is_capture(move):
            halfmove_clock = 0
        else:
            halfmove_clock = self.halfmove_clock + 1

        fullmove_number = self.fullmove_number
        if self.side_to_move == Color.BLACK:
            fullmove_number += 1

        return replace(
            self,
            board=board_after_move(self.board, move),
            side_to_move=self.side_to_move.opposite,
            castling=castling,
            en_passant=en_passant,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )

    def repetition_key(self) -> tuple[Board, Color, CastlingRights, Square | None]:
        """Identity of the position for repetition counting (clocks excluded)."""
        return (self.board, self.side_to_move, self.castling, self.en_passant)
