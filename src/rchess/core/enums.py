"""Enumerations shared by the rules core."""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color. Doubles as an index into per-color tables."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def fen_char(self) -> str:
        return "w" if self is Color.WHITE else "b"

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Piece kinds, ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntEnum):
    """Tag telling move application which special case to run.

    Promotions are ``NORMAL`` moves that carry a promotion piece type.
    """

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4


class CastlingRights(IntFlag):
    """Bitmask of the four independent castling rights."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class Outcome(Enum):
    """Classification reported by :func:`rchess.core.rules.game_status`."""

    IN_PROGRESS = "in_progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW_BY_FIFTY_MOVE = "draw_by_fifty_move"
    DRAW_BY_INSUFFICIENT_MATERIAL = "draw_by_insufficient_material"
    # Needs game history, so only GameState reports it.
    DRAW_BY_REPETITION = "draw_by_repetition"

    @property
    def is_over(self) -> bool:
        return self is not Outcome.IN_PROGRESS

    @property
    def is_draw(self) -> bool:
        return self not in (Outcome.IN_PROGRESS, Outcome.CHECKMATE)
