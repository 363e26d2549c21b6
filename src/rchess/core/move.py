"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from rchess.core.enums import MoveFlag, PieceType
from rchess.core.piece import piece_letter
from rchess.core.types import Square, square_name

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Move:
    """A single move from *from_sq* to *to_sq*.

    ``flag`` selects the special-case logic used when the move is applied.
    Castling is encoded as the king's two-square step.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    def __post_init__(self) -> None:
        if self.promotion is not None and self.promotion not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {self.promotion.name}")

    def __str__(self) -> str:
        text = square_name(self.from_sq) + square_name(self.to_sq)
        if self.promotion is not None:
            text += piece_letter(self.promotion)
        return text

    @property
    def uci(self) -> str:
        """Long algebraic text, e.g. ``e2e4`` or ``a7a8q``."""
        return str(self)

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)
