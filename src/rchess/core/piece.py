"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from rchess.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """A colored piece. Equal pieces are interchangeable."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN letter: uppercase for white, lowercase for black."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Parse a FEN letter, e.g. ``'N'`` -> white knight."""
        ptype = _TYPES_BY_LETTER.get(char.lower()) if len(char) == 1 else None
        if ptype is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)


def piece_letter(piece_type: PieceType) -> str:
    """Lowercase letter for *piece_type* (used by UCI promotion suffixes)."""
    return _LETTERS[piece_type]


def piece_type_from_letter(letter: str) -> PieceType | None:
    return _TYPES_BY_LETTER.get(letter.lower())
