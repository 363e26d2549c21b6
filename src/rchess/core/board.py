"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from rchess.core.enums import Color, PieceType
from rchess.core.errors import InvariantViolation
from rchess.core.piece import Piece
from rchess.core.types import Square, is_on_board, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Immutable 64-square board.

    Boards are values: equal placements compare and hash equal, and every
    "modification" goes through :meth:`with_changes`, which returns a new
    board and leaves the receiver untouched.
    """

    __slots__ = ("_squares",)

    _squares: tuple[Piece | None, ...]

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * 64
        elif len(squares) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(squares)}")
        object.__setattr__(self, "_squares", tuple(squares))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Board is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Board is immutable")

    # -- Factories -----------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def from_pieces(cls, pieces: Mapping[Square, Piece]) -> Board:
        """Board holding exactly *pieces*; every other square is empty."""
        return cls().with_changes(pieces)

    @classmethod
    def initial(cls) -> Board:
        """Standard starting placement."""
        pieces: dict[Square, Piece] = {}
        for file, ptype in enumerate(_BACK_RANK):
            pieces[make_square(file, 0)] = Piece(Color.WHITE, ptype)
            pieces[make_square(file, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            pieces[make_square(file, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            pieces[make_square(file, 7)] = Piece(Color.BLACK, ptype)
        return cls.from_pieces(pieces)

    # -- Element access ------------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        if not is_on_board(sq):
            raise IndexError(f"Square index out of range: {sq!r}")
        return self._squares[sq]

    @property
    def squares(self) -> tuple[Piece | None, ...]:
        """Raw 64-tuple, indexed by square. Hot loops read this directly."""
        return self._squares

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    def with_changes(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board equal to this one with *changes* applied."""
        squares = list(self._squares)
        for sq, piece in changes.items():
            if not is_on_board(sq):
                raise IndexError(f"Square index out of range: {sq!r}")
            squares[sq] = piece
        return Board(tuple(squares))

    # -- Query helpers -------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """``(square, piece)`` pairs for every occupied square, a1 first."""
        for sq, piece in enumerate(self._squares):
            if piece is not None:
                yield sq, piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares holding *color*'s *piece_type*."""
        wanted = Piece(color, piece_type)
        return [sq for sq, piece in enumerate(self._squares) if piece == wanted]

    def all_pieces(self, color: Color) -> list[Square]:
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def piece_count(self) -> int:
        return sum(1 for piece in self._squares if piece is not None)

    def king_squares(self, color: Color) -> list[Square]:
        """Every square holding a *color* king (malformed boards may have 0 or 2+)."""
        return self.pieces(color, PieceType.KING)

    def king_square(self, color: Color) -> Square:
        """The single king square for *color*."""
        kings = self.king_squares(color)
        if len(kings) != 1:
            raise InvariantViolation(
                f"Expected exactly one {color.name} king, found {len(kings)}"
            )
        return kings[0]

    # -- Dunder helpers ------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(self._squares)

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            cells = []
            for file in range(8):
                piece = self._squares[make_square(file, rank)]
                cells.append(str(piece) if piece else ".")
            rows.append(f"{rank + 1} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
