"""FEN decoding and encoding."""

from __future__ import annotations

import logging
from typing import Final

from rchess.core.board import Board
from rchess.core.enums import CastlingRights, Color
from rchess.core.errors import DecodeError
from rchess.core.piece import Piece
from rchess.core.position import Position
from rchess.core.types import Square, make_square, parse_square, rank_of, square_name

_LOGGER = logging.getLogger(__name__)

STARTING_FEN: Final = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_FIELD_NAMES: Final = (
    "placement",
    "side",
    "castling",
    "en_passant",
    "halfmove_clock",
    "fullmove_number",
)

_CASTLING_CHARS: Final = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def _fail(field: str, value: str, reason: str = "") -> DecodeError:
    _LOGGER.debug("FEN %s rejected: %r %s", field, value, reason)
    return DecodeError(field, value, reason)


# -- Field decoders ------------------------------------------------------------


def _decode_placement(text: str) -> Board:
    ranks = text.split("/")
    if len(ranks) != 8:
        raise _fail("placement", text, f"expected 8 ranks, got {len(ranks)}")

    pieces: dict[Square, Piece] = {}
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch in "12345678":
                file += int(ch)
            else:
                try:
                    piece = Piece.from_char(ch)
                except ValueError:
                    raise _fail("placement", text, f"bad character {ch!r}") from None
                if file < 8:
                    pieces[make_square(file, rank)] = piece
                file += 1
            if file > 8:
                break
        if file != 8:
            raise _fail(
                "placement", text, f"rank {rank + 1} spans {file} files, expected 8"
            )
    return Board.from_pieces(pieces)


def _decode_side(text: str) -> Color:
    if text == "w":
        return Color.WHITE
    if text == "b":
        return Color.BLACK
    raise _fail("side", text, "expected 'w' or 'b'")


def _decode_castling(text: str) -> CastlingRights:
    if text == "-":
        return CastlingRights.NONE
    rights = CastlingRights.NONE
    lookup = dict(_CASTLING_CHARS)
    for ch in text:
        right = lookup.get(ch)
        if right is None:
            raise _fail("castling", text, f"bad character {ch!r}")
        if rights & right:
            raise _fail("castling", text, f"duplicate {ch!r}")
        rights |= right
    return rights


def _decode_en_passant(text: str, side: Color) -> Square | None:
    if text == "-":
        return None
    try:
        sq = parse_square(text)
    except ValueError:
        raise _fail("en_passant", text, "not an algebraic square") from None
    expected_rank = 5 if side == Color.WHITE else 2
    if rank_of(sq) != expected_rank:
        raise _fail(
            "en_passant", text, f"must be on rank {expected_rank + 1} for {side}"
        )
    return sq


def _decode_counter(field: str, text: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise _fail(field, text, "expected a non-negative integer")
    return int(text)


# -- Public API -----------------------------------------------------------------


def decode(text: str) -> Position:
    """Parse a six-field FEN string into a :class:`Position`.

    Raises :class:`DecodeError` naming the first invalid field. King counts
    are not checked here; :func:`rchess.core.rules.game_status` does that.
    """
    fields = text.split()
    if len(fields) != len(_FIELD_NAMES):
        raise _fail("fen", text, f"expected 6 fields, got {len(fields)}")

    placement, side_text, castling_text, ep_text, half_text, full_text = fields
    board = _decode_placement(placement)
    side = _decode_side(side_text)
    return Position(
        board=board,
        side_to_move=side,
        castling=_decode_castling(castling_text),
        en_passant=_decode_en_passant(ep_text, side),
        halfmove_clock=_decode_counter("halfmove_clock", half_text),
        fullmove_number=_decode_counter("fullmove_number", full_text),
    )


def encode_placement(board: Board) -> str:
    """Placement field of *board*, with each empty run collapsed to one digit."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        row = ""
        empty = 0
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def encode(position: Position) -> str:
    """Serialise *position* to FEN. ``decode(encode(p)) == p`` always holds."""
    castling = "".join(ch for ch, right in _CASTLING_CHARS if position.castling & right)
    ep = "-" if position.en_passant is None else square_name(position.en_passant)
    return " ".join(
        (
            encode_placement(position.board),
            position.side_to_move.fen_char,
            castling or "-",
            ep,
            str(position.halfmove_clock),
            str(position.fullmove_number),
        )
    )

