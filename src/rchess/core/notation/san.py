"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

import re

from rchess.core.enums import MoveFlag, PieceType
from rchess.core.errors import IllegalMoveError
from rchess.core.move import Move
from rchess.core.move_generator import has_legal_move, is_in_check, legal_moves
from rchess.core.notation.fen import encode
from rchess.core.position import Position
from rchess.core.types import FILE_NAMES, RANK_NAMES, file_of, rank_of, square_name

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}

_SAN_RE = re.compile(
    r"^(?P<piece>[NBRQK])?"
    r"(?P<file>[a-h])?(?P<rank>[1-8])?"
    r"(?P<capture>x)?"
    r"(?P<to>[a-h][1-8])"
    r"(?:=?(?P<promo>[NBRQ]))?$"
)


def move_to_san(position: Position, move: Move) -> str:
    """SAN for *move*, which must be legal in *position* (the position before it)."""
    piece = position.board[move.from_sq]
    if piece is None:
        raise IllegalMoveError(move, encode(position), "no piece on origin square")

    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        san = "O-O"
    elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
        san = "O-O-O"
    else:
        capture = position.is_capture(move)
        if piece.piece_type == PieceType.PAWN:
            san = FILE_NAMES[file_of(move.from_sq)] if capture else ""
        else:
            san = _SAN_PIECE[piece.piece_type] + _disambiguation(position, move)
        if capture:
            san += "x"
        san += square_name(move.to_sq)
        if move.promotion is not None:
            san += "=" + _SAN_PIECE[move.promotion]

    after = position.play(move)
    if is_in_check(after):
        san += "+" if has_legal_move(after) else "#"
    return san


def _disambiguation(position: Position, move: Move) -> str:
    board = position.board
    piece = board[move.from_sq]
    rivals = [
        m.from_sq
        for m in legal_moves(position)
        if m.to_sq == move.to_sq
        and m.from_sq != move.from_sq
        and board[m.from_sq] == piece
    ]
    if not rivals:
        return ""
    if all(file_of(sq) != file_of(move.from_sq) for sq in rivals):
        return FILE_NAMES[file_of(move.from_sq)]
    if all(rank_of(sq) != rank_of(move.from_sq) for sq in rivals):
        return RANK_NAMES[rank_of(move.from_sq)]
    return square_name(move.from_sq)


def parse_san(position: Position, san: str) -> Move:
    """Resolve *san* to the unique matching legal move in *position*."""
    clean = san.strip().rstrip("+#!?")
    legal = legal_moves(position)

    castle_flag = {
        "O-O": MoveFlag.CASTLE_KINGSIDE,
        "0-0": MoveFlag.CASTLE_KINGSIDE,
        "O-O-O": MoveFlag.CASTLE_QUEENSIDE,
        "0-0-0": MoveFlag.CASTLE_QUEENSIDE,
    }.get(clean)
    if castle_flag is not None:
        for move in legal:
            if move.flag == castle_flag:
                return move
        raise IllegalMoveError(san, encode(position))

    match = _SAN_RE.match(clean)
    if match is None:
        raise ValueError(f"Invalid SAN: {san!r}")

    piece_type = _SAN_PIECE_REV.get(match["piece"] or "", PieceType.PAWN)
    to_name = match["to"]
    promotion = _SAN_PIECE_REV[match["promo"]] if match["promo"] else None
    from_file = FILE_NAMES.index(match["file"]) if match["file"] else None
    from_rank = RANK_NAMES.index(match["rank"]) if match["rank"] else None

    candidates: list[Move] = []
    for move in legal:
        piece = position.board[move.from_sq]
        if piece is None or piece.piece_type != piece_type:
            continue
        if square_name(move.to_sq) != to_name or move.promotion != promotion:
            continue
        if from_file is not None and file_of(move.from_sq) != from_file:
            continue
        if from_rank is not None and rank_of(move.from_sq) != from_rank:
            continue
        candidates.append(move)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise IllegalMoveError(san, encode(position))
    raise IllegalMoveError(
        san, encode(position), f"ambiguous between {', '.join(map(str, candidates))}"
    )
