"""Notation package: FEN, UCI and SAN text formats."""

from rchess.core.notation.fen import STARTING_FEN
from rchess.core.notation.fen import decode as decode_fen
from rchess.core.notation.fen import encode as encode_fen
from rchess.core.notation.san import move_to_san, parse_san
from rchess.core.notation.uci import move_to_uci, parse_uci

__all__ = [
    "STARTING_FEN",
    "decode_fen",
    "encode_fen",
    "move_to_san",
    "parse_san",
    "move_to_uci",
    "parse_uci",
]
