"""Core domain layer: pure chess rules over immutable values, no I/O.

Quick start::

    from rchess.core import apply_move, decode_fen, game_status, legal_moves

    pos = decode_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
    for move in legal_moves(pos):
        print(move, apply_move(pos, move).en_passant)
    print(game_status(pos))
"""

from rchess.core.board import Board
from rchess.core.enums import CastlingRights, Color, MoveFlag, Outcome, PieceType
from rchess.core.errors import (
    ChessError,
    DecodeError,
    IllegalMoveError,
    InvariantViolation,
)
from rchess.core.move import Move
from rchess.core.move_generator import (
    is_in_check,
    is_square_attacked,
    legal_moves,
    pseudo_legal_moves,
)
from rchess.core.notation import (
    STARTING_FEN,
    decode_fen,
    encode_fen,
    move_to_san,
    move_to_uci,
    parse_san,
    parse_uci,
)
from rchess.core.perft import divide, perft
from rchess.core.piece import Piece
from rchess.core.position import Position
from rchess.core.rules import (
    GameStatus,
    apply_move,
    game_status,
    is_check,
    is_checkmate,
    is_fifty_move_draw,
    is_insufficient_material,
    is_stalemate,
)
from rchess.core.types import (
    OFF_BOARD,
    Square,
    file_of,
    make_square,
    offset_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "MoveFlag",
    "Outcome",
    "PieceType",
    # Errors
    "ChessError",
    "DecodeError",
    "IllegalMoveError",
    "InvariantViolation",
    # Squares
    "OFF_BOARD",
    "Square",
    "file_of",
    "make_square",
    "offset_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Values
    "Board",
    "GameStatus",
    "Move",
    "Piece",
    "Position",
    # Move generation
    "is_in_check",
    "is_square_attacked",
    "legal_moves",
    "pseudo_legal_moves",
    # Rules
    "apply_move",
    "game_status",
    "is_check",
    "is_checkmate",
    "is_fifty_move_draw",
    "is_insufficient_material",
    "is_stalemate",
    # Notation
    "STARTING_FEN",
    "decode_fen",
    "encode_fen",
    "move_to_san",
    "move_to_uci",
    "parse_san",
    "parse_uci",
    # Verification
    "divide",
    "perft",
]
