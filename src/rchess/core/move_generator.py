"""Pseudo-legal and legal move generation, plus attack detection."""

from __future__ import annotations

from collections.abc import Iterator

from rchess.core.board import Board
from rchess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from rchess.core.move import PROMOTION_TYPES, Move
from rchess.core.piece import Piece
from rchess.core.position import Position, board_after_move, en_passant_victim
from rchess.core.types import (
    B1,
    B8,
    C1,
    C8,
    D1,
    D8,
    E1,
    E8,
    F1,
    F8,
    G1,
    G8,
    OFF_BOARD,
    Square,
    offset_square,
    rank_of,
)

Offsets = tuple[tuple[int, int], ...]

KNIGHT_OFFSETS: Offsets = (
    (-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1),
)  # fmt: skip
KING_OFFSETS: Offsets = (
    (-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1),
)  # fmt: skip
BISHOP_DIRS: Offsets = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: Offsets = ((-1, 0), (1, 0), (0, -1), (0, 1))


# -- Precomputed lookup tables ---------------------------------------------


def _step_table(offsets: Offsets) -> tuple[tuple[Square, ...], ...]:
    """For each square, the on-board squares one offset away."""
    table = []
    for sq in range(64):
        targets = (offset_square(sq, df, dr) for df, dr in offsets)
        table.append(tuple(t for t in targets if t != OFF_BOARD))
    return tuple(table)


def _ray_table(directions: Offsets) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """For each square, one ray per direction running out to the board edge."""
    table = []
    for sq in range(64):
        rays = []
        for df, dr in directions:
            ray: list[Square] = []
            nxt = offset_square(sq, df, dr)
            while nxt != OFF_BOARD:
                ray.append(nxt)
                nxt = offset_square(nxt, df, dr)
            rays.append(tuple(ray))
        table.append(tuple(rays))
    return tuple(table)


def _pawn_attacker_table(color: Color) -> tuple[tuple[Square, ...], ...]:
    """For each square, where a *color* pawn must stand to attack it."""
    back = -1 if color == Color.WHITE else 1
    return _step_table(((-1, back), (1, back)))


_KNIGHT_TARGETS = _step_table(KNIGHT_OFFSETS)
_KING_TARGETS = _step_table(KING_OFFSETS)
_BISHOP_RAYS = _ray_table(BISHOP_DIRS)
_ROOK_RAYS = _ray_table(ROOK_DIRS)
_QUEEN_RAYS = tuple(b + r for b, r in zip(_BISHOP_RAYS, _ROOK_RAYS))
_PAWN_ATTACKERS = (
    _pawn_attacker_table(Color.WHITE),
    _pawn_attacker_table(Color.BLACK),
)

_SLIDER_RAYS = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}

# Per color: (right, flag, king home, king target, rook home, must be empty, must be safe)
_CastleSpec = tuple[
    CastlingRights, MoveFlag, Square, Square, Square, tuple[Square, ...], tuple[Square, ...]
]
_CASTLES: dict[Color, tuple[_CastleSpec, ...]] = {
    Color.WHITE: (
        (CastlingRights.WHITE_KINGSIDE, MoveFlag.CASTLE_KINGSIDE, E1, G1, E1 + 3,
         (F1, G1), (F1, G1)),
        (CastlingRights.WHITE_QUEENSIDE, MoveFlag.CASTLE_QUEENSIDE, E1, C1, E1 - 4,
         (D1, C1, B1), (D1, C1)),
    ),
    Color.BLACK: (
        (CastlingRights.BLACK_KINGSIDE, MoveFlag.CASTLE_KINGSIDE, E8, G8, E8 + 3,
         (F8, G8), (F8, G8)),
        (CastlingRights.BLACK_QUEENSIDE, MoveFlag.CASTLE_QUEENSIDE, E8, C8, E8 - 4,
         (D8, C8, B8), (D8, C8)),
    ),
}  # fmt: skip


# -- Attack detection --------------------------------------------------------


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Any occupied square, kings included, blocks a sliding ray.
    """
    squares = board.squares

    pawn = Piece(by_color, PieceType.PAWN)
    if any(squares[src] == pawn for src in _PAWN_ATTACKERS[by_color][sq]):
        return True

    knight = Piece(by_color, PieceType.KNIGHT)
    if any(squares[src] == knight for src in _KNIGHT_TARGETS[sq]):
        return True

    king = Piece(by_color, PieceType.KING)
    if any(squares[src] == king for src in _KING_TARGETS[sq]):
        return True

    for rays, kinds in (
        (_BISHOP_RAYS[sq], (PieceType.BISHOP, PieceType.QUEEN)),
        (_ROOK_RAYS[sq], (PieceType.ROOK, PieceType.QUEEN)),
    ):
        for ray in rays:
            for src in ray:
                piece = squares[src]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in kinds:
                    return True
                break

    return False


def is_in_check(position: Position, color: Color | None = None) -> bool:
    """Is *color*'s king (default: side to move) attacked?"""
    if color is None:
        color = position.side_to_move
    king_sq = position.board.king_square(color)
    return is_square_attacked(position.board, king_sq, color.opposite)


# -- Generation --------------------------------------------------------------


def pseudo_legal_moves(position: Position) -> list[Move]:
    """Moves obeying piece movement and occupancy, ignoring own-king safety."""
    moves: list[Move] = []
    color = position.side_to_move
    squares = position.board.squares

    for sq, piece in enumerate(squares):
        if piece is None or piece.color != color:
            continue
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            _gen_pawn(position, sq, color, moves)
        elif ptype == PieceType.KNIGHT:
            _gen_steps(squares, sq, color, _KNIGHT_TARGETS[sq], moves)
        elif ptype == PieceType.KING:
            _gen_steps(squares, sq, color, _KING_TARGETS[sq], moves)
            _gen_castling(position, sq, color, moves)
        else:
            _gen_sliding(squares, sq, color, _SLIDER_RAYS[ptype][sq], moves)
    return moves


def legal_moves(position: Position) -> list[Move]:
    """Pseudo-legal moves that do not leave the mover's king attacked."""
    return list(_iter_legal(position))


def has_legal_move(position: Position) -> bool:
    """Like ``bool(legal_moves(...))`` but stops at the first legal move."""
    return next(_iter_legal(position), None) is not None


def _iter_legal(position: Position) -> Iterator[Move]:
    color = position.side_to_move
    opponent = color.opposite
    board = position.board
    own_king = board.king_square(color)

    for move in pseudo_legal_moves(position):
        after = board_after_move(board, move)
        king_sq = move.to_sq if move.from_sq == own_king else own_king
        if not is_square_attacked(after, king_sq, opponent):
            yield move


# -- Piece-specific generators (private) -------------------------------------


def _gen_steps(
    squares: tuple[Piece | None, ...],
    sq: Square,
    color: Color,
    targets: tuple[Square, ...],
    moves: list[Move],
) -> None:
    for to_sq in targets:
        target = squares[to_sq]
        if target is None or target.color != color:
            moves.append(Move(sq, to_sq))


def _gen_sliding(
    squares: tuple[Piece | None, ...],
    sq: Square,
    color: Color,
    rays: tuple[tuple[Square, ...], ...],
    moves: list[Move],
) -> None:
    for ray in rays:
        for to_sq in ray:
            target = squares[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
                continue
            if target.color != color:
                moves.append(Move(sq, to_sq))
            break


def _add_pawn_move(sq: Square, to_sq: Square, moves: list[Move]) -> None:
    if rank_of(to_sq) in (0, 7):
        for ptype in PROMOTION_TYPES:
            moves.append(Move(sq, to_sq, promotion=ptype))
    else:
        moves.append(Move(sq, to_sq))


def _gen_pawn(position: Position, sq: Square, color: Color, moves: list[Move]) -> None:
    squares = position.board.squares
    forward = 1 if color == Color.WHITE else -1
    start_rank = 1 if color == Color.WHITE else 6

    one_step = offset_square(sq, 0, forward)
    if one_step != OFF_BOARD and squares[one_step] is None:
        _add_pawn_move(sq, one_step, moves)
        if rank_of(sq) == start_rank:
            two_step = offset_square(one_step, 0, forward)
            if squares[two_step] is None:
                moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))

    for df in (-1, 1):
        cap_sq = offset_square(sq, df, forward)
        if cap_sq == OFF_BOARD:
            continue
        target = squares[cap_sq]
        if target is not None:
            if target.color != color:
                _add_pawn_move(sq, cap_sq, moves)
        elif cap_sq == position.en_passant:
            ep = Move(sq, cap_sq, MoveFlag.EN_PASSANT)
            # The pawn that skipped over the target must still stand behind it.
            if squares[en_passant_victim(ep)] == Piece(color.opposite, PieceType.PAWN):
                moves.append(ep)


def _gen_castling(position: Position, king_sq: Square, color: Color, moves: list[Move]) -> None:
    if not position.castling:
        return

    board = position.board
    squares = board.squares
    opponent = color.opposite
    king_checked: bool | None = None
    rook = Piece(color, PieceType.ROOK)

    for right, flag, home, target, rook_home, between, path in _CASTLES[color]:
        if not position.castling & right or king_sq != home or squares[rook_home] != rook:
            continue
        if any(squares[s] is not None for s in between):
            continue
        if king_checked is None:
            king_checked = is_square_attacked(board, king_sq, opponent)
        if king_checked:
            return
        if any(is_square_attacked(board, s, opponent) for s in path):
            continue
        moves.append(Move(king_sq, target, flag))
