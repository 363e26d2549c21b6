"""Tests for Position successors: rights, en passant, clocks."""

import dataclasses

import pytest

from rchess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from rchess.core.move import Move
from rchess.core.notation.fen import decode, encode
from rchess.core.piece import Piece
from rchess.core.position import Position
from rchess.core.types import (
    A1, A8, C1, D1, D5, D6, D7, E1, E2, E4, E5, F1, G1, H1, H8,
    parse_square,
)

CASTLE_READY = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1"


class TestImmutability:
    def test_fields_are_frozen(self) -> None:
        pos = Position.initial()
        with pytest.raises(dataclasses.FrozenInstanceError):
            pos.side_to_move = Color.BLACK  # type: ignore[misc]

    def test_play_leaves_original_untouched(self, start: Position) -> None:
        fen_before = encode(start)
        after = start.play(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert encode(start) == fen_before
        assert after is not start
        assert after.board is not start.board

    def test_initial_matches_starting_fen(self, start: Position) -> None:
        assert Position.initial() == start
        assert hash(Position.initial()) == hash(start)

    def test_play_from_empty_square_raises(self, start: Position) -> None:
        with pytest.raises(ValueError, match="No piece"):
            start.play(Move(E4, parse_square("e5")))


class TestSideAndClocks:
    def test_side_switches(self, start: Position) -> None:
        after = start.play(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert after.side_to_move == Color.BLACK

    def test_fullmove_increments_after_black(self, start: Position) -> None:
        after_white = start.play(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert after_white.fullmove_number == 1
        after_black = after_white.play(Move(D7, D5, MoveFlag.DOUBLE_PAWN))
        assert after_black.fullmove_number == 2

    def test_halfmove_increments_on_quiet_piece_move(self, start: Position) -> None:
        after = start.play(Move(G1, parse_square("f3")))
        assert after.halfmove_clock == 1

    def test_halfmove_resets_on_pawn_move(self) -> None:
        pos = decode("4k3/8/8/8/8/8/4P3/4K1N1 w - - 12 30")
        assert pos.play(Move(E2, parse_square("e3"))).halfmove_clock == 0

    def test_halfmove_resets_on_capture(self) -> None:
        pos = decode("4k3/8/8/3p4/8/8/8/3QK3 w - - 12 30")
        assert pos.play(Move(D1, D5)).halfmove_clock == 0


class TestEnPassantTarget:
    def test_set_by_double_push(self, start: Position) -> None:
        after = start.play(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert after.en_passant == parse_square("e3")

    def test_replaced_by_next_double_push(self, start: Position) -> None:
        pos = start.play(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        pos = pos.play(Move(D7, D5, MoveFlag.DOUBLE_PAWN))
        assert pos.en_passant == D6

    def test_cleared_by_any_other_move(self, start: Position) -> None:
        pos = start.play(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        pos = pos.play(Move(parse_square("g8"), parse_square("f6")))
        assert pos.en_passant is None

    def test_en_passant_removes_victim(self) -> None:
        pos = decode("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2")
        after = pos.play(Move(E5, D6, MoveFlag.EN_PASSANT))
        assert after.board[D6] == Piece(Color.WHITE, PieceType.PAWN)
        assert after.board[D5] is None
        assert after.board[E5] is None


class TestCastlingRights:
    def test_king_move_clears_both(self) -> None:
        pos = decode(CASTLE_READY).play(Move(E1, D1))
        assert pos.castling == CastlingRights.BLACK_BOTH

    def test_kingside_rook_move(self) -> None:
        pos = decode(CASTLE_READY).play(Move(H1, G1))
        assert pos.castling == CastlingRights.ALL & ~CastlingRights.WHITE_KINGSIDE

    def test_queenside_rook_move(self) -> None:
        pos = decode(CASTLE_READY).play(Move(A1, parse_square("b1")))
        assert pos.castling == CastlingRights.ALL & ~CastlingRights.WHITE_QUEENSIDE

    def test_rook_captured_on_corner(self) -> None:
        pos = decode("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1").play(Move(A1, A8))
        assert pos.castling == CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_KINGSIDE

    def test_castle_kingside_moves_rook(self) -> None:
        pos = decode(CASTLE_READY).play(Move(E1, G1, MoveFlag.CASTLE_KINGSIDE))
        assert pos.board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board[H1] is None
        assert pos.castling == CastlingRights.BLACK_BOTH

    def test_castle_queenside_moves_rook(self) -> None:
        pos = decode(CASTLE_READY).play(Move(E1, C1, MoveFlag.CASTLE_QUEENSIDE))
        assert pos.board[C1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[D1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board[A1] is None

    def test_black_rook_move(self) -> None:
        pos = decode("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1").play(
            Move(H8, parse_square("h5"))
        )
        assert pos.castling == CastlingRights.ALL & ~CastlingRights.BLACK_KINGSIDE


class TestPromotion:
    def test_promotion_replaces_pawn(self) -> None:
        pos = decode("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        after = pos.play(Move(parse_square("e7"), parse_square("e8"), promotion=PieceType.KNIGHT))
        assert after.board[parse_square("e8")] == Piece(Color.WHITE, PieceType.KNIGHT)
        assert after.board[parse_square("e7")] is None

    def test_cannot_promote_to_king(self) -> None:
        with pytest.raises(ValueError, match="Cannot promote"):
            Move(parse_square("e7"), parse_square("e8"), promotion=PieceType.KING)
