"""Tests for the rules engine: move application and game status."""

from collections.abc import Callable

import pytest

from rchess import core
from rchess.core.enums import CastlingRights, Color, MoveFlag, Outcome, PieceType
from rchess.core.errors import IllegalMoveError, InvariantViolation
from rchess.core.move import Move
from rchess.core.move_generator import is_in_check, legal_moves
from rchess.core.notation.fen import decode, encode
from rchess.core.piece import Piece
from rchess.core.position import Position
from rchess.core.rules import (
    GameStatus,
    apply_move,
    game_status,
    is_checkmate,
    is_fifty_move_draw,
    is_insufficient_material,
    is_stalemate,
)
from rchess.core.types import D5, D6, E1, E2, E4, E5, OFF_BOARD, parse_square

PlayFn = Callable[..., Position]

FOOLS_MATE_THREAT = "rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2"
FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class TestApplyMove:
    def test_returns_successor(self, start: Position) -> None:
        after = apply_move(start, Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert after.board[E4] == Piece(Color.WHITE, PieceType.PAWN)
        assert after.side_to_move == Color.BLACK

    def test_illegal_move_rejected(self, start: Position) -> None:
        fen_before = encode(start)
        with pytest.raises(IllegalMoveError) as excinfo:
            apply_move(start, Move(E2, parse_square("e5")))
        assert encode(start) == fen_before
        assert excinfo.value.fen == fen_before

    def test_wrong_flag_rejected(self, start: Position) -> None:
        with pytest.raises(IllegalMoveError):
            apply_move(start, Move(E2, E4))

    def test_opponent_piece_rejected(self, start: Position) -> None:
        with pytest.raises(IllegalMoveError):
            apply_move(start, Move(parse_square("e7"), parse_square("e5"), MoveFlag.DOUBLE_PAWN))

    def test_move_into_check_rejected(self) -> None:
        pos = decode("4k3/8/8/8/8/8/3r4/4K3 w - - 0 1")
        with pytest.raises(IllegalMoveError):
            apply_move(pos, Move(E1, parse_square("e2")))

    def test_illegal_move_error_is_value_error(self, start: Position) -> None:
        with pytest.raises(ValueError, match="Illegal move e2e5"):
            apply_move(start, Move(E2, parse_square("e5")))

    @pytest.mark.parametrize(
        "move",
        [Move(OFF_BOARD, E4), Move(E2, OFF_BOARD), Move(E2, 64)],
    )
    def test_off_board_move_rejected(self, start: Position, move: Move) -> None:
        with pytest.raises(IllegalMoveError) as excinfo:
            apply_move(start, move)
        assert excinfo.value.move == move

    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/8/8/8/8/4P3/4K3 w - - 0 1",
            "4k3/8/8/8/8/8/4P3/4K2K w - - 0 1",
        ],
    )
    def test_malformed_kings_rejected(self, fen: str) -> None:
        with pytest.raises(InvariantViolation):
            apply_move(decode(fen), Move(E2, parse_square("e3")))


class TestEnPassantScenario:
    def test_exd6_after_e4_nc6_e5_d5(self, start: Position, play: PlayFn) -> None:
        pos = play(start, "e2e4", "b8c6", "e4e5", "d7d5")
        assert pos.en_passant == D6

        ep = Move(E5, D6, MoveFlag.EN_PASSANT)
        assert ep in legal_moves(pos)

        after = apply_move(pos, ep)
        assert after.board[D6] == Piece(Color.WHITE, PieceType.PAWN)
        assert after.board[D5] is None
        assert after.board[E5] is None
        assert after.en_passant is None
        assert after.halfmove_clock == 0

    def test_target_expires_after_one_move(self, start: Position, play: PlayFn) -> None:
        pos = play(start, "e2e4", "b8c6", "e4e5", "d7d5", "g1f3", "g8f6")
        assert pos.en_passant is None
        assert not any(m.flag == MoveFlag.EN_PASSANT for m in legal_moves(pos))


class TestCastlingRightsScenario:
    READY = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1"

    @pytest.mark.parametrize(
        "uci, remaining",
        [
            ("e1f1", CastlingRights.BLACK_BOTH),
            ("h1g1", CastlingRights.ALL & ~CastlingRights.WHITE_KINGSIDE),
            ("a1b1", CastlingRights.ALL & ~CastlingRights.WHITE_QUEENSIDE),
            ("e1g1", CastlingRights.BLACK_BOTH),
            ("e1c1", CastlingRights.BLACK_BOTH),
        ],
    )
    def test_white_moves(self, play: PlayFn, uci: str, remaining: CastlingRights) -> None:
        assert play(decode(self.READY), uci).castling == remaining

    def test_capturing_unmoved_rook_clears_right(self, play: PlayFn) -> None:
        pos = decode("r3k2r/8/8/8/8/8/6B1/R3K2R w KQkq - 0 1")
        after = play(pos, "g2a8")
        assert after.castling == CastlingRights.ALL & ~CastlingRights.BLACK_QUEENSIDE

    def test_rights_never_regranted(self, play: PlayFn) -> None:
        pos = play(decode(self.READY), "h1g1", "a7a6", "g1h1")
        assert not pos.castling & CastlingRights.WHITE_KINGSIDE


class TestGameStatus:
    def test_start_in_progress(self, start: Position) -> None:
        status = game_status(start)
        assert status == GameStatus(Outcome.IN_PROGRESS)
        assert not status.is_over

    def test_fools_mate(self, play: PlayFn) -> None:
        mated = play(decode(FOOLS_MATE_THREAT), "d8h4")
        assert encode(mated) == FOOLS_MATE
        assert is_in_check(mated)
        status = game_status(mated)
        assert status.outcome is Outcome.CHECKMATE
        assert status.winner == Color.BLACK
        assert status.loser == Color.WHITE
        assert is_checkmate(mated)

    def test_back_rank_mate(self) -> None:
        pos = decode("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert game_status(pos) == GameStatus(Outcome.CHECKMATE, Color.WHITE)

    def test_check_but_escapable(self) -> None:
        pos = decode("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert is_in_check(pos)
        assert core.is_check(pos)
        assert not is_checkmate(pos)
        assert game_status(pos).outcome is Outcome.IN_PROGRESS

    def test_stalemate(self) -> None:
        pos = decode("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert is_stalemate(pos)
        assert game_status(pos) == GameStatus(Outcome.STALEMATE)

    def test_fifty_move_draw_with_legal_moves(self) -> None:
        pos = decode("4k3/8/8/8/8/8/R7/4K3 w - - 100 80")
        assert legal_moves(pos)
        assert is_fifty_move_draw(pos)
        assert game_status(pos).outcome is Outcome.DRAW_BY_FIFTY_MOVE

    def test_ninety_nine_halfmoves_not_drawn(self) -> None:
        pos = decode("4k3/8/8/8/8/8/R7/4K3 w - - 99 80")
        assert game_status(pos).outcome is Outcome.IN_PROGRESS

    def test_checkmate_beats_fifty_move(self) -> None:
        pos = decode("R2k4/8/3K4/8/8/8/8/8 b - - 100 90")
        assert game_status(pos).outcome is Outcome.CHECKMATE

    def test_insufficient_material_reported(self) -> None:
        pos = decode("8/8/4k3/8/8/4K3/8/8 w - - 0 1")
        assert game_status(pos).outcome is Outcome.DRAW_BY_INSUFFICIENT_MATERIAL

    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/8/8/8/8/8/4K3 w - - 0 1",
            "4k3/8/8/8/8/8/8/8 w - - 0 1",
            "4k3/8/8/8/8/8/8/K3K3 w - - 0 1",
        ],
    )
    def test_invalid_king_count_raises(self, fen: str) -> None:
        with pytest.raises(InvariantViolation):
            game_status(decode(fen))


class TestInsufficientMaterial:
    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/4k3/8/8/4K3/8/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/3B4/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/3N4/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/3n4/8 w - - 0 1",
            # c1 and f8 are both dark squares.
            "5b2/8/4k3/8/8/4K3/8/2B5 w - - 0 1",
        ],
    )
    def test_dead_positions(self, fen: str) -> None:
        assert is_insufficient_material(decode(fen))

    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/4k3/8/8/4K3/3R4/8 w - - 0 1",
            "8/8/4k3/8/4P3/4K3/8/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/3Q4/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/2NN4/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/2Bn4/8 w - - 0 1",
            # Opposite-colored bishops can still mate with help.
            "2b5/8/4k3/8/8/4K3/8/2B5 w - - 0 1",
        ],
    )
    def test_mating_material(self, fen: str) -> None:
        assert not is_insufficient_material(decode(fen))
