"""Game history over immutable positions: undo/redo and repetition tracking."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Final

from rchess.core.enums import Color, Outcome
from rchess.core.move import Move
from rchess.core.move_generator import is_in_check, legal_moves
from rchess.core.notation.fen import STARTING_FEN, decode, encode
from rchess.core.notation.san import move_to_san, parse_san
from rchess.core.notation.uci import parse_uci
from rchess.core.position import Position
from rchess.core.rules import GameStatus, apply_move, game_status

_LOGGER = logging.getLogger(__name__)

REPETITION_DRAW_COUNT: Final = 3


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    san: str
    fen_after: str
    was_check: bool = False
    was_capture: bool = False


@dataclass
class GameState:
    """Ordered list of positions with a cursor.

    Positions are immutable, so undo and redo only move the cursor;
    pushing a move after an undo discards the redo tail.
    This is a pure data/logic class: no threading, no I/O.
    """

    start_fen: str = field(default=STARTING_FEN, init=False)
    _positions: list[Position] = field(default_factory=list, init=False, repr=False)
    _records: list[MoveRecord] = field(default_factory=list, init=False, repr=False)
    _cursor: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self.setup()

    # -- Initialisation ----------------------------------------------------------

    def setup(self, fen: str | None = None) -> None:
        """Start (or restart) from *fen*, defaulting to the initial position."""
        self.start_fen = fen or STARTING_FEN
        self._positions = [decode(self.start_fen)]
        self._records = []
        self._cursor = 0

    # -- Move application --------------------------------------------------------

    def push(self, move: Move) -> MoveRecord:
        """Validate and play *move*; raises ``IllegalMoveError`` if illegal."""
        before = self.position
        after = apply_move(before, move)
        record = MoveRecord(
            move=move,
            san=move_to_san(before, move),
            fen_after=encode(after),
            was_check=is_in_check(after),
            was_capture=before.is_capture(move),
        )

        del self._positions[self._cursor + 1 :]
        del self._records[self._cursor :]
        self._positions.append(after)
        self._records.append(record)
        self._cursor += 1
        _LOGGER.debug("Played %s (%s)", record.san, record.fen_after)
        return record

    def push_uci(self, text: str) -> MoveRecord:
        return self.push(parse_uci(self.position, text))

    def push_san(self, text: str) -> MoveRecord:
        return self.push(parse_san(self.position, text))

    def undo(self) -> Move | None:
        """Step back one ply. Returns the undone move, or None at the start."""
        if self._cursor == 0:
            return None
        self._cursor -= 1
        return self._records[self._cursor].move

    def redo(self) -> Move | None:
        """Replay the most recently undone move, if any."""
        if self._cursor == len(self._records):
            return None
        self._cursor += 1
        return self._records[self._cursor - 1].move

    # -- Query helpers -----------------------------------------------------------

    @property
    def position(self) -> Position:
        return self._positions[self._cursor]

    @property
    def fen(self) -> str:
        return encode(self.position)

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def ply_count(self) -> int:
        """Half-moves played up to the cursor."""
        return self._cursor

    @property
    def history(self) -> list[MoveRecord]:
        """Records of the moves leading to the current position."""
        return self._records[: self._cursor]

    def legal_moves(self) -> list[Move]:
        return legal_moves(self.position)

    def repetition_count(self) -> int:
        """Occurrences of the current position since setup, itself included."""
        counts = Counter(p.repetition_key() for p in self._positions[: self._cursor + 1])
        return counts[self.position.repetition_key()]

    def status(self) -> GameStatus:
        """Position status, plus threefold repetition which needs history."""
        result = game_status(self.position)
        if not result.is_over and self.repetition_count() >= REPETITION_DRAW_COUNT:
            return GameStatus(Outcome.DRAW_BY_REPETITION)
        return result
