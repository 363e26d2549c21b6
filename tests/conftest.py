"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from rchess.core.notation.fen import STARTING_FEN, decode
from rchess.core.notation.uci import parse_uci
from rchess.core.position import Position
from rchess.core.rules import apply_move

PlayFn = Callable[..., Position]


@pytest.fixture
def start() -> Position:
    """The standard initial position, decoded from FEN."""
    return decode(STARTING_FEN)


@pytest.fixture
def play() -> PlayFn:
    """``play(position, "e2e4", "e7e5", ...)`` -> position after the UCI moves."""

    def _play(position: Position, *moves: str) -> Position:
        for text in moves:
            position = apply_move(position, parse_uci(position, text))
        return position

    return _play
