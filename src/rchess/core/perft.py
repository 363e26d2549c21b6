"""Perft node counting for move-generator verification.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

from __future__ import annotations

from rchess.core.move_generator import legal_moves
from rchess.core.position import Position


def perft(position: Position, depth: int) -> int:
    """Number of legal move sequences of length *depth* from *position*."""
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")
    if depth == 0:
        return 1
    moves = legal_moves(position)
    if depth == 1:
        return len(moves)
    return sum(perft(position.play(move), depth - 1) for move in moves)


def divide(position: Position, depth: int) -> dict[str, int]:
    """Per-root-move perft counts keyed by UCI text; handy for bisecting bugs."""
    if depth < 1:
        raise ValueError(f"depth must be at least 1, got {depth}")
    return {
        move.uci: perft(position.play(move), depth - 1)
        for move in legal_moves(position)
    }
