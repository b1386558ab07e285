from __future__ import annotations

from typing import Tuple

import pytest

from termchess.engine.board import Board
from termchess.engine.errors import InvalidMove
from termchess.engine.pieces import Color, Piece, PieceClass


@pytest.mark.parametrize(
    "move, reason",
    [
        ("c1e3", "Bishop can not move through pieces"),
        ("a1a3", "Rook can not move through pieces"),
        ("d1d3", "Queen can not move through pieces"),
        ("d1f3", "Queen can not move through pieces"),
        ("c1c3", "Bishop can only move diagonally"),
        ("a1b3", "Rook can only move horizontally or vertically"),
        ("d1e3", "Queen can only move horizontally, vertically, or diagonally"),
    ],
)
def test_startpos_slider_failures(move: str, reason: str) -> None:
    b = Board.startpos()
    with pytest.raises(InvalidMove) as exc_info:
        b.move_piece(move)
    assert exc_info.value.reason == reason


@pytest.mark.parametrize(
    "fen, move, reason",
    [
        # enemy pawn on a3 blocks the rook's path to a5
        ("4k3/8/8/8/8/p7/8/R3K3 w - - 0 1", "a1a5", "Rook can not move through pieces"),
        # own knight on d1 blocks the rook along the rank
        ("4k3/8/8/8/8/8/8/R2N3K w - - 0 1", "a1g1", "Rook can not move through pieces"),
        # enemy pawn on e3 blocks the bishop's diagonal
        ("4k3/8/8/8/8/4p3/8/2B1K3 w - - 0 1", "c1g5", "Bishop can not move through pieces"),
        # black bishop walking down-left through its own pawn
        ("4k3/8/5b2/4p3/8/8/8/4K3 b - - 0 1", "f6c3", "Bishop can not move through pieces"),
        # own pawn on e2 blocks the queen diagonally
        ("4k3/8/8/8/8/8/4P3/3QK3 w - - 0 1", "d1f3", "Queen can not move through pieces"),
        # enemy knight on d4 blocks the queen vertically
        ("4k3/8/8/8/3n4/8/8/3QK3 w - - 0 1", "d1d7", "Queen can not move through pieces"),
    ],
)
def test_path_blocked_regardless_of_blocker_color(fen: str, move: str, reason: str) -> None:
    b = Board.from_fen(fen)
    with pytest.raises(InvalidMove) as exc_info:
        b.move_piece(move)
    assert exc_info.value.reason == reason


@pytest.mark.parametrize(
    "fen, move, dest",
    [
        ("4k3/8/8/8/8/8/8/2B1K3 w - - 0 1", "c1h6", (7, 5)),
        ("4k3/8/8/8/8/8/8/R3K3 w - - 0 1", "a1a8", (0, 7)),
        ("4k3/8/8/8/8/8/8/R3K3 w - - 0 1", "a1d1", (3, 0)),
        ("4k3/8/8/8/8/8/8/3QK3 w - - 0 1", "d1h5", (7, 4)),
        ("4k3/8/8/8/8/8/8/3QK3 w - - 0 1", "d1a1", (0, 0)),
        ("4k3/8/8/8/8/8/8/3QK3 w - - 0 1", "d1d8", (3, 7)),
    ],
)
def test_open_paths(fen: str, move: str, dest: Tuple[int, int]) -> None:
    b = Board.from_fen(fen)
    mv = b.move_piece(move)
    assert b.get_piece(*dest) is not None
    assert b.get_piece(*mv.origin) is None


def test_capture_at_end_of_path() -> None:
    b = Board.from_fen("4k3/8/8/8/8/p7/8/R3K3 w - - 0 1")
    b.move_piece("a1a3")
    assert b.get_piece(0, 2) == Piece(PieceClass.ROOK, Color.WHITE, moves=1)
    assert b.captured == [Piece(PieceClass.PAWN, Color.BLACK)]
    assert b.halfmove_clock == 0


def test_slider_cannot_capture_own_piece() -> None:
    b = Board.from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
    with pytest.raises(InvalidMove) as exc_info:
        b.move_piece("a1e1")
    assert exc_info.value.reason == "Can't capture your own piece"


@pytest.mark.parametrize("move", ["a1a1", "c1c1", "d1d1"])
def test_zero_length_slider_move_is_rejected(move: str) -> None:
    b = Board.from_fen("4k3/8/8/8/8/8/8/R1BQK3 w - - 0 1")
    with pytest.raises(InvalidMove) as exc_info:
        b.move_piece(move)
    assert exc_info.value.reason == "Can't capture your own piece"
