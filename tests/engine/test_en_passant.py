from __future__ import annotations

import pytest

from termchess.engine.board import Board
from termchess.engine.errors import InvalidMove
from termchess.engine.pieces import Color, Piece, PieceClass


def _play(b: Board, *moves: str) -> Board:
    for m in moves:
        b.move_piece(m)
    return b


def test_white_captures_en_passant() -> None:
    b = _play(Board.startpos(), "e2e4", "a7a6", "e4e5", "d7d5")
    assert b.en_passant == (3, 5)

    b.move_piece("e5d6")
    assert b.get_piece(3, 5) == Piece(PieceClass.PAWN, Color.WHITE, moves=3)
    assert b.get_piece(3, 4) is None  # captured pawn removed
    assert b.get_piece(4, 4) is None
    assert b.captured == [Piece(PieceClass.PAWN, Color.BLACK, moves=1)]
    assert b.halfmove_clock == 0
    assert b.en_passant is None


def test_black_captures_en_passant() -> None:
    b = Board.from_fen("4k3/8/8/8/3p4/8/4P3/4K3 w - - 0 1")
    b.move_piece("e2e4")
    assert b.en_passant_str() == "e3"

    b.move_piece("d4e3")
    assert b.get_piece(4, 2) == Piece(PieceClass.PAWN, Color.BLACK, moves=1)
    assert b.get_piece(4, 3) is None
    assert b.captured == [Piece(PieceClass.PAWN, Color.WHITE, moves=1)]


def test_en_passant_target_from_position_string() -> None:
    b = Board.from_fen("4k3/8/8/3Pp3/8/8/8/4K3 w - e6 0 1")
    b.move_piece("d5e6")
    assert b.get_piece(4, 4) is None
    assert b.get_piece(4, 5) is not None


def test_en_passant_expires_after_one_move() -> None:
    b = _play(Board.startpos(), "e2e4", "a7a6", "e4e5", "d7d5", "h2h3", "h7h6")
    assert b.en_passant is None
    with pytest.raises(InvalidMove) as exc_info:
        b.move_piece("e5d6")
    assert exc_info.value.reason == "Pawn can not move diagonally"


def test_non_pawn_move_clears_en_passant() -> None:
    b = _play(Board.startpos(), "e2e4")
    assert b.en_passant is not None
    b.move_piece("b8c6")
    assert b.en_passant is None


def test_piece_landing_on_en_passant_square_is_not_an_en_passant_capture() -> None:
    b = Board.from_fen("4k3/8/8/8/8/8/4P3/3nK3 w - - 0 1")
    b.move_piece("e2e4")
    assert b.en_passant == (4, 2)

    # Knight hop from d1 onto the en passant target e3
    b.move_piece("d1e3")
    assert b.get_piece(4, 3) == Piece(PieceClass.PAWN, Color.WHITE, moves=1)
    assert b.get_piece(4, 2) == Piece(PieceClass.KNIGHT, Color.BLACK, moves=1)
    assert b.captured == []
    assert b.en_passant is None
