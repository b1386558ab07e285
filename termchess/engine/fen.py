from __future__ import annotations

import logging
from typing import List, Optional

from .board import Board
from .errors import InvalidFen
from .move import Square
from .pieces import Color, Piece


logger = logging.getLogger(__name__)

FIELD_NAMES = (
    "piece placement",
    "side to move",
    "castling rights",
    "en passant",
    "halfmove clock",
    "fullmove number",
)


def load(fen: str) -> Board:
    """Build a fresh board from a six-field position string.

    Args:
        fen (str): Position such as
            ``"rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"``.

    Returns:
        Board: New board; pieces start with a move count of zero and the
            history is empty.

    Raises:
        InvalidFen: If a field is missing, a piece letter is unknown, a
            rank overflows, the en passant square is malformed, or a
            counter is not an unsigned integer.

    Notes:
        Castling flags are taken by letter presence and are not checked
        against the piece layout. Counter ranges are not bounded. Ranks
        with fewer than eight squares are padded with empty squares.
    """
    parts = fen.split()
    if len(parts) < len(FIELD_NAMES):
        raise InvalidFen(f"missing {FIELD_NAMES[len(parts)]}")
    placement, stm, castling, ep, halfmove, fullmove = parts[:6]

    board = Board.empty()
    _place_pieces(board, placement)

    if stm == "w":
        board.turn = Color.WHITE
    elif stm == "b":
        board.turn = Color.BLACK
    else:
        raise InvalidFen("invalid side to move")

    board.white_can_castle_kingside = "K" in castling
    board.white_can_castle_queenside = "Q" in castling
    board.black_can_castle_kingside = "k" in castling
    board.black_can_castle_queenside = "q" in castling

    board.en_passant = _parse_en_passant(ep)
    board.halfmove_clock = _parse_counter(halfmove, "invalid halfmove clock")
    board.fullmove_number = _parse_counter(fullmove, "invalid fullmove number")

    logger.debug("loaded position %r", fen)
    return board


def _place_pieces(board: Board, placement: str) -> None:
    rows: List[str] = placement.split("/")
    if len(rows) > 8:
        raise InvalidFen("too many ranks")
    for row_idx, row in enumerate(rows):
        rank = 7 - row_idx  # first row is rank 8
        file = 0
        for ch in row:
            if "0" <= ch <= "9":
                file += int(ch)
                if file > 8:
                    raise InvalidFen("too many squares in rank")
                continue
            try:
                piece = Piece.from_letter(ch)
            except KeyError:
                raise InvalidFen("invalid piece") from None
            if file > 7:
                raise InvalidFen("too many squares in rank")
            board.set_piece(piece, file, rank)
            file += 1


def _parse_en_passant(ep: str) -> Optional[Square]:
    if ep == "-":
        return None
    if len(ep) != 2:
        raise InvalidFen("invalid en passant square")
    file_ch, rank_ch = ep
    if not ("a" <= file_ch <= "h"):
        raise InvalidFen("invalid en passant file")
    if rank_ch == "3":
        rank = 2
    elif rank_ch == "6":
        rank = 5
    else:
        raise InvalidFen("invalid en passant rank")
    return (ord(file_ch) - ord("a"), rank)


def _parse_counter(text: str, detail: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise InvalidFen(detail)
    return int(text)
