from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import InvalidMove
from .move import Move, Square, parse_move, square_to_str
from .pieces import Color, Piece, PieceClass
from .rules import validate


logger = logging.getLogger(__name__)

STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def _empty_grid() -> List[List[Optional[Piece]]]:
    return [[None] * 8 for _ in range(8)]


@dataclass
class Board:
    """Board state and the single mutation path that moves pieces.

    Notes:
    - ``squares`` is indexed ``[file][rank]``; a1 is ``[0][0]``, h8 is ``[7][7]``.
    - The four castling flags are informational. They are set from the
      position string and never updated by play; castling legality is
      decided from live move counters in ``rules``.
    - ``moves`` is the replay log: every accepted notation, in order.
    """

    squares: List[List[Optional[Piece]]] = field(default_factory=_empty_grid)
    turn: Color = Color.WHITE
    white_can_castle_kingside: bool = True
    white_can_castle_queenside: bool = True
    black_can_castle_kingside: bool = True
    black_can_castle_queenside: bool = True
    en_passant: Optional[Square] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    moves: List[str] = field(default_factory=list)
    captured: List[Piece] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "Board":
        """Create a board with no pieces, White to move."""
        return cls()

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board initialized to the standard starting position."""
        return cls.from_fen(STARTPOS_FEN)

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        """Create a board from a six-field position string.

        Raises:
            InvalidFen: If a field is missing or malformed.
        """
        from .fen import load

        return load(fen)

    # --- Square access ---
    def get_piece(self, file: int, rank: int) -> Optional[Piece]:
        return self.squares[file][rank]

    def set_piece(self, piece: Piece, file: int, rank: int) -> None:
        self.squares[file][rank] = piece

    def clear_piece(self, file: int, rank: int) -> None:
        self.squares[file][rank] = None

    def is_en_passant(self, file: int, rank: int) -> bool:
        return self.en_passant is not None and self.en_passant == (file, rank)

    def castling_rights(self) -> str:
        """Return the castling flags in ``KQkq`` form, ``-`` when none are set."""
        flags = (
            ("K", self.white_can_castle_kingside),
            ("Q", self.white_can_castle_queenside),
            ("k", self.black_can_castle_kingside),
            ("q", self.black_can_castle_queenside),
        )
        rights = "".join(ch for ch, on in flags if on)
        return rights or "-"

    def placement_rows(self) -> List[str]:
        """Return eight rows, rank 8 first, with FEN letters and ``.`` for empty."""
        rows: List[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                piece = self.squares[file][rank]
                row.append(piece.letter() if piece is not None else ".")
            rows.append("".join(row))
        return rows

    # --- Mutation ---
    def move_piece(self, notation: str) -> Move:
        """Decode, validate and apply a move given in coordinate notation.

        Args:
            notation (str): Move such as ``"e2e4"``; surrounding whitespace is ignored.

        Returns:
            Move: The decoded move that was applied.

        Raises:
            InvalidInput: If the notation is malformed.
            InvalidMove: If the move breaks a movement rule. The board is
                left untouched.
        """
        notation = notation.strip()
        move = parse_move(notation)
        try:
            validate(move, self)
        except InvalidMove as e:
            logger.debug("rejected %s: %s", notation, e.reason)
            raise
        self.apply(move, notation)
        logger.debug("applied %s, %s to move", notation, self.turn)
        return move

    def apply(self, move: Move, notation: Optional[str] = None) -> None:
        """Apply an already validated move and record it in the history.

        Args:
            move (Move): Move accepted by ``rules.validate`` for this board.
            notation (Optional[str]): Text stored in the history; defaults to
                the move's own notation.
        """
        piece = self.get_piece(*move.origin)
        if piece is None:
            raise InvalidMove("No piece on square")

        self.halfmove_clock += 1
        is_pawn = piece.kind is PieceClass.PAWN

        # En passant: the captured pawn sits beside the mover, behind the target
        if is_pawn and self.is_en_passant(*move.target):
            behind = move.to_rank - 1 if piece.color is Color.WHITE else move.to_rank + 1
            victim = self.get_piece(move.to_file, behind)
            if victim is not None and victim.color is not piece.color:
                self.captured.append(victim)
                self.clear_piece(move.to_file, behind)
            self.halfmove_clock = 0

        target = self.get_piece(*move.target)
        if target is not None:
            self.halfmove_clock = 0
            self.captured.append(target)

        if is_pawn:
            self.halfmove_clock = 0

        if is_pawn and move.file_delta == 0 and abs(move.rank_delta) == 2:
            self.en_passant = (move.to_file, (move.from_rank + move.to_rank) // 2)
        else:
            self.en_passant = None

        # Castling: the king has travelled two files, bring the rook across
        if piece.kind is PieceClass.KING and abs(move.file_delta) == 2 and move.rank_delta == 0:
            if move.to_file == 6:
                self._relocate(7, 5, move.to_rank)
            elif move.to_file == 2:
                self._relocate(0, 3, move.to_rank)

        self.set_piece(piece.moved(), move.to_file, move.to_rank)
        self.clear_piece(move.from_file, move.from_rank)
        self.moves.append(notation if notation is not None else move.to_notation())

        if self.turn is Color.BLACK:
            self.fullmove_number += 1
        self.turn = self.turn.opponent

    def _relocate(self, from_file: int, to_file: int, rank: int) -> None:
        rook = self.get_piece(from_file, rank)
        if rook is None:
            return
        self.set_piece(rook, to_file, rank)
        self.clear_piece(from_file, rank)

    def en_passant_str(self) -> Optional[str]:
        return square_to_str(self.en_passant) if self.en_passant is not None else None
