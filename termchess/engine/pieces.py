from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Color(str, Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    def __str__(self) -> str:
        return self.value


class PieceClass(str, Enum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


# FEN letters, uppercase for White
CLASS_TO_LETTER = {
    PieceClass.PAWN: "p",
    PieceClass.KNIGHT: "n",
    PieceClass.BISHOP: "b",
    PieceClass.ROOK: "r",
    PieceClass.QUEEN: "q",
    PieceClass.KING: "k",
}
LETTER_TO_CLASS = {v: k for k, v in CLASS_TO_LETTER.items()}

GLYPHS = {
    Color.WHITE: {
        PieceClass.PAWN: "♙",
        PieceClass.KNIGHT: "♘",
        PieceClass.BISHOP: "♗",
        PieceClass.ROOK: "♖",
        PieceClass.QUEEN: "♕",
        PieceClass.KING: "♔",
    },
    Color.BLACK: {
        PieceClass.PAWN: "♟",
        PieceClass.KNIGHT: "♞",
        PieceClass.BISHOP: "♝",
        PieceClass.ROOK: "♜",
        PieceClass.QUEEN: "♛",
        PieceClass.KING: "♚",
    },
}


@dataclass(frozen=True)
class Piece:
    """A piece as it sits on a square.

    Attributes:
        kind (PieceClass): Pawn, knight, bishop, rook, queen or king.
        color (Color): Owner of the piece.
        moves (int): Number of times this piece has been relocated.
    """

    kind: PieceClass
    color: Color
    moves: int = 0

    @classmethod
    def from_letter(cls, ch: str) -> "Piece":
        """Build an unmoved piece from its FEN letter.

        Raises:
            KeyError: If ``ch`` is not one of ``PNBRQK`` in either case.
        """
        kind = LETTER_TO_CLASS[ch.lower()]
        color = Color.WHITE if ch.isupper() else Color.BLACK
        return cls(kind, color)

    def letter(self) -> str:
        ch = CLASS_TO_LETTER[self.kind]
        return ch.upper() if self.color is Color.WHITE else ch

    def glyph(self) -> str:
        return GLYPHS[self.color][self.kind]

    def moved(self) -> "Piece":
        """Return a copy with the move counter incremented."""
        return replace(self, moves=self.moves + 1)
