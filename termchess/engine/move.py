from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidInput, InvalidMove


Square = Tuple[int, int]  # (file, rank), both 0..7; a1 == (0, 0)


@dataclass(frozen=True)
class Move:
    """Coordinate move between two squares.

    Attributes:
        from_file (int): Origin file, 0 for ``a``.
        from_rank (int): Origin rank, 0 for ``1``.
        to_file (int): Destination file.
        to_rank (int): Destination rank.
    """

    from_file: int
    from_rank: int
    to_file: int
    to_rank: int

    @property
    def origin(self) -> Square:
        return (self.from_file, self.from_rank)

    @property
    def target(self) -> Square:
        return (self.to_file, self.to_rank)

    @property
    def file_delta(self) -> int:
        return self.to_file - self.from_file

    @property
    def rank_delta(self) -> int:
        return self.to_rank - self.from_rank

    def to_notation(self) -> str:
        """Serialize into the four-character coordinate form.

        Returns:
            str: Lowercase notation such as ``"e2e4"``.
        """
        return square_to_str(self.origin) + square_to_str(self.target)

    def __str__(self) -> str:
        return self.to_notation()


def parse_move(text: str) -> Move:
    """Decode a four-character coordinate move, case-insensitively.

    Args:
        text (str): Notation like ``"e2e4"`` or ``"E2E4"``.

    Returns:
        Move: Decoded move.

    Raises:
        InvalidInput: If ``text`` is not four characters of the form
            letter, digit, letter, digit, or names rank ``0``.
        InvalidMove: If a file letter lies past ``h`` or a rank digit is ``9``.
    """
    text = text.lower()
    if len(text) != 4:
        raise InvalidInput()
    indices = []
    for pos, ch in enumerate(text):
        if pos % 2 == 0:
            if not ("a" <= ch <= "z"):
                raise InvalidInput()
            indices.append(ord(ch) - ord("a"))
        else:
            if not ("1" <= ch <= "9"):
                raise InvalidInput()
            indices.append(ord(ch) - ord("1"))
    if any(i > 7 for i in indices):
        raise InvalidMove("Move is out of bounds")
    return Move(*indices)


def str_to_square(s: str) -> Square:
    """Convert algebraic notation into a (file, rank) pair.

    Raises:
        ValueError: If ``s`` is not a square on the board.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    return (ord(s[0]) - ord("a"), ord(s[1]) - ord("1"))


def square_to_str(sq: Square) -> str:
    file, rank = sq
    if not (0 <= file <= 7 and 0 <= rank <= 7):
        raise ValueError(f"invalid square: {sq!r}")
    return chr(ord("a") + file) + chr(ord("1") + rank)
