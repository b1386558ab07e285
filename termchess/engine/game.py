from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import IO, Iterable, List, Optional, Union

from .board import Board, STARTPOS_FEN
from .errors import ChessError, SaveFailed
from .move import Move


logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def dumps(history: Iterable[str]) -> str:
    """Serialize a move history as space separated tokens."""
    return " ".join(history)


def loads(text: str) -> List[str]:
    """Split a saved game into move tokens, ignoring extra whitespace."""
    return text.split()


def dump(history: Iterable[str], fp: IO[str]) -> None:
    fp.write(dumps(history))


def load(fp: IO[str]) -> List[str]:
    return loads(fp.read())


@dataclass
class Game:
    """Game wrapper around a board with persistence helpers.

    Responsibility: own the board, play moves, reset, save and replay games.
    """

    start_fen: str = STARTPOS_FEN
    board: Board = field(init=False)

    def __post_init__(self) -> None:
        self.board = Board.from_fen(self.start_fen)

    @classmethod
    def new(cls, fen: str = STARTPOS_FEN) -> "Game":
        return cls(start_fen=fen)

    @property
    def history(self) -> List[str]:
        return self.board.moves

    @property
    def last_move(self) -> Optional[str]:
        return self.board.moves[-1] if self.board.moves else None

    def play(self, notation: str) -> Move:
        return self.board.move_piece(notation)

    def reset(self) -> None:
        self.board = Board.from_fen(self.start_fen)

    def replay(self, tokens: Iterable[str]) -> None:
        """Replay moves from the start position, all or nothing.

        The moves are played on a new board which replaces the current one
        only once every move has been accepted.

        Raises:
            InvalidInput: If a token is malformed.
            InvalidMove: If a token is not a legal move at its point in the game.
        """
        board = Board.from_fen(self.start_fen)
        for ply, token in enumerate(tokens, start=1):
            try:
                board.move_piece(token)
            except ChessError as e:
                logger.info("replay failed at ply %d (%s): %s", ply, token, e)
                raise
        self.board = board

    def save(self, path: PathLike) -> None:
        """Write the move history to ``path``.

        Raises:
            SaveFailed: On any I/O error.
        """
        try:
            with open(path, "w", encoding="utf-8") as fp:
                dump(self.history, fp)
        except OSError as e:
            raise SaveFailed(str(e)) from e
        logger.info("saved %d moves to %s", len(self.history), path)

    def load(self, path: PathLike) -> None:
        """Replace the game with the one saved at ``path``.

        Raises:
            SaveFailed: If the file cannot be read.
            InvalidInput: If a saved token is malformed.
            InvalidMove: If a saved move is illegal; the game is left unchanged.
        """
        try:
            with open(path, "r", encoding="utf-8") as fp:
                tokens = load(fp)
        except (OSError, UnicodeDecodeError) as e:
            raise SaveFailed(str(e)) from e
        self.replay(tokens)
        logger.info("loaded %d moves from %s", len(tokens), path)
