from __future__ import annotations

import logging
import sys
from typing import Callable, Iterable, List, Optional

from ... import config
from ...engine.errors import ChessError
from ...engine.game import Game
from .render import render_screen


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]

QUIT_COMMANDS = ("q", "quit", "exit")


class TerminalSession:
    """Interactive two-player session around a single game.

    Notes:
    - The core stays pure; all I/O goes through the ``write`` callback.
    - Commands: ``q``/``quit``/``exit``, ``save [file]``, ``load [file]``;
      any other first token is played as a move.
    """

    def __init__(
        self,
        game: Optional[Game] = None,
        *,
        default_file: str = config.GAME_FILE,
        color: bool = True,
    ) -> None:
        self.game: Game = game if game is not None else Game.new(config.START_FEN)
        self.default_file = default_file
        self.color = color
        # Message shown above the next board render
        self.error: Optional[str] = None

    # ---- Command handlers ----
    def cmd_save(self, args: List[str], write: Writer) -> None:
        path = args[0] if args else self.default_file
        self.game.save(path)
        write(f"saved {len(self.game.history)} moves to {path}")

    def cmd_load(self, args: List[str], write: Writer) -> None:
        path = args[0] if args else self.default_file
        self.game.load(path)
        write(f"loaded {len(self.game.history)} moves from {path}")

    def cmd_move(self, notation: str) -> None:
        self.game.play(notation)

    def handle(self, line: str, write: Writer) -> bool:
        """Dispatch one input line.

        Returns:
            bool: False when the session should end.
        """
        parts = line.split()
        if not parts:
            return True
        cmd, args = parts[0], parts[1:]
        if cmd in QUIT_COMMANDS:
            return False
        try:
            if cmd == "save":
                self.cmd_save(args, write)
            elif cmd == "load":
                self.cmd_load(args, write)
            else:
                self.cmd_move(cmd)
        except ChessError as e:
            logger.debug("command %r failed: %s", line, e)
            self.error = str(e)
        else:
            self.error = None
        return True

    def render(self, write: Writer) -> None:
        for line in render_screen(self.game.board, self.error, color=self.color):
            write(line)


def _default_writer(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_terminal(
    session: Optional[TerminalSession] = None,
    lines: Optional[Iterable[str]] = None,
    write: Writer = _default_writer,
) -> TerminalSession:
    """Render, read a command, dispatch; repeat until quit or end of input."""
    session = session if session is not None else TerminalSession()
    source = lines if lines is not None else sys.stdin
    session.render(write)
    for raw in source:
        if not session.handle(raw.strip(), write):
            break
        session.render(write)
    return session
