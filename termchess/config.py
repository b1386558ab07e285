import os

from .engine.board import STARTPOS_FEN

# HTTP bind address for `termchess serve`
HOST = os.environ.get("TERMCHESS_HOST", "127.0.0.1")
PORT = int(os.environ.get("TERMCHESS_PORT", "8000"))

# File used by `save` / `load` when no name is given
GAME_FILE = os.environ.get("TERMCHESS_GAME_FILE", "game.txt").strip() or "game.txt"

LOG_LEVEL = os.environ.get("TERMCHESS_LOG_LEVEL", "WARNING").upper()

# Position new games and resets start from
START_FEN = os.environ.get("TERMCHESS_START_FEN", "").strip() or STARTPOS_FEN
