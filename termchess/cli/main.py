from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from .. import config
from ..engine.errors import ChessError
from ..engine.game import Game
from ..protocol.terminal.loop import TerminalSession, run_terminal
from ..protocol.terminal.render import render_board


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="termchess", description="Two-player terminal chess")
    parser.add_argument(
        "--log-level", default=config.LOG_LEVEL, help=f"Logging level (default: {config.LOG_LEVEL})"
    )
    sub = parser.add_subparsers(dest="command")

    play = sub.add_parser("play", help="Play in the terminal (default)")
    play.add_argument("--file", default=config.GAME_FILE, help="Default save/load file")
    play.add_argument("--fen", default=config.START_FEN, help="Start position")
    play.add_argument("--no-color", action="store_true", help="Disable ANSI colors")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=config.HOST)
    serve.add_argument("--port", type=int, default=config.PORT)

    replay = sub.add_parser("replay", help="Replay a saved game and print the final board")
    replay.add_argument("path", help="Saved game file")
    replay.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    if args.command == "serve":
        uvicorn.run(
            "termchess.protocol.http.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            log_level=args.log_level.lower(),
        )
        return 0

    if args.command == "replay":
        game = Game.new(config.START_FEN)
        try:
            game.load(args.path)
        except ChessError as e:
            print(e, file=sys.stderr)
            return 1
        for line in render_board(game.board, color=not args.no_color):
            print(line)
        print(f"{len(game.history)} moves, {game.board.turn} to move")
        return 0

    fen = getattr(args, "fen", config.START_FEN)
    try:
        game = Game.new(fen)
    except ChessError as e:
        print(e, file=sys.stderr)
        return 1
    session = TerminalSession(
        game,
        default_file=getattr(args, "file", config.GAME_FILE),
        color=not getattr(args, "no_color", False),
    )
    run_terminal(session)
    return 0


if __name__ == "__main__":
    sys.exit(main())
