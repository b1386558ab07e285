#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import os
import sys
import time

# Allow running this script directly via `python scripts/check_games.py`
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from termchess.engine.board import STARTPOS_FEN
from termchess.engine.errors import ChessError
from termchess.engine.game import Game


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay saved games and report the ones that fail")
    parser.add_argument("paths", nargs="+", help="Saved game files")
    parser.add_argument(
        "--fen", type=str, default=STARTPOS_FEN, help="Start position (default: startpos)"
    )
    args = parser.parse_args()

    failed = 0
    start = time.perf_counter()
    for path in args.paths:
        game = Game.new(args.fen)
        try:
            game.load(path)
        except ChessError as e:
            failed += 1
            print(f"FAIL {path}: {e}")
            continue
        print(f"ok   {path}: {len(game.history)} moves")
    dt = time.perf_counter() - start
    print(f"games={len(args.paths)} failed={failed} time_ms={int(dt * 1000)}")
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
