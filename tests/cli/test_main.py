from __future__ import annotations

from pathlib import Path

import pytest

from termchess.cli.main import build_parser, main


def test_replay_prints_final_board(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "game.txt"
    path.write_text("e2e4 e7e5 g1f3", encoding="utf-8")
    assert main(["replay", str(path), "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "3 moves, black to move" in out
    assert "1 ♖ ♘ ♗ ♕ ♔ ♗ . ♖ 1" in out


def test_replay_invalid_game_exits_nonzero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "game.txt"
    path.write_text("e2e4 e2e4", encoding="utf-8")
    assert main(["replay", str(path)]) == 1
    assert "Invalid move: No piece on square" in capsys.readouterr().err


def test_parser_defaults() -> None:
    args = build_parser().parse_args(["serve"])
    assert args.command == "serve"
    assert isinstance(args.port, int)
    args = build_parser().parse_args(["play", "--no-color"])
    assert args.no_color is True
