from __future__ import annotations

from typing import List, Optional

from ...engine.board import Board


# ANSI background codes for light and dark squares
LIGHT = "\033[47m"
DARK = "\033[104m"
PIECE_FG = "\033[30m"
RED = "\033[91m"
BOLD = "\033[1m"
RESET = "\033[0m"

FILES = "  a b c d e f g h"


def render_board(board: Board, color: bool = True) -> List[str]:
    """Draw the board as text lines, rank 8 at the top.

    Each square is two columns wide: a piece glyph (or a blank) followed
    by a blank. With ``color`` set, squares get alternating ANSI
    backgrounds; otherwise empty dark squares show ``.``.
    """
    lines = [FILES]
    for rank in range(7, -1, -1):
        cells = []
        for file in range(8):
            piece = board.get_piece(file, rank)
            light = (file + rank) % 2 == 1
            if color:
                ch = piece.glyph() if piece is not None else " "
                bg = LIGHT if light else DARK
                cells.append(f"{bg}{PIECE_FG}{ch} {RESET}")
            else:
                if piece is not None:
                    ch = piece.glyph()
                else:
                    ch = " " if light else "."
                cells.append(f"{ch} ")
        lines.append(f"{rank + 1} {''.join(cells)}{rank + 1}")
    lines.append(FILES)
    return lines


def render_screen(board: Board, error: Optional[str] = None, color: bool = True) -> List[str]:
    """Full screen: pending error, board, and the move prompt."""
    lines: List[str] = []
    if error:
        lines.extend(["", f"{RED}{error}{RESET}" if color else error, ""])
    lines.extend(render_board(board, color=color))
    turn = str(board.turn)
    lines.append("")
    lines.append(f"{BOLD}{turn}{RESET} to move:" if color else f"{turn} to move:")
    return lines
