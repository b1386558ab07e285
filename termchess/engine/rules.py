from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List, NamedTuple

from .errors import InvalidMove
from .move import Move, Square
from .pieces import Color, PieceClass

if TYPE_CHECKING:
    from .board import Board


class CastlingPattern(NamedTuple):
    color: Color
    king_from: Square
    king_to: Square
    rook_at: Square
    between: List[Square]


CASTLING_PATTERNS = [
    CastlingPattern(Color.WHITE, (4, 0), (6, 0), (7, 0), [(5, 0), (6, 0)]),
    CastlingPattern(Color.WHITE, (4, 0), (2, 0), (0, 0), [(1, 0), (2, 0), (3, 0)]),
    CastlingPattern(Color.BLACK, (4, 7), (6, 7), (7, 7), [(5, 7), (6, 7)]),
    CastlingPattern(Color.BLACK, (4, 7), (2, 7), (0, 7), [(1, 7), (2, 7), (3, 7)]),
]


def validate(move: Move, board: "Board") -> None:
    """Check a move against the movement rules for the side to move.

    Checks run in a fixed order and stop at the first failure: a piece
    on the origin, owned by the side to move, moving the way its class
    allows, and not landing on a piece of its own color. King safety is
    not considered.

    Args:
        move (Move): Decoded move.
        board (Board): Position to check against; never modified.

    Raises:
        InvalidMove: With the reason of the first failed check.
    """
    piece = board.get_piece(*move.origin)
    if piece is None:
        raise InvalidMove("No piece on square")
    if piece.color is not board.turn:
        raise InvalidMove("Not your piece")

    _VALIDATORS[piece.kind](move, board)

    target = board.get_piece(*move.target)
    if target is not None and target.color is board.turn:
        raise InvalidMove("Can't capture your own piece")


def validate_pawn(move: Move, board: "Board") -> None:
    piece = board.get_piece(*move.origin)
    assert piece is not None
    df, dr = move.file_delta, move.rank_delta

    if piece.color is Color.WHITE and dr < 0:
        raise InvalidMove("Pawn can only move forward")
    if piece.color is Color.BLACK and dr > 0:
        raise InvalidMove("Pawn can only move forward")

    # Distance is checked on its own, before and independent of the capture shape
    if piece.moves == 0:
        if abs(dr) > 2 or abs(dr) < 1:
            raise InvalidMove(
                "Pawn can only move one or two squares forward on the first move, "
                f"attempted to move {abs(dr)} squares"
            )
    elif abs(dr) != 1:
        raise InvalidMove("Pawn can only move one square forward")

    target = board.get_piece(*move.target)
    if target is not None and target.color is not piece.color:
        if abs(df) != 1:
            raise InvalidMove("Pawn can only capture diagonally")
        return

    if board.is_en_passant(*move.target):
        return
    if df != 0:
        raise InvalidMove("Pawn can not move diagonally")


def validate_knight(move: Move, board: "Board") -> None:
    shape = (abs(move.file_delta), abs(move.rank_delta))
    if shape not in ((2, 1), (1, 2)):
        raise InvalidMove(
            "Knight can only move two squares forward and one square sideways, "
            "or two squares sideways and one square forward"
        )


def validate_bishop(move: Move, board: "Board") -> None:
    if not _is_diagonal(move):
        raise InvalidMove("Bishop can only move diagonally")
    if not _path_clear(move, board):
        raise InvalidMove("Bishop can not move through pieces")


def validate_rook(move: Move, board: "Board") -> None:
    if not _is_straight(move):
        raise InvalidMove("Rook can only move horizontally or vertically")
    if not _path_clear(move, board):
        raise InvalidMove("Rook can not move through pieces")


def validate_queen(move: Move, board: "Board") -> None:
    if not (_is_straight(move) or _is_diagonal(move)):
        raise InvalidMove("Queen can only move horizontally, vertically, or diagonally")
    if not _path_clear(move, board):
        raise InvalidMove("Queen can not move through pieces")


def validate_king(move: Move, board: "Board") -> None:
    piece = board.get_piece(*move.origin)
    assert piece is not None
    if piece.moves == 0:
        for pattern in CASTLING_PATTERNS:
            if _castling_matches(pattern, move, board):
                return

    if abs(move.file_delta) > 1 or abs(move.rank_delta) > 1:
        raise InvalidMove("King can only move one square in any direction")


def _castling_matches(pattern: CastlingPattern, move: Move, board: "Board") -> bool:
    king = board.get_piece(*move.origin)
    if king is None or king.color is not pattern.color:
        return False
    if move.origin != pattern.king_from or move.target != pattern.king_to:
        return False
    rook = board.get_piece(*pattern.rook_at)
    if rook is None:
        return False
    if rook.kind is not PieceClass.ROOK or rook.color is not pattern.color or rook.moves != 0:
        return False
    return all(board.get_piece(*sq) is None for sq in pattern.between)


def _is_straight(move: Move) -> bool:
    return move.from_file == move.to_file or move.from_rank == move.to_rank


def _is_diagonal(move: Move) -> bool:
    return abs(move.file_delta) == abs(move.rank_delta)


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def _path_clear(move: Move, board: "Board") -> bool:
    """Return True when every square strictly between origin and target is empty.

    Only meaningful for straight or diagonal moves.
    """
    step_f, step_r = _sign(move.file_delta), _sign(move.rank_delta)
    distance = max(abs(move.file_delta), abs(move.rank_delta))
    for i in range(1, distance):
        if board.get_piece(move.from_file + i * step_f, move.from_rank + i * step_r) is not None:
            return False
    return True


_VALIDATORS: Dict[PieceClass, Callable[[Move, "Board"], None]] = {
    PieceClass.PAWN: validate_pawn,
    PieceClass.KNIGHT: validate_knight,
    PieceClass.BISHOP: validate_bishop,
    PieceClass.ROOK: validate_rook,
    PieceClass.QUEEN: validate_queen,
    PieceClass.KING: validate_king,
}
