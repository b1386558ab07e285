from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by the core and its adapters."""


class InvalidInput(ChessError, ValueError):
    """Command or move notation with the wrong shape."""

    def __init__(self) -> None:
        super().__init__("Invalid input")


class InvalidFen(ChessError, ValueError):
    """Position string that could not be parsed.

    Attributes:
        detail (str): Names the missing or invalid field.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid FEN: {detail}")


class InvalidMove(ChessError, ValueError):
    """Move rejected by the legality rules.

    Attributes:
        reason (str): Human-readable cause, shown to the player verbatim.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid move: {reason}")


class SaveFailed(ChessError):
    """Persisting or reading a game file failed at the I/O level."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Failed to save game to file: {detail}")
