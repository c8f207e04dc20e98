"""
Error taxonomy for move selection.

Callers catch MoveSelectionError to handle every engine failure in one place,
or the specific subclasses to tell usage errors apart from a finished game.
"""


class MoveSelectionError(Exception):
    """Base class for all errors raised by the move-selection engine."""


class InvalidPosition(MoveSelectionError, ValueError):
    """The supplied FEN could not be parsed into a playable position."""


class SideMismatch(MoveSelectionError):
    """The requested side is not the side to move in the position."""

    def __init__(self, requested: str, to_move: str) -> None:
        super().__init__(f"requested side {requested!r} but {to_move} is to move")
        self.requested = requested
        self.to_move = to_move


class NoLegalMoves(MoveSelectionError):
    """The position is terminal: there is nothing to choose from."""

    def __init__(self, result: str = "*") -> None:
        super().__init__(f"no legal moves (result {result})")
        self.result = result


class OracleUnavailable(MoveSelectionError):
    """The external move oracle timed out, failed, or gave an unusable answer.

    Raised and caught inside the oracle adapter only; it never reaches the
    callers of MoveChooser.choose_move.
    """
