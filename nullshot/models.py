"""
Value types that cross the engine boundary.

Side and Difficulty are string enums so they round-trip through JSON, UCI
options, and MCP tool arguments unchanged. MoveInfo is the explicit move
record handed to the oracle and the request surfaces; inside the search
plain chess.Move objects are used because they are cheap to hash and compare.
"""

from dataclasses import dataclass
from enum import Enum

import chess

from nullshot.errors import InvalidPosition


class Side(str, Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def color(self) -> chess.Color:
        """The python-chess colour constant for this side."""
        return chess.WHITE if self is Side.WHITE else chess.BLACK

    @classmethod
    def from_color(cls, color: chess.Color) -> "Side":
        return cls.WHITE if color == chess.WHITE else cls.BLACK


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class MoveInfo:
    """
    A legal move described relative to the position it is played from.

    Attributes:
        from_square: Origin square name, e.g. "e2".
        to_square:   Destination square name, e.g. "e4".
        san:         Standard algebraic notation, e.g. "Nxf7+".
        uci:         Long algebraic (UCI) notation, e.g. "g5f7" or "e7e8q".
        promotion:   Promotion piece symbol ("q", "r", "b", "n") or None.
        captured:    Captured piece symbol, lower-case, or None for quiet moves.
        check:       True if the move gives check (including mate).
        mate:        True if the move gives checkmate.
    """

    from_square: str
    to_square: str
    san: str
    uci: str
    promotion: str | None = None
    captured: str | None = None
    check: bool = False
    mate: bool = False

    @classmethod
    def from_move(cls, board: chess.Board, move: chess.Move) -> "MoveInfo":
        """Describe `move` as played from `board`. The board is not modified."""
        captured = None
        if board.is_en_passant(move):
            captured = "p"
        else:
            victim = board.piece_at(move.to_square)
            if victim is not None and victim.color != board.turn:
                captured = chess.piece_symbol(victim.piece_type)

        san = board.san(move)
        return cls(
            from_square=chess.square_name(move.from_square),
            to_square=chess.square_name(move.to_square),
            san=san,
            uci=move.uci(),
            promotion=chess.piece_symbol(move.promotion) if move.promotion else None,
            captured=captured,
            check=san.endswith(("+", "#")),
            mate=san.endswith("#"),
        )

    def matches(self, token: str) -> bool:
        """True if `token` names this move in SAN, UCI, or from+to form."""
        return token in (self.san, self.uci, self.from_square + self.to_square)


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of a successful move request.

    Attributes:
        move:   The chosen move.
        fen:    FEN of the position after the move.
        source: Where the move came from: "cache", "book", "oracle", or "search".
        score:  Root search score from the mover's perspective, when searched.
    """

    move: MoveInfo
    fen: str
    source: str
    score: int | None = None


def parse_position(fen: str) -> chess.Board:
    """
    Build a board from a FEN string.

    Raises:
        InvalidPosition: The FEN is malformed or describes an impossible
                         position (missing kings, pawns on the back rank, ...).
    """
    try:
        board = chess.Board(fen.strip())
    except ValueError as exc:
        raise InvalidPosition(f"invalid FEN {fen!r}: {exc}") from exc

    if not board.is_valid():
        raise InvalidPosition(f"invalid FEN {fen!r}: {board.status()!r}")
    return board


def apply_move(board: chess.Board, move: chess.Move) -> chess.Board:
    """Return a new board with `move` played. `board` itself is left unchanged."""
    child = board.copy()
    child.push(move)
    return child
