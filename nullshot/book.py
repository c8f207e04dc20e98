"""
Opening book: a handful of hand-picked replies for the first moves.

Positions are keyed by the first four FEN fields (placement, side to move,
castling rights, en passant square) as normalised by python-chess, so the
move counters and an en passant square that no pawn can use do not prevent a
match. A hit picks uniformly among the listed moves.
"""

import random

import chess

from nullshot.constants import BOOK_MAX_FULLMOVE
from nullshot.models import Side

# Position key -> acceptable replies in SAN.
BOOK_LINES: dict[str, tuple[str, ...]] = {
    # Start position.
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq -": ("e4", "d4", "Nf3", "c4", "g3"),
    # 1.e4
    "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq -": ("e5", "c5", "e6", "c6"),
    # 1.d4
    "rnbqkbnr/pppppppp/8/8/3P4/8/PPP1PPPP/RNBQKBNR b KQkq -": ("d5", "Nf6", "e6"),
}


def position_key(board: chess.Board) -> str:
    return board.epd()


class OpeningBook:
    """Lookup of book replies for early positions."""

    def __init__(self, lines: dict[str, tuple[str, ...]] | None = None) -> None:
        self.lines = BOOK_LINES if lines is None else lines

    def lookup(self, board: chess.Board, side: Side, rng: random.Random) -> chess.Move | None:
        """
        Return a book move for `side`, or None when the position is not covered.

        Args:
            board: Current position. Not modified.
            side:  Side to choose for. Never matches when it is not to move.
            rng:   Random source used to pick among the listed moves.
        """
        if board.fullmove_number > BOOK_MAX_FULLMOVE or Side(side).color != board.turn:
            return None

        replies = self.lines.get(position_key(board))
        if not replies:
            return None

        moves = []
        for san in replies:
            try:
                moves.append(board.parse_san(san))
            except ValueError:
                continue
        if not moves:
            return None
        return rng.choice(moves)
