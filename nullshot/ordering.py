"""
Move ordering for alpha-beta search.

Alpha-beta prunes most when the strongest reply is searched first. Forcing
moves are the usual suspects, so each move gets a small heuristic score:

    capture                     +CAPTURE_BONUS
    gives check                 +CHECK_BONUS
    lands on d4, e4, d5 or e5   +CENTER_BONUS

Moves are then sorted by descending score. Python's sort is stable, so moves
with equal scores keep the rules engine's enumeration order. Ordering never
adds or removes moves.
"""

from typing import Iterable

import chess

from nullshot.constants import CAPTURE_BONUS, CENTER_BONUS, CENTER_SQUARES, CHECK_BONUS


def is_tactical(board: chess.Board, move: chess.Move) -> bool:
    """True if `move` captures or gives check."""
    return board.is_capture(move) or board.gives_check(move)


def move_score(board: chess.Board, move: chess.Move) -> int:
    score = 0
    if board.is_capture(move):
        score += CAPTURE_BONUS
    if board.gives_check(move):
        score += CHECK_BONUS
    if move.to_square in CENTER_SQUARES:
        score += CENTER_BONUS
    return score


def order_moves(board: chess.Board, moves: Iterable[chess.Move]) -> list[chess.Move]:
    """
    Return `moves` sorted best-first for search.

    Args:
        board: Position the moves are played from. Not modified.
        moves: Legal moves in that position.

    Returns:
        A new list holding the same moves, highest heuristic score first.
    """
    return sorted(moves, key=lambda move: move_score(board, move), reverse=True)
