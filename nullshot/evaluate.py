"""
Static evaluation: material plus mobility, scored for a chosen side.

The search in this package is a classical two-sided minimax rather than
negamax, so the evaluation is always taken from one fixed perspective (the
side the engine is choosing a move for) instead of from the side to move.
The maximizing plies of the search belong to that perspective side.

The raw score is accumulated White-positive and flipped at the end when the
perspective side is Black. This keeps the function exactly antisymmetric:

    evaluate(board, WHITE) == -evaluate(board, BLACK)

for every non-terminal position.
"""

import chess

from nullshot.constants import CHECKMATE_SCORE, DRAW_SCORE, MOBILITY_WEIGHT, PIECE_VALUES


def material(board: chess.Board) -> int:
    """Material balance in centipawns, White minus Black."""
    score = 0
    for piece_type, value in PIECE_VALUES.items():
        score += value * len(board.pieces(piece_type, chess.WHITE))
        score -= value * len(board.pieces(piece_type, chess.BLACK))
    return score


def evaluate(board: chess.Board, perspective: chess.Color) -> int:
    """
    Centipawn score of `board` as seen by `perspective`.

    Terminal positions short-circuit: a checkmate is worth CHECKMATE_SCORE to
    the side that delivered it and -CHECKMATE_SCORE to the side that is mated
    (the side to move); any drawn ending scores DRAW_SCORE.

    Otherwise the score is material (PIECE_VALUES, White positive) plus
    MOBILITY_WEIGHT for each legal move of the side to move, counted in that
    side's favour.

    Args:
        board:       Position to score. Not modified.
        perspective: chess.WHITE or chess.BLACK. Positive results favour it.

    Returns:
        Integer score; positive is good for `perspective`.
    """
    if board.is_checkmate():
        return -CHECKMATE_SCORE if board.turn == perspective else CHECKMATE_SCORE
    if board.is_game_over():
        return DRAW_SCORE

    mobility = MOBILITY_WEIGHT * board.legal_moves.count()
    raw = material(board) + (mobility if board.turn == chess.WHITE else -mobility)

    return raw if perspective == chess.WHITE else -raw
