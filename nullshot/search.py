"""
Search: bounded-depth minimax with alpha-beta pruning.

best_move() is the root driver used by the move chooser; minimax() is the
recursive tree walk beneath it.

Root policy:

1. A position with a single legal move returns it without searching.
2. Any move that mates immediately is returned without searching.
3. When the position has more than `candidate_limit` legal moves, only the
   tactical moves (captures and checks) plus the first `candidate_limit`
   ordered moves are searched. This bounds latency at the cost of width.
4. Each candidate is searched to DIFFICULTY_DEPTH - 1 further plies with a
   fresh window and its score is perturbed by uniform noise of half-width
   RANDOM_SPREAD[difficulty], so near-equal moves are not always resolved
   the same way. Passing randomize=False removes the noise.

The tree walk never mutates a board. Every simulated move produces a new
board through models.apply_move, so a board passed in by a caller is safe to
share between concurrent requests.

Scores are always taken from one perspective: the side choosing the move.
Maximizing plies are that side's, minimizing plies are the opponent's.
"""

import logging
import random
from dataclasses import dataclass

import chess

from nullshot.constants import (
    CANDIDATE_LIMIT,
    CHECKMATE_SCORE,
    DIFFICULTY_DEPTH,
    INFINITY,
    RANDOM_SPREAD,
)
from nullshot.errors import NoLegalMoves, SideMismatch
from nullshot.evaluate import evaluate
from nullshot.models import Difficulty, Side, apply_move
from nullshot.ordering import is_tactical, order_moves

_log = logging.getLogger(__name__)


@dataclass
class SearchStats:
    """
    Counters for one or more searches.

    Attributes:
        nodes:    Positions visited by minimax(), leaves included.
        searches: Root searches run by best_move() (shortcuts excluded).
    """

    nodes: int = 0
    searches: int = 0


@dataclass(frozen=True)
class SearchResult:
    """Root move chosen by best_move() and its unperturbed score."""

    move: chess.Move
    score: int


def minimax(
    board: chess.Board,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    perspective: chess.Color,
    stats: SearchStats | None = None,
) -> int:
    """
    Minimax value of `board` searched `depth` plies deep, with alpha-beta.

    Args:
        board:       Position to search. Not modified.
        depth:       Remaining plies. At 0 the static evaluation is returned.
        alpha:       Best score the maximizing side can already guarantee.
        beta:        Best score the minimizing side can already guarantee.
        maximizing:  True when the side to move is `perspective`.
        perspective: Colour the scores are reported for.
        stats:       Optional counters updated in place.

    Returns:
        The score of `board` for `perspective`. When the window closes
        (beta <= alpha) the remaining siblings are skipped and the returned
        value is a bound rather than the exact minimax value.
    """
    if stats is not None:
        stats.nodes += 1

    if depth == 0 or board.is_game_over():
        return evaluate(board, perspective)

    moves = order_moves(board, board.legal_moves)

    if maximizing:
        best = -INFINITY
        for move in moves:
            value = minimax(apply_move(board, move), depth - 1, alpha, beta, False, perspective, stats)
            best = max(best, value)
            alpha = max(alpha, value)
            if beta <= alpha:
                break
        return best

    best = INFINITY
    for move in moves:
        value = minimax(apply_move(board, move), depth - 1, alpha, beta, True, perspective, stats)
        best = min(best, value)
        beta = min(beta, value)
        if beta <= alpha:
            break
    return best


def find_mate_in_one(board: chess.Board, moves: list[chess.Move]) -> chess.Move | None:
    """Return the first of `moves` that checkmates immediately, or None."""
    for move in moves:
        if board.gives_check(move) and apply_move(board, move).is_checkmate():
            return move
    return None


def select_candidates(board: chess.Board, ordered: list[chess.Move], limit: int) -> list[chess.Move]:
    """
    Restrict the root moves to the tactical ones plus the first `limit`.

    Order is preserved. When there are at most `limit` moves all are kept.
    """
    if len(ordered) <= limit:
        return ordered
    leading = set(ordered[:limit])
    return [move for move in ordered if move in leading or is_tactical(board, move)]


def best_move(
    board: chess.Board,
    side: Side,
    difficulty: Difficulty,
    rng: random.Random,
    candidate_limit: int = CANDIDATE_LIMIT,
    randomize: bool = True,
    stats: SearchStats | None = None,
) -> SearchResult:
    """
    Choose a move for `side` in `board` at the given difficulty.

    Args:
        board:           Current position. Not modified.
        side:            Side to choose for; must be the side to move.
        difficulty:      Selects search depth and noise level.
        rng:             Random source for the root noise.
        candidate_limit: Leading ordered moves always searched at the root.
        randomize:       Apply root noise. False makes the choice repeatable.
        stats:           Optional counters updated in place.

    Returns:
        SearchResult with the chosen move and its unperturbed score for `side`.

    Raises:
        SideMismatch: `side` is not to move in `board`.
        NoLegalMoves: The position has no legal moves.
    """
    side = Side(side)
    difficulty = Difficulty(difficulty)
    if side.color != board.turn:
        raise SideMismatch(side.value, Side.from_color(board.turn).value)

    legal = list(board.legal_moves)
    if not legal:
        raise NoLegalMoves(board.result())

    if len(legal) == 1:
        return SearchResult(move=legal[0], score=evaluate(apply_move(board, legal[0]), side.color))

    ordered = order_moves(board, legal)

    mate = find_mate_in_one(board, ordered)
    if mate is not None:
        return SearchResult(move=mate, score=CHECKMATE_SCORE)

    depth = DIFFICULTY_DEPTH[difficulty.value]
    spread = RANDOM_SPREAD[difficulty.value] if randomize else 0
    candidates = select_candidates(board, ordered, candidate_limit)

    if stats is not None:
        stats.searches += 1

    chosen = candidates[0]
    chosen_score = -INFINITY
    best_adjusted = float("-inf")

    for move in candidates:
        value = minimax(
            apply_move(board, move),
            depth - 1,
            -INFINITY,
            INFINITY,
            False,
            side.color,
            stats,
        )
        adjusted = value + rng.uniform(-spread, spread) if spread else value
        if adjusted > best_adjusted:
            best_adjusted = adjusted
            chosen = move
            chosen_score = value

    _log.debug(
        "searched %d/%d root moves depth=%d best=%s score=%d",
        len(candidates),
        len(legal),
        depth,
        chosen.uci(),
        chosen_score,
    )
    return SearchResult(move=chosen, score=chosen_score)
