"""
Engine constants: piece values, scores, difficulty tables, and limits.

All numeric constants used by the move-selection engine live here so that the
other modules never need to introduce magic numbers of their own. Anything a
deployment may want to tune at runtime is mirrored in config.EngineConfig,
which takes its defaults from this module.

Piece values follow the standard centipawn convention (1 pawn = 100 cp).
"""

import chess

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------
# The king carries a large value so that it is counted like any other piece.
# Both kings are always on the board, so their values cancel in the material
# sum and never distort the score.

PAWN_VALUE: int = 100
KNIGHT_VALUE: int = 320
BISHOP_VALUE: int = 330
ROOK_VALUE: int = 500
QUEEN_VALUE: int = 900
KING_VALUE: int = 20_000

PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# Scores are integers so they compare exactly in alpha-beta. INFINITY only
# seeds the search window and must exceed every reachable score.

CHECKMATE_SCORE: int = 20_000
DRAW_SCORE: int = 0
INFINITY: int = 1_000_000

# Points per legal move available to the side to move.
MOBILITY_WEIGHT: int = 5

# ---------------------------------------------------------------------------
# Move ordering
# ---------------------------------------------------------------------------

CAPTURE_BONUS: int = 100
CHECK_BONUS: int = 80
CENTER_BONUS: int = 30
CENTER_SQUARES: frozenset[int] = frozenset({chess.D4, chess.E4, chess.D5, chess.E5})

# ---------------------------------------------------------------------------
# Difficulty
# ---------------------------------------------------------------------------
# Keys are Difficulty values ("easy", "medium", "hard"). Depth is in plies.
# Spread is the half-width of the uniform noise added to each root score.

DIFFICULTY_DEPTH: dict[str, int] = {
    "easy": 2,
    "medium": 3,
    "hard": 4,
}

RANDOM_SPREAD: dict[str, int] = {
    "easy": 50,
    "medium": 25,
    "hard": 10,
}

# Root breadth limit: tactical moves plus this many leading ordered moves.
CANDIDATE_LIMIT: int = 10

# ---------------------------------------------------------------------------
# Opening book, cache, oracle
# ---------------------------------------------------------------------------

BOOK_MAX_FULLMOVE: int = 3

CACHE_SIZE: int = 1_000

ORACLE_TIMEOUT_MS: int = 8_000
ORACLE_URL: str = "https://api.anthropic.com/v1/messages"
ORACLE_MODEL: str = "claude-sonnet-4-20250514"
ORACLE_API_VERSION: str = "2023-06-01"
ORACLE_MAX_TOKENS: int = 1_024
