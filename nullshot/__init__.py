"""
NullShot chess move-selection engine.

This package picks moves for the NullShot chess backend: a bounded-depth
minimax search with alpha-beta pruning over a material-and-mobility
evaluation, fronted by a move cache, a small opening book and an optional
language-model oracle.

Modules:
    constants — Piece values, scores, difficulty tables, limits
    models    — Side, Difficulty, MoveInfo, MoveResult, position helpers
    errors    — InvalidPosition, SideMismatch, NoLegalMoves, OracleUnavailable
    config    — EngineConfig and its environment loader
    evaluate  — Static evaluation from a fixed side's perspective
    ordering  — Capture/check/center move ordering
    search    — Minimax with alpha-beta and the root move policy
    book      — Opening book for the first few moves
    cache     — Bounded insertion-ordered move cache
    oracle    — Language-model move oracle with strict validation
    chooser   — MoveChooser, the composed engine exposed to callers
"""
