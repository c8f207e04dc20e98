#!/usr/bin/env python3
"""
Benchmark: nodes searched and time per move at each difficulty.

Runs the move chooser in-process on a fixed set of positions with root noise
disabled, so the same tree is searched on every run. Compare the node counts
before and after a change to ordering or pruning; compare the times to see
whether the breadth limit keeps hard difficulty responsive.

Usage: python -m tools.bench [easy|medium|hard ...]
"""
import sys
import time

from nullshot.chooser import MoveChooser
from nullshot.config import EngineConfig
from nullshot.models import Difficulty, Side, parse_position

# Fixed forever: same positions for every comparison. None of them are in
# the opening book, so every run exercises the search.
POSITIONS = [
    ("Italian",      "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Complex mid",  "r2q1rk1/ppp2ppp/2np1n2/2b1p1B1/2B1P1b1/2NP1N2/PPP2PPP/R2Q1RK1 w - - 0 8"),
    ("Back rank",    "6k1/5ppp/8/8/8/8/5PPP/R5K1 w - - 0 1"),
    ("Queen ending", "6k1/ppp2ppp/8/3p4/3P4/8/PPP2PPP/6K1 w - - 0 1"),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
    ("Pawn race",    "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


def run_position(label: str, fen: str, difficulty: Difficulty) -> dict:
    """Choose one move with a fresh chooser and return its metrics.

    Args:
        label: Human-readable position name for display.
        fen: Position to search.
        difficulty: Difficulty to search at.

    Returns:
        Dict with keys: label, difficulty, move, source, score, nodes, time_ms.
    """
    chooser = MoveChooser(EngineConfig(randomize=False, oracle_api_key=None))
    side = Side.from_color(parse_position(fen).turn)

    start = time.monotonic()
    result = chooser.choose_move(fen, side, difficulty)
    time_ms = int((time.monotonic() - start) * 1000)

    return {
        "label": label,
        "difficulty": difficulty.value,
        "move": result.move.san,
        "source": result.source,
        "score": result.score if result.score is not None else 0,
        "nodes": chooser.stats.nodes,
        "time_ms": time_ms,
    }


def main(argv: list[str] | None = None) -> None:
    """Run all benchmark positions and print a summary table."""
    names = argv if argv else [d.value for d in Difficulty]
    difficulties = [Difficulty(name) for name in names]

    print(
        f"{'Position':<14} {'Level':<7} {'Move':<7} {'Source':<7} {'Score':>6} "
        f"{'Nodes':>9} {'Time(ms)':>9}"
    )
    print("-" * 66)

    for difficulty in difficulties:
        results = [run_position(label, fen, difficulty) for label, fen in POSITIONS]
        for r in results:
            print(
                f"{r['label']:<14} {r['difficulty']:<7} {r['move']:<7} {r['source']:<7} "
                f"{r['score']:>6} {r['nodes']:>9,} {r['time_ms']:>9,}"
            )
        avg_nodes = sum(r["nodes"] for r in results) // len(results)
        avg_time = sum(r["time_ms"] for r in results) // len(results)
        print(
            f"{'AVERAGE':<14} {difficulty.value:<7} {'':<7} {'':<7} {'':>6} "
            f"{avg_nodes:>9,} {avg_time:>9,}"
        )
        print("-" * 66)


if __name__ == "__main__":
    main(sys.argv[1:])
