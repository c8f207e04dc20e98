"""
MoveChooser: the composed move-selection engine.

One MoveChooser owns a move cache, an opening book, an optional oracle and a
random source. Whatever hosts the engine (the web app, the UCI loop, the MCP
server, a test) constructs one and passes it around; there is no module-level
instance.

choose_move() resolves a request in this order:

    cache -> opening book -> mate in one -> oracle (hard only) -> search

and caches the answer. Usage errors (bad FEN, wrong side, finished game) are
raised before any of these steps; oracle failures never escape.
"""

import logging
import random
import time

import chess

from nullshot.book import OpeningBook
from nullshot.cache import CacheKey, MoveCache
from nullshot.config import EngineConfig
from nullshot.constants import CHECKMATE_SCORE
from nullshot.errors import NoLegalMoves, SideMismatch
from nullshot.models import Difficulty, MoveInfo, MoveResult, Side, apply_move, parse_position
from nullshot.oracle import LLMOracle, MoveOracle
from nullshot.ordering import order_moves
from nullshot.search import SearchStats, best_move, find_mate_in_one

_log = logging.getLogger(__name__)


class MoveChooser:
    """
    Stateful move chooser for one server process or one game session.

    Args:
        config: Engine tunables. Defaults to EngineConfig().
        oracle: Oracle to consult on hard difficulty. When omitted, an
                LLMOracle is built if the config carries an API key.
        book:   Opening book. Defaults to the built-in lines.
        rng:    Random source for book picks and search noise. Defaults to
                random.Random(config.seed).

    Attributes:
        cache: The chooser's MoveCache.
        stats: Cumulative search counters across all requests.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        oracle: MoveOracle | None = None,
        book: OpeningBook | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        if oracle is None and self.config.oracle_configured:
            oracle = LLMOracle.from_config(self.config)
        self.oracle = oracle
        self.book = book or OpeningBook()
        self.rng = rng or random.Random(self.config.seed)
        self.cache = MoveCache(self.config.cache_size)
        self.stats = SearchStats()

    def choose_move(self, fen: str, side: Side | str, difficulty: Difficulty | str = Difficulty.MEDIUM) -> MoveResult:
        """
        Pick a move for `side` in the position `fen`.

        Args:
            fen:        Current position in FEN.
            side:       "white" or "black"; must be the side to move.
            difficulty: "easy", "medium" or "hard".

        Returns:
            MoveResult with the move, the FEN after it, and its source.

        Raises:
            InvalidPosition: Malformed FEN.
            SideMismatch:    `side` is not to move.
            NoLegalMoves:    The game is already over.
            ValueError:      Unknown side or difficulty name.
        """
        side = Side(side)
        difficulty = Difficulty(difficulty)
        board = parse_position(fen)

        if side.color != board.turn:
            raise SideMismatch(side.value, Side.from_color(board.turn).value)

        legal = list(board.legal_moves)
        if not legal:
            raise NoLegalMoves(board.result())

        key = CacheKey(board.fen(), side.value, difficulty.value)
        cached = self.cache.get(key)
        if cached is not None:
            return self._result(board, board.parse_san(cached), "cache")

        start = time.monotonic()
        score = None
        source = "book"
        move = self.book.lookup(board, side, self.rng)

        if move is None:
            move = find_mate_in_one(board, order_moves(board, legal))
            if move is not None:
                source, score = "search", CHECKMATE_SCORE

        if move is None and self.oracle is not None and difficulty is Difficulty.HARD:
            source = "oracle"
            try:
                move = self.oracle.request_move(board, side, difficulty, legal, self.config.oracle_timeout_ms)
            except Exception:
                _log.warning("oracle raised; falling back to search", exc_info=True)
                move = None
            if move is not None and move not in legal:
                _log.warning("discarding oracle move %s: not legal", move.uci())
                move = None

        if move is None:
            source = "search"
            nodes_before = self.stats.nodes
            result = best_move(
                board,
                side,
                difficulty,
                self.rng,
                candidate_limit=self.config.candidate_limit,
                randomize=self.config.randomize,
                stats=self.stats,
            )
            move, score = result.move, result.score
            _log.debug("search visited %d nodes", self.stats.nodes - nodes_before)

        outcome = self._result(board, move, source, score)
        self.cache.put(key, outcome.move.san)

        _log.info(
            "move=%s source=%s difficulty=%s time_ms=%d fen=%s",
            outcome.move.san,
            source,
            difficulty.value,
            int((time.monotonic() - start) * 1000),
            key.fen[:40],
        )
        return outcome

    def reset(self) -> None:
        """Forget cached answers and counters, as for a new game."""
        self.cache.clear()
        self.stats = SearchStats()

    @staticmethod
    def _result(board: chess.Board, move: chess.Move, source: str, score: int | None = None) -> MoveResult:
        return MoveResult(
            move=MoveInfo.from_move(board, move),
            fen=apply_move(board, move).fen(),
            source=source,
            score=score,
        )
