"""
Oracle adapter: ask a language model for a move, trust nothing it says.

The oracle is an optional, best-effort source of moves. It gets the position,
the side to play, and the full list of legal moves, and is expected to answer
with one of them. Whatever comes back is checked against that exact list; a
move outside it is treated the same as no answer at all.

The timeout is a deadline for the whole exchange, not per socket operation:
the request runs on a worker thread and is abandoned once the deadline
passes, however slowly the server keeps sending.

Every failure (timeout, connection error, HTTP error, malformed body, unknown
move) ends as None from request_move() plus a warning in the log. The caller
then falls back to search. Nothing is raised to the caller.
"""

import json
import logging
import time
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout

import chess
import requests

from nullshot.config import EngineConfig
from nullshot.constants import ORACLE_API_VERSION, ORACLE_MAX_TOKENS, ORACLE_MODEL, ORACLE_URL
from nullshot.errors import OracleUnavailable
from nullshot.models import Difficulty, MoveInfo, Side

_log = logging.getLogger(__name__)

_INSTRUCTIONS: dict[str, str] = {
    "hard": (
        "Play like a 2500+ rated grandmaster:\n"
        "- Calculate 4-5 moves ahead\n"
        "- Prioritize forcing moves (checks, captures, threats)\n"
        "- Look for tactical patterns (forks, pins, skewers, discovered attacks)\n"
        "- Never leave a piece hanging and always take free material\n"
        "- Look for checkmate patterns"
    ),
    "medium": (
        "Play like a 1800 rated club player:\n"
        "- Calculate 3 moves ahead\n"
        "- Look for simple tactics (captures, checks)\n"
        "- Develop pieces logically and control the center\n"
        "- Keep your king sheltered behind pawns"
    ),
    "easy": (
        "Play like a casual beginner:\n"
        "- Develop pieces and control the center\n"
        "- Take material when it is obviously free"
    ),
}

# Characters an answer tends to be wrapped in.
_STRIP_CHARS = "\"'`*.,;:!()[] "

# Body read size for the streamed oracle reply.
_READ_CHUNK = 256


def build_prompt(board: chess.Board, side: Side, difficulty: Difficulty, moves: list[MoveInfo]) -> str:
    """The user message sent to the oracle."""
    legal = ", ".join(info.san for info in moves)
    return (
        f"You are an expert chess engine playing at {Difficulty(difficulty).value} level.\n\n"
        f"Position (FEN): {board.fen()}\n"
        f"You are playing as: {Side(side).value}\n\n"
        f"Legal moves available (SAN notation): {legal}\n\n"
        f"INSTRUCTIONS:\n{_INSTRUCTIONS[Difficulty(difficulty).value]}\n\n"
        "CRITICAL: You MUST respond with ONLY the move in SAN notation "
        '(e.g., "Nf3", "e4", "Qxf7+", "O-O"). No explanation, no preamble, '
        "just the move notation."
    )


def parse_suggestion(text: str) -> str:
    """Reduce a free-text answer to its first bare move token."""
    stripped = text.strip()
    if not stripped:
        return ""
    return stripped.split()[0].strip(_STRIP_CHARS)


def match_suggestion(token: str, moves: list[MoveInfo]) -> MoveInfo | None:
    """
    Find the legal move named by `token`.

    SAN, UCI and from+to forms are accepted. A SAN token that only differs
    from the legal SAN by a missing or extra check marker is accepted too.
    """
    if not token:
        return None
    for info in moves:
        if info.matches(token):
            return info
    bare = token.rstrip("+#")
    for info in moves:
        if info.san.rstrip("+#") == bare:
            return info
    return None


class MoveOracle(ABC):
    """
    Interface of an external move oracle.

    Subclasses implement request_move(). Implementations must return a move
    from `legal_moves` or None, and must not raise.
    """

    @abstractmethod
    def request_move(
        self,
        board: chess.Board,
        side: Side,
        difficulty: Difficulty,
        legal_moves: list[chess.Move],
        timeout_ms: int,
    ) -> chess.Move | None:
        raise NotImplementedError


class LLMOracle(MoveOracle):
    """
    Oracle backed by an Anthropic-style messages endpoint.

    Args:
        api_key: Credential sent as the x-api-key header.
        url:     Messages endpoint.
        model:   Model name sent in the request body.
        session: requests.Session to send through. A new one is created
                 when omitted.
    """

    def __init__(
        self,
        api_key: str,
        url: str = ORACLE_URL,
        model: str = ORACLE_MODEL,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.model = model
        self.session = session or requests.Session()
        self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="nullshot-oracle")

    @classmethod
    def from_config(cls, config: EngineConfig) -> "LLMOracle":
        if not config.oracle_api_key:
            raise ValueError("oracle_api_key is not configured")
        return cls(api_key=config.oracle_api_key, url=config.oracle_url, model=config.oracle_model)

    def request_move(
        self,
        board: chess.Board,
        side: Side,
        difficulty: Difficulty,
        legal_moves: list[chess.Move],
        timeout_ms: int,
    ) -> chess.Move | None:
        infos = [MoveInfo.from_move(board, move) for move in legal_moves]
        try:
            text = self._complete(build_prompt(board, side, difficulty, infos), timeout_ms)
            token = parse_suggestion(text)
            info = match_suggestion(token, infos)
            if info is None:
                raise OracleUnavailable(f"suggested move {text.strip()[:40]!r} is not legal")
        except OracleUnavailable as exc:
            _log.warning("oracle gave no usable move: %s", exc)
            return None

        _log.info("oracle suggested %s", info.san)
        return chess.Move.from_uci(info.uci)

    def _complete(self, prompt: str, timeout_ms: int) -> str:
        """
        Send one prompt and return the text of the reply.

        The caller waits at most `timeout_ms` in total. A request still in
        flight at the deadline is left to its worker, which stops reading
        at the same deadline and closes the response.

        Raises:
            OracleUnavailable: On timeout, transport or HTTP error, or a body
                               without a text reply.
        """
        payload = {
            "model": self.model,
            "max_tokens": ORACLE_MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": ORACLE_API_VERSION,
        }
        deadline = time.monotonic() + timeout_ms / 1000
        future = self._executor.submit(self._post, payload, headers, timeout_ms, deadline)
        try:
            status, body = future.result(timeout=max(0.0, deadline - time.monotonic()))
        except FutureTimeout as exc:
            future.cancel()
            raise OracleUnavailable(f"timed out after {timeout_ms} ms") from exc
        except requests.Timeout as exc:
            raise OracleUnavailable(f"timed out after {timeout_ms} ms") from exc
        except requests.RequestException as exc:
            raise OracleUnavailable(f"request failed: {exc}") from exc

        if status != 200:
            raise OracleUnavailable(f"HTTP {status}")

        try:
            data = json.loads(body)
            text = data["content"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise OracleUnavailable(f"malformed response: {exc!r}") from exc

        if not isinstance(text, str):
            raise OracleUnavailable("response text is not a string")
        return text

    def _post(self, payload: dict, headers: dict[str, str], timeout_ms: int, deadline: float) -> tuple[int, bytes]:
        """Run the POST on a worker thread, reading the body until `deadline`."""
        response = self.session.post(
            self.url, json=payload, headers=headers, timeout=timeout_ms / 1000, stream=True
        )
        try:
            chunks = []
            for chunk in response.iter_content(chunk_size=_READ_CHUNK):
                if time.monotonic() > deadline:
                    raise OracleUnavailable(f"timed out after {timeout_ms} ms")
                chunks.append(chunk)
            return response.status_code, b"".join(chunks)
        finally:
            response.close()

    def close(self) -> None:
        """Release the worker thread without waiting for a request in flight."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        self.session.close()
