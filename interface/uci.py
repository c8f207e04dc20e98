"""
UCI (Universal Chess Interface) protocol handler.

Lets chess GUIs and match runners (cutechess-cli and the like) play against
the move chooser. The engine reads commands from stdin and writes responses
to stdout, flushing every line.

Protocol overview:
    GUI → Engine: uci, isready, setoption, ucinewgame, position, go, stop, quit
    Engine → GUI: id name, id author, option, uciok, readyok, info, bestmove

Strength is set with the Difficulty option rather than by time control:

    setoption name Difficulty value hard

Time-control arguments to "go" are accepted and ignored; search depth is
fixed by difficulty.

Threading model:
    The UCI loop runs on the main thread. "go" starts choose_move() on a
    daemon thread so "isready" is still answered while the engine thinks.
    A search cannot be interrupted; "stop" waits for it to finish.

Critical rule: NEVER print to stdout except for valid UCI responses.
Diagnostics go through logging, which writes to stderr.
"""

import logging
import sys
import threading

import chess

from nullshot.chooser import MoveChooser
from nullshot.config import EngineConfig
from nullshot.errors import MoveSelectionError
from nullshot.models import Difficulty, Side

_log = logging.getLogger(__name__)


def _send(line: str) -> None:
    """Write one UCI line to stdout and flush immediately."""
    print(line, flush=True)


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Attributes:
        board:         Current position, updated by "position" commands.
        chooser:       Engine used for "go".
        difficulty:    Current Difficulty option.
        search_thread: The active search thread, or None.
    """

    def __init__(self, chooser: MoveChooser | None = None) -> None:
        self.board: chess.Board = chess.Board()
        self.chooser: MoveChooser = chooser or MoveChooser(EngineConfig.from_env())
        self.difficulty: Difficulty = Difficulty.MEDIUM
        self.search_thread: threading.Thread | None = None

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        """Identify the engine and list its options."""
        _send("id name NullShot")
        _send("id author NullShot Chess")
        _send(
            "option name Difficulty type combo default medium "
            "var easy var medium var hard"
        )
        _send("uciok")

    def handle_isready(self) -> None:
        _send("readyok")

    def handle_setoption(self, tokens: list[str]) -> None:
        """
        Apply "setoption name <name> value <value>".

        Only Difficulty is recognised. Unknown options and bad values are
        logged and ignored.
        """
        if "name" not in tokens or "value" not in tokens:
            _log.warning("uci: malformed setoption: %s", " ".join(tokens))
            return
        name = " ".join(tokens[tokens.index("name") + 1:tokens.index("value")])
        value = " ".join(tokens[tokens.index("value") + 1:])

        if name.lower() != "difficulty":
            _log.warning("uci: unknown option %r", name)
            return
        try:
            self.difficulty = Difficulty(value.lower())
        except ValueError:
            _log.warning("uci: bad difficulty %r", value)

    def handle_ucinewgame(self) -> None:
        """Reset the board and forget cached answers from the previous game."""
        self._stop_search()
        self.board = chess.Board()
        self.chooser.reset()

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos [moves e2e4 e7e5 ...]
            position fen <FEN> [moves e2e4 e7e5 ...]

        Args:
            tokens: The command tokens with "position" already stripped.
        """
        if not tokens:
            return

        if "moves" in tokens:
            moves_idx = tokens.index("moves")
            move_tokens = tokens[moves_idx + 1:]
        else:
            moves_idx = len(tokens)
            move_tokens = []

        try:
            if tokens[0] == "startpos":
                board = chess.Board()
            elif tokens[0] == "fen":
                board = chess.Board(" ".join(tokens[1:moves_idx]))
            else:
                _log.warning("uci: unknown position type: %s", tokens[0])
                return
        except ValueError as exc:
            _log.warning("uci: invalid FEN in position command: %s", exc)
            return

        # Replay the move list; stop at the first illegal move.
        for uci_move in move_tokens:
            try:
                move = chess.Move.from_uci(uci_move)
            except ValueError:
                _log.warning("uci: unparsable move in position command: %s", uci_move)
                break
            if move not in board.legal_moves:
                _log.warning("uci: illegal move in position command: %s", uci_move)
                break
            board.push(move)

        self.board = board

    def handle_go(self, tokens: list[str]) -> None:
        """
        Start choosing a move for the current position on a background thread.

        Args:
            tokens: The command tokens with "go" already stripped. Ignored.
        """
        self._stop_search()

        fen = self.board.fen()
        side = Side.from_color(self.board.turn)
        difficulty = self.difficulty

        def search_and_reply() -> None:
            try:
                result = self.chooser.choose_move(fen, side, difficulty)
            except MoveSelectionError as exc:
                _log.info("uci: no move: %s", exc)
                _send("bestmove (none)")
                return
            except Exception:
                _log.exception("uci: search error")
                _send("bestmove (none)")
                return
            if result.score is not None:
                _send(f"info score cp {result.score} string source {result.source}")
            else:
                _send(f"info string source {result.source}")
            _send(f"bestmove {result.move.uci}")

        self.search_thread = threading.Thread(target=search_and_reply, daemon=True)
        self.search_thread.start()

    def handle_stop(self) -> None:
        self._stop_search()

    def handle_quit(self) -> None:
        self._stop_search()
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _stop_search(self) -> None:
        """Wait for the running search, if any, to send its bestmove."""
        if self.search_thread is not None and self.search_thread.is_alive():
            self.search_thread.join()
        self.search_thread = None


def run_uci_loop(handler: UciHandler | None = None) -> None:
    """
    Main UCI protocol loop.

    Reads lines from stdin and dispatches each command to the UciHandler
    until "quit" or end of input. Unknown commands are ignored, as the UCI
    protocol requires. An error inside one command is logged and the loop
    carries on, so a single bad command does not forfeit a game.
    """
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    handler = handler or UciHandler()

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command, args = tokens[0], tokens[1:]

        try:
            if command == "uci":
                handler.handle_uci()
            elif command == "isready":
                handler.handle_isready()
            elif command == "setoption":
                handler.handle_setoption(args)
            elif command == "ucinewgame":
                handler.handle_ucinewgame()
            elif command == "position":
                handler.handle_position(args)
            elif command == "go":
                handler.handle_go(args)
            elif command == "stop":
                handler.handle_stop()
            elif command == "quit":
                handler.handle_quit()
            else:
                _log.debug("uci: ignoring unknown command: %r", command)
        except Exception:
            _log.exception("uci: unhandled error for command %r", command)

    handler.handle_stop()


if __name__ == "__main__":
    run_uci_loop()
