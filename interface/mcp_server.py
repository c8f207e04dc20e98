"""
MCP server exposing the move chooser as a tool.

Tool:
    make_chess_move(fen, side, difficulty="hard")
        Choose and play a move. Replies "Moved: <san>. New FEN: <fen>", or a
        short explanation when no move can be made.

Prompt:
    chess_strategy  — framing prompt for a model acting as the chess player.

Resource:
    chess://start   — FEN of the standard starting position.

Run over stdio with: python -m interface.mcp_server
"""

import logging

import chess
from mcp.server.fastmcp import FastMCP

from nullshot.chooser import MoveChooser
from nullshot.config import EngineConfig
from nullshot.errors import InvalidPosition, NoLegalMoves, SideMismatch

_log = logging.getLogger(__name__)

STRATEGY_PROMPT = (
    "You are NullShot AI, an expert chess player. Analyze the board and "
    "suggest strategic moves. Make sure your opponent does not win."
)


def make_chess_move(chooser: MoveChooser, fen: str, side: str, difficulty: str = "hard") -> str:
    """Run one move request and phrase the outcome for a tool result."""
    try:
        result = chooser.choose_move(fen, side, difficulty)
    except SideMismatch:
        return "Not your turn!"
    except NoLegalMoves:
        return "Game over!"
    except InvalidPosition as exc:
        return f"Invalid FEN: {exc}"
    return f"Moved: {result.move.san}. New FEN: {result.fen}"


def create_server(chooser: MoveChooser | None = None) -> FastMCP:
    """
    Build the MCP server around `chooser`.

    Args:
        chooser: Engine to serve. Built from the environment when omitted.
    """
    chooser = chooser or MoveChooser(EngineConfig.from_env())
    server = FastMCP(
        "nullshot-chess-ai",
        "MCP server that generates and validates chess moves for a FEN position.",
    )

    @server.tool(name="make_chess_move")
    def make_chess_move_tool(fen: str, side: str, difficulty: str = "hard") -> str:
        """Generate and validate a chess move based on the current board state.

        Parameters:
        - fen: current board state in FEN notation
        - side: "white" or "black", the side to move
        - difficulty: "easy", "medium" or "hard" (default "hard")
        """
        if side not in ("white", "black") or difficulty not in ("easy", "medium", "hard"):
            return "Invalid side or difficulty."
        return make_chess_move(chooser, fen, side, difficulty)

    @server.prompt(name="chess_strategy")
    def chess_strategy() -> str:
        """Prompt for a model to think like a chess player."""
        return STRATEGY_PROMPT

    @server.resource("chess://start")
    def start_position() -> str:
        """FEN of the standard starting position."""
        return chess.STARTING_FEN

    return server


def main() -> None:
    """Entry point: run the MCP server over stdio."""
    logging.basicConfig(level=logging.INFO)
    create_server().run()


if __name__ == "__main__":
    main()
