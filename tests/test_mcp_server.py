import asyncio

import pytest
from mcp.server.fastmcp import FastMCP

from interface.mcp_server import create_server, make_chess_move
from nullshot.chooser import MoveChooser
from nullshot.config import EngineConfig
from tests import positions


@pytest.fixture
def chooser() -> MoveChooser:
    return MoveChooser(EngineConfig(seed=0))


def test_make_chess_move_reports_move_and_fen(chooser: MoveChooser) -> None:
    text = make_chess_move(chooser, positions.BACK_RANK_WHITE, "white", "easy")
    assert text == "Moved: Ra8#. New FEN: R5k1/5ppp/8/8/8/8/5PPP/6K1 b - - 1 1"


def test_make_chess_move_wrong_side(chooser: MoveChooser) -> None:
    assert make_chess_move(chooser, positions.START, "black") == "Not your turn!"


def test_make_chess_move_game_over(chooser: MoveChooser) -> None:
    assert make_chess_move(chooser, positions.MATED_BLACK, "black") == "Game over!"


def test_make_chess_move_invalid_fen(chooser: MoveChooser) -> None:
    assert make_chess_move(chooser, "nonsense", "white").startswith("Invalid FEN")


def test_server_registers_tool(chooser: MoveChooser) -> None:
    server = create_server(chooser)
    assert isinstance(server, FastMCP)
    tools = asyncio.run(server.list_tools())
    assert "make_chess_move" in {tool.name for tool in tools}
    prompts = asyncio.run(server.list_prompts())
    assert "chess_strategy" in {prompt.name for prompt in prompts}
