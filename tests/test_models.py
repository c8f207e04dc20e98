import chess
import pytest

from nullshot.errors import InvalidPosition, MoveSelectionError
from nullshot.models import Difficulty, MoveInfo, Side, apply_move, parse_position
from tests import positions


def test_side_colors() -> None:
    assert Side("white").color == chess.WHITE
    assert Side.from_color(chess.BLACK) is Side.BLACK
    assert Difficulty("hard") is Difficulty.HARD


def test_move_info_for_quiet_move() -> None:
    info = MoveInfo.from_move(chess.Board(), chess.Move.from_uci("g1f3"))
    assert info == MoveInfo(from_square="g1", to_square="f3", san="Nf3", uci="g1f3")


def test_move_info_for_capture_and_check() -> None:
    board = chess.Board(positions.QUEEN_TACTICS)
    capture = MoveInfo.from_move(board, chess.Move.from_uci("d1d5"))
    assert capture.captured == "p"
    assert not capture.check

    check = MoveInfo.from_move(board, chess.Move.from_uci("d1h5"))
    assert check.check and not check.mate
    assert check.captured is None


def test_move_info_for_en_passant() -> None:
    board = chess.Board(positions.EN_PASSANT)
    info = MoveInfo.from_move(board, chess.Move.from_uci("e5d6"))
    assert info.captured == "p"
    assert info.san == "exd6"


def test_move_info_for_promotion_and_mate() -> None:
    board = chess.Board(positions.PROMOTION)
    info = MoveInfo.from_move(board, chess.Move.from_uci("e7e8q"))
    assert info.promotion == "q"
    assert info.uci == "e7e8q"

    board = chess.Board(positions.BACK_RANK_WHITE)
    info = MoveInfo.from_move(board, chess.Move.from_uci("a1a8"))
    assert info.mate and info.check


def test_move_info_matches_all_notations() -> None:
    info = MoveInfo.from_move(chess.Board(), chess.Move.from_uci("e2e4"))
    assert info.matches("e4")
    assert info.matches("e2e4")
    assert not info.matches("d4")


def test_apply_move_returns_new_board() -> None:
    board = chess.Board()
    child = apply_move(board, chess.Move.from_uci("e2e4"))
    assert board.fen() == chess.STARTING_FEN
    assert child.piece_at(chess.E4) == chess.Piece(chess.PAWN, chess.WHITE)
    assert child.turn == chess.BLACK


def test_parse_position() -> None:
    assert parse_position(positions.START).fen() == positions.START
    with pytest.raises(InvalidPosition):
        parse_position("rnbqkbnr/pppppppp/8/8 w")
    with pytest.raises(MoveSelectionError):
        parse_position("8/8/8/8/8/8/8/8 w - - 0 1")
    with pytest.raises(ValueError):
        parse_position("garbage")
