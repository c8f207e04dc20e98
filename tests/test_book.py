import random

import chess

from nullshot.book import BOOK_LINES, OpeningBook, position_key
from nullshot.models import Side
from tests import positions


def test_start_position_book_moves() -> None:
    book = OpeningBook()
    board = chess.Board(positions.START)
    seen = set()
    rng = random.Random(0)
    for _ in range(50):
        move = book.lookup(board, Side.WHITE, rng)
        assert move is not None
        seen.add(board.san(move))
    assert seen <= {"e4", "d4", "Nf3", "c4", "g3"}
    assert len(seen) > 1


def test_replies_to_e4_and_d4() -> None:
    book = OpeningBook()
    rng = random.Random(0)

    board = chess.Board(positions.AFTER_E4)
    assert board.san(book.lookup(board, Side.BLACK, rng)) in {"e5", "c5", "e6", "c6"}

    board = chess.Board(positions.AFTER_D4)
    assert board.san(book.lookup(board, Side.BLACK, rng)) in {"d5", "Nf6", "e6"}


def test_key_ignores_move_counters_and_unusable_en_passant() -> None:
    board = chess.Board(positions.AFTER_E4)
    assert position_key(board) in BOOK_LINES

    played = chess.Board()
    played.push_san("e4")
    assert position_key(played) == position_key(board)


def test_unlisted_position_misses() -> None:
    board = chess.Board(positions.ITALIAN)
    assert OpeningBook().lookup(board, Side.WHITE, random.Random(0)) is None


def test_wrong_side_misses() -> None:
    board = chess.Board(positions.START)
    assert OpeningBook().lookup(board, Side.BLACK, random.Random(0)) is None


def test_late_fullmove_number_misses() -> None:
    board = chess.Board("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 4")
    assert OpeningBook().lookup(board, Side.WHITE, random.Random(0)) is None


def test_illegal_listed_moves_are_skipped() -> None:
    key = position_key(chess.Board())
    book = OpeningBook({key: ("Ke2", "Nf3")})
    move = book.lookup(chess.Board(), Side.WHITE, random.Random(0))
    assert move == chess.Move.from_uci("g1f3")

    book = OpeningBook({key: ("Ke2",)})
    assert book.lookup(chess.Board(), Side.WHITE, random.Random(0)) is None
