import chess

from nullshot.constants import CAPTURE_BONUS, CENTER_BONUS, CHECK_BONUS
from nullshot.ordering import is_tactical, move_score, order_moves
from nullshot.search import select_candidates
from tests import positions


def test_order_is_a_permutation_of_legal_moves() -> None:
    board = chess.Board(positions.ITALIAN)
    legal = list(board.legal_moves)
    ordered = order_moves(board, legal)
    assert len(ordered) == len(legal)
    assert set(ordered) == set(legal)


def test_capture_on_center_square_comes_first() -> None:
    board = chess.Board(positions.QUEEN_TACTICS)
    ordered = order_moves(board, board.legal_moves)
    assert ordered[0] == chess.Move.from_uci("d1d5")
    assert move_score(board, ordered[0]) == CAPTURE_BONUS + CENTER_BONUS


def test_checks_come_before_quiet_moves() -> None:
    board = chess.Board(positions.QUEEN_TACTICS)
    ordered = order_moves(board, board.legal_moves)
    checks = {chess.Move.from_uci(u) for u in ("d1e2", "d1h5", "d1a4")}
    assert set(ordered[1:4]) == checks
    for move in ordered[1:4]:
        assert move_score(board, move) == CHECK_BONUS
    assert all(move_score(board, m) < CHECK_BONUS for m in ordered[4:])


def test_ties_keep_enumeration_order() -> None:
    board = chess.Board(positions.QUEEN_TACTICS)
    legal = list(board.legal_moves)
    ordered = order_moves(board, legal)
    quiet_in_legal = [m for m in legal if move_score(board, m) == 0]
    quiet_in_ordered = [m for m in ordered if move_score(board, m) == 0]
    assert quiet_in_ordered == quiet_in_legal


def test_is_tactical() -> None:
    board = chess.Board(positions.QUEEN_TACTICS)
    assert is_tactical(board, chess.Move.from_uci("d1d5"))
    assert is_tactical(board, chess.Move.from_uci("d1h5"))
    assert not is_tactical(board, chess.Move.from_uci("d1d4"))


def test_candidates_keep_all_moves_under_the_limit() -> None:
    board = chess.Board(positions.PAWN_RACE)
    ordered = order_moves(board, board.legal_moves)
    assert select_candidates(board, ordered, 12) == ordered


def test_candidates_are_tactical_moves_plus_leading_moves() -> None:
    board = chess.Board(positions.QUEEN_TACTICS)
    ordered = order_moves(board, board.legal_moves)
    candidates = select_candidates(board, ordered, 1)
    assert candidates == [m for m in ordered if is_tactical(board, m)]
    assert len(candidates) == 4

    candidates = select_candidates(board, ordered, 6)
    assert candidates == ordered[:6]


def test_candidates_from_quiet_start_position() -> None:
    board = chess.Board()
    ordered = order_moves(board, board.legal_moves)
    assert select_candidates(board, ordered, 8) == ordered[:8]
