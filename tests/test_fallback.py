import pytest
from hypothesis import given, strategies as st

from core.domain.symbols import Symbol
from core.errors import NoMovesAvailableError
from core.services.fallback import LINES, choose_fallback_move, empty_cells, find_winning_move

boards_with_space = st.lists(st.sampled_from(["X", "O", "-"]), min_size=9, max_size=9).filter(lambda b: "-" in b)
symbols = st.sampled_from([Symbol.X, Symbol.O])


def test_lines_are_rows_columns_then_diagonals():
    assert LINES == (
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        (0, 4, 8),
        (2, 4, 6),
    )


def test_takes_winning_move():
    board = ["O", "O", "-", "X", "X", "-", "-", "-", "-"]
    assert choose_fallback_move(board, "O") == 2


def test_first_winning_line_in_declared_order_wins_tie():
    # Row 2 completes at 8, column 1 at 1, anti-diagonal at 2: row comes first.
    board = ["X", "-", "-", "X", "O", "X", "O", "O", "-"]
    assert choose_fallback_move(board, Symbol.O) == 8


def test_blocks_opponent_when_no_win():
    board = ["X", "X", "-", "-", "O", "-", "-", "-", "-"]
    assert choose_fallback_move(board, "O") == 2


def test_win_beats_block():
    board = ["X", "X", "-", "O", "O", "-", "-", "-", "-"]
    assert choose_fallback_move(board, "O") == 5


def test_empty_board_takes_center():
    assert choose_fallback_move(["-"] * 9, "X") == 4


def test_center_taken_prefers_first_corner():
    board = ["-", "-", "-", "-", "X", "-", "-", "-", "-"]
    assert choose_fallback_move(board, "O") == 0


def test_corner_scan_order():
    board = ["X", "-", "-", "-", "O", "-", "-", "-", "-"]
    assert choose_fallback_move(board, "O") == 2


def test_side_scan_order():
    board = ["X", "-", "O", "O", "X", "X", "X", "-", "O"]
    assert choose_fallback_move(board, "O") == 1
    assert choose_fallback_move(board, "X") == 1


def test_full_board_raises():
    with pytest.raises(NoMovesAvailableError):
        choose_fallback_move(["X", "O", "X", "X", "O", "O", "O", "X", "X"], "O")


def test_find_winning_move_none_without_threat():
    assert find_winning_move(["-"] * 9, Symbol.X) is None


def test_empty_cells_in_board_order():
    assert empty_cells(["X", "-", "O", "-", "-", "X", "O", "X", "-"]) == [1, 3, 4, 8]


@given(boards_with_space, symbols)
def test_always_returns_an_empty_cell(board, symbol):
    move = choose_fallback_move(board, symbol)
    assert 0 <= move <= 8
    assert board[move] == "-"


@given(boards_with_space, symbols)
def test_is_idempotent(board, symbol):
    snapshot = list(board)
    assert choose_fallback_move(board, symbol) == choose_fallback_move(board, symbol)
    assert board == snapshot


@given(boards_with_space, symbols)
def test_immediate_win_is_always_taken(board, symbol):
    winning = find_winning_move(board, symbol)
    if winning is not None:
        assert choose_fallback_move(board, symbol) == winning
