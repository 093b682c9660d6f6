import pytest

from core.domain.symbols import Symbol
from core.errors import InvalidInputError
from core.services.board_validator import (
    BAD_CELL,
    BAD_LENGTH,
    BAD_SYMBOL,
    BOARD_FULL,
    MISSING_FIELDS,
    normalize_board,
    validate_move_request,
)

EMPTY_BOARD = ["-"] * 9


def _error(payload, **kwargs) -> str:
    with pytest.raises(InvalidInputError) as info:
        validate_move_request(payload, **kwargs)
    return info.value.message


def test_accepts_list_board_and_returns_symbol():
    board = ["X", "-", "O", "-", "-", "-", "-", "-", "-"]
    cells, symbol = validate_move_request({"board": board, "aiSymbol": "O"})
    assert cells == board
    assert symbol is Symbol.O


def test_rejects_unknown_cell_symbol():
    board = ["X", "-", "Y", "-", "-", "-", "-", "-", "-"]
    assert _error({"board": board, "aiSymbol": "O"}) == BAD_CELL


def test_rejects_non_string_cell():
    board = [0, "-", "-", "-", "-", "-", "-", "-", "-"]
    assert _error({"board": board, "aiSymbol": "O"}) == BAD_CELL


def test_rejects_board_of_length_eight():
    assert _error({"board": ["-"] * 8, "aiSymbol": "O"}) == BAD_LENGTH


def test_rejects_empty_list_as_bad_length():
    assert _error({"board": [], "aiSymbol": "O"}) == BAD_LENGTH


@pytest.mark.parametrize("symbol", ["Z", "x", "o", 1, "XO"])
def test_rejects_invalid_ai_symbol(symbol):
    assert _error({"board": EMPTY_BOARD, "aiSymbol": symbol}) == BAD_SYMBOL


def test_rejects_full_board():
    board = ["X", "O", "X", "X", "O", "O", "O", "X", "X"]
    assert _error({"board": board, "aiSymbol": "O"}) == BOARD_FULL


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"board": EMPTY_BOARD},
        {"aiSymbol": "O"},
        {"board": "", "aiSymbol": "O"},
        {"board": EMPTY_BOARD, "aiSymbol": None},
        {"board": False, "aiSymbol": "O"},
        {"board": 0, "aiSymbol": "O"},
        {"board": float("nan"), "aiSymbol": "O"},
        {"board": EMPTY_BOARD, "aiSymbol": 0},
        {"board": EMPTY_BOARD, "aiSymbol": False},
        ["not", "a", "mapping"],
        None,
    ],
)
def test_rejects_missing_fields(payload):
    assert _error(payload) == MISSING_FIELDS


def test_cell_check_runs_before_symbol_check():
    board = ["Y"] + ["-"] * 8
    assert _error({"board": board, "aiSymbol": "Z"}) == BAD_CELL


def test_accepts_json_text_board():
    cells, _ = validate_move_request({"board": '["X","-","-","-","O","-","-","-","-"]', "aiSymbol": "X"})
    assert cells == ["X", "-", "-", "-", "O", "-", "-", "-", "-"]


def test_accepts_comma_text_board_with_whitespace():
    cells, _ = validate_move_request({"board": " X , - ,O,-,-,-,-,-, -", "aiSymbol": "X"})
    assert cells == ["X", "-", "O", "-", "-", "-", "-", "-", "-"]


def test_json_scalar_text_is_rejected_as_bad_length():
    assert _error({"board": "5", "aiSymbol": "X"}) == BAD_LENGTH


def test_strict_mode_rejects_comma_text():
    payload = {"board": "X,-,O,-,-,-,-,-,-", "aiSymbol": "X"}
    assert _error(payload, strict=True) == BAD_LENGTH


def test_strict_mode_still_accepts_json_text():
    cells, _ = validate_move_request({"board": '["-","-","-","-","-","-","-","-","-"]', "aiSymbol": "X"}, strict=True)
    assert cells == EMPTY_BOARD


def test_normalize_leaves_lists_untouched():
    board = ["-"] * 9
    assert normalize_board(board) is board
