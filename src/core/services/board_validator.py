"""Validation of incoming move requests."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from core.domain.models import Board
from core.domain.symbols import CELL_VALUES, EMPTY, Symbol
from core.errors import InvalidInputError

MISSING_FIELDS = "Missing board or aiSymbol"
BAD_LENGTH = "Board must be an array of length 9"
BAD_CELL = "Board cells must be one of 'X', 'O', or '-'"
BAD_SYMBOL = 'aiSymbol must be "X" or "O"'
BOARD_FULL = "Board is full"


def _is_missing(value: Any) -> bool:
    """Falsy scalars (None, False, "", 0, NaN) count as absent; empty lists do not."""

    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or value != value
    return False


def normalize_board(board: Any, *, strict: bool = False) -> Any:
    """Turn textual boards into lists.

    Accepts JSON text (`'["X","-",...]'`) and, unless `strict`, the lenient
    comma form `"X, -, O, ..."`. Anything else is returned untouched and left
    for the shape check to reject.
    """

    if not isinstance(board, str):
        return board
    try:
        parsed = json.loads(board)
    except json.JSONDecodeError:
        if strict:
            return board
        return [piece.strip() for piece in board.split(",")]
    if isinstance(parsed, list):
        return parsed
    return board


def validate_move_request(payload: Any, *, strict: bool = False) -> tuple[Board, Symbol]:
    """Validate a `{board, aiSymbol}` payload.

    Returns the normalized 9-cell board and the AI symbol, or raises
    `InvalidInputError` with the first failing rule's message.
    """

    if not isinstance(payload, Mapping):
        raise InvalidInputError(MISSING_FIELDS)

    board = payload.get("board")
    raw_symbol = payload.get("aiSymbol")
    if _is_missing(board) or _is_missing(raw_symbol):
        raise InvalidInputError(MISSING_FIELDS)

    board = normalize_board(board, strict=strict)
    if not isinstance(board, (list, tuple)) or len(board) != 9:
        raise InvalidInputError(BAD_LENGTH)

    for cell in board:
        if not isinstance(cell, str) or cell not in CELL_VALUES:
            raise InvalidInputError(BAD_CELL)

    ai_symbol = Symbol.parse(raw_symbol)
    if ai_symbol is None:
        raise InvalidInputError(BAD_SYMBOL)

    if EMPTY not in board:
        raise InvalidInputError(BOARD_FULL)

    return list(board), ai_symbol
