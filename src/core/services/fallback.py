"""Deterministic fallback heuristic.

Priority: win, block, center, corners (0, 2, 6, 8), sides (1, 3, 5, 7), first
empty cell. The fixed scan orders are the AI's tie-break personality and must
not change.
"""

from __future__ import annotations

from collections.abc import Sequence

from core.domain.symbols import EMPTY, Symbol
from core.errors import NoMovesAvailableError

LINES: tuple[tuple[int, int, int], ...] = (
    # rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # diagonals
    (0, 4, 8),
    (2, 4, 6),
)

CENTER = 4
CORNERS: tuple[int, ...] = (0, 2, 6, 8)
SIDES: tuple[int, ...] = (1, 3, 5, 7)


def empty_cells(board: Sequence[str]) -> list[int]:
    return [i for i, cell in enumerate(board) if cell == EMPTY]


def find_winning_move(board: Sequence[str], symbol: Symbol | str) -> int | None:
    """Empty cell completing the first line holding two `symbol` marks, if any."""

    mark = Symbol(symbol).value
    for line in LINES:
        values = [board[i] for i in line]
        if values.count(mark) == 2 and EMPTY in values:
            return line[values.index(EMPTY)]
    return None


def _first_empty(board: Sequence[str], candidates: Sequence[int]) -> int | None:
    for i in candidates:
        if board[i] == EMPTY:
            return i
    return None


def choose_fallback_move(board: Sequence[str], ai_symbol: Symbol | str) -> int:
    """Pick a move without any remote help. Pure: same input, same output."""

    ai_symbol = Symbol(ai_symbol)

    winning = find_winning_move(board, ai_symbol)
    if winning is not None:
        return winning

    block = find_winning_move(board, ai_symbol.opponent())
    if block is not None:
        return block

    if board[CENTER] == EMPTY:
        return CENTER

    for group in (CORNERS, SIDES, range(len(board))):
        move = _first_empty(board, group)
        if move is not None:
            return move

    raise NoMovesAvailableError()
