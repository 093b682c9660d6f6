"""Prompt construction for the move-suggesting model.

The prompt is deliberately rigid: it lists the empty cells, mirrors the
fallback priority order and demands a single digit so the reply can be parsed
without trusting the model.
"""

from __future__ import annotations

from collections.abc import Sequence

from core.domain.symbols import Symbol
from core.services.fallback import CORNERS, SIDES, empty_cells


def _join(indices: Sequence[int]) -> str:
    return ", ".join(str(i) for i in indices)


def build_move_prompt(board: Sequence[str], ai_symbol: Symbol | str) -> str:
    ai = Symbol(ai_symbol)
    opponent = ai.opponent()
    empties = _join(empty_cells(board))
    corners = ",".join(str(i) for i in CORNERS)
    sides = ",".join(str(i) for i in SIDES)

    return (
        f'You are an AI player playing Tic-Tac-Toe as "{ai.value}".\n'
        "Board (indexes):\n"
        "0 | 1 | 2\n"
        "3 | 4 | 5\n"
        "6 | 7 | 8\n\n"
        f"Current board: {','.join(board)}\n"
        f"Empty cell indexes: [{empties}]\n\n"
        "RULES (follow exactly):\n"
        f'- "{opponent.value}" = human player. "{ai.value}" = you (AI).\n'
        '- "-" means empty.\n'
        "- You MUST return EXACTLY ONE character: a single digit representing an index "
        "from the Empty cell indexes list.\n"
        "- Output must be only the digit (0-8) and nothing else "
        "(no words, no punctuation, no newline, no labels).\n\n"
        "STRATEGY (do these checks in order):\n"
        "1) If you can WIN this move, return the winning index.\n"
        f"2) Else if the opponent ({opponent.value}) can win next move, "
        "return the index that blocks that win.\n"
        "3) Else if neither, pick in this priority order:\n"
        "   a) center (4) if it is empty,\n"
        f"   b) any corner in this order: {corners} (choose the first free),\n"
        f"   c) any side in this order: {sides} (choose the first free).\n"
        "4) NEVER choose an occupied cell.\n"
        "5) If multiple choices are equally good pick the lowest index among them.\n\n"
        "Important:\n"
        "- ONLY return one digit from the list of empty indexes above.\n"
        "- If you cannot follow these rules, return the lowest empty index (as a single digit).\n\n"
        "Now choose your next move and output the single digit only.\n"
    )
