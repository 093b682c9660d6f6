"""Board symbols shared across the application.

Keeping them in the domain layer lets the validator, the heuristic, the
prompt builder and the CLI agree on one source of truth.
"""

from __future__ import annotations

from enum import Enum

EMPTY = "-"


class Symbol(str, Enum):
    """A player mark."""

    X = "X"
    O = "O"

    @classmethod
    def parse(cls, value: object) -> "Symbol | None":
        """Return the matching symbol, or None when `value` is not exactly "X" or "O"."""

        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    def opponent(self) -> "Symbol":
        return Symbol.O if self is Symbol.X else Symbol.X


CELL_VALUES: frozenset[str] = frozenset({Symbol.X.value, Symbol.O.value, EMPTY})
