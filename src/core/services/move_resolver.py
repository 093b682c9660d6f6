"""Move resolution: ask the model, parse defensively, fall back when needed.

Responsibility:
- Build the prompt and call the injected `TextGenerator` once, bounded by a
  timeout (no retries).
- Extract the first digit that names an empty cell.
- Guarantee a legal move through the deterministic heuristic.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from core.config import AppSettings
from core.domain.models import GenerationOptions, MoveResolution
from core.domain.symbols import EMPTY, Symbol
from core.errors import NoMovesAvailableError, UnparsableResponseError
from core.interfaces.text_generator import TextGenerator
from core.services.fallback import choose_fallback_move, empty_cells
from core.services.prompts import build_move_prompt

logger = logging.getLogger(__name__)

_MOVE_DIGITS = "012345678"


def _is_legal(board: Sequence[str], move: int | None) -> bool:
    return move is not None and 0 <= move <= 8 and board[move] == EMPTY


def parse_model_move(text: str, board: Sequence[str]) -> int | None:
    """First digit 0-8 in `text` whose board cell is empty, scanning left to right."""

    for char in text or "":
        if char not in _MOVE_DIGITS:
            continue
        index = int(char)
        if board[index] == EMPTY:
            return index
    return None


class MoveResolver:
    """Turns a validated board into a guaranteed-legal move."""

    def __init__(self, generator: TextGenerator, *, options: GenerationOptions | None = None) -> None:
        self._generator = generator
        self._options = options or GenerationOptions()

    @classmethod
    def from_settings(cls, settings: AppSettings, generator: TextGenerator) -> "MoveResolver":
        options = GenerationOptions(
            temperature=settings.ai_temperature,
            max_output_tokens=settings.ai_max_output_tokens,
            timeout_seconds=settings.ai_timeout_seconds,
        )
        return cls(generator, options=options)

    async def _ask_model(self, board: Sequence[str], ai_symbol: Symbol) -> str:
        prompt = build_move_prompt(board, ai_symbol)
        return await asyncio.wait_for(
            self._generator.generate(prompt, self._options),
            timeout=self._options.timeout_seconds,
        )

    async def resolve(self, board: Sequence[str], ai_symbol: Symbol | str) -> MoveResolution:
        ai_symbol = Symbol(ai_symbol)
        if not empty_cells(board):
            raise NoMovesAvailableError()

        raw = ""
        move: int | None = None
        fallback_reason: str | None = None

        try:
            raw = await self._ask_model(board, ai_symbol) or ""
            logger.info("Raw model response: %r", raw)
            move = parse_model_move(raw, board)
            if move is None:
                raise UnparsableResponseError(raw)
        except asyncio.TimeoutError:
            fallback_reason = "timeout"
            logger.warning("Model request timed out after %.1fs", self._options.timeout_seconds)
        except UnparsableResponseError as exc:
            fallback_reason = "unparsable"
            logger.warning("%s", exc)
        except Exception as exc:
            fallback_reason = f"remote_failed:{type(exc).__name__}"
            logger.warning("Model request failed: %s", exc)

        fallback_used = False
        if not _is_legal(board, move):
            fallback_used = True
            move = choose_fallback_move(board, ai_symbol)
            logger.warning("Using fallback move %s (reason=%s, raw=%r)", move, fallback_reason, raw)

        if not _is_legal(board, move):
            # Unreachable while choose_fallback_move keeps its contract.
            empties = empty_cells(board)
            if not empties:
                raise NoMovesAvailableError()
            move = empties[0]
            fallback_used = True
            logger.warning("Final fallback to first empty cell: %s", move)

        return MoveResolution(move=move, fallback_used=fallback_used, raw=raw)
