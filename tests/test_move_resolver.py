import asyncio

import pytest

from conftest import StubTextGenerator
from core.domain.models import GenerationOptions
from core.errors import NoMovesAvailableError, RemoteUnavailableError
from core.services.fallback import choose_fallback_move
from core.services.move_resolver import MoveResolver, parse_model_move

OPENING = ["X", "-", "-", "-", "O", "-", "-", "-", "-"]


def _resolve(generator, board, symbol="O", **options):
    resolver = MoveResolver(generator, options=GenerationOptions(**options))
    return asyncio.run(resolver.resolve(board, symbol))


def test_uses_digit_from_model_text():
    result = _resolve(StubTextGenerator("I choose 5"), OPENING)

    assert result.move == 5
    assert result.fallback_used is False
    assert result.raw == "I choose 5"


def test_skips_digits_for_occupied_cells():
    result = _resolve(StubTextGenerator("0 is taken, so 4... no, 6"), OPENING)

    assert result.move == 6
    assert result.fallback_used is False


def test_occupied_digit_falls_back():
    board = ["X", "-", "-", "-", "O", "-", "-", "X", "-"]
    result = _resolve(StubTextGenerator("7"), board)

    assert result.fallback_used is True
    assert result.move == choose_fallback_move(board, "O")
    assert board[result.move] == "-"
    assert result.raw == "7"


@pytest.mark.parametrize("reply", ["", "nine", "9", "I cannot decide"])
def test_unparsable_reply_falls_back(reply):
    result = _resolve(StubTextGenerator(reply), OPENING)

    assert result.fallback_used is True
    assert result.move == choose_fallback_move(OPENING, "O")


def test_timeout_falls_back_without_raising():
    generator = StubTextGenerator("1", delay=1.0)
    result = _resolve(generator, OPENING, timeout_seconds=0.01)

    assert result.fallback_used is True
    assert result.raw == ""
    assert OPENING[result.move] == "-"


def test_timeout_error_from_provider_falls_back():
    result = _resolve(StubTextGenerator(error=asyncio.TimeoutError()), OPENING)

    assert result.fallback_used is True
    assert result.move == 2


def test_remote_failure_falls_back():
    result = _resolve(StubTextGenerator(error=RemoteUnavailableError("boom")), OPENING)

    assert result.fallback_used is True
    assert result.move == 2
    assert result.raw == ""


def test_unexpected_provider_error_falls_back():
    result = _resolve(StubTextGenerator(error=RuntimeError("surprise")), OPENING)

    assert result.fallback_used is True


def test_cancellation_propagates():
    with pytest.raises(asyncio.CancelledError):
        _resolve(StubTextGenerator(error=asyncio.CancelledError()), OPENING)


def test_full_board_raises_without_calling_provider():
    generator = StubTextGenerator("1")
    with pytest.raises(NoMovesAvailableError):
        _resolve(generator, ["X", "O", "X", "X", "O", "O", "O", "X", "X"])
    assert generator.calls == []


def test_forwards_prompt_and_options(settings):
    generator = StubTextGenerator("2")
    resolver = MoveResolver.from_settings(settings, generator)
    asyncio.run(resolver.resolve(OPENING, "O"))

    (prompt, options), = generator.calls
    assert "Empty cell indexes: [1, 2, 3, 5, 6, 7, 8]" in prompt
    assert options.temperature == 0.0
    assert options.max_output_tokens == 4
    assert options.timeout_seconds == 30.0


def test_parse_model_move_takes_first_playable_digit():
    board = ["X", "-", "O", "-", "-", "-", "-", "-", "-"]
    assert parse_model_move("0 2 3 1", board) == 3
    assert parse_model_move("no digits here", board) is None
    assert parse_model_move("", board) is None
