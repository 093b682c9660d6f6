from __future__ import annotations

import asyncio

import pytest

from core.config import AppSettings
from core.domain.models import GenerationOptions


class StubTextGenerator:
    """Deterministic stand-in for a provider."""

    def __init__(self, reply: str = "", *, error: BaseException | None = None, delay: float = 0.0) -> None:
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, GenerationOptions]] = []

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        self.calls.append((prompt, options))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, ai_api_key="test-key", ai_provider="gemini")


@pytest.fixture
def stub() -> StubTextGenerator:
    return StubTextGenerator()
