"""Provider selection from settings."""

from __future__ import annotations

from adapters.gemini_client import GeminiTextGenerator
from adapters.openai_compat import OpenAICompatibleTextGenerator
from core.config import AppSettings
from core.errors import ConfigurationError
from core.interfaces.text_generator import TextGenerator


def build_text_generator(settings: AppSettings) -> TextGenerator:
    """Instantiate the configured provider.

    Raises `ConfigurationError` when the provider is unknown or its key is
    missing; callers treat that as a fatal startup condition.
    """

    try:
        if settings.ai_provider == "gemini":
            return GeminiTextGenerator(settings)
        if settings.ai_provider == "openai":
            return OpenAICompatibleTextGenerator(settings)
    except ValueError as exc:
        raise ConfigurationError(
            f"{exc}. Set TICTACTOE_LLM_AI_API_KEY (or GEMINI_API_KEY) before starting."
        ) from exc
    raise ConfigurationError(f"Unknown AI provider: {settings.ai_provider!r}")
