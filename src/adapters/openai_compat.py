"""OpenAI-compatible adapter (openai SDK).

Works with any chat-completions provider: OpenAI, DeepSeek, Groq, OpenRouter,
Gemini's OpenAI endpoint or a local Ollama.
"""

from __future__ import annotations

import httpx
from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI

from core.config import AppSettings
from core.domain.models import GenerationOptions
from core.errors import RemoteUnavailableError

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"


def is_local_base_url(url: str | None) -> bool:
    url_l = (url or "").strip().lower()
    return url_l.startswith("http://localhost") or url_l.startswith("http://127.0.0.1") or url_l.startswith(
        "http://0.0.0.0"
    )


class OpenAICompatibleTextGenerator:
    """`TextGenerator` backed by a chat-completions endpoint."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        base_url = settings.ai_base_url or DEFAULT_OPENAI_BASE_URL
        api_key = (settings.ai_api_key or "").strip()
        if not api_key:
            # Local OpenAI-compatible servers do not check the key.
            if not is_local_base_url(base_url):
                raise ValueError("OpenAI-compatible provider requires an API key")
            api_key = "local"

        self._model = settings.ai_model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=settings.ai_timeout_seconds,
            max_retries=0,
            http_client=http_client,
        )

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=options.temperature,
                max_tokens=options.max_output_tokens,
                timeout=options.timeout_seconds,
            )
        except APIStatusError as exc:
            raise RemoteUnavailableError(f"Provider returned HTTP {exc.status_code}") from exc
        except (APITimeoutError, APIConnectionError) as exc:
            raise RemoteUnavailableError(f"Provider request failed: {exc}") from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self._client.close()
