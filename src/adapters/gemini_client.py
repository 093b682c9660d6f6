"""Gemini adapter (native `generateContent` REST endpoint over httpx).

Responsibility:
- Wrap the prompt in the Gemini request payload.
- Pull the first candidate's text out of the response.
- Report every failure as `RemoteUnavailableError`.
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import GenerationOptions
from core.errors import RemoteUnavailableError

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com"


def build_gemini_payload(prompt: str, options: GenerationOptions) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": options.temperature,
            "maxOutputTokens": options.max_output_tokens,
        },
    }


def extract_candidate_text(data: object) -> str:
    """`candidates[0].content.parts[0].text`, or "" when any step is missing."""

    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


class GeminiTextGenerator:
    """`TextGenerator` backed by the Gemini REST API."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        api_key = (settings.ai_api_key or "").strip()
        if not api_key:
            raise ValueError("Gemini requires an API key")
        self._settings = settings
        self._api_key = api_key
        self._client = client
        base_url = (settings.ai_base_url or DEFAULT_GEMINI_BASE_URL).rstrip("/")
        self._url = f"{base_url}/v1beta/models/{settings.ai_model}:generateContent"

    @property
    def url(self) -> str:
        return self._url

    async def _post(self, client: httpx.AsyncClient, payload: dict[str, Any], timeout: float) -> httpx.Response:
        return await client.post(
            self._url,
            json=payload,
            headers={"x-goog-api-key": self._api_key},
            timeout=timeout,
        )

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        payload = build_gemini_payload(prompt, options)
        try:
            if self._client is not None:
                response = await self._post(self._client, payload, options.timeout_seconds)
            else:
                async with build_async_client(self._settings, timeout_seconds=options.timeout_seconds) as client:
                    response = await self._post(client, payload, options.timeout_seconds)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise RemoteUnavailableError(f"Gemini returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise RemoteUnavailableError(f"Gemini request failed: {exc}") from exc
        except ValueError as exc:
            raise RemoteUnavailableError("Gemini returned a non-JSON body") from exc

        return extract_candidate_text(data)

    async def aclose(self) -> None:
        """Injected clients belong to the caller; per-call clients are already closed."""

        return None
