"""Text-generation contract.

A structural Protocol keeps providers (Gemini REST, OpenAI-compatible SDKs,
offline/test stubs) interchangeable without a shared base class.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import GenerationOptions


@runtime_checkable
class TextGenerator(Protocol):
    """Minimal contract for a move-suggesting model.

    Design rules:
    - `generate` is async because it performs network I/O.
    - Failures are raised as `core.errors.RemoteUnavailableError`.
    """

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        """Send `prompt` to the provider and return its raw text."""

        ...
