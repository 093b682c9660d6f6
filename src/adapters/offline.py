"""Generator that never reaches a provider.

Used by `tictactoe-llm move --offline` to exercise the heuristic without a key.
"""

from __future__ import annotations

from core.domain.models import GenerationOptions
from core.errors import RemoteUnavailableError


class OfflineTextGenerator:
    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        raise RemoteUnavailableError("offline mode: no provider configured")
