"""Domain models (Pydantic v2).

These models describe *what* flows through a move request, not *how* it is
obtained.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

Board = list[str]


class GenerationOptions(BaseModel):
    """Parameters forwarded to the text-generation provider."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Sampling temperature.",
    )
    max_output_tokens: int = Field(
        default=4,
        ge=1,
        description="Output token cap.",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound for the whole provider call (seconds).",
    )


class MoveResolution(BaseModel):
    """Outcome of one move request.

    Serialized with `by_alias=True` it matches the wire contract
    `{"move": int, "fallbackUsed": bool, "raw": str}`.
    """

    model_config = ConfigDict(populate_by_name=True)

    move: int = Field(
        ...,
        ge=0,
        le=8,
        description="Index of the empty cell chosen for the AI.",
    )
    fallback_used: bool = Field(
        default=False,
        alias="fallbackUsed",
        description="True when the deterministic heuristic picked the move.",
    )
    raw: str = Field(
        default="",
        description="Raw provider text (empty when the call failed).",
    )
