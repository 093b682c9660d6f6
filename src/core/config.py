"""Core configuration.

Centralizes environment variables (pydantic-settings) so the API, the CLI and
the adapters read the same validated contract. Settings are built once by the
entry point and passed down explicitly.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "tictactoe-llm"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "tictactoe-llm"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "tictactoe-llm"
    return Path.home() / ".config" / "tictactoe-llm"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# tictactoe-llm user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Every field can be set through `TICTACTOE_LLM_<FIELD>`. The API key and the
    port also honour the bare `GEMINI_API_KEY` and `PORT` variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="TICTACTOE_LLM_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # Project .env first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    host: str = Field(
        default="127.0.0.1",
        min_length=1,
        description="Interface the HTTP server binds to.",
    )
    port: int = Field(
        default=5000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("TICTACTOE_LLM_PORT", "PORT", "port"),
        description="Port the HTTP server listens on.",
    )

    ai_provider: Literal["gemini", "openai"] = Field(
        default="gemini",
        description="Text-generation backend: native Gemini REST or any OpenAI-compatible API.",
    )
    ai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TICTACTOE_LLM_AI_API_KEY", "GEMINI_API_KEY", "ai_api_key"),
        description="Pre-shared key for the text-generation provider.",
    )
    ai_base_url: str | None = Field(
        default=None,
        description="Provider base URL. When unset the provider default is used.",
    )
    ai_model: str = Field(
        default="gemini-1.5-flash-latest",
        min_length=1,
        description="Model identifier sent to the provider.",
    )
    ai_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound for one move request to the provider (seconds).",
    )
    ai_temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Sampling temperature. Zero keeps the model as deterministic as it gets.",
    )
    ai_max_output_tokens: int = Field(
        default=4,
        ge=1,
        le=256,
        description="Output token cap; a single digit is all we need.",
    )

    strict_board_format: bool = Field(
        default=False,
        description="Reject comma-separated board text; only JSON arrays are accepted.",
    )
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root logging level for the CLI and the server.",
    )
    user_agent: str = Field(
        default="tictactoe-llm/0.1 (+https://local)",
        min_length=1,
        description="User-Agent sent to the provider.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value
