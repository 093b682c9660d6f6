"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.providers import build_text_generator
from core.config import AppSettings, write_user_env_vars
from core.errors import ConfigurationError
from core.interfaces.text_generator import TextGenerator
from core.services.move_resolver import MoveResolver

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

_PROBE_BOARD = ["X", "X", "-", "O", "-", "-", "-", "-", "O"]


def load_settings() -> AppSettings:
    """Build settings once; invalid values end the command with exit code 1."""

    try:
        return AppSettings()
    except ValidationError as exc:
        Console(stderr=True).print(f"[red]Invalid configuration:[/red]\n{escape(str(exc))}")
        raise typer.Exit(code=1) from exc


async def _check_provider(settings: AppSettings, generator: TextGenerator) -> tuple[bool, str]:
    """Resolve one known board; OK only when the model answered with a playable digit."""

    resolver = MoveResolver.from_settings(settings, generator)
    result = await resolver.resolve(_PROBE_BOARD, "O")
    if result.fallback_used:
        return False, f"fallback used (raw={result.raw!r})"
    return True, f"move={result.move} raw={result.raw!r}"


@app.command()
def run(
    probe: bool = typer.Option(True, "--probe/--no-probe", help="Send one move request to the provider."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = load_settings()

    table = Table(title="tictactoe-llm doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("AI provider", "OK", settings.ai_provider)
    table.add_row("AI model", "OK", settings.ai_model)
    table.add_row("AI base_url", "OK", settings.ai_base_url or "(provider default)")

    generator: TextGenerator | None = None
    try:
        generator = build_text_generator(settings)
        table.add_row("AI key", "OK", "Provider configured")
    except ConfigurationError as exc:
        table.add_row("AI key", "FAIL", exc.message)

    if generator is not None and probe:
        ok, detail = asyncio.run(_check_provider(settings, generator))
        table.add_row("Provider probe", "OK" if ok else "WARN", detail)

    _console.print(table)

    if generator is None:
        _console.print("\n[red]The server refuses to start without a key.[/red] Run `doctor setup-ai`.")
        raise typer.Exit(code=1)


@app.command(name="setup-ai")
def setup_ai() -> None:
    """Interactive AI setup (stores config in the user config .env)."""

    provider = typer.prompt("AI provider", default="gemini", show_default=True).strip().lower()

    presets: dict[str, dict[str, str]] = {
        "gemini": {
            "TICTACTOE_LLM_AI_PROVIDER": "gemini",
            "TICTACTOE_LLM_AI_BASE_URL": "https://generativelanguage.googleapis.com",
            "TICTACTOE_LLM_AI_MODEL": "gemini-1.5-flash-latest",
        },
        "openai": {
            "TICTACTOE_LLM_AI_PROVIDER": "openai",
            "TICTACTOE_LLM_AI_BASE_URL": "https://api.openai.com/v1",
            "TICTACTOE_LLM_AI_MODEL": "gpt-4o-mini",
        },
        "groq": {
            "TICTACTOE_LLM_AI_PROVIDER": "openai",
            "TICTACTOE_LLM_AI_BASE_URL": "https://api.groq.com/openai/v1",
            "TICTACTOE_LLM_AI_MODEL": "llama-3.1-8b-instant",
        },
        "ollama": {
            "TICTACTOE_LLM_AI_PROVIDER": "openai",
            "TICTACTOE_LLM_AI_BASE_URL": "http://localhost:11434/v1",
            "TICTACTOE_LLM_AI_MODEL": "llama3",
        },
    }

    values = presets.get(provider, {}).copy()
    if not values:
        _console.print("[yellow]Unknown provider preset. You can still enter custom values.[/yellow]")

    kind = typer.prompt(
        "Provider kind (gemini/openai)",
        default=values.get("TICTACTOE_LLM_AI_PROVIDER", "openai"),
        show_default=True,
    ).strip().lower()
    base_url = typer.prompt("AI base URL", default=values.get("TICTACTOE_LLM_AI_BASE_URL", ""), show_default=True).strip()
    model = typer.prompt("AI model", default=values.get("TICTACTOE_LLM_AI_MODEL", ""), show_default=True).strip()
    api_key = typer.prompt("AI API key", default="", hide_input=True, show_default=False).strip()

    if kind not in ("gemini", "openai"):
        raise typer.BadParameter("provider kind must be 'gemini' or 'openai'")
    if not base_url or not model:
        raise typer.BadParameter("base_url and model are required")

    env_path = write_user_env_vars(
        {
            "TICTACTOE_LLM_AI_PROVIDER": kind,
            "TICTACTOE_LLM_AI_BASE_URL": base_url,
            "TICTACTOE_LLM_AI_MODEL": model,
            "TICTACTOE_LLM_AI_API_KEY": api_key,
        }
    )

    _console.print(f"[green]Saved AI config to:[/green] {env_path}")
