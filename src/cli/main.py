"""Command-line entry point (Typer)."""

from __future__ import annotations

import asyncio
import json
import logging

import typer
from rich.console import Console

from adapters.offline import OfflineTextGenerator
from adapters.providers import build_text_generator
from cli import doctor
from cli.doctor import load_settings
from cli.ui_components import build_board_table, build_resolution_panel, print_banner
from core.errors import ConfigurationError, InvalidInputError
from core.interfaces.text_generator import TextGenerator
from core.logging_setup import configure_logging
from core.services.board_validator import validate_move_request
from core.services.move_resolver import MoveResolver

app = typer.Typer(
    no_args_is_help=True,
    help="Tic-Tac-Toe move service: a language model with a deterministic fallback.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind address (defaults to settings)."),
    port: int | None = typer.Option(None, help="Port (defaults to settings / PORT)."),
) -> None:
    """Start the HTTP server. Refuses to start without an API key."""

    import uvicorn  # noqa: PLC0415

    from api.app import create_app  # noqa: PLC0415

    settings = load_settings()
    configure_logging(settings.log_level)

    try:
        application = create_app(settings)
    except ConfigurationError as exc:
        _err_console.print(f"[red]Missing configuration:[/red] {exc.message}")
        raise typer.Exit(code=1) from exc

    bind_host = host or settings.host
    bind_port = port or settings.port
    logger.info("Server running at http://%s:%s", bind_host, bind_port)
    uvicorn.run(application, host=bind_host, port=bind_port, log_config=None)


@app.command()
def move(
    board: str = typer.Argument(..., help='Board as "X,-,O,..." or a JSON array of 9 cells.'),
    ai_symbol: str = typer.Option("O", "--ai-symbol", "-s", help='Symbol the AI plays ("X" or "O").'),
    offline: bool = typer.Option(False, "--offline", help="Skip the provider and use the fallback heuristic."),
    as_json: bool = typer.Option(False, "--json", help="Print the wire response instead of tables."),
) -> None:
    """Resolve a single move from the command line."""

    settings = load_settings()
    configure_logging("ERROR" if as_json else settings.log_level)

    try:
        cells, symbol = validate_move_request(
            {"board": board, "aiSymbol": ai_symbol},
            strict=settings.strict_board_format,
        )
    except InvalidInputError as exc:
        _err_console.print(f"[red]Invalid input:[/red] {exc.message}")
        raise typer.Exit(code=2) from exc

    generator: TextGenerator
    if offline:
        generator = OfflineTextGenerator()
    else:
        try:
            generator = build_text_generator(settings)
        except ConfigurationError as exc:
            _err_console.print(f"[red]Missing configuration:[/red] {exc.message} (or pass --offline)")
            raise typer.Exit(code=1) from exc

    result = asyncio.run(MoveResolver.from_settings(settings, generator).resolve(cells, symbol))

    if as_json:
        typer.echo(json.dumps(result.model_dump(by_alias=True)))
        return

    print_banner(_console)
    _console.print(build_board_table(cells, highlight=result.move))
    _console.print(build_resolution_panel(result, ai_symbol=symbol.value))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
