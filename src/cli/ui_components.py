"""CLI UI components (Rich).

Keeps command logic apart from presentation so tables and panels can be reused.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import MoveResolution
from core.domain.symbols import EMPTY

_CELL_STYLES = {"X": "bold cyan", "O": "bold magenta"}


def print_banner(console: Console) -> None:
    title = Text("TIC-TAC-TOE LLM", style="bold cyan")
    subtitle = Text("Model move • Deterministic fallback", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_board_table(board: Sequence[str], *, highlight: int | None = None) -> Table:
    """3x3 grid. Empty cells show their index; `highlight` marks the chosen move."""

    table = Table(show_header=False, show_lines=True, box=None, padding=(0, 2))
    for _ in range(3):
        table.add_column(justify="center", no_wrap=True)

    for row in range(3):
        cells: list[Text] = []
        for col in range(3):
            index = row * 3 + col
            value = board[index]
            if index == highlight:
                cells.append(Text(f"[{index}]", style="bold green"))
            elif value == EMPTY:
                cells.append(Text(str(index), style="dim"))
            else:
                cells.append(Text(value, style=_CELL_STYLES.get(value, "white")))
        table.add_row(*cells)
    return table


def build_resolution_panel(result: MoveResolution, *, ai_symbol: str) -> Panel:
    body = Text()
    body.append(f"Move: {result.move}\n", style="bold")
    body.append(f"Symbol: {ai_symbol}\n")
    if result.fallback_used:
        body.append("Source: deterministic fallback\n", style="yellow")
    else:
        body.append("Source: model\n", style="green")
    body.append(f"Raw: {result.raw!r}", style="dim")
    return Panel(body, title=Text("AI move", style="bold yellow"), border_style="yellow")
