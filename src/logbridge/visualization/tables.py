"""Rich-powered rendering of compiled rule tables and match results."""
from __future__ import annotations

import json
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

_console = Console()

_LEVEL_STYLES = {
    "emergency": "bold red",
    "alert": "bold red",
    "critical": "bold red",
    "error": "red",
    "warning": "yellow",
    "notice": "cyan",
    "info": "green",
    "debug": "dim",
}


def level_style(level: str) -> str:
    return _LEVEL_STYLES.get(level.lower(), "white")


def _format_options(options: dict[str, Any]) -> str:
    return escape(json.dumps(options, default=str)) if options else ""


def print_rule_table(
    filters: dict[str, dict[str, Any]],
    title: str = "Compiled filters",
    max_rows: int = 200,
    console: Console | None = None,
) -> None:
    """Render a compiled rule table as a Rich table.

    Args:
        filters:   Canonical key -> {"level", "options"} mapping.
        title:     Table title shown in the header.
        max_rows:  Hard cap — wide status expansions are truncated with a notice.
    """
    out = console or _console
    if not filters:
        out.print("[yellow]No filter keys compiled.[/yellow]")
        return

    table = Table(title=title, box=box.ROUNDED, show_lines=False)
    table.add_column("Route")
    table.add_column("Method")
    table.add_column("Status", justify="right")
    table.add_column("Level")
    table.add_column("Options", overflow="fold", max_width=60)

    for key, entry in list(filters.items())[:max_rows]:
        route, method, status = (key.rsplit(".", 2) + ["", ""])[:3]
        level = str(entry.get("level", ""))
        table.add_row(
            escape(route), escape(method), status,
            f"[{level_style(level)}]{level}[/{level_style(level)}]",
            _format_options(entry.get("options", {})),
        )

    out.print(table)
    if len(filters) > max_rows:
        out.print(f"[dim]... and {len(filters) - max_rows} more keys[/dim]")


def print_match_result(
    key: str | None,
    level: str,
    options: dict[str, Any],
    console: Console | None = None,
) -> None:
    """Render the outcome of a single match as a key/value table."""
    out = console or _console
    table = Table(box=box.MINIMAL_DOUBLE_HEAD, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Filter key", escape(key) if key is not None else "[yellow]no match[/yellow]")
    table.add_row("Level", f"[{level_style(level)}]{level}[/{level_style(level)}]")
    table.add_row("Options", _format_options(options) or "[dim]none[/dim]")

    out.print(table)
