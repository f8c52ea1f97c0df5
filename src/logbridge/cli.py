"""Logbridge CLI — entry point.

Commands:
    logbridge compile [FILE]                        Compile filters and print the rule table
    logbridge match   FILE ROUTE METHOD STATUS      Show the filter governing a request
    logbridge check   [FILE]                        Validate a filters file
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape

from .compiler import build_matcher
from .config import settings
from .dumper import dump_json, dump_python
from .errors import LogBridgeError
from .filters.loader import load_configuration_file
from .filters.models import Configuration
from .matcher import Matcher
from .visualization.tables import print_match_result, print_rule_table

console = Console()
err_console = Console(stderr=True)

# ── Helpers ─────────────────────────────────────────────────────────────────


def _resolve_file(file: Path | None) -> Path:
    if file is not None:
        return file
    if settings.filters_file:
        return Path(settings.filters_file)
    err_console.print("[red]No filters file given.[/red] Pass FILE or set LOGBRIDGE_FILTERS_FILE.")
    sys.exit(1)


def _load(file: Path | None, active: tuple[str, ...], default_level: str | None) -> tuple[Path, Configuration]:
    path = _resolve_file(file)
    if not path.exists():
        err_console.print(f"[red]Filters file not found:[/red] {path}")
        sys.exit(1)
    try:
        configuration = load_configuration_file(path, default_level=default_level)
    except LogBridgeError as exc:
        err_console.print(f"[red]Error loading {path}:[/red] {escape(str(exc))}")
        sys.exit(1)

    if active:
        configuration = Configuration(configuration.filters, active_filters=active)
    elif configuration.active_filters is None and settings.active_filters is not None:
        configuration = Configuration(configuration.filters, active_filters=tuple(settings.active_filters))
    return path, configuration


def _build(path: Path, configuration: Configuration, default_level: str | None) -> Matcher:
    try:
        return build_matcher(configuration, default_level=default_level)
    except LogBridgeError as exc:
        err_console.print(f"[red]Cannot compile {path}:[/red] {escape(str(exc))}")
        sys.exit(1)


_file_argument = click.argument(
    "file", required=False, type=click.Path(dir_okay=False, path_type=Path),
)
_active_option = click.option(
    "--active", "-a", multiple=True,
    help="Filter to activate, in priority order (repeatable). Overrides the file's active_filters.",
)
_default_level_option = click.option(
    "--default-level", "-l", default=None,
    help="Level used when no filter matches (default: LOGBRIDGE_DEFAULT_LEVEL or 'info').",
)

# ── CLI root ─────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version="1.0.0", prog_name="logbridge")
@click.option("--verbose", "-v", is_flag=True, help="Log compilation details to stderr.")
def main(verbose: bool) -> None:
    """logbridge — compile request logging filters and resolve log levels."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# ── compile ──────────────────────────────────────────────────────────────────


@main.command("compile")
@_file_argument
@_active_option
@_default_level_option
@click.option(
    "--output", "-o", "output_fmt", default="table",
    type=click.Choice(["table", "json", "python"], case_sensitive=False),
    help="Output format.",
    show_default=True,
)
def compile_(
    file: Path | None,
    active: tuple[str, ...],
    default_level: str | None,
    output_fmt: str,
) -> None:
    """Compile a filters file and print the resulting rule table.

    \b
    Examples:
      logbridge compile filters.json
      logbridge compile filters.json --active home_errors --active catch_all
      logbridge compile filters.json --output json > matcher.json
      logbridge compile filters.json --output python > compiled_filters.py
    """
    path, configuration = _load(file, active, default_level)
    matcher = _build(path, configuration, default_level)

    if output_fmt == "json":
        click.echo(dump_json(matcher))
        return
    if output_fmt == "python":
        click.echo(dump_python(matcher), nl=False)
        return

    print_rule_table(matcher.get_filters(), title=f"{path.name}", console=console)
    console.print(f"[dim]{len(matcher)} keys, default level {matcher.default_level!r}[/dim]")


# ── match ────────────────────────────────────────────────────────────────────


@main.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("route")
@click.argument("method")
@click.argument("status", type=int)
@_active_option
@_default_level_option
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def match(
    file: Path,
    route: str,
    method: str,
    status: int,
    active: tuple[str, ...],
    default_level: str | None,
    as_json: bool,
) -> None:
    """Show which filter governs a (route, method, status) request.

    FILE is required here: with three positional request arguments after it,
    it cannot fall back to LOGBRIDGE_FILTERS_FILE like compile and check do.

    \b
    Examples:
      logbridge match filters.json home GET 500
      logbridge match filters.json api_users POST 422 --json
    """
    path, configuration = _load(file, active, default_level)
    matcher = _build(path, configuration, default_level)

    key = matcher.get_match_filter_key(route, method, status)
    result: dict[str, Any] = {
        "key": key,
        "level": matcher.get_level(route, method, status),
        "options": matcher.get_options(route, method, status),
    }

    if as_json:
        click.echo(json.dumps(result, default=str))
        return
    print_match_result(result["key"], result["level"], result["options"], console=console)


# ── check ────────────────────────────────────────────────────────────────────


@main.command()
@_file_argument
@_active_option
def check(file: Path | None, active: tuple[str, ...]) -> None:
    """Validate a filters file: shape, status selectors and compilation.

    Exits with status 1 when the file cannot be compiled.
    """
    path, configuration = _load(file, active, None)
    matcher = _build(path, configuration, None)

    selected = configuration.selected_filters()
    skipped = [n for n in configuration.active_filters or () if n not in configuration.filters]
    console.print(
        f"[green]OK[/green] {path.name}: {len(selected)} of {len(configuration.filters)} "
        f"filters active, {len(matcher)} keys"
    )
    if skipped:
        console.print(f"[yellow]Unknown active filters ignored:[/yellow] {', '.join(skipped)}")


if __name__ == "__main__":
    main()
