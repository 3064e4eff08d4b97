"""Typer CLI for ghostfetch."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .ansi import Painter
from .config import Settings, load_settings
from .context import SystemContext
from .exceptions import AsciiArtError, ConfigError
from .logos import default_catalog, get_logo, load_custom_logo
from .logs import configure_logging
from .models import Logo
from .paths import config_file
from .render import render
from .summary import collect_summary, format_info_lines

app = typer.Typer(help="A fast, minimal system fetch tool for Linux.", add_completion=False)

console = Console()
err_console = Console(stderr=True)


def capture_context() -> SystemContext:
    return SystemContext.capture()


def _version_callback(value: bool) -> None:
    if not value:
        return
    try:
        typer.echo(f"ghostfetch {package_version('ghostfetch')}")
    except PackageNotFoundError:
        typer.echo("ghostfetch (unknown version)")
    raise typer.Exit()


def _warn(message: str) -> None:
    err_console.print(f"[yellow]Warning: {message}[/yellow]", highlight=False, soft_wrap=True)


def _logo_table() -> Table:
    table = Table(title="Available Logos")
    table.add_column("Logo")
    table.add_column("Width", justify="right")
    for logo in default_catalog().logos():
        table.add_row(logo.name, str(logo.width))
    return table


def select_logo(
    distro_id: str,
    off: bool,
    logo_name: Optional[str],
    ascii_path: Optional[Path],
) -> Logo | None:
    if off:
        return None
    if logo_name:
        return get_logo(logo_name)
    if ascii_path is not None:
        try:
            return load_custom_logo(ascii_path)
        except AsciiArtError as exc:
            _warn(str(exc))
    return get_logo(distro_id)


def _load_settings(path: Optional[Path], ctx: SystemContext) -> Settings:
    try:
        return load_settings(path or config_file(ctx.env))
    except ConfigError as exc:
        _warn(f"ignoring configuration: {exc}")
        return Settings()


@app.command()
def main(
    off: bool = typer.Option(False, "--off", "-o", help="Disable ASCII art logo"),
    logo: Optional[str] = typer.Option(None, "--logo", "-l", help="Use a specific distro's logo"),
    ascii: Optional[Path] = typer.Option(
        None, "--ascii", "-a", help="Use a custom ASCII art file"
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colors"),
    show_all: bool = typer.Option(
        False, "--all", help="Show all available info (including optional fields)"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", help="Read settings from this YAML file"
    ),
    list_logos: bool = typer.Option(False, "--list-logos", help="List bundled logos and exit"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log probe details to stderr"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Print a system summary beside the distribution logo."""
    configure_logging(err_console, verbose)
    if list_logos:
        console.print(_logo_table())
        raise typer.Exit()

    ctx = capture_context()
    settings = _load_settings(config, ctx)
    color = settings.color and not no_color and console.is_terminal and not console.no_color
    painter = Painter(enabled=color)

    summary = collect_summary(ctx, show_all=show_all or settings.show_all)
    chosen = select_logo(
        summary.distro_id,
        off=off,
        logo_name=logo or settings.logo,
        ascii_path=ascii or settings.ascii,
    )
    primary = chosen.primary if chosen is not None else "cyan"
    info_lines = format_info_lines(summary, painter, primary=primary, hidden=settings.hide)
    for row in render(info_lines, chosen, ctx.terminal_width, painter):
        typer.echo(row, color=color)


if __name__ == "__main__":
    app()
