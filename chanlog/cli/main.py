"""Command-line tools for chanlog configuration files.

Usage:
    chanlog channels logging.yaml
    chanlog check logging.yaml
    chanlog components --kind handler
    chanlog emit logging.yaml "user_login" --channel audit --level info
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from chanlog.components import COMPONENT_REGISTRY, list_components
from chanlog.config.settings import get_settings
from chanlog.core.exceptions import ChanlogError
from chanlog.core.factory import LoggerFactory
from chanlog.logging import setup_logging

app = typer.Typer(
    name="chanlog",
    help="Inspect and exercise declarative logging configurations",
    add_completion=False,
)
console = Console()


def load_factory(config: str, root: Optional[str], strict: bool = False) -> LoggerFactory:
    """Build a factory from a file, turning chanlog errors into a CLI exit."""
    try:
        return LoggerFactory.build_from_file(config, root_path=root, strict=strict)
    except ChanlogError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show chanlog's own debug diagnostics",
    ),
):
    """Configure diagnostics before running a command."""
    settings = get_settings()
    setup_logging(level="DEBUG" if verbose else settings.log_level, log_format=settings.log_format)


@app.command()
def channels(
    config: str = typer.Argument(..., help="Config file (json, yaml, toml)"),
    root: Optional[str] = typer.Option(
        None,
        "--root", "-r",
        help="Base directory for relative paths",
    ),
):
    """List declared channels and their handlers."""
    factory = load_factory(config, root)
    names = factory.channels()
    if not names:
        console.print("[yellow]Warning:[/yellow] No channels declared")
        raise typer.Exit(0)

    default = factory.get_default()
    defined = factory.config.handlers

    table = Table(show_header=True, header_style="bold")
    table.add_column("Channel")
    table.add_column("Handlers")
    table.add_column("Default")

    for name in names:
        handler_names = factory.config.loggers[name]
        if handler_names:
            rendered = ", ".join(
                h if h in defined else f"[red]{h}?[/red]" for h in handler_names
            )
        else:
            rendered = "[dim](null)[/dim]"
        table.add_row(name, rendered, "*" if name == default else "")

    console.print(table)


@app.command()
def check(
    config: str = typer.Argument(..., help="Config file (json, yaml, toml)"),
    root: Optional[str] = typer.Option(
        None,
        "--root", "-r",
        help="Base directory for relative paths",
    ),
):
    """Report handler, processor and formatter names that do not resolve."""
    factory = load_factory(config, root)
    unresolved = factory.check_references()

    if not unresolved:
        console.print(f"[green]OK[/green] - {len(factory.channels())} channels, all references resolve")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Kind")
    table.add_column("Referenced by")
    table.add_column("Name")
    for ref in unresolved:
        table.add_row(ref.kind, ref.owner, f"[red]{ref.name}[/red]")

    console.print(table)
    console.print(f"[red]{len(unresolved)} unresolved reference(s)[/red]")
    raise typer.Exit(1)


@app.command()
def components(
    kind: Optional[str] = typer.Option(
        None,
        "--kind", "-k",
        help="Filter by kind (handler, processor, formatter)",
    ),
):
    """List registered component ids and their parameters."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Class")
    table.add_column("Kind")
    table.add_column("Parameters")

    for class_id in list_components(kind):
        spec = COMPONENT_REGISTRY[class_id]
        params = ", ".join(f"{p.name}={p.default!r}" for p in spec.params)
        table.add_row(class_id, spec.kind, params or "[dim]-[/dim]")

    console.print(table)


@app.command()
def emit(
    config: str = typer.Argument(..., help="Config file (json, yaml, toml)"),
    message: str = typer.Argument(..., help="Event to log"),
    channel: Optional[str] = typer.Option(
        None,
        "--channel", "-c",
        help="Channel to log to (default channel if omitted)",
    ),
    level: str = typer.Option(
        "info",
        "--level", "-l",
        help="Level (debug, info, warning, error, critical)",
    ),
    root: Optional[str] = typer.Option(
        None,
        "--root", "-r",
        help="Base directory for relative paths",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail on unknown handler/processor/formatter names",
    ),
):
    """Build a channel logger and log one message through it."""
    factory = load_factory(config, root, strict=strict)
    try:
        channel_logger = factory.get(channel)
    except ChanlogError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        channel_logger.log(level, message)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    finally:
        channel_logger.close()


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
