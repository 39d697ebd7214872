"""Click CLI for depcache — inspect statistics and individual entries."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from depcache.core import DepCache
from depcache.types import DependencySpec, RequestContext

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


@click.group()
@click.version_option(package_name="depcache")
@click.option("--cache-dir", type=click.Path(file_okay=False), default=None, help="Cache directory.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
@click.pass_context
def cli(ctx: click.Context, cache_dir: str | None, verbose: int) -> None:
    """depcache — dependency-driven file cache."""
    _setup_logging(verbose)
    ctx.obj = {"cache_dir": Path(cache_dir) if cache_dir else None}


@cli.command("stats")
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show cache hit statistics per extension."""
    dc = DepCache(cache_dir=ctx.obj["cache_dir"])

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Attempts")
    table.add_column("Hits")
    table.add_column("Hit rate")

    for record in dc.stats():
        table.add_row(
            record.extension,
            str(record.attempts),
            str(record.successes),
            f"{record.hit_rate:.1%}",
        )

    console.print(table)


@cli.command("check")
@click.argument("key")
@click.argument("ext")
@click.option("--age", type=float, default=None, help="Maximum age in seconds.")
@click.option(
    "--file", "files", multiple=True, type=click.Path(), help="Dependent file (repeatable)."
)
@click.option("--purge", is_flag=True, default=False, help="Force the entry to be treated as stale.")
@click.pass_context
def check(
    ctx: click.Context,
    key: str,
    ext: str,
    age: float | None,
    files: tuple[str, ...],
    purge: bool,
) -> None:
    """Check whether the entry KEY/EXT is still valid (exit 1 when stale)."""
    dc = DepCache(cache_dir=ctx.obj["cache_dir"], context=RequestContext(purge=purge))
    try:
        entry = dc.cache(key, ext)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(2)

    depends = DependencySpec(max_age=age, files=[Path(f) for f in files])
    if entry.check_valid(depends):
        console.print(f"[green]valid[/green] {entry.location}")
    else:
        console.print(f"[yellow]stale[/yellow] {entry.location}")
        sys.exit(1)


@cli.command("remove")
@click.argument("key")
@click.argument("ext")
@click.pass_context
def remove(ctx: click.Context, key: str, ext: str) -> None:
    """Remove the cached entry KEY/EXT."""
    dc = DepCache(cache_dir=ctx.obj["cache_dir"])
    try:
        entry = dc.cache(key, ext)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(2)
    entry.remove()
    console.print(f"[green]Removed[/green] {entry.location}")


def main() -> None:
    """Entry point for the CLI."""
    cli()

