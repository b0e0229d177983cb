"""CLI entry point for housetab.

Invoked as::

    housetab [--verbose] COMMAND [ARGS]...

or, during development::

    python -m housetab.cli.main

Commands
--------
version     Show version information
tabs        List tabs with their row counts and columns
show        Render one tab, optionally hiding or sorting columns
"""
from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from housetab.entities.models import TabKind

if TYPE_CHECKING:
    from housetab.app.session import Session
    from housetab.config.settings import Settings

console = Console()
err_console = Console(stderr=True)

_TAB_CHOICES = [kind.value for kind in TabKind]


def _configure_logging(verbose: bool) -> None:
    """Route log records through rich on stderr."""
    handler = RichHandler(console=err_console, show_path=False, markup=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def _load_settings_or_exit(config: str | None) -> "Settings":
    from housetab.config.settings import ConfigError, load_settings

    try:
        return load_settings(config)
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)


def _session_or_exit(settings: "Settings", seed: str | None, show_deleted: bool) -> "Session":
    """Build a session over the seed file, or the demo data without one."""
    from housetab.app.session import Session
    from housetab.store import MemoryStore, SeedError, StoreError, demo_store, load_seed_file

    seed_path = seed or settings.storage.seed_path
    try:
        if seed_path:
            store = MemoryStore()
            load_seed_file(seed_path, store)
        else:
            store = demo_store()
    except SeedError as exc:
        err_console.print(f"[red]Seed error[/red] in {seed_path}: {exc}")
        sys.exit(1)
    except StoreError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    session = Session(
        store,
        undo_limit=settings.ui.undo_limit,
        palette=settings.ui.palette,
        show_deleted=show_deleted or settings.ui.show_deleted,
    )
    if session.status is not None and session.status.is_error:
        err_console.print(f"[red]Error:[/red] {session.status.text}")
        sys.exit(1)
    return session


def _report_status(session: "Session") -> None:
    status = session.status
    if status is None:
        return
    if status.is_error:
        err_console.print(f"[yellow]Warning:[/yellow] {status.text}")
    else:
        console.print(f"[dim]{status.text}[/dim]")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="housetab")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Home-management tables with collapsible columns."""
    _configure_logging(verbose)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from housetab import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]housetab[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# tabs command
# ---------------------------------------------------------------------------


@cli.command(name="tabs")
@click.option("--seed", type=click.Path(dir_okay=False), default=None, help="YAML seed file")
@click.option("--config", type=click.Path(dir_okay=False), default=None, help="Config file")
def tabs_command(seed: str | None, config: str | None) -> None:
    """List tabs with their row counts and columns."""
    settings = _load_settings_or_exit(config)
    session = _session_or_exit(settings, seed, show_deleted=False)

    table = Table(title="Tabs", show_lines=False)
    table.add_column("Tab", style="bold", min_width=10)
    table.add_column("Rows", justify="right")
    table.add_column("Columns")
    for tab in session.tabs:
        titles = []
        for spec in tab.columns.specs:
            titles.append(f"{spec.title}→{spec.link.target.value}" if spec.link else spec.title)
        table.add_row(tab.kind.value, str(len(tab.rows)), ", ".join(titles))
    console.print(table)


# ---------------------------------------------------------------------------
# show command
# ---------------------------------------------------------------------------


@cli.command(name="show")
@click.argument("tab_name", metavar="TAB", type=click.Choice(_TAB_CHOICES, case_sensitive=False))
@click.option("--hide", "hide", multiple=True, help="Hide the column with this title (repeatable)")
@click.option("--sort", "sort_title", default=None, help="Sort rows by the column with this title")
@click.option("--desc", is_flag=True, default=False, help="Sort descending instead of ascending")
@click.option("--width", type=click.IntRange(min=1), default=None, help="Target width in cells")
@click.option("--deleted", is_flag=True, default=False, help="Include soft-deleted rows")
@click.option("--delete", "delete_ids", type=int, multiple=True, help="Soft-delete a row by id")
@click.option("--undo", "undo_count", count=True, help="Undo the newest change (repeatable)")
@click.option("--seed", type=click.Path(dir_okay=False), default=None, help="YAML seed file")
@click.option("--config", type=click.Path(dir_okay=False), default=None, help="Config file")
def show_command(
    tab_name: str,
    hide: tuple[str, ...],
    sort_title: str | None,
    desc: bool,
    width: int | None,
    deleted: bool,
    delete_ids: tuple[int, ...],
    undo_count: int,
    seed: str | None,
    config: str | None,
) -> None:
    """Render TAB as a table, collapsing hidden columns into badges."""
    settings = _load_settings_or_exit(config)
    session = _session_or_exit(settings, seed, show_deleted=deleted)
    tab = session.switch_tab(tab_name)

    for record_id in delete_ids:
        session.delete(tab, record_id)
        _report_status(session)
    for _ in range(undo_count):
        session.undo()
        _report_status(session)
    for title in hide:
        if not session.hide_column(tab, title):
            _report_status(session)
    if sort_title is not None:
        for _ in range(2 if desc else 1):
            if not session.sort(tab, sort_title):
                _report_status(session)
                break

    target = width or settings.ui.width or console.width
    console.print(f"[bold]{tab.name}[/bold] [dim]({len(tab.rows)} rows)[/dim]")
    for line in session.frame(tab, target):
        console.print(line, no_wrap=True, crop=False)

    hidden = tab.columns.hidden_titles()
    if hidden:
        console.print(f"[dim]hidden: {', '.join(hidden)}[/dim]")


if __name__ == "__main__":
    cli()
