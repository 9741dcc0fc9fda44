"""CLI for datafile-manager."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import load_store_config
from .errors import ConfigError
from .store import DataFileManager
from .utils import humanize_size


app = typer.Typer(help="""\
Inspect and manage a datafile-manager store: payloads saved under an
identifier, optionally grouped into folders, beneath one root directory.""")

console = Console()


def _configure_logging(verbose: bool) -> None:
    """Send library diagnostics to stderr; DEBUG=1 behaves like --verbose."""
    level = logging.DEBUG if verbose or os.environ.get("DEBUG") else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _store(ctx: typer.Context) -> DataFileManager:
    return ctx.obj


def _key(entry_id: str, folder: Optional[str]) -> str:
    return escape(f"{folder}/{entry_id}" if folder else entry_id)


@app.callback()
def main_options(
    ctx: typer.Context,
    base_dir: Optional[Path] = typer.Option(None, "--base-dir", help="Directory holding the store root (default: user documents)"),
    namespace: Optional[str] = typer.Option(None, "--namespace", help="Store root directory name (default: DataFileManager)"),
    config: Optional[Path] = typer.Option(None, "--config", help="Config file to read"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug diagnostics"),
):
    """Resolve the store configuration shared by all commands."""
    _configure_logging(verbose)
    try:
        store_config = load_store_config(config, base_dir=base_dir, namespace=namespace)
    except ConfigError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1)
    ctx.obj = DataFileManager(store_config)


@app.command()
def where(ctx: typer.Context):
    """Print the store root directory."""
    typer.echo(str(_store(ctx).root))


@app.command()
def put(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., metavar="ID", help="Entry identifier"),
    source: str = typer.Argument(..., help="File to store, or - for stdin"),
    folder: Optional[str] = typer.Option(None, "--folder", "-f", help="Folder to store the entry in"),
    move: bool = typer.Option(False, "--move", help="Delete the source file after storing it"),
):
    """Store a file under an identifier.

    Examples:
        datafile put report report.json               # Copy into the store
        datafile put report report.json -f 2024       # Store inside folder 2024
        datafile put report tmp.bin --move            # Move into the store
        cat data.bin | datafile put blob -            # Read from stdin
    """
    store = _store(ctx)
    if source == "-":
        path = store.write(sys.stdin.buffer.read(), entry_id, folder)
    else:
        path = store.write_from_external_location(source, entry_id, folder, remove_source=move)

    if path is None:
        console.print(f"[red]✗[/red] Couldn't store {_key(entry_id, folder)}")
        console.print("[dim]Run with --verbose for more details[/dim]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Stored {_key(entry_id, folder)}")


@app.command()
def cat(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., metavar="ID", help="Entry identifier"),
    folder: Optional[str] = typer.Option(None, "--folder", "-f", help="Folder holding the entry"),
):
    """Write an entry's raw bytes to stdout."""
    data = _store(ctx).read(entry_id, folder)
    if data is None:
        console.print(f"[red]✗[/red] No entry {_key(entry_id, folder)}")
        raise typer.Exit(1)
    typer.echo(data, nl=False)


@app.command()
def locate(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., metavar="ID", help="Entry identifier"),
    folder: Optional[str] = typer.Option(None, "--folder", "-f", help="Folder holding the entry"),
):
    """Print the path of a stored entry."""
    path = _store(ctx).locate(entry_id, folder)
    if path is None:
        console.print(f"[red]✗[/red] No entry {_key(entry_id, folder)}")
        raise typer.Exit(1)
    typer.echo(str(path))


@app.command("ls")
def list_contents(
    ctx: typer.Context,
    folder: Optional[str] = typer.Argument(None, help="Folder to list (default: store root)"),
):
    """List a folder, or the folders and entries at the store root."""
    store = _store(ctx)
    if folder:
        names = store.list_folder_contents(folder)
        if names is None:
            console.print(f"[red]✗[/red] No folder {escape(folder)}")
            raise typer.Exit(1)
        base = store.root / folder
    else:
        names = store.list_root_contents()
        if names is None:
            console.print("[dim]Store is empty[/dim]")
            return
        base = store.root

    if not names:
        console.print("[dim]No entries[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Size", justify="right")

    for name in names:
        path = base / name
        if path.is_dir():
            table.add_row(escape(name), "folder", "-")
        else:
            try:
                size = humanize_size(path.stat().st_size)
            except OSError:
                size = "?"
            table.add_row(escape(name), "entry", size)

    console.print(table)


@app.command()
def rm(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., metavar="ID", help="Entry identifier"),
    folder: Optional[str] = typer.Option(None, "--folder", "-f", help="Folder holding the entry"),
):
    """Delete an entry. Deleting a missing entry is not an error."""
    _store(ctx).delete_entry(entry_id, folder)
    console.print(f"[green]✓[/green] Deleted {_key(entry_id, folder)}")


@app.command()
def rmdir(
    ctx: typer.Context,
    folder: str = typer.Argument(..., help="Folder to delete"),
):
    """Delete a folder and every entry in it."""
    _store(ctx).delete_folder(folder)
    console.print(f"[green]✓[/green] Deleted folder {escape(folder)}")


@app.command()
def purge(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
):
    """Delete the store root and everything in it."""
    store = _store(ctx)
    if not yes:
        typer.confirm(f"Delete {store.root} and everything in it?", abort=True)
    store.delete_all()
    console.print("[green]✓[/green] Store purged")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
