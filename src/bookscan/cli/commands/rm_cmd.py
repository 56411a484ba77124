# ABOUTME: The `bookscan rm` command for deleting saved books.
# ABOUTME: Selects the given IDs and removes them in one bulk delete.

import asyncio
from pathlib import Path

import click
from rich.console import Console

from bookscan.cli.library import connect
from bookscan.cli.options import db_option
from bookscan.cli.render import records_table
from bookscan.core.selection import SelectionManager
from bookscan.db.catalog import BookCatalog, StoreError
from bookscan.db.store import RecordStore


@click.command("rm")
@click.argument("book_ids", type=int, nargs=-1, required=True)
@db_option
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    default=False,
    help="Delete without asking for confirmation.",
)
def rm(book_ids: tuple[int, ...], db_path: Path | None, yes: bool) -> None:
    """Delete one or more saved books by ID."""
    console = Console()
    conn = connect(console, db_path)
    try:
        store = RecordStore(BookCatalog(conn))
        live = store.observe_all()
        selection = SelectionManager(store)
        for book_id in dict.fromkeys(book_ids):
            selection.toggle(book_id)

        present = {record.id for record in live.value}
        for book_id in sorted(selection.selected_ids - present):
            console.print(f"[yellow]Book {book_id} not found.[/yellow]")

        targets = [record for record in live.value if selection.is_selected(record.id)]
        if not targets:
            console.print("[yellow]Nothing to delete.[/yellow]")
            raise SystemExit(1)

        console.print(records_table(targets))
        if not yes and not click.confirm(f"Delete {len(targets)} book(s)?", default=False):
            console.print("[dim]Cancelled.[/dim]")
            return

        deleted = asyncio.run(selection.delete_selected(live.value))
        live.close()
    except StoreError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise SystemExit(1) from exc
    finally:
        conn.close()

    console.print(f"[green]Deleted {len(deleted)} book(s).[/green]")
