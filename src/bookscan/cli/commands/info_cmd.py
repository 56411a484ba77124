# ABOUTME: The `bookscan info` command for displaying one saved book.
# ABOUTME: Shows every stored field for a record by ID.

from pathlib import Path

import click
from rich.console import Console

from bookscan.cli.library import connect
from bookscan.cli.options import db_option
from bookscan.cli.render import record_table
from bookscan.db.catalog import BookCatalog
from bookscan.db.store import RecordStore


@click.command("info")
@click.argument("book_id", type=int)
@db_option
def info(book_id: int, db_path: Path | None) -> None:
    """Show details for a saved book by ID."""
    console = Console()
    conn = connect(console, db_path)
    try:
        live = RecordStore(BookCatalog(conn)).get_by_id(book_id)
        record = live.value
        live.close()
    finally:
        conn.close()

    if record is None:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)

    console.print(record_table(record))
