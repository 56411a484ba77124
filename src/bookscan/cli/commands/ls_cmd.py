# ABOUTME: The `bookscan ls` command for listing saved books.
# ABOUTME: Displays a Rich table of every record, newest first.

from pathlib import Path

import click
from rich.console import Console

from bookscan.cli.library import connect
from bookscan.cli.options import db_option
from bookscan.cli.render import records_table
from bookscan.db.catalog import BookCatalog
from bookscan.db.store import RecordStore


@click.command("ls")
@db_option
def ls(db_path: Path | None) -> None:
    """List all saved books, most recently scanned first."""
    console = Console()
    conn = connect(console, db_path)
    try:
        live = RecordStore(BookCatalog(conn)).observe_all()
        records = live.value
        live.close()
    finally:
        conn.close()

    if not records:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    console.print(records_table(records))
    console.print(f"\n[dim]{len(records)} book(s)[/dim]")
