# ABOUTME: Rich renderables shared by the bookscan CLI commands.
# ABOUTME: Builds tables for lookup summaries and saved records.

from collections.abc import Iterable

from rich.table import Table

from bookscan.db.mapping import BookRecord
from bookscan.lookup.types import BookSummary


def summary_table(summary: BookSummary) -> Table:
    """Two-column detail view of an unsaved lookup result."""
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=8)
    table.add_column("Value")
    table.add_row("ISBN", summary.identifier)
    table.add_row("Title", summary.title)
    table.add_row("Author", summary.author)
    if summary.cover_url:
        table.add_row("Cover", summary.cover_url)
    return table


def summaries_table(summaries: Iterable[BookSummary]) -> Table:
    """One row per buffered summary, in scan order."""
    table = Table()
    table.add_column("#", style="dim", width=3)
    table.add_column("ISBN")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    for index, summary in enumerate(summaries, start=1):
        table.add_row(str(index), summary.identifier, summary.title, summary.author)
    return table


def records_table(records: Iterable[BookRecord]) -> Table:
    """One row per saved record."""
    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("ISBN")
    for record in records:
        table.add_row(str(record.id), record.title, record.author, record.identifier)
    return table


def record_table(record: BookRecord) -> Table:
    """Two-column detail view of a saved record."""
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=8)
    table.add_column("Value")
    table.add_row("ID", str(record.id))
    table.add_row("ISBN", record.identifier)
    table.add_row("Title", record.title)
    table.add_row("Author", record.author)
    if record.cover_url:
        table.add_row("Cover", record.cover_url)
    if record.date_added:
        table.add_row("Added", record.date_added)
    return table
