# ABOUTME: Converts between BookRecord dataclasses and SQLite row dictionaries.
# ABOUTME: BookRecord is the persisted form of a confirmed BookSummary.

from dataclasses import dataclass
from typing import Any

from bookscan.lookup.types import BookSummary


@dataclass(frozen=True)
class BookRecord:
    """A cataloged book. id is None until the store assigns one."""

    id: int | None
    identifier: str
    title: str
    author: str
    cover_url: str = ""
    date_added: str | None = None

    @classmethod
    def from_summary(cls, summary: BookSummary) -> "BookRecord":
        """Build an unsaved record from a confirmed lookup result."""
        return cls(
            id=None,
            identifier=summary.identifier,
            title=summary.title,
            author=summary.author,
            cover_url=summary.cover_url,
        )


def record_to_row(record: BookRecord) -> dict[str, Any]:
    """Convert a BookRecord to a dict suitable for INSERT OR REPLACE.

    A None id lets SQLite assign the next one; date_added is left to the
    column default.
    """
    return {
        "id": record.id,
        "isbn": record.identifier,
        "title": record.title,
        "author": record.author,
        "cover_url": record.cover_url,
    }


def row_to_record(row: Any) -> BookRecord:
    """Convert a database row (dict-like) back to a BookRecord."""
    return BookRecord(
        id=row["id"],
        identifier=row["isbn"],
        title=row["title"],
        author=row["author"],
        cover_url=row["cover_url"],
        date_added=row["date_added"],
    )
