# ABOUTME: CRUD operations for the bookscan library catalog.
# ABOUTME: Upsert, query, and delete scanned book records in the SQLite database.

import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from bookscan.db.mapping import BookRecord, record_to_row, row_to_record

_COLUMNS = ("id", "isbn", "title", "author", "cover_url")
_UPSERT_SQL = (
    f"INSERT OR REPLACE INTO books ({', '.join(_COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in _COLUMNS)})"
)


class StoreError(Exception):
    """Raised when the underlying database rejects or fails an operation."""


class BookCatalog:
    """Wraps a sqlite3 connection and provides typed CRUD for the books table.

    Every mutating call runs in its own transaction: either all rows of a
    batch are written or none are.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        try:
            with self._conn:
                yield self._conn
        except sqlite3.Error as exc:
            raise StoreError(f"Database operation failed: {exc}") from exc

    def insert(self, record: BookRecord) -> int:
        """Insert a record, replacing any existing row with the same id.

        Returns:
            The id of the written row.
        """
        return self.insert_many([record])[0]

    def insert_many(self, records: Iterable[BookRecord]) -> list[int]:
        """Upsert several records in one transaction.

        Returns:
            The ids of the written rows, in input order.
        """
        ids: list[int] = []
        with self._transaction() as conn:
            for record in records:
                row = record_to_row(record)
                cursor = conn.execute(_UPSERT_SQL, [row[c] for c in _COLUMNS])
                ids.append(cursor.lastrowid)  # type: ignore[arg-type]
        return ids

    def delete(self, record: BookRecord) -> None:
        """Delete a record by id. Deleting an absent record is a no-op."""
        self.delete_many([record])

    def delete_many(self, records: Iterable[BookRecord]) -> int:
        """Delete several records in one transaction.

        Returns:
            The number of rows actually removed.
        """
        ids = [(record.id,) for record in records if record.id is not None]
        if not ids:
            return 0
        with self._transaction() as conn:
            cursor = conn.executemany("DELETE FROM books WHERE id = ?", ids)
        return cursor.rowcount

    def get_by_id(self, book_id: int) -> BookRecord | None:
        """Retrieve a record by its row ID."""
        try:
            row = self._conn.execute("SELECT * FROM books WHERE id = ?", (book_id,)).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Database operation failed: {exc}") from exc
        return row_to_record(row) if row else None

    def list_all(self) -> list[BookRecord]:
        """Return all records, newest (highest id) first."""
        try:
            rows = self._conn.execute("SELECT * FROM books ORDER BY id DESC").fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"Database operation failed: {exc}") from exc
        return [row_to_record(row) for row in rows]
