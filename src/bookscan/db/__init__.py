# ABOUTME: Public API for the bookscan persistence layer.
# ABOUTME: Exports connection management, the catalog, the record store facade, and data types.

from bookscan.db.catalog import BookCatalog, StoreError
from bookscan.db.connection import DEFAULT_DB_PATH, open_library
from bookscan.db.mapping import BookRecord
from bookscan.db.store import LiveQuery, RecordStore

__all__ = [
    "DEFAULT_DB_PATH",
    "BookCatalog",
    "BookRecord",
    "LiveQuery",
    "RecordStore",
    "StoreError",
    "open_library",
]
