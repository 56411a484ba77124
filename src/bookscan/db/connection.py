# ABOUTME: SQLite database connection management for the bookscan library.
# ABOUTME: Opens or creates the database, checks its schema version, and stamps new files.

import logging
import sqlite3
from pathlib import Path

from bookscan.db.catalog import StoreError
from bookscan.db.schema import SCHEMA, SCHEMA_VERSION

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".bookscan" / "library.db"


def _prepare(conn: sqlite3.Connection) -> None:
    version = conn.execute("PRAGMA user_version").fetchone()[0]
    if version > SCHEMA_VERSION:
        raise StoreError(
            f"Database schema version {version} is newer than supported ({SCHEMA_VERSION})"
        )
    if version < SCHEMA_VERSION:
        logger.debug("Stamping library schema version %d (was %d)", SCHEMA_VERSION, version)
        conn.executescript(SCHEMA)
        conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")


def open_library(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the bookscan library database.

    Creates the database file and parent directories if they don't exist,
    and creates the books table on first use. Sets WAL journal mode and
    sqlite3.Row factory for dict-like column access.

    Args:
        path: Path to the database file. Defaults to ~/.bookscan/library.db.

    Returns:
        A configured sqlite3.Connection.

    Raises:
        StoreError: If the file is not a SQLite database, or was written by
            a newer schema version.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        _prepare(conn)
    except sqlite3.Error as exc:
        conn.close()
        raise StoreError(f"Cannot open library at {db_path}: {exc}") from exc
    except StoreError:
        conn.close()
        raise
    return conn
