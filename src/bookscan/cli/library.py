# ABOUTME: Opens the library database for CLI commands.
# ABOUTME: Turns an unusable database file into a red error message and exit code 1.

import sqlite3
from pathlib import Path

from rich.console import Console

from bookscan.db.catalog import StoreError
from bookscan.db.connection import DEFAULT_DB_PATH, open_library


def connect(console: Console, db_path: Path | None) -> sqlite3.Connection:
    """Open the library at db_path (or the default), exiting 1 on failure."""
    try:
        return open_library(db_path or DEFAULT_DB_PATH)
    except StoreError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise SystemExit(1) from exc
