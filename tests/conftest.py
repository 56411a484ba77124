# ABOUTME: Shared pytest fixtures for bookscan tests.
# ABOUTME: Provides temporary catalogs, record stores, and sample lookup results.

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from bookscan.db.catalog import BookCatalog
from bookscan.db.connection import open_library
from bookscan.db.store import RecordStore
from bookscan.lookup.types import BookSummary


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a throwaway library database."""
    return tmp_path / "library.db"


@pytest.fixture
def conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    """An open, schema-initialized connection, closed after the test."""
    connection = open_library(db_path)
    yield connection
    connection.close()


@pytest.fixture
def catalog(conn: sqlite3.Connection) -> BookCatalog:
    """A BookCatalog backed by a temporary database."""
    return BookCatalog(conn)


@pytest.fixture
def store(catalog: BookCatalog) -> RecordStore:
    """A RecordStore over the temporary catalog."""
    return RecordStore(catalog)


@pytest.fixture
def rose() -> BookSummary:
    """A fully-populated lookup result."""
    return BookSummary(
        identifier="9780156001311",
        title="The Name of the Rose",
        author="Umberto Eco",
        cover_url="https://books.google.com/rose.jpg",
    )


@pytest.fixture
def dune() -> BookSummary:
    """A second lookup result with a different identifier."""
    return BookSummary(
        identifier="9780441172719",
        title="Dune",
        author="Frank Herbert",
        cover_url="",
    )
