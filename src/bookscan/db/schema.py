# ABOUTME: SQL DDL statements for the bookscan library database schema.
# ABOUTME: Defines the books table, its index, and the schema version stamped into the file.

# Stored in PRAGMA user_version. Files stamped with a higher number were
# written by a newer bookscan and are refused.
SCHEMA_VERSION = 1

SCHEMA = """
-- Scanned book catalog table
CREATE TABLE IF NOT EXISTS books (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    isbn        TEXT NOT NULL,
    title       TEXT NOT NULL,
    author      TEXT NOT NULL,
    cover_url   TEXT NOT NULL DEFAULT '',
    date_added  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE INDEX IF NOT EXISTS idx_books_isbn ON books(isbn);
"""
