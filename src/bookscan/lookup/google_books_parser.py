# ABOUTME: Parsing functions for Google Books volumes API JSON responses.
# ABOUTME: Converts Google-specific data structures into BookSummary instances.

from typing import Any

from bookscan.lookup.types import UNKNOWN_AUTHOR, UNKNOWN_TITLE, BookSummary, secure_url


def _as_dict(value: Any, what: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Expected an object for {what}, got {type(value).__name__}")
    return value


def select_cover_url(image_links: dict[str, Any] | None) -> str:
    """Pick the cover image URL in priority order and force https.

    Tries thumbnail, then smallThumbnail, then falls back to an empty string.
    """
    links = image_links or {}
    raw = links.get("thumbnail") or links.get("smallThumbnail") or ""
    return secure_url(raw)


def join_authors(authors: list[str] | None) -> str:
    """Join a list of author names into one display string.

    Raises:
        ValueError: If authors is present but not a list.
    """
    if authors is not None and not isinstance(authors, list):
        raise ValueError(f"Expected a list of authors, got {type(authors).__name__}")
    names = [name for name in (authors or []) if name]
    return ", ".join(names) if names else UNKNOWN_AUTHOR


def parse_volumes_response(data: Any, identifier: str) -> BookSummary | None:
    """Parse a volumes search response into a BookSummary.

    Only the first item is used. Returns None when the response has no items.
    The identifier always comes from the caller, since Google does not
    reliably echo back the ISBN that was searched for.

    Raises:
        ValueError: If the response does not have the expected shape.
    """
    body = _as_dict(data, "response")
    items = body.get("items") or []
    if not isinstance(items, list):
        raise ValueError("Expected 'items' to be a list")
    if not items:
        return None

    item = _as_dict(items[0], "item")
    info = _as_dict(item.get("volumeInfo"), "volumeInfo")

    return BookSummary(
        identifier=identifier,
        title=info.get("title") or UNKNOWN_TITLE,
        author=join_authors(info.get("authors")),
        cover_url=select_cover_url(_as_dict(info.get("imageLinks"), "imageLinks")),
    )
