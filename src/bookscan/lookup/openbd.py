# ABOUTME: OpenBD lookup gateway for Japanese-market ISBNs.
# ABOUTME: Parses the openbd.jp /v1/get response list into a BookSummary.

import logging
from typing import Any

from bookscan.lookup.gateway import BookLookupError
from bookscan.lookup.http import HttpClient, LookupFetchError
from bookscan.lookup.types import UNKNOWN_AUTHOR, UNKNOWN_TITLE, BookSummary, secure_url

logger = logging.getLogger(__name__)

_GET_URL = "https://api.openbd.jp/v1/get"


def parse_get_response(data: Any, identifier: str) -> BookSummary | None:
    """Parse an OpenBD /v1/get response into a BookSummary.

    OpenBD answers with one list entry per requested ISBN, and that entry
    is null for unknown books. A present entry with a null summary is
    treated the same way.

    Raises:
        ValueError: If the response is not a list of objects.
    """
    if not isinstance(data, list):
        raise ValueError("Expected a list response")
    if not data or data[0] is None:
        return None

    entry = data[0]
    if not isinstance(entry, dict):
        raise ValueError("Expected an object entry")
    summary = entry.get("summary")
    if summary is None:
        return None

    return BookSummary(
        identifier=identifier,
        title=summary.get("title") or UNKNOWN_TITLE,
        author=summary.get("author") or UNKNOWN_AUTHOR,
        cover_url=secure_url(summary.get("cover") or ""),
    )


class OpenBdGateway:
    """Lookup gateway backed by the OpenBD API."""

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "openbd"

    async def resolve(self, identifier: str) -> BookSummary | None:
        if not identifier.strip():
            return None

        try:
            data = await self._http.get(_GET_URL, params={"isbn": identifier})
        except LookupFetchError as exc:
            logger.warning("OpenBD lookup failed for %s: %s", identifier, exc)
            raise BookLookupError(str(exc)) from exc

        try:
            return parse_get_response(data, identifier)
        except (ValueError, TypeError, AttributeError) as exc:
            logger.warning("Unparseable OpenBD response for %s: %s", identifier, exc)
            raise BookLookupError(f"Unexpected response for {identifier}: {exc}") from exc
