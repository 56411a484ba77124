# ABOUTME: Google Books lookup gateway implementation.
# ABOUTME: Resolves a scanned ISBN against the volumes endpoint and returns a BookSummary.

import logging

from bookscan.lookup.gateway import BookLookupError
from bookscan.lookup.google_books_parser import parse_volumes_response
from bookscan.lookup.http import HttpClient, LookupFetchError
from bookscan.lookup.types import BookSummary

logger = logging.getLogger(__name__)

_VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"


class GoogleBooksGateway:
    """Lookup gateway backed by the Google Books API.

    Issues exactly one request per identifier. Uses a dependency-injected
    HttpClient for testability.
    """

    def __init__(self, http_client: HttpClient, api_key: str | None = None) -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "google"

    async def resolve(self, identifier: str) -> BookSummary | None:
        """Look up a book by ISBN.

        Returns None when nothing matches. Any transport or parse failure is
        logged and raised as BookLookupError.
        """
        if not identifier.strip():
            return None

        params = {"q": f"isbn:{identifier}"}
        if self._api_key:
            params["key"] = self._api_key

        try:
            data = await self._http.get(_VOLUMES_URL, params=params)
        except LookupFetchError as exc:
            logger.warning("Google Books lookup failed for %s: %s", identifier, exc)
            raise BookLookupError(str(exc)) from exc

        try:
            return parse_volumes_response(data, identifier)
        except (ValueError, TypeError, AttributeError) as exc:
            logger.warning("Unparseable Google Books response for %s: %s", identifier, exc)
            raise BookLookupError(f"Unexpected response for {identifier}: {exc}") from exc
