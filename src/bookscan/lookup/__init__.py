# ABOUTME: Lookup package for resolving scanned identifiers against remote services.
# ABOUTME: Exports BookSummary, the gateway protocol, and the provider factory.

from bookscan.lookup.gateway import BookLookupError, LookupGateway
from bookscan.lookup.google_books import GoogleBooksGateway
from bookscan.lookup.http import HttpClient
from bookscan.lookup.openbd import OpenBdGateway
from bookscan.lookup.types import UNKNOWN_AUTHOR, UNKNOWN_TITLE, BookSummary, secure_url

PROVIDERS = ("google", "openbd")


def create_gateway(
    provider: str, http_client: HttpClient, api_key: str | None = None
) -> LookupGateway:
    """Build the named lookup gateway.

    Raises:
        ValueError: If the provider name is not one of PROVIDERS.
    """
    if provider == "google":
        return GoogleBooksGateway(http_client, api_key=api_key)
    if provider == "openbd":
        return OpenBdGateway(http_client)
    raise ValueError(f"Unknown lookup provider: {provider!r}")


__all__ = [
    "PROVIDERS",
    "UNKNOWN_AUTHOR",
    "UNKNOWN_TITLE",
    "BookLookupError",
    "BookSummary",
    "GoogleBooksGateway",
    "LookupGateway",
    "OpenBdGateway",
    "create_gateway",
    "secure_url",
]
