# ABOUTME: LookupGateway protocol defining the contract for bibliographic lookup sources.
# ABOUTME: Google Books, OpenBD, or any other identifier-keyed service implements this.

from typing import Protocol, runtime_checkable

from bookscan.lookup.types import BookSummary


class BookLookupError(Exception):
    """Raised when a lookup fails for a reason other than "no such book".

    Covers transport failures, bad HTTP statuses, and responses whose shape
    cannot be parsed. Callers that only care about found/not-found may treat
    it the same as a None result.
    """


@runtime_checkable
class LookupGateway(Protocol):
    """Protocol for identifier lookup services.

    resolve() returns a normalized BookSummary, None when the service has no
    matching record, and raises BookLookupError on any other failure.
    """

    @property
    def name(self) -> str: ...

    async def resolve(self, identifier: str) -> BookSummary | None: ...
