# ABOUTME: Core data structures for lookup results.
# ABOUTME: BookSummary is the transient shape passed from lookup to the scan coordinator.

from dataclasses import dataclass

UNKNOWN_TITLE = "Unknown title"
UNKNOWN_AUTHOR = "Unknown author"

_INSECURE_SCHEME = "http://"
_SECURE_SCHEME = "https://"


@dataclass(frozen=True)
class BookSummary:
    """An unsaved lookup result for a scanned identifier.

    The identifier is always the value the caller scanned, never one echoed
    back by the upstream service. Title and author fall back to the
    UNKNOWN_* sentinels, and cover_url is either empty or https.
    """

    identifier: str
    title: str = UNKNOWN_TITLE
    author: str = UNKNOWN_AUTHOR
    cover_url: str = ""


def secure_url(url: str) -> str:
    """Rewrite a leading http:// scheme to https://. Idempotent."""
    if url.startswith(_INSECURE_SCHEME):
        return _SECURE_SCHEME + url[len(_INSECURE_SCHEME):]
    return url
