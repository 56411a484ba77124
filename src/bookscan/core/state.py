# ABOUTME: Scan state variants for the scan coordinator state machine.
# ABOUTME: Idle, Loading, Success(summary), and ScanError(reason) form a closed union.

from dataclasses import dataclass
from enum import Enum

from bookscan.lookup.types import BookSummary


class ScanErrorReason(Enum):
    """Why a single-mode scan ended in an error.

    Both reasons are shown to the user as "not found"; they are kept apart
    so logs can tell a missing book from a failed request.
    """

    NOT_FOUND = "not_found"
    LOOKUP_FAILED = "lookup_failed"


@dataclass(frozen=True)
class Idle:
    """Ready for the next scan."""


@dataclass(frozen=True)
class Loading:
    """A lookup is in flight; further detections are dropped."""


@dataclass(frozen=True)
class Success:
    """A single-mode lookup found a book awaiting confirm or dismiss."""

    summary: BookSummary


@dataclass(frozen=True)
class ScanError:
    """A single-mode lookup found nothing, or failed."""

    reason: ScanErrorReason


ScanState = Idle | Loading | Success | ScanError

IDLE = Idle()
LOADING = Loading()
