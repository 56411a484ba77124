# ABOUTME: Barcode scanner input adapter for keyboard-wedge style scanners.
# ABOUTME: Filters raw decoded strings down to Bookland ISBN-13 codes and streams them.

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import AsyncIterator
from typing import TextIO

logger = logging.getLogger(__name__)

# Bookland EAN prefixes: every ISBN-13 starts with one of these.
BOOKLAND_PREFIXES = ("978", "979")

_ISBN_LABEL_RE = re.compile(r"^\s*ISBN(?:-13)?:?\s*", re.IGNORECASE)
_SEPARATORS_RE = re.compile(r"[\s-]")


def extract_isbn(raw: str) -> str | None:
    """Normalize a decoded barcode to an ISBN-13, or None.

    Accepts inputs like '978-4-06-293722-6' or 'ISBN: 9784062937226'.
    Anything that isn't 13 digits with a Bookland prefix is rejected, which
    also filters out the price add-on barcodes printed next to the ISBN.
    """
    if not raw:
        return None
    code = _SEPARATORS_RE.sub("", _ISBN_LABEL_RE.sub("", raw))
    if len(code) == 13 and code.isdigit() and code.startswith(BOOKLAND_PREFIXES):
        return code
    return None


async def read_detections(stream: TextIO) -> AsyncIterator[str]:
    """Yield ISBNs from a text stream, one scanned line at a time.

    Blank lines and non-ISBN codes are skipped. Reading happens in a worker
    thread so a slow scanner does not block the event loop.
    """
    while True:
        line = await asyncio.to_thread(stream.readline)
        if not line:
            return
        raw = line.strip()
        if not raw:
            continue
        isbn = extract_isbn(raw)
        if isbn is None:
            logger.info("Ignored non-ISBN code: %r", raw)
            continue
        yield isbn
