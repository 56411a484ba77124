# ABOUTME: Hand-written fakes for the lookup gateway and record store.
# ABOUTME: Let coordinator and selection tests control latency, failures, and record store calls.

import asyncio
from collections.abc import Iterable

from bookscan.db.catalog import StoreError
from bookscan.db.mapping import BookRecord
from bookscan.lookup.types import BookSummary


class FakeGateway:
    """Lookup gateway returning canned results, optionally after a delay.

    A result may be a BookSummary, None (not found), or an exception to
    raise. When `gate` is set, every resolve() waits on it before answering.
    """

    def __init__(
        self,
        results: dict[str, BookSummary | Exception | None] | None = None,
        delay: float = 0.0,
    ) -> None:
        self._results = results or {}
        self.delay = delay
        self.gate: asyncio.Event | None = None
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return "fake"

    async def resolve(self, identifier: str) -> BookSummary | None:
        self.calls.append(identifier)
        if self.gate is not None:
            await self.gate.wait()
        elif self.delay:
            await asyncio.sleep(self.delay)
        result = self._results.get(identifier)
        if isinstance(result, Exception):
            raise result
        return result


class FakeStore:
    """Record store stand-in that logs every write.

    Set `fail` to make writes raise StoreError, or `hold` to make them wait
    on an event before completing.
    """

    def __init__(self) -> None:
        self.inserted: list[BookRecord] = []
        self.bulk_inserted: list[list[BookRecord]] = []
        self.deleted: list[BookRecord] = []
        self.bulk_deleted: list[list[BookRecord]] = []
        self.fail = False
        self.hold: asyncio.Event | None = None
        self._next_id = 1

    async def _write(self) -> None:
        if self.hold is not None:
            await self.hold.wait()
        if self.fail:
            raise StoreError("disk full")

    def _assign(self) -> int:
        book_id = self._next_id
        self._next_id += 1
        return book_id

    async def insert(self, record: BookRecord) -> int:
        await self._write()
        self.inserted.append(record)
        return self._assign()

    async def insert_many(self, records: Iterable[BookRecord]) -> list[int]:
        await self._write()
        batch = list(records)
        self.bulk_inserted.append(batch)
        return [self._assign() for _ in batch]

    async def delete(self, record: BookRecord) -> None:
        await self._write()
        self.deleted.append(record)

    async def delete_many(self, records: Iterable[BookRecord]) -> int:
        await self._write()
        batch = list(records)
        self.bulk_deleted.append(batch)
        return len(batch)

    @property
    def call_count(self) -> int:
        return (
            len(self.inserted)
            + len(self.bulk_inserted)
            + len(self.deleted)
            + len(self.bulk_deleted)
        )
