# ABOUTME: Record store facade over the catalog with live, subscribable queries.
# ABOUTME: Readers observe complete snapshots; every committed mutation refreshes them.

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Iterable
from typing import Generic, TypeVar

from bookscan.db.catalog import BookCatalog
from bookscan.db.mapping import BookRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CLOSED = object()


class LiveQuery(Generic[T]):
    """A query result that re-evaluates after every store mutation.

    Subscribers are only notified when the snapshot actually changes, and
    always receive a complete snapshot, never a partially applied batch.
    """

    def __init__(
        self,
        query: Callable[[], T],
        on_close: Callable[["LiveQuery[T]"], None] | None = None,
    ) -> None:
        self._query = query
        self._on_close = on_close
        self._value: T = query()
        self._callbacks: list[Callable[[T], None]] = []
        self._queues: list[asyncio.Queue[object]] = []
        self._closed = False

    @property
    def value(self) -> T:
        """The most recent snapshot."""
        return self._value

    @property
    def closed(self) -> bool:
        return self._closed

    def refresh(self) -> None:
        """Re-run the query and notify subscribers if the result changed."""
        if self._closed:
            return
        value = self._query()
        if value == self._value:
            return
        self._value = value
        for callback in list(self._callbacks):
            try:
                callback(value)
            except Exception:
                logger.exception("Live query subscriber %r failed", callback)
        for queue in self._queues:
            queue.put_nowait(value)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a callback, invoke it with the current snapshot, and
        return a function that unregisters it."""
        self._callbacks.append(callback)
        callback(self._value)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    async def snapshots(self) -> AsyncIterator[T]:
        """Yield the current snapshot, then each changed one until close()."""
        queue: asyncio.Queue[object] = asyncio.Queue()
        self._queues.append(queue)
        try:
            yield self._value
            while not self._closed:
                item = await queue.get()
                if item is _CLOSED:
                    return
                yield item  # type: ignore[misc]
        finally:
            self._queues.remove(queue)

    def close(self) -> None:
        """Detach from the store and end any running snapshots() iterators."""
        if self._closed:
            return
        self._closed = True
        self._callbacks.clear()
        for queue in self._queues:
            queue.put_nowait(_CLOSED)
        if self._on_close is not None:
            self._on_close(self)


class RecordStore:
    """Facade over BookCatalog exposing live queries and async CRUD.

    Holds no business rules. The store owns record identity: callers pass
    records with id=None and the catalog assigns one.
    """

    def __init__(self, catalog: BookCatalog) -> None:
        self._catalog = catalog
        self._queries: list[LiveQuery] = []

    def observe_all(self) -> LiveQuery[list[BookRecord]]:
        """Live list of every record, newest first."""
        return self._open(self._catalog.list_all)

    def get_by_id(self, book_id: int) -> LiveQuery[BookRecord | None]:
        """Live view of one record; becomes None once it is deleted."""
        return self._open(lambda: self._catalog.get_by_id(book_id))

    async def insert(self, record: BookRecord) -> int:
        book_id = self._catalog.insert(record)
        logger.info("Saved %s as record %d", record.identifier, book_id)
        self._notify()
        return book_id

    async def insert_many(self, records: Iterable[BookRecord]) -> list[int]:
        ids = self._catalog.insert_many(records)
        logger.info("Saved %d record(s)", len(ids))
        self._notify()
        return ids

    async def delete(self, record: BookRecord) -> None:
        self._catalog.delete(record)
        logger.info("Deleted record %s", record.id)
        self._notify()

    async def delete_many(self, records: Iterable[BookRecord]) -> int:
        removed = self._catalog.delete_many(records)
        logger.info("Deleted %d record(s)", removed)
        self._notify()
        return removed

    def _open(self, query: Callable[[], T]) -> LiveQuery[T]:
        live: LiveQuery[T] = LiveQuery(query, on_close=self._queries.remove)
        self._queries.append(live)
        return live

    def _notify(self) -> None:
        # Runs after the write has committed, so nothing here may raise.
        for live in list(self._queries):
            try:
                live.refresh()
            except Exception:
                logger.exception("Failed to refresh live query after write")
