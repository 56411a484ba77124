# ABOUTME: Scan coordinator state machine turning barcode detections into saved records.
# ABOUTME: Gates lookups to one in flight, buffers batch scans, and commits via the record store.

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, Callable

from bookscan.core.state import (
    IDLE,
    LOADING,
    Idle,
    ScanError,
    ScanErrorReason,
    ScanState,
    Success,
)
from bookscan.db.mapping import BookRecord
from bookscan.db.store import RecordStore
from bookscan.lookup.gateway import BookLookupError, LookupGateway
from bookscan.lookup.types import BookSummary

logger = logging.getLogger(__name__)

StateListener = Callable[[ScanState], None]


class ScanCoordinator:
    """Drives scan detections through lookup into single or batch results.

    Rules:
      - A detection is dropped unless the state is Idle. At most one lookup
        is in flight per coordinator, and bursts from the scanner collapse
        into that one lookup.
      - In batch mode a detection whose identifier is already buffered is
        dropped without a lookup.
      - Single mode stops on Success or ScanError until the caller saves or
        resets. Batch mode appends hits to the buffer, skips misses, and
        returns to Idle either way.

    Every lookup is tagged with a generation number. reset_state(),
    set_batch_mode(), and a completed save_current() start a new generation,
    so a lookup that resolves after one of those is discarded.
    """

    def __init__(
        self,
        gateway: LookupGateway,
        store: RecordStore,
        *,
        lookup_timeout: float | None = None,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._lookup_timeout = lookup_timeout
        self._state: ScanState = IDLE
        self._batch_mode = False
        self._buffer: list[BookSummary] = []
        self._buffer_epoch = 0
        self._generation = 0
        self._commit_lock = asyncio.Lock()
        self._listeners: list[StateListener] = []
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def batch_mode(self) -> bool:
        return self._batch_mode

    @property
    def buffer(self) -> tuple[BookSummary, ...]:
        """Summaries collected in the current batch session, in scan order."""
        return tuple(self._buffer)

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Call listener on every state transition. Returns a remover."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    # --- Scan intake ---

    def submit(self, identifier: str) -> asyncio.Task[None] | None:
        """Accept a detection if the coordinator is free and start its lookup.

        The gate check and the move to Loading happen before this returns,
        so repeated calls in the same tick see Loading and are dropped.
        Must be called from the event loop thread; scanner threads use
        submit_threadsafe().

        Returns:
            The lookup task, or None if the detection was dropped.

        Raises:
            RuntimeError: If no event loop is running in this thread. The
                state is left untouched.
        """
        loop = asyncio.get_running_loop()
        if not isinstance(self._state, Idle):
            logger.debug("Dropped %s: busy (%s)", identifier, type(self._state).__name__)
            return None
        if self._batch_mode and self._is_buffered(identifier):
            logger.debug("Dropped %s: already in batch", identifier)
            return None

        self._generation += 1
        self._set_state(LOADING)
        task = loop.create_task(self._resolve(identifier, self._generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def submit_threadsafe(self, identifier: str, loop: asyncio.AbstractEventLoop) -> None:
        """Hand a detection from another thread to the coordinator on loop.

        The gate check runs later on the loop thread, so a detection that
        arrives while a lookup is in flight is still dropped there.
        """
        loop.call_soon_threadsafe(self.submit, identifier)

    async def on_scan_detected(self, identifier: str) -> bool:
        """Submit a detection and wait for its lookup, if one was started.

        Returns:
            False if the detection was dropped by the gate or batch dedup.
        """
        task = self.submit(identifier)
        if task is None:
            return False
        await task
        return True

    async def consume(self, detections: AsyncIterable[str]) -> None:
        """Feed a scanner stream into the coordinator until it ends.

        Detections are submitted without waiting for their lookups, so
        anything arriving while a lookup is running is dropped. Waits for the
        last accepted lookup before returning.
        """
        async for identifier in detections:
            self.submit(identifier)
        await self.drain()

    async def drain(self) -> None:
        """Wait for every lookup task that is still running."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel outstanding lookups and return to Idle."""
        for task in list(self._tasks):
            task.cancel()
        await self.drain()
        self.reset_state()

    # --- Mode and state control ---

    def set_batch_mode(self, is_batch: bool) -> None:
        """Switch modes, discarding the buffer and any in-flight result."""
        logger.debug("Batch mode set to %s", is_batch)
        self._batch_mode = is_batch
        self._buffer.clear()
        self._buffer_epoch += 1
        self._reset()

    def reset_state(self) -> None:
        """Force the state back to Idle, e.g. after a dismissed result."""
        self._reset()

    # --- Commits ---

    async def save_current(self) -> int | None:
        """Persist the Success summary and return to Idle.

        No-op outside of Success. If the store fails, the StoreError
        propagates and the Success state is kept for a retry.

        Returns:
            The new record id, or None if nothing was saved.
        """
        async with self._commit_lock:
            state = self._state
            if not isinstance(state, Success):
                logger.debug("save_current ignored in %s", type(state).__name__)
                return None
            generation = self._generation
            book_id = await self._store.insert(BookRecord.from_summary(state.summary))
            if generation == self._generation:
                self._reset()
            return book_id

    async def save_buffered(self) -> list[int]:
        """Persist every buffered summary in one bulk upsert and clear them.

        No-op when the buffer is empty. Summaries appended while the write
        is running stay in the buffer; a mode switch during the write leaves
        the new session's buffer untouched.

        Returns:
            The new record ids, in buffer order.
        """
        async with self._commit_lock:
            if not self._buffer:
                logger.debug("save_buffered ignored: buffer empty")
                return []
            pending = list(self._buffer)
            epoch = self._buffer_epoch
            ids = await self._store.insert_many(
                [BookRecord.from_summary(summary) for summary in pending]
            )
            if epoch == self._buffer_epoch:
                del self._buffer[: len(pending)]
            return ids

    # --- Internals ---

    async def _resolve(self, identifier: str, generation: int) -> None:
        summary: BookSummary | None = None
        reason = ScanErrorReason.NOT_FOUND
        try:
            summary = await self._lookup(identifier)
        except asyncio.CancelledError:
            if generation == self._generation:
                self._set_state(IDLE)
            raise
        except BookLookupError as exc:
            logger.warning("Lookup failed for %s: %s", identifier, exc)
            reason = ScanErrorReason.LOOKUP_FAILED
        except asyncio.TimeoutError:
            logger.warning("Lookup for %s timed out after %ss", identifier, self._lookup_timeout)
            reason = ScanErrorReason.LOOKUP_FAILED
        except Exception:
            logger.exception("Unexpected error from %s gateway", self._gateway.name)
            reason = ScanErrorReason.LOOKUP_FAILED

        if generation != self._generation:
            logger.info("Discarded stale lookup result for %s", identifier)
            return

        if summary is None and reason is ScanErrorReason.NOT_FOUND:
            logger.info("No book found for %s", identifier)

        if self._batch_mode:
            if summary is not None and not self._is_buffered(summary.identifier):
                self._buffer.append(summary)
            self._set_state(IDLE)
        elif summary is not None:
            self._set_state(Success(summary))
        else:
            self._set_state(ScanError(reason))

    async def _lookup(self, identifier: str) -> BookSummary | None:
        if self._lookup_timeout is None:
            return await self._gateway.resolve(identifier)
        return await asyncio.wait_for(self._gateway.resolve(identifier), self._lookup_timeout)

    def _is_buffered(self, identifier: str) -> bool:
        return any(summary.identifier == identifier for summary in self._buffer)

    def _reset(self) -> None:
        self._generation += 1
        self._set_state(IDLE)

    def _set_state(self, state: ScanState) -> None:
        self._state = state
        logger.debug("Scan state -> %s", state)
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Scan state listener %r failed", listener)
