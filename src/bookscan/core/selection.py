# ABOUTME: Selection tracking and bulk deletion for saved book records.
# ABOUTME: Selected ids are checked against a live snapshot before anything is deleted.

import logging
from collections.abc import Sequence

from bookscan.db.mapping import BookRecord
from bookscan.db.store import RecordStore

logger = logging.getLogger(__name__)


class SelectionManager:
    """Tracks a set of selected record ids and deletes them in bulk.

    Selection mode is not stored: it is active whenever the set is
    non-empty. Ids of records that have since disappeared are harmless;
    delete_selected() only acts on records present in the snapshot it is
    given.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store
        self._selected: set[int] = set()

    @property
    def selected_ids(self) -> frozenset[int]:
        return frozenset(self._selected)

    @property
    def active(self) -> bool:
        """Whether selection mode is on."""
        return bool(self._selected)

    def is_selected(self, book_id: int) -> bool:
        return book_id in self._selected

    def toggle(self, book_id: int) -> None:
        """Select the id if unselected, otherwise unselect it."""
        if book_id in self._selected:
            self._selected.remove(book_id)
        else:
            self._selected.add(book_id)

    def clear(self) -> None:
        """Leave selection mode."""
        self._selected.clear()

    async def delete_selected(self, current_records: Sequence[BookRecord]) -> list[BookRecord]:
        """Delete the selected records found in current_records.

        Issues a single bulk delete and then clears the selection. Does
        nothing, and makes no store call, when the selection is empty.

        Returns:
            The records that were passed to the store for deletion.
        """
        if not self._selected:
            return []

        doomed = [record for record in current_records if record.id in self._selected]
        logger.debug(
            "Deleting %d of %d selected record(s)", len(doomed), len(self._selected)
        )
        await self._store.delete_many(doomed)
        self.clear()
        return doomed

    async def delete_one(self, record: BookRecord) -> None:
        """Delete a single record and drop it from the selection."""
        await self._store.delete(record)
        self._selected.discard(record.id)  # type: ignore[arg-type]
