# ABOUTME: Core scan-acquisition logic for bookscan.
# ABOUTME: Exports the scan coordinator, its states, and the selection manager.

from bookscan.core.coordinator import ScanCoordinator
from bookscan.core.selection import SelectionManager
from bookscan.core.state import (
    IDLE,
    LOADING,
    Idle,
    Loading,
    ScanError,
    ScanErrorReason,
    ScanState,
    Success,
)

__all__ = [
    "IDLE",
    "LOADING",
    "Idle",
    "Loading",
    "ScanCoordinator",
    "ScanError",
    "ScanErrorReason",
    "ScanState",
    "SelectionManager",
    "Success",
]
