"""Local persistence for the encounter tracker.

Exports:
    LocalStorage: SQLite key/value store.
    TrackerRepository: Saves and loads the tracker state.
    EncounterLibrary: Saved encounter snapshots with import and export.
"""

from __future__ import annotations

from encounter_tracker.storage.local_storage import LocalStorage, StoredItem
from encounter_tracker.storage.repository import (
    EncounterLibrary,
    ImportResult,
    LibraryDocument,
    StateDocument,
    TrackerRepository,
)


__all__ = [
    "EncounterLibrary",
    "ImportResult",
    "LibraryDocument",
    "LocalStorage",
    "StateDocument",
    "StoredItem",
    "TrackerRepository",
]
