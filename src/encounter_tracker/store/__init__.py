"""State container for the encounter tracker."""

from __future__ import annotations

from encounter_tracker.store.encounter_store import EncounterStore, EncounterSummary


__all__ = [
    "EncounterStore",
    "EncounterSummary",
]
