"""Persistence of the tracker state and the saved-encounter library.

Both are JSON documents under fixed keys in LocalStorage:

- the tracker state as ``{"version": 1, "state": {...}}``; the builder's
  filtered creature list is left out because it is derived;
- the library as ``{"version": 1, "encounters": [...]}``.

Writes replace the whole document. A missing document reads as empty; a
document that cannot be parsed raises StorageError.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from encounter_tracker.core.config import Settings, get_settings
from encounter_tracker.core.constants import STORAGE_FORMAT_VERSION
from encounter_tracker.core.exceptions import StorageError
from encounter_tracker.core.logging import get_logger
from encounter_tracker.models.encounter import SavedEncounter, TrackerState, utc_now
from encounter_tracker.storage.local_storage import LocalStorage


logger = get_logger(__name__)

DEFAULT_STATE_KEY = "encounter_tracker_state"
DEFAULT_LIBRARY_KEY = "encounter_tracker_library"


# =============================================================================
# Documents
# =============================================================================


class StateDocument(BaseModel):
    """Stored form of the tracker state."""

    model_config = ConfigDict(extra="ignore")

    version: int = STORAGE_FORMAT_VERSION
    state: TrackerState = Field(default_factory=TrackerState)


class LibraryDocument(BaseModel):
    """Stored or exported form of the saved-encounter library."""

    model_config = ConfigDict(extra="ignore")

    version: int = STORAGE_FORMAT_VERSION
    exported_at: datetime | None = None
    encounters: list[SavedEncounter] = Field(default_factory=list)


class ImportResult(BaseModel):
    """Counts from an import."""

    model_config = ConfigDict(frozen=True)

    imported: int
    skipped: int
    total: int


def _decode(raw: str, model: type[BaseModel], key: str) -> Any:
    try:
        return model.model_validate(json.loads(raw))
    except json.JSONDecodeError as exc:
        raise StorageError(f"Stored data is not valid JSON: {exc}", key=key) from exc
    except PydanticValidationError as exc:
        raise StorageError(
            f"Stored data does not match the expected format ({exc.error_count()} errors)",
            key=key,
        ) from exc


# =============================================================================
# Tracker State
# =============================================================================


class TrackerRepository:
    """Saves and loads the whole tracker state under one key."""

    def __init__(self, storage: LocalStorage, key: str = DEFAULT_STATE_KEY) -> None:
        self.storage = storage
        self.key = key

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "TrackerRepository":
        """Repository on the configured database and state key."""
        storage_settings = (settings or get_settings()).storage
        return cls(LocalStorage(storage_settings.database_path), storage_settings.state_key)

    def save_state(self, state: TrackerState) -> None:
        """Write the tracker state, without the derived filtered creatures."""
        document = StateDocument(state=state)
        payload = document.model_dump_json(
            exclude={"state": {"builder": {"filtered_creatures"}}},
        )
        self.storage.set_item(self.key, payload)
        logger.info(
            "Tracker state saved",
            key=self.key,
            encounters=len(state.encounters),
            size=len(payload),
        )

    def load_state(self) -> TrackerState:
        """Read the tracker state; an empty state when nothing is stored.

        The filtered creature list is recomputed by the caller (see
        ``engine.builder.refilter``) and loads empty.

        Raises:
            StorageError: If the stored document cannot be read.
        """
        raw = self.storage.get_item(self.key)
        if raw is None:
            logger.info("No saved tracker state", key=self.key)
            return TrackerState()
        document: StateDocument = _decode(raw, StateDocument, self.key)
        if document.version > STORAGE_FORMAT_VERSION:
            raise StorageError(
                f"Stored state version {document.version} is newer than supported "
                f"version {STORAGE_FORMAT_VERSION}",
                key=self.key,
            )
        logger.info(
            "Tracker state loaded",
            key=self.key,
            encounters=len(document.state.encounters),
        )
        return document.state

    def clear_state(self) -> None:
        """Forget the stored state."""
        self.storage.remove_item(self.key)
        logger.info("Tracker state cleared", key=self.key)


# =============================================================================
# Saved Encounter Library
# =============================================================================


class EncounterLibrary:
    """Named encounter snapshots kept across sessions."""

    def __init__(self, storage: LocalStorage, key: str = DEFAULT_LIBRARY_KEY) -> None:
        self.storage = storage
        self.key = key

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "EncounterLibrary":
        """Library on the configured database and library key."""
        storage_settings = (settings or get_settings()).storage
        return cls(LocalStorage(storage_settings.database_path), storage_settings.library_key)

    def _read(self) -> list[SavedEncounter]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []
        document: LibraryDocument = _decode(raw, LibraryDocument, self.key)
        return list(document.encounters)

    def _write(self, encounters: list[SavedEncounter]) -> None:
        self.storage.set_item(self.key, LibraryDocument(encounters=encounters).model_dump_json())

    def list(self) -> list[SavedEncounter]:
        """All saved encounters, most recently saved first."""
        return sorted(self._read(), key=lambda s: s.saved_at, reverse=True)

    def get(self, saved_id: UUID) -> SavedEncounter | None:
        """Look up a saved encounter by id."""
        for saved in self._read():
            if saved.id == saved_id:
                return saved
        return None

    def save(self, saved: SavedEncounter) -> SavedEncounter:
        """Add a snapshot, replacing one with the same id."""
        encounters = [s for s in self._read() if s.id != saved.id]
        encounters.append(saved)
        self._write(encounters)
        logger.info("Encounter saved", saved_id=str(saved.id), name=saved.name)
        return saved

    def update(self, saved_id: UUID, **changes: Any) -> SavedEncounter | None:
        """Change fields of a saved encounter and refresh its save time.

        Returns:
            The updated snapshot, or None when the id is unknown.
        """
        encounters = self._read()
        for index, saved in enumerate(encounters):
            if saved.id == saved_id:
                data = {**saved.model_dump(), **changes, "id": saved_id, "saved_at": utc_now()}
                updated = SavedEncounter.model_validate(data)
                encounters[index] = updated
                self._write(encounters)
                logger.info(
                    "Saved encounter updated",
                    saved_id=str(saved_id),
                    fields=sorted(changes),
                )
                return updated
        logger.debug("Saved encounter not found", action="update", saved_id=str(saved_id))
        return None

    def delete(self, saved_id: UUID) -> bool:
        """Delete a saved encounter; returns whether it existed."""
        encounters = self._read()
        remaining = [s for s in encounters if s.id != saved_id]
        if len(remaining) == len(encounters):
            return False
        self._write(remaining)
        logger.info("Saved encounter deleted", saved_id=str(saved_id))
        return True

    def duplicate(self, saved_id: UUID) -> SavedEncounter | None:
        """Store a copy under a new id with a " (Copy)" name suffix."""
        original = self.get(saved_id)
        if original is None:
            return None
        copy = original.model_copy(
            update={
                "id": uuid4(),
                "name": f"{original.name} (Copy)"[:100],
                "saved_at": utc_now(),
            }
        )
        return self.save(copy)

    def export_json(self) -> str:
        """The whole library as an indented JSON document."""
        document = LibraryDocument(exported_at=utc_now(), encounters=self._read())
        return document.model_dump_json(indent=2)

    def import_json(self, payload: str) -> ImportResult:
        """Merge encounters from an exported document.

        Encounters whose name and save time match an existing entry are
        skipped. Imported entries get new ids.

        Raises:
            StorageError: If the payload is not a library document.
        """
        incoming: LibraryDocument = _decode(payload, LibraryDocument, "import")
        encounters = self._read()
        seen = {(s.name, s.saved_at) for s in encounters}
        imported = 0
        for saved in incoming.encounters:
            if (saved.name, saved.saved_at) in seen:
                continue
            encounters.append(saved.model_copy(update={"id": uuid4()}))
            seen.add((saved.name, saved.saved_at))
            imported += 1
        if imported:
            self._write(encounters)
        result = ImportResult(
            imported=imported,
            skipped=len(incoming.encounters) - imported,
            total=len(incoming.encounters),
        )
        logger.info("Encounters imported", **result.model_dump())
        return result


__all__ = [
    "DEFAULT_LIBRARY_KEY",
    "DEFAULT_STATE_KEY",
    "EncounterLibrary",
    "ImportResult",
    "LibraryDocument",
    "StateDocument",
    "TrackerRepository",
]
