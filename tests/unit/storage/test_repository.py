"""Tests for the tracker state repository and encounter library."""

from __future__ import annotations

import json
from datetime import timedelta
from pathlib import Path
from uuid import uuid4

import pytest

from encounter_tracker.core.config import Settings, StorageSettings
from encounter_tracker.core.exceptions import StorageError
from encounter_tracker.engine.builder import refilter
from encounter_tracker.models import (
    BuilderState,
    Creature,
    Encounter,
    SavedEncounter,
    TrackerState,
)
from encounter_tracker.storage import EncounterLibrary, LocalStorage, TrackerRepository


@pytest.fixture
def repository(local_storage: LocalStorage) -> TrackerRepository:
    """Repository on temporary storage."""
    return TrackerRepository(local_storage)


@pytest.fixture
def library(local_storage: LocalStorage) -> EncounterLibrary:
    """Encounter library on temporary storage."""
    return EncounterLibrary(local_storage)


@pytest.fixture
def state(sample_encounter: Encounter, sample_creatures: list[Creature]) -> TrackerState:
    """A state with one active encounter and a filtered builder."""
    builder = refilter(BuilderState(creatures=sample_creatures, search_term="o"))
    return TrackerState(
        encounters=[sample_encounter],
        active_encounter_id=sample_encounter.id,
        selected_combatant_id=sample_encounter.combatants[0].id,
        builder=builder,
    )


class TestTrackerRepository:
    """Tests for saving and loading the tracker state."""

    def test_load_without_saved_state(self, repository: TrackerRepository) -> None:
        """Test an empty state is returned when nothing is stored."""
        assert repository.load_state() == TrackerState()

    def test_round_trip(self, repository: TrackerRepository, state: TrackerState) -> None:
        """Test the state survives a save and load."""
        repository.save_state(state)

        loaded = repository.load_state()

        assert loaded.encounters == state.encounters
        assert loaded.active_encounter_id == state.active_encounter_id
        assert loaded.selected_combatant_id == state.selected_combatant_id
        assert loaded.builder.creatures == state.builder.creatures
        assert loaded.builder.search_term == "o"

    def test_filtered_creatures_not_saved(
        self,
        repository: TrackerRepository,
        local_storage: LocalStorage,
        state: TrackerState,
    ) -> None:
        """Test the derived filtered list is left out of storage."""
        assert state.builder.filtered_creatures

        repository.save_state(state)

        raw = json.loads(local_storage.get_item(repository.key))
        assert raw["version"] == 1
        assert "filtered_creatures" not in raw["state"]["builder"]
        assert repository.load_state().builder.filtered_creatures == []

    def test_corrupt_json(self, repository: TrackerRepository, local_storage: LocalStorage) -> None:
        """Test unreadable data raises StorageError."""
        local_storage.set_item(repository.key, "{broken")

        with pytest.raises(StorageError, match="not valid JSON"):
            repository.load_state()

    def test_invalid_document(
        self, repository: TrackerRepository, local_storage: LocalStorage
    ) -> None:
        """Test data violating the state invariants raises StorageError."""
        document = {"version": 1, "state": {"active_encounter_id": str(uuid4())}}
        local_storage.set_item(repository.key, json.dumps(document))

        with pytest.raises(StorageError, match="expected format"):
            repository.load_state()

    def test_newer_version(self, repository: TrackerRepository, local_storage: LocalStorage) -> None:
        """Test a document from a newer format is refused."""
        local_storage.set_item(repository.key, json.dumps({"version": 2, "state": {}}))

        with pytest.raises(StorageError, match="newer"):
            repository.load_state()

    def test_clear_state(self, repository: TrackerRepository, state: TrackerState) -> None:
        """Test clearing forgets the saved state."""
        repository.save_state(state)
        repository.clear_state()

        assert repository.load_state() == TrackerState()

    def test_from_settings(self, tmp_path: Path) -> None:
        """Test the repository uses the configured path and key."""
        settings = Settings(
            storage=StorageSettings(database_path=tmp_path / "cfg.db", state_key="my_state")
        )

        repository = TrackerRepository.from_settings(settings)

        assert repository.key == "my_state"
        assert repository.storage.db_path == tmp_path / "cfg.db"


class TestEncounterLibrary:
    """Tests for saved encounter snapshots."""

    def test_empty(self, library: EncounterLibrary) -> None:
        """Test an empty library."""
        assert library.list() == []
        assert library.get(uuid4()) is None

    def test_save_and_get(self, library: EncounterLibrary, sample_encounter: Encounter) -> None:
        """Test saved snapshots can be read back."""
        saved = library.save(SavedEncounter.from_encounter(sample_encounter))

        assert library.get(saved.id) == saved

    def test_save_replaces_same_id(
        self, library: EncounterLibrary, sample_encounter: Encounter
    ) -> None:
        """Test saving an existing id replaces it."""
        saved = library.save(SavedEncounter.from_encounter(sample_encounter))
        library.save(saved.model_copy(update={"name": "Renamed"}))

        assert [s.name for s in library.list()] == ["Renamed"]

    def test_list_newest_first(
        self, library: EncounterLibrary, sample_encounter: Encounter
    ) -> None:
        """Test snapshots are listed by save time, newest first."""
        older = SavedEncounter.from_encounter(sample_encounter, name="Older")
        newer = older.model_copy(
            update={"id": uuid4(), "name": "Newer", "saved_at": older.saved_at + timedelta(1)}
        )
        library.save(newer)
        library.save(older)

        assert [s.name for s in library.list()] == ["Newer", "Older"]

    def test_update(self, library: EncounterLibrary, sample_encounter: Encounter) -> None:
        """Test updating fields refreshes the save time and keeps the id."""
        saved = library.save(SavedEncounter.from_encounter(sample_encounter))

        updated = library.update(saved.id, notes="Reinforcements on round 3")

        assert updated.id == saved.id
        assert updated.notes == "Reinforcements on round 3"
        assert updated.saved_at >= saved.saved_at
        assert library.get(saved.id).notes == "Reinforcements on round 3"
        assert library.update(uuid4(), notes="x") is None

    def test_delete(self, library: EncounterLibrary, sample_encounter: Encounter) -> None:
        """Test deletion reports whether the snapshot existed."""
        saved = library.save(SavedEncounter.from_encounter(sample_encounter))

        assert library.delete(saved.id) is True
        assert library.delete(saved.id) is False
        assert library.list() == []

    def test_duplicate(self, library: EncounterLibrary, sample_encounter: Encounter) -> None:
        """Test duplicating stores a copy under a new id."""
        saved = library.save(SavedEncounter.from_encounter(sample_encounter))

        copy = library.duplicate(saved.id)

        assert copy.id != saved.id
        assert copy.name == "Bridge Ambush (Copy)"
        assert copy.combatants == saved.combatants
        assert len(library.list()) == 2
        assert library.duplicate(uuid4()) is None

    def test_export_document(self, library: EncounterLibrary, sample_encounter: Encounter) -> None:
        """Test the export is an indented document with a timestamp."""
        library.save(SavedEncounter.from_encounter(sample_encounter))

        exported = library.export_json()

        document = json.loads(exported)
        assert document["version"] == 1
        assert document["exported_at"] is not None
        assert len(document["encounters"]) == 1
        assert "\n  " in exported

    def test_import_skips_duplicates(
        self,
        library: EncounterLibrary,
        tmp_path: Path,
        sample_encounter: Encounter,
    ) -> None:
        """Test importing skips snapshots with the same name and save time."""
        library.save(SavedEncounter.from_encounter(sample_encounter))
        exported = library.export_json()
        other = EncounterLibrary(LocalStorage(tmp_path / "other.db"))

        first = other.import_json(exported)
        second = other.import_json(exported)

        assert (first.imported, first.skipped, first.total) == (1, 0, 1)
        assert (second.imported, second.skipped, second.total) == (0, 1, 1)
        assert len(other.list()) == 1
        assert other.list()[0].id != library.list()[0].id

    def test_import_into_same_library(
        self, library: EncounterLibrary, sample_encounter: Encounter
    ) -> None:
        """Test re-importing an export into its own library adds nothing."""
        library.save(SavedEncounter.from_encounter(sample_encounter))

        result = library.import_json(library.export_json())

        assert result.imported == 0
        assert result.skipped == 1

    def test_import_invalid(self, library: EncounterLibrary) -> None:
        """Test a payload that is not a library document."""
        with pytest.raises(StorageError):
            library.import_json("[1, 2, 3]")
        with pytest.raises(StorageError):
            library.import_json("nope")
