"""Encounter Tracker - D&D 5E encounter builder and initiative tracker core.

Builds encounters against a party's XP budget, rates their difficulty and
runs them turn by turn: initiative, rounds, hit points, conditions and
advisory ability reminders. State lives in one explicit store and persists
to local SQLite storage.

Example:
    >>> from encounter_tracker import Creature, EncounterStore
    >>>
    >>> store = EncounterStore()
    >>> encounter = store.create_encounter("Crypt", party_size=4, party_level=5)
    >>> store.add_combatant(Creature(name="Lich", hp=135, ac=17, cr="21"))
    >>> store.roll_all_initiative()
    >>> store.sort_by_initiative()
    >>> store.start_combat()
    >>> store.calculate_difficulty().difficulty.label
    'Deadly'

Modules:
    core: Configuration, logging, rules tables and exceptions.
    models: Pydantic V2 schemas for combatants, encounters and abilities.
    engine: Dice, initiative, turns, difficulty, health and reminders.
    store: EncounterStore, the single entry point for mutations.
    storage: SQLite local storage, state repository, encounter library.
"""

from __future__ import annotations

# Core
from encounter_tracker.core.config import Settings, get_settings
from encounter_tracker.core.exceptions import EncounterTrackerError
from encounter_tracker.core.logging import configure_logging, get_logger

# Models
from encounter_tracker.models import (
    AbilityCatalog,
    Condition,
    Creature,
    DifficultyLevel,
    DifficultyRating,
    Encounter,
    HPStatus,
    MonsterCombatant,
    PlayerCombatant,
    SavedEncounter,
    TrackerState,
    create_combatant,
)

# Store and storage
from encounter_tracker.storage import EncounterLibrary, LocalStorage, TrackerRepository
from encounter_tracker.store import EncounterStore, EncounterSummary


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "EncounterTrackerError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "AbilityCatalog",
    "Condition",
    "Creature",
    "DifficultyLevel",
    "DifficultyRating",
    "Encounter",
    "HPStatus",
    "MonsterCombatant",
    "PlayerCombatant",
    "SavedEncounter",
    "TrackerState",
    "create_combatant",
    # Store
    "EncounterStore",
    "EncounterSummary",
    # Storage
    "EncounterLibrary",
    "LocalStorage",
    "TrackerRepository",
]
