"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the encounter tracker test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from encounter_tracker.core.config import Settings, StorageSettings, clear_settings_cache
from encounter_tracker.engine.dice import DiceRoller
from encounter_tracker.models import (
    AbilityCatalog,
    Creature,
    Encounter,
    MonsterCombatant,
    PlayerCombatant,
)
from encounter_tracker.storage import LocalStorage
from encounter_tracker.store import EncounterStore


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Provide settings pointing storage at a temporary database."""
    return Settings(storage=StorageSettings(database_path=tmp_path / "settings.db"))


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def dice_roller() -> DiceRoller:
    """Provide a seeded dice roller for reproducible tests."""
    return DiceRoller(seed=42)


@pytest.fixture
def catalog() -> AbilityCatalog:
    """Provide the bundled creature ability catalog."""
    return AbilityCatalog.default()


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_creatures() -> list[Creature]:
    """Provide a small bestiary for builder and difficulty tests."""
    return [
        Creature(name="Goblin", hp=7, ac=15, cr="1/4", creature_type="humanoid",
                 environment="forest", dexterity=14),
        Creature(name="Orc", hp=15, ac=13, cr="1/2", creature_type="humanoid",
                 environment="hill", dexterity=12),
        Creature(name="Troll", hp=84, ac=15, cr="5", creature_type="giant",
                 environment="swamp", dexterity=13),
        Creature(name="Lich", hp=135, ac=17, cr="21", creature_type="undead",
                 environment="underdark", dexterity=16),
        Creature(name="Green Hag", hp=82, ac=17, cr="3", creature_type="fey",
                 environment="forest"),
    ]


@pytest.fixture
def fighter() -> PlayerCombatant:
    """Provide a level 3 player character."""
    return PlayerCombatant(name="Fighter", hp=28, max_hp=28, ac=18, level=3)


@pytest.fixture
def goblin() -> MonsterCombatant:
    """Provide a goblin combatant."""
    return MonsterCombatant(
        name="Goblin", hp=7, max_hp=7, ac=15, cr="1/4", cr_value=0.25, xp=50, dexterity=14
    )


@pytest.fixture
def troll() -> MonsterCombatant:
    """Provide a troll combatant."""
    return MonsterCombatant(
        name="Troll", hp=84, max_hp=84, ac=15, cr="5", cr_value=5.0,
        creature_type="giant", xp=1800, dexterity=13,
    )


@pytest.fixture
def sample_encounter(
    fighter: PlayerCombatant,
    goblin: MonsterCombatant,
    troll: MonsterCombatant,
) -> Encounter:
    """Provide an encounter with three combatants in initiative order."""
    return Encounter(
        name="Bridge Ambush",
        combatants=[
            troll.evolve(initiative=18),
            fighter.evolve(initiative=14),
            goblin.evolve(initiative=9),
        ],
        party_size=4,
        party_level=3,
    )


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def local_storage(tmp_path: Path) -> LocalStorage:
    """Provide local storage on a temporary database."""
    return LocalStorage(tmp_path / "test.db")


@pytest.fixture
def store(settings: Settings, catalog: AbilityCatalog, dice_roller: DiceRoller) -> EncounterStore:
    """Provide an empty store with a seeded roller."""
    return EncounterStore(settings=settings, catalog=catalog, roller=dice_roller)
