"""Pydantic V2 schemas for the encounter tracker.

Submodules:
    enums: Difficulty tiers, HP status, ability types and priorities
    combatant: Conditions, the PC/monster combatant union, creature records
    encounter: Encounter, SavedEncounter, BuilderState, TrackerState
    abilities: Creature ability templates and the AbilityCatalog

Example:
    >>> from encounter_tracker.models import Creature, create_combatant
    >>> goblin = create_combatant(Creature(name="Goblin", hp=7, ac=15, cr="1/4"))
    >>> goblin.xp
    50
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from encounter_tracker.models.enums import (
    AbilityPriority,
    AbilityType,
    DifficultyLevel,
    DifficultyRating,
    HPStatus,
    StandardCondition,
)

# =============================================================================
# Combatants
# =============================================================================
from encounter_tracker.models.combatant import (
    ChallengeRating,
    Combatant,
    CombatantBase,
    Condition,
    Creature,
    MonsterCombatant,
    PlayerCombatant,
    challenge_rating_value,
    create_combatant,
    parse_combatant,
)

# =============================================================================
# Encounters and State
# =============================================================================
from encounter_tracker.models.encounter import (
    BuilderState,
    Encounter,
    SavedEncounter,
    TrackerState,
)

# =============================================================================
# Creature Abilities
# =============================================================================
from encounter_tracker.models.abilities import (
    AbilityCatalog,
    CreatureAbility,
    CreatureTemplate,
)


__all__ = [
    # Enums
    "AbilityPriority",
    "AbilityType",
    "DifficultyLevel",
    "DifficultyRating",
    "HPStatus",
    "StandardCondition",
    # Combatants
    "ChallengeRating",
    "Combatant",
    "CombatantBase",
    "Condition",
    "Creature",
    "MonsterCombatant",
    "PlayerCombatant",
    "challenge_rating_value",
    "create_combatant",
    "parse_combatant",
    # Encounters
    "BuilderState",
    "Encounter",
    "SavedEncounter",
    "TrackerState",
    # Abilities
    "AbilityCatalog",
    "CreatureAbility",
    "CreatureTemplate",
]
