"""Enumerations shared by the encounter tracker models and engines."""

from __future__ import annotations

from enum import StrEnum


class DifficultyLevel(StrEnum):
    """Target difficulty tiers an encounter can be built for."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    DEADLY = "deadly"


class DifficultyRating(StrEnum):
    """Classification of an encounter's monster XP against party thresholds."""

    TRIVIAL = "trivial"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    DEADLY = "deadly"

    @property
    def label(self) -> str:
        """Display form, e.g. ``"Trivial"``."""
        return self.value.title()


class HPStatus(StrEnum):
    """Hit point status buckets for display."""

    HEALTHY = "healthy"
    WOUNDED = "wounded"
    BLOODIED = "bloodied"
    CRITICAL = "critical"
    UNCONSCIOUS = "unconscious"


class AbilityType(StrEnum):
    """When a creature ability should be surfaced as a reminder."""

    START_OF_TURN = "start_of_turn"
    END_OF_TURN = "end_of_turn"
    LEGENDARY_ACTIONS = "legendary_actions"
    LAIR_ACTIONS = "lair_actions"
    COMBAT_ABILITY = "combat_ability"
    RESISTANCE = "resistance"
    CONCENTRATION = "concentration"


class AbilityPriority(StrEnum):
    """Reminder priority, most urgent first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class StandardCondition(StrEnum):
    """The fifteen SRD conditions.

    Combatant conditions are free text; this enum only names the standard
    ones for pickers and the condition interaction reminders.
    """

    BLINDED = "Blinded"
    CHARMED = "Charmed"
    DEAFENED = "Deafened"
    EXHAUSTION = "Exhaustion"
    FRIGHTENED = "Frightened"
    GRAPPLED = "Grappled"
    INCAPACITATED = "Incapacitated"
    INVISIBLE = "Invisible"
    PARALYZED = "Paralyzed"
    PETRIFIED = "Petrified"
    POISONED = "Poisoned"
    PRONE = "Prone"
    RESTRAINED = "Restrained"
    STUNNED = "Stunned"
    UNCONSCIOUS = "Unconscious"


__all__ = [
    "DifficultyLevel",
    "DifficultyRating",
    "HPStatus",
    "AbilityType",
    "AbilityPriority",
    "StandardCondition",
]
