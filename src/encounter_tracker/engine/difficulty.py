"""Encounter difficulty and XP budget math (DMG chapter 3).

Classification compares the raw sum of monster XP against the party's
thresholds. The group-size multiplier is reported alongside as adjusted XP
but never changes the classification.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from encounter_tracker.core.constants import (
    CR_TO_XP,
    DAILY_MEDIUM_ENCOUNTERS,
    ENCOUNTER_MULTIPLIERS,
    MAX_PARTY_LEVEL,
    MAX_SUGGESTIONS,
    MIN_PARTY_LEVEL,
    SUGGESTION_BUDGET_FLOOR,
    XP_THRESHOLDS_BY_LEVEL,
)
from encounter_tracker.core.logging import get_logger
from encounter_tracker.models.combatant import Creature
from encounter_tracker.models.encounter import Encounter, monster_xp
from encounter_tracker.models.enums import DifficultyLevel, DifficultyRating


logger = get_logger(__name__)


# =============================================================================
# Result Models
# =============================================================================


class PartyThresholds(BaseModel):
    """XP thresholds for a whole party."""

    model_config = ConfigDict(frozen=True)

    easy: int = Field(ge=0)
    medium: int = Field(ge=0)
    hard: int = Field(ge=0)
    deadly: int = Field(ge=0)

    def for_tier(self, tier: DifficultyLevel | str) -> int:
        """Threshold of one tier."""
        return getattr(self, DifficultyLevel(tier).value)


class DifficultySummary(BaseModel):
    """Classification of an encounter.

    Attributes:
        difficulty: The tier reached, or trivial.
        xp: Raw summed monster XP.
        party_threshold: Thresholds the XP was compared against.
    """

    model_config = ConfigDict(frozen=True)

    difficulty: DifficultyRating
    xp: int = Field(ge=0)
    party_threshold: PartyThresholds


class EncounterSuggestion(BaseModel):
    """A single-creature group that fits an XP budget."""

    model_config = ConfigDict(frozen=True)

    creature: Creature
    quantity: int = Field(ge=1)
    total_xp: int = Field(ge=0)
    adjusted_xp: int = Field(ge=0)


# =============================================================================
# Thresholds and Classification
# =============================================================================


def clamp_level(level: int) -> int:
    """Clamp a party level into the threshold table range."""
    return max(MIN_PARTY_LEVEL, min(MAX_PARTY_LEVEL, level))


def party_thresholds(party_level: int, party_size: int) -> PartyThresholds:
    """Per-level thresholds multiplied by party size.

    Args:
        party_level: Average party level; clamped to 1-20.
        party_size: Number of characters; values below 1 count as 1.

    Returns:
        The party's thresholds.
    """
    per_level = XP_THRESHOLDS_BY_LEVEL[clamp_level(party_level)]
    size = max(1, party_size)
    return PartyThresholds(**{tier: xp * size for tier, xp in per_level.items()})


def classify_xp(xp: int, thresholds: PartyThresholds) -> DifficultyRating:
    """Highest tier whose threshold ``xp`` meets, or trivial below easy."""
    for tier in reversed(DifficultyLevel):
        if xp >= thresholds.for_tier(tier):
            return DifficultyRating(tier.value)
    return DifficultyRating.TRIVIAL


def calculate_difficulty(encounter: Encounter) -> DifficultySummary:
    """Classify an encounter for its party.

    Only monsters count towards XP; player characters are ignored.

    Args:
        encounter: The encounter to rate.

    Returns:
        DifficultySummary with the tier, raw XP and thresholds.
    """
    xp = monster_xp(encounter.combatants)
    thresholds = party_thresholds(encounter.party_level, encounter.party_size)
    return DifficultySummary(
        difficulty=classify_xp(xp, thresholds),
        xp=xp,
        party_threshold=thresholds,
    )


# =============================================================================
# XP Helpers
# =============================================================================


def xp_for_cr(cr: str) -> int:
    """XP award for a challenge rating; unknown ratings are worth 0."""
    xp = CR_TO_XP.get(str(cr).strip())
    if xp is None:
        logger.warning("Unknown challenge rating", cr=cr)
        return 0
    return xp


def encounter_multiplier(monster_count: int) -> float:
    """Group-size XP multiplier for ``monster_count`` monsters."""
    multiplier = 1.0
    for minimum, value in ENCOUNTER_MULTIPLIERS:
        if monster_count >= minimum:
            multiplier = value
    return multiplier


def adjusted_xp(xp_values: Sequence[int]) -> int:
    """Summed XP times the group-size multiplier, rounded down."""
    return int(sum(xp_values) * encounter_multiplier(len(xp_values)))


def xp_budget(party_size: int, party_level: int, difficulty: DifficultyLevel | str) -> int:
    """XP budget for building an encounter of the given tier."""
    return party_thresholds(party_level, party_size).for_tier(difficulty)


def daily_xp_budget(party_size: int, party_level: int) -> int:
    """XP a party can handle in an adventuring day."""
    return xp_budget(party_size, party_level, DifficultyLevel.MEDIUM) * DAILY_MEDIUM_ENCOUNTERS


def suggest_monsters_for_budget(
    creatures: Iterable[Creature],
    budget: int,
    *,
    max_monsters: int = 8,
) -> list[EncounterSuggestion]:
    """Suggest groups of one creature type that fit an XP budget.

    A group qualifies when its adjusted XP lands between 70% and 100% of the
    budget. Results are ordered by distance from the budget.

    Args:
        creatures: Candidate creatures.
        budget: Target XP.
        max_monsters: Largest group size tried.

    Returns:
        Up to ten suggestions, closest first.
    """
    candidates = list(creatures)
    floor = budget * SUGGESTION_BUDGET_FLOOR
    suggestions: list[EncounterSuggestion] = []
    for quantity in range(1, max_monsters + 1):
        for creature in candidates:
            total = creature.effective_xp * quantity
            adjusted = int(total * encounter_multiplier(quantity))
            if floor <= adjusted <= budget:
                suggestions.append(
                    EncounterSuggestion(
                        creature=creature,
                        quantity=quantity,
                        total_xp=total,
                        adjusted_xp=adjusted,
                    )
                )
    suggestions.sort(key=lambda s: abs(s.adjusted_xp - budget))
    return suggestions[:MAX_SUGGESTIONS]


__all__ = [
    "DifficultySummary",
    "EncounterSuggestion",
    "PartyThresholds",
    "adjusted_xp",
    "calculate_difficulty",
    "clamp_level",
    "classify_xp",
    "daily_xp_budget",
    "encounter_multiplier",
    "party_thresholds",
    "suggest_monsters_for_budget",
    "xp_budget",
    "xp_for_cr",
]
