"""Pydantic V2 schemas for encounters and the tracker state aggregate.

Encounters are frozen. The helper methods return new instances, in the same
way ``TurnOrder`` rebuilds itself, so a caller holding an old encounter never
sees it change underneath them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from encounter_tracker.core.constants import XP_THRESHOLDS_BY_LEVEL
from encounter_tracker.models.combatant import (
    Combatant,
    Creature,
    MonsterCombatant,
    PlayerCombatant,
)
from encounter_tracker.models.enums import DifficultyLevel


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def monster_xp(combatants: list[PlayerCombatant | MonsterCombatant]) -> int:
    """Sum the XP of the monsters in ``combatants``."""
    return sum(c.xp for c in combatants if isinstance(c, MonsterCombatant))


def tier_budget(party_size: int, party_level: int, difficulty: DifficultyLevel | str) -> int:
    """Per-level threshold of ``difficulty`` times party size.

    The level is clamped into the table range.
    """
    level = max(1, min(20, party_level))
    return XP_THRESHOLDS_BY_LEVEL[level][DifficultyLevel(difficulty).value] * max(1, party_size)


# =============================================================================
# Encounter
# =============================================================================


class Encounter(BaseModel):
    """A named set of combatants plus turn and round state.

    Attributes:
        id: Unique encounter identifier.
        name: Display name.
        notes: Free-form DM notes.
        combatants: Combatants in turn order.
        round: Current round, starting at 1.
        current_turn: Index of the combatant whose turn it is.
        is_active: Whether combat is running.
        party_size: Number of player characters the encounter is built for.
        party_level: Average party level.
        difficulty: Target difficulty tier used for the XP budget.
        created_at: Creation time.
        updated_at: Time of the last change.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(default="New Encounter", min_length=1, max_length=100)
    notes: str = Field(default="")
    combatants: list[Combatant] = Field(default_factory=list)
    round: int = Field(default=1, ge=1)
    current_turn: int = Field(default=0, ge=0)
    is_active: bool = Field(default=False)
    party_size: int = Field(default=4, ge=1)
    party_level: int = Field(default=1, ge=1, le=20)
    difficulty: DifficultyLevel = Field(default=DifficultyLevel.MEDIUM)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_turn_pointer(self) -> "Encounter":
        """Ensure the turn pointer indexes an existing combatant.

        Returns:
            Self if validation passes.

        Raises:
            ValueError: If current_turn is out of range.
        """
        limit = max(0, len(self.combatants) - 1)
        if self.current_turn > limit:
            raise ValueError(
                f"current_turn {self.current_turn} out of range for "
                f"{len(self.combatants)} combatants"
            )
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def used_xp(self) -> int:
        """Total XP of the monsters in the encounter."""
        return monster_xp(self.combatants)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def xp_budget(self) -> int:
        """XP budget for the target difficulty and party."""
        return tier_budget(self.party_size, self.party_level, self.difficulty)

    @property
    def current_combatant(self) -> PlayerCombatant | MonsterCombatant | None:
        """The combatant whose turn it is, or None when empty."""
        if not self.combatants:
            return None
        return self.combatants[self.current_turn]

    def index_of(self, combatant_id: UUID) -> int | None:
        """Position of a combatant, or None if absent."""
        for index, combatant in enumerate(self.combatants):
            if combatant.id == combatant_id:
                return index
        return None

    def get_combatant(self, combatant_id: UUID) -> PlayerCombatant | MonsterCombatant | None:
        """Look up a combatant by id."""
        index = self.index_of(combatant_id)
        return None if index is None else self.combatants[index]

    def evolve(self, **changes: Any) -> Self:
        """Return a validated copy with ``changes`` applied and ``updated_at`` bumped.

        The computed XP fields are dropped from the dump so they are derived
        again from the new combatant list.
        """
        data = self.model_dump(exclude={"used_xp", "xp_budget"})
        data["combatants"] = list(self.combatants)
        data["updated_at"] = utc_now()
        data.update(changes)
        return type(self)(**data)

    def replace_combatant(self, combatant: PlayerCombatant | MonsterCombatant) -> Self:
        """Return a copy with the combatant of the same id replaced."""
        combatants = [combatant if c.id == combatant.id else c for c in self.combatants]
        return self.evolve(combatants=combatants)


# =============================================================================
# Saved Encounters
# =============================================================================


class SavedEncounter(BaseModel):
    """A stored snapshot of an encounter.

    Snapshots are written and read back verbatim; loading one produces a
    fresh encounter with the same combatants and turn state.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1, max_length=100)
    combatants: list[Combatant] = Field(default_factory=list)
    round: int = Field(default=1, ge=1)
    current_turn: int = Field(default=0, ge=0)
    notes: str = Field(default="")
    party_size: int = Field(default=4, ge=1)
    party_level: int = Field(default=1, ge=1, le=20)
    difficulty: DifficultyLevel = Field(default=DifficultyLevel.MEDIUM)
    saved_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def from_encounter(cls, encounter: Encounter, *, name: str | None = None) -> "SavedEncounter":
        """Snapshot an encounter."""
        return cls(
            name=name or encounter.name,
            combatants=list(encounter.combatants),
            round=encounter.round,
            current_turn=encounter.current_turn,
            notes=encounter.notes,
            party_size=encounter.party_size,
            party_level=encounter.party_level,
            difficulty=encounter.difficulty,
        )

    def to_encounter(self) -> Encounter:
        """Build a new, inactive encounter from the snapshot."""
        turn = self.current_turn if self.current_turn < len(self.combatants) else 0
        return Encounter(
            name=self.name,
            notes=self.notes,
            combatants=list(self.combatants),
            round=self.round,
            current_turn=turn,
            party_size=self.party_size,
            party_level=self.party_level,
            difficulty=self.difficulty,
        )


# =============================================================================
# Tracker State
# =============================================================================


class BuilderState(BaseModel):
    """Encounter builder creature list and filters.

    ``filtered_creatures`` is derived from the others and is not persisted.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    creatures: list[Creature] = Field(default_factory=list)
    filtered_creatures: list[Creature] = Field(default_factory=list)
    search_term: str = Field(default="")
    cr_filter: str = Field(default="all")
    type_filter: str = Field(default="all")
    environment_filter: str = Field(default="all")


class TrackerState(BaseModel):
    """The whole tracker: encounters, selection and builder state."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    encounters: list[Encounter] = Field(default_factory=list)
    active_encounter_id: UUID | None = None
    selected_combatant_id: UUID | None = None
    builder: BuilderState = Field(default_factory=BuilderState)

    @model_validator(mode="after")
    def validate_active_encounter(self) -> "TrackerState":
        """Ensure the active encounter id refers to a stored encounter.

        Raises:
            ValueError: If the id is set but no encounter has it.
        """
        active_id = self.active_encounter_id
        if active_id is not None and self.get_encounter(active_id) is None:
            raise ValueError(f"Active encounter {active_id} does not exist")
        return self

    def get_encounter(self, encounter_id: UUID) -> Encounter | None:
        """Look up an encounter by id."""
        for encounter in self.encounters:
            if encounter.id == encounter_id:
                return encounter
        return None

    @property
    def active_encounter(self) -> Encounter | None:
        """The encounter being run, if any."""
        if self.active_encounter_id is None:
            return None
        return self.get_encounter(self.active_encounter_id)


__all__ = [
    "BuilderState",
    "Encounter",
    "SavedEncounter",
    "TrackerState",
    "monster_xp",
    "tier_budget",
    "utc_now",
]
