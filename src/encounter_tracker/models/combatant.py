"""Pydantic V2 schemas for combatants and the creature records they come from.

A combatant is either a player character or a monster. The two variants
share the hit point, armor class, initiative and condition fields; level
only exists on player characters, and challenge rating, creature type,
environment and XP only exist on monsters. ``is_pc`` is the tag that picks
the variant when validating raw data.

All models are frozen. Changes go through ``evolve``, which re-validates,
so the hit point invariant ``0 <= hp <= max_hp`` holds on every copy.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Self, Union
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    model_validator,
)

from encounter_tracker.core.constants import CR_TO_XP, FRACTIONAL_CR_VALUES


# =============================================================================
# Type Definitions
# =============================================================================


ChallengeRating = Annotated[
    str,
    Field(pattern=r"^(\d+|1/8|1/4|1/2)$", description="CR like '1/4', '1', '5'"),
]
Level = Annotated[int, Field(ge=1, le=20, description="Character level (1-20)")]
AbilityScore = Annotated[int, Field(ge=1, le=30, description="D&D ability score (1-30)")]


def challenge_rating_value(cr: str) -> float:
    """Convert a CR string to its numeric value.

    Args:
        cr: Challenge rating such as ``"1/4"`` or ``"5"``.

    Returns:
        The numeric CR; unparseable input yields 0.0.
    """
    if cr in FRACTIONAL_CR_VALUES:
        return FRACTIONAL_CR_VALUES[cr]
    try:
        return float(cr)
    except ValueError:
        return 0.0


# =============================================================================
# Conditions
# =============================================================================


class Condition(BaseModel):
    """A condition applied to a combatant.

    Attributes:
        name: Condition name, free text (e.g. "Poisoned", "Hexed").
        duration: Remaining rounds, or None for an open-ended condition.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=50, description="Condition name")
    duration: int | None = Field(default=None, ge=0, description="Remaining rounds")


# =============================================================================
# Combatants
# =============================================================================


def _as_int(value: Any) -> int | None:
    """Integer form of a raw hit point value, or None when it has none."""
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


class CombatantBase(BaseModel):
    """Fields shared by every combatant.

    Attributes:
        id: Unique identifier, assigned at creation and never reused.
        name: Display name.
        hp: Current hit points, clamped to [0, max_hp].
        max_hp: Maximum hit points.
        temp_hp: Temporary hit points, consumed before hp on damage.
        ac: Armor class (reference only).
        initiative: Turn order value.
        conditions: Applied conditions in the order they were added.
        tiebreaker: Optional tiebreak value, carried but not used for sorting.
        notes: DM notes.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    id: UUID = Field(default_factory=uuid4, description="Unique combatant ID")
    name: str = Field(min_length=1, max_length=100, description="Display name")
    hp: int = Field(ge=0, description="Current HP")
    max_hp: int = Field(ge=0, description="Maximum HP")
    temp_hp: int = Field(default=0, ge=0, description="Temporary HP")
    ac: int = Field(default=10, description="Armor class")
    initiative: int = Field(default=0, description="Initiative value")
    conditions: list[Condition] = Field(default_factory=list, description="Active conditions")
    tiebreaker: int | None = Field(default=None, description="Reserved initiative tiebreak")
    notes: str = Field(default="", max_length=500, description="DM notes")

    @model_validator(mode="before")
    @classmethod
    def clamp_hit_points(cls, data: Any) -> Any:
        """Clamp hit point fields instead of rejecting out-of-range values."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        max_hp = _as_int(data.get("max_hp", data.get("hp", 0)))
        if max_hp is None:
            return data
        max_hp = max(0, max_hp)
        data["max_hp"] = max_hp
        if "hp" not in data:
            data["hp"] = max_hp
        elif (hp := _as_int(data["hp"])) is not None:
            data["hp"] = max(0, min(hp, max_hp))
        if (temp_hp := _as_int(data.get("temp_hp", 0))) is not None:
            data["temp_hp"] = max(0, temp_hp)
        return data

    def evolve(self, **changes: Any) -> Self:
        """Return a validated copy with ``changes`` applied.

        Args:
            **changes: Field values to replace.

        Returns:
            New combatant of the same variant.
        """
        return type(self)(**{**self.model_dump(), **changes})


class PlayerCombatant(CombatantBase):
    """A player character in the encounter.

    Player characters carry a level and contribute no XP cost.
    """

    is_pc: Literal[True] = True
    level: Level = Field(default=1, description="Character level")


class MonsterCombatant(CombatantBase):
    """A monster or NPC in the encounter.

    Attributes:
        cr: Challenge rating string.
        cr_value: Numeric challenge rating.
        creature_type: Creature type (dragon, undead, humanoid, ...).
        environment: Habitat used by the encounter builder filters.
        xp: XP this monster is worth.
        dexterity: DEX score when the stat block provides one.
    """

    is_pc: Literal[False] = False
    cr: ChallengeRating = Field(default="0", description="Challenge rating")
    cr_value: float = Field(default=0.0, ge=0, description="Numeric challenge rating")
    creature_type: str = Field(default="humanoid", description="Creature type")
    environment: str = Field(default="any", description="Habitat")
    xp: int = Field(default=0, ge=0, description="XP value")
    dexterity: AbilityScore | None = Field(default=None, description="DEX score")


def _combatant_tag(value: Any) -> str:
    is_pc = value.get("is_pc", False) if isinstance(value, dict) else getattr(value, "is_pc", False)
    return "pc" if is_pc else "monster"


Combatant = Annotated[
    Union[
        Annotated[PlayerCombatant, Tag("pc")],
        Annotated[MonsterCombatant, Tag("monster")],
    ],
    Discriminator(_combatant_tag),
]
"""Either variant, picked by ``is_pc``."""

_combatant_adapter: TypeAdapter[PlayerCombatant | MonsterCombatant] = TypeAdapter(Combatant)


def parse_combatant(data: dict[str, Any]) -> PlayerCombatant | MonsterCombatant:
    """Validate raw combatant data into the matching variant.

    Args:
        data: Serialized combatant, e.g. from local storage.

    Returns:
        PlayerCombatant when ``is_pc`` is true, MonsterCombatant otherwise.
    """
    return _combatant_adapter.validate_python(data)


# =============================================================================
# Creature Records (encounter builder input)
# =============================================================================


class Creature(BaseModel):
    """A creature record supplied by the encounter builder or an importer.

    Attributes:
        name: Creature name; used for ability lookups.
        hp: Hit points.
        max_hp: Maximum hit points (defaults to hp).
        ac: Armor class.
        creature_type: Creature type.
        cr: Challenge rating string.
        xp: XP value; derived from CR when omitted.
        environment: Habitat.
        size: Size category, informational.
        dexterity: DEX score, if known.
        speed: Speed text, informational.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1, max_length=100)
    hp: int = Field(ge=0)
    max_hp: int | None = Field(default=None, ge=0)
    ac: int = Field(default=10)
    creature_type: str = Field(default="humanoid")
    cr: ChallengeRating = Field(default="0")
    xp: int | None = Field(default=None, ge=0)
    environment: str = Field(default="any")
    size: str | None = None
    dexterity: AbilityScore | None = None
    speed: str | None = None

    @property
    def cr_value(self) -> float:
        """Numeric challenge rating."""
        return challenge_rating_value(self.cr)

    @property
    def effective_xp(self) -> int:
        """XP from the record, or from the CR table when absent."""
        if self.xp is not None:
            return self.xp
        return CR_TO_XP.get(self.cr, 0)


def create_combatant(
    creature: Creature,
    *,
    is_pc: bool = False,
    level: int | None = None,
) -> PlayerCombatant | MonsterCombatant:
    """Build a new combatant from a creature record.

    The combatant gets a fresh id, zero initiative and no conditions.

    Args:
        creature: Source record.
        is_pc: Build a player character instead of a monster.
        level: Character level for player characters (default 1).

    Returns:
        The new combatant.
    """
    max_hp = creature.max_hp if creature.max_hp is not None else creature.hp
    if is_pc:
        return PlayerCombatant(
            name=creature.name,
            hp=creature.hp,
            max_hp=max_hp,
            ac=creature.ac,
            level=level or 1,
        )
    return MonsterCombatant(
        name=creature.name,
        hp=creature.hp,
        max_hp=max_hp,
        ac=creature.ac,
        cr=creature.cr,
        cr_value=creature.cr_value,
        creature_type=creature.creature_type,
        environment=creature.environment,
        xp=creature.effective_xp,
        dexterity=creature.dexterity,
    )


__all__ = [
    "ChallengeRating",
    "Condition",
    "CombatantBase",
    "PlayerCombatant",
    "MonsterCombatant",
    "Combatant",
    "Creature",
    "challenge_rating_value",
    "create_combatant",
    "parse_combatant",
]
