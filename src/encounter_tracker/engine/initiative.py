"""Initiative rolling and ordering.

Player characters roll d20 plus a flat bonus from settings. Monsters roll
d20 plus their DEX modifier; when the stat block gives no DEX, a baseline
is derived from creature type and challenge rating.
"""

from __future__ import annotations

from encounter_tracker.core.config import get_settings
from encounter_tracker.core.constants import (
    DEFAULT_MONSTER_DEXTERITY,
    GENERIC_MONSTER_DEXTERITY,
    MAX_CR_DEXTERITY_BONUS,
)
from encounter_tracker.core.logging import get_logger
from encounter_tracker.engine.dice import DiceRoller, get_default_roller
from encounter_tracker.models.combatant import MonsterCombatant, PlayerCombatant


logger = get_logger(__name__)

AnyCombatant = PlayerCombatant | MonsterCombatant


def ability_modifier(score: int) -> int:
    """D&D ability modifier: floor((score - 10) / 2)."""
    return (score - 10) // 2


def default_dexterity(creature_type: str, cr_value: float) -> int:
    """Baseline DEX for a monster whose stat block gives none.

    Args:
        creature_type: Creature type, matched case-insensitively.
        cr_value: Numeric challenge rating.

    Returns:
        Type baseline plus a CR bump of at most +5.
    """
    base = DEFAULT_MONSTER_DEXTERITY.get(creature_type.lower(), GENERIC_MONSTER_DEXTERITY)
    return base + min(MAX_CR_DEXTERITY_BONUS, max(0, int(cr_value // 5)))


def initiative_modifier(combatant: AnyCombatant, *, pc_bonus: int | None = None) -> int:
    """Modifier added to a combatant's initiative d20.

    Args:
        combatant: The combatant rolling.
        pc_bonus: Flat bonus for player characters; defaults to the
            ``pc_initiative_bonus`` setting.

    Returns:
        The modifier.
    """
    if combatant.is_pc:
        if pc_bonus is None:
            pc_bonus = get_settings().game.pc_initiative_bonus
        return pc_bonus
    dexterity = combatant.dexterity
    if dexterity is None:
        dexterity = default_dexterity(combatant.creature_type, combatant.cr_value)
    return ability_modifier(dexterity)


def roll_initiative(
    combatant: AnyCombatant,
    *,
    roller: DiceRoller | None = None,
    pc_bonus: int | None = None,
) -> int:
    """Roll initiative for one combatant.

    The combatant is not changed.

    Args:
        combatant: The combatant rolling.
        roller: Dice roller; the shared default when omitted.
        pc_bonus: Override for the player character bonus.

    Returns:
        d20 plus the combatant's initiative modifier.
    """
    modifier = initiative_modifier(combatant, pc_bonus=pc_bonus)
    result = (roller or get_default_roller()).roll_initiative(modifier)
    logger.debug(
        "Initiative rolled",
        combatant=combatant.name,
        natural=result.natural,
        modifier=modifier,
        total=result.total,
    )
    return result.total


def roll_all_initiative(
    combatants: list[AnyCombatant],
    *,
    roller: DiceRoller | None = None,
    pc_bonus: int | None = None,
) -> list[AnyCombatant]:
    """Roll initiative for everyone.

    Returns:
        New list in the same order, with only ``initiative`` changed.
    """
    return [
        c.evolve(initiative=roll_initiative(c, roller=roller, pc_bonus=pc_bonus))
        for c in combatants
    ]


def sort_by_initiative(combatants: list[AnyCombatant]) -> list[AnyCombatant]:
    """Order combatants by initiative, highest first.

    The sort is stable, so ties keep their relative order and sorting an
    already sorted list changes nothing.
    """
    return sorted(combatants, key=lambda c: c.initiative, reverse=True)


__all__ = [
    "ability_modifier",
    "default_dexterity",
    "initiative_modifier",
    "roll_all_initiative",
    "roll_initiative",
    "sort_by_initiative",
]
