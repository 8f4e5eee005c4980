"""Hit point and condition mutators.

Each function takes a combatant and returns a new one. Amounts below zero
count as zero, and hit points are clamped to ``[0, max_hp]``; nothing here
raises for out-of-range input.
"""

from __future__ import annotations

from encounter_tracker.core.constants import (
    HP_BLOODIED_PERCENT,
    HP_HEALTHY_PERCENT,
    HP_WOUNDED_PERCENT,
)
from encounter_tracker.models.combatant import Condition, MonsterCombatant, PlayerCombatant
from encounter_tracker.models.enums import HPStatus


AnyCombatant = PlayerCombatant | MonsterCombatant


# =============================================================================
# Hit Points
# =============================================================================


def damage(combatant: AnyCombatant, amount: int) -> AnyCombatant:
    """Apply damage, spending temporary hit points first.

    Args:
        combatant: Combatant taking damage.
        amount: Damage dealt; negative values count as 0.

    Returns:
        Updated combatant.

    Example:
        >>> c = MonsterCombatant(name="Ogre", hp=10, max_hp=10, temp_hp=5)
        >>> hurt = damage(c, 8)
        >>> (hurt.temp_hp, hurt.hp)
        (0, 7)
    """
    amount = max(0, amount)
    absorbed = min(combatant.temp_hp, amount)
    hp = max(0, combatant.hp - (amount - absorbed))
    return combatant.evolve(hp=hp, temp_hp=combatant.temp_hp - absorbed)


def heal(combatant: AnyCombatant, amount: int) -> AnyCombatant:
    """Restore hit points up to ``max_hp``; temporary hit points are untouched."""
    return combatant.evolve(hp=min(combatant.max_hp, combatant.hp + max(0, amount)))


def set_hp(combatant: AnyCombatant, hp: int) -> AnyCombatant:
    """Set current hit points, clamped to ``[0, max_hp]``."""
    return combatant.evolve(hp=max(0, min(hp, combatant.max_hp)))


def set_max_hp(combatant: AnyCombatant, max_hp: int) -> AnyCombatant:
    """Set maximum hit points; current hit points are lowered to fit."""
    max_hp = max(0, max_hp)
    return combatant.evolve(max_hp=max_hp, hp=min(combatant.hp, max_hp))


def set_temp_hp(combatant: AnyCombatant, temp_hp: int) -> AnyCombatant:
    """Set temporary hit points (replaces, does not stack)."""
    return combatant.evolve(temp_hp=max(0, temp_hp))


def hp_percentage(combatant: AnyCombatant) -> float:
    """Current hit points as a percentage of maximum; 0 when max is 0."""
    if combatant.max_hp <= 0:
        return 0.0
    return combatant.hp / combatant.max_hp * 100


def hp_status(combatant: AnyCombatant) -> HPStatus:
    """Display bucket for a combatant's hit points.

    0 hp is unconscious; below 25% critical; below 50% bloodied; below 75%
    wounded; otherwise healthy.
    """
    if combatant.hp <= 0 or combatant.max_hp <= 0:
        return HPStatus.UNCONSCIOUS
    percentage = hp_percentage(combatant)
    if percentage < HP_BLOODIED_PERCENT:
        return HPStatus.CRITICAL
    if percentage < HP_WOUNDED_PERCENT:
        return HPStatus.BLOODIED
    if percentage < HP_HEALTHY_PERCENT:
        return HPStatus.WOUNDED
    return HPStatus.HEALTHY


# =============================================================================
# Conditions
# =============================================================================


def add_condition(combatant: AnyCombatant, condition: Condition) -> AnyCombatant:
    """Append a condition; duplicates are allowed."""
    return combatant.evolve(conditions=[*combatant.conditions, condition])


def _condition_index(combatant: AnyCombatant, name_or_index: str | int) -> int | None:
    if isinstance(name_or_index, int):
        if 0 <= name_or_index < len(combatant.conditions):
            return name_or_index
        return None
    for index, condition in enumerate(combatant.conditions):
        if condition.name == name_or_index:
            return index
    return None


def remove_condition(combatant: AnyCombatant, name_or_index: str | int) -> AnyCombatant:
    """Remove one condition by position or by name (first match).

    Unknown names and out-of-range positions leave the combatant unchanged.
    """
    index = _condition_index(combatant, name_or_index)
    if index is None:
        return combatant
    conditions = list(combatant.conditions)
    del conditions[index]
    return combatant.evolve(conditions=conditions)


def update_condition_duration(
    combatant: AnyCombatant,
    name_or_index: str | int,
    duration: int | None,
) -> AnyCombatant:
    """Change the remaining rounds of one condition.

    ``None`` makes the condition open-ended; negative values count as 0.
    """
    index = _condition_index(combatant, name_or_index)
    if index is None:
        return combatant
    conditions = list(combatant.conditions)
    current = conditions[index]
    conditions[index] = Condition(
        name=current.name,
        duration=None if duration is None else max(0, duration),
    )
    return combatant.evolve(conditions=conditions)


def tick_condition_durations(combatant: AnyCombatant) -> AnyCombatant:
    """Count down timed conditions by one round and drop expired ones.

    Open-ended conditions are kept as they are.
    """
    conditions: list[Condition] = []
    for condition in combatant.conditions:
        if condition.duration is None:
            conditions.append(condition)
            continue
        remaining = condition.duration - 1
        if remaining > 0:
            conditions.append(Condition(name=condition.name, duration=remaining))
    return combatant.evolve(conditions=conditions)


__all__ = [
    "add_condition",
    "damage",
    "heal",
    "hp_percentage",
    "hp_status",
    "remove_condition",
    "set_hp",
    "set_max_hp",
    "set_temp_hp",
    "tick_condition_durations",
    "update_condition_duration",
]
