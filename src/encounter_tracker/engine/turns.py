"""Turn and round state machine.

Every function takes an Encounter and returns a new one; the input is never
changed. Turn order is the order of ``encounter.combatants``, so callers sort
by initiative first if they want initiative order.

On an empty encounter every transition is a no-op except ``next_round`` and
``reset_encounter``.
"""

from __future__ import annotations

from uuid import UUID

from encounter_tracker.core.logging import get_logger
from encounter_tracker.models.combatant import MonsterCombatant, PlayerCombatant
from encounter_tracker.models.encounter import Encounter


logger = get_logger(__name__)

AnyCombatant = PlayerCombatant | MonsterCombatant


# =============================================================================
# Turn Transitions
# =============================================================================


def next_turn(encounter: Encounter) -> Encounter:
    """Advance to the next combatant, wrapping into a new round."""
    if not encounter.combatants:
        return encounter
    turn = encounter.current_turn + 1
    round_number = encounter.round
    if turn >= len(encounter.combatants):
        turn = 0
        round_number += 1
    return encounter.evolve(current_turn=turn, round=round_number)


def previous_turn(encounter: Encounter) -> Encounter:
    """Step back one combatant; the round never drops below 1."""
    if not encounter.combatants:
        return encounter
    if encounter.current_turn == 0:
        return encounter.evolve(
            current_turn=len(encounter.combatants) - 1,
            round=max(1, encounter.round - 1),
        )
    return encounter.evolve(current_turn=encounter.current_turn - 1)


def next_round(encounter: Encounter) -> Encounter:
    """Start the next round at the top of the order."""
    return encounter.evolve(current_turn=0, round=encounter.round + 1)


def go_to_turn(encounter: Encounter, index: int) -> Encounter:
    """Jump to ``index``; out-of-range indexes leave the encounter unchanged."""
    if not 0 <= index < len(encounter.combatants):
        logger.debug("Turn index out of range", index=index, combatants=len(encounter.combatants))
        return encounter
    return encounter.evolve(current_turn=index)


def start_combat(encounter: Encounter) -> Encounter:
    """Mark combat as running, starting from the top of the order."""
    return encounter.evolve(is_active=True, current_turn=0)


def end_combat(encounter: Encounter) -> Encounter:
    """Mark combat as stopped; round and turn are kept."""
    return encounter.evolve(is_active=False)


def reset_encounter(encounter: Encounter) -> Encounter:
    """Return the encounter to its pre-combat state.

    Round 1, turn 0, inactive; every combatant back to full hit points
    with no temporary hit points, no conditions and zero initiative.
    """
    combatants = [
        c.evolve(initiative=0, conditions=[], hp=c.max_hp, temp_hp=0)
        for c in encounter.combatants
    ]
    return encounter.evolve(
        combatants=combatants,
        round=1,
        current_turn=0,
        is_active=False,
    )


# =============================================================================
# Roster Changes
# =============================================================================


def clamp_turn_after_removal(current_turn: int, removed_index: int, new_length: int) -> int:
    """Where the turn pointer goes after removing one combatant.

    Removing someone before the pointer shifts it back so the same combatant
    keeps the turn. Removing the combatant whose turn it is hands the turn to
    the next one, or to the new last combatant when it was the end of the
    order.

    Args:
        current_turn: Pointer before the removal.
        removed_index: Position of the removed combatant.
        new_length: Number of combatants left.

    Returns:
        The new pointer, 0 when no combatants are left.
    """
    if new_length <= 0:
        return 0
    if removed_index < current_turn:
        current_turn -= 1
    return max(0, min(current_turn, new_length - 1))


def add_combatants(encounter: Encounter, combatants: list[AnyCombatant]) -> Encounter:
    """Append combatants to the end of the order."""
    if not combatants:
        return encounter
    return encounter.evolve(combatants=[*encounter.combatants, *combatants])


def remove_combatant(encounter: Encounter, combatant_id: UUID) -> Encounter:
    """Remove a combatant and keep the turn pointer valid.

    Unknown ids leave the encounter unchanged.
    """
    index = encounter.index_of(combatant_id)
    if index is None:
        return encounter
    remaining = [c for c in encounter.combatants if c.id != combatant_id]
    turn = clamp_turn_after_removal(encounter.current_turn, index, len(remaining))
    return encounter.evolve(combatants=remaining, current_turn=turn)


def duplicate_combatant(encounter: Encounter, combatant_id: UUID) -> Encounter:
    """Append a fresh copy of a combatant to the end of the order.

    The copy gets a new id, a " (Copy)" name suffix, full hit points and no
    conditions. Unknown ids leave the encounter unchanged.
    """
    original = encounter.get_combatant(combatant_id)
    if original is None:
        return encounter
    copy_data = original.model_dump(exclude={"id"})
    copy_data.update(
        name=f"{original.name} (Copy)"[:100],
        hp=original.max_hp,
        temp_hp=0,
        conditions=[],
    )
    return add_combatants(encounter, [type(original)(**copy_data)])


__all__ = [
    "add_combatants",
    "clamp_turn_after_removal",
    "duplicate_combatant",
    "end_combat",
    "go_to_turn",
    "next_round",
    "next_turn",
    "previous_turn",
    "remove_combatant",
    "reset_encounter",
    "start_combat",
]
