"""Creature filtering for the encounter builder."""

from __future__ import annotations

from collections.abc import Iterable

from encounter_tracker.models.combatant import Creature
from encounter_tracker.models.encounter import BuilderState


ANY = "all"


def _unfiltered(value: str) -> bool:
    return not value or value.lower() == ANY


def filter_creatures(
    creatures: Iterable[Creature],
    *,
    search_term: str = "",
    cr_filter: str = ANY,
    type_filter: str = ANY,
    environment_filter: str = ANY,
) -> list[Creature]:
    """Creatures matching every active filter, in their original order.

    The search term matches any part of the name, ignoring case. CR must
    match exactly; type and environment ignore case. An empty filter or
    ``"all"`` disables that filter.
    """
    needle = search_term.strip().lower()
    matches: list[Creature] = []
    for creature in creatures:
        if needle and needle not in creature.name.lower():
            continue
        if not _unfiltered(cr_filter) and creature.cr != cr_filter:
            continue
        if not _unfiltered(type_filter) and creature.creature_type.lower() != type_filter.lower():
            continue
        if (
            not _unfiltered(environment_filter)
            and creature.environment.lower() != environment_filter.lower()
        ):
            continue
        matches.append(creature)
    return matches


def refilter(builder: BuilderState) -> BuilderState:
    """Recompute ``filtered_creatures`` from the builder's list and filters."""
    filtered = filter_creatures(
        builder.creatures,
        search_term=builder.search_term,
        cr_filter=builder.cr_filter,
        type_filter=builder.type_filter,
        environment_filter=builder.environment_filter,
    )
    return builder.model_copy(update={"filtered_creatures": filtered})


__all__ = [
    "filter_creatures",
    "refilter",
]
