"""Advisory ability reminders for the combatant whose turn it is.

Reminders come from the creature ability catalog, matched on the exact
combatant name. They are presentation hints; nothing here enforces rules.

The top of the round is when the combatant at the turn pointer has the
highest initiative in the encounter. Lair actions surface only then.
"""

from __future__ import annotations

from encounter_tracker.core.constants import DEFAULT_REMINDER_LIMIT, PRIORITY_ORDER
from encounter_tracker.models.abilities import AbilityCatalog, CreatureAbility
from encounter_tracker.models.combatant import MonsterCombatant, PlayerCombatant
from encounter_tracker.models.enums import AbilityType, StandardCondition


AnyCombatant = PlayerCombatant | MonsterCombatant

OWN_TURN_TYPES = (
    AbilityType.START_OF_TURN,
    AbilityType.COMBAT_ABILITY,
    AbilityType.RESISTANCE,
    AbilityType.CONCENTRATION,
)


def _by_priority(abilities: list[CreatureAbility]) -> list[CreatureAbility]:
    return sorted(abilities, key=lambda a: PRIORITY_ORDER[a.priority.value])


def is_top_of_round(current_turn: int, combatants: list[AnyCombatant]) -> bool:
    """Whether the combatant at ``current_turn`` holds the highest initiative."""
    if not 0 <= current_turn < len(combatants):
        return False
    highest = max(c.initiative for c in combatants)
    return combatants[current_turn].initiative == highest


def get_contextual_reminders(
    combatant: AnyCombatant,
    current_turn: int,
    combatants: list[AnyCombatant],
    catalog: AbilityCatalog | None = None,
    *,
    limit: int = DEFAULT_REMINDER_LIMIT,
) -> list[CreatureAbility]:
    """Abilities worth reminding the DM about for ``combatant`` right now.

    At the top of the round a creature with lair actions gets only those.
    On its own turn it gets start-of-turn, combat, resistance and
    concentration abilities. On anyone else's turn (outside the top of the
    round) it gets its legendary actions.

    Args:
        combatant: The creature to annotate.
        current_turn: Turn pointer of the encounter.
        combatants: Combatants in turn order.
        catalog: Ability table; the bundled one when omitted.
        limit: Maximum number of reminders returned.

    Returns:
        Reminders sorted by priority, most urgent first. Empty when the
        creature has no template.
    """
    template = (catalog if catalog is not None else AbilityCatalog.default()).get(combatant.name)
    if template is None:
        return []

    top_of_round = is_top_of_round(current_turn, combatants)
    if top_of_round:
        lair_actions = template.abilities_of(AbilityType.LAIR_ACTIONS)
        if lair_actions:
            return _by_priority(lair_actions)[:limit]

    own_turn = 0 <= current_turn < len(combatants) and combatants[current_turn].id == combatant.id
    reminders: list[CreatureAbility] = []
    if own_turn:
        reminders.extend(template.abilities_of(*OWN_TURN_TYPES))
    elif not top_of_round:
        reminders.extend(template.abilities_of(AbilityType.LEGENDARY_ACTIONS))

    return _by_priority(reminders)[:limit]


def has_legendary_actions(combatant: AnyCombatant, catalog: AbilityCatalog | None = None) -> bool:
    """Whether the catalog lists legendary actions for this creature."""
    template = (catalog if catalog is not None else AbilityCatalog.default()).get(combatant.name)
    return template is not None and bool(template.abilities_of(AbilityType.LEGENDARY_ACTIONS))


def creatures_with_lair_actions(
    current_turn: int,
    combatants: list[AnyCombatant],
    catalog: AbilityCatalog | None = None,
) -> list[AnyCombatant]:
    """Combatants whose lair actions are due, i.e. at the top of the round."""
    if not is_top_of_round(current_turn, combatants):
        return []
    catalog = catalog if catalog is not None else AbilityCatalog.default()
    due: list[AnyCombatant] = []
    for combatant in combatants:
        template = catalog.get(combatant.name)
        if template is not None and template.abilities_of(AbilityType.LAIR_ACTIONS):
            due.append(combatant)
    return due


def has_active_reminders(
    combatant: AnyCombatant,
    current_turn: int,
    combatants: list[AnyCombatant],
    catalog: AbilityCatalog | None = None,
) -> bool:
    """Whether ``get_contextual_reminders`` would return anything."""
    return bool(get_contextual_reminders(combatant, current_turn, combatants, catalog))


def analyze_condition_interactions(combatant: AnyCombatant) -> list[str]:
    """Notes on condition combinations with special rules.

    Args:
        combatant: Combatant whose conditions are checked by name.

    Returns:
        Advisory strings, possibly empty.
    """
    names = {c.name for c in combatant.conditions}
    grappled = StandardCondition.GRAPPLED in names
    restrained = StandardCondition.RESTRAINED in names
    prone = StandardCondition.PRONE in names
    paralyzed = StandardCondition.PARALYZED in names
    unconscious = StandardCondition.UNCONSCIOUS in names
    incapacitated = StandardCondition.INCAPACITATED in names

    notes: list[str] = []
    if grappled and restrained:
        notes.append("Grappled + Restrained: speed is 0, disadvantage on attacks and Dex saves")
    if prone and grappled:
        notes.append("Prone + Grappled: standing up costs movement but speed is 0, cannot stand")
    if StandardCondition.INVISIBLE in names and StandardCondition.BLINDED in names:
        notes.append("Invisible + Blinded: invisibility provides no benefit")
    if paralyzed or unconscious:
        notes.append("Attacks within 5 feet are automatic critical hits")
    if incapacitated or paralyzed or unconscious or StandardCondition.STUNNED in names:
        notes.append("Concentration lost: this condition breaks concentration on spells")
    if unconscious and (prone or incapacitated):
        notes.append("Redundant: unconscious already includes prone and incapacitated")
    return notes


__all__ = [
    "analyze_condition_interactions",
    "creatures_with_lair_actions",
    "get_contextual_reminders",
    "has_active_reminders",
    "has_legendary_actions",
    "is_top_of_round",
]
