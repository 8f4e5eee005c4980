"""Encounter engine: dice, initiative, turns, difficulty, health and reminders.

Every engine function is pure. It takes models and returns new models, and
leaves storage and logging of state changes to the EncounterStore.
"""

from __future__ import annotations

from encounter_tracker.engine.builder import filter_creatures, refilter
from encounter_tracker.engine.dice import DiceRoller, RollResult, RollType, roll
from encounter_tracker.engine.difficulty import (
    DifficultySummary,
    EncounterSuggestion,
    PartyThresholds,
    adjusted_xp,
    calculate_difficulty,
    daily_xp_budget,
    encounter_multiplier,
    party_thresholds,
    suggest_monsters_for_budget,
    xp_budget,
    xp_for_cr,
)
from encounter_tracker.engine.health import (
    add_condition,
    damage,
    heal,
    hp_percentage,
    hp_status,
    remove_condition,
    set_hp,
    set_max_hp,
    set_temp_hp,
    tick_condition_durations,
    update_condition_duration,
)
from encounter_tracker.engine.initiative import (
    initiative_modifier,
    roll_all_initiative,
    roll_initiative,
    sort_by_initiative,
)
from encounter_tracker.engine.reminders import (
    analyze_condition_interactions,
    creatures_with_lair_actions,
    get_contextual_reminders,
    has_active_reminders,
    has_legendary_actions,
)
from encounter_tracker.engine.turns import (
    clamp_turn_after_removal,
    end_combat,
    go_to_turn,
    next_round,
    next_turn,
    previous_turn,
    reset_encounter,
    start_combat,
)
from encounter_tracker.engine.validation import (
    ValidationResult,
    validate_ac,
    validate_hp,
    validate_initiative,
    validate_name,
)


__all__ = [
    # Dice
    "DiceRoller",
    "RollResult",
    "RollType",
    "roll",
    # Initiative
    "initiative_modifier",
    "roll_all_initiative",
    "roll_initiative",
    "sort_by_initiative",
    # Turns
    "clamp_turn_after_removal",
    "end_combat",
    "go_to_turn",
    "next_round",
    "next_turn",
    "previous_turn",
    "reset_encounter",
    "start_combat",
    # Difficulty
    "DifficultySummary",
    "EncounterSuggestion",
    "PartyThresholds",
    "adjusted_xp",
    "calculate_difficulty",
    "daily_xp_budget",
    "encounter_multiplier",
    "party_thresholds",
    "suggest_monsters_for_budget",
    "xp_budget",
    "xp_for_cr",
    # Health
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
    # Reminders
    "analyze_condition_interactions",
    "creatures_with_lair_actions",
    "get_contextual_reminders",
    "has_active_reminders",
    "has_legendary_actions",
    # Validation
    "ValidationResult",
    "validate_ac",
    "validate_hp",
    "validate_initiative",
    "validate_name",
    # Builder
    "filter_creatures",
    "refilter",
]
