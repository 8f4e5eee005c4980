"""The encounter store: single entry point for every tracker mutation.

``EncounterStore`` owns one ``TrackerState``. Each operation builds a new
state from the engine's pure functions and swaps it in, so a state object
handed out earlier never changes. Persistence is separate; see
``encounter_tracker.storage``.

Combatant, turn and health operations act on the active encounter. Unknown
combatant ids and a missing active encounter are no-ops. Operations that
name an encounter explicitly raise EncounterNotFoundError when it does not
exist, except delete, rename and notes which are no-ops.

Example:
    >>> store = EncounterStore()
    >>> encounter = store.create_encounter("Goblin Ambush", party_size=4, party_level=3)
    >>> goblin = store.add_combatant(Creature(name="Goblin", hp=7, ac=15, cr="1/4"))
    >>> store.damage(goblin.id, 3)
    >>> store.current_combatant.hp
    4
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from encounter_tracker.core.config import Settings, get_settings
from encounter_tracker.core.exceptions import EncounterNotFoundError, ValidationError
from encounter_tracker.core.logging import get_logger
from encounter_tracker.engine import health, initiative, turns
from encounter_tracker.engine.builder import refilter
from encounter_tracker.engine.dice import DiceRoller
from encounter_tracker.engine.difficulty import (
    DifficultySummary,
    adjusted_xp,
    calculate_difficulty,
    daily_xp_budget,
)
from encounter_tracker.engine.reminders import get_contextual_reminders
from encounter_tracker.engine.validation import ValidationResult, validate_field
from encounter_tracker.models.abilities import AbilityCatalog, CreatureAbility
from encounter_tracker.models.combatant import (
    Condition,
    Creature,
    MonsterCombatant,
    PlayerCombatant,
    create_combatant,
)
from encounter_tracker.models.encounter import (
    BuilderState,
    Encounter,
    SavedEncounter,
    TrackerState,
)
from encounter_tracker.models.enums import DifficultyLevel, HPStatus


logger = get_logger(__name__)

AnyCombatant = PlayerCombatant | MonsterCombatant

PROTECTED_FIELDS = frozenset({"id", "is_pc"})


class EncounterSummary(BaseModel):
    """Read-only overview of an encounter for display.

    ``adjusted_xp`` applies the group-size multiplier and is informational;
    the difficulty classification uses raw XP.
    """

    model_config = ConfigDict(frozen=True)

    encounter_id: UUID
    name: str
    round: int
    current_turn: int
    is_active: bool
    combatant_count: int
    pc_count: int
    monster_count: int
    difficulty: DifficultySummary
    xp_budget: int
    used_xp: int
    adjusted_xp: int
    remaining_budget: int
    daily_xp_budget: int


class EncounterStore:
    """Explicit state container for the tracker.

    Attributes:
        settings: Application settings in effect.
        catalog: Creature ability table used for reminders.
    """

    def __init__(
        self,
        state: TrackerState | None = None,
        *,
        settings: Settings | None = None,
        catalog: AbilityCatalog | None = None,
        roller: DiceRoller | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            state: Starting state; an empty tracker when omitted.
            settings: Settings; the cached application settings when omitted.
            catalog: Ability table; the configured or bundled one when omitted.
            roller: Dice roller for initiative.
        """
        self.settings = settings or get_settings()
        self.catalog = catalog or AbilityCatalog.from_settings(self.settings.game.abilities_path)
        self._roller = roller or DiceRoller()
        self._state = state if state is not None else TrackerState()
        logger.info(
            "EncounterStore initialized",
            encounters=len(self._state.encounters),
            active_encounter_id=str(self._state.active_encounter_id),
        )

    # =========================================================================
    # State Plumbing
    # =========================================================================

    @property
    def state(self) -> TrackerState:
        """Current tracker state."""
        return self._state

    def replace_state(self, state: TrackerState) -> None:
        """Swap in a whole new state, e.g. one loaded from storage."""
        self._state = state
        logger.info("Tracker state replaced", encounters=len(state.encounters))

    def _set(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)

    def _put_encounter(self, encounter: Encounter) -> None:
        encounters = [encounter if e.id == encounter.id else e for e in self._state.encounters]
        self._set(encounters=encounters)

    def _require_encounter(self, encounter_id: UUID) -> Encounter:
        encounter = self._state.get_encounter(encounter_id)
        if encounter is None:
            raise EncounterNotFoundError(
                "Encounter not found",
                encounter_id=str(encounter_id),
            )
        return encounter

    def _resolve(self, encounter_id: UUID | None) -> Encounter | None:
        if encounter_id is None:
            return self._state.active_encounter
        return self._state.get_encounter(encounter_id)

    def _update_active(
        self,
        change: Callable[[Encounter], Encounter],
        event: str,
    ) -> Encounter | None:
        encounter = self._state.active_encounter
        if encounter is None:
            logger.debug("No active encounter", action=event)
            return None
        updated = change(encounter)
        if updated is not encounter:
            self._put_encounter(updated)
            logger.info(
                event,
                encounter_id=str(updated.id),
                round=updated.round,
                current_turn=updated.current_turn,
            )
        return updated

    def _update_combatant(
        self,
        combatant_id: UUID,
        change: Callable[[AnyCombatant], AnyCombatant],
        event: str,
        **log_values: Any,
    ) -> AnyCombatant | None:
        encounter = self._state.active_encounter
        if encounter is None:
            logger.debug("No active encounter", action=event, combatant_id=str(combatant_id))
            return None
        combatant = encounter.get_combatant(combatant_id)
        if combatant is None:
            logger.debug("Combatant not found", action=event, combatant_id=str(combatant_id))
            return None
        updated = change(combatant)
        self._put_encounter(encounter.replace_combatant(updated))
        logger.info(
            event,
            encounter_id=str(encounter.id),
            combatant_id=str(combatant_id),
            hp=updated.hp,
            temp_hp=updated.temp_hp,
            **log_values,
        )
        return updated

    # =========================================================================
    # Encounter Management
    # =========================================================================

    def create_encounter(
        self,
        name: str = "New Encounter",
        *,
        party_size: int | None = None,
        party_level: int | None = None,
        difficulty: DifficultyLevel | str | None = None,
    ) -> Encounter:
        """Create an encounter and make it active.

        Party size, level and target difficulty default to the game settings.
        """
        game = self.settings.game
        encounter = Encounter(
            name=name,
            party_size=party_size if party_size is not None else game.default_party_size,
            party_level=party_level if party_level is not None else game.default_party_level,
            difficulty=difficulty or game.default_difficulty,
        )
        self._set(
            encounters=[*self._state.encounters, encounter],
            active_encounter_id=encounter.id,
            selected_combatant_id=None,
        )
        logger.info(
            "Encounter created",
            encounter_id=str(encounter.id),
            name=encounter.name,
            xp_budget=encounter.xp_budget,
        )
        return encounter

    def set_active_encounter(self, encounter_id: UUID | None) -> None:
        """Choose the encounter being run; None clears the choice.

        Raises:
            EncounterNotFoundError: If the id is unknown.
        """
        if encounter_id is not None:
            self._require_encounter(encounter_id)
        self._set(active_encounter_id=encounter_id, selected_combatant_id=None)
        logger.info("Active encounter set", encounter_id=str(encounter_id))

    def delete_encounter(self, encounter_id: UUID) -> None:
        """Delete an encounter; deleting the active one leaves none active."""
        if self._state.get_encounter(encounter_id) is None:
            logger.debug("Encounter not found", action="delete", encounter_id=str(encounter_id))
            return
        changes: dict[str, Any] = {
            "encounters": [e for e in self._state.encounters if e.id != encounter_id],
        }
        if self._state.active_encounter_id == encounter_id:
            changes["active_encounter_id"] = None
            changes["selected_combatant_id"] = None
        self._set(**changes)
        logger.info("Encounter deleted", encounter_id=str(encounter_id))

    def duplicate_encounter(self, encounter_id: UUID) -> Encounter:
        """Copy an encounter with fresh ids and reset turn state.

        The copy is added but does not become active.

        Raises:
            EncounterNotFoundError: If the id is unknown.
        """
        original = self._require_encounter(encounter_id)
        copy = Encounter(
            name=f"{original.name} (Copy)"[:100],
            notes=original.notes,
            combatants=[c.evolve(id=uuid4()) for c in original.combatants],
            party_size=original.party_size,
            party_level=original.party_level,
            difficulty=original.difficulty,
        )
        self._set(encounters=[*self._state.encounters, copy])
        logger.info(
            "Encounter duplicated",
            encounter_id=str(encounter_id),
            copy_id=str(copy.id),
        )
        return copy

    def rename_encounter(self, encounter_id: UUID, name: str) -> None:
        """Rename an encounter."""
        encounter = self._state.get_encounter(encounter_id)
        if encounter is None:
            logger.debug("Encounter not found", action="rename", encounter_id=str(encounter_id))
            return
        self._put_encounter(encounter.evolve(name=name))
        logger.info("Encounter renamed", encounter_id=str(encounter_id), name=name)

    def set_notes(self, encounter_id: UUID, notes: str) -> None:
        """Replace an encounter's DM notes."""
        encounter = self._state.get_encounter(encounter_id)
        if encounter is None:
            logger.debug("Encounter not found", action="notes", encounter_id=str(encounter_id))
            return
        self._put_encounter(encounter.evolve(notes=notes))
        logger.info("Encounter notes updated", encounter_id=str(encounter_id))

    def set_party(
        self,
        encounter_id: UUID,
        *,
        party_size: int | None = None,
        party_level: int | None = None,
        difficulty: DifficultyLevel | str | None = None,
    ) -> None:
        """Change the party an encounter is built for; the XP budget follows."""
        encounter = self._state.get_encounter(encounter_id)
        if encounter is None:
            logger.debug("Encounter not found", action="party", encounter_id=str(encounter_id))
            return
        changes: dict[str, Any] = {}
        if party_size is not None:
            changes["party_size"] = max(1, party_size)
        if party_level is not None:
            changes["party_level"] = max(1, min(20, party_level))
        if difficulty is not None:
            changes["difficulty"] = DifficultyLevel(difficulty)
        updated = encounter.evolve(**changes)
        self._put_encounter(updated)
        logger.info(
            "Encounter party updated",
            encounter_id=str(encounter_id),
            party_size=updated.party_size,
            party_level=updated.party_level,
            xp_budget=updated.xp_budget,
        )

    # =========================================================================
    # Combatants
    # =========================================================================

    def add_combatant(
        self,
        creature: Creature,
        is_pc: bool = False,
        level: int | None = None,
    ) -> AnyCombatant | None:
        """Add a combatant built from a creature record to the active encounter.

        Returns:
            The new combatant, or None when no encounter is active.
        """
        added = self.add_combatants([creature], is_pc=is_pc, level=level)
        return added[0] if added else None

    def add_combatants(
        self,
        creatures: Iterable[Creature],
        *,
        is_pc: bool = False,
        level: int | None = None,
    ) -> list[AnyCombatant]:
        """Add several combatants at once, in the given order."""
        encounter = self._state.active_encounter
        if encounter is None:
            logger.debug("No active encounter", action="add_combatants")
            return []
        new = [create_combatant(c, is_pc=is_pc, level=level) for c in creatures]
        updated = turns.add_combatants(encounter, new)
        self._put_encounter(updated)
        logger.info(
            "Combatants added",
            encounter_id=str(encounter.id),
            names=[c.name for c in new],
            used_xp=updated.used_xp,
        )
        return new

    def remove_combatant(self, combatant_id: UUID) -> None:
        """Remove a combatant from the active encounter."""
        updated = self._update_active(
            lambda e: turns.remove_combatant(e, combatant_id),
            "Combatant removed",
        )
        if updated is not None and self._state.selected_combatant_id == combatant_id:
            self._set(selected_combatant_id=None)

    def duplicate_combatant(self, combatant_id: UUID) -> AnyCombatant | None:
        """Append a copy of a combatant; returns the copy."""
        updated = self._update_active(
            lambda e: turns.duplicate_combatant(e, combatant_id),
            "Combatant duplicated",
        )
        if updated is None or updated.get_combatant(combatant_id) is None:
            return None
        return updated.combatants[-1]

    def update_combatant(self, combatant_id: UUID, **changes: Any) -> AnyCombatant | None:
        """Replace arbitrary fields of a combatant.

        ``id`` and ``is_pc`` cannot be changed. Hit points are clamped.

        Raises:
            ValidationError: If a value does not fit the field.
        """
        changes = {k: v for k, v in changes.items() if k not in PROTECTED_FIELDS}

        def change(combatant: AnyCombatant) -> AnyCombatant:
            try:
                return combatant.evolve(**changes)
            except PydanticValidationError as exc:
                first = exc.errors()[0]
                field_name = ".".join(str(part) for part in first["loc"]) or None
                raise ValidationError(
                    f"Invalid combatant update: {first['msg']}",
                    field_name=field_name,
                    invalid_value=first.get("input"),
                ) from exc

        return self._update_combatant(
            combatant_id, change, "Combatant updated", fields=sorted(changes)
        )

    def edit_field(self, combatant_id: UUID, field: str, raw: Any) -> ValidationResult:
        """Validate a raw value typed into a field and apply it if valid.

        Invalid input is rejected and the state is left unchanged.

        Args:
            combatant_id: Combatant being edited.
            field: One of ``hp``, ``ac``, ``initiative``, ``name``.
            raw: Raw user input.

        Returns:
            The validation result. A hit point edit reports the value stored
            after clamping to the maximum.
        """
        encounter = self._state.active_encounter
        combatant = encounter.get_combatant(combatant_id) if encounter else None
        if combatant is None:
            logger.debug("Combatant not found", action="edit_field", combatant_id=str(combatant_id))
            return ValidationResult.fail("Combatant not found")
        result = validate_field(field, raw, max_hp=combatant.max_hp)
        if not result.is_valid:
            logger.info(
                "Field edit rejected",
                combatant_id=str(combatant_id),
                field=field,
                error=result.error,
            )
            return result
        if field == "hp":
            updated = self._update_combatant(
                combatant_id,
                lambda c: health.set_hp(c, int(result.value)),
                "Hit points set",
            )
            return ValidationResult.ok(updated.hp)
        self._update_combatant(
            combatant_id,
            lambda c: c.evolve(**{field: result.value}),
            "Combatant field edited",
            field=field,
        )
        return result

    def select_combatant(self, combatant_id: UUID | None) -> None:
        """Mark a combatant of the active encounter as selected; None clears it."""
        if combatant_id is not None:
            encounter = self._state.active_encounter
            if encounter is None or encounter.get_combatant(combatant_id) is None:
                logger.debug("Combatant not found", action="select", combatant_id=str(combatant_id))
                return
        self._set(selected_combatant_id=combatant_id)
        logger.debug("Combatant selected", combatant_id=str(combatant_id))

    # =========================================================================
    # Initiative and Turns
    # =========================================================================

    def roll_initiative(self, combatant_id: UUID) -> int | None:
        """Roll and store initiative for one combatant; returns the result."""
        pc_bonus = self.settings.game.pc_initiative_bonus
        updated = self._update_combatant(
            combatant_id,
            lambda c: c.evolve(
                initiative=initiative.roll_initiative(c, roller=self._roller, pc_bonus=pc_bonus)
            ),
            "Initiative rolled",
        )
        return None if updated is None else updated.initiative

    def roll_all_initiative(self) -> None:
        """Roll initiative for everyone in the active encounter; order is kept."""
        pc_bonus = self.settings.game.pc_initiative_bonus
        self._update_active(
            lambda e: e.evolve(
                combatants=initiative.roll_all_initiative(
                    e.combatants, roller=self._roller, pc_bonus=pc_bonus
                )
            ),
            "All initiative rolled",
        )

    def set_initiative(self, combatant_id: UUID, value: int) -> None:
        """Set a combatant's initiative directly; order is kept."""
        self._update_combatant(
            combatant_id,
            lambda c: c.evolve(initiative=value),
            "Initiative set",
            initiative=value,
        )

    def sort_by_initiative(self) -> None:
        """Put the active encounter in initiative order and reset to the first turn."""
        self._update_active(
            lambda e: e.evolve(
                combatants=initiative.sort_by_initiative(e.combatants),
                current_turn=0,
            ),
            "Combatants sorted by initiative",
        )

    def start_combat(self) -> None:
        """Start combat in the active encounter."""
        self._update_active(turns.start_combat, "Combat started")

    def end_combat(self) -> None:
        """End combat in the active encounter."""
        self._update_active(turns.end_combat, "Combat ended")

    def next_turn(self) -> None:
        """Advance the active encounter to the next turn."""
        self._update_active(turns.next_turn, "Turn advanced")

    def previous_turn(self) -> None:
        """Step the active encounter back one turn."""
        self._update_active(turns.previous_turn, "Turn reverted")

    def next_round(self) -> None:
        """Jump the active encounter to the next round."""
        self._update_active(turns.next_round, "Round advanced")

    def go_to_turn(self, index: int) -> None:
        """Jump to a turn index; out-of-range indexes are ignored."""
        self._update_active(lambda e: turns.go_to_turn(e, index), "Turn selected")

    def reset_encounter(self) -> None:
        """Reset the active encounter to its pre-combat state."""
        self._update_active(turns.reset_encounter, "Encounter reset")

    # =========================================================================
    # Health and Conditions
    # =========================================================================

    def damage(self, combatant_id: UUID, amount: int) -> None:
        """Damage a combatant, spending temporary hit points first."""
        self._update_combatant(
            combatant_id, lambda c: health.damage(c, amount), "Combatant damaged", amount=amount
        )

    def heal(self, combatant_id: UUID, amount: int) -> None:
        """Heal a combatant up to maximum hit points."""
        self._update_combatant(
            combatant_id, lambda c: health.heal(c, amount), "Combatant healed", amount=amount
        )

    def set_hp(self, combatant_id: UUID, hp: int) -> None:
        """Set current hit points, clamped."""
        self._update_combatant(combatant_id, lambda c: health.set_hp(c, hp), "Hit points set")

    def set_max_hp(self, combatant_id: UUID, max_hp: int) -> None:
        """Set maximum hit points."""
        self._update_combatant(
            combatant_id,
            lambda c: health.set_max_hp(c, max_hp),
            "Maximum hit points set",
            max_hp=max_hp,
        )

    def set_temp_hp(self, combatant_id: UUID, temp_hp: int) -> None:
        """Set temporary hit points."""
        self._update_combatant(
            combatant_id, lambda c: health.set_temp_hp(c, temp_hp), "Temporary hit points set"
        )

    def add_condition(
        self,
        combatant_id: UUID,
        condition: Condition | str,
        duration: int | None = None,
    ) -> None:
        """Apply a condition, given as a Condition or a name."""
        if isinstance(condition, str):
            condition = Condition(name=condition, duration=duration)
        self._update_combatant(
            combatant_id,
            lambda c: health.add_condition(c, condition),
            "Condition added",
            condition=condition.name,
        )

    def remove_condition(self, combatant_id: UUID, name_or_index: str | int) -> None:
        """Remove a condition by name (first match) or position."""
        self._update_combatant(
            combatant_id,
            lambda c: health.remove_condition(c, name_or_index),
            "Condition removed",
            condition=name_or_index,
        )

    def update_condition_duration(
        self,
        combatant_id: UUID,
        name_or_index: str | int,
        duration: int | None,
    ) -> None:
        """Change the remaining rounds of a condition."""
        self._update_combatant(
            combatant_id,
            lambda c: health.update_condition_duration(c, name_or_index, duration),
            "Condition duration updated",
            condition=name_or_index,
            duration=duration,
        )

    def tick_conditions(self, combatant_id: UUID | None = None) -> None:
        """Count condition durations down one round.

        Applies to one combatant, or to everyone in the active encounter when
        no id is given. Nothing calls this automatically on turn changes.
        """
        if combatant_id is not None:
            self._update_combatant(
                combatant_id, health.tick_condition_durations, "Conditions ticked"
            )
            return
        self._update_active(
            lambda e: e.evolve(
                combatants=[health.tick_condition_durations(c) for c in e.combatants]
            ),
            "Conditions ticked",
        )

    # =========================================================================
    # Encounter Builder
    # =========================================================================

    def _update_builder(self, event: str, **changes: Any) -> BuilderState:
        builder = refilter(self._state.builder.model_copy(update=changes))
        self._set(builder=builder)
        logger.debug(event, matches=len(builder.filtered_creatures), **changes)
        return builder

    def set_search_term(self, term: str) -> None:
        """Filter builder creatures by name."""
        self._update_builder("Builder search updated", search_term=term)

    def set_cr_filter(self, cr: str) -> None:
        """Filter builder creatures by challenge rating."""
        self._update_builder("Builder CR filter updated", cr_filter=cr)

    def set_type_filter(self, creature_type: str) -> None:
        """Filter builder creatures by type."""
        self._update_builder("Builder type filter updated", type_filter=creature_type)

    def set_environment_filter(self, environment: str) -> None:
        """Filter builder creatures by environment."""
        self._update_builder("Builder environment filter updated", environment_filter=environment)

    def set_creatures(self, creatures: Iterable[Creature]) -> None:
        """Replace the builder's creature list."""
        builder = refilter(self._state.builder.model_copy(update={"creatures": list(creatures)}))
        self._set(builder=builder)
        logger.info("Builder creatures loaded", creatures=len(builder.creatures))

    # =========================================================================
    # Selectors
    # =========================================================================

    @property
    def active_encounter(self) -> Encounter | None:
        """The encounter being run."""
        return self._state.active_encounter

    @property
    def current_combatant(self) -> AnyCombatant | None:
        """The combatant whose turn it is in the active encounter."""
        encounter = self._state.active_encounter
        return None if encounter is None else encounter.current_combatant

    def calculate_difficulty(self, encounter_id: UUID | None = None) -> DifficultySummary | None:
        """Difficulty of an encounter (the active one by default)."""
        encounter = self._resolve(encounter_id)
        return None if encounter is None else calculate_difficulty(encounter)

    def encounter_summary(self, encounter_id: UUID | None = None) -> EncounterSummary | None:
        """Overview of an encounter (the active one by default)."""
        encounter = self._resolve(encounter_id)
        if encounter is None:
            return None
        monsters = [c for c in encounter.combatants if isinstance(c, MonsterCombatant)]
        return EncounterSummary(
            encounter_id=encounter.id,
            name=encounter.name,
            round=encounter.round,
            current_turn=encounter.current_turn,
            is_active=encounter.is_active,
            combatant_count=len(encounter.combatants),
            pc_count=len(encounter.combatants) - len(monsters),
            monster_count=len(monsters),
            difficulty=calculate_difficulty(encounter),
            xp_budget=encounter.xp_budget,
            used_xp=encounter.used_xp,
            adjusted_xp=adjusted_xp([m.xp for m in monsters]),
            remaining_budget=encounter.xp_budget - encounter.used_xp,
            daily_xp_budget=daily_xp_budget(encounter.party_size, encounter.party_level),
        )

    def hp_status(self, combatant_id: UUID) -> HPStatus | None:
        """HP status bucket of a combatant in the active encounter."""
        encounter = self._state.active_encounter
        combatant = encounter.get_combatant(combatant_id) if encounter else None
        return None if combatant is None else health.hp_status(combatant)

    def reminders_for(self, combatant_id: UUID) -> list[CreatureAbility]:
        """Ability reminders for a combatant at the current turn."""
        encounter = self._state.active_encounter
        combatant = encounter.get_combatant(combatant_id) if encounter else None
        if encounter is None or combatant is None:
            return []
        return get_contextual_reminders(
            combatant,
            encounter.current_turn,
            list(encounter.combatants),
            self.catalog,
            limit=self.settings.game.reminder_limit,
        )

    # =========================================================================
    # Snapshots
    # =========================================================================

    def snapshot(
        self,
        encounter_id: UUID | None = None,
        *,
        name: str | None = None,
    ) -> SavedEncounter | None:
        """Snapshot an encounter (the active one by default)."""
        encounter = self._resolve(encounter_id)
        if encounter is None:
            return None
        saved = SavedEncounter.from_encounter(encounter, name=name)
        logger.info(
            "Encounter snapshot taken",
            encounter_id=str(encounter.id),
            saved_id=str(saved.id),
        )
        return saved

    def load_snapshot(self, saved: SavedEncounter) -> Encounter:
        """Add an encounter built from a snapshot and make it active.

        Combatants get fresh ids so loading the same snapshot twice never
        produces clashing ids.
        """
        encounter = saved.to_encounter()
        combatants = [c.evolve(id=uuid4()) for c in encounter.combatants]
        encounter = encounter.evolve(combatants=combatants)
        self._set(
            encounters=[*self._state.encounters, encounter],
            active_encounter_id=encounter.id,
            selected_combatant_id=None,
        )
        logger.info(
            "Encounter snapshot loaded",
            saved_id=str(saved.id),
            encounter_id=str(encounter.id),
        )
        return encounter


__all__ = [
    "EncounterStore",
    "EncounterSummary",
]
