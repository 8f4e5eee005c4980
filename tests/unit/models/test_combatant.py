"""Tests for combatant and creature models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from encounter_tracker.models import (
    Condition,
    Creature,
    MonsterCombatant,
    PlayerCombatant,
    challenge_rating_value,
    create_combatant,
    parse_combatant,
)


class TestCondition:
    """Tests for Condition."""

    def test_open_ended(self) -> None:
        """Test a condition without a duration."""
        assert Condition(name="Hexed").duration is None

    @pytest.mark.parametrize("data", [{"name": ""}, {"name": "Prone", "duration": -1},
                                      {"name": "x" * 51}])
    def test_invalid(self, data: dict) -> None:
        """Test empty names, long names and negative durations are rejected."""
        with pytest.raises(ValidationError):
            Condition(**data)

    def test_frozen(self) -> None:
        """Test conditions are immutable."""
        condition = Condition(name="Prone")

        with pytest.raises(ValidationError):
            condition.name = "Stunned"  # type: ignore[misc]


class TestCombatantHitPoints:
    """Tests for the hit point invariant."""

    def test_hp_defaults_to_max(self) -> None:
        """Test omitted hp starts at max."""
        assert MonsterCombatant(name="Orc", max_hp=15).hp == 15

    def test_max_defaults_to_hp(self) -> None:
        """Test omitted max_hp is taken from hp."""
        assert MonsterCombatant(name="Orc", hp=15).max_hp == 15

    @pytest.mark.parametrize(("hp", "expected"), [(-5, 0), (20, 10), (7, 7)])
    def test_hp_clamped(self, hp: int, expected: int) -> None:
        """Test hp is clamped into [0, max_hp]."""
        assert MonsterCombatant(name="Orc", hp=hp, max_hp=10).hp == expected

    def test_negative_temp_and_max(self) -> None:
        """Test negative max and temp hit points become 0."""
        combatant = MonsterCombatant(name="Orc", hp=5, max_hp=-3, temp_hp=-2)

        assert (combatant.hp, combatant.max_hp, combatant.temp_hp) == (0, 0, 0)

    def test_evolve_revalidates(self, goblin: MonsterCombatant) -> None:
        """Test evolve returns a clamped copy and leaves the original."""
        updated = goblin.evolve(hp=100)

        assert updated.hp == goblin.max_hp
        assert updated.id == goblin.id
        assert isinstance(updated, MonsterCombatant)

    @pytest.mark.parametrize("field", ["hp", "max_hp", "temp_hp"])
    def test_evolve_rejects_missing_hit_points(
        self, goblin: MonsterCombatant, field: str
    ) -> None:
        """Test a None hit point value fails validation instead of clamping."""
        with pytest.raises(ValidationError):
            goblin.evolve(**{field: None})

    def test_numeric_strings_are_clamped(self) -> None:
        """Test numeric strings are coerced before clamping."""
        combatant = MonsterCombatant(name="Orc", hp="20", max_hp="15")

        assert (combatant.hp, combatant.max_hp) == (15, 15)

    def test_evolve_rejects_unknown_fields(self, goblin: MonsterCombatant) -> None:
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            goblin.evolve(speed="30 ft")


class TestVariants:
    """Tests for the player character and monster variants."""

    def test_pc_fields(self, fighter: PlayerCombatant) -> None:
        """Test player characters carry a level and no XP."""
        assert fighter.is_pc is True
        assert fighter.level == 3
        assert not hasattr(fighter, "xp")

    def test_pc_rejects_monster_fields(self) -> None:
        """Test monster-only fields cannot be set on a player character."""
        with pytest.raises(ValidationError):
            PlayerCombatant(name="Bard", hp=10, cr="1")

    @pytest.mark.parametrize("level", [0, 21])
    def test_pc_level_range(self, level: int) -> None:
        """Test levels outside 1-20 are rejected."""
        with pytest.raises(ValidationError):
            PlayerCombatant(name="Bard", hp=10, level=level)

    def test_monster_defaults(self) -> None:
        """Test monster defaults."""
        monster = MonsterCombatant(name="Rat", hp=1)

        assert monster.is_pc is False
        assert monster.cr == "0"
        assert monster.creature_type == "humanoid"
        assert monster.environment == "any"
        assert monster.dexterity is None

    @pytest.mark.parametrize("cr", ["1/3", "abc", "-1", ""])
    def test_invalid_cr(self, cr: str) -> None:
        """Test malformed challenge ratings are rejected."""
        with pytest.raises(ValidationError):
            MonsterCombatant(name="Rat", hp=1, cr=cr)

    def test_parse_combatant_picks_variant(self, fighter: PlayerCombatant,
                                           goblin: MonsterCombatant) -> None:
        """Test raw data is validated into the variant named by is_pc."""
        assert isinstance(parse_combatant(fighter.model_dump(mode="json")), PlayerCombatant)
        assert isinstance(parse_combatant(goblin.model_dump(mode="json")), MonsterCombatant)
        assert isinstance(parse_combatant({"name": "Bandit", "hp": 11}), MonsterCombatant)

    def test_parse_combatant_round_trip(self, goblin: MonsterCombatant) -> None:
        """Test a dumped combatant parses back equal."""
        goblin = goblin.evolve(conditions=[Condition(name="Prone", duration=1)])

        assert parse_combatant(goblin.model_dump(mode="json")) == goblin


class TestChallengeRating:
    """Tests for challenge rating conversion."""

    @pytest.mark.parametrize(
        ("cr", "value"),
        [("1/8", 0.125), ("1/4", 0.25), ("1/2", 0.5), ("0", 0.0), ("17", 17.0), ("x", 0.0)],
    )
    def test_value(self, cr: str, value: float) -> None:
        """Test CR strings convert to numbers."""
        assert challenge_rating_value(cr) == value


class TestCreature:
    """Tests for creature records and combatant creation."""

    def test_effective_xp_from_cr(self) -> None:
        """Test XP falls back to the CR table."""
        creature = Creature(name="Troll", hp=84, cr="5")

        assert creature.effective_xp == 1800
        assert creature.cr_value == 5.0

    def test_explicit_xp_wins(self) -> None:
        """Test an explicit XP value is used as given."""
        assert Creature(name="Troll", hp=84, cr="5", xp=2000).effective_xp == 2000

    def test_extra_fields_ignored(self) -> None:
        """Test unknown bestiary fields are ignored."""
        creature = Creature.model_validate({"name": "Imp", "hp": 10, "alignment": "LE"})

        assert creature.name == "Imp"

    def test_create_monster(self, sample_creatures: list[Creature]) -> None:
        """Test a monster combatant copies the record."""
        troll = create_combatant(sample_creatures[2])

        assert isinstance(troll, MonsterCombatant)
        assert troll.name == "Troll"
        assert troll.hp == troll.max_hp == 84
        assert troll.xp == 1800
        assert troll.cr_value == 5.0
        assert troll.creature_type == "giant"
        assert troll.dexterity == 13
        assert troll.initiative == 0
        assert troll.conditions == []

    def test_create_pc(self) -> None:
        """Test a player character is built with a level."""
        pc = create_combatant(Creature(name="Rogue", hp=21, ac=15), is_pc=True, level=4)

        assert isinstance(pc, PlayerCombatant)
        assert pc.level == 4
        assert pc.ac == 15

    def test_create_gives_fresh_ids(self) -> None:
        """Test each creation gets a new id."""
        creature = Creature(name="Goblin", hp=7, cr="1/4")

        assert create_combatant(creature).id != create_combatant(creature).id

    def test_max_hp_from_record(self) -> None:
        """Test a wounded record keeps its maximum."""
        combatant = create_combatant(Creature(name="Ogre", hp=30, max_hp=59, cr="2"))

        assert (combatant.hp, combatant.max_hp) == (30, 59)

    def test_ids_are_unique_by_default(self) -> None:
        """Test default ids differ."""
        ids = {MonsterCombatant(name="Rat", hp=1).id for _ in range(5)}

        assert len(ids) == 5
