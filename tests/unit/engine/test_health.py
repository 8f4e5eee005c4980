"""Tests for hit point and condition mutators."""

from __future__ import annotations

import pytest

from encounter_tracker.engine import health
from encounter_tracker.models import Condition, HPStatus, MonsterCombatant


@pytest.fixture
def ogre() -> MonsterCombatant:
    """A combatant with 10 of 10 hit points and 5 temporary."""
    return MonsterCombatant(name="Ogre", hp=10, max_hp=10, temp_hp=5)


class TestDamage:
    """Tests for applying damage."""

    def test_temp_hp_absorbs_first(self, ogre: MonsterCombatant) -> None:
        """Test temporary hit points are spent before hit points."""
        hurt = health.damage(ogre, 8)

        assert hurt.temp_hp == 0
        assert hurt.hp == 7

    def test_temp_hp_partially_spent(self, ogre: MonsterCombatant) -> None:
        """Test damage below the temp pool leaves hit points alone."""
        hurt = health.damage(ogre, 3)

        assert hurt.temp_hp == 2
        assert hurt.hp == 10

    def test_floor_at_zero(self, ogre: MonsterCombatant) -> None:
        """Test hit points never go negative."""
        hurt = health.damage(ogre, 100)

        assert hurt.hp == 0
        assert hurt.temp_hp == 0

    def test_negative_amount_is_zero(self, ogre: MonsterCombatant) -> None:
        """Test negative damage does nothing."""
        assert health.damage(ogre, -5) == ogre

    def test_original_unchanged(self, ogre: MonsterCombatant) -> None:
        """Test the input combatant is not modified."""
        health.damage(ogre, 8)

        assert ogre.hp == 10
        assert ogre.temp_hp == 5


class TestHealing:
    """Tests for healing and direct hit point changes."""

    def test_heal_caps_at_max(self, ogre: MonsterCombatant) -> None:
        """Test healing never exceeds max hit points."""
        healed = health.heal(health.set_hp(ogre, 4), 20)

        assert healed.hp == 10
        assert healed.temp_hp == 5

    def test_heal_negative_is_zero(self, ogre: MonsterCombatant) -> None:
        """Test negative healing does nothing."""
        assert health.heal(health.set_hp(ogre, 4), -3).hp == 4

    @pytest.mark.parametrize(("value", "expected"), [(-4, 0), (0, 0), (6, 6), (25, 10)])
    def test_set_hp_clamps(self, ogre: MonsterCombatant, value: int, expected: int) -> None:
        """Test set_hp clamps to [0, max_hp]."""
        assert health.set_hp(ogre, value).hp == expected

    def test_set_max_hp_lowers_hp(self, ogre: MonsterCombatant) -> None:
        """Test lowering max hit points lowers current hit points."""
        updated = health.set_max_hp(ogre, 6)

        assert updated.max_hp == 6
        assert updated.hp == 6

    def test_set_max_hp_raises_without_healing(self, ogre: MonsterCombatant) -> None:
        """Test raising max hit points leaves current hit points."""
        updated = health.set_max_hp(ogre, 30)

        assert updated.max_hp == 30
        assert updated.hp == 10

    def test_set_temp_hp_replaces(self, ogre: MonsterCombatant) -> None:
        """Test temporary hit points replace rather than stack."""
        assert health.set_temp_hp(ogre, 3).temp_hp == 3
        assert health.set_temp_hp(ogre, -1).temp_hp == 0


class TestHpStatus:
    """Tests for hit point status buckets."""

    @pytest.mark.parametrize(
        ("hp", "status"),
        [
            (100, HPStatus.HEALTHY),
            (75, HPStatus.HEALTHY),
            (74, HPStatus.WOUNDED),
            (50, HPStatus.WOUNDED),
            (49, HPStatus.BLOODIED),
            (25, HPStatus.BLOODIED),
            (24, HPStatus.CRITICAL),
            (1, HPStatus.CRITICAL),
            (0, HPStatus.UNCONSCIOUS),
        ],
    )
    def test_buckets(self, hp: int, status: HPStatus) -> None:
        """Test the percentage buckets."""
        combatant = MonsterCombatant(name="Dummy", hp=hp, max_hp=100)

        assert health.hp_status(combatant) == status

    def test_zero_max_hp(self) -> None:
        """Test a combatant with no maximum hit points."""
        combatant = MonsterCombatant(name="Swarm", hp=0, max_hp=0)

        assert health.hp_percentage(combatant) == 0.0
        assert health.hp_status(combatant) == HPStatus.UNCONSCIOUS


class TestConditions:
    """Tests for condition mutators."""

    def test_add_remove_round_trip(self, ogre: MonsterCombatant) -> None:
        """Test adding then removing a condition restores the list."""
        before = health.add_condition(ogre, Condition(name="Prone"))

        after = health.remove_condition(
            health.add_condition(before, Condition(name="Poisoned", duration=3)),
            "Poisoned",
        )

        assert after.conditions == before.conditions

    def test_duplicates_allowed(self, ogre: MonsterCombatant) -> None:
        """Test the same condition can be applied twice."""
        twice = health.add_condition(
            health.add_condition(ogre, Condition(name="Hexed")), Condition(name="Hexed")
        )

        assert [c.name for c in twice.conditions] == ["Hexed", "Hexed"]

    def test_remove_by_name_first_match(self, ogre: MonsterCombatant) -> None:
        """Test removal by name drops only the first match."""
        combatant = ogre.evolve(
            conditions=[
                Condition(name="Hexed", duration=1),
                Condition(name="Prone"),
                Condition(name="Hexed", duration=5),
            ]
        )

        updated = health.remove_condition(combatant, "Hexed")

        assert updated.conditions == [Condition(name="Prone"), Condition(name="Hexed", duration=5)]

    def test_remove_by_index(self, ogre: MonsterCombatant) -> None:
        """Test removal by position."""
        combatant = ogre.evolve(conditions=[Condition(name="Prone"), Condition(name="Blinded")])

        assert health.remove_condition(combatant, 1).conditions == [Condition(name="Prone")]

    @pytest.mark.parametrize("key", ["Stunned", 5, -1])
    def test_remove_unknown_is_noop(self, ogre: MonsterCombatant, key: str | int) -> None:
        """Test unknown names and positions leave conditions alone."""
        combatant = ogre.evolve(conditions=[Condition(name="Prone")])

        assert health.remove_condition(combatant, key) is combatant

    def test_update_duration(self, ogre: MonsterCombatant) -> None:
        """Test changing and clearing a duration."""
        combatant = ogre.evolve(conditions=[Condition(name="Frightened", duration=2)])

        longer = health.update_condition_duration(combatant, "Frightened", 5)
        open_ended = health.update_condition_duration(combatant, 0, None)
        negative = health.update_condition_duration(combatant, 0, -3)

        assert longer.conditions[0].duration == 5
        assert open_ended.conditions[0].duration is None
        assert negative.conditions[0].duration == 0

    def test_tick_durations(self, ogre: MonsterCombatant) -> None:
        """Test ticking counts down, drops expired and keeps open-ended."""
        combatant = ogre.evolve(
            conditions=[
                Condition(name="Blessed", duration=3),
                Condition(name="Stunned", duration=1),
                Condition(name="Cursed"),
                Condition(name="Dazed", duration=0),
            ]
        )

        ticked = health.tick_condition_durations(combatant)

        assert ticked.conditions == [
            Condition(name="Blessed", duration=2),
            Condition(name="Cursed"),
        ]
