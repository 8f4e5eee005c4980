"""Tests for encounter builder filtering."""

from __future__ import annotations

from encounter_tracker.engine.builder import filter_creatures, refilter
from encounter_tracker.models import BuilderState, Creature


class TestFilterCreatures:
    """Tests for filter_creatures."""

    def test_no_filters(self, sample_creatures: list[Creature]) -> None:
        """Test everything matches with default filters."""
        assert filter_creatures(sample_creatures) == sample_creatures

    def test_search_ignores_case(self, sample_creatures: list[Creature]) -> None:
        """Test name search is a case-insensitive substring match."""
        names = [c.name for c in filter_creatures(sample_creatures, search_term="  O ")]

        assert names == ["Goblin", "Orc", "Troll"]

    def test_cr_filter(self, sample_creatures: list[Creature]) -> None:
        """Test challenge rating must match exactly."""
        names = [c.name for c in filter_creatures(sample_creatures, cr_filter="1/2")]

        assert names == ["Orc"]

    def test_type_and_environment(self, sample_creatures: list[Creature]) -> None:
        """Test type and environment filters combine."""
        matches = filter_creatures(
            sample_creatures, type_filter="Humanoid", environment_filter="FOREST"
        )

        assert [c.name for c in matches] == ["Goblin"]

    def test_all_and_empty_disable(self, sample_creatures: list[Creature]) -> None:
        """Test "all" and empty strings disable a filter."""
        matches = filter_creatures(
            sample_creatures, cr_filter="", type_filter="ALL", environment_filter="all"
        )

        assert len(matches) == len(sample_creatures)

    def test_no_matches(self, sample_creatures: list[Creature]) -> None:
        """Test a filter that excludes everything."""
        assert filter_creatures(sample_creatures, search_term="beholder") == []


class TestRefilter:
    """Tests for recomputing the builder's filtered list."""

    def test_refilter(self, sample_creatures: list[Creature]) -> None:
        """Test the filtered list follows the builder filters."""
        builder = BuilderState(creatures=sample_creatures, type_filter="undead")

        updated = refilter(builder)

        assert [c.name for c in updated.filtered_creatures] == ["Lich"]
        assert builder.filtered_creatures == []
