"""Tests for creature ability templates and the catalog."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from encounter_tracker.core.exceptions import ConfigurationError
from encounter_tracker.models import (
    AbilityCatalog,
    AbilityPriority,
    AbilityType,
    CreatureTemplate,
)


class TestBundledCatalog:
    """Tests for the catalog shipped with the package."""

    def test_known_creatures(self, catalog: AbilityCatalog) -> None:
        """Test the bundled creatures are present."""
        assert len(catalog) == 10
        for name in ("Ancient Red Dragon", "Goblin", "Lich", "Troll", "Annis Hag"):
            assert name in catalog

    def test_exact_name_lookup(self, catalog: AbilityCatalog) -> None:
        """Test lookups do not ignore case."""
        assert catalog.get("troll") is None
        assert catalog["Troll"].abilities[0].name == "Regeneration"

    def test_default_is_cached(self) -> None:
        """Test the bundled catalog is loaded once."""
        assert AbilityCatalog.default() is AbilityCatalog.default()

    def test_legendary_count(self, catalog: AbilityCatalog) -> None:
        """Test legendary actions carry a use count."""
        legendary = catalog["Lich"].abilities_of(AbilityType.LEGENDARY_ACTIONS)

        assert legendary[0].count == 3
        assert legendary[0].priority == AbilityPriority.CRITICAL

    def test_lair_timing(self, catalog: AbilityCatalog) -> None:
        """Test lair actions carry a timing hint."""
        lair = catalog["Ancient Red Dragon"].abilities_of(AbilityType.LAIR_ACTIONS)

        assert lair[0].timing == "initiative 20"


class TestCatalogLoading:
    """Tests for loading catalogs from data and files."""

    def test_from_list(self) -> None:
        """Test a bare list of templates is accepted."""
        catalog = AbilityCatalog.from_data(
            [{"name": "Imp", "abilities": [{"type": "resistance", "name": "Devil's Sight"}]}]
        )

        template = catalog["Imp"]
        assert isinstance(template, CreatureTemplate)
        assert template.abilities[0].priority == AbilityPriority.MEDIUM

    def test_from_file(self, tmp_path: Path) -> None:
        """Test loading a JSON file."""
        path = tmp_path / "abilities.json"
        path.write_text(json.dumps({"creatures": [{"name": "Imp"}]}), encoding="utf-8")

        assert list(AbilityCatalog.from_file(path)) == ["Imp"]

    def test_from_settings(self, tmp_path: Path) -> None:
        """Test a configured path wins over the bundled table."""
        path = tmp_path / "abilities.json"
        path.write_text("[]", encoding="utf-8")

        assert len(AbilityCatalog.from_settings(path)) == 0
        assert len(AbilityCatalog.from_settings(None)) == 10

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test an unreadable file raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Unable to read"):
            AbilityCatalog.from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test malformed JSON raises ConfigurationError."""
        path = tmp_path / "abilities.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            AbilityCatalog.from_file(path)

    @pytest.mark.parametrize(
        "data",
        [
            {"creatures": "nope"},
            {"monsters": []},
            [{"name": "Imp", "abilities": [{"type": "sneeze", "name": "Achoo"}]}],
        ],
    )
    def test_invalid_data(self, data: object) -> None:
        """Test data that does not describe templates."""
        with pytest.raises(ConfigurationError):
            AbilityCatalog.from_data(data)
