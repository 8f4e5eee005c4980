"""Creature ability templates and the catalog that serves them.

The catalog is advisory data for the reminder annotator. It is read from a
JSON file, either the table bundled with the package or one named by the
``abilities_path`` setting.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from encounter_tracker.core.exceptions import ConfigurationError
from encounter_tracker.core.logging import get_logger
from encounter_tracker.models.enums import AbilityPriority, AbilityType


logger = get_logger(__name__)

BUNDLED_ABILITIES = "creature_abilities.json"


class CreatureAbility(BaseModel):
    """A single reminder-worthy ability.

    Attributes:
        type: When the ability matters.
        name: Ability name.
        description: Short rules text.
        priority: Reminder priority.
        timing: Free-text timing hint, e.g. "initiative 20".
        count: Uses per round, for legendary actions.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: AbilityType
    name: str = Field(min_length=1)
    description: str = ""
    priority: AbilityPriority = AbilityPriority.MEDIUM
    timing: str | None = None
    count: int | None = Field(default=None, ge=0)


class CreatureTemplate(BaseModel):
    """Abilities listed for one creature name."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    cr: str = "0"
    abilities: tuple[CreatureAbility, ...] = ()

    def abilities_of(self, *types: AbilityType) -> list[CreatureAbility]:
        """Abilities whose type is one of ``types``."""
        return [a for a in self.abilities if a.type in types]


class AbilityCatalog(Mapping[str, CreatureTemplate]):
    """Read-only mapping of creature name to template.

    Lookups are exact on the name. Creatures without a template simply
    have no reminders.

    Example:
        >>> catalog = AbilityCatalog.default()
        >>> catalog["Troll"].abilities[0].name
        'Regeneration'
    """

    def __init__(self, templates: list[CreatureTemplate] | None = None) -> None:
        self._templates: dict[str, CreatureTemplate] = {t.name: t for t in templates or []}

    def __getitem__(self, name: str) -> CreatureTemplate:
        return self._templates[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    @classmethod
    def from_data(cls, data: Any, *, source: str = "<data>") -> "AbilityCatalog":
        """Build a catalog from decoded JSON.

        Accepts either ``{"creatures": [...]}`` or a bare list of templates.

        Raises:
            ConfigurationError: If the data does not describe templates.
        """
        entries = data.get("creatures") if isinstance(data, dict) else data
        if not isinstance(entries, list):
            raise ConfigurationError(
                "Creature ability table must contain a list of creatures",
                config_key="abilities_path",
                details={"source": source},
            )
        try:
            templates = [CreatureTemplate.model_validate(entry) for entry in entries]
        except PydanticValidationError as exc:
            raise ConfigurationError(
                f"Invalid creature ability table: {exc.error_count()} errors",
                config_key="abilities_path",
                details={"source": source},
            ) from exc
        return cls(templates)

    @classmethod
    def from_file(cls, path: Path) -> "AbilityCatalog":
        """Load a catalog from a JSON file.

        Raises:
            ConfigurationError: If the file is unreadable or malformed.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(
                f"Unable to read creature ability table: {path}",
                config_key="abilities_path",
            ) from exc
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                f"Invalid JSON in creature ability table {path}: {exc}",
                config_key="abilities_path",
            ) from exc
        catalog = cls.from_data(data, source=str(path))
        logger.info("Creature abilities loaded", path=str(path), creatures=len(catalog))
        return catalog

    @classmethod
    def default(cls) -> "AbilityCatalog":
        """The table bundled with the package."""
        return _bundled_catalog()

    @classmethod
    def from_settings(cls, abilities_path: Path | None) -> "AbilityCatalog":
        """The configured table, or the bundled one when no path is set."""
        if abilities_path is None:
            return cls.default()
        return cls.from_file(abilities_path)


@lru_cache(maxsize=1)
def _bundled_catalog() -> AbilityCatalog:
    resource = resources.files("encounter_tracker.data").joinpath(BUNDLED_ABILITIES)
    data = json.loads(resource.read_text(encoding="utf-8"))
    return AbilityCatalog.from_data(data, source=BUNDLED_ABILITIES)


__all__ = [
    "AbilityCatalog",
    "CreatureAbility",
    "CreatureTemplate",
]
