"""Validation of raw values typed into editable combatant fields.

Validators never raise. They return a ValidationResult holding either the
parsed value or a message suitable for showing next to the field.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from encounter_tracker.core.constants import (
    MAX_AC,
    MAX_HP_VALUE,
    MAX_INITIATIVE,
    MAX_NAME_LENGTH,
    MIN_AC,
    MIN_INITIATIVE,
)


class ValidationResult(BaseModel):
    """Outcome of validating one raw field value.

    Attributes:
        is_valid: Whether the value was accepted.
        value: Parsed value when valid.
        error: Message when invalid.
    """

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    value: int | str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, value: int | str) -> "ValidationResult":
        return cls(is_valid=True, value=value)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error)


def parse_int(raw: Any) -> int | None:
    """Parse an integer from user input; None if it is not one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def validate_hp(raw: Any, max_hp: int | None = None) -> ValidationResult:
    """Hit points: an integer from 0 to 999, at most twice ``max_hp`` when given."""
    hp = parse_int(raw)
    if hp is None:
        return ValidationResult.fail("HP must be a number")
    if hp < 0:
        return ValidationResult.fail("HP cannot be negative")
    if hp > MAX_HP_VALUE:
        return ValidationResult.fail(f"HP cannot exceed {MAX_HP_VALUE}")
    if max_hp and hp > max_hp * 2:
        return ValidationResult.fail("HP too high for this creature")
    return ValidationResult.ok(hp)


def validate_ac(raw: Any) -> ValidationResult:
    """Armor class: an integer from 1 to 30."""
    ac = parse_int(raw)
    if ac is None:
        return ValidationResult.fail("AC must be a number")
    if not MIN_AC <= ac <= MAX_AC:
        return ValidationResult.fail(f"AC must be between {MIN_AC} and {MAX_AC}")
    return ValidationResult.ok(ac)


def validate_initiative(raw: Any) -> ValidationResult:
    """Initiative: an integer from -10 to 50."""
    initiative = parse_int(raw)
    if initiative is None:
        return ValidationResult.fail("Initiative must be a number")
    if not MIN_INITIATIVE <= initiative <= MAX_INITIATIVE:
        return ValidationResult.fail(
            f"Initiative must be between {MIN_INITIATIVE} and {MAX_INITIATIVE}"
        )
    return ValidationResult.ok(initiative)


def validate_name(raw: Any) -> ValidationResult:
    """Name: not blank, at most 50 characters."""
    if not isinstance(raw, str) or not raw.strip():
        return ValidationResult.fail("Name is required")
    if len(raw) > MAX_NAME_LENGTH:
        return ValidationResult.fail(f"Name must be {MAX_NAME_LENGTH} characters or less")
    return ValidationResult.ok(raw.strip())


FIELD_VALIDATORS: dict[str, Callable[[Any], ValidationResult]] = {
    "ac": validate_ac,
    "initiative": validate_initiative,
    "name": validate_name,
}
"""Validators for editable fields other than hp, which needs max_hp."""

EDITABLE_FIELDS = frozenset({"hp", *FIELD_VALIDATORS})


def validate_field(field: str, raw: Any, *, max_hp: int | None = None) -> ValidationResult:
    """Validate a raw value for one editable field.

    Args:
        field: One of ``hp``, ``ac``, ``initiative``, ``name``.
        raw: Raw user input.
        max_hp: Maximum hit points, used for the ``hp`` check.

    Returns:
        The validation result; unknown fields fail.
    """
    if field == "hp":
        return validate_hp(raw, max_hp)
    validator = FIELD_VALIDATORS.get(field)
    if validator is None:
        return ValidationResult.fail(f"Field {field!r} is not editable")
    return validator(raw)


__all__ = [
    "EDITABLE_FIELDS",
    "ValidationResult",
    "parse_int",
    "validate_ac",
    "validate_field",
    "validate_hp",
    "validate_initiative",
    "validate_name",
]
