"""Custom exception hierarchy for the encounter tracker.

All exceptions inherit from EncounterTrackerError so a UI layer can catch
application errors at a single boundary while keeping domain context in
``details``.

Most core operations clamp instead of raising: out-of-range hit points,
unknown combatant ids and turn changes on an empty encounter are no-ops.
The exceptions below cover configuration, persistence and the few calls
that name an encounter explicitly.

Example:
    >>> from encounter_tracker.core.exceptions import StorageError
    >>> raise StorageError("Saved state is not valid JSON", key="encounter_tracker_state")
"""

from __future__ import annotations

from typing import Any


class EncounterTrackerError(Exception):
    """Base exception for all encounter tracker errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(EncounterTrackerError):
    """Base exception for initiative, turn and encounter math errors."""


class DiceRollError(GameEngineError):
    """Raised when a dice expression cannot be parsed or rolled."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class EncounterNotFoundError(GameEngineError):
    """Raised when an operation names an encounter that does not exist."""

    def __init__(
        self,
        message: str,
        *,
        encounter_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the error with the missing encounter id.

        Args:
            message: Human-readable error description.
            encounter_id: The id that was looked up.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if encounter_id:
            combined_details["encounter_id"] = encounter_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(EncounterTrackerError):
    """Raised when local storage cannot be read or written.

    Storage writes are not transactional, so a failed write may leave the
    previous value in place.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with the storage key involved.

        Args:
            message: Human-readable error description.
            key: The storage key being read or written.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if key:
            combined_details["key"] = key
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(EncounterTrackerError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(EncounterTrackerError):
    """Raised when data validation fails.

    Field edits coming from the UI report problems through
    ``ValidationResult`` instead; this exception is for callers that want
    a hard failure, such as loading creature data files.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "EncounterTrackerError",
    # Game engine exceptions
    "GameEngineError",
    "DiceRollError",
    "EncounterNotFoundError",
    # Storage exceptions
    "StorageError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
]
