"""Core module providing configuration, logging, rules tables and exceptions.

Exports:
    Exceptions:
        EncounterTrackerError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        StorageError: Local storage read/write errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from encounter_tracker.core.config import (
    GameSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from encounter_tracker.core.exceptions import (
    ConfigurationError,
    DiceRollError,
    EncounterNotFoundError,
    EncounterTrackerError,
    GameEngineError,
    StorageError,
    ValidationError,
)
from encounter_tracker.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "EncounterTrackerError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Game engine exceptions
    "GameEngineError",
    "DiceRollError",
    "EncounterNotFoundError",
    # Storage exceptions
    "StorageError",
    # Configuration
    "Settings",
    "StorageSettings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
