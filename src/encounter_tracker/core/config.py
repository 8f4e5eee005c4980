"""Configuration management for the encounter tracker.

Settings are loaded with pydantic-settings from environment variables and
an optional ``.env`` file.

Example:
    >>> from encounter_tracker.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.pc_initiative_bonus
    2

Environment Variables:
    ENCOUNTER_TRACKER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    ENCOUNTER_TRACKER_DATABASE_PATH: Path to the local storage database
    ENCOUNTER_TRACKER_STATE_KEY: Storage key for the tracker state blob
    ENCOUNTER_TRACKER_GAME_PC_INITIATIVE_BONUS: Flat initiative bonus for player characters
    ENCOUNTER_TRACKER_GAME_ABILITIES_PATH: Alternate creature ability table (JSON)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from encounter_tracker.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for local storage.

    Attributes:
        database_path: Path to the SQLite file backing local storage.
        state_key: Key under which the tracker state blob is written.
        library_key: Key under which saved encounters are written.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENCOUNTER_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/encounter_tracker.db"),
        description="Path to SQLite local storage",
    )
    state_key: str = Field(
        default="encounter_tracker_state",
        min_length=1,
        description="Storage key for the tracker state",
    )
    library_key: str = Field(
        default="encounter_tracker_library",
        min_length=1,
        description="Storage key for saved encounters",
    )

    @model_validator(mode="after")
    def validate_distinct_keys(self) -> "StorageSettings":
        """Ensure the state blob and the encounter library use different keys.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If both keys are the same.
        """
        if self.state_key == self.library_key:
            raise ConfigurationError(
                f"state_key and library_key must differ (both are {self.state_key!r})",
                config_key="library_key",
            )
        return self


class GameSettings(BaseSettings):
    """Configuration for encounter and initiative behavior.

    Attributes:
        pc_initiative_bonus: Flat modifier added to player character rolls.
        reminder_limit: Maximum number of reminders returned per combatant.
        default_party_size: Party size used when an encounter omits it.
        default_party_level: Party level used when an encounter omits it.
        default_difficulty: Target difficulty tier for new encounters.
        abilities_path: Optional JSON file replacing the bundled ability table.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENCOUNTER_TRACKER_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    pc_initiative_bonus: int = Field(
        default=2,
        ge=-5,
        le=15,
        description="Flat initiative bonus for player characters",
    )
    reminder_limit: int = Field(
        default=8,
        ge=1,
        le=50,
        description="Maximum reminders shown per combatant",
    )
    default_party_size: int = Field(
        default=4,
        ge=1,
        le=12,
        description="Default party size",
    )
    default_party_level: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Default party level",
    )
    default_difficulty: Literal["easy", "medium", "hard", "deadly"] = Field(
        default="medium",
        description="Default target difficulty",
    )
    abilities_path: Path | None = Field(
        default=None,
        description="Alternate creature ability table",
    )

    @field_validator("abilities_path", mode="after")
    @classmethod
    def ensure_abilities_file_exists(cls, value: Path | None) -> Path | None:
        """Reject an ability table path that does not point at a file.

        Args:
            value: The configured path, if any.

        Returns:
            The validated path.

        Raises:
            ConfigurationError: If the path is set but is not a file.
        """
        if value is not None and not value.is_file():
            raise ConfigurationError(
                f"Creature ability table not found: {value}",
                config_key="abilities_path",
            )
        return value


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Emit JSON logs instead of console output.
        storage: Local storage settings.
        game: Encounter and initiative settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENCOUNTER_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="D&D 5E Encounter Tracker",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON logs",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    game: GameSettings = Field(default_factory=GameSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
