"""Configuration management for the battle arena.

Centralized configuration using pydantic-settings, supporting environment
variables, .env files, and runtime overrides. Save-data and catalog paths
are configuration handed to the storage layer rather than hard-coded.

Example:
    >>> from battle_arena.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.encounter_draws
    10

Environment Variables:
    BATTLE_ARENA_DATABASE_PATH: Path to the SQLite save file
    BATTLE_ARENA_CATALOG_PATH: Path to a custom monster catalog JSON
    BATTLE_ARENA_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    BATTLE_ARENA_GAME_HEAL_CHANCE: Probability the character heals on its turn
    BATTLE_ARENA_GAME_SEED: Seed for reproducible runs
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from battle_arena.core.constants import (
    DEFAULT_ENCOUNTER_DRAWS,
    DEFAULT_HEAL_CHANCE,
    DEFAULT_MAX_TURNS,
)
from battle_arena.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for save data and catalog locations.

    Attributes:
        database_path: Path to the SQLite file holding character records.
        catalog_path: Optional monster catalog JSON; the bundled catalog is
            used when unset.
    """

    model_config = SettingsConfigDict(
        env_prefix="BATTLE_ARENA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/battle_arena.db"),
        description="Path to SQLite save file",
    )
    catalog_path: Path | None = Field(
        default=None,
        description="Path to a custom monster catalog",
    )

    @field_validator("catalog_path", mode="after")
    @classmethod
    def ensure_catalog_is_json(cls, value: Path | None) -> Path | None:
        """Reject catalog paths that are not JSON files.

        Args:
            value: The configured catalog path.

        Returns:
            The validated path.

        Raises:
            ConfigurationError: If the path does not end in .json.
        """
        if value is not None and value.suffix.lower() != ".json":
            raise ConfigurationError(
                f"Monster catalog must be a .json file, got {value.name!r}",
                config_key="catalog_path",
            )
        return value


class GameSettings(BaseSettings):
    """Configuration for battle and encounter behavior.

    Attributes:
        encounter_draws: Draws from the tiered pool in normal mode.
        heal_chance: Probability the character heals instead of attacking.
            Zero gives the always-attack variant.
        max_turns: Turn cap per battle; None disables the safeguard.
        turn_delay_seconds: Pause between turns.
        battle_delay_seconds: Pause between battles.
        seed: Optional seed for reproducible runs.
    """

    model_config = SettingsConfigDict(
        env_prefix="BATTLE_ARENA_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    encounter_draws: int = Field(
        default=DEFAULT_ENCOUNTER_DRAWS,
        ge=1,
        le=100,
        description="Draws from the tiered pool per normal run",
    )
    heal_chance: float = Field(
        default=DEFAULT_HEAL_CHANCE,
        ge=0.0,
        le=1.0,
        description="Chance the character heals on its turn",
    )
    max_turns: int | None = Field(
        default=DEFAULT_MAX_TURNS,
        ge=1,
        description="Turn cap per battle",
    )
    turn_delay_seconds: float = Field(
        default=0.0,
        ge=0.0,
        le=10.0,
        description="Pause between turns",
    )
    battle_delay_seconds: float = Field(
        default=0.0,
        ge=0.0,
        le=30.0,
        description="Pause between battles",
    )
    seed: int | None = Field(
        default=None,
        description="Random seed for reproducible runs",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Render log entries as JSON lines.
        log_file: Append log entries to this file instead of stdout.
        storage: Save data and catalog settings.
        game: Battle settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="BATTLE_ARENA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Battle Arena",
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
        description="Render logs as JSON lines",
    )
    log_file: Path | None = Field(
        default=None,
        description="Log file path; stdout when unset",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    game: GameSettings = Field(default_factory=GameSettings)


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
