"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        BattleArenaError: Base exception for all application errors.
        ConfigurationError, CatalogError, BossNotFoundError: Setup errors.
        PersistenceError: Save file read/write failures.
        GameEngineError, CombatError, StageLockedError: Engine errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_from_settings: Set up logging from Settings.
        ensure_logging_configured: Configure from Settings if not yet done.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from battle_arena.core.config import (
    GameSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from battle_arena.core.exceptions import (
    BattleArenaError,
    BossNotFoundError,
    CatalogError,
    CombatError,
    ConfigurationError,
    GameEngineError,
    InvalidGameStateError,
    PersistenceError,
    StageLockedError,
    ValidationError,
)
from battle_arena.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_from_settings,
    ensure_logging_configured,
    get_logger,
)


__all__ = [
    # Exceptions
    "BattleArenaError",
    "ConfigurationError",
    "CatalogError",
    "BossNotFoundError",
    "PersistenceError",
    "GameEngineError",
    "InvalidGameStateError",
    "CombatError",
    "StageLockedError",
    "ValidationError",
    # Configuration
    "Settings",
    "StorageSettings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "ensure_logging_configured",
    "get_logger",
    "bind_context",
    "clear_context",
]
