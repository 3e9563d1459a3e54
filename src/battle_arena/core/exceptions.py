"""Custom exception hierarchy for the battle arena.

All exceptions inherit from BattleArenaError, enabling unified error handling
at the application boundary while preserving domain-specific context.

Example:
    >>> from battle_arena.core.exceptions import BossNotFoundError
    >>> raise BossNotFoundError("No boss configured", stage=3)
"""

from __future__ import annotations

from typing import Any


class BattleArenaError(Exception):
    """Base exception for all battle arena errors.

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
# Configuration Exceptions
# =============================================================================


class ConfigurationError(BattleArenaError):
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


class CatalogError(ConfigurationError):
    """Raised when the monster catalog is missing or malformed."""

    def __init__(
        self,
        message: str,
        *,
        source_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize catalog error with source file context.

        Args:
            message: Human-readable error description.
            source_file: Path to the catalog file that failed to load.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source_file:
            combined_details["source_file"] = source_file
        super().__init__(message, details=combined_details)


class BossNotFoundError(ConfigurationError):
    """Raised when the catalog has no boss monster for a stage."""

    def __init__(
        self,
        message: str,
        *,
        stage: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if stage is not None:
            combined_details["stage"] = stage
        super().__init__(message, details=combined_details)


# =============================================================================
# Persistence Exceptions
# =============================================================================


class PersistenceError(BattleArenaError):
    """Raised when the character record cannot be read or written.

    Writes are whole-record overwrites, so no partial-write recovery is
    attempted; callers treat this as fatal.
    """

    def __init__(
        self,
        message: str,
        *,
        character_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize persistence error with character context.

        Args:
            message: Human-readable error description.
            character_name: Name of the character record involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if character_name:
            combined_details["character_name"] = character_name
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Exceptions
# =============================================================================


class GameEngineError(BattleArenaError):
    """Base exception for all game engine errors."""


class InvalidGameStateError(GameEngineError):
    """Raised when a state transition violates campaign rules."""

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current invalid state identifier.
            expected_states: List of valid states that were expected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class CombatError(GameEngineError):
    """Raised when battle resolution cannot complete."""

    def __init__(
        self,
        message: str,
        *,
        combatant: str | None = None,
        turn_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with battle context.

        Args:
            message: Human-readable error description.
            combatant: Name of the monster involved.
            turn_number: Turn on which the error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if combatant:
            combined_details["combatant"] = combatant
        if turn_number is not None:
            combined_details["turn_number"] = turn_number
        super().__init__(message, details=combined_details)


class StageLockedError(GameEngineError):
    """Raised when a stage is entered below its required level."""

    def __init__(
        self,
        message: str,
        *,
        stage: int | None = None,
        required_level: int | None = None,
        current_level: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if stage is not None:
            combined_details["stage"] = stage
        if required_level is not None:
            combined_details["required_level"] = required_level
        if current_level is not None:
            combined_details["current_level"] = current_level
        super().__init__(message, details=combined_details)


# =============================================================================
# Validation Exceptions
# =============================================================================


class ValidationError(BattleArenaError):
    """Raised when data validation fails."""

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
    "BattleArenaError",
    # Configuration exceptions
    "ConfigurationError",
    "CatalogError",
    "BossNotFoundError",
    # Persistence exceptions
    "PersistenceError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "CombatError",
    "StageLockedError",
    # Validation exceptions
    "ValidationError",
]
