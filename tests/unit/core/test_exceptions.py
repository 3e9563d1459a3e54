"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestBattleArenaError:
    """Tests for the base BattleArenaError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = BattleArenaError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = BattleArenaError("Test error", details={"key": "value", "count": 42})
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(BattleArenaError("Test", details={"x": 1}))
        assert "BattleArenaError" in repr_str
        assert "Test" in repr_str


class TestConfigurationExceptions:
    """Tests for configuration-related exceptions."""

    def test_configuration_error_with_key(self) -> None:
        exc = ConfigurationError("Bad value", config_key="catalog_path")
        assert exc.details["config_key"] == "catalog_path"

    def test_catalog_error_is_configuration_error(self) -> None:
        exc = CatalogError("Missing", source_file="monsters.json")
        assert isinstance(exc, ConfigurationError)
        assert exc.details["source_file"] == "monsters.json"

    def test_boss_not_found_carries_stage(self) -> None:
        exc = BossNotFoundError("No boss", stage=3)
        assert isinstance(exc, ConfigurationError)
        assert exc.details == {"stage": 3}


class TestEngineExceptions:
    """Tests for game engine exceptions."""

    def test_combat_error_context(self) -> None:
        exc = CombatError("Stalled", combatant="Goblin", turn_number=1001)
        assert isinstance(exc, GameEngineError)
        assert exc.details["combatant"] == "Goblin"
        assert exc.details["turn_number"] == 1001

    def test_stage_locked_error_context(self) -> None:
        exc = StageLockedError("Locked", stage=3, required_level=8, current_level=7)
        assert exc.details == {"stage": 3, "required_level": 8, "current_level": 7}

    def test_invalid_state_error_context(self) -> None:
        exc = InvalidGameStateError(
            "Bad state",
            current_state="defeated",
            expected_states=["ready"],
        )
        assert exc.details["expected_states"] == ["ready"]

    def test_all_catchable_as_base(self) -> None:
        for exc in (
            PersistenceError("x", character_name="Aria"),
            ValidationError("x", field_name="count", invalid_value=0),
            CombatError("x"),
        ):
            with pytest.raises(BattleArenaError):
                raise exc

    def test_validation_error_keeps_zero_value(self) -> None:
        exc = ValidationError("x", invalid_value=0)
        assert exc.details["invalid_value"] == 0
