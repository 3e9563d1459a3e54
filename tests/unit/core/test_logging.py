"""Tests for structured logging setup."""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from battle_arena.core.config import Settings
from battle_arena.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    ensure_logging_configured,
    flatten_game_values,
    get_logger,
)
from battle_arena.models.enums import Stage, StageOutcome


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    structlog.reset_defaults()
    yield
    clear_context()
    configure_logging()
    structlog.reset_defaults()


def last_json_entry(text: str) -> dict:
    return json.loads(text.strip().splitlines()[-1])


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output_tags_app(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="DEBUG", json_format=True)

        get_logger("test").info("Battle won", monster="Slime")

        entry = last_json_entry(capsys.readouterr().out)
        assert entry["event"] == "Battle won"
        assert entry["monster"] == "Slime"
        assert entry["app"] == "battle_arena"
        assert entry["level"] == "info"

    def test_level_filters_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="WARNING", json_format=True)

        get_logger("test").debug("Tiered draw has no catalog entry")

        assert "Tiered draw" not in capsys.readouterr().out

    def test_enums_flattened(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_format=True)

        get_logger("test").info("StageEnded", stage=Stage.CAVERNS, outcome=StageOutcome.CLEARED)

        entry = last_json_entry(capsys.readouterr().out)
        assert entry["stage"] == 3
        assert entry["outcome"] == "cleared"

    def test_log_file_receives_entries(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "arena.log"

        configure_logging(json_format=True, log_file=log_file)
        get_logger("test").info("Run finished", battles=3)
        configure_logging()

        entry = last_json_entry(log_file.read_text(encoding="utf-8"))
        assert entry["event"] == "Run finished"
        assert entry["battles"] == 3


class TestFlattenGameValues:
    """Tests for the enum flattening processor."""

    def test_plain_values_untouched(self) -> None:
        event = {"event": "Battle won", "turns": 4, "stage": Stage.FOREST}

        assert flatten_game_values(None, "info", event) == {
            "event": "Battle won",
            "turns": 4,
            "stage": 2,
        }


class TestSettingsIntegration:
    """Tests for configuring logging from Settings."""

    def test_debug_forces_debug_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_from_settings(Settings(debug=True, log_level="ERROR", log_json=True))

        get_logger("test").debug("Tiered draw has no catalog entry")

        assert "Tiered draw" in capsys.readouterr().out

    def test_ensure_configures_once(self) -> None:
        assert ensure_logging_configured(Settings()) is True
        assert ensure_logging_configured(Settings()) is False

    def test_ensure_respects_caller_configuration(self) -> None:
        configure_logging(level="ERROR")

        assert ensure_logging_configured(Settings(log_level="DEBUG")) is False


class TestContext:
    """Tests for context binding."""

    def test_bound_context_reaches_entries(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_format=True)
        bind_context(character="Aria", mode="stage")

        get_logger("test").info("Stage started")

        entry = last_json_entry(capsys.readouterr().out)
        assert entry["character"] == "Aria"
        assert entry["mode"] == "stage"

    def test_clear_context(self) -> None:
        bind_context(character="Aria")
        clear_context()

        assert structlog.contextvars.get_contextvars() == {}
