"""Tests for monster catalog loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from battle_arena.core.exceptions import CatalogError
from battle_arena.models.enums import Stage
from battle_arena.storage.catalog import load_catalog, parse_catalog


def monster_entry(name: str, **overrides: Any) -> dict[str, Any]:
    entry = {
        "name": name,
        "hp": 10,
        "min_attack": 1,
        "max_attack": 2,
        "experience": 5,
        "stage": 1,
    }
    entry.update(overrides)
    return entry


class TestBundledCatalog:
    """Tests for the catalog shipped with the package."""

    def test_one_boss_per_stage(self) -> None:
        monsters = load_catalog()
        bosses = {m.stage: m.name for m in monsters if m.is_boss}

        assert len(monsters) == 20
        assert set(bosses) == set(Stage)
        assert bosses[Stage.MEADOW] == "Goblin Chief"

    def test_every_stage_has_ordinary_monsters(self) -> None:
        monsters = load_catalog()

        for stage in Stage:
            assert any(m.stage == stage and not m.is_boss for m in monsters)


class TestCustomCatalog:
    """Tests for catalog files and parsing errors."""

    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "monsters.json"
        path.write_text(json.dumps([monster_entry("Bat"), monster_entry("Owl", stage=2)]))

        monsters = load_catalog(path)

        assert [m.name for m in monsters] == ["Bat", "Owl"]
        assert monsters[1].stage == Stage.FOREST
        assert monsters[0].is_boss is False

    def test_missing_file(self, tmp_path: Path) -> None:
        missing = tmp_path / "nope.json"

        with pytest.raises(CatalogError) as exc_info:
            load_catalog(missing)

        assert exc_info.value.details["source_file"] == str(missing)

    def test_malformed_json(self) -> None:
        with pytest.raises(CatalogError):
            parse_catalog("[{not json")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"min_attack": 5, "max_attack": 2},
            {"hp": 0},
            {"stage": 9},
            {"experience": -1},
            {"speed": 3},
        ],
    )
    def test_invalid_monster(self, overrides: dict[str, Any]) -> None:
        with pytest.raises(CatalogError) as exc_info:
            parse_catalog(json.dumps([monster_entry("Bat", **overrides)]))

        assert exc_info.value.details["errors"] >= 1

    def test_duplicate_boss_rejected(self) -> None:
        text = json.dumps([
            monster_entry("King", is_boss=True),
            monster_entry("Queen", is_boss=True),
        ])

        with pytest.raises(CatalogError) as exc_info:
            parse_catalog(text)

        assert exc_info.value.details["stages"] == [1]

    def test_empty_catalog_allowed(self) -> None:
        assert parse_catalog("[]") == []


class TestConfiguredCatalog:
    """Tests for the catalog path taken from settings."""

    def test_uses_configured_path(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        path = tmp_path / "custom.json"
        path.write_text(json.dumps([monster_entry("Only")]))
        monkeypatch.setenv("BATTLE_ARENA_CATALOG_PATH", str(path))

        monsters = load_catalog()

        assert [m.name for m in monsters] == ["Only"]

    def test_explicit_path_wins_over_setting(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        configured = tmp_path / "configured.json"
        configured.write_text(json.dumps([monster_entry("Configured")]))
        explicit = tmp_path / "explicit.json"
        explicit.write_text(json.dumps([monster_entry("Explicit")]))
        monkeypatch.setenv("BATTLE_ARENA_CATALOG_PATH", str(configured))

        assert [m.name for m in load_catalog(explicit)] == ["Explicit"]

    def test_missing_configured_file_is_fatal(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("BATTLE_ARENA_CATALOG_PATH", str(tmp_path / "gone.json"))

        with pytest.raises(CatalogError):
            load_catalog()
