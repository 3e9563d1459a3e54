"""Tests for the SQLite character store."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from battle_arena.core.exceptions import PersistenceError
from battle_arena.models.character import Character
from battle_arena.models.enums import Stage
from battle_arena.storage.database import CharacterStore


class TestCharacterStore:
    """Tests for saving and loading characters."""

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "dir" / "arena.db"

        CharacterStore(db_path)

        assert db_path.exists()

    def test_save_and_load_roundtrip(self, store: CharacterStore) -> None:
        hero = Character(
            name="Aria",
            level=6,
            hp=20,
            max_hp=80,
            experience=12,
            stages_cleared=[Stage.MEADOW, Stage.FOREST],
            current_stage=Stage.CAVERNS,
        )

        store.save(hero)
        loaded = store.load("Aria")

        assert loaded == hero
        assert loaded is not hero

    def test_save_overwrites_whole_record(self, store: CharacterStore) -> None:
        hero = Character(name="Aria")
        first = store.save(hero)
        hero.level = 3
        hero.current_stage = Stage.MEADOW

        second = store.save(hero)
        loaded = store.load("Aria")

        assert loaded.level == 3
        assert loaded.current_stage == Stage.MEADOW
        assert second.created_at == first.created_at
        assert second.updated_at >= first.updated_at

    def test_load_missing_returns_none(self, store: CharacterStore) -> None:
        assert store.load("Nobody") is None

    def test_load_or_create_new_character(self, store: CharacterStore) -> None:
        hero = store.load_or_create("Brann")

        assert hero.level == 1
        assert hero.hp == hero.max_hp == 50
        assert store.load("Brann") == hero

    def test_load_or_create_existing_character(self, store: CharacterStore) -> None:
        store.save(Character(name="Brann", level=9))

        assert store.load_or_create("Brann").level == 9

    def test_list_and_delete(self, store: CharacterStore) -> None:
        store.save(Character(name="Aria"))
        store.save(Character(name="Brann"))

        assert set(store.list_names()) == {"Aria", "Brann"}
        assert store.delete("Aria") is True
        assert store.delete("Aria") is False
        assert store.list_names() == ["Brann"]

    def test_corrupt_record_raises(self, store: CharacterStore) -> None:
        with sqlite3.connect(store.db_path) as conn:
            conn.execute(
                "INSERT INTO characters VALUES (?, ?, ?, ?)",
                ("Ghost", '{"name": "Ghost", "hp": -4}', "2024-01-01T00:00:00", "2024-01-01T00:00:00"),
            )
        conn.close()

        with pytest.raises(PersistenceError) as exc_info:
            store.load("Ghost")

        assert exc_info.value.details["character_name"] == "Ghost"

    def test_unopenable_path_raises(self, tmp_path: Path) -> None:
        with pytest.raises(PersistenceError):
            CharacterStore(tmp_path)

    def test_default_path_from_settings(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        db_path = tmp_path / "configured.db"
        monkeypatch.setenv("BATTLE_ARENA_DATABASE_PATH", str(db_path))

        store = CharacterStore()

        assert store.db_path == db_path

