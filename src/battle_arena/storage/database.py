"""SQLite persistence for character records.

Each character is stored as one row holding the whole record as JSON.
Every save overwrites the full record, so there is no partial-write state
to recover from; any read or write failure raises PersistenceError.

Default location: data/battle_arena.db (see StorageSettings.database_path).
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Generator

from pydantic import ValidationError as PydanticValidationError

from battle_arena.core.config import get_settings
from battle_arena.core.exceptions import PersistenceError
from battle_arena.core.logging import get_logger
from battle_arena.models.character import Character, create_character

logger = get_logger(__name__)


@dataclass
class CharacterRecord:
    """A saved character row.

    Attributes:
        name: Character name (primary key).
        character_json: Serialized Character.
        created_at: When the character was first saved.
        updated_at: When the character was last saved.
    """

    name: str
    character_json: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> CharacterRecord:
        """Create from database row."""
        return cls(
            name=row[0],
            character_json=row[1],
            created_at=datetime.fromisoformat(row[2]),
            updated_at=datetime.fromisoformat(row[3]),
        )

    def to_character(self) -> Character:
        """Parse the stored JSON back into a Character.

        Raises:
            PersistenceError: If the stored record is corrupt.
        """
        try:
            return Character.model_validate_json(self.character_json)
        except PydanticValidationError as exc:
            raise PersistenceError(
                "Saved character record is corrupt",
                character_name=self.name,
                details={"errors": exc.error_count()},
            ) from exc


class CharacterStore:
    """SQLite-backed store of character records."""

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize the store.

        Args:
            db_path: Path to the database file. If None, uses the configured
                StorageSettings.database_path.

        Raises:
            PersistenceError: If the database cannot be created.
        """
        if db_path is None:
            self.db_path = get_settings().storage.database_path
        else:
            self.db_path = Path(db_path)

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(
                f"Cannot create save directory {self.db_path.parent}",
            ) from exc

        self._init_schema()
        logger.info("Character store initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with commit/rollback and cleanup.

        Raises:
            PersistenceError: Wrapping any sqlite3 failure.
        """
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise PersistenceError(
                f"Cannot open save file {self.db_path}",
                details={"original_error": str(exc)},
            ) from exc
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise PersistenceError(
                "Save file operation failed",
                details={"original_error": str(exc)},
            ) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS characters (
                    name TEXT PRIMARY KEY,
                    character_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                INSERT OR REPLACE INTO schema_version (version) VALUES (?)
            """, (self.SCHEMA_VERSION,))

    # =========================================================================
    # Character Operations
    # =========================================================================

    def save(self, character: Character) -> CharacterRecord:
        """Save a character, overwriting any existing record of that name.

        Args:
            character: The character to persist.

        Returns:
            The saved record.
        """
        now = datetime.now()
        character_json = character.model_dump_json()

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO characters (name, character_json, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(name) DO UPDATE SET
                    character_json = excluded.character_json,
                    updated_at = excluded.updated_at
            """, (character.name, character_json, now.isoformat(), now.isoformat()))
            cursor.execute(
                "SELECT created_at FROM characters WHERE name = ?",
                (character.name,),
            )
            row = cursor.fetchone()
            created_at = datetime.fromisoformat(row[0]) if row else now

        logger.debug(
            "Character saved",
            character=character.name,
            level=character.level,
            experience=character.experience,
        )

        return CharacterRecord(
            name=character.name,
            character_json=character_json,
            created_at=created_at,
            updated_at=now,
        )

    def get_record(self, name: str) -> CharacterRecord | None:
        """Get the raw saved record for a character, if any."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT name, character_json, created_at, updated_at
                FROM characters WHERE name = ?
            """, (name,))
            row = cursor.fetchone()

            if row:
                return CharacterRecord.from_row(tuple(row))
            return None

    def load(self, name: str) -> Character | None:
        """Load a saved character.

        Args:
            name: Character name.

        Returns:
            The Character, or None if no record exists.
        """
        record = self.get_record(name)
        return record.to_character() if record else None

    def load_or_create(self, name: str) -> Character:
        """Load a character, creating and saving a new one if absent.

        Args:
            name: Character name.

        Returns:
            The existing or newly created Character.
        """
        character = self.load(name)
        if character is not None:
            logger.info("Character loaded", character=name, level=character.level)
            return character

        character = create_character(name)
        self.save(character)
        logger.info("Character created", character=name)
        return character

    def list_names(self) -> list[str]:
        """Get all saved character names, most recently played first."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM characters ORDER BY updated_at DESC, name")
            return [row[0] for row in cursor.fetchall()]

    def delete(self, name: str) -> bool:
        """Delete a character record.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM characters WHERE name = ?", (name,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Character deleted", character=name)

        return deleted


__all__ = [
    "CharacterRecord",
    "CharacterStore",
]
