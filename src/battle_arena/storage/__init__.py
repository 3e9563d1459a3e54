"""Storage module for the battle arena.

Provides:
- SQLite character records (one whole-record JSON row per character)
- Monster catalog loading (bundled or configured JSON file)
"""

from battle_arena.storage.catalog import load_catalog, parse_catalog
from battle_arena.storage.database import CharacterRecord, CharacterStore

__all__ = [
    "CharacterRecord",
    "CharacterStore",
    "load_catalog",
    "parse_catalog",
]
