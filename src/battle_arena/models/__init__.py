"""Data models for the battle arena.

Exports the character and monster schemas, the stage table and other
enumerations, and the progression (leveling) model.
"""

from __future__ import annotations

from battle_arena.models.character import (
    Character,
    Monster,
    MonsterInstance,
    create_character,
)
from battle_arena.models.enums import (
    RARITY_WEIGHTS,
    STAGE_INFO,
    ActionKind,
    BattleOutcome,
    GameMode,
    Rarity,
    Stage,
    StageInfo,
    StageOutcome,
    StageStatus,
)
from battle_arena.models.progression import (
    LevelUp,
    apply_level_up,
    experience_progress,
    required_experience,
)


__all__ = [
    # Entities
    "Character",
    "Monster",
    "MonsterInstance",
    "create_character",
    # Enums
    "ActionKind",
    "BattleOutcome",
    "GameMode",
    "Rarity",
    "RARITY_WEIGHTS",
    "Stage",
    "StageInfo",
    "STAGE_INFO",
    "StageOutcome",
    "StageStatus",
    # Progression
    "LevelUp",
    "apply_level_up",
    "experience_progress",
    "required_experience",
]
