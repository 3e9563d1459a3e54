"""Enumeration types for the battle arena.

Stages carry their static metadata (unlock level, display name, ordinary
battle count) through a lookup table rather than per-stage classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum


@dataclass(frozen=True)
class StageInfo:
    """Static configuration for a campaign stage.

    Attributes:
        required_level: Minimum character level to enter the stage.
        display_name: Human-readable stage name.
        battle_count: Ordinary battles before the boss (boss not counted).
    """

    required_level: int
    display_name: str
    battle_count: int


class Stage(IntEnum):
    """The five campaign stages, in order."""

    MEADOW = 1
    FOREST = 2
    CAVERNS = 3
    PEAKS = 4
    THRONE = 5

    @property
    def info(self) -> StageInfo:
        """Get the static metadata for this stage.

        Returns:
            The StageInfo entry for this stage.
        """
        return STAGE_INFO[self]

    @property
    def required_level(self) -> int:
        return self.info.required_level

    @property
    def display_name(self) -> str:
        return self.info.display_name

    @property
    def battle_count(self) -> int:
        return self.info.battle_count


STAGE_INFO: dict[Stage, StageInfo] = {
    Stage.MEADOW: StageInfo(required_level=1, display_name="Verdant Meadow", battle_count=3),
    Stage.FOREST: StageInfo(required_level=4, display_name="Whispering Forest", battle_count=4),
    Stage.CAVERNS: StageInfo(required_level=8, display_name="Sunken Caverns", battle_count=5),
    Stage.PEAKS: StageInfo(required_level=12, display_name="Ashen Peaks", battle_count=6),
    Stage.THRONE: StageInfo(required_level=16, display_name="Abyssal Throne", battle_count=7),
}


class StageStatus(StrEnum):
    """Campaign status of a single stage for a given character."""

    LOCKED = "locked"
    UNLOCKED = "unlocked"
    IN_PROGRESS = "in_progress"
    CLEARED = "cleared"


class StageOutcome(StrEnum):
    """How a stage run ended."""

    CLEARED = "cleared"
    """Boss defeated; stage added to the cleared set."""

    FAILED = "failed"
    """Character lost an ordinary or boss battle."""

    ABORTED = "aborted"
    """Stage could not be completed because no boss is configured."""


class BattleOutcome(StrEnum):
    """Terminal states of a battle. There are no draws."""

    VICTORY = "victory"
    DEFEAT = "defeat"


class ActionKind(StrEnum):
    """What a combatant did on its turn."""

    ATTACK = "attack"
    HEAL = "heal"


class GameMode(StrEnum):
    """Run modes offered by the session."""

    NORMAL = "normal"
    BOOST = "boost"
    STAGE = "stage"


class Rarity(StrEnum):
    """Encounter rarity tiers for the tiered pool."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"

    @property
    def weight(self) -> int:
        """Number of copies of a monster of this tier in the pool."""
        return RARITY_WEIGHTS[self]


RARITY_WEIGHTS: dict[Rarity, int] = {
    Rarity.COMMON: 5,
    Rarity.UNCOMMON: 3,
    Rarity.RARE: 2,
    Rarity.EPIC: 1,
}


__all__ = [
    "StageInfo",
    "Stage",
    "STAGE_INFO",
    "StageStatus",
    "StageOutcome",
    "BattleOutcome",
    "ActionKind",
    "GameMode",
    "Rarity",
    "RARITY_WEIGHTS",
]
