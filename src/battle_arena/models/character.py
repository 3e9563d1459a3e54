"""Pydantic V2 schemas for the character and monsters.

The Character is the single long-lived mutable record of a run. Monsters
are immutable catalog templates; each encounter fights a MonsterInstance
spawned from a template so the catalog entry is never damaged.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from battle_arena.core.constants import (
    STARTING_ATTACK,
    STARTING_HP,
    STARTING_LEVEL,
    STARTING_RECOVERY,
)
from battle_arena.models.enums import Stage


NonNegativeInt = Annotated[int, Field(ge=0)]


class Character(BaseModel):
    """The player's persistent character.

    Attributes:
        name: Character name, also the save record key.
        level: Current level (>= 1).
        hp: Current hit points, never negative and never above max_hp.
        max_hp: Hit point capacity.
        min_attack: Lower bound of attack damage.
        max_attack: Upper bound of attack damage.
        min_recovery: Lower bound of a self-heal.
        max_recovery: Upper bound of a self-heal.
        experience: Experience accumulated toward the next level.
        stages_cleared: Stages whose boss has been defeated, no duplicates.
        current_stage: Stage currently being played, None outside a stage.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    name: str = Field(min_length=1, max_length=50, description="Character name")
    level: Annotated[int, Field(ge=1, description="Character level")] = STARTING_LEVEL
    hp: NonNegativeInt = STARTING_HP
    max_hp: NonNegativeInt = STARTING_HP
    min_attack: NonNegativeInt = STARTING_ATTACK[0]
    max_attack: NonNegativeInt = STARTING_ATTACK[1]
    min_recovery: NonNegativeInt = STARTING_RECOVERY[0]
    max_recovery: NonNegativeInt = STARTING_RECOVERY[1]
    experience: NonNegativeInt = 0
    stages_cleared: list[Stage] = Field(default_factory=list, description="Cleared stages")
    current_stage: Stage | None = Field(default=None, description="Stage in progress")

    @field_validator("stages_cleared", mode="after")
    @classmethod
    def reject_duplicate_stages(cls, value: list[Stage]) -> list[Stage]:
        """Ensure the cleared set holds each stage at most once."""
        if len(set(value)) != len(value):
            raise ValueError(f"stages_cleared contains duplicates: {value}")
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Character:
        """Ensure HP is within capacity and stat ranges are ordered.

        Returns:
            Self if validation passes.

        Raises:
            ValueError: If any invariant is violated.
        """
        if self.hp > self.max_hp:
            raise ValueError(f"hp ({self.hp}) exceeds max_hp ({self.max_hp})")
        if self.min_attack > self.max_attack:
            raise ValueError(
                f"min_attack ({self.min_attack}) exceeds max_attack ({self.max_attack})"
            )
        if self.min_recovery > self.max_recovery:
            raise ValueError(
                f"min_recovery ({self.min_recovery}) exceeds max_recovery ({self.max_recovery})"
            )
        return self

    @property
    def is_defeated(self) -> bool:
        return self.hp == 0

    @property
    def attack_range(self) -> tuple[int, int]:
        return (self.min_attack, self.max_attack)

    @property
    def recovery_range(self) -> tuple[int, int]:
        return (self.min_recovery, self.max_recovery)

    def take_damage(self, amount: int) -> int:
        """Subtract damage, saturating at zero.

        Args:
            amount: Damage dealt (non-negative).

        Returns:
            HP remaining.
        """
        self.hp = max(0, self.hp - max(0, amount))
        return self.hp

    def heal(self, amount: int) -> int:
        """Add recovered HP, clamped to max_hp.

        Args:
            amount: HP recovered (non-negative).

        Returns:
            HP after healing.
        """
        self.hp = min(self.max_hp, self.hp + max(0, amount))
        return self.hp

    def restore(self) -> None:
        """Reset HP to full capacity."""
        self.hp = self.max_hp

    def has_cleared(self, stage: Stage) -> bool:
        return stage in self.stages_cleared

    def record_clear(self, stage: Stage) -> bool:
        """Add a stage to the cleared set if it is not already there.

        Args:
            stage: The stage whose boss was defeated.

        Returns:
            True if the stage was newly added.
        """
        if stage in self.stages_cleared:
            return False
        self.stages_cleared = [*self.stages_cleared, stage]
        return True


class Monster(BaseModel):
    """Immutable monster template loaded from the catalog.

    Attributes:
        name: Monster name, used by the tiered encounter pool.
        hp: Starting hit points for every encounter.
        min_attack: Lower bound of attack damage.
        max_attack: Upper bound of attack damage.
        experience: Experience awarded on defeat.
        stage: Stage this monster appears in.
        is_boss: Whether this monster ends its stage.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str = Field(min_length=1, max_length=50, description="Monster name")
    hp: Annotated[int, Field(ge=1, description="Starting HP")]
    min_attack: NonNegativeInt
    max_attack: NonNegativeInt
    experience: NonNegativeInt = Field(description="Experience reward")
    stage: Stage = Field(description="Stage affiliation")
    is_boss: bool = Field(default=False, description="Stage boss flag")

    @model_validator(mode="after")
    def validate_attack_range(self) -> Monster:
        if self.min_attack > self.max_attack:
            raise ValueError(
                f"min_attack ({self.min_attack}) exceeds max_attack ({self.max_attack})"
            )
        return self

    @property
    def attack_range(self) -> tuple[int, int]:
        return (self.min_attack, self.max_attack)

    def spawn(self) -> MonsterInstance:
        """Create a per-battle working copy with full HP.

        Returns:
            A fresh MonsterInstance for one encounter.
        """
        return MonsterInstance(template=self, hp=self.hp)


class MonsterInstance(BaseModel):
    """Mutable per-battle copy of a monster template.

    Attributes:
        template: The catalog entry this instance was spawned from.
        hp: Remaining hit points in this battle.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    template: Monster
    hp: NonNegativeInt

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def max_hp(self) -> int:
        return self.template.hp

    @property
    def is_defeated(self) -> bool:
        return self.hp == 0

    def take_damage(self, amount: int) -> int:
        """Subtract damage, saturating at zero.

        Returns:
            HP remaining.
        """
        self.hp = max(0, self.hp - max(0, amount))
        return self.hp


def create_character(name: str) -> Character:
    """Create a level 1 character with starting stats.

    Args:
        name: The character's name.

    Returns:
        A new Character at full HP with no progress.

    Example:
        >>> hero = create_character("Aria")
        >>> hero.level, hero.hp
        (1, 50)
    """
    return Character(name=name)


__all__ = [
    "Character",
    "Monster",
    "MonsterInstance",
    "create_character",
]
