"""Experience curve and level-up stat growth.

The curve is floor(10 * level**1.5 + 10 * level): the experience needed to
advance *from* ``level`` to ``level + 1``. Experience is spent on each
level gained, so a character's stored experience is always progress toward
the next threshold.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from battle_arena.core.constants import (
    ATTACK_GROWTH_RANGE,
    EXPERIENCE_CURVE_FACTOR,
    EXPERIENCE_LINEAR_FACTOR,
    HP_GROWTH_RANGE,
    RECOVERY_GROWTH_RANGE,
)
from battle_arena.core.logging import get_logger


if TYPE_CHECKING:
    from battle_arena.engine.dice import RandomSource
    from battle_arena.models.character import Character

logger = get_logger(__name__)


@dataclass(frozen=True)
class LevelUp:
    """Record of a single level gained.

    Attributes:
        old_level: Level before this gain.
        new_level: Level reached.
        experience_spent: Threshold subtracted from experience.
        hp_gain: Max HP added.
        attack_gain: Amount added to both attack bounds.
        recovery_gain: Amount added to both recovery bounds.
    """

    old_level: int
    new_level: int
    experience_spent: int
    hp_gain: int
    attack_gain: int
    recovery_gain: int


def required_experience(level: int) -> int:
    """Experience needed to advance from ``level`` to the next level.

    Args:
        level: Current level (>= 1).

    Returns:
        The threshold, strictly increasing in level.

    Example:
        >>> required_experience(1)
        20
        >>> required_experience(4)
        120
    """
    return math.floor(
        EXPERIENCE_CURVE_FACTOR * level**1.5 + EXPERIENCE_LINEAR_FACTOR * level
    )


def experience_progress(character: Character) -> tuple[int, int]:
    """Get (current_experience, experience_needed) for progress displays."""
    return (character.experience, required_experience(character.level))


def apply_level_up(character: Character, rng: RandomSource) -> list[LevelUp]:
    """Spend accumulated experience on as many levels as it covers.

    Each level gained adds a random amount to max HP and shifts both the
    attack and recovery ranges up by one random amount each, preserving
    their widths. HP is reset to the new maximum after any level-up.

    Args:
        character: The character to mutate in place.
        rng: Source for the growth rolls.

    Returns:
        One LevelUp per level gained, empty if the threshold was not met.
    """
    gained: list[LevelUp] = []

    while character.experience >= required_experience(character.level):
        threshold = required_experience(character.level)
        character.experience -= threshold
        character.level += 1

        hp_gain = rng.randint(*HP_GROWTH_RANGE)
        attack_gain = rng.randint(*ATTACK_GROWTH_RANGE)
        recovery_gain = rng.randint(*RECOVERY_GROWTH_RANGE)

        # Upper bounds first so min <= max holds after every assignment.
        character.max_hp += hp_gain
        character.max_attack += attack_gain
        character.min_attack += attack_gain
        character.max_recovery += recovery_gain
        character.min_recovery += recovery_gain

        gained.append(
            LevelUp(
                old_level=character.level - 1,
                new_level=character.level,
                experience_spent=threshold,
                hp_gain=hp_gain,
                attack_gain=attack_gain,
                recovery_gain=recovery_gain,
            )
        )
        logger.info(
            "Level up",
            character=character.name,
            level=character.level,
            hp_gain=hp_gain,
            attack_gain=attack_gain,
            recovery_gain=recovery_gain,
        )

    if gained:
        character.restore()

    return gained


__all__ = [
    "LevelUp",
    "required_experience",
    "experience_progress",
    "apply_level_up",
]
