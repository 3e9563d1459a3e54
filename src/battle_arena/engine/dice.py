"""Random number source for battle and progression rolls.

All randomness in the game flows through a RandomSource so that battle
outcomes are reproducible in tests (seeded or scripted sources) while play
uses an entropy-seeded generator.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar, runtime_checkable

from battle_arena.core.exceptions import ValidationError
from battle_arena.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    """Interface for the random draws the engine needs."""

    def randint(self, a: int, b: int) -> int:
        """Return a uniformly random integer in [a, b]."""
        ...

    def random(self) -> float:
        """Return a uniformly random float in [0.0, 1.0)."""
        ...

    def choice(self, seq: Sequence[T]) -> T:
        """Return a uniformly random element of a non-empty sequence."""
        ...


class DiceRoller:
    """Random source backed by a private random.Random instance.

    Example:
        >>> roller = DiceRoller(seed=42)
        >>> 1 <= roller.roll_range(1, 6) <= 6
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        self._random = random.Random(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def randint(self, a: int, b: int) -> int:
        return self._random.randint(a, b)

    def random(self) -> float:
        return self._random.random()

    def choice(self, seq: Sequence[T]) -> T:
        return self._random.choice(seq)

    def roll_range(self, low: int, high: int) -> int:
        """Roll a value within an inclusive stat range.

        Args:
            low: Lower bound.
            high: Upper bound.

        Returns:
            A uniformly random integer in [low, high].

        Raises:
            ValidationError: If low > high.
        """
        if low > high:
            raise ValidationError(
                "Invalid roll range",
                field_name="range",
                invalid_value=(low, high),
            )
        return self.randint(low, high)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self.random() < probability


def roll_range(rng: RandomSource, bounds: tuple[int, int]) -> int:
    """Roll uniformly within an inclusive (low, high) pair on any source.

    Args:
        rng: The random source to draw from.
        bounds: Inclusive (low, high) range.

    Returns:
        The rolled integer.
    """
    low, high = bounds
    if low > high:
        raise ValidationError(
            "Invalid roll range",
            field_name="range",
            invalid_value=bounds,
        )
    return rng.randint(low, high)


__all__ = [
    "RandomSource",
    "DiceRoller",
    "roll_range",
]
