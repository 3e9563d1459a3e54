"""Encounter selection for normal, boost and stage runs.

Two policies build the list of monsters a run will fight:

- Tiered pool: a fixed rarity table repeats each monster name by its tier
  weight; draws are uniform with replacement from the flattened pool and
  resolved by name against the catalog.
- Stage pool: the catalog's non-boss monsters of one stage, drawn uniformly
  with replacement once per ordinary battle.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from battle_arena.core.constants import DEFAULT_ENCOUNTER_DRAWS
from battle_arena.core.exceptions import BossNotFoundError
from battle_arena.core.logging import get_logger
from battle_arena.models.enums import Rarity, Stage


if TYPE_CHECKING:
    from battle_arena.engine.dice import RandomSource
    from battle_arena.models.character import Monster

logger = get_logger(__name__)


RARITY_TABLE: dict[str, Rarity] = {
    # Common
    "Slime": Rarity.COMMON,
    "Giant Rat": Rarity.COMMON,
    "Goblin": Rarity.COMMON,
    # Uncommon
    "Wolf": Rarity.UNCOMMON,
    "Skeleton": Rarity.UNCOMMON,
    "Cave Spider": Rarity.UNCOMMON,
    # Rare
    "Orc Brute": Rarity.RARE,
    "Harpy": Rarity.RARE,
    # Epic
    "Wyvern": Rarity.EPIC,
}
"""Monster name to rarity tier for the tiered pool."""


def build_tiered_pool(table: dict[str, Rarity] | None = None) -> list[str]:
    """Flatten a rarity table into a weighted list of names.

    Args:
        table: Name-to-tier mapping; defaults to RARITY_TABLE.

    Returns:
        Each name repeated by its tier weight, in table order.
    """
    table = RARITY_TABLE if table is None else table
    pool: list[str] = []
    for name, rarity in table.items():
        pool.extend([name] * rarity.weight)
    return pool


class EncounterSelector:
    """Builds the ordered monster lists for a run.

    Attributes:
        catalog: Monster templates to resolve draws against.
    """

    def __init__(
        self,
        catalog: Sequence[Monster],
        rng: RandomSource,
        *,
        rarity_table: dict[str, Rarity] | None = None,
    ) -> None:
        """Initialize the selector.

        Args:
            catalog: Loaded monster templates.
            rng: Random source for draws.
            rarity_table: Optional override of the tiered pool table.
        """
        self.catalog = list(catalog)
        self._rng = rng
        self._pool = build_tiered_pool(rarity_table)
        self._by_name: dict[str, Monster] = {}
        for monster in self.catalog:
            self._by_name.setdefault(monster.name, monster)

    @property
    def pool(self) -> list[str]:
        return list(self._pool)

    def lookup(self, name: str) -> Monster | None:
        """Resolve a monster name against the catalog."""
        return self._by_name.get(name)

    def draw_tiered(self, draws: int = DEFAULT_ENCOUNTER_DRAWS) -> list[Monster | None]:
        """Draw from the tiered pool with replacement.

        A name missing from the catalog still uses up its draw; its slot is
        None rather than a monster.

        Args:
            draws: Number of independent draws.

        Returns:
            One entry per draw, None for unmatched names.
        """
        if not self._pool:
            return [None] * draws

        slots: list[Monster | None] = []
        for _ in range(draws):
            name = self._rng.choice(self._pool)
            monster = self.lookup(name)
            if monster is None:
                logger.debug("Tiered draw has no catalog entry", monster=name)
            slots.append(monster)
        return slots

    def draw_tiered_monsters(self, draws: int = DEFAULT_ENCOUNTER_DRAWS) -> list[Monster]:
        """Draw from the tiered pool and keep only resolved monsters."""
        return [m for m in self.draw_tiered(draws) if m is not None]

    def stage_monsters(self, stage: Stage) -> list[Monster]:
        """Non-boss catalog monsters affiliated with a stage."""
        return [m for m in self.catalog if m.stage == stage and not m.is_boss]

    def draw_stage(self, stage: Stage) -> list[Monster]:
        """Draw a stage's ordinary battles.

        Args:
            stage: The stage being played.

        Returns:
            ``stage.battle_count`` monsters, or an empty list when the stage
            has no ordinary monsters.
        """
        candidates = self.stage_monsters(stage)
        if not candidates:
            logger.warning("Stage has no ordinary monsters", stage=int(stage))
            return []
        return [self._rng.choice(candidates) for _ in range(stage.battle_count)]

    def find_boss(self, stage: Stage) -> Monster:
        """Get the boss that ends a stage.

        Args:
            stage: The stage being played.

        Returns:
            The catalog's boss monster for the stage.

        Raises:
            BossNotFoundError: If no boss is configured for the stage.
        """
        for monster in self.catalog:
            if monster.stage == stage and monster.is_boss:
                return monster
        raise BossNotFoundError(
            f"No boss monster configured for stage {int(stage)}",
            stage=int(stage),
        )


__all__ = [
    "RARITY_TABLE",
    "build_tiered_pool",
    "EncounterSelector",
]
