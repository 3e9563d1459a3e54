"""Run session: the normal, boost and stage modes.

A session binds one character to the encounter selector, battle engine and
stage campaign, and runs one mode at a time. Menu input is not handled
here; callers pass resolved choices (stage, battle count) and may supply a
``should_continue`` callback consulted after each won battle.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from battle_arena.core.config import Settings, get_settings
from battle_arena.core.exceptions import CombatError, ValidationError
from battle_arena.core.logging import (
    bind_context,
    clear_context,
    ensure_logging_configured,
    get_logger,
)
from battle_arena.engine.battle import BattleEngine, BattleResult
from battle_arena.engine.campaign import StageCampaign, StageRunResult
from battle_arena.engine.dice import DiceRoller
from battle_arena.engine.encounters import EncounterSelector
from battle_arena.models.enums import GameMode, Stage


if TYPE_CHECKING:
    from battle_arena.engine.dice import RandomSource
    from battle_arena.engine.events import Narrator
    from battle_arena.models.character import Character, Monster
    from battle_arena.storage.database import CharacterStore

logger = get_logger(__name__)

ContinueCallback = Callable[[BattleResult], bool]


@dataclass
class SessionSummary:
    """Totals for one normal or boost run.

    Attributes:
        mode: The mode that was run.
        battles: Battles fought, in order.
        skipped_draws: Draws that named a monster missing from the catalog.
        stopped_early: Whether the run ended before its last battle.
    """

    mode: GameMode
    battles: list[BattleResult] = field(default_factory=list)
    skipped_draws: int = 0
    stopped_early: bool = False

    @property
    def victories(self) -> int:
        return sum(1 for b in self.battles if b.is_victory)

    @property
    def defeats(self) -> int:
        return len(self.battles) - self.victories

    @property
    def levels_gained(self) -> int:
        return sum(len(b.level_ups) for b in self.battles)

    @property
    def experience_gained(self) -> int:
        return sum(b.experience_gained for b in self.battles)


class RunSession:
    """Runs game modes for a single character."""

    def __init__(
        self,
        character: Character,
        selector: EncounterSelector,
        engine: BattleEngine,
        campaign: StageCampaign,
        *,
        store: CharacterStore | None = None,
        encounter_draws: int = 10,
        battle_delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.character = character
        self.selector = selector
        self.engine = engine
        self.campaign = campaign
        self.store = store
        self.encounter_draws = encounter_draws
        self.battle_delay = battle_delay
        self._sleep = sleep

    @classmethod
    def build(
        cls,
        character: Character,
        catalog: Sequence[Monster],
        *,
        settings: Settings | None = None,
        rng: RandomSource | None = None,
        narrator: Narrator | None = None,
        store: CharacterStore | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> RunSession:
        """Wire a session from settings.

        Logging is configured from the same settings unless the caller
        configured it already.

        Args:
            character: The loaded character.
            catalog: Loaded monster templates.
            settings: Application settings; the cached settings if omitted.
            rng: Random source; a DiceRoller seeded from settings if omitted.
            narrator: Narration sink shared by engine and campaign.
            store: Character store for persistence.
            sleep: Function used for pacing pauses.

        Returns:
            A ready RunSession.
        """
        settings = settings or get_settings()
        ensure_logging_configured(settings)
        game = settings.game
        rng = rng or DiceRoller(seed=game.seed)

        selector = EncounterSelector(catalog, rng)
        engine = BattleEngine.from_settings(
            rng,
            game,
            narrator=narrator,
            store=store,
            sleep=sleep,
        )
        campaign = StageCampaign(
            selector,
            engine,
            store=store,
            battle_delay=game.battle_delay_seconds,
            sleep=sleep,
        )
        session = cls(
            character,
            selector,
            engine,
            campaign,
            store=store,
            encounter_draws=game.encounter_draws,
            battle_delay=game.battle_delay_seconds,
            sleep=sleep,
        )
        campaign.resume_stage(character)
        return session

    # -------------------------------------------------------------------------
    # Modes
    # -------------------------------------------------------------------------

    def run_normal(self, should_continue: ContinueCallback | None = None) -> SessionSummary:
        """Fight the configured number of tiered-pool draws.

        Raises:
            CombatError: If a battle hits the turn cap. The character is
                restored and saved first.
        """
        return self._run_series(
            GameMode.NORMAL,
            self.selector.draw_tiered(self.encounter_draws),
            should_continue,
        )

    def run_boost(
        self,
        count: int,
        should_continue: ContinueCallback | None = None,
    ) -> SessionSummary:
        """Fight a player-chosen number of tiered-pool draws.

        Args:
            count: Number of battles requested (>= 1).
            should_continue: Consulted after each victory.

        Raises:
            ValidationError: If count is not positive.
            CombatError: If a battle hits the turn cap.
        """
        if count < 1:
            raise ValidationError(
                "Boost mode needs at least one battle",
                field_name="count",
                invalid_value=count,
            )
        return self._run_series(
            GameMode.BOOST,
            self.selector.draw_tiered(count),
            should_continue,
        )

    def run_stage(self, stage: Stage) -> StageRunResult:
        """Play one campaign stage."""
        bind_context(character=self.character.name, mode=GameMode.STAGE.value)
        try:
            return self.campaign.run_stage(self.character, stage)
        finally:
            clear_context()

    def _run_series(
        self,
        mode: GameMode,
        slots: list[Monster | None],
        should_continue: ContinueCallback | None,
    ) -> SessionSummary:
        summary = SessionSummary(mode=mode)
        bind_context(character=self.character.name, mode=mode.value)
        try:
            for index, monster in enumerate(slots):
                if monster is None:
                    summary.skipped_draws += 1
                    continue
                if summary.battles and self.battle_delay > 0:
                    self._sleep(self.battle_delay)

                try:
                    result = self.engine.fight(self.character, monster)
                except CombatError:
                    self.character.restore()
                    self._persist()
                    raise
                summary.battles.append(result)

                if not result.is_victory:
                    self.character.restore()
                    self._persist()
                    summary.stopped_early = index < len(slots) - 1
                    break
                if should_continue is not None and not should_continue(result):
                    summary.stopped_early = index < len(slots) - 1
                    break

            logger.info(
                "Run finished",
                battles=len(summary.battles),
                victories=summary.victories,
                skipped_draws=summary.skipped_draws,
                level=self.character.level,
            )
            return summary
        finally:
            clear_context()

    def _persist(self) -> None:
        if self.store is not None:
            self.store.save(self.character)


__all__ = [
    "ContinueCallback",
    "SessionSummary",
    "RunSession",
]
