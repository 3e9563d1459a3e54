"""Stage campaign state machine.

Each stage moves through LOCKED -> UNLOCKED -> IN_PROGRESS and ends either
CLEARED (boss defeated) or back at UNLOCKED (a lost battle, or a stage that
could not finish because its boss is missing or a battle hit the turn cap).
Unlocking is derived from the character's level every time it is checked
and is never stored; only the cleared set and the in-progress stage live on
the character record.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from battle_arena.core.exceptions import BossNotFoundError, CombatError, StageLockedError
from battle_arena.core.logging import get_logger
from battle_arena.engine.events import (
    CampaignCompleted,
    Narrator,
    StageEnded,
    StageStarted,
)
from battle_arena.models.enums import Stage, StageOutcome, StageStatus


if TYPE_CHECKING:
    from battle_arena.engine.battle import BattleEngine, BattleResult
    from battle_arena.engine.encounters import EncounterSelector
    from battle_arena.models.character import Character
    from battle_arena.storage.database import CharacterStore

logger = get_logger(__name__)


def is_stage_unlocked(character: Character, stage: Stage) -> bool:
    """Check whether the character's level meets the stage requirement."""
    return character.level >= stage.required_level


def is_campaign_complete(character: Character) -> bool:
    """Check whether every stage is in the cleared set."""
    return set(character.stages_cleared) == set(Stage)


def stage_status(character: Character, stage: Stage) -> StageStatus:
    """Derive a stage's status for a character.

    Args:
        character: The character viewing the stage board.
        stage: The stage to classify.

    Returns:
        IN_PROGRESS for the current stage, then CLEARED, UNLOCKED or LOCKED.
    """
    if character.current_stage == stage:
        return StageStatus.IN_PROGRESS
    if character.has_cleared(stage):
        return StageStatus.CLEARED
    if is_stage_unlocked(character, stage):
        return StageStatus.UNLOCKED
    return StageStatus.LOCKED


@dataclass
class StageRunResult:
    """Outcome of one stage run.

    Attributes:
        stage: The stage played.
        outcome: Cleared, failed or aborted.
        battles: Every battle fought, boss last when reached.
        newly_cleared: Whether this run added the stage to the cleared set.
        campaign_completed: Whether this run completed the campaign.
        reason: Why the stage did not clear, empty when it did.
    """

    stage: Stage
    outcome: StageOutcome
    battles: list[BattleResult] = field(default_factory=list)
    newly_cleared: bool = False
    campaign_completed: bool = False
    reason: str = ""

    @property
    def victories(self) -> int:
        return sum(1 for b in self.battles if b.is_victory)


class StageCampaign:
    """Drives stage runs: ordinary battles, then the boss.

    Example:
        >>> campaign = StageCampaign(selector, engine, store=store)
        >>> result = campaign.run_stage(hero, Stage.MEADOW)
        >>> result.outcome
        <StageOutcome.CLEARED: 'cleared'>
    """

    def __init__(
        self,
        selector: EncounterSelector,
        engine: BattleEngine,
        *,
        store: CharacterStore | None = None,
        narrator: Narrator | None = None,
        battle_delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the campaign.

        Args:
            selector: Supplies stage monsters and bosses.
            engine: Resolves each battle.
            store: Persists the character on every stage transition.
            narrator: Sink for stage events; defaults to the engine's.
            battle_delay: Pause in seconds between battles.
            sleep: Function used for pauses.
        """
        self.selector = selector
        self.engine = engine
        self.store = store
        self.narrator: Narrator = narrator or engine.narrator
        self.battle_delay = battle_delay
        self._sleep = sleep

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def stage_board(self, character: Character) -> dict[Stage, StageStatus]:
        """Get the status of every stage, in campaign order."""
        return {stage: stage_status(character, stage) for stage in Stage}

    def available_stages(self, character: Character) -> list[Stage]:
        """Stages the character may enter right now."""
        return [stage for stage in Stage if is_stage_unlocked(character, stage)]

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def begin_stage(self, character: Character, stage: Stage) -> None:
        """Mark a stage as in progress and persist immediately.

        Raises:
            StageLockedError: If the character's level is too low.
        """
        if not is_stage_unlocked(character, stage):
            raise StageLockedError(
                f"{stage.display_name} requires level {stage.required_level}",
                stage=int(stage),
                required_level=stage.required_level,
                current_level=character.level,
            )
        character.current_stage = stage
        self._persist(character)
        logger.info("Stage started", character=character.name, stage=int(stage))

    def resume_stage(self, character: Character) -> Stage | None:
        """Settle a stage that was interrupted before it ended.

        An interrupted run earns nothing: the stage returns to UNLOCKED and
        the character is restored to full HP.

        Returns:
            The interrupted stage, or None if there was none.
        """
        interrupted = character.current_stage
        if interrupted is None:
            return None
        logger.warning(
            "Discarding interrupted stage",
            character=character.name,
            stage=int(interrupted),
        )
        character.restore()
        character.current_stage = None
        self._persist(character)
        return interrupted

    def run_stage(self, character: Character, stage: Stage) -> StageRunResult:
        """Play a stage from its first battle to its boss.

        Args:
            character: The player's character.
            stage: An unlocked stage.

        Returns:
            The StageRunResult. A battle that hits the turn cap ends the
            stage as ABORTED instead of raising.

        Raises:
            StageLockedError: If the stage is locked for this character.
        """
        self.begin_stage(character, stage)
        monsters = self.selector.draw_stage(stage)
        self.narrator.emit(StageStarted(stage=stage, battle_count=len(monsters)))

        battles: list[BattleResult] = []
        for index, monster in enumerate(monsters):
            if index and self.battle_delay > 0:
                self._sleep(self.battle_delay)
            try:
                result = self.engine.fight(character, monster)
            except CombatError as exc:
                return self._abort_stalled(character, stage, battles, exc)
            battles.append(result)
            if not result.is_victory:
                return self._end_unsuccessfully(
                    character,
                    stage,
                    StageOutcome.FAILED,
                    battles,
                    reason=f"Defeated by {result.monster}",
                )

        try:
            boss = self.selector.find_boss(stage)
        except BossNotFoundError as exc:
            logger.error(
                "Stage aborted: no boss",
                character=character.name,
                stage=int(stage),
                error=str(exc),
            )
            return self._end_unsuccessfully(
                character,
                stage,
                StageOutcome.ABORTED,
                battles,
                reason=exc.message,
            )

        if battles and self.battle_delay > 0:
            self._sleep(self.battle_delay)
        try:
            boss_result = self.engine.fight(character, boss)
        except CombatError as exc:
            return self._abort_stalled(character, stage, battles, exc)
        battles.append(boss_result)
        if not boss_result.is_victory:
            return self._end_unsuccessfully(
                character,
                stage,
                StageOutcome.FAILED,
                battles,
                reason=f"Defeated by boss {boss_result.monster}",
            )

        return self._clear(character, stage, battles)

    def _clear(
        self,
        character: Character,
        stage: Stage,
        battles: list[BattleResult],
    ) -> StageRunResult:
        newly_cleared = character.record_clear(stage)
        character.current_stage = None
        self._persist(character)

        completed = newly_cleared and is_campaign_complete(character)
        self.narrator.emit(StageEnded(stage=stage, outcome=StageOutcome.CLEARED))
        if completed:
            self.narrator.emit(CampaignCompleted(character=character.name))
            logger.info("Campaign completed", character=character.name)

        logger.info(
            "Stage cleared",
            character=character.name,
            stage=int(stage),
            newly_cleared=newly_cleared,
        )
        return StageRunResult(
            stage=stage,
            outcome=StageOutcome.CLEARED,
            battles=battles,
            newly_cleared=newly_cleared,
            campaign_completed=completed,
        )

    def _abort_stalled(
        self,
        character: Character,
        stage: Stage,
        battles: list[BattleResult],
        exc: CombatError,
    ) -> StageRunResult:
        logger.error(
            "Stage aborted: battle stalled",
            character=character.name,
            stage=int(stage),
            turn=exc.details.get("turn_number"),
        )
        return self._end_unsuccessfully(
            character,
            stage,
            StageOutcome.ABORTED,
            battles,
            reason=exc.message,
        )

    def _end_unsuccessfully(
        self,
        character: Character,
        stage: Stage,
        outcome: StageOutcome,
        battles: list[BattleResult],
        *,
        reason: str,
    ) -> StageRunResult:
        character.restore()
        character.current_stage = None
        self._persist(character)
        self.narrator.emit(StageEnded(stage=stage, outcome=outcome, reason=reason))
        logger.info(
            "Stage ended",
            character=character.name,
            stage=int(stage),
            outcome=outcome.value,
            reason=reason,
        )
        return StageRunResult(
            stage=stage,
            outcome=outcome,
            battles=battles,
            reason=reason,
        )

    def _persist(self, character: Character) -> None:
        if self.store is not None:
            self.store.save(character)


__all__ = [
    "is_stage_unlocked",
    "is_campaign_complete",
    "stage_status",
    "StageRunResult",
    "StageCampaign",
]
