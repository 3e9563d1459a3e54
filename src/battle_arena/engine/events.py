"""Semantic narration events emitted by the engine.

The engine reports what happened (who acted, how, by how much, resulting
HP); turning events into text or colors is the presentation layer's job.
A Narrator receives every event in order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from battle_arena.core.logging import get_logger
from battle_arena.models.enums import ActionKind, BattleOutcome, Stage, StageOutcome


logger = get_logger(__name__)


@dataclass(frozen=True)
class BattleStarted:
    """A new encounter begins."""

    character: str
    monster: str
    monster_hp: int
    is_boss: bool = False


@dataclass(frozen=True)
class ActionResolved:
    """One combatant acted.

    Attributes:
        turn: Turn number (1-based).
        actor: Name of the acting combatant.
        target: Name of the affected combatant (the actor itself for heals).
        kind: Attack or heal.
        amount: Damage dealt or HP recovered as rolled.
        target_hp: Target HP after the action.
    """

    turn: int
    actor: str
    target: str
    kind: ActionKind
    amount: int
    target_hp: int


@dataclass(frozen=True)
class BattleEnded:
    """An encounter reached a terminal state."""

    character: str
    monster: str
    outcome: BattleOutcome
    turns: int
    experience_gained: int = 0


@dataclass(frozen=True)
class LeveledUp:
    """The character gained a level."""

    character: str
    new_level: int
    max_hp: int


@dataclass(frozen=True)
class StageStarted:
    stage: Stage
    battle_count: int


@dataclass(frozen=True)
class StageEnded:
    """A stage run finished."""

    stage: Stage
    outcome: StageOutcome
    reason: str = ""


@dataclass(frozen=True)
class CampaignCompleted:
    """All five stages have been cleared."""

    character: str
    message: str = "Every stage has been cleared. The campaign is complete!"


NarrationEvent = (
    BattleStarted
    | ActionResolved
    | BattleEnded
    | LeveledUp
    | StageStarted
    | StageEnded
    | CampaignCompleted
)


@runtime_checkable
class Narrator(Protocol):
    """Sink for narration events."""

    def emit(self, event: NarrationEvent) -> None:
        ...


class LoggingNarrator:
    """Narrator that writes each event as a structured log entry."""

    def emit(self, event: NarrationEvent) -> None:
        logger.info(type(event).__name__, **vars(event))


@dataclass
class RecordingNarrator:
    """Narrator that keeps every event in memory.

    Useful for replays and tests.
    """

    events: list[NarrationEvent] = field(default_factory=list)

    def emit(self, event: NarrationEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list[NarrationEvent]:
        """Get recorded events of one type, in emission order."""
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        self.events.clear()


__all__ = [
    "BattleStarted",
    "ActionResolved",
    "BattleEnded",
    "LeveledUp",
    "StageStarted",
    "StageEnded",
    "CampaignCompleted",
    "NarrationEvent",
    "Narrator",
    "LoggingNarrator",
    "RecordingNarrator",
]
