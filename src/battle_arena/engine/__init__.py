"""Game engine for the battle arena.

Submodules:
    dice: Injectable random source
    events: Narration events and narrator sinks
    encounters: Tiered and stage encounter selection
    battle: Turn loop resolving one encounter
    campaign: Stage campaign state machine
    session: Normal, boost and stage run modes

Example:
    >>> from battle_arena.engine import RunSession
    >>> session = RunSession.build(hero, load_catalog(), store=store)
    >>> summary = session.run_normal()
    >>> summary.victories
    10
"""

from __future__ import annotations

# =============================================================================
# Randomness
# =============================================================================
from battle_arena.engine.dice import DiceRoller, RandomSource, roll_range

# =============================================================================
# Narration
# =============================================================================
from battle_arena.engine.events import (
    ActionResolved,
    BattleEnded,
    BattleStarted,
    CampaignCompleted,
    LeveledUp,
    LoggingNarrator,
    NarrationEvent,
    Narrator,
    RecordingNarrator,
    StageEnded,
    StageStarted,
)

# =============================================================================
# Encounters and Battles
# =============================================================================
from battle_arena.engine.encounters import RARITY_TABLE, EncounterSelector, build_tiered_pool
from battle_arena.engine.battle import BattleEngine, BattleResult

# =============================================================================
# Campaign and Sessions
# =============================================================================
from battle_arena.engine.campaign import (
    StageCampaign,
    StageRunResult,
    is_campaign_complete,
    is_stage_unlocked,
    stage_status,
)
from battle_arena.engine.session import RunSession, SessionSummary


__all__ = [
    # Randomness
    "DiceRoller",
    "RandomSource",
    "roll_range",
    # Narration
    "ActionResolved",
    "BattleEnded",
    "BattleStarted",
    "CampaignCompleted",
    "LeveledUp",
    "LoggingNarrator",
    "NarrationEvent",
    "Narrator",
    "RecordingNarrator",
    "StageEnded",
    "StageStarted",
    # Encounters and battles
    "RARITY_TABLE",
    "EncounterSelector",
    "build_tiered_pool",
    "BattleEngine",
    "BattleResult",
    # Campaign and sessions
    "StageCampaign",
    "StageRunResult",
    "is_campaign_complete",
    "is_stage_unlocked",
    "stage_status",
    "RunSession",
    "SessionSummary",
]
