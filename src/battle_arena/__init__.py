"""Battle Arena - turn-based role-playing battle simulator.

A persistent character fights monsters drawn from a weighted pool or a
stage roster, gains experience, levels up, and works through a five-stage
campaign that ends each stage with a boss.

Example:
    >>> from battle_arena import CharacterStore, RunSession, Stage, load_catalog
    >>>
    >>> store = CharacterStore("data/battle_arena.db")
    >>> hero = store.load_or_create("Aria")
    >>> session = RunSession.build(hero, load_catalog(), store=store)
    >>> result = session.run_stage(Stage.MEADOW)
    >>> result.outcome
    <StageOutcome.CLEARED: 'cleared'>

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic schemas, stage table, progression curve.
    engine: Dice, encounters, battle loop, stage campaign, run modes.
    storage: SQLite character store and monster catalog loader.
"""

from __future__ import annotations

# Core
from battle_arena.core.config import Settings, get_settings
from battle_arena.core.exceptions import BattleArenaError
from battle_arena.core.logging import configure_logging, get_logger

# Models
from battle_arena.models import (
    BattleOutcome,
    Character,
    Monster,
    Stage,
    StageOutcome,
    StageStatus,
    apply_level_up,
    create_character,
    required_experience,
)

# Engine
from battle_arena.engine import (
    BattleEngine,
    BattleResult,
    DiceRoller,
    EncounterSelector,
    RunSession,
    StageCampaign,
    StageRunResult,
)

# Storage
from battle_arena.storage import CharacterStore, load_catalog


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "BattleArenaError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "BattleOutcome",
    "Character",
    "Monster",
    "Stage",
    "StageOutcome",
    "StageStatus",
    "apply_level_up",
    "create_character",
    "required_experience",
    # Engine
    "BattleEngine",
    "BattleResult",
    "DiceRoller",
    "EncounterSelector",
    "RunSession",
    "StageCampaign",
    "StageRunResult",
    # Storage
    "CharacterStore",
    "load_catalog",
]
