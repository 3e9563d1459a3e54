"""Game-wide constants for the battle arena.

Starting stats, level-up growth ranges, the experience curve coefficients
and encounter pool weights live here so balance tweaks stay in one place.
"""

from __future__ import annotations

# =============================================================================
# New Character Defaults
# =============================================================================

STARTING_LEVEL = 1
"""Level of a freshly created character."""

STARTING_HP = 50
"""Max (and current) HP of a freshly created character."""

STARTING_ATTACK = (3, 6)
"""Initial (min_attack, max_attack) range."""

STARTING_RECOVERY = (2, 4)
"""Initial (min_recovery, max_recovery) range."""

# =============================================================================
# Progression
# =============================================================================

EXPERIENCE_CURVE_FACTOR = 10
"""Multiplier on level**1.5 in the experience curve."""

EXPERIENCE_LINEAR_FACTOR = 10
"""Multiplier on level in the experience curve."""

HP_GROWTH_RANGE = (5, 10)
"""Inclusive range of max HP gained per level."""

ATTACK_GROWTH_RANGE = (1, 3)
"""Inclusive range added to both attack bounds per level."""

RECOVERY_GROWTH_RANGE = (1, 3)
"""Inclusive range added to both recovery bounds per level."""

# =============================================================================
# Encounters
# =============================================================================

DEFAULT_ENCOUNTER_DRAWS = 10
"""Number of draws from the tiered pool in normal mode."""

DEFAULT_HEAL_CHANCE = 0.5
"""Probability that the character heals instead of attacking."""

DEFAULT_MAX_TURNS = 1000
"""Turn cap after which a battle is considered stalled."""


__all__ = [
    "STARTING_LEVEL",
    "STARTING_HP",
    "STARTING_ATTACK",
    "STARTING_RECOVERY",
    "EXPERIENCE_CURVE_FACTOR",
    "EXPERIENCE_LINEAR_FACTOR",
    "HP_GROWTH_RANGE",
    "ATTACK_GROWTH_RANGE",
    "RECOVERY_GROWTH_RANGE",
    "DEFAULT_ENCOUNTER_DRAWS",
    "DEFAULT_HEAL_CHANCE",
    "DEFAULT_MAX_TURNS",
]
