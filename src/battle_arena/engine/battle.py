"""Battle resolution between the character and a single monster.

A battle is a loop of turns. On each turn the character acts first
(attack, or with ``heal_chance`` probability a self-heal), then, if the
monster is still standing, the monster attacks. The battle ends in victory
the moment the monster reaches 0 HP and in defeat the moment the character
does. There are no draws.

Victory awards the monster's experience, applies level-ups, restores the
character's HP and persists the record. Defeat leaves experience and level
untouched and HP at 0; the caller restores HP before the next encounter.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from battle_arena.core.constants import DEFAULT_HEAL_CHANCE, DEFAULT_MAX_TURNS
from battle_arena.core.exceptions import CombatError, InvalidGameStateError
from battle_arena.core.logging import get_logger
from battle_arena.engine.dice import roll_range
from battle_arena.engine.events import (
    ActionResolved,
    BattleEnded,
    BattleStarted,
    LeveledUp,
    LoggingNarrator,
    Narrator,
)
from battle_arena.models.enums import ActionKind, BattleOutcome
from battle_arena.models.progression import LevelUp, apply_level_up


if TYPE_CHECKING:
    from battle_arena.core.config import GameSettings
    from battle_arena.engine.dice import RandomSource
    from battle_arena.models.character import Character, Monster, MonsterInstance
    from battle_arena.storage.database import CharacterStore

logger = get_logger(__name__)


@dataclass
class BattleResult:
    """Outcome of one encounter.

    Attributes:
        outcome: Victory or defeat.
        monster: Name of the monster fought.
        turns: Number of turns played (the last may be partial).
        character_hp: Character HP when the battle ended, before any
            post-battle restoration.
        monster_hp: Monster HP when the battle ended.
        experience_gained: Experience awarded (0 on defeat).
        level_ups: Levels gained from the award.
    """

    outcome: BattleOutcome
    monster: str
    turns: int
    character_hp: int
    monster_hp: int
    experience_gained: int = 0
    level_ups: list[LevelUp] = field(default_factory=list)

    @property
    def is_victory(self) -> bool:
        return self.outcome == BattleOutcome.VICTORY


class BattleEngine:
    """Resolves encounters to a victory or a defeat.

    Example:
        >>> engine = BattleEngine(DiceRoller(seed=7))
        >>> result = engine.fight(hero, goblin)
        >>> result.outcome
        <BattleOutcome.VICTORY: 'victory'>
    """

    def __init__(
        self,
        rng: RandomSource,
        *,
        narrator: Narrator | None = None,
        store: CharacterStore | None = None,
        heal_chance: float = DEFAULT_HEAL_CHANCE,
        max_turns: int | None = DEFAULT_MAX_TURNS,
        turn_delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the battle engine.

        Args:
            rng: Source for every damage, recovery and action roll.
            narrator: Sink for narration events; logs them if omitted.
            store: Persists the character after each victory.
            heal_chance: Probability the character heals instead of
                attacking. Zero means the character always attacks.
            max_turns: Turn cap; exceeding it raises CombatError. None
                lets a battle run until someone falls.
            turn_delay: Pause in seconds between turns.
            sleep: Function used for pauses.
        """
        self._rng = rng
        self.narrator: Narrator = narrator or LoggingNarrator()
        self.store = store
        self.heal_chance = heal_chance
        self.max_turns = max_turns
        self.turn_delay = turn_delay
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls,
        rng: RandomSource,
        settings: GameSettings,
        *,
        narrator: Narrator | None = None,
        store: CharacterStore | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> BattleEngine:
        """Build an engine from game settings."""
        return cls(
            rng,
            narrator=narrator,
            store=store,
            heal_chance=settings.heal_chance,
            max_turns=settings.max_turns,
            turn_delay=settings.turn_delay_seconds,
            sleep=sleep,
        )

    def fight(self, character: Character, monster: Monster) -> BattleResult:
        """Resolve one encounter, mutating the character in place.

        Args:
            character: The player's character, at non-zero HP.
            monster: Template of the monster to fight.

        Returns:
            The BattleResult.

        Raises:
            InvalidGameStateError: If the character enters at 0 HP.
            CombatError: If the battle exceeds ``max_turns``.
        """
        if character.is_defeated:
            raise InvalidGameStateError(
                "Character cannot start a battle at 0 HP",
                current_state="defeated",
                expected_states=["ready"],
            )

        opponent = monster.spawn()
        self.narrator.emit(
            BattleStarted(
                character=character.name,
                monster=opponent.name,
                monster_hp=opponent.hp,
                is_boss=monster.is_boss,
            )
        )
        logger.debug("Battle started", character=character.name, monster=opponent.name)

        turn = 0
        while True:
            turn += 1
            if self.max_turns is not None and turn > self.max_turns:
                raise CombatError(
                    "Battle exceeded the turn limit",
                    combatant=opponent.name,
                    turn_number=turn,
                    details={"max_turns": self.max_turns},
                )

            self._character_acts(character, opponent, turn)
            if opponent.is_defeated:
                return self._victory(character, opponent, turn)

            self._monster_acts(character, opponent, turn)
            if character.is_defeated:
                return self._defeat(character, opponent, turn)

            if self.turn_delay > 0:
                self._sleep(self.turn_delay)

    def _character_acts(
        self,
        character: Character,
        opponent: MonsterInstance,
        turn: int,
    ) -> None:
        if self.heal_chance > 0 and self._rng.random() < self.heal_chance:
            amount = roll_range(self._rng, character.recovery_range)
            character.heal(amount)
            self.narrator.emit(
                ActionResolved(
                    turn=turn,
                    actor=character.name,
                    target=character.name,
                    kind=ActionKind.HEAL,
                    amount=amount,
                    target_hp=character.hp,
                )
            )
            return

        damage = roll_range(self._rng, character.attack_range)
        opponent.take_damage(damage)
        self.narrator.emit(
            ActionResolved(
                turn=turn,
                actor=character.name,
                target=opponent.name,
                kind=ActionKind.ATTACK,
                amount=damage,
                target_hp=opponent.hp,
            )
        )

    def _monster_acts(
        self,
        character: Character,
        opponent: MonsterInstance,
        turn: int,
    ) -> None:
        damage = roll_range(self._rng, opponent.template.attack_range)
        character.take_damage(damage)
        self.narrator.emit(
            ActionResolved(
                turn=turn,
                actor=opponent.name,
                target=character.name,
                kind=ActionKind.ATTACK,
                amount=damage,
                target_hp=character.hp,
            )
        )

    def _victory(
        self,
        character: Character,
        opponent: MonsterInstance,
        turn: int,
    ) -> BattleResult:
        ending_hp = character.hp
        reward = opponent.template.experience
        character.experience += reward
        level_ups = apply_level_up(character, self._rng)
        for level_up in level_ups:
            self.narrator.emit(
                LeveledUp(
                    character=character.name,
                    new_level=level_up.new_level,
                    max_hp=character.max_hp,
                )
            )
        character.restore()
        if self.store is not None:
            self.store.save(character)

        self.narrator.emit(
            BattleEnded(
                character=character.name,
                monster=opponent.name,
                outcome=BattleOutcome.VICTORY,
                turns=turn,
                experience_gained=reward,
            )
        )
        logger.info(
            "Battle won",
            character=character.name,
            monster=opponent.name,
            turns=turn,
            experience=reward,
            level=character.level,
        )
        return BattleResult(
            outcome=BattleOutcome.VICTORY,
            monster=opponent.name,
            turns=turn,
            character_hp=ending_hp,
            monster_hp=opponent.hp,
            experience_gained=reward,
            level_ups=level_ups,
        )

    def _defeat(
        self,
        character: Character,
        opponent: MonsterInstance,
        turn: int,
    ) -> BattleResult:
        self.narrator.emit(
            BattleEnded(
                character=character.name,
                monster=opponent.name,
                outcome=BattleOutcome.DEFEAT,
                turns=turn,
            )
        )
        logger.info(
            "Battle lost",
            character=character.name,
            monster=opponent.name,
            turns=turn,
        )
        return BattleResult(
            outcome=BattleOutcome.DEFEAT,
            monster=opponent.name,
            turns=turn,
            character_hp=character.hp,
            monster_hp=opponent.hp,
        )


__all__ = [
    "BattleResult",
    "BattleEngine",
]
