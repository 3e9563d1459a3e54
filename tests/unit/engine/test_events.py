"""Tests for narration events emitted by battles."""

from __future__ import annotations

from typing import Any

import pytest

from battle_arena.core.exceptions import CombatError
from battle_arena.engine.battle import BattleEngine
from battle_arena.engine.events import (
    ActionResolved,
    BattleEnded,
    BattleStarted,
    LoggingNarrator,
    Narrator,
    RecordingNarrator,
)
from battle_arena.models.character import Character, Monster
from battle_arena.models.enums import ActionKind, BattleOutcome


class TestBattleNarration:
    """Tests for the event stream of a single battle."""

    def test_event_order(
        self,
        hero: Character,
        goblin: Monster,
        recorder: RecordingNarrator,
        scripted: Any,
    ) -> None:
        engine = BattleEngine(scripted([6, 3, 6, 2, 6]), narrator=recorder, heal_chance=0)

        engine.fight(hero, goblin)

        kinds = [type(e) for e in recorder.events]
        assert kinds[0] is BattleStarted
        assert kinds[-1] is BattleEnded
        actions = recorder.of_type(ActionResolved)
        assert [a.actor for a in actions] == ["Aria", "Goblin", "Aria", "Goblin", "Aria"]
        assert [a.target_hp for a in actions] == [9, 47, 3, 45, 0]
        assert all(a.kind == ActionKind.ATTACK for a in actions)
        assert recorder.of_type(BattleEnded)[0].outcome == BattleOutcome.VICTORY

    def test_heal_targets_self(
        self,
        goblin: Monster,
        recorder: RecordingNarrator,
        scripted: Any,
    ) -> None:
        hero = Character(name="Aria", hp=30)
        engine = BattleEngine(
            scripted([4, 2], floats=[0.0]),
            narrator=recorder,
            max_turns=1,
        )

        with pytest.raises(CombatError):
            engine.fight(hero, goblin)

        heal = recorder.of_type(ActionResolved)[0]
        assert heal.kind == ActionKind.HEAL
        assert heal.target == "Aria"
        assert heal.target_hp == 34

    def test_recorder_clear(self, recorder: RecordingNarrator) -> None:
        recorder.emit(BattleStarted(character="Aria", monster="Slime", monster_hp=10))
        recorder.clear()

        assert recorder.events == []

    def test_narrators_satisfy_protocol(self) -> None:
        assert isinstance(LoggingNarrator(), Narrator)
        assert isinstance(RecordingNarrator(), Narrator)

    def test_logging_narrator_accepts_every_field(self) -> None:
        LoggingNarrator().emit(BattleStarted(character="Aria", monster="Slime", monster_hp=10))
