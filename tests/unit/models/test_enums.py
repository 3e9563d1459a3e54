"""Tests for stage metadata and enumerations."""

from __future__ import annotations

from battle_arena.models.enums import STAGE_INFO, Rarity, Stage


class TestStage:
    """Tests for the stage table."""

    def test_five_ordered_stages(self) -> None:
        assert [int(s) for s in Stage] == [1, 2, 3, 4, 5]
        assert set(STAGE_INFO) == set(Stage)

    def test_metadata_accessors(self) -> None:
        assert Stage.CAVERNS.required_level == 8
        assert Stage.CAVERNS.display_name == "Sunken Caverns"
        assert Stage.CAVERNS.battle_count == 5
        assert Stage.CAVERNS.info is STAGE_INFO[Stage.CAVERNS]

    def test_unlock_levels_increase(self) -> None:
        levels = [stage.required_level for stage in Stage]
        assert levels == sorted(levels)
        assert Stage.MEADOW.required_level == 1

    def test_stage_from_int(self) -> None:
        assert Stage(4) is Stage.PEAKS


class TestRarity:
    """Tests for tier weights."""

    def test_weights(self) -> None:
        assert Rarity.COMMON.weight == 5
        assert Rarity.UNCOMMON.weight == 3
        assert Rarity.RARE.weight == 2
        assert Rarity.EPIC.weight == 1
