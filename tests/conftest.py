"""Pytest configuration and shared fixtures.

This module provides common fixtures for the battle arena test suite,
including a scripted random source that makes battles fully predictable.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path

T = TypeVar("T")


# =============================================================================
# Test Doubles
# =============================================================================


class ScriptedRandom:
    """Random source that replays predetermined values.

    ``randint`` pops the next scripted integer (or returns the lower bound
    once the script runs out), ``random`` pops the next float (default
    0.99, meaning "attack" for any heal chance below 1), and ``choice``
    pops an index into the sequence (default 0).
    """

    def __init__(
        self,
        ints: Iterable[int] = (),
        *,
        floats: Iterable[float] = (),
        choices: Iterable[int] = (),
    ) -> None:
        self._ints = deque(ints)
        self._floats = deque(floats)
        self._choices = deque(choices)
        self.int_calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.int_calls.append((a, b))
        if not self._ints:
            return a
        value = self._ints.popleft()
        assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
        return value

    def random(self) -> float:
        return self._floats.popleft() if self._floats else 0.99

    def choice(self, seq: Sequence[T]) -> T:
        index = self._choices.popleft() if self._choices else 0
        return seq[index]

    @property
    def remaining_ints(self) -> int:
        return len(self._ints)


class MemoryStore:
    """Character store double that keeps a snapshot of every save."""

    def __init__(self) -> None:
        self.snapshots: list[Any] = []

    def save(self, character: Any) -> None:
        self.snapshots.append(character.model_copy(deep=True))

    @property
    def last(self) -> Any:
        return self.snapshots[-1]


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from battle_arena.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def hero() -> Any:
    """A fresh level 1 character."""
    from battle_arena.models.character import create_character

    return create_character("Aria")


@pytest.fixture
def champion() -> Any:
    """A character strong enough to one-shot every bundled monster."""
    from battle_arena.models.character import Character

    return Character(
        name="Champion",
        level=20,
        hp=1000,
        max_hp=1000,
        min_attack=500,
        max_attack=500,
        min_recovery=10,
        max_recovery=10,
    )


@pytest.fixture
def weakling() -> Any:
    """A character that deals no damage and falls to any hit."""
    from battle_arena.models.character import Character

    return Character(
        name="Weakling",
        hp=1,
        max_hp=1,
        min_attack=0,
        max_attack=0,
        min_recovery=0,
        max_recovery=0,
    )


@pytest.fixture
def catalog() -> list[Any]:
    """The bundled monster catalog."""
    from battle_arena.storage.catalog import load_catalog

    return load_catalog()


@pytest.fixture
def goblin(catalog: list[Any]) -> Any:
    return next(m for m in catalog if m.name == "Goblin")


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def recorder() -> Any:
    """A narrator that records every event."""
    from battle_arena.engine.events import RecordingNarrator

    return RecordingNarrator()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def dice_roller() -> Any:
    """A DiceRoller with a fixed seed for reproducible tests."""
    from battle_arena.engine.dice import DiceRoller

    return DiceRoller(seed=42)


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def store(tmp_path: Path) -> Any:
    """A character store in a temporary directory."""
    from battle_arena.storage.database import CharacterStore

    return CharacterStore(tmp_path / "saves" / "battle_arena.db")


@pytest.fixture
def scripted() -> type[ScriptedRandom]:
    """Factory for scripted random sources.

    Returns:
        The ScriptedRandom class; call it with the values to replay.
    """
    return ScriptedRandom
