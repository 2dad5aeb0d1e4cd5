"""
Element Alchemy - Test Configuration and Fixtures

Common fixtures and game-state builders for all test modules.
"""

import random
from dataclasses import replace

import pytest

from src.engine.alchemy import AlchemyEngine
from src.engine.base import GameProgress, GameState
from src.engine.catalog import ELEMENTS

FIXED_NOW = 1_700_000_000.0


class FakeClock:
    """Settable clock returning seconds since the epoch."""

    def __init__(self, now: float = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def with_discovered(state: GameState, *element_ids: str) -> GameState:
    """Return a copy of state with the given elements marked discovered."""
    ids = set(element_ids)
    return replace(
        state,
        elements=tuple(replace(e, discovered=True) if e.id in ids else e for e in state.elements),
    )


def make_progress(*discovered: str, **state_fields) -> GameProgress:
    """
    Build a progress from a fresh game.

    Args:
        discovered: Extra element ids to mark discovered
        state_fields: GameState fields to override
    """
    state = GameState(elements=ELEMENTS)
    if discovered:
        state = with_discovered(state, *discovered)
    if state_fields:
        state = replace(state, **state_fields)
    return GameProgress(game_state=state)


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(clock: FakeClock) -> AlchemyEngine:
    """Engine with a seeded random source and a fixed clock."""
    return AlchemyEngine(rng=random.Random(42), clock=clock)


@pytest.fixture
def fresh_progress() -> GameProgress:
    """A brand-new game: four basic elements discovered."""
    return AlchemyEngine.new_game()


@pytest.fixture
def staged_water_fire(engine: AlchemyEngine, fresh_progress: GameProgress) -> GameProgress:
    """Fresh game with water and fire in the staging slots."""
    progress = engine.stage_element(fresh_progress, "water")
    return engine.stage_element(progress, "fire")


@pytest.fixture
def progress_factory():
    """Factory fixture wrapping make_progress."""
    return make_progress
