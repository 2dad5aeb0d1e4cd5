"""
Element Alchemy Game Engine.

Pure Python game logic with zero storage/UI dependencies.
Handles combination lookup, scoring, achievements, and power-ups.
"""

from src.engine.base import (
    Achievement,
    AchievementState,
    Activation,
    Availability,
    Category,
    Combination,
    CombinationOutcome,
    Difficulty,
    Discovery,
    Element,
    GameProgress,
    GameState,
    GameStats,
    Hint,
    PowerUp,
    PowerUpState,
    Rarity,
)
from src.engine.alchemy import AlchemyEngine
from src.engine.catalog import element_by_id, find_combination

__all__ = [
    # Data Classes
    "Achievement",
    "AchievementState",
    "Activation",
    "Availability",
    "Combination",
    "CombinationOutcome",
    "Discovery",
    "Element",
    "GameProgress",
    "GameState",
    "GameStats",
    "Hint",
    "PowerUp",
    "PowerUpState",
    # Enums
    "Category",
    "Difficulty",
    "Rarity",
    # Engine
    "AlchemyEngine",
    "element_by_id",
    "find_combination",
]
