"""
Element Alchemy - Persisted Snapshot Models

Pydantic models mirroring the saved-game layout:

    {"gameState": {...}, "achievementState": {...}, "powerUpState": {...}}

Keys are camelCase on disk. Only gameState.elements and gameState.discoveries
are required; every other field falls back to its fresh-game default.
Out-of-range counters and multipliers are pulled back into range on load
rather than rejected.
"""

from __future__ import annotations

from dataclasses import replace

from pydantic import BaseModel, Field, field_validator

from src.engine.base import (
    AchievementState,
    Discovery,
    Element,
    GameProgress,
    GameState,
    PowerUpState,
)
from src.engine.catalog import ELEMENTS
from src.engine.achievements import ACHIEVEMENTS
from src.engine.power_ups import MAX_MULTIPLIER

_CAMEL = {"populate_by_name": True}


class SavedElement(BaseModel):
    """One element's saved flag plus its display fields."""

    id: str
    discovered: bool = False
    name: str | None = None
    category: str | None = None

    model_config = _CAMEL


class SavedDiscovery(BaseModel):
    """Mirrors a Discovery record."""

    id: str
    result: str
    elements: tuple[str, str]
    timestamp: float
    description: str = ""

    model_config = _CAMEL


class SavedGameState(BaseModel):
    """Mirrors GameState."""

    elements: list[SavedElement]
    discoveries: list[SavedDiscovery]
    combining_elements: tuple[str | None, str | None] = Field(
        default=(None, None), alias="combiningElements"
    )
    level: int = 1
    score: int = 0
    successful_combos_in_a_row: int = Field(default=0, alias="successfulCombosInARow")
    last_combination_success: bool | None = Field(default=None, alias="lastCombinationSuccess")
    viewed_element_details: str | None = Field(default=None, alias="viewedElementDetails")
    combination_counts: dict[str, int] = Field(default_factory=dict, alias="combinationCounts")
    favorites: list[str] = Field(default_factory=list)
    current_combo_chain: int = Field(default=0, alias="currentComboChain")
    max_combo_chain: int = Field(default=0, alias="maxComboChain")
    element_powers: dict[str, int] = Field(default_factory=dict, alias="elementPowers")
    combo_multiplier: float = Field(default=1.0, alias="comboMultiplier")
    total_power_gained: int = Field(default=0, alias="totalPowerGained")

    model_config = _CAMEL

    @field_validator("level")
    @classmethod
    def _floor_level(cls, value: int) -> int:
        return max(value, 1)

    @field_validator(
        "score",
        "successful_combos_in_a_row",
        "current_combo_chain",
        "max_combo_chain",
        "total_power_gained",
    )
    @classmethod
    def _floor_counter(cls, value: int) -> int:
        return max(value, 0)

    @field_validator("combo_multiplier")
    @classmethod
    def _clamp_multiplier(cls, value: float) -> float:
        return min(max(value, 1.0), MAX_MULTIPLIER)


class SavedAchievement(BaseModel):
    id: str
    unlocked: bool = False
    name: str | None = None

    model_config = _CAMEL


class SavedAchievementState(BaseModel):
    """Mirrors AchievementState."""

    achievements: list[SavedAchievement] = Field(default_factory=list)
    last_unlocked: str | None = Field(default=None, alias="lastUnlocked")

    model_config = _CAMEL


class SavedPowerUpState(BaseModel):
    """Mirrors PowerUpState."""

    last_used: dict[str, float] = Field(default_factory=dict, alias="lastUsed")
    active_power_ups: list[str] = Field(default_factory=list, alias="activePowerUps")

    model_config = _CAMEL


class SavedProgress(BaseModel):
    """Mirrors GameProgress, the unit of save/load."""

    game_state: SavedGameState = Field(alias="gameState")
    achievement_state: SavedAchievementState = Field(
        default_factory=SavedAchievementState, alias="achievementState"
    )
    power_up_state: SavedPowerUpState = Field(
        default_factory=SavedPowerUpState, alias="powerUpState"
    )

    model_config = _CAMEL

    @classmethod
    def from_progress(cls, progress: GameProgress) -> SavedProgress:
        """Build the saved form of a game progress."""
        state = progress.game_state
        achievement_state = progress.achievement_state
        return cls(
            game_state=SavedGameState(
                elements=[
                    SavedElement(id=e.id, discovered=e.discovered, name=e.name, category=e.category.value)
                    for e in state.elements
                ],
                discoveries=[
                    SavedDiscovery(
                        id=d.id,
                        result=d.result,
                        elements=d.elements,
                        timestamp=d.timestamp,
                        description=d.description,
                    )
                    for d in state.discoveries
                ],
                combining_elements=state.combining_elements,
                level=state.level,
                score=state.score,
                successful_combos_in_a_row=state.successful_combos_in_a_row,
                last_combination_success=state.last_combination_success,
                viewed_element_details=state.viewed_element_details,
                combination_counts=dict(state.combination_counts),
                favorites=list(state.favorites),
                current_combo_chain=state.current_combo_chain,
                max_combo_chain=state.max_combo_chain,
                element_powers=dict(state.element_powers),
                combo_multiplier=state.combo_multiplier,
                total_power_gained=state.total_power_gained,
            ),
            achievement_state=SavedAchievementState(
                achievements=[
                    SavedAchievement(id=a.id, name=a.name, unlocked=achievement_state.is_unlocked(a.id))
                    for a in ACHIEVEMENTS
                ],
                last_unlocked=achievement_state.last_unlocked,
            ),
            power_up_state=SavedPowerUpState(
                last_used=dict(progress.power_up_state.last_used),
                active_power_ups=list(progress.power_up_state.active_power_ups),
            ),
        )

    def to_progress(self) -> GameProgress:
        """
        Rebuild a GameProgress.

        Element definitions always come from the current catalog; the save
        only contributes discovered flags. Saved ids the catalog no longer
        knows are dropped.
        """
        saved = self.game_state
        discovered = {e.id for e in saved.elements if e.discovered}
        elements: tuple[Element, ...] = tuple(
            replace(e, discovered=True) if e.id in discovered else e
            for e in ELEMENTS
        )

        known_achievements = {a.id for a in ACHIEVEMENTS}
        unlocked = frozenset(
            a.id for a in self.achievement_state.achievements
            if a.unlocked and a.id in known_achievements
        )

        game_state = GameState(
            elements=elements,
            discoveries=tuple(
                Discovery(
                    id=d.id,
                    result=d.result,
                    elements=d.elements,
                    timestamp=d.timestamp,
                    description=d.description,
                )
                for d in saved.discoveries
            ),
            combining_elements=saved.combining_elements,
            level=saved.level,
            score=saved.score,
            successful_combos_in_a_row=saved.successful_combos_in_a_row,
            last_combination_success=saved.last_combination_success,
            viewed_element_details=saved.viewed_element_details,
            combination_counts=saved.combination_counts,
            favorites=tuple(saved.favorites),
            current_combo_chain=saved.current_combo_chain,
            max_combo_chain=saved.max_combo_chain,
            element_powers=saved.element_powers,
            combo_multiplier=saved.combo_multiplier,
            total_power_gained=saved.total_power_gained,
        )
        return GameProgress(
            game_state=game_state,
            achievement_state=AchievementState(
                unlocked=unlocked,
                last_unlocked=self.achievement_state.last_unlocked,
            ),
            power_up_state=PowerUpState(
                last_used=self.power_up_state.last_used,
                active_power_ups=tuple(self.power_up_state.active_power_ups),
            ),
        )
