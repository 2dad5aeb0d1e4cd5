"""
Element Alchemy - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. All classes are immutable (frozen dataclasses); every engine
operation returns a new value instead of modifying its arguments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Any, Mapping

from src.notifications.events import EventPayload


class Category(Enum):
    """Element categories."""
    BASIC = "basic"
    COMPOUND = "compound"
    ADVANCED = "advanced"
    RARE = "rare"
    SCIENTIFIC = "scientific"


class Rarity(Enum):
    """Element rarities."""
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"


class Difficulty(Enum):
    """Recipe difficulty tiers."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    VERY_HARD = "very-hard"


class ConditionKind(Enum):
    """Kinds of achievement unlock predicates."""
    DISCOVERIES_AT_LEAST = auto()         # value: int, length of the discovery log
    DISCOVERED_AT_LEAST = auto()          # value: int, discovered elements
    ALL_IN_CATEGORY = auto()              # value: Category
    ANY_IN_CATEGORY = auto()              # value: Category
    ANY_OF_RARITY = auto()                # value: Rarity
    ELEMENT_DISCOVERED = auto()           # value: element id
    COMBO_STREAK_AT_LEAST = auto()        # value: int
    EVERY_CATEGORY = auto()               # value: unused


class RewardKind(Enum):
    """Kinds of achievement rewards."""
    ELEMENT = "element"
    HINT = "hint"
    CATEGORY = "category"


class EffectKind(Enum):
    """Kinds of power-up effects."""
    MULTIPLIER_BOOST = auto()
    REVEAL_ELEMENT = auto()
    POWER_SURGE = auto()
    SMART_HINT = auto()


def _frozen_mapping(data: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True)
class Element:
    """
    A single alchemy element.

    Attributes:
        id: Unique key
        name: Display name
        symbol: Short symbol or emoji
        color: Hex color string
        category: Element category
        discovered: Whether the player has discovered it (never reverts)
        description: Flavor text
        atomic_number: Atomic number for scientific elements
        rarity: Element rarity
        group: Optional grouping label
    """
    id: str
    name: str
    symbol: str
    color: str
    category: Category
    discovered: bool = False
    description: str | None = None
    atomic_number: int | None = None
    rarity: Rarity | None = None
    group: str | None = None


@dataclass(frozen=True)
class Combination:
    """
    A recipe: an unordered pair of element ids producing a result.

    Attributes:
        elements: The two input element ids
        result: Result element id
        description: Human-readable description of the reaction
        difficulty: Difficulty tier (None if unrated)
    """
    elements: tuple[str, str]
    result: str
    description: str
    difficulty: Difficulty | None = None

    @property
    def key(self) -> tuple[str, str]:
        """Sorted pair used for unordered lookup."""
        a, b = self.elements
        return (a, b) if a <= b else (b, a)


@dataclass(frozen=True)
class Discovery:
    """
    Permanent record of the first time an element was produced.

    Attributes:
        id: Unique, time-derived id
        result: Discovered element id
        elements: Sorted input ids (or the power-up attribution pair)
        timestamp: Seconds since the epoch
        description: Reaction description
    """
    id: str
    result: str
    elements: tuple[str, str]
    timestamp: float
    description: str


@dataclass(frozen=True)
class Condition:
    """Tagged achievement predicate, interpreted by achievements.condition_met."""
    kind: ConditionKind
    value: Any = None


@dataclass(frozen=True)
class Reward:
    """Tagged achievement reward."""
    kind: RewardKind
    value: str


@dataclass(frozen=True)
class Achievement:
    """Static achievement definition."""
    id: str
    name: str
    description: str
    icon: str
    condition: Condition
    reward: Reward | None = None


@dataclass(frozen=True)
class PowerUp:
    """Static power-up definition."""
    id: str
    name: str
    description: str
    icon: str
    cost: int
    cooldown: int
    effect: EffectKind


@dataclass(frozen=True)
class GameState:
    """
    Complete state of one player's game.

    Attributes:
        elements: All elements with their discovered flags
        discoveries: Discovery records, most recent first
        combining_elements: The two staging slots
        level: floor(discovered / 5) + 1
        score: Total score (never decreases)
        successful_combos_in_a_row: Combo streak, reset on failure
        last_combination_success: Outcome of the last attempt (None before any)
        viewed_element_details: Element currently shown in detail
        combination_counts: Times each element was used in a successful combination
        favorites: Favorite element ids
        current_combo_chain: Successful combinations counter
        max_combo_chain: Highest current_combo_chain reached
        element_powers: Accumulated power per element
        combo_multiplier: Power multiplier in [1.0, 3.0]
        total_power_gained: Spendable power
    """
    elements: tuple[Element, ...] = field(default_factory=tuple)
    discoveries: tuple[Discovery, ...] = field(default_factory=tuple)
    combining_elements: tuple[str | None, str | None] = (None, None)
    level: int = 1
    score: int = 0
    successful_combos_in_a_row: int = 0
    last_combination_success: bool | None = None
    viewed_element_details: str | None = None
    combination_counts: Mapping[str, int] = field(default_factory=dict)
    favorites: tuple[str, ...] = field(default_factory=tuple)
    current_combo_chain: int = 0
    max_combo_chain: int = 0
    element_powers: Mapping[str, int] = field(default_factory=dict)
    combo_multiplier: float = 1.0
    total_power_gained: int = 0

    def __post_init__(self) -> None:
        """Freeze mapping fields so snapshots cannot be changed in place."""
        object.__setattr__(self, "combination_counts", _frozen_mapping(self.combination_counts))
        object.__setattr__(self, "element_powers", _frozen_mapping(self.element_powers))

    @property
    def discovered_count(self) -> int:
        """Number of discovered elements."""
        return sum(1 for e in self.elements if e.discovered)

    @property
    def staged_count(self) -> int:
        """Number of occupied staging slots."""
        return sum(1 for slot in self.combining_elements if slot is not None)


@dataclass(frozen=True)
class AchievementState:
    """
    Session achievement flags.

    Attributes:
        unlocked: Ids of unlocked achievements
        last_unlocked: Id of the most recently unlocked achievement
    """
    unlocked: frozenset[str] = field(default_factory=frozenset)
    last_unlocked: str | None = None

    def is_unlocked(self, achievement_id: str) -> bool:
        return achievement_id in self.unlocked


@dataclass(frozen=True)
class PowerUpState:
    """
    Session power-up bookkeeping.

    Attributes:
        last_used: Activation timestamp per power-up id
        active_power_ups: Log of activated power-up ids, oldest first
    """
    last_used: Mapping[str, float] = field(default_factory=dict)
    active_power_ups: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "last_used", _frozen_mapping(self.last_used))


@dataclass(frozen=True)
class GameProgress:
    """The unit of save/load."""
    game_state: GameState
    achievement_state: AchievementState = field(default_factory=AchievementState)
    power_up_state: PowerUpState = field(default_factory=PowerUpState)


@dataclass(frozen=True)
class CombinationOutcome:
    """
    Result of a combination attempt.

    Attributes:
        progress: Updated game progress
        success: Whether a recipe fired
        discovery: Discovery record if the result was new
        element: Resolved result element on success
        points: Score awarded
        power_gained: Power added to each input and to the total
        events: Notifications for the caller to surface
    """
    progress: GameProgress
    success: bool
    discovery: Discovery | None = None
    element: Element | None = None
    points: int = 0
    power_gained: int = 0
    events: tuple[EventPayload, ...] = field(default_factory=tuple)

    @property
    def is_new_discovery(self) -> bool:
        return self.discovery is not None


@dataclass(frozen=True)
class GameStats:
    """Discovery statistics."""
    total_elements: int = 0
    discovered_elements: int = 0
    percent_complete: int = 0
    by_category: Mapping[Category, int] = field(
        default_factory=lambda: {category: 0 for category in Category}
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "by_category", _frozen_mapping(self.by_category))


@dataclass(frozen=True)
class Hint:
    """A hint message with optional element ids to highlight."""
    text: str
    elements: tuple[str, str] | None = None


@dataclass(frozen=True)
class Availability:
    """Whether a power-up can be activated, and why not."""
    available: bool
    reason: str | None = None


@dataclass(frozen=True)
class Activation:
    """Result of a power-up activation."""
    game_state: GameState
    power_up_state: PowerUpState
    success: bool
    events: tuple[EventPayload, ...] = field(default_factory=tuple)
