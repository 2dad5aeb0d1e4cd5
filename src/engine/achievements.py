"""
Element Alchemy - Achievement Catalog & Evaluator

Achievements are static definitions whose unlock predicates are tagged
Condition values, interpreted by condition_met(). The evaluator is a pure
classifier: it reports newly unlocked achievements and their rewards, and the
engine applies the rewards.

Within one evaluation pass the game state is fixed, so the order achievements
are checked in never changes which ones unlock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from src.engine.base import (
    Achievement,
    AchievementState,
    Category,
    Condition,
    ConditionKind,
    GameState,
    Rarity,
    Reward,
    RewardKind,
)
from src.notifications.events import EventPayload, achievement_unlocked, reward_granted

logger = logging.getLogger(__name__)


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement("first_discovery", "First Steps", "Make your first discovery", "🥚",
                Condition(ConditionKind.DISCOVERIES_AT_LEAST, 1)),
    Achievement("five_discoveries", "Getting Started", "Discover 5 elements", "🐣",
                Condition(ConditionKind.DISCOVERED_AT_LEAST, 5)),
    Achievement("ten_discoveries", "Chemist Apprentice", "Discover 10 elements", "🧪",
                Condition(ConditionKind.DISCOVERED_AT_LEAST, 10)),
    Achievement("twenty_discoveries", "Mad Scientist", "Discover 20 elements", "👨‍🔬",
                Condition(ConditionKind.DISCOVERED_AT_LEAST, 20)),
    Achievement("all_basic", "Back to Basics", "Discover all basic elements", "🌍",
                Condition(ConditionKind.ALL_IN_CATEGORY, Category.BASIC)),
    Achievement("first_compound", "Compound Interest", "Create your first compound", "🧬",
                Condition(ConditionKind.ANY_IN_CATEGORY, Category.COMPOUND)),
    Achievement("first_advanced", "Advanced Placement", "Create your first advanced element", "🚀",
                Condition(ConditionKind.ANY_IN_CATEGORY, Category.ADVANCED)),
    Achievement("first_scientific", "For Science!", "Discover your first scientific element", "⚗️",
                Condition(ConditionKind.ANY_IN_CATEGORY, Category.SCIENTIFIC),
                Reward(RewardKind.CATEGORY, "scientific")),
    Achievement("first_rare", "Rare Find", "Discover your first rare element", "💎",
                Condition(ConditionKind.ANY_IN_CATEGORY, Category.RARE),
                Reward(RewardKind.CATEGORY, "rare")),
    Achievement("first_legendary", "Legendary", "Discover your first legendary element", "👑",
                Condition(ConditionKind.ANY_OF_RARITY, Rarity.LEGENDARY)),
    Achievement("create_life", "Genesis", "Create life", "🌱",
                Condition(ConditionKind.ELEMENT_DISCOVERED, "life")),
    Achievement("create_human", "Playing God", "Create human life", "👤",
                Condition(ConditionKind.ELEMENT_DISCOVERED, "human")),
    Achievement("create_time", "Time Lord", "Master the flow of time", "⏳",
                Condition(ConditionKind.ELEMENT_DISCOVERED, "time")),
    Achievement("dragon_tamer", "Dragon Tamer", "Discover and tame a dragon", "🐉",
                Condition(ConditionKind.ELEMENT_DISCOVERED, "dragon")),
    Achievement("internet_explorer", "Internet Explorer", "Create the Internet", "🌐",
                Condition(ConditionKind.ELEMENT_DISCOVERED, "internet")),
    Achievement("universe_creator", "Universal Creator", "Create the entire universe", "🌌",
                Condition(ConditionKind.ELEMENT_DISCOVERED, "universe")),
    Achievement("combo_master", "Combo Master", "Make 3 discoveries in a row without failures", "🔥",
                Condition(ConditionKind.COMBO_STREAK_AT_LEAST, 3)),
    Achievement("element_collector", "Element Collector",
                "Discover at least one element from each category", "🗃️",
                Condition(ConditionKind.EVERY_CATEGORY)),
)

_ACHIEVEMENTS_BY_ID: dict[str, Achievement] = {a.id: a for a in ACHIEVEMENTS}


@dataclass(frozen=True)
class Evaluation:
    """
    Result of one achievement pass.

    Attributes:
        achievement_state: Updated achievement flags
        newly_unlocked: Achievements unlocked in this pass, catalog order
        rewards: Rewards of the newly unlocked achievements
        events: Unlock and reward notifications
    """
    achievement_state: AchievementState
    newly_unlocked: tuple[Achievement, ...] = field(default_factory=tuple)
    rewards: tuple[Reward, ...] = field(default_factory=tuple)
    events: tuple[EventPayload, ...] = field(default_factory=tuple)


def achievement_by_id(achievement_id: str) -> Achievement | None:
    return _ACHIEVEMENTS_BY_ID.get(achievement_id)


def condition_met(condition: Condition, state: GameState) -> bool:
    """
    Interpret an achievement condition against a game state.

    Args:
        condition: Tagged predicate
        state: Game state to test

    Returns:
        True if the predicate holds
    """
    kind = condition.kind
    elements = state.elements

    if kind == ConditionKind.DISCOVERIES_AT_LEAST:
        return len(state.discoveries) >= condition.value
    if kind == ConditionKind.DISCOVERED_AT_LEAST:
        return state.discovered_count >= condition.value
    if kind == ConditionKind.ALL_IN_CATEGORY:
        return all(e.discovered for e in elements if e.category == condition.value)
    if kind == ConditionKind.ANY_IN_CATEGORY:
        return any(e.discovered for e in elements if e.category == condition.value)
    if kind == ConditionKind.ANY_OF_RARITY:
        return any(
            e.discovered for e in elements
            if e.rarity == condition.value
        )
    if kind == ConditionKind.ELEMENT_DISCOVERED:
        return any(e.discovered for e in elements if e.id == condition.value)
    if kind == ConditionKind.COMBO_STREAK_AT_LEAST:
        return state.successful_combos_in_a_row >= condition.value
    if kind == ConditionKind.EVERY_CATEGORY:
        return all(
            any(e.discovered for e in elements if e.category == category)
            for category in Category
        )

    raise ValueError(f"Unknown condition kind: {kind}")


def evaluate(
    game_state: GameState | None,
    achievement_state: AchievementState | None,
    achievements: Sequence[Achievement] = ACHIEVEMENTS,
) -> Evaluation:
    """
    Unlock every locked achievement whose condition holds for game_state.

    Args:
        game_state: The state after the player's action
        achievement_state: Current unlock flags
        achievements: Achievement catalog to check

    Returns:
        Evaluation with updated flags, new unlocks, rewards and notifications
    """
    if achievement_state is None:
        achievement_state = AchievementState()
    if game_state is None:
        logger.error("evaluate called without a game state")
        return Evaluation(achievement_state=achievement_state)

    newly_unlocked = tuple(
        a for a in achievements
        if not achievement_state.is_unlocked(a.id) and condition_met(a.condition, game_state)
    )
    if not newly_unlocked:
        return Evaluation(achievement_state=achievement_state)

    events: list[EventPayload] = []
    rewards: list[Reward] = []
    for achievement in newly_unlocked:
        logger.info("Achievement unlocked: %s", achievement.id)
        events.append(achievement_unlocked(
            achievement.id, achievement.name, achievement.description, achievement.icon
        ))
        if achievement.reward is not None:
            rewards.append(achievement.reward)
            events.append(reward_granted(achievement.reward.kind.value, achievement.reward.value))

    updated = AchievementState(
        unlocked=achievement_state.unlocked | {a.id for a in newly_unlocked},
        last_unlocked=newly_unlocked[-1].id,
    )
    return Evaluation(
        achievement_state=updated,
        newly_unlocked=newly_unlocked,
        rewards=tuple(rewards),
        events=tuple(events),
    )


def unlocked_achievements(
    achievement_state: AchievementState,
    achievements: Sequence[Achievement] = ACHIEVEMENTS,
) -> list[Achievement]:
    return [a for a in achievements if achievement_state.is_unlocked(a.id)]


def locked_achievements(
    achievement_state: AchievementState,
    achievements: Sequence[Achievement] = ACHIEVEMENTS,
) -> list[Achievement]:
    return [a for a in achievements if not achievement_state.is_unlocked(a.id)]


def achievement_progress(
    achievement_state: AchievementState,
    achievements: Sequence[Achievement] = ACHIEVEMENTS,
) -> tuple[int, int, int]:
    """
    Summarize unlock progress.

    Returns:
        Tuple of (total, unlocked, percentage rounded to an integer)
    """
    total = len(achievements)
    unlocked = len(unlocked_achievements(achievement_state, achievements))
    percentage = round(unlocked / total * 100) if total else 0
    return total, unlocked, percentage
