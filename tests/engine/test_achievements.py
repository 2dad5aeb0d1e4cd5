"""
Element Alchemy - Achievement Tests

Tests for the achievement catalog, the condition interpreter and evaluate().
"""

from dataclasses import replace

import pytest
from src.engine import achievements
from src.engine.achievements import (
    ACHIEVEMENTS,
    achievement_by_id,
    achievement_progress,
    condition_met,
    evaluate,
    locked_achievements,
    unlocked_achievements,
)
from src.engine.base import (
    Achievement,
    AchievementState,
    Category,
    Condition,
    ConditionKind,
    Discovery,
    GameState,
    Reward,
    RewardKind,
)
from src.engine.catalog import ELEMENTS
from src.notifications.events import GameEvent


def _discovery(result: str) -> Discovery:
    return Discovery(id=f"1-{result}", result=result, elements=("a", "b"), timestamp=1.0, description="")


class TestCatalog:
    """Tests for the achievement definitions."""

    def test_count(self):
        assert len(ACHIEVEMENTS) == 18

    def test_ids_unique(self):
        ids = [a.id for a in ACHIEVEMENTS]
        assert len(ids) == len(set(ids))

    def test_lookup(self):
        assert achievement_by_id("combo_master").name == "Combo Master"
        assert achievement_by_id("nope") is None

    def test_category_rewards(self):
        assert achievement_by_id("first_scientific").reward == Reward(RewardKind.CATEGORY, "scientific")
        assert achievement_by_id("first_rare").reward == Reward(RewardKind.CATEGORY, "rare")


class TestConditionMet:
    """Tests for the condition interpreter."""

    def test_discoveries_at_least(self):
        state = GameState(elements=ELEMENTS)
        condition = Condition(ConditionKind.DISCOVERIES_AT_LEAST, 1)
        assert not condition_met(condition, state)
        assert condition_met(condition, replace(state, discoveries=(_discovery("steam"),)))

    def test_discovered_at_least_counts_flags(self, progress_factory):
        state = progress_factory("steam").game_state
        assert condition_met(Condition(ConditionKind.DISCOVERED_AT_LEAST, 5), state)
        assert not condition_met(Condition(ConditionKind.DISCOVERED_AT_LEAST, 6), state)

    def test_all_in_category(self, progress_factory):
        state = progress_factory().game_state
        assert condition_met(Condition(ConditionKind.ALL_IN_CATEGORY, Category.BASIC), state)
        assert not condition_met(Condition(ConditionKind.ALL_IN_CATEGORY, Category.COMPOUND), state)

    def test_any_in_category(self, progress_factory):
        condition = Condition(ConditionKind.ANY_IN_CATEGORY, Category.SCIENTIFIC)
        assert not condition_met(condition, progress_factory().game_state)
        assert condition_met(condition, progress_factory("gold").game_state)

    def test_any_of_rarity(self, progress_factory):
        condition = achievement_by_id("first_legendary").condition
        assert not condition_met(condition, progress_factory("human").game_state)
        assert condition_met(condition, progress_factory("time").game_state)

    def test_element_discovered(self, progress_factory):
        condition = achievement_by_id("create_life").condition
        assert not condition_met(condition, progress_factory().game_state)
        assert condition_met(condition, progress_factory("life").game_state)

    def test_combo_streak(self):
        condition = Condition(ConditionKind.COMBO_STREAK_AT_LEAST, 3)
        assert not condition_met(condition, GameState(successful_combos_in_a_row=2))
        assert condition_met(condition, GameState(successful_combos_in_a_row=3))

    def test_every_category(self, progress_factory):
        condition = Condition(ConditionKind.EVERY_CATEGORY)
        assert not condition_met(condition, progress_factory("steam", "life", "gold").game_state)
        assert condition_met(condition, progress_factory("steam", "life", "gold", "love").game_state)

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError, match="Unknown condition kind"):
            condition_met(Condition("bogus"), GameState())


class TestEvaluate:
    """Tests for evaluate()."""

    def test_first_combination_unlocks(self, progress_factory):
        state = replace(
            progress_factory("steam").game_state,
            discoveries=(_discovery("steam"),),
        )
        result = evaluate(state, AchievementState())

        ids = [a.id for a in result.newly_unlocked]
        assert ids == ["first_discovery", "five_discoveries", "all_basic", "first_compound"]
        assert result.rewards == ()
        assert all(e.event == GameEvent.ACHIEVEMENT_UNLOCKED for e in result.events)
        assert result.achievement_state.last_unlocked == "first_compound"

    def test_already_unlocked_not_repeated(self, progress_factory):
        state = progress_factory().game_state
        first = evaluate(state, AchievementState())
        second = evaluate(state, first.achievement_state)
        assert "all_basic" in first.achievement_state.unlocked
        assert second.newly_unlocked == ()
        assert second.events == ()
        assert second.achievement_state is first.achievement_state

    def test_unlocks_are_monotonic(self, progress_factory):
        prior = AchievementState(unlocked=frozenset({"create_life"}), last_unlocked="create_life")
        result = evaluate(progress_factory().game_state, prior)
        assert "create_life" in result.achievement_state.unlocked

    def test_reward_event_follows_unlock(self, progress_factory):
        prior = AchievementState(unlocked=frozenset({"all_basic", "five_discoveries"}))
        result = evaluate(progress_factory("gold").game_state, prior)

        assert [a.id for a in result.newly_unlocked] == ["first_scientific"]
        assert result.rewards == (Reward(RewardKind.CATEGORY, "scientific"),)
        assert [e.event for e in result.events] == [GameEvent.ACHIEVEMENT_UNLOCKED, GameEvent.REWARD_GRANTED]
        assert result.events[1].title == "New Category Unlocked!"

    def test_element_reward(self, progress_factory):
        catalog = (
            Achievement("gift", "Gift", "Get a gift", "🎁",
                        Condition(ConditionKind.DISCOVERED_AT_LEAST, 1),
                        Reward(RewardKind.ELEMENT, "gold")),
        )
        result = evaluate(progress_factory().game_state, AchievementState(), catalog)
        assert result.rewards == (Reward(RewardKind.ELEMENT, "gold"),)
        assert "gold" in result.events[1].description

    def test_none_achievement_state(self, progress_factory):
        result = evaluate(progress_factory().game_state, None)
        assert "all_basic" in result.achievement_state.unlocked

    def test_none_game_state(self):
        prior = AchievementState()
        result = evaluate(None, prior)
        assert result.achievement_state is prior
        assert result.newly_unlocked == ()

    def test_order_independent(self, progress_factory):
        state = progress_factory("steam", "life", "gold", "time").game_state
        forward = evaluate(state, AchievementState())
        backward = evaluate(state, AchievementState(), tuple(reversed(ACHIEVEMENTS)))
        assert forward.achievement_state.unlocked == backward.achievement_state.unlocked


class TestProgressQueries:
    """Tests for unlocked/locked listings and progress summary."""

    def test_listings_partition_catalog(self):
        state = AchievementState(unlocked=frozenset({"first_discovery", "all_basic"}))
        unlocked = unlocked_achievements(state)
        locked = locked_achievements(state)
        assert [a.id for a in unlocked] == ["first_discovery", "all_basic"]
        assert len(unlocked) + len(locked) == len(ACHIEVEMENTS)

    def test_progress(self):
        state = AchievementState(unlocked=frozenset({"first_discovery", "all_basic"}))
        assert achievement_progress(state) == (18, 2, 11)

    def test_progress_empty_catalog(self):
        assert achievement_progress(AchievementState(), ()) == (0, 0, 0)

    def test_module_exports_catalog(self):
        assert achievements.ACHIEVEMENTS is ACHIEVEMENTS
