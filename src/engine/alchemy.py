"""
Element Alchemy - Game State Engine

Resolves player actions against immutable game snapshots. Every public method
takes a GameProgress (or GameState) and returns a new one; arguments are never
modified.

Combination flow:
    IDLE (0 staged) -> STAGED_1 -> STAGED_2 -> attempt ->
        DISCOVERY | REPEAT | NO_REACTION -> IDLE

Scoring:
    Difficulty     New    Repeat   Base power
    easy            10       1        1
    medium          25       3        2
    hard            50       5        4
    very-hard      100      10        8
    (unrated)       15       2        1

    level = floor(discovered / 5) + 1
    power gain = round(base power x combo multiplier), applied on every success
    combo multiplier += 0.1 per success, capped at 3.0
"""

from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import replace
from typing import Callable

from src.engine import achievements, power_ups
from src.engine.base import (
    AchievementState,
    Activation,
    Category,
    Combination,
    CombinationOutcome,
    Difficulty,
    Discovery,
    EffectKind,
    Element,
    GameProgress,
    GameState,
    GameStats,
    Hint,
    PowerUpState,
    Reward,
    RewardKind,
)
from src.engine.catalog import (
    effective_combinations,
    element_by_id,
    find_combination,
    initial_elements,
)
from src.notifications import events as notices
from src.notifications.events import EventPayload

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class AlchemyEngine:
    """
    Engine for the element-combining game.

    Holds only its injected random source and clock; game state is passed in
    and returned, never stored.
    """

    # (new discovery points, repeat points)
    POINTS: dict[Difficulty | None, tuple[int, int]] = {
        Difficulty.EASY: (10, 1),
        Difficulty.MEDIUM: (25, 3),
        Difficulty.HARD: (50, 5),
        Difficulty.VERY_HARD: (100, 10),
    }
    DEFAULT_POINTS = (15, 2)

    BASE_POWER: dict[Difficulty | None, int] = {
        Difficulty.EASY: 1,
        Difficulty.MEDIUM: 2,
        Difficulty.HARD: 4,
        Difficulty.VERY_HARD: 8,
    }
    DEFAULT_BASE_POWER = 1

    ELEMENTS_PER_LEVEL = 5
    MULTIPLIER_STEP = 0.1
    MAX_MULTIPLIER = power_ups.MAX_MULTIPLIER

    # Hint tiers
    ALMOST_DONE_RATIO = 0.8
    BEGINNER_DISCOVERED = 6

    HINT_TEMPLATES = (
        "Try combining {a} with {b}.",
        "What happens when {a} meets {b}?",
        "Have you tried mixing {a} and {b} yet?",
        "A magical reaction might occur between {a} and {b}.",
        "{a} and {b} might create something interesting!",
    )

    def __init__(self, rng: random.Random | None = None, clock: Clock | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock if clock is not None else time.time

    # -- Setup -----------------------------------------------------------

    @staticmethod
    def new_game() -> GameProgress:
        """Fresh progress: basic elements discovered, everything else at zero."""
        return GameProgress(
            game_state=GameState(elements=initial_elements()),
            achievement_state=AchievementState(),
            power_up_state=PowerUpState(),
        )

    # -- Scoring helpers -------------------------------------------------

    @classmethod
    def points_for(cls, difficulty: Difficulty | None, is_new_discovery: bool) -> int:
        new_points, repeat_points = cls.POINTS.get(difficulty, cls.DEFAULT_POINTS)
        return new_points if is_new_discovery else repeat_points

    @classmethod
    def power_gain_for(cls, difficulty: Difficulty | None, multiplier: float) -> int:
        base = cls.BASE_POWER.get(difficulty, cls.DEFAULT_BASE_POWER)
        return _round_half_up(base * multiplier)

    @classmethod
    def level_for(cls, discovered_count: int) -> int:
        return discovered_count // cls.ELEMENTS_PER_LEVEL + 1

    # -- Staging ---------------------------------------------------------

    def stage_element(self, progress: GameProgress, element_id: str) -> GameProgress:
        """
        Put an element in the first empty staging slot.

        Silent no-op when the element is already staged or both slots are full.
        """
        if progress is None or progress.game_state is None or not element_id:
            return progress

        slots = progress.game_state.combining_elements
        if element_id in slots or None not in slots:
            return progress

        index = slots.index(None)
        new_slots = (element_id, slots[1]) if index == 0 else (slots[0], element_id)
        return replace(progress, game_state=replace(progress.game_state, combining_elements=new_slots))

    def unstage_element(self, progress: GameProgress, element_id: str) -> GameProgress:
        """Clear whichever slot holds the element; no-op if it is not staged."""
        if progress is None or progress.game_state is None:
            return progress

        slots = progress.game_state.combining_elements
        if element_id not in slots:
            return progress

        new_slots = tuple(None if slot == element_id else slot for slot in slots)
        return replace(progress, game_state=replace(progress.game_state, combining_elements=new_slots))

    # -- Combination -----------------------------------------------------

    def attempt_combination(self, progress: GameProgress | None) -> CombinationOutcome:
        """
        Combine the two staged elements.

        Returns:
            CombinationOutcome; success is False without touching state when
            fewer than two elements are staged
        """
        if progress is None or progress.game_state is None:
            logger.error("attempt_combination called without a game state")
            return CombinationOutcome(progress=progress or self.new_game(), success=False)

        first, second = progress.game_state.combining_elements
        if first is None or second is None:
            return CombinationOutcome(progress=progress, success=False)

        return self.combine_elements(progress, first, second)

    def combine_elements(self, progress: GameProgress, id_a: str, id_b: str) -> CombinationOutcome:
        """
        Resolve a pair of elements against the recipe catalog.

        Args:
            progress: Current progress
            id_a: First element id
            id_b: Second element id

        Returns:
            CombinationOutcome with the updated progress and notifications
        """
        if progress is None or progress.game_state is None:
            logger.error("combine_elements called without a game state")
            return CombinationOutcome(progress=progress or self.new_game(), success=False)

        state = progress.game_state
        combination = find_combination(id_a, id_b)

        if combination is None:
            return self._no_reaction(progress)

        result = element_by_id(state, combination.result)
        if result is None:
            logger.error(
                "Recipe %s + %s produces unknown element %r",
                id_a, id_b, combination.result,
            )
            return self._no_reaction(progress)

        return self._react(progress, (id_a, id_b), combination, result)

    def _no_reaction(self, progress: GameProgress) -> CombinationOutcome:
        failed = replace(
            progress.game_state,
            combining_elements=(None, None),
            successful_combos_in_a_row=0,
            last_combination_success=False,
        )
        return CombinationOutcome(
            progress=replace(progress, game_state=failed),
            success=False,
            events=(notices.no_reaction(),),
        )

    def _react(
        self,
        progress: GameProgress,
        inputs: tuple[str, str],
        combination: Combination,
        result: Element,
    ) -> CombinationOutcome:
        state = progress.game_state
        now = self.clock()
        sorted_inputs = tuple(sorted(inputs))
        is_new = not result.discovered

        elements = tuple(
            replace(e, discovered=True) if e.id == result.id else e
            for e in state.elements
        )

        discovery = None
        discoveries = state.discoveries
        if is_new:
            discovery = Discovery(
                id=f"{int(now * 1000)}-{result.id}",
                result=result.id,
                elements=sorted_inputs,
                timestamp=now,
                description=combination.description,
            )
            discoveries = (discovery, *discoveries)

        points = self.points_for(combination.difficulty, is_new)
        discovered_count = sum(1 for e in elements if e.discovered)
        level = self.level_for(discovered_count)

        counts = dict(state.combination_counts)
        for element_id in inputs:
            counts[element_id] = counts.get(element_id, 0) + 1

        chain = state.current_combo_chain + 1

        # Applied on every success, new discovery or repeat.
        power_gained = self.power_gain_for(combination.difficulty, state.combo_multiplier)
        powers = dict(state.element_powers)
        for element_id in inputs:
            powers[element_id] = powers.get(element_id, 0) + power_gained
        multiplier = min(state.combo_multiplier + self.MULTIPLIER_STEP, self.MAX_MULTIPLIER)

        new_state = replace(
            state,
            elements=elements,
            discoveries=discoveries,
            combining_elements=(None, None),
            level=level,
            score=state.score + points,
            successful_combos_in_a_row=state.successful_combos_in_a_row + 1,
            last_combination_success=True,
            combination_counts=counts,
            current_combo_chain=chain,
            max_combo_chain=max(chain, state.max_combo_chain),
            element_powers=powers,
            combo_multiplier=multiplier,
            total_power_gained=state.total_power_gained + power_gained,
        )

        events: list[EventPayload] = []
        if is_new:
            logger.info("New discovery: %s from %s + %s", result.id, *sorted_inputs)
            events.append(notices.new_discovery(result.id, result.name))

        evaluation = achievements.evaluate(new_state, progress.achievement_state)
        events.extend(evaluation.events)
        new_state = self.apply_rewards(new_state, evaluation.rewards)

        if new_state.level > state.level:
            events.append(notices.level_up(new_state.level))

        new_progress = replace(
            progress,
            game_state=new_state,
            achievement_state=evaluation.achievement_state,
        )
        return CombinationOutcome(
            progress=new_progress,
            success=True,
            discovery=discovery,
            element=element_by_id(new_state, result.id),
            points=points,
            power_gained=power_gained,
            events=tuple(events),
        )

    @staticmethod
    def apply_rewards(state: GameState, rewards: tuple[Reward, ...]) -> GameState:
        """
        Apply achievement rewards.

        ELEMENT rewards force-discover the element; HINT and CATEGORY rewards
        only produce notifications and leave the state as is.
        """
        granted = {r.value for r in rewards if r.kind == RewardKind.ELEMENT}
        if not granted:
            return state

        elements = tuple(
            replace(e, discovered=True) if e.id in granted else e
            for e in state.elements
        )
        return replace(state, elements=elements)

    # -- Simple actions --------------------------------------------------

    @staticmethod
    def toggle_favorite(progress: GameProgress | None, element_id: str) -> GameProgress | None:
        if progress is None or progress.game_state is None:
            return progress

        favorites = progress.game_state.favorites
        if element_id in favorites:
            new_favorites = tuple(f for f in favorites if f != element_id)
        else:
            new_favorites = (*favorites, element_id)
        return replace(progress, game_state=replace(progress.game_state, favorites=new_favorites))

    def view_element_details(self, progress: GameProgress | None, element_id: str | None) -> GameProgress:
        if progress is None:
            progress = self.new_game()
        state = progress.game_state
        if state is None:
            state = self.new_game().game_state
        return replace(progress, game_state=replace(state, viewed_element_details=element_id))

    def activate_power_up(self, progress: GameProgress, power_up_id: str) -> tuple[GameProgress, Activation]:
        """
        Activate a power-up for a player.

        Effects that discover elements can satisfy achievement conditions, so
        achievements are evaluated again after a successful activation.

        Returns:
            Tuple of (new_progress, activation); the input progress is
            returned as is when the activation is rejected
        """
        if progress is None or progress.game_state is None:
            logger.error("activate_power_up called without a game state")
            return progress, Activation(self.new_game().game_state, PowerUpState(), False)

        state = progress.game_state
        now = self.clock()

        # Only draw a hint once the activation is known to go through.
        hint = None
        power_up = power_ups.power_up_by_id(power_up_id)
        if (
            power_up is not None
            and power_up.effect == EffectKind.SMART_HINT
            and power_ups.is_available(power_up, state, progress.power_up_state, now).available
        ):
            hint = self.suggest_hint(state)

        activation = power_ups.activate(
            state,
            power_up_id,
            progress.power_up_state,
            now=now,
            rng=self.rng,
            hint=hint,
        )
        if not activation.success:
            return progress, activation

        evaluation = achievements.evaluate(activation.game_state, progress.achievement_state)
        game_state = self.apply_rewards(activation.game_state, evaluation.rewards)
        game_state = replace(game_state, level=self.level_for(game_state.discovered_count))

        events = [*activation.events, *evaluation.events]
        if game_state.level > state.level:
            events.append(notices.level_up(game_state.level))

        activation = replace(activation, game_state=game_state, events=tuple(events))
        new_progress = GameProgress(
            game_state=game_state,
            achievement_state=evaluation.achievement_state,
            power_up_state=activation.power_up_state,
        )
        return new_progress, activation

    # -- Queries ---------------------------------------------------------

    @staticmethod
    def discovered_elements(state: GameState | None) -> list[Element]:
        if state is None or not state.elements:
            return []
        return [e for e in state.elements if e.discovered]

    @classmethod
    def discovered_by_category(cls, state: GameState | None) -> dict[Category, list[Element]]:
        grouped: dict[Category, list[Element]] = {}
        for element in cls.discovered_elements(state):
            grouped.setdefault(element.category, []).append(element)
        return grouped

    @staticmethod
    def discovery_for(state: GameState | None, element_id: str) -> Discovery | None:
        """The discovery record that produced an element, if any."""
        if state is None:
            return None
        for discovery in state.discoveries:
            if discovery.result == element_id:
                return discovery
        return None

    @classmethod
    def compute_stats(cls, state: GameState | None) -> GameStats:
        """Discovery counts; all zeros for a missing or empty element list."""
        if state is None or not state.elements:
            return GameStats()

        discovered = cls.discovered_elements(state)
        total = len(state.elements)
        by_category = {category: 0 for category in Category}
        for element in discovered:
            by_category[element.category] += 1

        return GameStats(
            total_elements=total,
            discovered_elements=len(discovered),
            percent_complete=_round_half_up(len(discovered) / total * 100),
            by_category=by_category,
        )

    @classmethod
    def possible_combinations(cls, state: GameState | None) -> list[Combination]:
        """Recipes whose inputs are both discovered and whose result is not."""
        if state is None or not state.elements:
            return []

        discovered_ids = {e.id for e in state.elements if e.discovered}
        possible = []
        for combo in effective_combinations():
            a, b = combo.elements
            if a not in discovered_ids or b not in discovered_ids:
                continue
            result = element_by_id(state, combo.result)
            if result is not None and not result.discovered:
                possible.append(combo)
        return possible

    def suggest_hint(self, state: GameState | None) -> Hint:
        """
        Pick a hint for the player.

        With no reachable undiscovered recipe, returns a message matched to how
        far the player has progressed.
        """
        if state is None or not state.elements:
            return Hint("Try combining the basic elements to get started!")

        possible = self.possible_combinations(state)
        if not possible:
            discovered = len(self.discovered_elements(state))
            if discovered > len(state.elements) * self.ALMOST_DONE_RATIO:
                return Hint("You've discovered most elements! Keep combining to find the rare ones.")
            if discovered <= self.BEGINNER_DISCOVERED:
                return Hint("Try combining the basic elements (Air, Water, Fire, Earth) in different ways.")
            return Hint("Try combining elements you haven't paired yet.")

        combo = self.rng.choice(possible)
        first = element_by_id(state, combo.elements[0])
        second = element_by_id(state, combo.elements[1])
        if first is None or second is None:
            return Hint("Keep experimenting with different combinations!")

        template = self.rng.choice(self.HINT_TEMPLATES)
        return Hint(template.format(a=first.name, b=second.name), (first.id, second.id))

    def assistant_summary(self, state: GameState | None) -> str:
        """Narrative progress message for the in-game assistant."""
        if state is None or not state.elements:
            return ("Welcome to Element Alchemy! Try combining the basic elements "
                    "to start your journey.")

        discovered = len(self.discovered_elements(state))
        total = len(state.elements)
        percent = _round_half_up(discovered / total * 100)

        if percent < 10:
            return ("Start by combining the basic elements - Air, Water, Fire, and Earth. "
                    "Try different combinations to see what you can create!")
        if percent < 25:
            return (f"Great progress! You've discovered {discovered} elements so far. "
                    "Remember that you can combine newly created elements with basic ones "
                    "to discover more complex elements.")
        if percent < 50:
            hint = self.suggest_hint(state)
            return (f"You've discovered {discovered} elements ({percent}%)! Keep experimenting "
                    f"with different combinations to unlock rare elements. {hint.text}")
        if percent < 75:
            return (f"You're becoming a master alchemist with {discovered} elements discovered! "
                    "Try some unexpected combinations - sometimes the most unlikely pairs "
                    "create amazing results.")
        return (f"Impressive! You've discovered {discovered} out of {total} elements "
                f"({percent}%). Only the rarest combinations remain! Keep experimenting "
                "to find them all.")
