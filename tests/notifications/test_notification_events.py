"""Tests for src/notifications/events.py: event builders and payloads."""

import pytest

from src.notifications.events import (
    EventPayload,
    GameEvent,
    Variant,
    achievement_unlocked,
    game_reset,
    level_up,
    new_discovery,
    no_reaction,
    reward_granted,
)


class TestEventPayload:
    def test_defaults(self):
        payload = EventPayload(event=GameEvent.HINT, title="Hint")
        assert payload.description == ""
        assert payload.variant == Variant.DEFAULT
        assert payload.data == {}

    def test_data_ignored_in_equality(self):
        a = EventPayload(GameEvent.HINT, "Hint", data={"elements": ("a", "b")})
        b = EventPayload(GameEvent.HINT, "Hint", data={})
        assert a == b


class TestBuilders:
    def test_no_reaction_is_destructive(self):
        payload = no_reaction()
        assert payload.event == GameEvent.NO_REACTION
        assert payload.title == "No Reaction"
        assert payload.variant == Variant.DESTRUCTIVE

    def test_new_discovery(self):
        payload = new_discovery("steam", "Steam")
        assert payload.title == "New Discovery!"
        assert payload.description == "You created Steam"
        assert payload.data["element_id"] == "steam"

    def test_level_up(self):
        payload = level_up(3)
        assert payload.event == GameEvent.LEVEL_UP
        assert payload.data["level"] == 3
        assert "3" in payload.description

    def test_achievement_unlocked(self):
        payload = achievement_unlocked("first_discovery", "First Steps", "Make your first discovery", "🥚")
        assert payload.description == "🥚 First Steps: Make your first discovery"
        assert payload.data["achievement_id"] == "first_discovery"

    @pytest.mark.parametrize("kind,title", [
        ("element", "New Element Unlocked!"),
        ("category", "New Category Unlocked!"),
        ("hint", "Hint Unlocked!"),
    ])
    def test_reward_titles(self, kind: str, title: str):
        payload = reward_granted(kind, "gold")
        assert payload.event == GameEvent.REWARD_GRANTED
        assert payload.title == title
        assert "gold" in payload.description

    def test_unknown_reward_kind_raises(self):
        with pytest.raises(KeyError):
            reward_granted("badge", "x")

    def test_game_reset(self):
        assert game_reset().event == GameEvent.GAME_RESET
