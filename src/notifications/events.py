"""
Element Alchemy - Notification Event Definitions

Event types and payloads the engine reports for the caller to surface.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class GameEvent(Enum):
    """Events that can occur during a game."""

    DISCOVERY = auto()
    NO_REACTION = auto()
    LEVEL_UP = auto()
    ACHIEVEMENT_UNLOCKED = auto()
    REWARD_GRANTED = auto()
    POWER_UP_ACTIVATED = auto()
    POWER_UP_UNAVAILABLE = auto()
    POWER_UP_NOT_FOUND = auto()
    ELEMENT_REVEALED = auto()
    NOTHING_TO_REVEAL = auto()
    POWER_SURGE = auto()
    HINT = auto()
    GAME_RESET = auto()


class Variant(Enum):
    """Presentation hint for a notification."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class EventPayload:
    """A user-facing notification."""

    event: GameEvent
    title: str
    description: str = ""
    variant: Variant = Variant.DEFAULT
    data: dict[str, Any] = field(default_factory=dict, compare=False)


def no_reaction() -> EventPayload:
    return EventPayload(
        event=GameEvent.NO_REACTION,
        title="No Reaction",
        description="These elements don't combine into anything.",
        variant=Variant.DESTRUCTIVE,
    )


def new_discovery(element_id: str, element_name: str) -> EventPayload:
    return EventPayload(
        event=GameEvent.DISCOVERY,
        title="New Discovery!",
        description=f"You created {element_name}",
        data={"element_id": element_id},
    )


def level_up(level: int) -> EventPayload:
    return EventPayload(
        event=GameEvent.LEVEL_UP,
        title="Level Up!",
        description=f"You've reached level {level}!",
        data={"level": level},
    )


def achievement_unlocked(achievement_id: str, name: str, description: str, icon: str) -> EventPayload:
    return EventPayload(
        event=GameEvent.ACHIEVEMENT_UNLOCKED,
        title="Achievement Unlocked!",
        description=f"{icon} {name}: {description}",
        data={"achievement_id": achievement_id, "icon": icon},
    )


_REWARD_TEXT: dict[str, tuple[str, str]] = {
    "element": ("New Element Unlocked!", "You've unlocked the {value} element as a reward!"),
    "category": ("New Category Unlocked!", "You can now discover elements in the {value} category!"),
    "hint": ("Hint Unlocked!", "{value}"),
}


def reward_granted(kind: str, value: str) -> EventPayload:
    """Build the notification for an achievement reward of the given kind."""
    title, template = _REWARD_TEXT[kind]
    return EventPayload(
        event=GameEvent.REWARD_GRANTED,
        title=title,
        description=template.format(value=value),
        data={"kind": kind, "value": value},
    )


def game_reset() -> EventPayload:
    return EventPayload(
        event=GameEvent.GAME_RESET,
        title="Game Reset",
        description="Your progress has been reset.",
    )
