"""
Element Alchemy Notifications.

Event types for user-facing notices and the sinks that deliver them.
"""

from src.notifications.events import EventPayload, GameEvent, Variant
from src.notifications.sinks import (
    CollectingSink,
    LoggingSink,
    NotificationSink,
    dispatch,
)

__all__ = [
    "CollectingSink",
    "EventPayload",
    "GameEvent",
    "LoggingSink",
    "NotificationSink",
    "Variant",
    "dispatch",
]
