"""
Element Alchemy - Notification Sinks

Delivery targets for engine notifications. The engine never calls a sink
itself; sessions hand each outcome's events to one via dispatch().
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from src.notifications.events import EventPayload, Variant

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Anything that can show a notification to the player."""

    def notify(self, payload: EventPayload) -> None: ...


class LoggingSink:
    """Writes notifications to the log. Default sink for headless use."""

    def __init__(self, name: str = "alchemy.notifications") -> None:
        self._logger = logging.getLogger(name)

    def notify(self, payload: EventPayload) -> None:
        level = logging.WARNING if payload.variant is Variant.DESTRUCTIVE else logging.INFO
        self._logger.log(level, "%s %s", payload.title, payload.description)


class CollectingSink:
    """Keeps notifications in memory, oldest first."""

    def __init__(self) -> None:
        self.payloads: list[EventPayload] = []

    def notify(self, payload: EventPayload) -> None:
        self.payloads.append(payload)

    def clear(self) -> None:
        self.payloads.clear()


def dispatch(events: Iterable[EventPayload], sink: NotificationSink | None) -> int:
    """Deliver events to a sink.

    A failing sink is logged and skipped so notification delivery never
    breaks a game action.

    Returns:
        Number of events delivered successfully.
    """
    if sink is None:
        return 0

    delivered = 0
    for payload in events:
        try:
            sink.notify(payload)
            delivered += 1
        except Exception:
            logger.exception("Notification sink failed for %s", payload.event.name)
    return delivered
