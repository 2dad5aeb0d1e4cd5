"""
Element Alchemy - Game Session

Ties the pure engine to one player's persisted progress. Each action runs
under the session lock, so a session has at most one mutation in flight.
After every mutation the new snapshot is saved and the outcome's
notifications are handed to the sink.
"""

from __future__ import annotations

import logging
import random
import threading

from src.config.settings import Settings, get_settings
from src.database.progress import ProgressManager
from src.database.store import create_store
from src.engine.alchemy import AlchemyEngine
from src.engine.base import (
    Activation,
    CombinationOutcome,
    GameProgress,
    GameStats,
    Hint,
)
from src.notifications.events import EventPayload, GameEvent, game_reset
from src.notifications.sinks import LoggingSink, NotificationSink, dispatch

logger = logging.getLogger(__name__)


class GameSession:
    """A single player's running game.

    Wraps AlchemyEngine with the current snapshot, persistence, and
    notification delivery. Safe to share between threads.
    """

    def __init__(
        self,
        engine: AlchemyEngine,
        manager: ProgressManager,
        sink: NotificationSink | None = None,
    ) -> None:
        self.engine = engine
        self.manager = manager
        self.sink = sink
        self._lock = threading.Lock()
        self._progress = manager.load()

    @property
    def progress(self) -> GameProgress:
        """Latest snapshot. Treat as read-only."""
        return self._progress

    def _commit(self, progress: GameProgress, events: tuple[EventPayload, ...] = ()) -> None:
        """Adopt a new snapshot, persist it, and deliver notifications."""
        changed = progress is not self._progress
        self._progress = progress
        if changed and not self.manager.save(progress):
            logger.warning("Progress not persisted; keeping in-memory snapshot")
        dispatch(events, self.sink)

    # -- Actions ---------------------------------------------------------

    def stage(self, element_id: str) -> GameProgress:
        with self._lock:
            self._commit(self.engine.stage_element(self._progress, element_id))
            return self._progress

    def unstage(self, element_id: str) -> GameProgress:
        with self._lock:
            self._commit(self.engine.unstage_element(self._progress, element_id))
            return self._progress

    def combine(self) -> CombinationOutcome:
        """Attempt the staged combination."""
        with self._lock:
            outcome = self.engine.attempt_combination(self._progress)
            self._commit(outcome.progress, outcome.events)
            return outcome

    def combine_pair(self, id_a: str, id_b: str) -> CombinationOutcome:
        """Combine two elements directly, bypassing the staging slots.

        The only way to try an element with itself, since staging rejects
        an id that is already staged.
        """
        with self._lock:
            outcome = self.engine.combine_elements(self._progress, id_a, id_b)
            self._commit(outcome.progress, outcome.events)
            return outcome

    def toggle_favorite(self, element_id: str) -> GameProgress:
        with self._lock:
            self._commit(self.engine.toggle_favorite(self._progress, element_id))
            return self._progress

    def view_details(self, element_id: str | None) -> GameProgress:
        with self._lock:
            self._commit(self.engine.view_element_details(self._progress, element_id))
            return self._progress

    def activate_power_up(self, power_up_id: str) -> Activation:
        with self._lock:
            progress, activation = self.engine.activate_power_up(self._progress, power_up_id)
            self._commit(progress, activation.events)
            return activation

    def reset(self) -> GameProgress:
        """Discard all progress and start over."""
        with self._lock:
            self._progress = self.manager.reset()
            logger.info("Game reset for key %r", self.manager.key)
            dispatch((game_reset(),), self.sink)
            return self._progress

    # -- Read-only helpers -----------------------------------------------

    def stats(self) -> GameStats:
        return self.engine.compute_stats(self._progress.game_state)

    def hint(self) -> Hint:
        """Suggest a hint and send it to the sink."""
        hint = self.engine.suggest_hint(self._progress.game_state)
        dispatch((EventPayload(
            event=GameEvent.HINT,
            title="Hint",
            description=hint.text,
            data={"elements": hint.elements},
        ),), self.sink)
        return hint

    def assistant_message(self) -> str:
        return self.engine.assistant_summary(self._progress.game_state)


def open_session(
    settings: Settings | None = None,
    *,
    key: str | None = None,
    sink: NotificationSink | None = None,
) -> GameSession:
    """
    Build a GameSession from settings.

    Args:
        settings: Application settings (defaults to get_settings())
        key: Storage key override, one per player
        sink: Notification sink (defaults to LoggingSink)

    Returns:
        A session with its progress already loaded
    """
    settings = settings or get_settings()
    rng = random.Random(settings.random_seed)
    engine = AlchemyEngine(rng=rng)
    manager = ProgressManager(create_store(settings), key or settings.save_key)
    return GameSession(engine, manager, sink if sink is not None else LoggingSink())
