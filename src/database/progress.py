"""
Element Alchemy - Progress Manager

Load, save, and reset a player's GameProgress through a SaveStore. Loading
never raises: unreadable or invalid snapshots are discarded in favor of a
fresh game. Saving reports failure instead of raising, since the in-memory
snapshot stays authoritative for the session.
"""

import logging

from pydantic import ValidationError

from src.database.models import SavedProgress
from src.database.store import SaveStore
from src.engine.alchemy import AlchemyEngine
from src.engine.base import GameProgress

logger = logging.getLogger(__name__)


def serialize_progress(progress: GameProgress) -> str:
    """Serialize a progress to the camelCase JSON layout."""
    return SavedProgress.from_progress(progress).model_dump_json(by_alias=True)


def deserialize_progress(blob: str | bytes) -> GameProgress:
    """
    Parse and validate a saved snapshot.

    Raises:
        pydantic.ValidationError: If the blob is not valid JSON or does not
            match the saved layout
    """
    return SavedProgress.model_validate_json(blob).to_progress()


class ProgressManager:
    """Persists one player's progress under a single storage key."""

    def __init__(self, store: SaveStore, key: str = "elementAlchemyState") -> None:
        self.store = store
        self.key = key

    def load(self) -> GameProgress:
        """Load the saved progress, or a fresh game if there is none usable."""
        try:
            blob = self.store.read(self.key)
        except Exception:
            logger.exception("Failed to read saved game %r, starting fresh", self.key)
            return AlchemyEngine.new_game()

        if blob is None:
            return AlchemyEngine.new_game()

        try:
            return deserialize_progress(blob)
        except ValidationError as exc:
            logger.warning(
                "Discarding corrupt saved game %r (%d validation errors)",
                self.key, exc.error_count(),
            )
            return AlchemyEngine.new_game()

    def save(self, progress: GameProgress | None) -> bool:
        """
        Write progress to the store.

        Returns:
            True if the snapshot was written
        """
        if progress is None or progress.game_state is None:
            logger.error("Invalid game progress, cannot save")
            return False

        try:
            self.store.write(self.key, serialize_progress(progress))
        except Exception:
            logger.exception("Failed to save game %r", self.key)
            return False
        return True

    def reset(self) -> GameProgress:
        """Delete the saved game and return a fresh one."""
        try:
            self.store.delete(self.key)
        except Exception:
            logger.exception("Failed to delete saved game %r", self.key)
        return AlchemyEngine.new_game()
