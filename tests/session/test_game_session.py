"""Tests for src/session/game_session.py: GameSession and open_session."""

import threading
from unittest.mock import MagicMock, patch

import pytest

from src.config.settings import Settings
from src.database.progress import ProgressManager
from src.database.store import MemoryStore
from src.notifications.events import GameEvent
from src.notifications.sinks import CollectingSink, LoggingSink
from src.session.game_session import GameSession, open_session


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def sink():
    return CollectingSink()


@pytest.fixture
def session(engine, store, sink):
    return GameSession(engine, ProgressManager(store, key="player-1"), sink)


class TestGameSession:
    def test_starts_from_fresh_game(self, session):
        assert session.progress.game_state.discovered_count == 4

    def test_combine_persists_and_notifies(self, session, store, sink):
        session.stage("water")
        session.stage("fire")
        outcome = session.combine()

        assert outcome.success
        assert session.progress is outcome.progress
        assert '"steam"' in store.read("player-1")
        assert sink.payloads[0].event == GameEvent.DISCOVERY
        assert sink.payloads[-1].event == GameEvent.LEVEL_UP

    def test_reloads_saved_game(self, engine, store, session):
        session.stage("water")
        session.stage("fire")
        session.combine()

        reopened = GameSession(engine, ProgressManager(store, key="player-1"))
        assert reopened.progress == session.progress

    def test_no_reaction_notifies(self, session, sink):
        session.stage("air")
        session.stage("earth")
        session.unstage("earth")
        session.stage("air")
        assert session.progress.game_state.combining_elements == ("air", None)

        outcome = session.combine_pair("air", "air")

        assert not outcome.success
        assert session.progress.game_state.combining_elements == (None, None)
        assert [p.event for p in sink.payloads] == [GameEvent.NO_REACTION]

    def test_combine_pair_allows_self_pairs(self, engine, store, sink):
        progress = engine.combine_elements(engine.new_game(), "fire", "air").progress
        ProgressManager(store, key="player-1").save(progress)
        session = GameSession(engine, ProgressManager(store, key="player-1"), sink)

        outcome = session.combine_pair("energy", "energy")

        assert outcome.element.id == "time"
        assert session.progress.achievement_state.is_unlocked("create_time")

    def test_unchanged_progress_not_saved(self, engine, sink):
        store = MagicMock()
        store.read.return_value = None
        session = GameSession(engine, ProgressManager(store), sink)

        session.unstage("water")

        store.write.assert_not_called()

    def test_save_failure_keeps_snapshot(self, engine, sink):
        store = MagicMock()
        store.read.return_value = None
        store.write.side_effect = OSError("full")
        session = GameSession(engine, ProgressManager(store), sink)

        progress = session.stage("water")

        assert session.progress is progress
        assert progress.game_state.combining_elements == ("water", None)

    def test_favorites_and_details(self, session):
        session.toggle_favorite("fire")
        session.view_details("fire")
        state = session.progress.game_state
        assert state.favorites == ("fire",)
        assert state.viewed_element_details == "fire"

    def test_power_up_rejection_notifies(self, session, sink):
        activation = session.activate_power_up("multiplier_boost")
        assert not activation.success
        assert sink.payloads[0].description == "Need 50 more power"

    def test_hint_notifies(self, session, sink):
        hint = session.hint()
        assert sink.payloads[-1].event == GameEvent.HINT
        assert sink.payloads[-1].description == hint.text

    def test_stats_and_assistant(self, session):
        assert session.stats().discovered_elements == 4
        assert "4 elements" in session.assistant_message()

    def test_reset(self, session, store, sink):
        session.stage("water")
        session.stage("fire")
        session.combine()

        progress = session.reset()

        assert progress.game_state.discoveries == ()
        assert store.read("player-1") is None
        assert sink.payloads[-1].event == GameEvent.GAME_RESET

    def test_concurrent_combines_are_serialized(self, session):
        def play():
            for _ in range(20):
                session.stage("water")
                session.stage("fire")
                session.combine()

        threads = [threading.Thread(target=play) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        state = session.progress.game_state
        assert state.combination_counts["water"] == state.combination_counts["fire"]
        assert 1.0 <= state.combo_multiplier <= 3.0


class TestOpenSession:
    def test_builds_from_settings(self):
        settings = Settings(storage_backend="memory", random_seed=3, _env_file=None)
        session = open_session(settings, key="p2")

        assert session.manager.key == "p2"
        assert isinstance(session.manager.store, MemoryStore)
        assert isinstance(session.sink, LoggingSink)

    def test_uses_save_key_by_default(self):
        settings = Settings(storage_backend="memory", save_key="slot-a", _env_file=None)
        assert open_session(settings).manager.key == "slot-a"

    @patch("src.session.game_session.get_settings")
    def test_defaults_to_global_settings(self, mock_get_settings, sink):
        mock_get_settings.return_value = Settings(storage_backend="memory", _env_file=None)
        session = open_session(sink=sink)
        assert session.sink is sink
        mock_get_settings.assert_called_once()
