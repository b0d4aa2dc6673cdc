from datetime import datetime, timedelta

from vocabquiz.engine import QuizEngine
from vocabquiz.models import QuizMode
from vocabquiz.sessions import SessionStore


class TestSessionStore:
    def test_create_and_get(self, catalog):
        store = SessionStore()
        session_id, engine = store.create(catalog)

        assert isinstance(engine, QuizEngine)
        assert store.get(session_id) is engine
        assert len(store) == 1

    def test_sessions_are_isolated(self, catalog):
        store = SessionStore()
        _, first = store.create(catalog)
        _, second = store.create(catalog)

        first.start_game(QuizMode.SYNONYMS)
        assert second.current_state().mode is QuizMode.MENU

    def test_unknown_session(self):
        store = SessionStore()
        assert store.get(None) is None
        assert store.get("missing") is None

    def test_expired_session_is_dropped(self, catalog):
        store = SessionStore(timeout_minutes=1)
        session_id, engine = store.create(catalog)
        store._sessions[session_id] = (engine, datetime.now() - timedelta(minutes=5))

        assert store.get(session_id) is None
        assert len(store) == 0

    def test_delete(self, catalog):
        store = SessionStore()
        session_id, _ = store.create(catalog)
        store.delete(session_id)
        store.delete("missing")

        assert store.get(session_id) is None
