import logging
import uuid
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from .catalog import WordCatalog
from .config import settings
from .engine import QuizEngine

logger = logging.getLogger(__name__)


class SessionStore:
    """In-memory quiz sessions, each with its own engine."""

    def __init__(self, timeout_minutes: int = settings.SESSION_TIMEOUT_MINUTES):
        self.timeout = timedelta(minutes=timeout_minutes)
        self._sessions: Dict[str, Tuple[QuizEngine, datetime]] = {}

    def create(self, catalog: WordCatalog) -> Tuple[str, QuizEngine]:
        session_id = str(uuid.uuid4())
        engine = QuizEngine(catalog)
        self._sessions[session_id] = (engine, datetime.now())
        logger.info(f"New session: {session_id}")
        return session_id, engine

    def get(self, session_id: Optional[str]) -> Optional[QuizEngine]:
        if not session_id or session_id not in self._sessions:
            return None
        engine, created_at = self._sessions[session_id]
        if datetime.now() - created_at > self.timeout:
            del self._sessions[session_id]
            logger.info(f"Session expired: {session_id}")
            return None
        return engine

    def delete(self, session_id: Optional[str]) -> None:
        if session_id in self._sessions:
            del self._sessions[session_id]

    def __len__(self) -> int:
        return len(self._sessions)
