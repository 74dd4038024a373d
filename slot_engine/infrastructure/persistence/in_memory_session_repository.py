"""In-memory session repository implementation"""
import logging
from threading import Lock
from typing import Dict, Optional

from slot_engine.application.ports.session_repository_port import SessionRepositoryPort
from slot_engine.domain.entities.game_session import GameSession

logger = logging.getLogger(__name__)


class InMemorySessionRepository(SessionRepositoryPort):
    """Process-local session storage; sessions live as long as the process"""

    def __init__(self):
        self._sessions: Dict[str, GameSession] = {}
        self.lock = Lock()

    def find(self, session_id: str) -> Optional[GameSession]:
        with self.lock:
            return self._sessions.get(session_id)

    def save(self, session: GameSession) -> GameSession:
        with self.lock:
            self._sessions[session.session_id] = session
        return session
