"""MongoDB session repository implementation"""
import logging
from typing import Optional
from pymongo.database import Database

from slot_engine.application.ports.session_repository_port import SessionRepositoryPort
from slot_engine.domain.entities.game_session import GameSession

logger = logging.getLogger(__name__)


class MongoSessionRepository(SessionRepositoryPort):
    """MongoDB implementation of session repository"""

    def __init__(self, db: Database):
        self.db = db
        self.collection = db.sessions

    def find(self, session_id: str) -> Optional[GameSession]:
        """Get session from MongoDB"""
        document = self.collection.find_one({"session_id": session_id})
        if not document:
            return None
        return GameSession.from_dict(document)

    def save(self, session: GameSession) -> GameSession:
        """Upsert the whole session document"""
        self.collection.replace_one(
            {"session_id": session.session_id},
            session.to_dict(),
            upsert=True
        )
        return session
