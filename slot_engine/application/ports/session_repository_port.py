"""Session repository port (interface)"""
from abc import ABC, abstractmethod
from typing import Optional

from slot_engine.domain.entities.game_session import GameSession


class SessionRepositoryPort(ABC):
    """Port for game session persistence"""

    @abstractmethod
    def find(self, session_id: str) -> Optional[GameSession]:
        """Get a session, or None if it does not exist yet"""
        pass

    @abstractmethod
    def save(self, session: GameSession) -> GameSession:
        """Store the session, returns the stored session"""
        pass
