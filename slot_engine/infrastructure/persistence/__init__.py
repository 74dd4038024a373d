from .in_memory_session_repository import InMemorySessionRepository
from .in_memory_session_store import InMemorySessionStore
from .mongo_session_repository import MongoSessionRepository
from .mongo_spin_history import MongoSpinHistory

__all__ = [
    'InMemorySessionRepository',
    'InMemorySessionStore',
    'MongoSessionRepository',
    'MongoSpinHistory'
]
