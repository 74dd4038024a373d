"""Session store port (interface)"""
from abc import ABC, abstractmethod


class SessionStorePort(ABC):
    """Port for per-session presentation flags (e.g. "has seen intro")"""

    @abstractmethod
    def get_flag(self, session_id: str, key: str) -> bool:
        pass

    @abstractmethod
    def set_flag(self, session_id: str, key: str, value: bool = True) -> None:
        pass
