"""Spin history port (interface)"""
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

from slot_engine.domain.entities.spin_record import SpinRecord


class SpinHistoryPort(ABC):
    """Port for settled spin persistence"""

    @abstractmethod
    def save(self, record: SpinRecord) -> SpinRecord:
        """Save spin record, returns record with ID"""
        pass

    @abstractmethod
    def get_session_stats(self, session_id: str, hours: int = 1) -> Optional[Dict[str, Any]]:
        """Get session statistics for RTP calculation"""
        pass
