"""Message publisher port (interface)"""
from abc import ABC, abstractmethod
from typing import Dict, Any


class MessagePublisherPort(ABC):
    """Port for publishing spin events"""

    @abstractmethod
    def publish_spin_result(self, spin_data: Dict[str, Any], trace_headers: Dict[str, str]) -> None:
        """Publish settled spin for analytics"""
        pass
