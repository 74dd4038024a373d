"""Audio port (interface)"""
from abc import ABC, abstractmethod


class AudioPort(ABC):
    """Port for sound playback; the engine only names the cue to play"""

    @abstractmethod
    def play(self, session_id: str, cue: str) -> None:
        """Request playback of a sound cue for a session"""
        pass
