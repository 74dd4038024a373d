"""Sound cue recorder: queues cues for the browser client to play"""
import logging
from collections import defaultdict, deque
from threading import Lock
from typing import Deque, Dict, List

from slot_engine.application.ports.audio_port import AudioPort

logger = logging.getLogger(__name__)


class SoundCueRecorder(AudioPort):

    def __init__(self, max_pending: int = 50):
        self.max_pending = max_pending
        self._pending: Dict[str, Deque[str]] = defaultdict(lambda: deque(maxlen=self.max_pending))
        self.lock = Lock()

    def play(self, session_id: str, cue: str) -> None:
        with self.lock:
            self._pending[session_id].append(cue)
        logger.debug(f"Queued sound {cue} for session {session_id}")

    def drain(self, session_id: str) -> List[str]:
        """Return and forget the cues queued for a session, oldest first"""
        with self.lock:
            cues = self._pending.pop(session_id, None)
        return list(cues) if cues else []
