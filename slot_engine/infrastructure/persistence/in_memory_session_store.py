"""In-memory session flag store implementation"""
from collections import defaultdict
from typing import Dict

from slot_engine.application.ports.session_store_port import SessionStorePort


class InMemorySessionStore(SessionStorePort):
    """Per-session presentation flags, scoped to the process like browser session storage"""

    def __init__(self):
        self._flags: Dict[str, Dict[str, bool]] = defaultdict(dict)

    def get_flag(self, session_id: str, key: str) -> bool:
        return self._flags.get(session_id, {}).get(key, False)

    def set_flag(self, session_id: str, key: str, value: bool = True) -> None:
        self._flags[session_id][key] = value
