"""Game session entity"""
from dataclasses import dataclass, field
from typing import Optional
import time

from slot_engine.domain.entities.game_state import GameState


@dataclass
class GameSession:
    """Domain entity holding a player's balance, jackpot pool and controller state"""

    session_id: str
    balance: float
    jackpot_pool: float
    game_state: GameState
    is_spinning: bool = False
    spin_started_at: Optional[float] = None
    created_at: float = field(default_factory=time.time)
    updated_at: Optional[float] = None

    def can_afford(self, amount: float) -> bool:
        return self.balance >= amount

    def spin_in_progress(self, now: float, timeout: float) -> bool:
        """Whether a live spin holds the guard.

        A guard without a start time, or one older than ``timeout`` seconds,
        was left behind by a process that died mid-spin and no longer counts.
        """
        if not self.is_spinning or self.spin_started_at is None:
            return False
        return now - self.spin_started_at < timeout

    def to_dict(self) -> dict:
        """Convert to dictionary for storage"""
        return {
            "session_id": self.session_id,
            "balance": self.balance,
            "jackpot_pool": self.jackpot_pool,
            "is_spinning": self.is_spinning,
            "spin_started_at": self.spin_started_at,
            "game_state": self.game_state.to_dict(),
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'GameSession':
        """Create from dictionary"""
        return cls(
            session_id=data.get("session_id"),
            balance=data.get("balance", 0),
            jackpot_pool=data.get("jackpot_pool", 0),
            game_state=GameState.from_dict(data.get("game_state", {})),
            is_spinning=data.get("is_spinning", False),
            spin_started_at=data.get("spin_started_at"),
            created_at=data.get("created_at", time.time()),
            updated_at=data.get("updated_at")
        )
