"""Adaptive controller state for one player session"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict
import time

from slot_engine.domain.entities.symbols import Symbol


class VolatilityLevel(Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass
class GameState:
    """Mutable session record, updated once per spin by the weight controller"""

    current_rtp: float
    jackpot_weight: float
    session_wins: int = 0
    session_spins: int = 0
    volatility: VolatilityLevel = VolatilityLevel.MEDIUM
    last_win_amount: float = 0
    consecutive_losses: int = 0
    spins_since_jackpot: int = 0
    total_wagered: float = 0
    total_won: float = 0
    last_activity_time: float = field(default_factory=time.time)
    current_weights: Dict[Symbol, float] = field(default_factory=dict)

    @property
    def realized_rtp(self) -> float:
        """Total paid out over total wagered for the session"""
        if not self.total_wagered:
            return 0.0
        return self.total_won / self.total_wagered

    @property
    def win_rate(self) -> float:
        if not self.session_spins:
            return 0.0
        return self.session_wins / self.session_spins

    def to_dict(self) -> dict:
        """Convert to dictionary for storage"""
        return {
            "current_rtp": self.current_rtp,
            "jackpot_weight": self.jackpot_weight,
            "session_wins": self.session_wins,
            "session_spins": self.session_spins,
            "volatility": self.volatility.value,
            "last_win_amount": self.last_win_amount,
            "consecutive_losses": self.consecutive_losses,
            "spins_since_jackpot": self.spins_since_jackpot,
            "total_wagered": self.total_wagered,
            "total_won": self.total_won,
            "last_activity_time": self.last_activity_time,
            "current_weights": {symbol.name: weight for symbol, weight in self.current_weights.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'GameState':
        """Create from dictionary"""
        return cls(
            current_rtp=data.get("current_rtp", 0),
            jackpot_weight=data.get("jackpot_weight", 0),
            session_wins=data.get("session_wins", 0),
            session_spins=data.get("session_spins", 0),
            volatility=VolatilityLevel(data.get("volatility", VolatilityLevel.MEDIUM.value)),
            last_win_amount=data.get("last_win_amount", 0),
            consecutive_losses=data.get("consecutive_losses", 0),
            spins_since_jackpot=data.get("spins_since_jackpot", 0),
            total_wagered=data.get("total_wagered", 0),
            total_won=data.get("total_won", 0),
            last_activity_time=data.get("last_activity_time", time.time()),
            current_weights={
                Symbol[name]: weight for name, weight in data.get("current_weights", {}).items()
            }
        )
