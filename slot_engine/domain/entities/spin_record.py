"""Spin history entity"""
from dataclasses import dataclass, field
from typing import List, Optional
import time


@dataclass
class SpinRecord:
    """Domain entity representing one settled spin"""

    session_id: str
    bet_per_line: float
    total_bet: float
    lines: List[int]
    grid: List[List[str]]
    winnings: float
    jackpot: bool = False
    jackpot_payout: float = 0
    bet_mode: Optional[str] = None
    timestamp: float = field(default_factory=time.time)
    id: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage"""
        return {
            "session_id": self.session_id,
            "bet_per_line": self.bet_per_line,
            "total_bet": self.total_bet,
            "lines": self.lines,
            "grid": self.grid,
            "winnings": self.winnings,
            "jackpot": self.jackpot,
            "jackpot_payout": self.jackpot_payout,
            "bet_mode": self.bet_mode,
            "timestamp": self.timestamp,
            "_id": self.id
        }

