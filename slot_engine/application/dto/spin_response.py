"""Spin response DTO"""
from dataclasses import dataclass, field
from typing import List

from slot_engine.domain.entities.grid import Grid
from slot_engine.domain.entities.win_result import WinResult


@dataclass
class SpinResponse:
    """Response DTO for a settled spin"""

    grid: Grid
    win_result: WinResult
    total_bet: float
    updated_balance: float
    updated_jackpot_pool: float
    pool_awarded: float = 0
    near_miss_columns: List[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to camelCase dictionary (browser client)"""
        result = {
            "grid": self.grid.to_list(),
            "winnings": self.win_result.winnings,
            "jackpot": self.win_result.jackpot,
            "lines": [line.to_dict() for line in self.win_result.lines],
            "totalBet": self.total_bet,
            "balance": self.updated_balance,
            "jackpotPool": self.updated_jackpot_pool
        }
        if self.pool_awarded:
            result["poolAwarded"] = self.pool_awarded
        if self.win_result.near_misses:
            result["nearMisses"] = [near_miss.to_dict() for near_miss in self.win_result.near_misses]
        return result

    def to_snake_case(self) -> dict:
        """Convert to snake_case dictionary (REST API)"""
        result = {
            "grid": self.grid.to_list(),
            "win_result": self.win_result.to_dict(),
            "total_bet": self.total_bet,
            "updated_balance": self.updated_balance,
            "updated_jackpot_pool": self.updated_jackpot_pool
        }
        if self.pool_awarded:
            result["pool_awarded"] = self.pool_awarded
        if self.near_miss_columns:
            result["near_miss_columns"] = self.near_miss_columns
        return result
