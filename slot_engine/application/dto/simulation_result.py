"""RTP simulation result DTO"""
from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass
class SimulationResult:
    """Aggregate statistics of a simulated session"""

    spins: int
    total_wagered: float
    total_returned: float
    rtp: float
    ema_rtp: float
    target_rtp: float
    hit_rate: float
    avg_win: float
    win_std: float
    p95_win: float
    max_win: float
    jackpot_bonuses: int
    full_jackpots: int
    near_miss_columns: int
    final_volatility: str
    confidence_95: Tuple[float, float] = (0.0, 0.0)
    final_weights: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "spins": self.spins,
            "total_wagered": round(self.total_wagered, 2),
            "total_returned": round(self.total_returned, 2),
            "rtp": round(self.rtp, 4),
            "ema_rtp": round(self.ema_rtp, 4),
            "target_rtp": self.target_rtp,
            "hit_rate": round(self.hit_rate, 4),
            "avg_win": round(self.avg_win, 4),
            "win_std": round(self.win_std, 4),
            "p95_win": round(self.p95_win, 2),
            "max_win": round(self.max_win, 2),
            "jackpot_bonuses": self.jackpot_bonuses,
            "full_jackpots": self.full_jackpots,
            "near_miss_columns": self.near_miss_columns,
            "final_volatility": self.final_volatility,
            "confidence_95": [round(x, 6) for x in self.confidence_95],
            "final_weights": {name: round(weight, 6) for name, weight in self.final_weights.items()},
        }
