"""Win evaluation result entities"""
from dataclasses import dataclass, field
from typing import List, Optional

from slot_engine.domain.entities.symbols import Symbol


@dataclass(frozen=True)
class LineWin:
    line_index: int
    symbol: Symbol
    multiplier: float
    run_length: int = 3

    def to_dict(self) -> dict:
        return {
            "line_index": self.line_index,
            "symbol": self.symbol.glyph,
            "multiplier": self.multiplier,
            "run_length": self.run_length,
        }


@dataclass(frozen=True)
class NearMiss:
    """Two matching symbols on a line; pays a flat consolation, not a win"""

    line_index: int
    symbol: Symbol
    consolation_prize: float

    def to_dict(self) -> dict:
        return {
            "line_index": self.line_index,
            "symbol": self.symbol.glyph,
            "consolation_prize": self.consolation_prize,
        }


@dataclass
class WinResult:
    """Aggregate evaluation of one spin"""

    winnings: float = 0
    jackpot: bool = False
    symbol: Optional[Symbol] = None
    lines: List[LineWin] = field(default_factory=list)
    near_misses: List[NearMiss] = field(default_factory=list)
    jackpot_payout: float = 0
    consolation: float = 0

    @property
    def is_win(self) -> bool:
        return bool(self.lines)

    @property
    def jackpot_paid(self) -> bool:
        return self.jackpot_payout > 0

    def to_dict(self) -> dict:
        result = {
            "winnings": self.winnings,
            "jackpot": self.jackpot,
            "lines": [line.to_dict() for line in self.lines],
        }
        if self.symbol is not None:
            result["symbol"] = self.symbol.glyph
        if self.jackpot_payout:
            result["jackpot_payout"] = self.jackpot_payout
        if self.near_misses:
            result["near_misses"] = [near_miss.to_dict() for near_miss in self.near_misses]
            result["consolation"] = self.consolation
        return result
