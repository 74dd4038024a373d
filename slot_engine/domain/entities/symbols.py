"""Slot machine symbols and their static configuration"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Symbol(Enum):
    """Reel symbols, rarest first"""

    FUEL = '\u26fd\ufe0f'
    CAR = '\U0001f3ce\ufe0f'
    BELL = '\U0001f514'
    AXE = '\U0001fa93'
    BOMB = '\U0001f4a3'
    FIRE = '\U0001f525'

    @property
    def glyph(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value) -> 'Symbol':
        """Resolve a symbol from its name ("FUEL") or its glyph"""
        if isinstance(value, Symbol):
            return value
        try:
            return cls[str(value).upper()]
        except KeyError:
            return cls(value)


@dataclass(frozen=True)
class Multiplier:
    """Payout multipliers per match length"""

    three: float
    four: float = 0
    five: float = 0

    def for_run(self, run_length: int) -> float:
        """Multiplier tier for a run of identical symbols (3 minimum)"""
        if run_length >= 5:
            return self.five
        if run_length == 4:
            return self.four
        if run_length == 3:
            return self.three
        return 0

    def to_dict(self) -> dict:
        return {"three": self.three, "four": self.four, "five": self.five}


@dataclass(frozen=True)
class SymbolConfig:
    """Static per-symbol data: draw weight, payouts and consolation"""

    symbol: Symbol
    base_weight: float
    multiplier: Multiplier
    jackpot_multiplier: float = 0
    consolation_prize: float = 0
    sound: Optional[str] = field(default=None, compare=False)

    def to_dict(self) -> dict:
        """Convert to dictionary for paytable display"""
        return {
            "symbol": self.symbol.name,
            "glyph": self.symbol.glyph,
            "base_weight": self.base_weight,
            "multiplier": self.multiplier.to_dict(),
            "jackpot_multiplier": self.jackpot_multiplier,
            "consolation_prize": self.consolation_prize,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SymbolConfig':
        """Create from dictionary; ``multiplier`` may be a number or a tier mapping"""
        multiplier = data.get("multiplier", 0)
        if isinstance(multiplier, dict):
            multiplier = Multiplier(
                three=multiplier.get("three", 0),
                four=multiplier.get("four", 0),
                five=multiplier.get("five", 0)
            )
        else:
            multiplier = Multiplier(three=multiplier)

        return cls(
            symbol=Symbol.parse(data["symbol"]),
            base_weight=float(data.get("base_weight", data.get("weight", 0))),
            multiplier=multiplier,
            jackpot_multiplier=data.get("jackpot_multiplier", 0),
            consolation_prize=data.get("consolation_prize", 0),
            sound=data.get("sound")
        )
