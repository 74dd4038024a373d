"""Symbol catalog: the paytable and base draw weights"""
import math
from typing import Dict, Iterable, List, Optional, Tuple

from slot_engine.domain.entities.symbols import Multiplier, Symbol, SymbolConfig
from slot_engine.domain.exceptions import ConfigurationError, UnknownSymbolError

# Bet per line that makes the jackpot bonus payable
DEFAULT_MAX_CREDIT_MULTIPLIER = 10


class SymbolCatalog:
    """Ordered, immutable table of symbol configurations.

    The declared order is the draw order used by the outcome generator, so two
    catalogs with the same weights in a different order are not equivalent.
    Catalogs are declared rarest first.
    """

    def __init__(
        self,
        configs: Iterable[SymbolConfig],
        jackpot_symbol: Symbol = Symbol.FUEL,
        max_credit_multiplier: float = DEFAULT_MAX_CREDIT_MULTIPLIER
    ):
        self._configs: Tuple[SymbolConfig, ...] = tuple(configs)
        self._by_symbol: Dict[Symbol, SymbolConfig] = {}
        self.jackpot_symbol = jackpot_symbol
        self.max_credit_multiplier = max_credit_multiplier
        self._validate()

    def _validate(self):
        if not self._configs:
            raise ConfigurationError("Symbol catalog is empty")

        for config in self._configs:
            if config.symbol in self._by_symbol:
                raise ConfigurationError(
                    f"Duplicate configuration for symbol {config.symbol.name}"
                )
            multipliers = (
                config.multiplier.three, config.multiplier.four, config.multiplier.five,
                config.jackpot_multiplier, config.consolation_prize
            )
            if config.base_weight < 0 or not math.isfinite(config.base_weight):
                raise ConfigurationError(
                    f"Weight for {config.symbol.name} must be a non-negative number",
                    {"symbol": config.symbol.name, "base_weight": config.base_weight}
                )
            if any(value < 0 for value in multipliers):
                raise ConfigurationError(
                    f"Multipliers for {config.symbol.name} must be non-negative",
                    {"symbol": config.symbol.name}
                )
            self._by_symbol[config.symbol] = config

        if self.jackpot_symbol not in self._by_symbol:
            raise UnknownSymbolError(self.jackpot_symbol.name)
        if self.total_base_weight <= 0:
            raise ConfigurationError("Symbol weights sum to zero")

    @property
    def symbols(self) -> List[Symbol]:
        """Symbols in declared (draw) order"""
        return [config.symbol for config in self._configs]

    @property
    def configs(self) -> Tuple[SymbolConfig, ...]:
        return self._configs

    @property
    def total_base_weight(self) -> float:
        return sum(config.base_weight for config in self._configs)

    @property
    def fallback_symbol(self) -> Symbol:
        """Most common symbol; ties go to the later (more common) entry"""
        best = self._configs[0]
        for config in self._configs[1:]:
            if config.base_weight >= best.base_weight:
                best = config
        return best.symbol

    def config_for(self, symbol: Symbol) -> SymbolConfig:
        """Configuration for a symbol. A missing entry is unreachable state."""
        try:
            return self._by_symbol[symbol]
        except KeyError:
            raise UnknownSymbolError(getattr(symbol, "name", symbol))

    def get(self, symbol: Symbol) -> Optional[SymbolConfig]:
        return self._by_symbol.get(symbol)

    def __contains__(self, symbol) -> bool:
        return symbol in self._by_symbol

    def __iter__(self):
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def base_weights(self) -> Dict[Symbol, float]:
        return {config.symbol: config.base_weight for config in self._configs}

    def base_probabilities(self) -> Dict[Symbol, float]:
        """Base weights normalised to sum to 1"""
        total = self.total_base_weight
        return {config.symbol: config.base_weight / total for config in self._configs}

    def to_dict(self) -> dict:
        return {
            "symbols": [config.to_dict() for config in self._configs],
            "jackpot_symbol": self.jackpot_symbol.name,
            "max_credit_multiplier": self.max_credit_multiplier,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SymbolCatalog':
        """Create from a configuration dictionary"""
        try:
            configs = [SymbolConfig.from_dict(entry) for entry in data["symbols"]]
            jackpot_symbol = Symbol.parse(data.get("jackpot_symbol", Symbol.FUEL.name))
        except KeyError as e:
            raise ConfigurationError(f"Symbol catalog entry missing field {e}")
        except ValueError as e:
            raise ConfigurationError(f"Unknown symbol in catalog: {e}")

        return cls(
            configs,
            jackpot_symbol=jackpot_symbol,
            max_credit_multiplier=data.get("max_credit_multiplier", DEFAULT_MAX_CREDIT_MULTIPLIER)
        )


def default_catalog() -> SymbolCatalog:
    """Default paytable: three-of-a-kind payouts with near-miss consolation.

    With the jackpot weight at its cap the middle row returns about 0.94 per
    credit before any steering, so the controller only trims around 0.95.
    """
    return SymbolCatalog([
        SymbolConfig(Symbol.FUEL, 2, Multiplier(three=50, four=250, five=3000),
                     jackpot_multiplier=50, consolation_prize=5, sound='winJackpot'),
        SymbolConfig(Symbol.CAR, 5, Multiplier(three=25, four=100, five=500),
                     jackpot_multiplier=25, consolation_prize=3, sound='winCar'),
        SymbolConfig(Symbol.BELL, 7, Multiplier(three=15, four=40, five=200),
                     jackpot_multiplier=15, consolation_prize=2, sound='winBell'),
        SymbolConfig(Symbol.AXE, 10, Multiplier(three=10, four=25, five=100),
                     jackpot_multiplier=10, consolation_prize=1, sound='winAxe'),
        SymbolConfig(Symbol.BOMB, 22, Multiplier(three=5, four=15, five=50),
                     jackpot_multiplier=5, consolation_prize=1, sound='winBomb'),
        SymbolConfig(Symbol.FIRE, 54, Multiplier(three=6, four=18, five=60),
                     jackpot_multiplier=6, consolation_prize=0, sound='winFire'),
    ])
