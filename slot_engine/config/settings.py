"""Engine configuration.

Every tunable constant of the adaptive engine lives here so that it can be
overridden without code changes. ``load_config()`` starts from the defaults,
merges the JSON document named by ``SLOT_ENGINE_CONFIG`` and finally applies a
few single-value environment overrides.
"""
import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

from slot_engine.domain.entities.game_state import VolatilityLevel
from slot_engine.domain.entities.paylines import BET_MODES, LINE_SELECTIONS
from slot_engine.domain.entities.symbol_catalog import SymbolCatalog, default_catalog
from slot_engine.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RngConfig:
    """RTP tracking and near-miss constants"""

    target_rtp: float = 0.95
    ema_smoothing: float = 0.1
    boost_step: float = 0.25
    # Kept below 1 so a lowered weight never clamps to zero
    max_boost_multiplier: float = 0.5
    high_payout_threshold: float = 10
    loss_streak_threshold: int = 5
    loss_streak_boost: float = 0.1
    near_miss_step: float = 0.05
    near_miss_cap: float = 0.5
    near_miss_enabled: bool = True
    volatility_window: int = 10
    low_win_rate: float = 0.2
    high_win_rate: float = 0.4
    seed: Optional[int] = None


@dataclass(frozen=True)
class JackpotConfig:
    """Jackpot-symbol weight band"""

    base_weight: float = 0.02
    max_weight: float = 0.10
    spin_boost: float = 0.001
    bet_boost: float = 0.0001
    time_boost: float = 0.0005
    decay_rate: float = 0.95
    reset_on_jackpot: bool = True


@dataclass(frozen=True)
class VolatilityPreset:
    weight_variance: float
    boost_multiplier: float


DEFAULT_VOLATILITY = {
    VolatilityLevel.LOW: VolatilityPreset(weight_variance=0.1, boost_multiplier=1.5),
    VolatilityLevel.MEDIUM: VolatilityPreset(weight_variance=0.2, boost_multiplier=2.0),
    VolatilityLevel.HIGH: VolatilityPreset(weight_variance=0.3, boost_multiplier=2.5),
}


@dataclass(frozen=True)
class GameConfig:
    """Money handling around a spin"""

    starting_balance: float = 100
    jackpot_contribution_rate: float = 0.1
    jackpot_pool_seed: float = 0
    award_pool_on_jackpot: bool = True
    multi_line_bonus_step: float = 0.1
    credit_multipliers: List[float] = field(default_factory=lambda: [1, 2, 5, 10])
    line_selections: List[Dict[str, Any]] = field(default_factory=lambda: list(LINE_SELECTIONS))
    bet_modes: List[Dict[str, Any]] = field(default_factory=lambda: list(BET_MODES))
    reveal_delay_seconds: float = 0
    # A spin guard older than this was abandoned by a crashed process
    spin_timeout_seconds: float = 30

    def find_bet_mode(self, name: str) -> Optional[Dict[str, Any]]:
        for mode in self.bet_modes:
            if mode["name"].lower() == name.lower():
                return mode
        return None


@dataclass(frozen=True)
class EngineConfig:
    catalog: SymbolCatalog = field(default_factory=default_catalog)
    rng: RngConfig = field(default_factory=RngConfig)
    jackpot: JackpotConfig = field(default_factory=JackpotConfig)
    volatility: Dict[VolatilityLevel, VolatilityPreset] = field(
        default_factory=lambda: dict(DEFAULT_VOLATILITY)
    )
    game: GameConfig = field(default_factory=GameConfig)

    def validate(self) -> 'EngineConfig':
        if not 0 < self.rng.ema_smoothing <= 1:
            raise ConfigurationError("ema_smoothing must be in (0, 1]")
        if self.rng.volatility_window <= 0:
            raise ConfigurationError("volatility_window must be positive")
        if not 0 <= self.jackpot.base_weight <= self.jackpot.max_weight:
            raise ConfigurationError("Jackpot base weight must lie within [0, max_weight]")
        if not 0 < self.jackpot.decay_rate <= 1:
            raise ConfigurationError("Jackpot decay_rate must be in (0, 1]")
        if not 0 <= self.game.jackpot_contribution_rate <= 1:
            raise ConfigurationError("jackpot_contribution_rate must be in [0, 1]")
        if self.game.reveal_delay_seconds >= self.game.spin_timeout_seconds:
            raise ConfigurationError("reveal_delay_seconds must be shorter than spin_timeout_seconds")
        for mode in self.game.bet_modes:
            if mode.get("bet_per_line", 0) <= 0 or mode.get("bonus_multiplier", 1.0) <= 0:
                raise ConfigurationError(f"Bet mode {mode.get('name')!r} needs a positive bet and bonus")
        missing = [level.name for level in VolatilityLevel if level not in self.volatility]
        if missing:
            raise ConfigurationError(f"Missing volatility presets: {', '.join(missing)}")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: 'EngineConfig' = None) -> 'EngineConfig':
        """Merge a (partial) configuration document onto ``base`` or the defaults"""
        base = base or cls()
        catalog = base.catalog
        if "catalog" in data:
            catalog = SymbolCatalog.from_dict(data["catalog"])

        volatility = dict(base.volatility)
        for name, preset in data.get("volatility", {}).items():
            try:
                level = VolatilityLevel(name.upper())
            except ValueError:
                raise ConfigurationError(f"Unknown volatility level: {name}")
            volatility[level] = VolatilityPreset(
                weight_variance=preset.get("weight_variance", volatility[level].weight_variance),
                boost_multiplier=preset.get("boost_multiplier", volatility[level].boost_multiplier)
            )

        return cls(
            catalog=catalog,
            rng=_merge(base.rng, data.get("rng")),
            jackpot=_merge(base.jackpot, data.get("jackpot")),
            volatility=volatility,
            game=_merge(base.game, data.get("game"))
        ).validate()

    def to_dict(self) -> dict:
        return {
            "catalog": self.catalog.to_dict(),
            "rng": _as_dict(self.rng),
            "jackpot": _as_dict(self.jackpot),
            "volatility": {
                level.value: _as_dict(preset) for level, preset in self.volatility.items()
            },
            "game": _as_dict(self.game),
        }


def _as_dict(section) -> dict:
    return {f.name: getattr(section, f.name) for f in fields(section)}


def _merge(section, overrides: Optional[Dict[str, Any]]):
    if not overrides:
        return section
    known = {f.name for f in fields(section)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigurationError(
            f"Unknown {type(section).__name__} fields: {', '.join(sorted(unknown))}"
        )
    return replace(section, **overrides)


def load_config(path: Optional[str] = None) -> EngineConfig:
    """Build the engine configuration from file and environment"""
    path = path or os.environ.get('SLOT_ENGINE_CONFIG')
    config = EngineConfig()

    if path:
        logger.info(f"Loading engine configuration from {path}")
        try:
            with open(path, encoding='utf-8') as fh:
                config = EngineConfig.from_dict(json.load(fh))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read engine configuration {path}: {e}")

    rng_overrides = {}
    if os.environ.get('TARGET_RTP'):
        rng_overrides['target_rtp'] = float(os.environ['TARGET_RTP'])
    if os.environ.get('RNG_SEED'):
        rng_overrides['seed'] = int(os.environ['RNG_SEED'])

    game_overrides = {}
    if os.environ.get('STARTING_BALANCE'):
        game_overrides['starting_balance'] = float(os.environ['STARTING_BALANCE'])
    if os.environ.get('REVEAL_DELAY'):
        game_overrides['reveal_delay_seconds'] = float(os.environ['REVEAL_DELAY'])

    if rng_overrides or game_overrides:
        config = EngineConfig.from_dict({"rng": rng_overrides, "game": game_overrides}, base=config)

    return config
