"""Adaptive symbol weighting.

Two independent tracks run before every draw:

* RTP tracking keeps an exponential moving average of the per-spin return and
  shifts weight between low- and high-paying symbols to pull it toward the
  target, with a bounded random perturbation sized by the volatility level.
* The jackpot symbol's weight grows with spins since the last jackpot, bet
  size and idle time (capped), decays after idle minutes, and drops back to
  its base after a jackpot.

Every 10 spins the session win rate moves the volatility level between LOW,
MEDIUM and HIGH.
"""
import logging
import math
import random
import time
from typing import Callable, Dict, Mapping, Optional

from slot_engine.config.settings import JackpotConfig, RngConfig, VolatilityPreset
from slot_engine.domain.entities.game_state import GameState, VolatilityLevel
from slot_engine.domain.entities.symbol_catalog import SymbolCatalog
from slot_engine.domain.entities.symbols import Symbol
from slot_engine.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class AdaptiveWeightController:

    def __init__(
        self,
        catalog: SymbolCatalog,
        rng_config: RngConfig,
        jackpot_config: JackpotConfig,
        volatility: Mapping[VolatilityLevel, VolatilityPreset],
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time
    ):
        self.catalog = catalog
        self.rng_config = rng_config
        self.jackpot_config = jackpot_config
        self.volatility = dict(volatility)
        self.rng = rng or random.Random()
        self.clock = clock
        self._base_probabilities = catalog.base_probabilities()

    def new_state(self) -> GameState:
        state = GameState(
            current_rtp=self.rng_config.target_rtp,
            jackpot_weight=self.jackpot_config.base_weight,
            last_activity_time=self.clock()
        )
        state.current_weights = self._normalize(self.catalog.base_weights())
        return state

    def refresh_weights(self, state: GameState, bet_amount: float) -> Dict[Symbol, float]:
        """Count a new spin and recompute the live weights for its draw"""
        state.session_spins += 1
        state.spins_since_jackpot += 1
        state.total_wagered += bet_amount

        self._update_jackpot_weight(state, bet_amount)
        self._adjust_weights(state)

        logger.debug(
            f"Weights for spin {state.session_spins}: "
            + ", ".join(f"{symbol.name}={weight:.4f}" for symbol, weight in state.current_weights.items())
        )
        return dict(state.current_weights)

    def near_miss_probability(self, state: GameState) -> float:
        if not self.rng_config.near_miss_enabled:
            return 0.0
        return min(self.rng_config.near_miss_cap, state.consecutive_losses * self.rng_config.near_miss_step)

    def record_outcome(self, state: GameState, win_amount: float, bet_amount: float,
                       jackpot_hit: bool = False) -> None:
        """Feed a settled spin back into the RTP tracker"""
        alpha = self.rng_config.ema_smoothing
        state.current_rtp = (1 - alpha) * state.current_rtp + alpha * (win_amount / bet_amount)
        state.total_won += win_amount

        if win_amount > 0:
            state.session_wins += 1
            state.last_win_amount = win_amount
            state.consecutive_losses = 0
            if jackpot_hit:
                state.spins_since_jackpot = 0
                if self.jackpot_config.reset_on_jackpot:
                    state.jackpot_weight = self.jackpot_config.base_weight
        else:
            state.consecutive_losses += 1

        if state.session_spins % self.rng_config.volatility_window == 0:
            self._update_volatility(state)

    def _update_jackpot_weight(self, state: GameState, bet_amount: float) -> None:
        config = self.jackpot_config
        now = self.clock()
        minutes_idle = max(0.0, (now - state.last_activity_time) / 60)
        state.last_activity_time = now

        weight = min(
            config.base_weight
            + state.spins_since_jackpot * config.spin_boost
            + bet_amount * config.bet_boost
            + minutes_idle * config.time_boost,
            config.max_weight
        )
        if minutes_idle > 1:
            weight *= config.decay_rate ** minutes_idle

        state.jackpot_weight = weight

    def _adjust_weights(self, state: GameState) -> None:
        config = self.rng_config
        preset = self.volatility[state.volatility]
        rtp_diff = config.target_rtp - state.current_rtp

        boost = min(abs(rtp_diff) * config.boost_step * preset.boost_multiplier, config.max_boost_multiplier)
        if state.consecutive_losses > config.loss_streak_threshold:
            boost *= 1 + (state.consecutive_losses - config.loss_streak_threshold) * config.loss_streak_boost

        weights: Dict[Symbol, float] = {}
        for symbol_config in self.catalog:
            symbol = symbol_config.symbol
            if symbol == self.catalog.jackpot_symbol:
                weights[symbol] = state.jackpot_weight
                continue

            base = self._base_probabilities[symbol]
            high_payout = symbol_config.multiplier.three > config.high_payout_threshold
            # Paying too little: favour frequent low payers. Too much: the reverse.
            raise_weight = (rtp_diff > 0) != high_payout
            weight = base * (1 + boost) if raise_weight else base * (1 - boost)

            variance = (self.rng.random() - 0.5) * preset.weight_variance
            weights[symbol] = max(0.0, weight * (1 + variance))

        state.current_weights = self._normalize(weights)

    def _update_volatility(self, state: GameState) -> None:
        config = self.rng_config
        win_rate = state.win_rate
        if win_rate < config.low_win_rate:
            level = VolatilityLevel.LOW
        elif win_rate > config.high_win_rate:
            level = VolatilityLevel.HIGH
        else:
            level = VolatilityLevel.MEDIUM

        if level != state.volatility:
            logger.info(f"Volatility {state.volatility.value} -> {level.value} (win rate {win_rate:.2f})")
        state.volatility = level

    def _normalize(self, weights: Mapping[Symbol, float]) -> Dict[Symbol, float]:
        total = sum(weights.values())
        if not math.isfinite(total) or total <= 0:
            raise ConfigurationError("Adjusted symbol weights sum to zero", {"total_weight": total})
        return {symbol: weight / total for symbol, weight in weights.items()}
