"""One spin round: weights -> grid -> evaluation -> feedback"""
from dataclasses import dataclass, field
import random
import time
from typing import Callable, Dict, List, Optional, Sequence

from slot_engine.config.settings import EngineConfig
from slot_engine.domain.entities.game_state import GameState
from slot_engine.domain.entities.grid import Grid
from slot_engine.domain.entities.symbols import Symbol
from slot_engine.domain.entities.win_result import WinResult
from slot_engine.domain.services.adaptive_weights import AdaptiveWeightController
from slot_engine.domain.services.outcome_generator import OutcomeGenerator
from slot_engine.domain.services.payline_evaluator import PaylineEvaluator


@dataclass
class RoundOutcome:
    grid: Grid
    win: WinResult
    weights: Dict[Symbol, float]
    near_miss_columns: List[int] = field(default_factory=list)


class SpinEngine:
    """Wires the controller, generator and evaluator around a shared RNG"""

    def __init__(self, config: EngineConfig, rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.time):
        self.config = config
        self.catalog = config.catalog
        self.rng = rng or random.Random(config.rng.seed)
        self.controller = AdaptiveWeightController(
            config.catalog, config.rng, config.jackpot, config.volatility, self.rng, clock
        )
        self.generator = OutcomeGenerator(config.catalog, self.rng)
        self.evaluator = PaylineEvaluator(
            config.catalog, multi_line_bonus_step=config.game.multi_line_bonus_step
        )

    def new_state(self) -> GameState:
        return self.controller.new_state()

    def play_round(self, state: GameState, active_lines: Sequence[int], bet_per_line: float,
                   bonus_multiplier: float = 1.0) -> RoundOutcome:
        """Play one round against ``state``; inputs must already be validated"""
        total_bet = bet_per_line * len(active_lines)

        weights = self.controller.refresh_weights(state, total_bet)
        near_miss_chance = self.controller.near_miss_probability(state)
        grid, near_miss_columns = self.generator.generate_grid_with_near_misses(weights, near_miss_chance)
        win = self.evaluator.evaluate(grid, active_lines, bet_per_line, bonus_multiplier)

        self.controller.record_outcome(state, win.winnings, total_bet, jackpot_hit=win.jackpot_paid)

        return RoundOutcome(grid=grid, win=win, weights=weights, near_miss_columns=near_miss_columns)
