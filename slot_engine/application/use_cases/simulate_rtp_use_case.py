"""Monte Carlo RTP simulation use case"""
import logging
import random

import numpy as np
from sentry_sdk import start_span

from slot_engine.application.dto.simulation_request import MAX_SIMULATION_SPINS, SimulationRequest
from slot_engine.application.dto.simulation_result import SimulationResult
from slot_engine.config.settings import EngineConfig
from slot_engine.domain.exceptions import InvalidInputError
from slot_engine.domain.services.spin_engine import SpinEngine

logger = logging.getLogger(__name__)


class SimulateRtpUseCase:
    """Plays a long session on a fresh engine to measure the adaptive RTP.

    The clock is frozen at zero so that idle-time jackpot boosts and decay do
    not depend on how fast the simulation runs.
    """

    def __init__(self, config: EngineConfig):
        self.config = config

    def execute(self, request: SimulationRequest) -> SimulationResult:
        if not 0 < request.spins <= MAX_SIMULATION_SPINS:
            raise InvalidInputError(
                f"Simulation spins must be within 1..{MAX_SIMULATION_SPINS}",
                {"spins": request.spins}
            )

        engine = SpinEngine(self.config, rng=random.Random(request.seed), clock=lambda: 0.0)
        engine.evaluator.validate(request.active_lines, request.bet_per_line)
        state = engine.new_state()
        total_bet = request.bet_per_line * len(request.active_lines)

        wins = np.zeros(request.spins, dtype=float)
        jackpot_bonuses = 0
        full_jackpots = 0
        near_miss_columns = 0

        with start_span(op="simulation.run", name="Simulate adaptive RTP") as span:
            for i in range(request.spins):
                outcome = engine.play_round(state, request.active_lines, request.bet_per_line)
                wins[i] = outcome.win.winnings
                jackpot_bonuses += outcome.win.jackpot_paid
                full_jackpots += outcome.win.jackpot
                near_miss_columns += len(outcome.near_miss_columns)
            span.set_data("spins", request.spins)

        returns = wins / total_bet
        total_wagered = total_bet * request.spins
        total_returned = float(wins.sum())
        rtp = total_returned / total_wagered
        margin = 1.96 * float(returns.std(ddof=1)) / np.sqrt(request.spins) if request.spins > 1 else 0.0

        result = SimulationResult(
            spins=request.spins,
            total_wagered=total_wagered,
            total_returned=total_returned,
            rtp=rtp,
            ema_rtp=state.current_rtp,
            target_rtp=self.config.rng.target_rtp,
            hit_rate=float(np.count_nonzero(wins) / request.spins),
            avg_win=float(wins.mean()),
            win_std=float(wins.std()),
            p95_win=float(np.percentile(wins, 95)),
            max_win=float(wins.max()),
            jackpot_bonuses=jackpot_bonuses,
            full_jackpots=full_jackpots,
            near_miss_columns=near_miss_columns,
            final_volatility=state.volatility.value,
            confidence_95=(rtp - margin, rtp + margin),
            final_weights={symbol.name: weight for symbol, weight in state.current_weights.items()}
        )
        logger.info(
            f"Simulated {request.spins} spins: RTP {result.rtp:.4f} "
            f"(target {result.target_rtp}), hit rate {result.hit_rate:.4f}"
        )
        return result
