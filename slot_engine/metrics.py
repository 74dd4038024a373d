"""Business metrics exported to Prometheus"""
import logging
from prometheus_client import Counter, Gauge, Histogram

logger = logging.getLogger(__name__)

SPINS = Counter('slot_spins_total', 'Settled spins', ['outcome'])
BET_VOLUME = Counter('slot_bet_volume_credits_total', 'Credits wagered')
PAYOUT_VOLUME = Counter('slot_payout_volume_credits_total', 'Credits paid out')
JACKPOTS = Counter('slot_jackpots_total', 'Jackpot events', ['kind'])
NEAR_MISS_COLUMNS = Counter('slot_near_miss_columns_total', 'Columns forced into a near miss')
SPIN_PAYOUT = Histogram(
    'slot_spin_payout_ratio', 'Winnings divided by total bet per spin',
    buckets=(0, 0.5, 1, 2, 5, 10, 25, 50, 100, 500, 1000)
)
CURRENT_RTP = Gauge('slot_current_rtp', 'Smoothed RTP of the last settled session')
SESSION_RTP = Gauge('slot_session_rtp', 'Realized RTP from spin history', ['period'])
JACKPOT_POOL = Gauge('slot_jackpot_pool_credits', 'Jackpot pool of the last settled session')
JACKPOT_WEIGHT = Gauge('slot_jackpot_symbol_weight', 'Live draw probability of the jackpot symbol')


class BusinessMetrics:
    """Tracks slot business metrics"""

    @staticmethod
    def track_spin(total_bet: float, winnings: float, jackpot: bool, jackpot_paid: bool,
                   near_miss_columns: int = 0):
        SPINS.labels(outcome='win' if winnings > 0 else 'loss').inc()
        BET_VOLUME.inc(total_bet)
        PAYOUT_VOLUME.inc(winnings)
        SPIN_PAYOUT.observe(winnings / total_bet if total_bet else 0)
        if jackpot_paid:
            JACKPOTS.labels(kind='bonus').inc()
        if jackpot:
            JACKPOTS.labels(kind='full').inc()
        if near_miss_columns:
            NEAR_MISS_COLUMNS.inc(near_miss_columns)

    @staticmethod
    def track_state(current_rtp: float, jackpot_pool: float, jackpot_weight: float):
        CURRENT_RTP.set(current_rtp)
        JACKPOT_POOL.set(jackpot_pool)
        JACKPOT_WEIGHT.set(jackpot_weight)

    @staticmethod
    def track_rtp(total_bets: float, total_payouts: float, period: str = "session") -> float:
        """Track realized RTP from aggregated history, returns it as a ratio"""
        rtp = total_payouts / total_bets if total_bets else 0.0
        SESSION_RTP.labels(period=period).set(rtp)
        return rtp
