"""MongoDB spin history implementation"""
import time
import logging
from typing import Optional, Dict, Any
from pymongo.database import Database

from slot_engine.application.ports.spin_history_port import SpinHistoryPort
from slot_engine.domain.entities.spin_record import SpinRecord

logger = logging.getLogger(__name__)


class MongoSpinHistory(SpinHistoryPort):
    """MongoDB implementation of spin history"""

    def __init__(self, db: Database):
        self.db = db
        self.collection = db.spins

    def save(self, record: SpinRecord) -> SpinRecord:
        """Save spin record to MongoDB"""
        data = record.to_dict()
        data.pop("_id")
        result = self.collection.insert_one(data)
        record.id = str(result.inserted_id)
        return record

    def get_session_stats(self, session_id: str, hours: int = 1) -> Optional[Dict[str, Any]]:
        """Get session statistics for RTP calculation"""
        try:
            cutoff_time = time.time() - (hours * 3600)
            pipeline = [
                {
                    "$match": {
                        "session_id": session_id,
                        "timestamp": {"$gte": cutoff_time}
                    }
                },
                {
                    "$group": {
                        "_id": None,
                        "total_bets": {"$sum": "$total_bet"},
                        "total_payouts": {"$sum": "$winnings"},
                        "spin_count": {"$sum": 1},
                        "jackpots": {"$sum": {"$cond": ["$jackpot", 1, 0]}}
                    }
                }
            ]
            result = list(self.collection.aggregate(pipeline))
            return result[0] if result else None
        except Exception as e:
            logger.error(f"Error getting session stats: {e}")
            return None
