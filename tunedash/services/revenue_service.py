# ============================================================================
# FILE: tunedash/services/revenue_service.py
# ============================================================================
import math
from tunedash.schemas.analytics import AnalyticsEvent
from tunedash.storage.base import Storage
import logging

logger = logging.getLogger(__name__)

class RevenueService:
    """Appends revenue events; there is no running total to update"""
    
    def record_revenue(self, store: Storage, user_id: str, track_id: str, amount: float) -> AnalyticsEvent:
        """
        Record revenue earned by a user's track
        
        Track ownership is the caller's responsibility.
        
        Raises:
            ValueError: If amount is negative or not a finite number
        """
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise ValueError(f"Revenue amount must be a number, got {amount!r}")
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(f"Revenue amount must be a non-negative number, got {amount}")
        
        event = store.add_revenue(user_id, track_id, float(amount))
        logger.info(f"Revenue recorded for user {user_id}, track {track_id}: {amount}")
        return event

# Create singleton instance
revenue_service = RevenueService()
