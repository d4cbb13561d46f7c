# ============================================================================
# FILE: tunedash/services/analytics_service.py
# ============================================================================
from collections import defaultdict
from typing import Dict, List
from tunedash.schemas.analytics import AnalyticsEvent, DailyPlays
from tunedash.storage.base import Storage
import logging

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30

def validate_window(days: int) -> int:
    """Return days if it is a positive integer, else raise ValueError"""
    if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
        raise ValueError(f"Window must be a positive number of days, got {days!r}")
    return days

class AnalyticsService:
    """Read-side queries over analytics events"""
    
    def get_user_analytics(self, store: Storage, user_id: str, days: int = DEFAULT_WINDOW_DAYS) -> List[AnalyticsEvent]:
        """
        Get a user's events from the last `days` days
        
        Args:
            store: Entity store
            user_id: Owner of the events
            days: Window length, must be a positive integer
            
        Returns:
            Unordered list of events dated within [now - days, now]
        """
        validate_window(days)
        return store.get_user_analytics(user_id, days)
    
    def get_daily_plays(self, store: Storage, user_id: str, days: int = DEFAULT_WINDOW_DAYS) -> List[DailyPlays]:
        """Plays and revenue per calendar day over the window, oldest first"""
        events = self.get_user_analytics(store, user_id, days)
        
        plays: Dict = defaultdict(int)
        revenue: Dict = defaultdict(float)
        for event in events:
            day = event.date.date()
            plays[day] += event.plays
            revenue[day] += event.revenue
        
        return [
            DailyPlays(date=day, plays=plays[day], revenue=revenue[day])
            for day in sorted(plays)
        ]

# Create singleton instance
analytics_service = AnalyticsService()
