# ============================================================================
# FILE: tunedash/services/dashboard_service.py
# ============================================================================
from tunedash.config import settings
from tunedash.schemas.analytics import DashboardStats
from tunedash.storage.base import Storage
import logging

logger = logging.getLogger(__name__)

class DashboardService:
    """Summary statistics for the artist dashboard"""
    
    def __init__(self, window_days: int = 30):
        self.window_days = window_days
    
    def get_stats(self, store: Storage, user_id: str) -> DashboardStats:
        """
        Compute the dashboard summary for a user (recomputed on every call)
        
        total_plays is all-time and comes from the track play counters.
        total_revenue covers the last window_days and is summed from
        analytics events; no revenue total is stored anywhere.
        """
        tracks = store.get_tracks_by_user(user_id)
        playlists = store.get_playlists_by_user(user_id)
        events = store.get_user_analytics(user_id, self.window_days)
        logger.debug(f"Dashboard stats for {user_id}: {len(tracks)} tracks, {len(events)} events")
        
        return DashboardStats(
            total_plays=sum(track.plays or 0 for track in tracks),
            total_revenue=sum(event.revenue or 0.0 for event in events),
            total_tracks=len(tracks),
            total_playlists=len(playlists),
            followers=0,  # No followers system yet
        )

# Create singleton instance
dashboard_service = DashboardService(window_days=settings.DASHBOARD_WINDOW_DAYS)
