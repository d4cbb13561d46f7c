# ============================================================================
# FILE: tunedash/services/track_service.py
# ============================================================================
from typing import Dict, FrozenSet, List, Optional
from tunedash.schemas.track import Track, TrackCreate, TrackUpdate
from tunedash.services.errors import InvalidStatusTransition
from tunedash.storage.base import Storage
import logging

logger = logging.getLogger(__name__)

# processing -> published/draft, then published <-> draft. Nothing goes back to processing.
STATUS_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    "processing": frozenset({"published", "draft"}),
    "draft": frozenset({"published"}),
    "published": frozenset({"draft"}),
}

def check_status_transition(current: str, requested: str) -> None:
    """Raise InvalidStatusTransition unless current -> requested is allowed"""
    if current == requested:
        return
    if requested not in STATUS_TRANSITIONS.get(current, frozenset()):
        raise InvalidStatusTransition(current, requested)

class TrackService:
    """Service layer for track operations"""
    
    def get_user_tracks(self, store: Storage, user_id: str) -> List[Track]:
        """Get all tracks for a user"""
        return store.get_tracks_by_user(user_id)
    
    def get_track(self, store: Storage, track_id: str, user_id: str) -> Optional[Track]:
        """Get a specific track (verify ownership)"""
        track = store.get_track(track_id)
        if track is None or track.user_id != user_id:
            return None
        return track
    
    def create_track(self, store: Storage, user_id: str, track_data: TrackCreate) -> Track:
        """Create a new track for a user"""
        track = store.create_track(user_id, track_data)
        logger.info(f"Track created: {track.id} for user {user_id}")
        return track
    
    def update_track(self, store: Storage, track_id: str, user_id: str, update_data: TrackUpdate) -> Optional[Track]:
        """
        Update track details
        
        Only fields present in the request are merged. A status change must
        follow STATUS_TRANSITIONS.
        
        Returns:
            Updated track, or None if missing or not owned by user_id
        """
        track = self.get_track(store, track_id, user_id)
        if not track:
            return None
        
        updates = update_data.model_dump(exclude_unset=True)
        if "status" in updates:
            check_status_transition(track.status, updates["status"])
        
        updated = store.update_track(track_id, updates)
        logger.info(f"Track updated: {track_id}")
        return updated
    
    def delete_track(self, store: Storage, track_id: str, user_id: str) -> bool:
        """Delete a track"""
        if not self.get_track(store, track_id, user_id):
            return False
        
        deleted = store.delete_track(track_id)
        if deleted:
            logger.info(f"Track deleted: {track_id}")
        return deleted
    
    def get_top_tracks(self, store: Storage, user_id: str, limit: int = 4) -> List[Track]:
        """
        Most played tracks of a user, highest first
        
        Raises:
            ValueError: If limit is not a positive integer
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(f"Limit must be a positive number of tracks, got {limit!r}")
        tracks = store.get_tracks_by_user(user_id)
        return sorted(tracks, key=lambda t: t.plays, reverse=True)[:limit]

# Create singleton instance
track_service = TrackService()
