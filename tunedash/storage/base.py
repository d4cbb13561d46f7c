# ============================================================================
# FILE: tunedash/storage/base.py
# Entity store interface shared by every backend
# ============================================================================

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from tunedash.schemas.analytics import AnalyticsEvent
from tunedash.schemas.playlist import Playlist, PlaylistCreate, PlaylistTrack
from tunedash.schemas.track import Track, TrackCreate
from tunedash.schemas.user import User

# Fields a partial update may never overwrite
PROTECTED_FIELDS = frozenset({"id", "user_id", "created_at"})

def mergeable(updates: Dict[str, Any]) -> Dict[str, Any]:
    """Drop identity fields from a partial update."""
    return {k: v for k, v in updates.items() if k not in PROTECTED_FIELDS}

class Storage(ABC):
    """
    Keyed store for the four entity kinds.

    Lookups return None for unknown ids, deletes return whether a record
    existed. Play counting and the matching analytics event are applied
    together or not at all.
    """

    # User operations

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def create_user(self, username: str, email: str, password: str,
                    artist_name: Optional[str] = None) -> User:
        """
        Create a user.

        Args:
            password: Already hashed password
        """
        pass

    # Track operations

    @abstractmethod
    def get_track(self, track_id: str) -> Optional[Track]:
        pass

    @abstractmethod
    def get_tracks_by_user(self, user_id: str) -> List[Track]:
        pass

    @abstractmethod
    def create_track(self, user_id: str, track_data: TrackCreate) -> Track:
        pass

    @abstractmethod
    def update_track(self, track_id: str, updates: Dict[str, Any]) -> Optional[Track]:
        pass

    @abstractmethod
    def delete_track(self, track_id: str) -> bool:
        """Delete a track and drop it from every playlist that holds it."""
        pass

    # Playlist operations

    @abstractmethod
    def get_playlist(self, playlist_id: str) -> Optional[Playlist]:
        pass

    @abstractmethod
    def get_playlists_by_user(self, user_id: str) -> List[Playlist]:
        pass

    @abstractmethod
    def create_playlist(self, user_id: str, playlist_data: PlaylistCreate) -> Playlist:
        pass

    @abstractmethod
    def update_playlist(self, playlist_id: str, updates: Dict[str, Any]) -> Optional[Playlist]:
        pass

    @abstractmethod
    def delete_playlist(self, playlist_id: str) -> bool:
        pass

    @abstractmethod
    def get_playlist_tracks(self, playlist_id: str) -> List[PlaylistTrack]:
        """Memberships of a playlist ordered by position."""
        pass

    @abstractmethod
    def add_track_to_playlist(self, playlist_id: str, track_id: str) -> Optional[PlaylistTrack]:
        """
        Append a track to a playlist and refresh its track_count/total_duration.

        Returns:
            The membership (the existing one if the track was already there),
            or None if the playlist or track does not exist
        """
        pass

    @abstractmethod
    def remove_track_from_playlist(self, playlist_id: str, track_id: str) -> bool:
        pass

    # Analytics operations

    @abstractmethod
    def get_user_analytics(self, user_id: str, days: int = 30) -> List[AnalyticsEvent]:
        """Events of a user dated within the last `days` days."""
        pass

    @abstractmethod
    def create_analytics_event(self, user_id: str, track_id: Optional[str] = None,
                               playlist_id: Optional[str] = None, plays: int = 0,
                               revenue: float = 0.0,
                               date: Optional[datetime] = None) -> AnalyticsEvent:
        pass

    @abstractmethod
    def increment_track_plays(self, track_id: str) -> Optional[Track]:
        """
        Add one play to a track and append the matching analytics event.

        Returns:
            The updated track, or None (nothing written) if it does not exist
        """
        pass

    @abstractmethod
    def increment_playlist_plays(self, playlist_id: str) -> Optional[Playlist]:
        pass

    def add_revenue(self, user_id: str, track_id: str, amount: float) -> AnalyticsEvent:
        return self.create_analytics_event(user_id, track_id=track_id, plays=0, revenue=amount)

    def close(self) -> None:
        """Release backend resources."""
