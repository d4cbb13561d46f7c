# ============================================================================
# FILE: tunedash/storage/memory.py
# In-process store: dicts keyed by id, one re-entrant lock around every mutation
# ============================================================================
import threading
import uuid
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from tunedash.core.clock import utcnow
from tunedash.schemas.analytics import AnalyticsEvent
from tunedash.schemas.playlist import Playlist, PlaylistCreate, PlaylistTrack
from tunedash.schemas.track import Track, TrackCreate
from tunedash.schemas.user import User
from tunedash.storage.base import Storage, mergeable

def _new_id() -> str:
    return str(uuid.uuid4())

class MemStorage(Storage):
    """Dict-backed store; lives as long as the object does."""

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock
        self.users: Dict[str, User] = {}
        self.tracks: Dict[str, Track] = {}
        self.playlists: Dict[str, Playlist] = {}
        self.playlist_tracks: Dict[str, PlaylistTrack] = {}
        self.analytics: Dict[str, AnalyticsEvent] = {}
        self._lock = threading.RLock()

    # User operations

    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in list(self.users.values()) if u.username == username), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in list(self.users.values()) if u.email == email), None)

    def create_user(self, username: str, email: str, password: str,
                    artist_name: Optional[str] = None) -> User:
        user = User(
            id=_new_id(),
            username=username,
            email=email,
            password=password,
            artist_name=artist_name or None,
            created_at=self.clock(),
        )
        with self._lock:
            self.users[user.id] = user
        return user

    # Track operations

    def get_track(self, track_id: str) -> Optional[Track]:
        return self.tracks.get(track_id)

    def get_tracks_by_user(self, user_id: str) -> List[Track]:
        return [t for t in list(self.tracks.values()) if t.user_id == user_id]

    def create_track(self, user_id: str, track_data: TrackCreate) -> Track:
        track = Track(
            **track_data.model_dump(),
            id=_new_id(),
            user_id=user_id,
            plays=0,
            created_at=self.clock(),
        )
        with self._lock:
            self.tracks[track.id] = track
        return track

    def update_track(self, track_id: str, updates: Dict[str, Any]) -> Optional[Track]:
        with self._lock:
            track = self.tracks.get(track_id)
            if track is None:
                return None
            track = track.model_copy(update=mergeable(updates))
            self.tracks[track_id] = track
            if "duration" in updates:
                for playlist_id in self._playlists_holding(track_id):
                    self._sync_playlist(playlist_id)
            return track

    def delete_track(self, track_id: str) -> bool:
        with self._lock:
            if self.tracks.pop(track_id, None) is None:
                return False
            affected = self._playlists_holding(track_id)
            for entry_id in [e.id for e in self.playlist_tracks.values() if e.track_id == track_id]:
                del self.playlist_tracks[entry_id]
            for playlist_id in affected:
                self._sync_playlist(playlist_id)
            return True

    # Playlist operations

    def get_playlist(self, playlist_id: str) -> Optional[Playlist]:
        return self.playlists.get(playlist_id)

    def get_playlists_by_user(self, user_id: str) -> List[Playlist]:
        return [p for p in list(self.playlists.values()) if p.user_id == user_id]

    def create_playlist(self, user_id: str, playlist_data: PlaylistCreate) -> Playlist:
        playlist = Playlist(
            id=_new_id(),
            user_id=user_id,
            title=playlist_data.title,
            description=playlist_data.description or None,
            cover_url=playlist_data.cover_url or None,
            track_count=0,
            total_duration=0,
            plays=0,
            is_public=True if playlist_data.is_public is None else playlist_data.is_public,
            created_at=self.clock(),
        )
        with self._lock:
            self.playlists[playlist.id] = playlist
        return playlist

    def update_playlist(self, playlist_id: str, updates: Dict[str, Any]) -> Optional[Playlist]:
        with self._lock:
            playlist = self.playlists.get(playlist_id)
            if playlist is None:
                return None
            playlist = playlist.model_copy(update=mergeable(updates))
            self.playlists[playlist_id] = playlist
            return playlist

    def delete_playlist(self, playlist_id: str) -> bool:
        with self._lock:
            if self.playlists.pop(playlist_id, None) is None:
                return False
            for entry_id in [e.id for e in self.playlist_tracks.values() if e.playlist_id == playlist_id]:
                del self.playlist_tracks[entry_id]
            return True

    def get_playlist_tracks(self, playlist_id: str) -> List[PlaylistTrack]:
        entries = [e for e in list(self.playlist_tracks.values()) if e.playlist_id == playlist_id]
        return sorted(entries, key=lambda e: e.position)

    def add_track_to_playlist(self, playlist_id: str, track_id: str) -> Optional[PlaylistTrack]:
        with self._lock:
            if playlist_id not in self.playlists or track_id not in self.tracks:
                return None

            entries = self.get_playlist_tracks(playlist_id)
            for entry in entries:
                if entry.track_id == track_id:
                    return entry

            entry = PlaylistTrack(
                id=_new_id(),
                playlist_id=playlist_id,
                track_id=track_id,
                position=entries[-1].position + 1 if entries else 0,
                added_at=self.clock(),
            )
            self.playlist_tracks[entry.id] = entry
            self._sync_playlist(playlist_id)
            return entry

    def remove_track_from_playlist(self, playlist_id: str, track_id: str) -> bool:
        with self._lock:
            entry = next(
                (e for e in self.playlist_tracks.values()
                 if e.playlist_id == playlist_id and e.track_id == track_id),
                None,
            )
            if entry is None:
                return False
            del self.playlist_tracks[entry.id]
            self._sync_playlist(playlist_id)
            return True

    def _playlists_holding(self, track_id: str) -> List[str]:
        return list({e.playlist_id for e in self.playlist_tracks.values() if e.track_id == track_id})

    def _sync_playlist(self, playlist_id: str) -> None:
        """Recompute the denormalized track_count/total_duration. Caller holds the lock."""
        playlist = self.playlists.get(playlist_id)
        if playlist is None:
            return
        entries = [e for e in self.playlist_tracks.values() if e.playlist_id == playlist_id]
        total_duration = sum(
            self.tracks[e.track_id].duration for e in entries if e.track_id in self.tracks
        )
        self.playlists[playlist_id] = playlist.model_copy(
            update={"track_count": len(entries), "total_duration": total_duration}
        )

    # Analytics operations

    def get_user_analytics(self, user_id: str, days: int = 30) -> List[AnalyticsEvent]:
        now = self.clock()
        cutoff = now - timedelta(days=days)
        return [
            event for event in list(self.analytics.values())
            if event.user_id == user_id and cutoff <= event.date <= now
        ]

    def create_analytics_event(self, user_id: str, track_id: Optional[str] = None,
                               playlist_id: Optional[str] = None, plays: int = 0,
                               revenue: float = 0.0,
                               date: Optional[datetime] = None) -> AnalyticsEvent:
        event = AnalyticsEvent(
            id=_new_id(),
            user_id=user_id,
            track_id=track_id,
            playlist_id=playlist_id,
            date=date or self.clock(),
            plays=plays,
            revenue=revenue,
        )
        with self._lock:
            self.analytics[event.id] = event
        return event

    def increment_track_plays(self, track_id: str) -> Optional[Track]:
        with self._lock:
            track = self.tracks.get(track_id)
            if track is None:
                return None
            track = track.model_copy(update={"plays": track.plays + 1})
            self.tracks[track_id] = track
            self.create_analytics_event(track.user_id, track_id=track_id, plays=1, revenue=0.0)
            return track

    def increment_playlist_plays(self, playlist_id: str) -> Optional[Playlist]:
        with self._lock:
            playlist = self.playlists.get(playlist_id)
            if playlist is None:
                return None
            playlist = playlist.model_copy(update={"plays": playlist.plays + 1})
            self.playlists[playlist_id] = playlist
            self.create_analytics_event(playlist.user_id, playlist_id=playlist_id, plays=1, revenue=0.0)
            return playlist
