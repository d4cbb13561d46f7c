# ============================================================================
# FILE: tunedash/services/playlist_service.py
# ============================================================================
from typing import List, Optional
from tunedash.schemas.playlist import Playlist, PlaylistCreate, PlaylistTrack, PlaylistUpdate
from tunedash.storage.base import Storage
import logging

logger = logging.getLogger(__name__)

class PlaylistService:
    """Service layer for playlist operations"""
    
    def create_playlist(self, store: Storage, user_id: str, playlist_data: PlaylistCreate) -> Playlist:
        """Create a new playlist for a user"""
        playlist = store.create_playlist(user_id, playlist_data)
        logger.info(f"Playlist created: {playlist.id} for user {user_id}")
        return playlist
    
    def get_user_playlists(self, store: Storage, user_id: str) -> List[Playlist]:
        """Get all playlists for a user"""
        return store.get_playlists_by_user(user_id)
    
    def get_playlist(self, store: Storage, playlist_id: str, user_id: str) -> Optional[Playlist]:
        """Get a specific playlist (verify ownership)"""
        playlist = store.get_playlist(playlist_id)
        if playlist is None or playlist.user_id != user_id:
            return None
        return playlist
    
    def update_playlist(self, store: Storage, playlist_id: str, user_id: str, update_data: PlaylistUpdate) -> Optional[Playlist]:
        """Update playlist details"""
        if not self.get_playlist(store, playlist_id, user_id):
            return None
        
        playlist = store.update_playlist(playlist_id, update_data.model_dump(exclude_unset=True))
        logger.info(f"Playlist updated: {playlist_id}")
        return playlist
    
    def delete_playlist(self, store: Storage, playlist_id: str, user_id: str) -> bool:
        """Delete a playlist"""
        if not self.get_playlist(store, playlist_id, user_id):
            return False
        
        deleted = store.delete_playlist(playlist_id)
        if deleted:
            logger.info(f"Playlist deleted: {playlist_id}")
        return deleted
    
    def get_playlist_tracks(self, store: Storage, playlist_id: str, user_id: str) -> Optional[List[PlaylistTrack]]:
        """Get the tracks of a playlist in order (None if not visible)"""
        if not self.get_playlist(store, playlist_id, user_id):
            return None
        return store.get_playlist_tracks(playlist_id)
    
    def add_track_to_playlist(self, store: Storage, playlist_id: str, user_id: str, track_id: str) -> Optional[PlaylistTrack]:
        """Add one of the user's tracks to one of the user's playlists"""
        if not self.get_playlist(store, playlist_id, user_id):
            return None
        
        track = store.get_track(track_id)
        if track is None or track.user_id != user_id:
            return None
        
        entry = store.add_track_to_playlist(playlist_id, track_id)
        if entry:
            logger.info(f"Track added to playlist {playlist_id}: {track_id}")
        return entry
    
    def remove_track_from_playlist(self, store: Storage, playlist_id: str, user_id: str, track_id: str) -> bool:
        """Remove a track from a playlist"""
        if not self.get_playlist(store, playlist_id, user_id):
            return False
        
        removed = store.remove_track_from_playlist(playlist_id, track_id)
        if removed:
            logger.info(f"Track removed from playlist {playlist_id}: {track_id}")
        return removed

# Create singleton instance
playlist_service = PlaylistService()
