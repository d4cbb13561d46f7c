# ============================================================================
# FILE: tunedash/services/playback_service.py
# ============================================================================
from tunedash.schemas.playlist import Playlist
from tunedash.schemas.track import Track
from tunedash.services.errors import PlaylistNotFoundError, TrackNotFoundError
from tunedash.storage.base import Storage
import logging

logger = logging.getLogger(__name__)

class PlaybackService:
    """Records plays against tracks and playlists"""
    
    def record_play(self, store: Storage, track_id: str) -> Track:
        """
        Count one play of a track
        
        The play counter and the matching analytics event (plays=1 for the
        track's owner) are written together by the store.
        
        Raises:
            TrackNotFoundError: If the track does not exist (nothing is written)
        """
        track = store.increment_track_plays(track_id)
        if track is None:
            logger.warning(f"Play ignored for unknown track: {track_id}")
            raise TrackNotFoundError(track_id)
        
        logger.info(f"Play recorded for track {track_id} (total {track.plays})")
        return track
    
    def record_playlist_play(self, store: Storage, playlist_id: str) -> Playlist:
        """Count one play of a whole playlist"""
        playlist = store.increment_playlist_plays(playlist_id)
        if playlist is None:
            logger.warning(f"Play ignored for unknown playlist: {playlist_id}")
            raise PlaylistNotFoundError(playlist_id)
        
        logger.info(f"Play recorded for playlist {playlist_id} (total {playlist.plays})")
        return playlist

# Create singleton instance
playback_service = PlaybackService()
