# ============================================================================
# FILE: tunedash/services/errors.py
# ============================================================================

class TrackNotFoundError(LookupError):
    """Track does not exist (or is not visible to the caller)"""
    
    def __init__(self, track_id: str):
        super().__init__(f"Track not found: {track_id}")
        self.track_id = track_id

class PlaylistNotFoundError(LookupError):
    """Playlist does not exist (or is not visible to the caller)"""
    
    def __init__(self, playlist_id: str):
        super().__init__(f"Playlist not found: {playlist_id}")
        self.playlist_id = playlist_id

class InvalidStatusTransition(ValueError):
    """Requested track status change is not allowed"""
    
    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot move track from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested
