# ============================================================================
# FILE: tunedash/api/v1/endpoints/playlist.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List
from tunedash.api.dependencies import get_storage, require_current_user
from tunedash.schemas.playlist import (
    Playlist,
    PlaylistCreate,
    PlaylistUpdate,
    PlaylistTrack,
    PlaylistTrackAdd
)
from tunedash.schemas.user import User
from tunedash.services.errors import PlaylistNotFoundError
from tunedash.services.playback_service import playback_service
from tunedash.services.playlist_service import playlist_service
from tunedash.storage.base import Storage
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[Playlist])
async def get_my_playlists(
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Get all playlists for the current user
    Requires authentication
    """
    try:
        return playlist_service.get_user_playlists(store, current_user.id)
    except Exception as e:
        logger.error(f"List playlists error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch playlists")

@router.post("", response_model=Playlist, status_code=status.HTTP_201_CREATED)
async def create_playlist(
    playlist_data: PlaylistCreate,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Create a new playlist
    Requires authentication
    """
    try:
        return playlist_service.create_playlist(store, current_user.id, playlist_data)
    except Exception as e:
        logger.error(f"Create playlist error: {e}")
        raise HTTPException(status_code=500, detail="Failed to create playlist")

@router.get("/{playlist_id}", response_model=Playlist)
async def get_playlist(
    playlist_id: str,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Get a specific playlist
    Requires authentication and ownership
    """
    playlist = playlist_service.get_playlist(store, playlist_id, current_user.id)
    if not playlist:
        raise HTTPException(status_code=404, detail="Playlist not found")
    return playlist

@router.patch("/{playlist_id}", response_model=Playlist)
async def update_playlist(
    playlist_id: str,
    update_data: PlaylistUpdate,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Update playlist details (title, description, cover, visibility)
    Requires authentication and ownership
    """
    try:
        playlist = playlist_service.update_playlist(store, playlist_id, current_user.id, update_data)
    except Exception as e:
        logger.error(f"Update playlist error: {e}")
        raise HTTPException(status_code=500, detail="Failed to update playlist")
    
    if not playlist:
        raise HTTPException(status_code=404, detail="Playlist not found")
    return playlist

@router.delete("/{playlist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_playlist(
    playlist_id: str,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a playlist
    Requires authentication and ownership
    """
    try:
        deleted = playlist_service.delete_playlist(store, playlist_id, current_user.id)
    except Exception as e:
        logger.error(f"Delete playlist error: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete playlist")
    
    if not deleted:
        raise HTTPException(status_code=404, detail="Playlist not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{playlist_id}/tracks", response_model=List[PlaylistTrack])
async def get_playlist_tracks(
    playlist_id: str,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Get the tracks of a playlist in order
    Requires authentication and ownership
    """
    entries = playlist_service.get_playlist_tracks(store, playlist_id, current_user.id)
    if entries is None:
        raise HTTPException(status_code=404, detail="Playlist not found")
    return entries

@router.post("/{playlist_id}/tracks", response_model=PlaylistTrack, status_code=status.HTTP_201_CREATED)
async def add_track_to_playlist(
    playlist_id: str,
    track_data: PlaylistTrackAdd,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Add a track to a playlist
    Requires authentication and ownership of both
    """
    entry = playlist_service.add_track_to_playlist(
        store, playlist_id, current_user.id, track_data.track_id
    )
    if not entry:
        raise HTTPException(status_code=404, detail="Playlist or track not found")
    return entry

@router.delete("/{playlist_id}/tracks/{track_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_track_from_playlist(
    playlist_id: str,
    track_id: str,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Remove a track from a playlist
    Requires authentication and ownership
    """
    removed = playlist_service.remove_track_from_playlist(
        store, playlist_id, current_user.id, track_id
    )
    if not removed:
        raise HTTPException(status_code=404, detail="Track not found in playlist")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{playlist_id}/play")
async def record_playlist_play(
    playlist_id: str,
    store: Storage = Depends(get_storage)
):
    """
    Record one play of a playlist
    Available to all users (authenticated and anonymous)
    """
    try:
        playback_service.record_playlist_play(store, playlist_id)
    except PlaylistNotFoundError:
        raise HTTPException(status_code=404, detail="Playlist not found")
    except Exception as e:
        logger.error(f"Record playlist play error: {e}")
        raise HTTPException(status_code=500, detail="Failed to record play")
    
    return {"message": "Play recorded"}
