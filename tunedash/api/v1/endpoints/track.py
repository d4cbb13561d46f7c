# ============================================================================
# FILE: tunedash/api/v1/endpoints/track.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import List
from tunedash.api.dependencies import get_storage, require_current_user
from tunedash.config import settings
from tunedash.schemas.track import Track, TrackCreate, TrackUpdate
from tunedash.schemas.user import User
from tunedash.services.errors import InvalidStatusTransition, TrackNotFoundError
from tunedash.services.playback_service import playback_service
from tunedash.services.track_service import track_service
from tunedash.storage.base import Storage
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[Track])
async def get_my_tracks(
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Get all tracks for the current user
    Requires authentication
    """
    try:
        return track_service.get_user_tracks(store, current_user.id)
    except Exception as e:
        logger.error(f"List tracks error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch tracks")

@router.post("", response_model=Track, status_code=status.HTTP_201_CREATED)
async def create_track(
    track_data: TrackCreate,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Create a new track (file upload happens elsewhere, only its URL is stored)
    Requires authentication
    """
    try:
        return track_service.create_track(store, current_user.id, track_data)
    except Exception as e:
        logger.error(f"Create track error: {e}")
        raise HTTPException(status_code=500, detail="Failed to create track")

@router.get("/top", response_model=List[Track])
async def get_top_tracks(
    limit: int = Query(settings.TOP_TRACKS_LIMIT, ge=1, le=50, description="Number of tracks"),
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Get the current user's most played tracks
    Requires authentication
    """
    try:
        return track_service.get_top_tracks(store, current_user.id, limit)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid track limit")

@router.get("/{track_id}", response_model=Track)
async def get_track(
    track_id: str,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Get a specific track
    Requires authentication and ownership
    """
    track = track_service.get_track(store, track_id, current_user.id)
    if not track:
        raise HTTPException(status_code=404, detail="Track not found")
    return track

@router.patch("/{track_id}", response_model=Track)
async def update_track(
    track_id: str,
    update_data: TrackUpdate,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Update track details
    Requires authentication and ownership
    """
    try:
        track = track_service.update_track(store, track_id, current_user.id, update_data)
    except InvalidStatusTransition as e:
        logger.info(f"Rejected track update {track_id}: {e}")
        raise HTTPException(status_code=400, detail="Invalid track data")
    except Exception as e:
        logger.error(f"Update track error: {e}")
        raise HTTPException(status_code=500, detail="Failed to update track")
    
    if not track:
        raise HTTPException(status_code=404, detail="Track not found")
    return track

@router.delete("/{track_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_track(
    track_id: str,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a track
    Requires authentication and ownership
    """
    try:
        deleted = track_service.delete_track(store, track_id, current_user.id)
    except Exception as e:
        logger.error(f"Delete track error: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete track")
    
    if not deleted:
        raise HTTPException(status_code=404, detail="Track not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{track_id}/play")
async def record_play(
    track_id: str,
    store: Storage = Depends(get_storage)
):
    """
    Record one play of a track
    Available to all users (authenticated and anonymous)
    """
    try:
        playback_service.record_play(store, track_id)
    except TrackNotFoundError:
        raise HTTPException(status_code=404, detail="Track not found")
    except Exception as e:
        logger.error(f"Record play error: {e}")
        raise HTTPException(status_code=500, detail="Failed to record play")
    
    return {"message": "Play recorded"}
