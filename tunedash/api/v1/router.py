# ============================================================================
# FILE: tunedash/api/v1/router.py
# ============================================================================
from fastapi import APIRouter
from tunedash.api.v1.endpoints import analytics, dashboard, playlist, track, user

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(user.router, prefix="/user", tags=["user"])
api_router.include_router(track.router, prefix="/tracks", tags=["tracks"])
api_router.include_router(playlist.router, prefix="/playlists", tags=["playlists"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
