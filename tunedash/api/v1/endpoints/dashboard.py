# ============================================================================
# FILE: tunedash/api/v1/endpoints/dashboard.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException
from tunedash.api.dependencies import get_storage, require_current_user
from tunedash.schemas.analytics import DashboardStats
from tunedash.schemas.user import User
from tunedash.services.dashboard_service import dashboard_service
from tunedash.storage.base import Storage
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Summary numbers for the dashboard header
    Requires authentication
    """
    try:
        return dashboard_service.get_stats(store, current_user.id)
    except Exception as e:
        logger.error(f"Dashboard stats error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard stats")
