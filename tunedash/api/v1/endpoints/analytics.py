# ============================================================================
# FILE: tunedash/api/v1/endpoints/analytics.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List
from tunedash.api.dependencies import get_storage, require_current_user
from tunedash.config import settings
from tunedash.schemas.analytics import AnalyticsEvent, DailyPlays, RevenueCreate
from tunedash.schemas.user import User
from tunedash.services.analytics_service import analytics_service
from tunedash.services.revenue_service import revenue_service
from tunedash.services.track_service import track_service
from tunedash.storage.base import Storage
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[AnalyticsEvent])
async def get_analytics(
    days: int = Query(settings.ANALYTICS_DEFAULT_DAYS, ge=1, description="Window length in days"),
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Get the current user's analytics events for the last `days` days
    Requires authentication
    """
    try:
        return analytics_service.get_user_analytics(store, current_user.id, days)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid analytics window")
    except Exception as e:
        logger.error(f"Analytics error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch analytics")

@router.get("/daily", response_model=List[DailyPlays])
async def get_daily_plays(
    days: int = Query(settings.ANALYTICS_DEFAULT_DAYS, ge=1, description="Window length in days"),
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Plays and revenue per day, for the plays-over-time chart
    Requires authentication
    """
    try:
        return analytics_service.get_daily_plays(store, current_user.id, days)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid analytics window")
    except Exception as e:
        logger.error(f"Daily analytics error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch analytics")

@router.post("/revenue", response_model=AnalyticsEvent, status_code=status.HTTP_201_CREATED)
async def record_revenue(
    revenue_data: RevenueCreate,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(require_current_user)
):
    """
    Record revenue earned by one of the current user's tracks
    Requires authentication and ownership of the track
    """
    if not track_service.get_track(store, revenue_data.track_id, current_user.id):
        raise HTTPException(status_code=404, detail="Track not found")
    
    try:
        return revenue_service.record_revenue(
            store, current_user.id, revenue_data.track_id, revenue_data.amount
        )
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid revenue data")
    except Exception as e:
        logger.error(f"Record revenue error: {e}")
        raise HTTPException(status_code=500, detail="Failed to record revenue")
