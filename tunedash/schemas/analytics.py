# ============================================================================
# FILE: tunedash/schemas/analytics.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime

class AnalyticsEvent(BaseModel):
    """Immutable play or revenue fact"""
    id: str
    user_id: str
    track_id: Optional[str] = None
    playlist_id: Optional[str] = None
    date: datetime
    plays: int = 0
    revenue: float = 0.0
    
    class Config:
        from_attributes = True
        frozen = True

class RevenueCreate(BaseModel):
    """Schema for recording revenue against a track"""
    track_id: str
    amount: float = Field(..., ge=0, allow_inf_nan=False)

class DailyPlays(BaseModel):
    """One point of the plays-over-time series"""
    date: date
    plays: int
    revenue: float

class DashboardStats(BaseModel):
    """Summary shown at the top of the dashboard"""
    total_plays: int
    total_revenue: float
    total_tracks: int
    total_playlists: int
    followers: int = 0
