# ============================================================================
# FILE: tunedash/db/models/analytics.py
# ============================================================================
from sqlalchemy import Column, Float, Integer, String, DateTime, ForeignKey
from tunedash.core.clock import utcnow
from tunedash.db.base import Base

class Analytics(Base):
    """Append-only play/revenue event"""
    __tablename__ = "analytics"
    
    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    # No foreign keys here: events outlive the tracks and playlists they mention
    track_id = Column(String(36), nullable=True, index=True)
    playlist_id = Column(String(36), nullable=True)
    date = Column(DateTime, default=utcnow, index=True)
    plays = Column(Integer, nullable=False, default=0)
    revenue = Column(Float, nullable=False, default=0.0)
