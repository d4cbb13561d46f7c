# ============================================================================
# FILE: tunedash/db/models/track.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from tunedash.core.clock import utcnow
from tunedash.db.base import Base

class Track(Base):
    """Uploaded track owned by one user"""
    __tablename__ = "tracks"
    
    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    duration = Column(Integer, nullable=False)  # Seconds
    file_url = Column(Text, nullable=False)
    artwork_url = Column(Text, nullable=True)
    genre = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default="processing")  # processing, published, draft
    plays = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow)
    
    # Relationships
    user = relationship("User", back_populates="tracks")
