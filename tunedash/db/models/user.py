# ============================================================================
# FILE: tunedash/db/models/user.py
# ============================================================================
from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import relationship
from tunedash.core.clock import utcnow
from tunedash.db.base import Base

class User(Base):
    """Artist account"""
    __tablename__ = "users"
    
    id = Column(String(36), primary_key=True)
    username = Column(Text, unique=True, index=True, nullable=False)
    password = Column(Text, nullable=False)  # Hashed
    email = Column(Text, unique=True, index=True, nullable=False)
    artist_name = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    
    # Relationships
    tracks = relationship("Track", back_populates="user", cascade="all, delete-orphan")
    playlists = relationship("Playlist", back_populates="user", cascade="all, delete-orphan")
