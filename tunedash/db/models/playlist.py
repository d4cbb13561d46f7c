# ============================================================================
# FILE: tunedash/db/models/playlist.py
# ============================================================================
from sqlalchemy import Boolean, Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from tunedash.core.clock import utcnow
from tunedash.db.base import Base

class Playlist(Base):
    """Playlist model for artist-curated playlists"""
    __tablename__ = "playlists"
    
    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    cover_url = Column(Text, nullable=True)
    track_count = Column(Integer, nullable=False, default=0)
    total_duration = Column(Integer, nullable=False, default=0)  # Seconds
    plays = Column(Integer, nullable=False, default=0)
    is_public = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)
    
    # Relationships
    user = relationship("User", back_populates="playlists")
    entries = relationship(
        "PlaylistTrack",
        back_populates="playlist",
        cascade="all, delete-orphan",
        order_by="PlaylistTrack.position",
    )

class PlaylistTrack(Base):
    """Junction table for playlist tracks"""
    __tablename__ = "playlist_tracks"
    
    id = Column(String(36), primary_key=True)
    playlist_id = Column(String(36), ForeignKey("playlists.id"), nullable=False, index=True)
    track_id = Column(String(36), ForeignKey("tracks.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    added_at = Column(DateTime, default=utcnow)
    
    # Relationships
    playlist = relationship("Playlist", back_populates="entries")
