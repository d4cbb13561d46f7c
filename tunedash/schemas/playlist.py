# ============================================================================
# FILE: tunedash/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import datetime

class PlaylistCreate(BaseModel):
    """Schema for creating a playlist"""
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    cover_url: Optional[str] = None
    is_public: Optional[bool] = None  # Stored as True when not given

class PlaylistUpdate(BaseModel):
    """Schema for updating a playlist (only the fields sent are applied)"""
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    cover_url: Optional[str] = None
    is_public: Optional[bool] = None
    
    @model_validator(mode="after")
    def check_required_not_null(self):
        for name in ("title", "is_public"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

class PlaylistTrackAdd(BaseModel):
    """Schema for adding a track to a playlist"""
    track_id: str

class PlaylistTrack(BaseModel):
    """Membership of a track in a playlist"""
    id: str
    playlist_id: str
    track_id: str
    position: int
    added_at: datetime
    
    class Config:
        from_attributes = True
        frozen = True

class Playlist(BaseModel):
    """Stored playlist record"""
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    cover_url: Optional[str] = None
    track_count: int = 0
    total_duration: int = 0  # Seconds
    plays: int = 0
    is_public: bool = True
    created_at: datetime
    
    class Config:
        from_attributes = True
        frozen = True
