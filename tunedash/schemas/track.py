# ============================================================================
# FILE: tunedash/schemas/track.py
# ============================================================================
from pydantic import BaseModel, Field, model_validator
from typing import Optional, Literal
from datetime import datetime

TrackStatus = Literal["processing", "published", "draft"]

class TrackCreate(BaseModel):
    """Schema for creating a track"""
    title: str = Field(..., min_length=1)
    duration: int = Field(..., gt=0)  # Duration in seconds
    file_url: str = Field(..., min_length=1)
    artwork_url: Optional[str] = None
    genre: Optional[str] = None
    status: TrackStatus = "processing"

class TrackUpdate(BaseModel):
    """Schema for updating a track (only the fields sent are applied)"""
    title: Optional[str] = Field(None, min_length=1)
    duration: Optional[int] = Field(None, gt=0)
    file_url: Optional[str] = Field(None, min_length=1)
    artwork_url: Optional[str] = None
    genre: Optional[str] = None
    status: Optional[TrackStatus] = None
    
    @model_validator(mode="after")
    def check_required_not_null(self):
        for name in ("title", "duration", "file_url", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

class Track(BaseModel):
    """Stored track record"""
    id: str
    user_id: str
    title: str
    duration: int
    file_url: str
    artwork_url: Optional[str] = None
    genre: Optional[str] = None
    status: TrackStatus = "processing"
    plays: int = 0
    created_at: datetime
    
    class Config:
        from_attributes = True
        frozen = True
