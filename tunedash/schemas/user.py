# ============================================================================
# FILE: tunedash/schemas/user.py
# ============================================================================
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

class UserCreate(BaseModel):
    """Schema for user registration"""
    username: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    artist_name: Optional[str] = None

class User(BaseModel):
    """Stored user record (password holds the hash, never the plain text)"""
    id: str
    username: str
    email: str
    password: str
    artist_name: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True
        frozen = True

class UserResponse(BaseModel):
    """Schema for user response"""
    id: str
    username: str
    email: str
    artist_name: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True

class Token(BaseModel):
    """Schema for JWT token response"""
    access_token: str
    token_type: str = "bearer"
