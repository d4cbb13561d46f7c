# ============================================================================
# FILE: tunedash/api/v1/endpoints/user.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from datetime import timedelta
from tunedash.api.dependencies import get_session_store, get_storage, get_token_payload, require_current_user
from tunedash.schemas.user import User, UserCreate, UserResponse, Token
from tunedash.services.user_service import user_service
from tunedash.core.security import create_access_token
from tunedash.core.session_store import SessionStore
from tunedash.config import settings
from tunedash.storage.base import Storage
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    store: Storage = Depends(get_storage)
):
    """
    Register a new artist account
    """
    # Check if username already exists
    if user_service.get_user_by_username(store, user_data.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already registered"
        )
    
    # Check if email already exists
    if user_service.get_user_by_email(store, str(user_data.email)):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )
    
    try:
        return user_service.create_user(store, user_data)
    except Exception as e:
        logger.error(f"Register error: {e}")
        raise HTTPException(status_code=500, detail="Failed to create user")

@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    store: Storage = Depends(get_storage)
):
    """
    Login with username (or email) and password
    Returns JWT access token
    """
    user = user_service.authenticate_user(store, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    
    # Create access token
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(
        data={"sub": user.id}, expires_delta=access_token_expires
    )
    logger.info(f"User logged in: {user.username}")
    
    return {"access_token": access_token, "token_type": "bearer"}

@router.post("/logout")
async def logout(
    current_user: User = Depends(require_current_user),
    payload: Optional[Dict[str, Any]] = Depends(get_token_payload),
    sessions: SessionStore = Depends(get_session_store)
):
    """
    Revoke the current access token
    Requires authentication
    """
    if payload and payload.get("jti"):
        sessions.revoke(payload["jti"], float(payload["exp"]))
    logger.info(f"User logged out: {current_user.username}")
    return {"message": "Logged out"}

@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(require_current_user)
):
    """
    Get current user information
    Requires authentication
    """
    return current_user
