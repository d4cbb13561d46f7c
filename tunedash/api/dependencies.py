# ============================================================================
# FILE: tunedash/api/dependencies.py
# ============================================================================
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from tunedash.core.security import decode_access_token
from tunedash.core.session_store import SessionStore
from tunedash.schemas.user import User
from tunedash.storage.base import Storage
from typing import Any, Dict, Optional

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/user/login", auto_error=False)

def get_storage(request: Request) -> Storage:
    """Entity store created by the app factory"""
    return request.app.state.storage

def get_session_store(request: Request) -> SessionStore:
    """Revoked-token store created by the app factory"""
    return request.app.state.session_store

def get_token_payload(
    token: Optional[str] = Depends(oauth2_scheme),
    sessions: SessionStore = Depends(get_session_store)
) -> Optional[Dict[str, Any]]:
    """
    Decode the bearer token
    Returns None if there is no token, it is invalid, or it was revoked
    """
    if not token:
        return None
    
    try:
        payload = decode_access_token(token)
    except HTTPException:
        return None
    
    jti = payload.get("jti")
    if jti and sessions.is_revoked(jti):
        return None
    return payload

def get_current_user(
    payload: Optional[Dict[str, Any]] = Depends(get_token_payload),
    store: Storage = Depends(get_storage)
) -> Optional[User]:
    """
    Get current authenticated user from JWT token
    Returns None if not authenticated (allows anonymous access)
    """
    if payload is None:
        return None
    
    user_id = payload.get("sub")
    if user_id is None:
        return None
    
    return store.get_user(user_id)

def require_current_user(
    current_user: Optional[User] = Depends(get_current_user)
) -> User:
    """
    Require authenticated user (raises 401 if not authenticated)
    Use this dependency for protected endpoints
    """
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user
