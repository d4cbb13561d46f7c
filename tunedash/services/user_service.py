# ============================================================================
# FILE: tunedash/services/user_service.py
# ============================================================================
from typing import Optional
from email_validator import EmailNotValidError, validate_email
from tunedash.schemas.user import User, UserCreate
from tunedash.core.security import get_password_hash, verify_password
from tunedash.storage.base import Storage
import logging

logger = logging.getLogger(__name__)

def normalize_email(email: str) -> Optional[str]:
    """Normalise an address the same way EmailStr does at registration (None if invalid)"""
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError:
        return None

class UserService:
    """Service layer for user operations"""
    
    def create_user(self, store: Storage, user_data: UserCreate) -> User:
        """Create a new user account"""
        hashed_password = get_password_hash(user_data.password)
        user = store.create_user(
            username=user_data.username,
            email=str(user_data.email),
            password=hashed_password,
            artist_name=user_data.artist_name,
        )
        logger.info(f"User created: {user.username}")
        return user
    
    def get_user(self, store: Storage, user_id: str) -> Optional[User]:
        """Get user by id"""
        return store.get_user(user_id)
    
    def get_user_by_username(self, store: Storage, username: str) -> Optional[User]:
        """Get user by username"""
        return store.get_user_by_username(username)
    
    def get_user_by_email(self, store: Storage, email: str) -> Optional[User]:
        """Get user by email"""
        return store.get_user_by_email(email)
    
    def authenticate_user(self, store: Storage, login: str, password: str) -> Optional[User]:
        """Authenticate user with username (or email) and password"""
        user = self.get_user_by_username(store, login)
        if not user and "@" in login:
            email = normalize_email(login)
            if email:
                user = self.get_user_by_email(store, email)
        if not user:
            return None
        if not verify_password(password, user.password):
            return None
        return user

# Create singleton instance
user_service = UserService()
