# ============================================================================
# FILE: tunedash/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""
    
    # App settings
    APP_NAME: str = "TuneDash"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Storage: "memory" keeps everything in-process, "database" uses SQLAlchemy
    STORAGE_BACKEND: str = "memory"
    DATABASE_URL: str = "sqlite:///./tunedash.db"  # Change to PostgreSQL in production
    
    # Redis session store (empty string disables Redis)
    REDIS_URL: str = "redis://localhost:6379/0"
    
    # Security
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    
    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5000"]
    
    # Analytics
    ANALYTICS_DEFAULT_DAYS: int = 30
    DASHBOARD_WINDOW_DAYS: int = 30
    TOP_TRACKS_LIMIT: int = 4
    
    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
