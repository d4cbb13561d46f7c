# ============================================================================
# FILE: tunedash/core/logging.py
# ============================================================================
import logging
from typing import Optional
from tunedash.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once for the whole application"""
    if level is None:
        level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL
    
    root = logging.getLogger()
    root.setLevel(level.upper())
    
    # Avoid duplicate handlers when the app factory runs more than once (tests)
    if not any(getattr(h, "_tunedash", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._tunedash = True
        root.addHandler(handler)
    
    # Uvicorn access logs are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
