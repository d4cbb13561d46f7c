# ============================================================================
# FILE: tunedash/storage/factory.py
# Builds the store named by STORAGE_BACKEND
# ============================================================================
import logging

from tunedash.config import Settings
from tunedash.storage.base import Storage

logger = logging.getLogger(__name__)

def create_storage(settings: Settings) -> Storage:
    """
    Create the store named by settings.STORAGE_BACKEND.

    Raises:
        ValueError: If the backend is not supported
    """
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "memory":
        from tunedash.storage.memory import MemStorage
        logger.info("Using in-memory storage")
        return MemStorage()

    elif backend == "database":
        from tunedash.storage.database import DatabaseStorage
        return DatabaseStorage(settings.DATABASE_URL)

    else:
        raise ValueError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")
