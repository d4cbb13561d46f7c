# ============================================================================
# FILE: tunedash/core/session_store.py
# Revoked access tokens (logout), backed by Redis when available
# ============================================================================
import threading
import time
from typing import Dict, Optional
import redis
import logging

logger = logging.getLogger(__name__)

class SessionStore:
    """
    Tracks revoked token ids until their expiry
    Falls back to an in-process map if Redis is not configured or unreachable
    """
    
    KEY_PREFIX = "tunedash:revoked:"
    
    def __init__(self, redis_url: Optional[str] = None):
        self.redis_client = None
        self._local: Dict[str, float] = {}
        self._lock = threading.Lock()
        
        if not redis_url:
            logger.info("Redis not configured. Using in-process session store.")
            return
        
        try:
            self.redis_client = redis.from_url(redis_url, decode_responses=True)
            self.redis_client.ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(f"Redis connection failed: {e}. Using in-process session store.")
            self.redis_client = None
    
    def revoke(self, jti: str, expires_at: float) -> None:
        """Mark a token id as revoked until the given unix timestamp"""
        ttl = int(expires_at - time.time())
        if ttl <= 0:
            return
        
        if self.redis_client:
            try:
                self.redis_client.setex(self.KEY_PREFIX + jti, ttl, "1")
                return
            except Exception as e:
                logger.error(f"Session store write error: {e}")
        
        with self._lock:
            self._local[jti] = expires_at
    
    def is_revoked(self, jti: str) -> bool:
        """Check whether a token id has been revoked"""
        if self.redis_client:
            try:
                if self.redis_client.exists(self.KEY_PREFIX + jti):
                    return True
            except Exception as e:
                logger.error(f"Session store read error: {e}")
        
        with self._lock:
            self._purge_expired()
            return jti in self._local
    
    def _purge_expired(self) -> None:
        now = time.time()
        for jti in [k for k, exp in self._local.items() if exp <= now]:
            del self._local[jti]
