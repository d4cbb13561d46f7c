# ============================================================================
# FILE: tunedash/core/clock.py
# ============================================================================
from datetime import datetime, timezone

def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the form stored in every backend)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
