"""
utils/time_utils.py

Purpose: Time and expiry helpers

- Token expiry checks
- Current UTC time
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Returns the current time as an aware UTC datetime.
    """
    return datetime.now(timezone.utc)


def is_expired(expires_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """
    Checks if an expiry timestamp has passed.
    A missing expiry counts as expired.
    """
    if not expires_at:
        return True
    return (now or utc_now()) >= expires_at
