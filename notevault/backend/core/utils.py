"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values stored by the database layer are timezone-naive
    and assumed to be UTC.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def now_millis() -> int:
    """
    Return the current time as integer milliseconds since the Unix epoch.

    Note timestamps (createdAt, updatedAt) use this representation.
    """
    return time.time_ns() // 1_000_000
