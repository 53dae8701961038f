#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

import math
from typing import Optional, Any
from datetime import datetime


def safe_str(value: Optional[Any], default: Optional[str] = None) -> Optional[str]:
    """
    Safely convert value to string.

    Args:
        value: Value to convert (UUID, str, int or None).
        default: Default value if value is None.

    Returns:
        String value.
    """
    if value is None:
        return default
    return str(value)


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Safely convert datetime to ISO format string.

    Args:
        dt: Datetime object.

    Returns:
        ISO format string or None.
    """
    if dt is None:
        return None
    return dt.isoformat()


def page_count(total: int, limit: int) -> int:
    """Number of pages needed for `total` items, 0 when there are none."""
    if limit < 1:
        return 0
    return math.ceil(total / limit)
