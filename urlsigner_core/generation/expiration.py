"""
Expiration Parsing
==================
Resolve the many ways an expiration can be given to one Unix timestamp.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Union

Expiration = Union[int, float, datetime, timedelta, str]

UNIT_SECONDS = {
    "second": 1,
    "minute": 60,
    "hour": 3600,
    "day": 86400,
    "week": 604800,
}

RELATIVE_PATTERN = re.compile(
    r"^\s*\+?\s*(\d+)\s*(second|minute|hour|day|week)s?\s*$", re.IGNORECASE
)


def parse_expiration(value: Expiration, now: float) -> int:
    """
    Convert an expiration to an absolute Unix timestamp.
    
    Args:
        value: Timestamp, datetime (naive means UTC), timedelta relative to
            now, ISO-8601 string, or relative string like "+30 minutes"
        now: Current Unix time
        
    Returns:
        Unix timestamp in whole seconds
        
    Raises:
        ValueError: If the value cannot be understood
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid expiration: {value!r}")
    
    if isinstance(value, (int, float)):
        return int(value)
    
    if isinstance(value, timedelta):
        return int(now + value.total_seconds())
    
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    
    if isinstance(value, str):
        match = RELATIVE_PATTERN.match(value)
        if match:
            amount, unit = match.groups()
            return int(now + int(amount) * UNIT_SECONDS[unit.lower()])
        try:
            return parse_expiration(datetime.fromisoformat(value), now)
        except ValueError:
            raise ValueError(f"Invalid expiration: {value!r}") from None
    
    raise ValueError(f"Invalid expiration: {value!r}")
