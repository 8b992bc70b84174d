"""
Timestamp conversion helpers.
"""

from datetime import datetime, timezone
from numbers import Number
from typing import Union


def to_micro(value: Union[datetime, str, Number]) -> int:
    """
    Convert a point in time to integer microseconds since epoch.
    
    Naive datetimes are taken as UTC. Strings are parsed as
    ISO-8601. Numbers are assumed to already be microseconds.
    """
    if isinstance(value, Number) and not isinstance(value, bool):
        return int(value)
    
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    
    if not isinstance(value, datetime):
        raise TypeError(f"Cannot convert {type(value).__name__} to microseconds")
    
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    
    delta = value - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
