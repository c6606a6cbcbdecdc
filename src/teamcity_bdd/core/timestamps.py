"""Timestamp formatting for step lines and protocol attributes."""

from collections.abc import Callable
from datetime import datetime

Clock = Callable[[], datetime]


def _millis(moment: datetime) -> str:
    return f"{moment.microsecond // 1000:03d}"


def timestamp_short(moment: datetime) -> str:
    """Format a local time as HH:MM:SS.mmm for human-readable step lines."""
    return f"{moment.strftime('%H:%M:%S')}.{_millis(moment)}"


def timestamp_full(moment: datetime) -> str:
    """Format a local time as YYYY-MM-DDTHH:MM:SS.mmm for protocol attributes."""
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{_millis(moment)}"
