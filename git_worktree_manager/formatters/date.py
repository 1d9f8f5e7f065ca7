"""Date and time formatting utilities."""

from datetime import datetime, timezone
from typing import Optional


def _plural(count: int, unit: str) -> str:
    return f"1 {unit} ago" if count == 1 else f"{count} {unit}s ago"


def format_relative_time(date: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Format a commit date relative to now.

    Args:
        date: Commit date (timezone-aware or naive local time), or None
        now: Reference time, defaults to the current time

    Returns:
        "just now", "N minutes ago", "N hours ago", "N days ago", or an
        absolute date such as "Jan 2, 2006" once the date is a week old.
        Empty string when the date is unknown.
    """
    if date is None:
        return ""

    if now is None:
        now = datetime.now(timezone.utc) if date.tzinfo else datetime.now()
    elif (now.tzinfo is None) != (date.tzinfo is None):
        # Compare aware and naive values as local time
        now = now.astimezone() if now.tzinfo is None else now
        date = date.astimezone() if date.tzinfo is None else date

    seconds = (now - date).total_seconds()

    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return _plural(int(seconds // 60), "minute")
    if seconds < 24 * 3600:
        return _plural(int(seconds // 3600), "hour")
    if seconds < 7 * 24 * 3600:
        return _plural(int(seconds // (24 * 3600)), "day")
    return f"{date:%b} {date.day}, {date.year}"
