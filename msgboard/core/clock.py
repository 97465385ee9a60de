"""
Time helpers shared by the service and the statistics reporter.
"""
from datetime import datetime, timezone
from typing import Callable, Optional

# yyyy-MM-dd HH:mm:ss, used in reports and response envelopes
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (SQLite stores no offset)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_timestamp(value: Optional[datetime] = None) -> str:
    """Format a datetime for logs and response envelopes."""
    return (value or utc_now()).strftime(TIMESTAMP_FORMAT)
