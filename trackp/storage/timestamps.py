"""
Timestamp formatting shared by both storage backends.
"""
from datetime import date, datetime, timezone
from typing import Any, Optional

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


def now_timestamp() -> str:
    """Current UTC time as ``YYYY-MM-DD HH:MM:SS``, matching SQL ``CURRENT_TIMESTAMP``."""
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


def format_timestamp(value: Any) -> str:
    """Render a driver value (datetime or text) as ``YYYY-MM-DD HH:MM:SS``."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime(TIMESTAMP_FORMAT)
    # SQLite hands back text; drop fractional seconds if present
    return str(value).replace("T", " ")[:19]


def format_date(value: Optional[Any]) -> str:
    """Render a driver value (date or text) as ``YYYY-MM-DD``; empty when unset."""
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.strftime(DATE_FORMAT)
    return str(value)[:10]
