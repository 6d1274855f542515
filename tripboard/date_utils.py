from __future__ import annotations

from datetime import datetime
from enum import Enum

MINUTES_IN_HOUR = 60
HOURS_IN_DAY = 24


class DateFormat(str, Enum):
    MONTH = "%b"
    DAY = "%d"
    HOURS_MINUTES = "%H:%M"
    MONTH_DAY = "%b %d"
    FULL = "%Y %B %d %H:%M"
    DATE_DISPLAY = "%d/%m/%y %H:%M"
    TRIP_INFO = "%d %b"


def format_date(value: datetime | None, fmt: DateFormat | str) -> str:
    """Format *value* with one of :class:`DateFormat` or a raw strftime pattern."""
    if value is None:
        return ""
    pattern = fmt.value if isinstance(fmt, DateFormat) else fmt
    text = value.strftime(pattern)
    if fmt is DateFormat.TRIP_INFO or fmt is DateFormat.MONTH_DAY:
        return text.upper()
    return text


def format_duration(date_from: datetime, date_to: datetime) -> str:
    """Return ``01D 02H 30M``, ``02H 30M`` or ``30M`` for the interval."""
    total = int((date_to - date_from).total_seconds() // 60)
    total = max(total, 0)
    minutes = total % MINUTES_IN_HOUR
    hours = total // MINUTES_IN_HOUR % HOURS_IN_DAY
    days = total // MINUTES_IN_HOUR // HOURS_IN_DAY

    if days > 0:
        return f"{days:02d}D {hours:02d}H {minutes:02d}M"
    if hours > 0:
        return f"{hours:02d}H {minutes:02d}M"
    return f"{minutes:02d}M"


__all__ = ["DateFormat", "format_date", "format_duration"]
