"""Resolution of free-form date expressions to epoch seconds.

Understands a practical subset of what users type into date filters:

    1700000000, @1700000000     epoch seconds
    2024-05-01, 2024-05-01T12:00:00+02:00
                                ISO-8601 dates and datetimes
    now, today, yesterday, tomorrow
    -3 days, +2 weeks, 3 days ago
    last week, next month

Naive dates and datetimes are interpreted in local time.
"""

import re
import time
from datetime import datetime, timedelta

_UNIT_SECONDS = {
    "second": 1,
    "sec": 1,
    "minute": 60,
    "min": 60,
    "hour": 3600,
    "day": 86400,
    "week": 7 * 86400,
    "fortnight": 14 * 86400,
    "month": 30 * 86400,
    "year": 365 * 86400,
}
_UNITS = "|".join(sorted(_UNIT_SECONDS, key=len, reverse=True))

_EPOCH_PATTERN = re.compile(r"@?(\d+(?:\.\d+)?)")
_OFFSET_PATTERN = re.compile(rf"([+-]?\d+)\s*({_UNITS})s?(\s+ago)?")
_LAST_NEXT_PATTERN = re.compile(rf"(last|next)\s+({_UNITS})")


def _midnight(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp).replace(hour=0, minute=0, second=0, microsecond=0)


def resolve_date(expression: str, now: float | None = None) -> float | None:
    """Resolve a date expression to epoch seconds.

    Args:
        expression: Free-form date or time expression.
        now: Reference time for relative expressions (default: current time).

    Returns:
        Epoch seconds, or None when the expression is not understood.

    Example:
        >>> resolve_date("2 days ago", now=1_000_000.0)
        827200.0
    """
    text = expression.strip().lower()
    if not text:
        return None

    current = time.time() if now is None else now

    if match := _EPOCH_PATTERN.fullmatch(text):
        return float(match.group(1))

    if text == "now":
        return current
    if text == "today":
        return _midnight(current).timestamp()
    if text == "yesterday":
        return (_midnight(current) - timedelta(days=1)).timestamp()
    if text == "tomorrow":
        return (_midnight(current) + timedelta(days=1)).timestamp()

    if match := _OFFSET_PATTERN.fullmatch(text):
        amount = int(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        if match.group(3):
            amount = -amount
        return current + amount

    if match := _LAST_NEXT_PATTERN.fullmatch(text):
        amount = _UNIT_SECONDS[match.group(2)]
        return current - amount if match.group(1) == "last" else current + amount

    try:
        return datetime.fromisoformat(expression.strip()).timestamp()
    except ValueError:
        return None
