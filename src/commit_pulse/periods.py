"""Period descriptors: resolve ``since``/``until`` labels and count the days between them.

Descriptors are what users type on the command line:

    today, yesterday      calendar days relative to ``today``
    7d, 2w, 1m, 1y        relative offsets (a month is 30 days, a year 365)
    2025-01-31            absolute ISO dates

The aggregation engine treats the resolved strings as opaque labels; only
``days_between`` looks inside them.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from typing import Optional

from .exceptions import InvalidPeriodError

_RELATIVE_RE = re.compile(r"^(\d+)([dwmy])$")
_ISO_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_UNIT_DAYS = {"d": 1, "w": 7, "m": 30, "y": 365}


def resolve_date(
    descriptor: Optional[str], today: Optional[date] = None, field_name: str = "since"
) -> Optional[str]:
    """Resolve a descriptor to an ISO ``YYYY-MM-DD`` string.

    ``None`` and empty strings mean "all history" and resolve to ``None``.

    Raises:
        InvalidPeriodError: If the descriptor is not recognised
    """
    if descriptor is None or not descriptor.strip():
        return None

    text = descriptor.strip().lower()
    today = today or date.today()

    if text == "today":
        return today.isoformat()
    if text == "yesterday":
        return (today - timedelta(days=1)).isoformat()

    match = _RELATIVE_RE.match(text)
    if match:
        amount, unit = int(match.group(1)), match.group(2)
        return (today - timedelta(days=amount * _UNIT_DAYS[unit])).isoformat()

    if _ISO_DAY_RE.match(text):
        try:
            date.fromisoformat(text)
        except ValueError:
            raise InvalidPeriodError(descriptor, field_name)
        return text

    raise InvalidPeriodError(descriptor, field_name)


def days_between(since: Optional[str], until: Optional[str]) -> int:
    """Whole days from ``since`` to ``until``, rounded up.

    Returns 0 unless both sides are resolvable ISO dates or timestamps, which
    covers same-day and all-history queries.
    """
    start = _to_datetime(since)
    end = _to_datetime(until)
    if start is None or end is None:
        return 0
    seconds = (end - start).total_seconds()
    return math.ceil(seconds / 86400)


def _to_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    # Offsets would make naive/aware subtraction fail; compare wall clocks
    return parsed.replace(tzinfo=None)
