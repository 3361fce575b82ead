from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from ..core.constants import DATE_KEY_FORMAT, DATE_KEY_PATTERN

_DATE_KEY_RE = re.compile(DATE_KEY_PATTERN)

SUNDAY = 6


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_KEY_FORMAT).date()


def find_date_key(text: str) -> Optional[str]:
    """Return the first YYYY-MM-DD substring of ``text`` (or None)."""
    match = _DATE_KEY_RE.search(text or "")
    return match.group(0) if match else None


def date_of_key(key: str) -> Optional[date]:
    """Calendar date embedded in a session key.

    Parsed as a plain local calendar date; never as an instant, so the weekday
    does not depend on the host timezone.
    """
    found = find_date_key(key)
    if not found:
        return None
    try:
        return parse_iso_date(found)
    except ValueError:
        # e.g. 2024-02-30 matches the pattern but is not a real day
        return None


def is_sunday(key: str) -> bool:
    day = date_of_key(key)
    return day is not None and day.weekday() == SUNDAY


def format_date_key(value: date) -> str:
    return value.strftime(DATE_KEY_FORMAT)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()
