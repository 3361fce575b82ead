from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import date_of_key, is_sunday, parse_iso_date
from ..core.exceptions import ValidationError
from ..groups.model import Group


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar window; either bound may be open."""

    start: Optional[date] = None
    end: Optional[date] = None

    def contains(self, day: date) -> bool:
        if self.start and day < self.start:
            return False
        if self.end and day > self.end:
            return False
        return True

    @classmethod
    def parse(cls, start: Optional[str] = None, end: Optional[str] = None) -> "DateRange":
        try:
            start_d = parse_iso_date(start) if start else None
            end_d = parse_iso_date(end) if end else None
        except ValueError:
            raise ValidationError("start/end must be YYYY-MM-DD dates") from None
        if start_d and end_d and start_d > end_d:
            raise ValidationError("start must not be after end")
        return cls(start=start_d, end=end_d)

    @classmethod
    def last_n_weeks(cls, weeks: int, today: date) -> "DateRange":
        return cls(start=today - timedelta(weeks=weeks), end=today)


def session_dates(groups: Iterable[Group], date_range: Optional[DateRange] = None) -> list[str]:
    """Sorted, de-duplicated Sunday session keys across every member.

    Non-Sunday keys stay in the members' maps but never show up here, so they
    are also left out of every aggregate built on this list.
    """
    keys: set[str] = set()
    for group in groups:
        for member in group.members:
            keys.update(member.attendance.keys())

    dates = []
    for key in keys:
        if not is_sunday(key):
            continue
        if date_range is not None and not date_range.contains(date_of_key(key)):
            continue
        dates.append(key)
    return sorted(dates)


def latest_two(dates: list[str]) -> tuple[Optional[str], Optional[str]]:
    """(most recent, second most recent); None where missing."""
    last = dates[-1] if dates else None
    previous = dates[-2] if len(dates) >= 2 else None
    return last, previous
