from __future__ import annotations

from enum import Enum
from typing import Optional


class AttendanceStatus(str, Enum):
    """Status of one (member, session date) cell."""

    PRESENT = "P"
    ABSENT = "A"
    UNRECORDED = ""

    @classmethod
    def parse(cls, raw: Optional[str]) -> "AttendanceStatus":
        """Normalize a raw cell value; anything but P/A is unrecorded."""
        value = (raw or "").strip().upper()
        if value == cls.PRESENT.value:
            return cls.PRESENT
        if value == cls.ABSENT.value:
            return cls.ABSENT
        return cls.UNRECORDED

    def next(self) -> "AttendanceStatus":
        """Toggle order used by single-cell clicks: '' -> P -> A -> ''."""
        return {
            AttendanceStatus.UNRECORDED: AttendanceStatus.PRESENT,
            AttendanceStatus.PRESENT: AttendanceStatus.ABSENT,
            AttendanceStatus.ABSENT: AttendanceStatus.UNRECORDED,
        }[self]

    @property
    def is_recorded(self) -> bool:
        return self is not AttendanceStatus.UNRECORDED

    @property
    def label(self) -> str:
        return {
            AttendanceStatus.PRESENT: "Present",
            AttendanceStatus.ABSENT: "Absent",
            AttendanceStatus.UNRECORDED: "No Record",
        }[self]


class TrendDirection(str, Enum):
    """Direction of the last two sessions on the dashboard card."""

    UP = "up"
    STEADY = "steady"
