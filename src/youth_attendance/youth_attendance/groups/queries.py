from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..core.constants import ALL_MONTH_RANGES
from ..core.enums import AttendanceStatus
from .model import Group, Member


@dataclass(frozen=True)
class MemberRow:
    """Read-model for the flat members directory (member + owning group)."""

    group: Group
    member: Member


def find_group(groups: Iterable[Group], group_id: Optional[str]) -> Optional[Group]:
    if not group_id:
        return None
    for group in groups:
        if group.id == group_id:
            return group
    return None


def month_ranges(groups: Iterable[Group]) -> list[str]:
    return sorted({g.month_range for g in groups})


def _matches_month(group: Group, month_range: Optional[str]) -> bool:
    return not month_range or month_range == ALL_MONTH_RANGES or group.month_range == month_range


def filter_groups(
    groups: Iterable[Group],
    *,
    search: str = "",
    month_range: Optional[str] = None,
) -> list[Group]:
    needle = (search or "").lower()
    return [g for g in groups if needle in g.leader_name.lower() and _matches_month(g, month_range)]


def search_members(
    groups: Iterable[Group],
    *,
    query: str = "",
    month_range: Optional[str] = None,
    status: Optional[AttendanceStatus] = None,
    date_key: Optional[str] = None,
) -> list[MemberRow]:
    """Members whose name (case-insensitive) or phone contains ``query``.

    ``status`` only applies together with ``date_key``.
    """
    needle = (query or "").lower()
    rows: list[MemberRow] = []
    for group in groups:
        if not _matches_month(group, month_range):
            continue
        for member in group.members:
            if needle and needle not in member.name.lower() and needle not in (member.phone or "").lower():
                continue
            if status is not None and date_key and member.status_on(date_key) is not status:
                continue
            rows.append(MemberRow(group=group, member=member))
    return rows


def sort_members_by_status(
    members: Sequence[Member],
    date_key: str,
    target: AttendanceStatus,
) -> list[Member]:
    """Target status first, then the other recorded status, then unrecorded."""

    def score(member: Member) -> int:
        status = member.status_on(date_key)
        if status is target:
            return 2
        return 1 if status.is_recorded else 0

    return sorted(members, key=score, reverse=True)
