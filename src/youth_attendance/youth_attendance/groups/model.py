from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class Member:
    """Domain entity: one youth in a group.

    ``attendance`` maps a session date key (YYYY-MM-DD) to a status. The map may
    be sparse; a missing key reads as unrecorded.
    """

    id: str
    name: str
    phone: str = ""
    attendance: Mapping[str, AttendanceStatus] = field(default_factory=dict)

    def status_on(self, date_key: str) -> AttendanceStatus:
        return self.attendance.get(date_key, AttendanceStatus.UNRECORDED)


@dataclass(frozen=True)
class Group:
    """Domain entity: a small group with its leaders and members.

    ``month_range`` is a free-text period label (e.g. "Jan-Mar"), used only for
    filtering.
    """

    id: str
    leader_name: str
    co_leader_name: str = ""
    month_range: str = ""
    members: tuple[Member, ...] = ()

    def find_member(self, member_id: str) -> Optional[Member]:
        for member in self.members:
            if member.id == member_id:
                return member
        return None


Groups = tuple[Group, ...]
