"""JSON codec for the persisted snapshot of the whole group collection."""

from __future__ import annotations

import json
from typing import Any

from ..core.enums import AttendanceStatus
from ..core.exceptions import SnapshotError
from ..groups.model import Group, Groups, Member

SNAPSHOT_VERSION = 1


def _member_to_dict(member: Member) -> dict[str, Any]:
    return {
        "id": member.id,
        "name": member.name,
        "phone": member.phone,
        "attendance": {key: status.value for key, status in member.attendance.items()},
    }


def _group_to_dict(group: Group) -> dict[str, Any]:
    return {
        "id": group.id,
        "leaderName": group.leader_name,
        "coLeaderName": group.co_leader_name,
        "monthRange": group.month_range,
        "members": [_member_to_dict(m) for m in group.members],
    }


def dumps(groups: Groups) -> str:
    return json.dumps(
        {"version": SNAPSHOT_VERSION, "groups": [_group_to_dict(g) for g in groups]},
        ensure_ascii=False,
    )


def _member_from_dict(raw: dict) -> Member:
    attendance = raw.get("attendance") or {}
    if not isinstance(attendance, dict):
        raise SnapshotError("attendance must be an object")
    return Member(
        id=str(raw["id"]),
        name=str(raw["name"]),
        phone=str(raw.get("phone") or ""),
        attendance={str(k): AttendanceStatus.parse(v) for k, v in attendance.items()},
    )


def _group_from_dict(raw: dict) -> Group:
    return Group(
        id=str(raw["id"]),
        leader_name=str(raw.get("leaderName") or ""),
        co_leader_name=str(raw.get("coLeaderName") or ""),
        month_range=str(raw.get("monthRange") or ""),
        members=tuple(_member_from_dict(m) for m in raw.get("members") or []),
    )


def loads(text: str) -> Groups:
    """Decode a snapshot; any structural problem raises SnapshotError."""
    try:
        data = json.loads(text)
        # Older snapshots were a bare list of groups.
        raw_groups = data["groups"] if isinstance(data, dict) else data
        if not isinstance(raw_groups, list):
            raise SnapshotError("groups must be a list")
        groups = tuple(_group_from_dict(g) for g in raw_groups)
    except SnapshotError:
        raise
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise SnapshotError(f"Invalid snapshot: {e}") from e

    ids = [g.id for g in groups]
    if len(ids) != len(set(ids)):
        raise SnapshotError("Duplicate group ids in snapshot")
    return groups
