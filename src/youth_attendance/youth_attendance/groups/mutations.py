"""Create/update/delete operations over the group collection.

Every function takes the current collection and returns a new one. Inputs are
never mutated: only the branch that changes (group -> members -> attendance) is
rebuilt, everything else is reused as-is. Unknown ids are a no-op and return
the collection unchanged.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Callable, Iterable, Optional

from ..core.enums import AttendanceStatus
from .model import Group, Groups, Member


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def all_date_keys(groups: Iterable[Group]) -> set[str]:
    """Every attendance key held by any member, unfiltered."""
    keys: set[str] = set()
    for group in groups:
        for member in group.members:
            keys.update(member.attendance.keys())
    return keys


def _keep_if_unchanged(old: Groups, new: Groups) -> Groups:
    if len(old) == len(new) and all(a is b for a, b in zip(old, new)):
        return old
    return new


def _map_group(groups: Groups, group_id: str, fn: Callable[[Group], Group]) -> Groups:
    return _keep_if_unchanged(groups, tuple(fn(g) if g.id == group_id else g for g in groups))


def _map_member(group: Group, member_id: str, fn: Callable[[Member], Member]) -> Group:
    if group.find_member(member_id) is None:
        return group
    members = tuple(fn(m) if m.id == member_id else m for m in group.members)
    return replace(group, members=members)


def _with_status(member: Member, date_key: str, status: AttendanceStatus) -> Member:
    attendance = dict(member.attendance)
    attendance[date_key] = status
    return replace(member, attendance=attendance)


# ---- groups ----


def add_group(
    groups: Groups,
    *,
    leader_name: str,
    co_leader_name: str = "",
    month_range: str = "",
    group_id: Optional[str] = None,
) -> Groups:
    group = Group(
        id=group_id or new_id("G"),
        leader_name=leader_name,
        co_leader_name=co_leader_name,
        month_range=month_range,
        members=(),
    )
    return (group, *groups)


def update_group(
    groups: Groups,
    group_id: str,
    *,
    leader_name: str,
    co_leader_name: str = "",
    month_range: str = "",
) -> Groups:
    return _map_group(
        groups,
        group_id,
        lambda g: replace(g, leader_name=leader_name, co_leader_name=co_leader_name, month_range=month_range),
    )


def delete_group(groups: Groups, group_id: str) -> Groups:
    if not any(g.id == group_id for g in groups):
        return groups
    return tuple(g for g in groups if g.id != group_id)


# ---- members ----


def add_member(
    groups: Groups,
    group_id: str,
    *,
    name: str,
    phone: str = "",
    member_id: Optional[str] = None,
) -> Groups:
    """Prepend a member, backfilled with an unrecorded cell per known date."""
    known_dates = all_date_keys(groups)
    member = Member(
        id=member_id or new_id(group_id),
        name=name,
        phone=phone,
        attendance={key: AttendanceStatus.UNRECORDED for key in sorted(known_dates)},
    )
    return _map_group(groups, group_id, lambda g: replace(g, members=(member, *g.members)))


def update_member(groups: Groups, group_id: str, member_id: str, *, name: str, phone: str = "") -> Groups:
    return _map_group(
        groups,
        group_id,
        lambda g: _map_member(g, member_id, lambda m: replace(m, name=name, phone=phone)),
    )


def delete_member(groups: Groups, group_id: str, member_id: str) -> Groups:
    def drop(group: Group) -> Group:
        if group.find_member(member_id) is None:
            return group
        return replace(group, members=tuple(m for m in group.members if m.id != member_id))

    return _map_group(groups, group_id, drop)


# ---- attendance ----


def add_session(groups: Groups, date_key: str) -> Groups:
    """Open a new session column; existing cells for that date are kept."""

    def backfill_group(group: Group) -> Group:
        if all(date_key in m.attendance for m in group.members):
            return group
        members = tuple(
            m if date_key in m.attendance else _with_status(m, date_key, AttendanceStatus.UNRECORDED)
            for m in group.members
        )
        return replace(group, members=members)

    return _keep_if_unchanged(groups, tuple(backfill_group(g) for g in groups))


def mark_attendance(
    groups: Groups,
    group_id: str,
    member_id: str,
    date_key: str,
    status: AttendanceStatus,
) -> Groups:
    return _map_group(
        groups,
        group_id,
        lambda g: _map_member(g, member_id, lambda m: _with_status(m, date_key, status)),
    )


def toggle_attendance(groups: Groups, group_id: str, member_id: str, date_key: str) -> Groups:
    """Advance one cell along the '' -> P -> A -> '' cycle."""
    return _map_group(
        groups,
        group_id,
        lambda g: _map_member(g, member_id, lambda m: _with_status(m, date_key, m.status_on(date_key).next())),
    )


def bulk_mark(groups: Groups, group_id: str, date_key: str, status: AttendanceStatus) -> Groups:
    """Set one date column for every member of one group."""
    return _map_group(
        groups,
        group_id,
        lambda g: replace(g, members=tuple(_with_status(m, date_key, status) for m in g.members)),
    )
