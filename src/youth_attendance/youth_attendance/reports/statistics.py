"""Derived statistics over a group collection.

All functions are read-only folds over ``(groups, date_range)``. The column axis
is always ``session_dates`` (Sunday keys only), so unrecorded cells and
non-Sunday keys never count towards a rate.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.constants import AT_RISK_LIMIT, AT_RISK_STREAK, LEADERBOARD_LIMIT, LEADERBOARD_MIN_SESSIONS
from ..core.enums import AttendanceStatus, TrendDirection
from ..groups.model import Group, Groups, Member
from ..sessions.dates import DateRange, latest_two, session_dates
from .model import (
    AtRiskMember,
    DashboardSummary,
    GroupMetric,
    GroupSessionCount,
    HistoricalSession,
    LeaderboardEntry,
    MemberHistoryEntry,
    SessionBreakdown,
    TrendPoint,
)
from .rates import percentage


def _count(members: Iterable[Member], dates: Sequence[str]) -> tuple[int, int]:
    present = absent = 0
    for member in members:
        for key in dates:
            status = member.status_on(key)
            if status is AttendanceStatus.PRESENT:
                present += 1
            elif status is AttendanceStatus.ABSENT:
                absent += 1
    return present, absent


def _resolve_dates(groups: Groups, date_range: Optional[DateRange], dates: Optional[Sequence[str]]) -> Sequence[str]:
    return dates if dates is not None else session_dates(groups, date_range)


def attendance_trend(groups: Groups, dates: Sequence[str]) -> list[TrendPoint]:
    trend = []
    for key in dates:
        present = absent = 0
        for group in groups:
            p, a = _count(group.members, [key])
            present += p
            absent += a
        trend.append(TrendPoint(date=key, present_count=present, absent_count=absent))
    return trend


def trend_direction(trend: Sequence[TrendPoint]) -> TrendDirection:
    """UP when the latest session had at least as many present as the one before."""
    if len(trend) < 2:
        return TrendDirection.STEADY
    previous, last = trend[-2], trend[-1]
    return TrendDirection.UP if last.present_count >= previous.present_count else TrendDirection.STEADY


def dashboard_summary(
    groups: Groups,
    date_range: Optional[DateRange] = None,
    *,
    dates: Optional[Sequence[str]] = None,
) -> DashboardSummary:
    dates = _resolve_dates(groups, date_range, dates)
    trend = attendance_trend(groups, dates)
    present = sum(p.present_count for p in trend)
    absent = sum(p.absent_count for p in trend)
    return DashboardSummary(
        total_members=sum(len(g.members) for g in groups),
        total_groups=len(groups),
        attendance_rate=percentage(present, absent),
        trend=trend,
        trend_direction=trend_direction(trend),
    )


def group_rate(group: Group, dates: Sequence[str]) -> int:
    return percentage(*_count(group.members, dates))


def group_metrics(
    groups: Groups,
    date_range: Optional[DateRange] = None,
    *,
    dates: Optional[Sequence[str]] = None,
) -> list[GroupMetric]:
    dates = _resolve_dates(groups, date_range, dates)
    metrics = []
    for group in groups:
        present, absent = _count(group.members, dates)
        metrics.append(
            GroupMetric(
                group_id=group.id,
                leader_name=group.leader_name,
                rate=percentage(present, absent),
                member_count=len(group.members),
                present=present,
                recorded=present + absent,
            )
        )
    # sorted() is stable: equal rates keep collection order
    return sorted(metrics, key=lambda m: m.rate, reverse=True)


def member_leaderboard(
    groups: Groups,
    date_range: Optional[DateRange] = None,
    *,
    dates: Optional[Sequence[str]] = None,
    limit: int = LEADERBOARD_LIMIT,
    min_sessions: int = LEADERBOARD_MIN_SESSIONS,
) -> list[LeaderboardEntry]:
    dates = _resolve_dates(groups, date_range, dates)
    entries = []
    for group in groups:
        for member in group.members:
            present, absent = _count([member], dates)
            total = present + absent
            if total < min_sessions:
                continue
            entries.append(
                LeaderboardEntry(
                    member_id=member.id,
                    name=member.name,
                    group_id=group.id,
                    leader_name=group.leader_name,
                    rate=percentage(present, absent),
                    total_sessions=total,
                    present_sessions=present,
                )
            )
    entries.sort(key=lambda e: (e.rate, e.total_sessions), reverse=True)
    return entries[:limit]


def at_risk_members(
    groups: Groups,
    date_range: Optional[DateRange] = None,
    *,
    dates: Optional[Sequence[str]] = None,
    limit: int = AT_RISK_LIMIT,
) -> list[AtRiskMember]:
    """Members absent on both of the two most recent sessions in range."""
    dates = _resolve_dates(groups, date_range, dates)
    last, previous = latest_two(list(dates))
    if last is None or previous is None:
        return []

    flagged = []
    for group in groups:
        for member in group.members:
            if member.status_on(last) is AttendanceStatus.ABSENT and member.status_on(previous) is AttendanceStatus.ABSENT:
                flagged.append(
                    AtRiskMember(
                        member_id=member.id,
                        name=member.name,
                        group_id=group.id,
                        leader_name=group.leader_name,
                        phone=member.phone,
                        missed_streak=AT_RISK_STREAK,
                    )
                )
    return flagged[:limit]


def session_breakdown(
    groups: Groups,
    date_range: Optional[DateRange] = None,
    *,
    target_date: Optional[str] = None,
    dates: Optional[Sequence[str]] = None,
) -> SessionBreakdown:
    dates = _resolve_dates(groups, date_range, dates)
    target = target_date or (dates[-1] if dates else None)
    if target is None:
        return SessionBreakdown(date=None)

    per_group = []
    for group in groups:
        present, absent = _count(group.members, [target])
        per_group.append(
            GroupSessionCount(
                group_id=group.id,
                leader_name=group.leader_name,
                present=present,
                absent=absent,
                unrecorded=len(group.members) - present - absent,
            )
        )
    per_group.sort(key=lambda c: c.present, reverse=True)

    return SessionBreakdown(
        date=target,
        present=sum(c.present for c in per_group),
        absent=sum(c.absent for c in per_group),
        unrecorded=sum(c.unrecorded for c in per_group),
        groups=per_group,
    )


def historical_sessions(
    groups: Groups,
    date_range: Optional[DateRange] = None,
    *,
    dates: Optional[Sequence[str]] = None,
) -> list[HistoricalSession]:
    dates = _resolve_dates(groups, date_range, dates)
    rows = []
    for key in dates:
        present = absent = 0
        leader: Optional[Group] = None
        leader_present = -1
        for group in groups:
            p, a = _count(group.members, [key])
            present += p
            absent += a
            # strict '>' so the first group wins a tie
            if p > leader_present:
                leader, leader_present = group, p
        rows.append(
            HistoricalSession(
                date=key,
                present=present,
                absent=absent,
                rate=percentage(present, absent),
                leading_group_id=leader.id if leader else None,
                leading_group_name=leader.leader_name if leader else None,
            )
        )
    return rows


def member_history(member: Member, dates: Sequence[str]) -> list[MemberHistoryEntry]:
    return [MemberHistoryEntry(date=key, status=member.status_on(key)) for key in dates]
