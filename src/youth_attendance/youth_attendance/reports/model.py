from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import AttendanceStatus, TrendDirection
from .rates import ratio_percent


@dataclass(frozen=True)
class TrendPoint:
    date: str
    present_count: int
    absent_count: int


@dataclass(frozen=True)
class DashboardSummary:
    total_members: int
    total_groups: int
    attendance_rate: int
    trend: list[TrendPoint] = field(default_factory=list)
    trend_direction: TrendDirection = TrendDirection.STEADY


@dataclass(frozen=True)
class GroupMetric:
    group_id: str
    leader_name: str
    rate: int
    member_count: int
    present: int
    recorded: int


@dataclass(frozen=True)
class LeaderboardEntry:
    member_id: str
    name: str
    group_id: str
    leader_name: str
    rate: int
    total_sessions: int
    present_sessions: int


@dataclass(frozen=True)
class AtRiskMember:
    member_id: str
    name: str
    group_id: str
    leader_name: str
    phone: str
    missed_streak: int


@dataclass(frozen=True)
class GroupSessionCount:
    group_id: str
    leader_name: str
    present: int
    absent: int
    unrecorded: int

    @property
    def completion(self) -> int:
        """Share of the group's cells that have been recorded at all."""
        return ratio_percent(self.present + self.absent, self.present + self.absent + self.unrecorded)


@dataclass(frozen=True)
class SessionBreakdown:
    """Read-model for one session date (defaults to the latest one)."""

    date: Optional[str]
    present: int = 0
    absent: int = 0
    unrecorded: int = 0
    groups: list[GroupSessionCount] = field(default_factory=list)


@dataclass(frozen=True)
class HistoricalSession:
    date: str
    present: int
    absent: int
    rate: int
    leading_group_id: Optional[str]
    leading_group_name: Optional[str]


@dataclass(frozen=True)
class MemberHistoryEntry:
    date: str
    status: AttendanceStatus


@dataclass(frozen=True)
class ExecutiveReport:
    dates: list[str]
    total_members: int
    overall_rate: int
    best_group: Optional[GroupMetric]
    group_metrics: list[GroupMetric]
    leaderboard: list[LeaderboardEntry]
    at_risk: list[AtRiskMember]
    latest_session: SessionBreakdown
    history: list[HistoricalSession]
