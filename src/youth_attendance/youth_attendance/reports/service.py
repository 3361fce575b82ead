from __future__ import annotations

from typing import Optional

from ..core.constants import AT_RISK_LIMIT, LEADERBOARD_LIMIT, LEADERBOARD_MIN_SESSIONS
from ..groups.model import Groups
from ..sessions.dates import DateRange, session_dates
from . import statistics
from .model import DashboardSummary, ExecutiveReport
from .rates import round_half_up


class ReportService:
    """Builds the dashboard and executive report read-models.

    Display caps are injected so each call site can choose its own (the
    dashboard shows fewer rows than the full report page).
    """

    def __init__(
        self,
        *,
        leaderboard_limit: int = LEADERBOARD_LIMIT,
        at_risk_limit: int = AT_RISK_LIMIT,
        min_sessions: int = LEADERBOARD_MIN_SESSIONS,
    ):
        self._leaderboard_limit = int(leaderboard_limit)
        self._at_risk_limit = int(at_risk_limit)
        self._min_sessions = int(min_sessions)

    def build_dashboard(self, groups: Groups, *, date_range: Optional[DateRange] = None) -> DashboardSummary:
        return statistics.dashboard_summary(groups, date_range)

    def build_report(
        self,
        groups: Groups,
        *,
        date_range: Optional[DateRange] = None,
        target_date: Optional[str] = None,
        at_risk_limit: Optional[int] = None,
    ) -> ExecutiveReport:
        dates = session_dates(groups, date_range)

        metrics = statistics.group_metrics(groups, dates=dates)
        # mean of group rates, not the pooled rate
        overall = round_half_up(sum(m.rate for m in metrics), len(metrics))

        return ExecutiveReport(
            dates=dates,
            total_members=sum(len(g.members) for g in groups),
            overall_rate=overall,
            best_group=metrics[0] if metrics else None,
            group_metrics=metrics,
            leaderboard=statistics.member_leaderboard(
                groups,
                dates=dates,
                limit=self._leaderboard_limit,
                min_sessions=self._min_sessions,
            ),
            at_risk=statistics.at_risk_members(
                groups,
                dates=dates,
                limit=at_risk_limit if at_risk_limit is not None else self._at_risk_limit,
            ),
            latest_session=statistics.session_breakdown(groups, dates=dates, target_date=target_date),
            history=statistics.historical_sessions(groups, dates=dates),
        )
