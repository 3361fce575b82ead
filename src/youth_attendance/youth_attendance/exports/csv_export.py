"""CSV export of the group collection.

The full export is the inverse of ``ingestion.parser``: the same header shape,
the same column offsets (group id at index 1) and the same date-column
detection, so ``parse_groups(export_csv(groups))`` rebuilds the collection.
"""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_date_key, today_local
from ..core.constants import EXPORT_HEADER, SESSION_EXPORT_HEADER
from ..groups.model import Groups
from ..sessions.dates import session_dates


def _writer(out: io.StringIO):
    # Strings quoted, row numbers bare; the ingestion dialect drops the quotes.
    return csv.writer(out, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")


def export_csv(groups: Groups) -> str:
    """One row per member over the Sunday session columns.

    Two things cannot survive a re-parse: groups without members (there is no
    row to carry them) and cells on non-Sunday keys (no column is written).
    """
    if not groups:
        return ""

    dates = session_dates(groups)
    out = io.StringIO()
    writer = _writer(out)
    writer.writerow([*EXPORT_HEADER, *dates])

    row_no = 0
    for group in groups:
        for member in group.members:
            row_no += 1
            writer.writerow(
                [
                    row_no,
                    group.id,
                    group.leader_name,
                    group.co_leader_name or "",
                    group.month_range,
                    member.name,
                    member.phone or "",
                    *[member.status_on(key).value for key in dates],
                ]
            )

    return out.getvalue().rstrip("\n")


def export_session_csv(groups: Groups, date_key: str) -> str:
    """One row per member for exactly one session date."""
    out = io.StringIO()
    writer = _writer(out)
    writer.writerow(SESSION_EXPORT_HEADER)
    for group in groups:
        for member in group.members:
            writer.writerow(
                [
                    group.leader_name,
                    member.name,
                    member.phone or "",
                    member.status_on(date_key).label,
                    date_key,
                ]
            )
    return out.getvalue().rstrip("\n")


def export_filename(prefix: str, day: Optional[date] = None, *, date_key: Optional[str] = None) -> str:
    """e.g. executive_report_2024-01-07.csv / session_report_2024-01-07.csv"""
    stamp = date_key or format_date_key(day or today_local())
    return f"{prefix}_{stamp}.csv"
