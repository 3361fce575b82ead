"""Tabular ingestion: quoted CSV-like text -> group collection.

The dialect is deliberately simple: a quote character toggles the "inside a
quoted field" flag and is dropped, and the delimiter only splits outside quotes.
Doubled quotes are NOT an escape, they are two toggles, so a name containing a
literal quote is lost.

Malformed rows are skipped, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..common.datetime_utils import find_date_key
from ..core.constants import (
    COL_CO_LEADER,
    COL_GROUP_ID,
    COL_LEADER,
    COL_MEMBER_NAME,
    COL_MONTH_RANGE,
    COL_PHONE,
    MIN_RECORD_FIELDS,
)
from ..core.enums import AttendanceStatus
from ..groups.model import Group, Groups, Member

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateColumn:
    index: int
    key: str


@dataclass(frozen=True)
class ParseReport:
    groups: Groups
    date_columns: tuple[DateColumn, ...] = ()
    rows_read: int = 0
    rows_skipped: int = 0
    skipped_lines: tuple[int, ...] = field(default_factory=tuple)

    @property
    def member_count(self) -> int:
        return sum(len(g.members) for g in self.groups)


def split_line(text: str, delimiter: str = ",", quote: str = '"') -> list[str]:
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for ch in text:
        if ch == quote:
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            fields.append("".join(current))
            current.clear()
        else:
            current.append(ch)

    fields.append("".join(current))
    return fields


def normalize_field(value: Optional[str]) -> str:
    """Single normalization step for every text cell: trim + strip wrapping quotes."""
    text = (value or "").strip()
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text.strip()


def _cell(row: list[str], index: int) -> str:
    return normalize_field(row[index]) if index < len(row) else ""


def detect_date_columns(header: list[str]) -> tuple[DateColumn, ...]:
    columns = []
    for index, title in enumerate(header):
        key = find_date_key(title)
        if key:
            columns.append(DateColumn(index=index, key=key))
    return tuple(columns)


def parse_with_report(text: str) -> ParseReport:
    lines = (text or "").strip().splitlines()
    if not lines:
        return ParseReport(groups=())

    date_columns = detect_date_columns(split_line(lines[0]))

    order: list[str] = []
    meta: dict[str, dict] = {}
    members: dict[str, list[Member]] = {}
    skipped: list[int] = []

    for line_no, line in enumerate(lines[1:], start=1):
        row = split_line(line)
        if len(row) < MIN_RECORD_FIELDS:
            skipped.append(line_no)
            logger.debug("Skipping short row %d (%d fields)", line_no, len(row))
            continue

        group_id = _cell(row, COL_GROUP_ID)
        member_name = _cell(row, COL_MEMBER_NAME)
        if not group_id or not member_name:
            skipped.append(line_no)
            logger.debug("Skipping row %d: missing group id or member name", line_no)
            continue

        if group_id not in meta:
            order.append(group_id)
            meta[group_id] = {
                "leader_name": _cell(row, COL_LEADER),
                "co_leader_name": _cell(row, COL_CO_LEADER),
                "month_range": _cell(row, COL_MONTH_RANGE),
            }
            members[group_id] = []

        attendance = {
            col.key: AttendanceStatus.parse(row[col.index] if col.index < len(row) else "")
            for col in date_columns
        }
        members[group_id].append(
            Member(
                id=f"{group_id}-{member_name}-{line_no}",
                name=member_name,
                phone=_cell(row, COL_PHONE),
                attendance=attendance,
            )
        )

    groups = tuple(Group(id=gid, members=tuple(members[gid]), **meta[gid]) for gid in order)
    if skipped:
        logger.info("Parsed %d groups, skipped %d malformed rows", len(groups), len(skipped))

    return ParseReport(
        groups=groups,
        date_columns=date_columns,
        rows_read=len(lines) - 1,
        rows_skipped=len(skipped),
        skipped_lines=tuple(skipped),
    )


def parse_groups(text: str) -> Groups:
    return parse_with_report(text).groups
