from __future__ import annotations

from datetime import date

from src.youth_attendance.youth_attendance.common.datetime_utils import is_sunday
from src.youth_attendance.youth_attendance.core.enums import AttendanceStatus
from src.youth_attendance.youth_attendance.exports.csv_export import export_csv, export_filename, export_session_csv
from src.youth_attendance.youth_attendance.groups import mutations
from src.youth_attendance.youth_attendance.groups.model import Group, Member
from src.youth_attendance.youth_attendance.ingestion.parser import parse_groups


def test_export_layout(groups):
    lines = export_csv(groups).split("\n")

    assert lines[0] == (
        '"No","Group_Id","Leader","Co_Leader","Month_Range","Member Name","PHONE NUMBER",'
        '"2024-01-07","2024-01-14","2024-01-21"'
    )
    assert lines[1] == '1,"G1","Alice","Ben","Jan-Mar","Bob","0100","P","A","A"'
    assert lines[2] == '2,"G1","Alice","Ben","Jan-Mar","Cara","0101","P","P",""'
    assert len(lines) == 4


def test_export_then_parse_rebuilds_collection(groups):
    assert parse_groups(export_csv(groups)) == groups


def test_export_of_empty_collection_is_empty():
    assert export_csv(()) == ""


def test_export_session_csv(groups):
    lines = export_session_csv(groups, "2024-01-21").split("\n")

    assert lines == [
        '"Group","Member Name","Phone","Status","Date"',
        '"Alice","Bob","0100","Absent","2024-01-21"',
        '"Alice","Cara","0101","No Record","2024-01-21"',
        '"Dan","Eve","0200","Present","2024-01-21"',
    ]


def test_export_filename():
    assert export_filename("executive_report", date(2024, 1, 7)) == "executive_report_2024-01-07.csv"
    assert export_filename("session_report", date_key="2024-01-21") == "session_report_2024-01-21.csv"


def _content(groups):
    """Collection without ids: group fields, members and their recorded Sunday cells."""
    return [
        (
            g.id,
            g.leader_name,
            g.co_leader_name,
            g.month_range,
            [
                (m.name, m.phone, {k: s for k, s in m.attendance.items() if s.is_recorded and is_sunday(k)})
                for m in g.members
            ],
        )
        for g in groups
    ]


def test_round_trip_keeps_embedded_commas(groups):
    changed = mutations.add_group(groups, leader_name="Lee, Ann", co_leader_name="Kim, Jo", month_range="Jan, Feb", group_id="G3")
    changed = mutations.add_member(changed, "G3", name="Smith, John", phone="555-0100, ext 2")
    member_id = changed[0].members[0].id
    changed = mutations.mark_attendance(changed, "G3", member_id, "2024-01-14", AttendanceStatus.PRESENT)

    reparsed = parse_groups(export_csv(changed))

    assert _content(reparsed) == _content(changed)
    assert reparsed[0].members[0].name == "Smith, John"


def test_round_trip_after_session_and_member_changes(groups):
    changed = mutations.add_session(groups, "2024-01-28")
    changed = mutations.add_member(changed, "G2", name="Finn", phone="0300")
    finn_id = changed[1].members[0].id
    changed = mutations.mark_attendance(changed, "G2", finn_id, "2024-01-28", AttendanceStatus.ABSENT)
    changed = mutations.bulk_mark(changed, "G1", "2024-01-28", AttendanceStatus.PRESENT)

    reparsed = parse_groups(export_csv(changed))

    assert _content(reparsed) == _content(changed)
    assert reparsed[1].members[0].status_on("2024-01-28") is AttendanceStatus.ABSENT


def test_round_trip_with_sparse_attendance_maps():
    sparse = (
        Group(
            id="G1",
            leader_name="Alice",
            members=(
                Member(id="a", name="Bob", attendance={"2024-01-07": AttendanceStatus.PRESENT}),
                Member(id="b", name="Cara", attendance={"2024-01-14": AttendanceStatus.ABSENT}),
                Member(id="c", name="Dee"),
            ),
        ),
    )

    reparsed = parse_groups(export_csv(sparse))

    assert _content(reparsed) == _content(sparse)
    assert reparsed[0].members[2].status_on("2024-01-14") is AttendanceStatus.UNRECORDED


def test_non_sunday_cells_are_not_exported(groups):
    bob_id = groups[0].members[0].id
    changed = mutations.mark_attendance(groups, "G1", bob_id, "2024-01-08", AttendanceStatus.ABSENT)

    text = export_csv(changed)
    reparsed = parse_groups(text)

    assert "2024-01-08" not in text
    assert reparsed[0].members[0].status_on("2024-01-08") is AttendanceStatus.UNRECORDED
    assert _content(reparsed) == _content(changed)


def test_memberless_groups_are_dropped_by_round_trip(groups):
    changed = mutations.add_group(groups, leader_name="Zed", group_id="G3")

    reparsed = parse_groups(export_csv(changed))

    assert [g.id for g in reparsed] == ["G1", "G2"]
    assert _content(reparsed) == _content(changed[1:])
