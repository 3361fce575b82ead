from __future__ import annotations

from src.youth_attendance.youth_attendance.core.enums import AttendanceStatus
from src.youth_attendance.youth_attendance.ingestion.parser import (
    normalize_field,
    parse_groups,
    parse_with_report,
    split_line,
)


def test_split_line_keeps_delimiter_inside_quotes():
    assert split_line('1,"Smith, John",x') == ["1", "Smith, John", "x"]


def test_split_line_doubled_quote_is_two_toggles_not_an_escape():
    # "a""b" -> toggle, a, toggle, toggle, b, toggle: no literal quote survives
    assert split_line('"a""b",c') == ["ab", "c"]


def test_normalize_field_trims_and_strips_wrapping_quotes():
    assert normalize_field('  "Bob"  ') == "Bob"
    assert normalize_field(None) == ""


def test_parse_groups_folds_rows_by_group_in_first_seen_order(sample_csv):
    groups = parse_groups(sample_csv)

    assert [g.id for g in groups] == ["G1", "G2"]
    g1 = groups[0]
    assert g1.leader_name == "Alice"
    assert g1.co_leader_name == "Ben"
    assert g1.month_range == "Jan-Mar"
    assert [m.name for m in g1.members] == ["Bob", "Cara"]
    assert g1.members[0].phone == "0100"


def test_parse_groups_attendance_is_total_over_header_dates(sample_csv):
    cara = parse_groups(sample_csv)[0].members[1]

    assert cara.attendance == {
        "2024-01-07": AttendanceStatus.PRESENT,
        "2024-01-14": AttendanceStatus.PRESENT,
        "2024-01-21": AttendanceStatus.UNRECORDED,
    }


def test_status_cells_are_trimmed_and_uppercased():
    text = "No,Group_Id,Leader,Co,Month,Name,Phone,2024-01-07,2024-01-14,2024-01-21\n1,G1,L,,M,Bob,, p ,a,x"
    bob = parse_groups(text)[0].members[0]

    assert bob.status_on("2024-01-07") is AttendanceStatus.PRESENT
    assert bob.status_on("2024-01-14") is AttendanceStatus.ABSENT
    assert bob.status_on("2024-01-21") is AttendanceStatus.UNRECORDED


def test_group_metadata_comes_from_first_record():
    text = (
        "No,Group_Id,Leader,Co,Month,Name,Phone,2024-01-07\n"
        "1,G1,First,,Jan,Bob,,P\n"
        "2,G1,Second,,Feb,Cara,,A\n"
    )
    (group,) = parse_groups(text)

    assert group.leader_name == "First"
    assert group.month_range == "Jan"
    assert len(group.members) == 2


def test_malformed_rows_are_skipped_and_reported():
    text = (
        "No,Group_Id,Leader,Co,Month,Name,Phone,2024-01-07\n"
        "1,G1,L,,M,Bob,,P\n"
        "\n"
        "2,G1,L\n"
        "3,,L,,M,Nobody,,P\n"
        "4,G1,L,,M,   ,,P\n"
    )
    report = parse_with_report(text)

    assert report.member_count == 1
    assert report.rows_read == 5
    assert report.rows_skipped == 4
    assert report.skipped_lines == (2, 3, 4, 5)


def test_date_columns_match_pattern_anywhere_in_header():
    text = "No,Group_Id,Leader,Co,Month,Name,Phone,Sun 2024-01-07,Notes\n1,G1,L,,M,Bob,,P,hello"
    report = parse_with_report(text)

    assert [(c.index, c.key) for c in report.date_columns] == [(7, "2024-01-07")]
    assert report.groups[0].members[0].attendance == {"2024-01-07": AttendanceStatus.PRESENT}


def test_empty_input_gives_empty_collection():
    assert parse_groups("") == ()
    assert parse_groups("   \n  ") == ()


def test_member_ids_are_unique_even_for_same_name():
    text = "No,Group_Id,Leader,Co,Month,Name,Phone\n1,G1,L,,M,Bob,\n2,G1,L,,M,Bob,\n"
    members = parse_groups(text)[0].members

    assert members[0].id != members[1].id
