from __future__ import annotations

from src.youth_attendance.youth_attendance.core.enums import AttendanceStatus
from src.youth_attendance.youth_attendance.groups import mutations
from src.youth_attendance.youth_attendance.groups.model import Group, Member

P = AttendanceStatus.PRESENT
A = AttendanceStatus.ABSENT
U = AttendanceStatus.UNRECORDED


def test_add_group_prepends_with_fresh_id(groups):
    updated = mutations.add_group(groups, leader_name="Zoe", co_leader_name="Yan", month_range="Jul-Sep")

    assert len(updated) == 3
    new = updated[0]
    assert new.leader_name == "Zoe"
    assert new.members == ()
    assert new.id not in {"G1", "G2"}
    assert updated[1:] == groups


def test_update_group_keeps_members(groups):
    updated = mutations.update_group(groups, "G1", leader_name="Alicia", co_leader_name="", month_range="Apr-Jun")

    assert updated[0].leader_name == "Alicia"
    assert updated[0].month_range == "Apr-Jun"
    assert updated[0].members is groups[0].members
    assert updated[1] is groups[1]


def test_unknown_ids_are_no_ops(groups):
    assert mutations.update_group(groups, "nope", leader_name="X") is groups
    assert mutations.delete_group(groups, "nope") is groups
    assert mutations.add_member(groups, "nope", name="X") is groups
    assert mutations.update_member(groups, "G1", "nope", name="X") is groups
    assert mutations.delete_member(groups, "G1", "nope") is groups
    assert mutations.mark_attendance(groups, "G1", "nope", "2024-01-07", P) is groups
    assert mutations.bulk_mark(groups, "nope", "2024-01-07", P) is groups


def test_delete_group(groups):
    updated = mutations.delete_group(groups, "G1")

    assert [g.id for g in updated] == ["G2"]
    assert len(groups) == 2


def test_add_member_prepends_and_backfills_known_dates(groups):
    updated = mutations.add_member(groups, "G2", name="Finn", phone="0300")

    finn = updated[1].members[0]
    assert finn.name == "Finn"
    assert finn.attendance == {"2024-01-07": U, "2024-01-14": U, "2024-01-21": U}
    assert updated[1].members[1:] == groups[1].members
    assert updated[0] is groups[0]


def test_update_and_delete_member(groups):
    bob_id = groups[0].members[0].id

    renamed = mutations.update_member(groups, "G1", bob_id, name="Robert", phone="0999")
    robert = renamed[0].find_member(bob_id)
    assert (robert.name, robert.phone) == ("Robert", "0999")
    assert robert.attendance == groups[0].members[0].attendance

    removed = mutations.delete_member(groups, "G1", bob_id)
    assert [m.name for m in removed[0].members] == ["Cara"]


def test_add_session_backfills_every_member(groups):
    updated = mutations.add_session(groups, "2024-01-28")

    for group in updated:
        for member in group.members:
            assert member.attendance["2024-01-28"] is U


def test_add_session_is_idempotent(groups):
    once = mutations.add_session(groups, "2024-01-28")
    marked = mutations.bulk_mark(once, "G1", "2024-01-28", P)

    assert mutations.add_session(once, "2024-01-28") is once
    # existing statuses are never overwritten
    again = mutations.add_session(marked, "2024-01-28")
    assert again is marked
    assert all(m.status_on("2024-01-28") is P for m in again[0].members)


def test_mark_attendance_sets_one_cell_without_touching_input(groups):
    cara_id = groups[0].members[1].id
    updated = mutations.mark_attendance(groups, "G1", cara_id, "2024-01-21", A)

    assert updated[0].find_member(cara_id).status_on("2024-01-21") is A
    assert groups[0].find_member(cara_id).status_on("2024-01-21") is U
    assert updated[0].members[0] is groups[0].members[0]
    assert updated[1] is groups[1]


def test_toggle_cycles_unrecorded_present_absent_unrecorded(groups):
    cara_id = groups[0].members[1].id
    seen = []
    state = groups
    for _ in range(3):
        state = mutations.toggle_attendance(state, "G1", cara_id, "2024-01-21")
        seen.append(state[0].find_member(cara_id).status_on("2024-01-21"))

    assert seen == [P, A, U]


def test_toggle_on_missing_key_starts_from_unrecorded(groups):
    bob_id = groups[0].members[0].id
    updated = mutations.toggle_attendance(groups, "G1", bob_id, "2024-02-04")

    assert updated[0].find_member(bob_id).status_on("2024-02-04") is P


def test_bulk_mark_whole_group_only():
    members = tuple(Member(id=f"m{i}", name=f"M{i}", attendance={"2024-01-07": P, "2024-01-14": P}) for i in range(3))
    other = Group(id="G2", leader_name="Other", members=(Member(id="x", name="X", attendance={"2024-01-14": P}),))
    groups = (Group(id="G1", leader_name="L", members=members), other)

    updated = mutations.bulk_mark(groups, "G1", "2024-01-14", A)

    assert all(m.status_on("2024-01-14") is A for m in updated[0].members)
    assert all(m.status_on("2024-01-07") is P for m in updated[0].members)
    assert updated[1] is other


def test_all_date_keys_is_unfiltered(groups):
    updated = mutations.add_session(groups, "2024-01-10")

    assert "2024-01-10" in mutations.all_date_keys(updated)
