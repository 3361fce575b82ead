from __future__ import annotations

import io
from dataclasses import asdict
from typing import Any, Optional

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import today_local
from ..common.validators import require_date_key
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..container import Container
from ..exports.csv_export import export_csv, export_filename, export_session_csv
from ..groups.model import Group, Member
from ..groups.queries import filter_groups, find_group, month_ranges, search_members, sort_members_by_status
from ..reports.model import SessionBreakdown
from ..reports.statistics import group_rate, member_history
from ..sessions.dates import DateRange, session_dates


def member_to_json(member: Member) -> dict[str, Any]:
    return {
        "id": member.id,
        "name": member.name,
        "phone": member.phone,
        "attendance": {key: status.value for key, status in member.attendance.items()},
    }


def group_to_json(group: Group, *, dates: Optional[list[str]] = None) -> dict[str, Any]:
    data = {
        "id": group.id,
        "leaderName": group.leader_name,
        "coLeaderName": group.co_leader_name,
        "monthRange": group.month_range,
        "memberCount": len(group.members),
        "members": [member_to_json(m) for m in group.members],
    }
    if dates is not None:
        data["rate"] = group_rate(group, dates)
    return data


def breakdown_to_json(breakdown: SessionBreakdown) -> dict[str, Any]:
    data = asdict(breakdown)
    for row, count in zip(data["groups"], breakdown.groups):
        row["completion"] = count.completion
    return data


def parse_status(value: Any) -> AttendanceStatus:
    """Strict status parsing for API input (unlike ingestion, typos are rejected).

    The status must be given explicitly; only an empty string clears a cell.
    """
    if value is None:
        raise ValidationError("status is required")
    if not isinstance(value, str):
        raise ValidationError("status must be a string")
    try:
        return AttendanceStatus(value.strip().upper())
    except ValueError:
        raise ValidationError("status must be one of 'P', 'A' or ''") from None


def register(app: Flask, container: Container) -> None:
    store = container.store
    reports = container.report_service

    def _json_body() -> dict:
        body = request.get_json(silent=True)
        if body is None:
            return {}
        if not isinstance(body, dict):
            raise ValidationError("request body must be a JSON object")
        return body

    def _date_range() -> DateRange:
        return DateRange.parse(request.args.get("start"), request.args.get("end"))

    def _csv_response(content: str, filename: str):
        # UTF-8 with BOM
        out = io.BytesIO(content.encode("utf-8-sig"))
        return send_file(out, mimetype="text/csv", as_attachment=True, download_name=filename)

    def _not_found(message: str):
        return jsonify({"success": False, "message": message}), 404

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    # ===== GROUPS =====

    @app.route("/api/groups", methods=["GET"], endpoint="list_groups")
    def list_groups():
        groups = filter_groups(
            store.groups,
            search=request.args.get("search", ""),
            month_range=request.args.get("month_range"),
        )
        dates = session_dates(store.groups)
        return jsonify(
            {
                "groups": [group_to_json(g, dates=dates) for g in groups],
                "monthRanges": month_ranges(store.groups),
            }
        )

    @app.route("/api/groups", methods=["POST"], endpoint="create_group")
    def create_group():
        body = _json_body()
        group = store.add_group(
            leader_name=body.get("leaderName", ""),
            co_leader_name=body.get("coLeaderName", ""),
            month_range=body.get("monthRange", ""),
        )
        return jsonify({"success": True, "group": group_to_json(group)}), 201

    @app.route("/api/groups/<group_id>", methods=["GET"], endpoint="get_group")
    def get_group(group_id: str):
        group = find_group(store.groups, group_id)
        if not group:
            return _not_found("Group not found")

        members = list(group.members)
        sort_date = request.args.get("sort_date")
        sort_type = request.args.get("sort")
        if sort_date and sort_type in {"present", "absent"}:
            target = AttendanceStatus.PRESENT if sort_type == "present" else AttendanceStatus.ABSENT
            members = sort_members_by_status(members, sort_date, target)

        dates = session_dates(store.groups)
        data = group_to_json(group, dates=dates)
        data["members"] = [member_to_json(m) for m in members]
        data["dates"] = dates
        return jsonify(data)

    @app.route("/api/groups/<group_id>", methods=["PUT"], endpoint="update_group")
    def update_group(group_id: str):
        if not find_group(store.groups, group_id):
            return _not_found("Group not found")
        body = _json_body()
        store.update_group(
            group_id,
            leader_name=body.get("leaderName", ""),
            co_leader_name=body.get("coLeaderName", ""),
            month_range=body.get("monthRange", ""),
        )
        return jsonify({"success": True, "group": group_to_json(find_group(store.groups, group_id))})

    @app.route("/api/groups/<group_id>", methods=["DELETE"], endpoint="delete_group")
    def delete_group(group_id: str):
        store.delete_group(group_id)
        return jsonify({"success": True, "selectedGroupId": store.selected_group_id})

    @app.route("/api/groups/<group_id>/select", methods=["POST"], endpoint="select_group")
    def select_group(group_id: str):
        if not store.select_group(group_id):
            return _not_found("Group not found")
        return jsonify({"success": True, "selectedGroupId": store.selected_group_id})

    @app.route("/api/selection", methods=["GET"], endpoint="get_selection")
    def get_selection():
        group = store.selected_group
        return jsonify({"selectedGroupId": store.selected_group_id, "group": group_to_json(group) if group else None})

    @app.route("/api/selection", methods=["DELETE"], endpoint="clear_selection")
    def clear_selection():
        store.select_group(None)
        return jsonify({"success": True, "selectedGroupId": None})

    # ===== MEMBERS =====

    @app.route("/api/members", methods=["GET"], endpoint="list_members")
    def list_members():
        status_arg = request.args.get("status")
        rows = search_members(
            store.groups,
            query=request.args.get("q", ""),
            month_range=request.args.get("month_range"),
            status=parse_status(status_arg) if status_arg is not None else None,
            date_key=request.args.get("date"),
        )
        return jsonify(
            {
                "members": [
                    {**member_to_json(r.member), "groupId": r.group.id, "leaderName": r.group.leader_name}
                    for r in rows
                ]
            }
        )

    @app.route("/api/groups/<group_id>/members", methods=["POST"], endpoint="create_member")
    def create_member(group_id: str):
        if not find_group(store.groups, group_id):
            return _not_found("Group not found")
        body = _json_body()
        store.add_member(group_id, name=body.get("name", ""), phone=body.get("phone", ""))
        member = find_group(store.groups, group_id).members[0]
        return jsonify({"success": True, "member": member_to_json(member)}), 201

    @app.route("/api/groups/<group_id>/members/<member_id>", methods=["GET"], endpoint="get_member")
    def get_member(group_id: str, member_id: str):
        group = find_group(store.groups, group_id)
        member = group.find_member(member_id) if group else None
        if not member:
            return _not_found("Member not found")
        history = member_history(member, session_dates(store.groups))
        return jsonify({**member_to_json(member), "history": [asdict(h) for h in history]})

    @app.route("/api/groups/<group_id>/members/<member_id>", methods=["PUT"], endpoint="update_member")
    def update_member(group_id: str, member_id: str):
        body = _json_body()
        store.update_member(group_id, member_id, name=body.get("name", ""), phone=body.get("phone", ""))
        return jsonify({"success": True})

    @app.route("/api/groups/<group_id>/members/<member_id>", methods=["DELETE"], endpoint="delete_member")
    def delete_member(group_id: str, member_id: str):
        store.delete_member(group_id, member_id)
        return jsonify({"success": True})

    # ===== SESSIONS & ATTENDANCE =====

    @app.route("/api/sessions", methods=["GET"], endpoint="list_sessions")
    def list_sessions():
        return jsonify({"dates": session_dates(store.groups, _date_range())})

    @app.route("/api/sessions", methods=["POST"], endpoint="create_session")
    def create_session():
        date_key = _json_body().get("date", "")
        store.add_session(date_key)
        return jsonify({"success": True, "dates": session_dates(store.groups)}), 201

    @app.route(
        "/api/groups/<group_id>/members/<member_id>/attendance/<date_key>",
        methods=["PUT"],
        endpoint="mark_attendance",
    )
    def mark_attendance(group_id: str, member_id: str, date_key: str):
        status = parse_status(_json_body().get("status"))
        store.mark_attendance(group_id, member_id, date_key, status)
        return jsonify({"success": True, "status": status.value})

    @app.route(
        "/api/groups/<group_id>/members/<member_id>/attendance/<date_key>/toggle",
        methods=["POST"],
        endpoint="toggle_attendance",
    )
    def toggle_attendance(group_id: str, member_id: str, date_key: str):
        store.toggle_attendance(group_id, member_id, date_key)
        group = find_group(store.groups, group_id)
        member = group.find_member(member_id) if group else None
        if not member:
            return _not_found("Member not found")
        return jsonify({"success": True, "status": member.status_on(date_key).value})

    @app.route("/api/groups/<group_id>/attendance/<date_key>", methods=["PUT"], endpoint="bulk_mark")
    def bulk_mark(group_id: str, date_key: str):
        status = parse_status(_json_body().get("status"))
        store.bulk_mark(group_id, date_key, status)
        return jsonify({"success": True, "status": status.value})

    # ===== REPORTS =====

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard():
        summary = reports.build_dashboard(store.groups, date_range=_date_range())
        return jsonify(asdict(summary))

    @app.route("/api/reports", methods=["GET"], endpoint="executive_report")
    def executive_report():
        report = reports.build_report(
            store.groups,
            date_range=_date_range(),
            target_date=request.args.get("target") or None,
        )
        data = asdict(report)
        data["latest_session"] = breakdown_to_json(report.latest_session)
        return jsonify(data)

    @app.route("/api/export.csv", methods=["GET"], endpoint="export_all_csv")
    def export_all_csv():
        filename = export_filename("executive_report", today_local())
        return _csv_response(export_csv(store.groups), filename)

    @app.route("/api/sessions/<date_key>/export.csv", methods=["GET"], endpoint="export_session")
    def export_session(date_key: str):
        date_key = require_date_key(date_key)
        filename = export_filename("session_report", date_key=date_key)
        return _csv_response(export_session_csv(store.groups, date_key), filename)

    @app.route("/api/reset", methods=["POST"], endpoint="reset_data")
    def reset_data():
        groups = store.reset()
        return jsonify({"success": True, "groupCount": len(groups)})
