from __future__ import annotations

import io
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import json_body, optional_date, optional_int, required_int
from ..container import Container
from ..core.enums import EntryStatus, EntryType
from ..core.exceptions import ValidationError
from ..reports.service import cutoff_range, default_cutoff, write_csv


def _entry_type(value) -> EntryType:
    try:
        return EntryType(value)
    except ValueError:
        raise ValidationError("Type must be 'time-in' or 'time-out'")


def _entry_status(value) -> EntryStatus:
    try:
        return EntryStatus(value)
    except ValueError:
        raise ValidationError("Status must be one of: pending, approved, rejected")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/time-entries", methods=["POST"], endpoint="create_time_entry")
    def create_time_entry():
        payload = json_body()
        result = container.attendance_service.record_entry(
            required_int(payload.get("userId"), "User ID"),
            _entry_type(payload.get("type")),
            photo_url=payload.get("photoUrl"),
            location=payload.get("location"),
        )
        return jsonify(
            {
                "success": True,
                "data": {
                    "timeEntry": result.entry.to_dict(),
                    "attendance": result.attendance.to_dict(),
                },
            }
        ), 201

    @app.route("/api/v1/time-entries", methods=["GET"], endpoint="list_time_entries")
    def list_time_entries():
        entries = container.attendance_service.list_time_entries(
            user_id=required_int(request.args.get("userId"), "User ID"),
            start=optional_date(request.args.get("startDate")),
            end=optional_date(request.args.get("endDate")),
        )
        return jsonify({"success": True, "data": [e.to_dict() for e in entries]})

    @app.route("/api/v1/time-entries/<int:entry_id>", methods=["PATCH"], endpoint="update_time_entry")
    def update_time_entry(entry_id: int):
        payload = json_body()
        entry = container.attendance_service.set_entry_status(entry_id, _entry_status(payload.get("status")))
        return jsonify({"success": True, "data": entry.to_dict()})

    @app.route("/api/v1/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance():
        records = container.attendance_service.list_attendance(
            user_id=optional_int(request.args.get("userId"), "User ID"),
            start=optional_date(request.args.get("startDate")),
            end=optional_date(request.args.get("endDate")),
        )
        return jsonify({"success": True, "data": [r.to_dict() for r in records]})

    @app.route("/api/v1/attendance/recompute", methods=["POST"], endpoint="recompute_attendance")
    def recompute_attendance():
        payload = request.get_json(silent=True) or {}
        summary = container.attendance_service.recompute(
            optional_date(payload.get("start")),
            optional_date(payload.get("end")),
            user_id=optional_int(payload.get("userId"), "User ID"),
            dry_run=bool(payload.get("dryRun", False)),
        )
        return jsonify({"success": True, "data": summary.to_dict()})

    def _report_range() -> tuple[date, date]:
        start = optional_date(request.args.get("start"))
        end = optional_date(request.args.get("end"))
        if start and end:
            return start, end
        today = now_local().date()
        month = optional_date(request.args.get("month")) or today
        return cutoff_range(month, request.args.get("cutoff") or default_cutoff(today))

    @app.route("/api/v1/attendance/report", methods=["GET"], endpoint="attendance_report")
    def attendance_report():
        start, end = _report_range()
        data = container.report_service.build_attendance_report(
            start=start,
            end=end,
            user_id=optional_int(request.args.get("userId"), "User ID"),
            search=request.args.get("q"),
        )
        return jsonify(
            {
                "success": True,
                "data": {
                    "start": start.isoformat(),
                    "end": end.isoformat(),
                    "rows": data.rows,
                    "summary": data.summary,
                },
            }
        )

    @app.route("/api/v1/attendance/report.csv", methods=["GET"], endpoint="attendance_report_csv")
    def attendance_report_csv():
        start, end = _report_range()
        data = container.report_service.build_attendance_report(
            start=start,
            end=end,
            user_id=optional_int(request.args.get("userId"), "User ID"),
            search=request.args.get("q"),
        )

        out = io.StringIO()
        write_csv(data, out)
        filename = f"attendance_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
