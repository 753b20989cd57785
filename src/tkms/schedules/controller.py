from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, optional_int, required_int
from ..container import Container

# camelCase payload key -> ScheduleService.update keyword
_UPDATABLE = {
    "days": "days",
    "timeIn": "time_in",
    "timeOut": "time_out",
    "lunchStart": "lunch_start",
    "lunchEnd": "lunch_end",
    "isActive": "is_active",
}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/schedules", methods=["GET"], endpoint="list_schedules")
    def list_schedules():
        schedules = container.schedule_service.list_active(
            user_id=optional_int(request.args.get("userId"), "User ID"),
        )
        return jsonify({"success": True, "data": [s.to_dict() for s in schedules]})

    @app.route("/api/v1/schedules", methods=["POST"], endpoint="create_schedule")
    def create_schedule():
        payload = json_body()
        schedule = container.schedule_service.create(
            user_id=required_int(payload.get("userId"), "User ID"),
            days=payload.get("days") or [],
            time_in=payload.get("timeIn") or "",
            time_out=payload.get("timeOut") or "",
            lunch_start=payload.get("lunchStart"),
            lunch_end=payload.get("lunchEnd"),
        )
        return jsonify({"success": True, "data": schedule.to_dict()}), 201

    @app.route("/api/v1/schedules/<int:schedule_id>", methods=["PUT"], endpoint="update_schedule")
    def update_schedule(schedule_id: int):
        payload = json_body()
        changes = {field: payload[key] for key, field in _UPDATABLE.items() if key in payload}
        schedule = container.schedule_service.update(schedule_id, **changes)
        return jsonify({"success": True, "data": schedule.to_dict()})

    @app.route("/api/v1/schedules/<int:schedule_id>", methods=["DELETE"], endpoint="delete_schedule")
    def delete_schedule(schedule_id: int):
        container.schedule_service.delete(schedule_id)
        return jsonify({"success": True, "message": "Schedule deleted"})
