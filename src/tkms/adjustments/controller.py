from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, optional_int, required_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/time-adjustments", methods=["GET"], endpoint="list_time_adjustments")
    def list_time_adjustments():
        adjustments = container.adjustment_service.list(
            user_id=optional_int(request.args.get("userId"), "User ID"),
        )
        return jsonify({"success": True, "data": [a.to_dict() for a in adjustments]})

    @app.route("/api/v1/time-adjustments", methods=["POST"], endpoint="create_time_adjustment")
    def create_time_adjustment():
        payload = json_body()
        adjustment = container.adjustment_service.create(
            user_id=required_int(payload.get("userId"), "User ID"),
            adjustment_type=payload.get("adjustmentType") or "",
            work_date=parse_iso_date(payload.get("date") or ""),
            adjusted_time=payload.get("adjustedTime") or "",
            original_time=payload.get("originalTime"),
            reason=payload.get("reason") or "",
            notes=payload.get("notes"),
            approved_by=required_int(payload.get("approvedBy"), "Approved by"),
        )
        return jsonify({"success": True, "data": adjustment.to_dict()}), 201
