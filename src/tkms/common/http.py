from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    DomainError,
    InvalidSchedule,
    MissingClockIn,
    NoActiveSchedule,
    NotFoundError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

# Most specific first; InvalidSchedule is a ValidationError.
_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (InvalidSchedule, 400),
    (ValidationError, 400),
    (MissingClockIn, 409),
    (NoActiveSchedule, 422),
    (NotFoundError, 404),
)


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        return fail(str(e), status_for(e))

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected_error(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return fail("Internal server error", 500)


def json_body() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def optional_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return parse_iso_date(value)


def optional_int(value, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def required_int(value, field_name: str) -> int:
    number = optional_int(value, field_name)
    if number is None:
        raise ValidationError(f"{field_name} is required")
    return number
