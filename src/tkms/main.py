from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .adjustments.controller import register as register_adjustments
from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container
from .core.logging_setup import configure_logging
from .database.bootstrap import apply_schema, list_tables
from .schedules.controller import register as register_schedules

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass a ready ``container`` (e.g. over in-memory repositories) to skip the
    MySQL wiring and schema bootstrap.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        container = build_container(
            db_config=db_config,
            adjustment_settings=getattr(settings, "ADJUSTMENT_SETTINGS", None),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            logger.info("Schema ready (tables=%s)", len(list_tables(container.conn)))

    app.extensions["tkms.container"] = container

    register_error_handlers(app)
    register_attendance(app, container)
    register_schedules(app, container)
    register_adjustments(app, container)

    @app.route("/api/v1/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"success": True, "status": "ok"})

    return app
