"""Maintenance commands: schema bootstrap and attendance recompute.

Usage::

    python scripts/recompute_attendance.py --start 2024-06-01 --end 2024-06-07 --dry-run
    python scripts/init_db.py
"""
from __future__ import annotations

import argparse
import importlib
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from .common.datetime_utils import parse_iso_date
from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import DomainError
from .core.logging_setup import configure_logging
from .database.bootstrap import apply_schema, list_tables

logger = logging.getLogger(__name__)


def _load_settings():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    return settings


def _container_from(settings) -> Container:
    return build_container(
        db_config=dict(settings.DB_CONFIG),
        adjustment_settings=getattr(settings, "ADJUSTMENT_SETTINGS", None),
    )


def _date_arg(value: str):
    try:
        return parse_iso_date(value)
    except DomainError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_recompute_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recompute_attendance",
        description="Recompute stored attendance metrics with the current schedules.",
    )
    parser.add_argument("--start", type=_date_arg, help="First work date (YYYY-MM-DD); default: 7 days before --end")
    parser.add_argument("--end", type=_date_arg, help="Last work date (YYYY-MM-DD); default: today")
    parser.add_argument("--user-id", type=int, help="Only recompute this user's records")
    parser.add_argument("--dry-run", action="store_true", help="Report changes without writing them")
    return parser


def recompute_main(argv: Optional[Sequence[str]] = None, *, container: Optional[Container] = None) -> int:
    args = build_recompute_parser().parse_args(argv)
    if container is None:
        container = _container_from(_load_settings())

    try:
        summary = container.attendance_service.recompute(
            args.start,
            args.end,
            user_id=args.user_id,
            dry_run=args.dry_run,
        )
    except DomainError as e:
        logger.error("Recompute failed: %s", e)
        return 1

    prefix = "[dry-run] " if summary.dry_run else ""
    print(
        f"{prefix}{summary.start} .. {summary.end}: processed={summary.processed} "
        f"updated={summary.updated} unchanged={summary.unchanged} skipped={len(summary.skipped)}"
    )
    return 0


def init_db_main() -> int:
    settings = _load_settings()
    container = _container_from(settings)

    apply_schema(container.conn)
    tables = list_tables(container.conn)
    db = container.conn.config
    print(f"OK: Applied schema.sql -> {db.user}@{db.host}:{db.port}/{db.database} (tables={len(tables)})")
    return 0


if __name__ == "__main__":
    sys.exit(recompute_main())
