"""Schema bootstrap for ``database/schema.sql``.

Every statement in the schema file is idempotent (``CREATE TABLE IF NOT
EXISTS``), so applying it on each start-up is safe. The target database name
always comes from the configured connection, never from the file.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"

# Quoted literals (with backslash escapes) or a statement separator.
_SQL_TOKEN = re.compile(r"""'(?:\\.|[^'\\])*'|"(?:\\.|[^"\\])*"|;""", re.S)
_DB_SELECTION = re.compile(r"(?im)^\s*(?:CREATE\s+DATABASE|USE)\b[^;]*;")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split on ``;`` outside quoted literals, dropping empty statements."""
    start = 0
    for match in _SQL_TOKEN.finditer(sql):
        if match.group() != ";":
            continue
        stmt = sql[start : match.start()].strip()
        if stmt:
            yield stmt
        start = match.end()

    tail = sql[start:].strip()
    if tail:
        yield tail


def load_schema_statements(schema_path: str | Path) -> list[str]:
    sql = Path(schema_path).read_text(encoding="utf-8")
    sql = _LINE_COMMENT.sub("", _DB_SELECTION.sub("", sql))
    return list(iter_sql_statements(sql))


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = DEFAULT_SCHEMA_PATH) -> None:
    ensure_database_exists(conn_factory)
    statements = load_schema_statements(schema_path)

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %s schema statement(s) from %s", len(statements), schema_path)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
