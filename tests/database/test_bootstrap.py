from __future__ import annotations

from datetime import datetime, time, timedelta

import pytest

from tkms.common.datetime_utils import LOCAL_TZ
from tkms.database.bootstrap import DEFAULT_SCHEMA_PATH, apply_schema, iter_sql_statements, load_schema_statements
from tkms.database.connection import DBConfig
from tkms.database.mysql_base import db_cursor, from_db_datetime, normalize_mysql_time, to_db_datetime


class FakeCursor:
    def __init__(self, log):
        self.log = log

    def execute(self, sql, params=None):
        self.log.append(sql)

    def close(self):
        self.log.append("<cursor closed>")


class FakeConnection:
    def __init__(self, log):
        self.log = log

    def cursor(self, dictionary=False):
        return FakeCursor(self.log)

    def commit(self):
        self.log.append("<commit>")

    def rollback(self):
        self.log.append("<rollback>")

    def close(self):
        self.log.append("<closed>")


class FakeConnFactory:
    config = DBConfig(host="db", port=3306, user="u", password="p", database="tkms_ci")

    def __init__(self):
        self.log: list[str] = []

    def connect(self, *, with_database: bool = True):
        return FakeConnection(self.log)


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nINSERT INTO t VALUES (\"c;d\");  SELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_schema_file_yields_one_statement_per_table():
    statements = load_schema_statements(DEFAULT_SCHEMA_PATH)

    assert all(s.upper().startswith("CREATE TABLE IF NOT EXISTS") for s in statements)
    tables = [s.split()[5] for s in statements]
    assert tables == ["users", "schedules", "time_entries", "attendance_records", "time_adjustments"]


def test_apply_schema_creates_configured_database_first():
    factory = FakeConnFactory()

    apply_schema(factory)

    assert "CREATE DATABASE IF NOT EXISTS `tkms_ci`" in factory.log[0]
    assert sum(1 for s in factory.log if s.startswith("CREATE TABLE")) == 5
    assert factory.log[-1] == "<closed>"


def test_db_cursor_rolls_back_on_error():
    factory = FakeConnFactory()

    with pytest.raises(RuntimeError):
        with db_cursor(factory) as (_, cur):
            cur.execute("UPDATE t SET x=1")
            raise RuntimeError("boom")

    assert "<commit>" not in factory.log
    assert factory.log[-2:] == ["<rollback>", "<closed>"]


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        (time(8, 5), "08:05"),
        (timedelta(hours=17, minutes=30), "17:30"),
        ("9:00:00", "09:00"),
    ],
)
def test_normalize_mysql_time(value, expected):
    assert normalize_mysql_time(value) == expected


def test_db_datetimes_are_naive_canonical_wall_clock():
    stored = to_db_datetime(datetime.fromisoformat("2024-06-03T00:15:00+00:00"))

    assert stored == datetime(2024, 6, 3, 8, 15)
    assert from_db_datetime(stored) == datetime(2024, 6, 3, 8, 15, tzinfo=LOCAL_TZ)
