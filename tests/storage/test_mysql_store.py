from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path

import pytest

from office_tracker.database.bootstrap import schema_statements
from office_tracker.storage.mysql_store import MySQLKeyValueStore


class FakeCursor:
    def __init__(self, table: dict):
        self.table = table
        self._row = None

    def execute(self, sql: str, params=()):
        verb = sql.strip().split()[0].upper()
        if verb == "SELECT":
            value = self.table.get(params[0])
            self._row = None if value is None else {"slot_value": value}
        elif verb == "DELETE":
            self.table.pop(params[0], None)
        elif verb == "INSERT":
            self.table[params[0]] = params[1]
        else:
            raise AssertionError(f"unexpected SQL: {sql}")

    def fetchone(self):
        return self._row


class FakeConnectionFactory:
    """Commits a copy of the table only when the block succeeds."""

    def __init__(self):
        self.table = {}
        self.commits = 0

    @contextmanager
    def transaction(self):
        working = dict(self.table)
        yield FakeCursor(working)
        self.table = working
        self.commits += 1


def test_get_and_write_slots():
    conn = FakeConnectionFactory()
    kv = MySQLKeyValueStore(conn)

    assert kv.get("office-tracker-v2") is None
    kv.write({"office-tracker-v2": "{}", "office-tracker-date-v2": "2026-02-02"})

    assert kv.get("office-tracker-date-v2") == "2026-02-02"
    assert conn.commits == 1


def test_none_deletes_slot_in_same_transaction():
    conn = FakeConnectionFactory()
    kv = MySQLKeyValueStore(conn)
    kv.write({"office-tracker-v2": "{}"})

    kv.write({"office-tracker-v2": None, "office-tracker-history-v2": "[]"})

    assert conn.table == {"office-tracker-history-v2": "[]"}
    assert conn.commits == 2


def test_failed_write_leaves_table_untouched():
    conn = FakeConnectionFactory()
    kv = MySQLKeyValueStore(conn)
    kv.write({"office-tracker-v2": "{}"})

    class Boom(dict):
        def items(self):
            yield "office-tracker-v2", None
            raise RuntimeError("connection lost")

    with pytest.raises(RuntimeError):
        kv.write(Boom())

    assert conn.table == {"office-tracker-v2": "{}"}


def test_schema_file_yields_only_table_statements():
    schema = Path(__file__).resolve().parents[2] / "database" / "schema.sql"

    statements = schema_statements(schema.read_text(encoding="utf-8"))

    assert len(statements) == 1
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS tracker_slots")
