"""Create the tracker database and its slot table from database/schema.sql."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

from ..core.logger import get_logger
from .connection import DatabaseConnection, DBConfig

logger = get_logger(__name__)

_DB_LEVEL = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def schema_statements(sql: str) -> List[str]:
    """Split a schema file into statements.

    Drops `--` comment lines and any CREATE DATABASE / USE statement so the
    configured database name always wins. Statements end with ';' at the end
    of a line, which is how schema.sql is written.
    """
    lines = [ln for ln in sql.splitlines() if not ln.strip().startswith("--")]
    chunks = re.split(r";\s*$", "\n".join(lines), flags=re.MULTILINE)
    return [c.strip() for c in chunks if c.strip() and not _DB_LEVEL.match(c.strip())]


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(target).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))

    with DatabaseConnection(DBConfig.from_dict(db_config)).transaction() as cur:
        for stmt in statements:
            cur.execute(stmt)
    logger.info(f"applied {len(statements)} schema statement(s) from {schema_path}")


def list_tables(db_config: dict) -> List[str]:
    with DatabaseConnection(DBConfig.from_dict(db_config)).transaction() as cur:
        cur.execute("SHOW TABLES")
        return [next(iter(row.values())) for row in cur.fetchall()]
