from __future__ import annotations

from typing import Mapping, Optional

from ..attendance.repository import KeyValueStore
from ..core.logger import get_logger
from ..database.connection import DatabaseConnection

logger = get_logger(__name__)

_SELECT = "SELECT slot_value FROM tracker_slots WHERE slot_key=%s"
_DELETE = "DELETE FROM tracker_slots WHERE slot_key=%s"
_UPSERT = """
    INSERT INTO tracker_slots(slot_key, slot_value)
    VALUES(%s,%s)
    ON DUPLICATE KEY UPDATE slot_value=VALUES(slot_value)
"""


class MySQLKeyValueStore(KeyValueStore):
    """Slots in the `tracker_slots` table (see database/schema.sql)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[str]:
        with self._conn_factory.transaction() as cur:
            cur.execute(_SELECT, (key,))
            row = cur.fetchone()
        return row["slot_value"] if row else None

    def write(self, updates: Mapping[str, Optional[str]]) -> None:
        # All slots of one action land in the same transaction
        with self._conn_factory.transaction() as cur:
            for key, value in updates.items():
                if value is None:
                    cur.execute(_DELETE, (key,))
                else:
                    cur.execute(_UPSERT, (key, value))
        logger.debug(f"wrote slots {sorted(updates)}")
