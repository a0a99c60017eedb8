from __future__ import annotations

from pathlib import Path

from ..attendance.repository import KeyValueStore
from ..core.exceptions import ValidationError
from ..core.settings import TrackerSettings
from ..database.connection import DatabaseConnection, DBConfig
from .json_file import JsonFileKeyValueStore
from .memory import InMemoryKeyValueStore
from .mysql_store import MySQLKeyValueStore


def build_key_value_store(settings: TrackerSettings) -> KeyValueStore:
    """Pick the slot backend named by STORAGE_BACKEND."""
    backend = settings.storage_backend
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "json":
        if not settings.state_file:
            raise ValidationError("STATE_FILE is required for the json storage backend")
        return JsonFileKeyValueStore(Path(settings.state_file))
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.db_config))
        return MySQLKeyValueStore(conn)
    raise ValidationError(f"Unknown storage backend {backend!r}")
