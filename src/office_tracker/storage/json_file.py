from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Mapping, Optional

from ..attendance.repository import KeyValueStore
from ..core.logger import get_logger

logger = get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """All slots in one JSON document, replaced atomically on every write."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def write(self, updates: Mapping[str, Optional[str]]) -> None:
        slots = self._read()
        for key, value in updates.items():
            if value is None:
                slots.pop(key, None)
            else:
                slots[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(slots, f, indent=2, ensure_ascii=False)
            tmp.replace(self.path)
        except Exception:
            # the previous document stays in place
            tmp.unlink(missing_ok=True)
            raise

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Cannot read {self.path}, starting from empty slots: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"{self.path} does not hold an object, starting from empty slots")
            return {}
        return data
