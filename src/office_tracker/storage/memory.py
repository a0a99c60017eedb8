from __future__ import annotations

from typing import Dict, Mapping, Optional

from ..attendance.repository import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local slots; nothing survives a restart."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._slots: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def write(self, updates: Mapping[str, Optional[str]]) -> None:
        for key, value in updates.items():
            if value is None:
                self._slots.pop(key, None)
            else:
                self._slots[key] = value

    def dump(self) -> Dict[str, str]:
        return dict(self._slots)
