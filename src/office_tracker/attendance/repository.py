from __future__ import annotations

from typing import Mapping, Optional, Protocol


class KeyValueStore(Protocol):
    """Durable string slots. Implementations: memory, JSON file, MySQL."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def write(self, updates: Mapping[str, Optional[str]]) -> None:
        """Apply all updates at once; a None value deletes the slot."""

        raise NotImplementedError
