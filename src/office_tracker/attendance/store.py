from __future__ import annotations

import json
from typing import List, Optional

from ..core.constants import DAY_MARKER_KEY, DAY_RECORD_KEY, HISTORY_KEY
from ..core.exceptions import MalformedPersistedData
from ..core.logger import get_logger
from .codec import day_record_from_dict, day_record_to_dict, history_entry_from_dict, history_entry_to_dict
from .model import DayRecord, HistoryEntry
from .repository import KeyValueStore

logger = get_logger(__name__)

_UNSET = object()


class TrackerStore:
    """Persistence of the day record, history and day marker over a KeyValueStore.

    Loads are best-effort: a missing or unreadable slot yields the default and
    never aborts start-up.
    """

    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    # ---- load ----
    def load_day(self) -> DayRecord:
        raw = self._kv.get(DAY_RECORD_KEY)
        if not raw:
            return DayRecord()
        try:
            return day_record_from_dict(self._decode(raw, DAY_RECORD_KEY))
        except MalformedPersistedData as e:
            logger.warning(f"Discarding stored day record: {e}")
            return DayRecord()

    def load_history(self) -> List[HistoryEntry]:
        raw = self._kv.get(HISTORY_KEY)
        if not raw:
            return []
        try:
            data = self._decode(raw, HISTORY_KEY)
        except MalformedPersistedData as e:
            logger.warning(f"Discarding stored history: {e}")
            return []
        if not isinstance(data, list):
            logger.warning("Discarding stored history: not a list")
            return []

        out: List[HistoryEntry] = []
        for idx, item in enumerate(data):
            try:
                out.append(history_entry_from_dict(item))
            except MalformedPersistedData as e:
                # skip malformed entries, keep the rest
                logger.warning(f"Skipping history entry #{idx}: {e}")
        return out

    def load_day_marker(self) -> Optional[str]:
        return self._kv.get(DAY_MARKER_KEY) or None

    # ---- save ----
    def save_day(self, record: DayRecord, *, day_marker: Optional[str] = None) -> None:
        self.commit(record=record, day_marker=day_marker if day_marker else _UNSET)

    def save_day_marker(self, day_marker: str) -> None:
        self.commit(day_marker=day_marker)

    def commit(self, *, record=_UNSET, history=_UNSET, day_marker=_UNSET) -> None:
        """Write any subset of the three slots in one KeyValueStore write.

        Passing None for a slot deletes it.
        """
        updates: dict = {}
        if record is not _UNSET:
            updates[DAY_RECORD_KEY] = None if record is None else json.dumps(day_record_to_dict(record))
        if history is not _UNSET:
            updates[HISTORY_KEY] = (
                None if history is None else json.dumps([history_entry_to_dict(h) for h in history])
            )
        if day_marker is not _UNSET:
            updates[DAY_MARKER_KEY] = day_marker
        if updates:
            self._kv.write(updates)

    # ---- clear ----
    def clear(self) -> None:
        self.commit(record=None, history=None, day_marker=None)

    @staticmethod
    def _decode(raw: str, key: str):
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            raise MalformedPersistedData(f"{key}: {e}") from e
