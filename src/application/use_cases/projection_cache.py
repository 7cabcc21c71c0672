"""Content-addressed cache of computed projections."""

import copy
import hashlib
import json
from collections import OrderedDict
from datetime import date

from src.domain.models.projection import CashflowProjection
from src.domain.models.snapshot import SnapshotInputState
from src.domain.services.snapshot_codec import serialize_inputs

DEFAULT_MAX_ENTRIES = 32


class ProjectionCache:
    """LRU cache keyed by a hash of the inputs, horizon, and start date.

    Entries are stored and handed out as deep copies, so callers may
    mutate what they receive without touching the cached projection.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        self._max_entries = max(1, max_entries)
        self._entries: OrderedDict[str, CashflowProjection] = OrderedDict()

    @staticmethod
    def build_key(
        inputs: SnapshotInputState,
        projection_days: int,
        start_date: date,
    ) -> str:
        payload = json.dumps(
            {
                "inputs": serialize_inputs(inputs),
                "projectionDays": projection_days,
                "startDate": start_date.isoformat(),
            },
            sort_keys=True,
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    def get(self, key: str) -> CashflowProjection | None:
        projection = self._entries.get(key)
        if projection is None:
            return None
        self._entries.move_to_end(key)
        return copy.deepcopy(projection)

    def put(self, key: str, projection: CashflowProjection) -> None:
        self._entries[key] = copy.deepcopy(projection)
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ProjectionCache", "DEFAULT_MAX_ENTRIES"]
