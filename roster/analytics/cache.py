"""
Caller-owned memoization of stats snapshots.

Entries are keyed by a caller-supplied token or by a content hash of the
records, together with the requested dimensions. Each view can own its own
StatsCache; a shared instance is safe across threads.
"""
from __future__ import annotations

import hashlib
import json
import logging
import threading
from collections import OrderedDict
from typing import Hashable, Iterable, Mapping, Sequence

from roster.analytics.models import StatsSnapshot
from roster.analytics.stats import compute_stats
from roster.config import DEFAULT_DIMENSIONS, STATS_CACHE_SIZE

logger = logging.getLogger(__name__)


def records_fingerprint(records: Iterable[Mapping]) -> str:
    """SHA-256 of the records as canonical JSON (sorted keys, order kept)."""
    payload = json.dumps([dict(r) for r in records], sort_keys=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class StatsCache:
    """Bounded LRU cache of StatsSnapshot objects."""

    def __init__(self, maxsize: int = STATS_CACHE_SIZE) -> None:
        if maxsize < 1:
            raise ValueError(f"maxsize must be positive, got {maxsize}")
        self.maxsize = maxsize
        self._entries: OrderedDict[tuple, StatsSnapshot] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(
        self,
        records: Sequence[Mapping],
        dimensions: Sequence[str] | None = None,
        token: Hashable | None = None,
    ) -> StatsSnapshot:
        """Return the cached snapshot for these records, computing it on a miss.

        Pass ``token`` when the caller already has a stable identity for the
        record set (e.g. a page number plus a revision); otherwise the records
        are hashed.
        """
        dims = tuple(dict.fromkeys(dimensions)) if dimensions else tuple(DEFAULT_DIMENSIONS)
        key = (token if token is not None else records_fingerprint(records), dims)

        with self._lock:
            snapshot = self._entries.get(key)
            if snapshot is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return snapshot
            self.misses += 1

        snapshot = compute_stats(records, dims)

        with self._lock:
            self._entries[key] = snapshot
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted stats cache entry %s", evicted[0])
        return snapshot

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
