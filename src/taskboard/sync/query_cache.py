# src/taskboard/sync/query_cache.py

from __future__ import annotations

"""
Client-side query cache.

Each cache key holds the last known data plus the bookkeeping needed to
reconcile three racing writers (poll refresh, optimistic mutation, page fetch):

- generation: bumped by every optimistic mutation on the key; a settlement
  only applies if it still carries the latest generation
- pending: generation of the optimistic mutation that has not settled yet;
  while set, refresh results for the key are ignored
- fetch_token: bumped whenever a refresh starts or is cancelled; a refresh
  result only applies if its token is still current

All methods are plain synchronous calls, meant to be used from one event loop.
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

CacheKey = tuple[Any, ...]

LIST_KEY: CacheKey = ("list",)
PAGES_PREFIX: CacheKey = ("pages",)
TASK_PREFIX: CacheKey = ("task",)


def pages_key(limit: int) -> CacheKey:
    return (*PAGES_PREFIX, int(limit))


def task_key(task_id: str) -> CacheKey:
    return (*TASK_PREFIX, task_id)


@dataclass(slots=True)
class CacheEntry:
    data: Any = None
    has_data: bool = False
    stale: bool = True

    generation: int = 0
    pending: int | None = None

    fetch_token: int = 0
    fetching: bool = False


@dataclass(slots=True)
class QueryCache:
    _entries: dict[CacheKey, CacheEntry] = field(default_factory=dict)

    def entry(self, key: CacheKey) -> CacheEntry:
        ent = self._entries.get(key)
        if ent is None:
            ent = CacheEntry()
            self._entries[key] = ent
        return ent

    def _matching(self, prefix: CacheKey) -> Iterator[CacheEntry]:
        n = len(prefix)
        for key, ent in self._entries.items():
            if key[:n] == prefix:
                yield ent

    # ---- data access ----

    def get_data(self, key: CacheKey) -> Any:
        ent = self._entries.get(key)
        return ent.data if ent is not None else None

    def has_data(self, key: CacheKey) -> bool:
        ent = self._entries.get(key)
        return bool(ent and ent.has_data)

    def is_stale(self, key: CacheKey) -> bool:
        ent = self._entries.get(key)
        return ent is None or ent.stale or not ent.has_data

    def is_pending(self, key: CacheKey) -> bool:
        ent = self._entries.get(key)
        return ent is not None and ent.pending is not None

    def set_data(self, key: CacheKey, data: Any) -> None:
        """Direct write. None resets the entry to "never loaded"."""
        ent = self.entry(key)
        ent.data = data
        ent.has_data = data is not None

    def update_data(self, key: CacheKey, fn: Callable[[Any], Any]) -> bool:
        """Apply fn to loaded data. Entries that were never loaded are left alone."""
        ent = self._entries.get(key)
        if ent is None or not ent.has_data:
            return False
        self.set_data(key, fn(ent.data))
        return True

    def remove(self, key: CacheKey) -> None:
        self._entries.pop(key, None)

    # ---- refresh bookkeeping ----

    def begin_fetch(self, key: CacheKey) -> int:
        ent = self.entry(key)
        ent.fetch_token += 1
        ent.fetching = True
        return ent.fetch_token

    def finish_fetch(self, key: CacheKey, token: int, data: Any) -> bool:
        """
        Store a refresh result.

        Returns False (and drops data) if the refresh was superseded or an
        optimistic mutation on the key is still unsettled.
        """
        ent = self.entry(key)
        if token != ent.fetch_token:
            logger.debug("Refresh result dropped key=%s (superseded)", key)
            return False

        ent.fetching = False
        if ent.pending is not None:
            logger.debug("Refresh result dropped key=%s (mutation gen=%s pending)", key, ent.pending)
            return False

        self.set_data(key, data)
        ent.stale = False
        return True

    def abort_fetch(self, key: CacheKey, token: int) -> None:
        ent = self.entry(key)
        if token == ent.fetch_token:
            ent.fetching = False

    def cancel(self, key: CacheKey) -> None:
        """Supersede any in-flight refresh; its result will be ignored."""
        ent = self.entry(key)
        ent.fetch_token += 1
        ent.fetching = False

    def invalidate(self, prefix: CacheKey) -> int:
        """Mark every entry under prefix stale and cancel its in-flight refresh."""
        count = 0
        for ent in self._matching(prefix):
            ent.stale = True
            ent.fetch_token += 1
            ent.fetching = False
            count += 1
        return count

    # ---- optimistic mutations ----

    def begin_mutation(self, key: CacheKey) -> int:
        """Cancel in-flight refreshes and open a new generation for an optimistic write."""
        self.cancel(key)
        ent = self.entry(key)
        ent.generation += 1
        ent.pending = ent.generation
        return ent.generation

    def settle(self, key: CacheKey, generation: int) -> bool:
        """
        Close a mutation.

        Returns True when generation is still the latest one for key; only then
        may the caller touch the cached data. Older settlements are discarded.
        """
        ent = self.entry(key)
        if generation != ent.generation:
            logger.debug(
                "Stale settlement ignored key=%s gen=%s latest=%s", key, generation, ent.generation
            )
            return False
        ent.pending = None
        return True
