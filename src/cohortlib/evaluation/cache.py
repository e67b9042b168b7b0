"""Cache contract consumed by the engine and its default implementations."""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from cohortlib.model.cohort import Cohort


@runtime_checkable
class CohortCache(Protocol):
    """Key/value store for previously computed cohorts."""

    def get(self, key: str) -> Cohort | None:
        """Return the cohort stored under *key*, or None."""
        ...

    def put(self, key: str, cohort: Cohort) -> None:
        """Store *cohort* under *key*, replacing any previous entry."""
        ...


class InMemoryCohortCache:
    """Dictionary-backed cache living as long as its evaluation context."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, Cohort] = {}

    def get(self, key: str) -> Cohort | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, cohort: Cohort) -> None:
        with self._lock:
            self._entries[key] = cohort

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class NullCohortCache:
    """Cache that never stores anything; used when caching is disabled."""

    def get(self, key: str) -> Cohort | None:
        return None

    def put(self, key: str, cohort: Cohort) -> None:
        return None
