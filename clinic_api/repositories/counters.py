"""Persisted per-entity id counters."""
from __future__ import annotations

import logging
import threading

from .store import DurableStore

logger = logging.getLogger(__name__)

COUNTERS_KEY = "counters"

USER_COUNTER = "userIdCounter"
APPOINTMENT_COUNTER = "appointmentIdCounter"
MEDICAL_RECORD_COUNTER = "medicalRecordIdCounter"
BILLING_COUNTER = "billingIdCounter"

DEFAULT_COUNTERS = {
    USER_COUNTER: 1,
    APPOINTMENT_COUNTER: 1,
    MEDICAL_RECORD_COUNTER: 1,
    BILLING_COUNTER: 1,
}


class CounterAllocator:
    """
    Hands out strictly increasing ids per counter name.

    Each stored value is the next id to issue. The record is persisted before
    an id is returned, so a crash can skip an id but never hand one out twice.
    """

    def __init__(self, store: DurableStore, key: str = COUNTERS_KEY) -> None:
        self._store = store
        self._key = key
        self._lock = threading.Lock()
        loaded = store.load(key, DEFAULT_COUNTERS)
        if not isinstance(loaded, dict):
            logger.warning("Counters document %r is not an object; resetting to defaults", key)
            loaded = dict(DEFAULT_COUNTERS)
        self._values = {**DEFAULT_COUNTERS, **loaded}

    def next(self, name: str) -> int:
        with self._lock:
            value = self._current(name)
            self._values[name] = value + 1
            # on failure the increment stays: the id is skipped, never reused
            self._store.save(self._key, dict(self._values))
            return value

    def reserve_past(self, name: str, highest: int) -> None:
        """Make sure the next id for ``name`` is greater than ``highest``."""
        with self._lock:
            if self._current(name) <= highest:
                logger.warning("Counter %s behind stored ids; moving it to %d", name, highest + 1)
                self._values[name] = highest + 1

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._values)

    def _current(self, name: str) -> int:
        try:
            value = int(self._values.get(name, 1))
        except (TypeError, ValueError):
            value = 1
        return max(value, 1)
