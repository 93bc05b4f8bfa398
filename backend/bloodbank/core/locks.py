"""
In-process mutual exclusion per blood group.

Every stock mutation (donation increment, fulfillment check-and-decrement,
manual stock set) runs while holding its blood group's lock, so two
writers on the same group serialize while different groups proceed
independently. Cross-process safety comes from the row lock and the
conditional UPDATEs in stock_service; this only keeps one process from
racing itself.
"""
import threading
import logging
from contextlib import contextmanager
from typing import Dict, Iterator

logger = logging.getLogger(__name__)


class BloodGroupLocks:
    """Lazily created lock per blood group."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def lock_for(self, blood_group: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(blood_group)
            if lock is None:
                lock = threading.Lock()
                self._locks[blood_group] = lock
            return lock

    @contextmanager
    def hold(self, blood_group: str) -> Iterator[None]:
        lock = self.lock_for(blood_group)
        if not lock.acquire(blocking=False):
            logger.debug(f"Waiting for stock lock {blood_group}")
            lock.acquire()
        try:
            yield
        finally:
            lock.release()


# Global registry shared by every session in this process
stock_locks = BloodGroupLocks()
