# ===== app/services/booking/booking_locks.py =====
"""Per-(staff, date) mutual exclusion for the check-then-create booking step"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, List, Optional, Tuple

from app.core.exceptions import BookingLockTimeoutError

logger = logging.getLogger(__name__)


class BookingLockRegistry:
    """
    Hands out one lock per (staff_id, date) key.

    Entries are reference counted and dropped once no caller holds or waits
    on them, so the registry only grows with the number of keys in flight.
    Different keys never contend with each other.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._entries: Dict[Tuple[int, str], List] = {}  # key -> [lock, users]

    @contextmanager
    def hold(self, staff_id: int, date: str, timeout: Optional[float] = None):
        key = (staff_id, date)
        with self._guard:
            entry = self._entries.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1

        acquired = False
        try:
            acquired = entry[0].acquire(timeout=-1 if timeout is None else timeout)
            if not acquired:
                logger.warning(f"Timed out after {timeout}s waiting for booking lock on staff {staff_id}, {date}")
                raise BookingLockTimeoutError(
                    f"Schedule for staff {staff_id} on {date} is busy, please retry"
                )
            yield
        finally:
            if acquired:
                entry[0].release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def active_keys(self) -> int:
        with self._guard:
            return len(self._entries)


# Shared by every BookingEngine in the process
booking_locks = BookingLockRegistry()
