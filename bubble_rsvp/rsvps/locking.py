import contextlib
import logging
import threading
from collections.abc import Iterator
from functools import lru_cache

from bubble_rsvp.config.settings import settings
from bubble_rsvp.rsvps.dtos import StoreBusyError

logger = logging.getLogger(__name__)


class WriteLock:
    """Process-wide mutual exclusion around read-modify-write sequences.

    Waits at most `timeout_seconds` and then gives up with StoreBusyError
    instead of queueing forever.
    """

    def __init__(self, timeout_seconds: float) -> None:
        self._lock = threading.Lock()
        self._timeout_seconds = timeout_seconds

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    @contextlib.contextmanager
    def hold(self, operation: str) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._timeout_seconds):
            logger.warning("Timed out waiting for write lock during %s", operation)
            raise StoreBusyError(
                "workbook",
                f"another update is in progress, try {operation} again shortly",
            )
        try:
            yield
        finally:
            self._lock.release()


@lru_cache
def get_write_lock() -> WriteLock:
    return WriteLock(settings.write_lock_timeout_seconds)
