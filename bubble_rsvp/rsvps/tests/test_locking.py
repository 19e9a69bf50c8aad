import threading

import pytest

from bubble_rsvp.rsvps.dtos import StoreBusyError
from bubble_rsvp.rsvps.locking import WriteLock


def test_hold_releases_after_use():
    lock = WriteLock(timeout_seconds=0.1)

    with lock.hold("first"):
        pass
    with lock.hold("second"):
        pass


def test_hold_releases_on_error():
    lock = WriteLock(timeout_seconds=0.1)

    with pytest.raises(RuntimeError):
        with lock.hold("failing"):
            raise RuntimeError("boom")
    with lock.hold("after failure"):
        pass


def test_hold_times_out_while_another_thread_writes():
    lock = WriteLock(timeout_seconds=0.05)
    acquired = threading.Event()
    release = threading.Event()

    def writer():
        with lock.hold("background write"):
            acquired.set()
            release.wait(timeout=5)

    thread = threading.Thread(target=writer)
    thread.start()
    try:
        assert acquired.wait(timeout=5)
        with pytest.raises(StoreBusyError):
            with lock.hold("RSVP submission"):
                pass
    finally:
        release.set()
        thread.join()
