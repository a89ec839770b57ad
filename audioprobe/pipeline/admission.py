import threading
from contextlib import contextmanager
from typing import Iterator

DEFAULT_MAX_CONCURRENT = 50

class AdmissionGate:
    """Counting permit pool bounding how many resolutions run at once.

    `permit()` blocks until a permit is free and returns it on every exit
    path. held + available == limit at all times.
    """

    def __init__(self, limit: int = DEFAULT_MAX_CONCURRENT):
        if limit < 1:
            raise ValueError(f"Admission limit must be a positive integer, got {limit}")
        self.limit = limit
        self._semaphore = threading.BoundedSemaphore(limit)
        self._held = 0
        self._held_lock = threading.Lock()

    @property
    def held(self) -> int:
        with self._held_lock:
            return self._held

    @property
    def available(self) -> int:
        return self.limit - self.held

    @contextmanager
    def permit(self) -> Iterator[None]:
        self._semaphore.acquire()
        with self._held_lock:
            self._held += 1
        try:
            yield
        finally:
            with self._held_lock:
                self._held -= 1
            self._semaphore.release()
