from threading import Lock
from time import time
from typing import Callable, Dict


class RateLimiter:
    """
    Fixed-window request counter keyed by identifier.

    One instance is created by the application and handed to whoever
    needs it; nothing is kept at module level.
    """

    def __init__(self, max_requests: int = 10, window_seconds: int = 60, clock: Callable[[], float] = time):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._counts: Dict[str, int] = {}
        self._lock = Lock()

    def _window(self, now: float) -> int:
        return int(now // self.window_seconds)

    def hit(self, identifier: str) -> bool:
        """Count one request; returns False once the window limit is reached."""
        now = self._clock()
        window = self._window(now)
        key = f"{identifier}:{window}"

        with self._lock:
            current = self._counts.get(key, 0)
            if current >= self.max_requests:
                return False
            self._counts[key] = current + 1
            self._cleanup(now)
        return True

    def retry_after(self, identifier: str) -> int:
        """Seconds until the current window closes."""
        now = self._clock()
        window_end = (self._window(now) + 1) * self.window_seconds
        return max(1, int(window_end - now))

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()

    def _cleanup(self, now: float) -> None:
        # Remove windows older than two window lengths
        for key in list(self._counts):
            window = int(key.rsplit(":", 1)[1])
            if now - window * self.window_seconds > self.window_seconds * 2:
                del self._counts[key]
