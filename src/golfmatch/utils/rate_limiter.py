"""Rate limiter for outbound map-data queries."""

import threading
import time
from collections import deque


class RateLimiter:
    """Sliding window rate limiter.

    Tracks call timestamps and ensures the number of calls does not exceed
    ``max_calls`` within ``time_window`` seconds. Safe to share between
    request threads.
    """

    def __init__(self, max_calls: int, time_window: float):
        """Initialize rate limiter.

        Args:
            max_calls: Maximum number of calls allowed in the time window
            time_window: Time window in seconds
        """
        self.max_calls = max_calls
        self.time_window = time_window
        self.calls: deque[float] = deque()
        self._lock = threading.Lock()

    def _expire(self, now: float) -> None:
        while self.calls and now - self.calls[0] > self.time_window:
            self.calls.popleft()

    def add_call(self) -> None:
        """Record a new call."""
        with self._lock:
            now = time.time()
            self.calls.append(now)
            self._expire(now)

    def get_sleep_time(self) -> float:
        """Get the time to sleep before next call is allowed.

        Returns:
            Number of seconds to sleep. 0 if call can be made immediately.
        """
        with self._lock:
            if not self.calls:
                return 0

            now = time.time()
            self._expire(now)

            if len(self.calls) < self.max_calls:
                return 0

            return max(0.0, self.calls[0] + self.time_window - now)

    def wait(self) -> float:
        """Block until a call is allowed, then record it.

        Returns:
            Seconds spent waiting
        """
        sleep_time = self.get_sleep_time()
        if sleep_time > 0:
            time.sleep(sleep_time)
        self.add_call()
        return sleep_time
