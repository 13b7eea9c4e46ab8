"""Process-wide login attempt tracking with sliding-window eviction."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from datetime import timedelta
from datetime import timezone
import threading

from errorguard.sample.errors import RateLimitExceededError

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_WINDOW = timedelta(minutes=15)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LoginAttemptTracker:
    """Count login attempts per key inside a sliding time window.

    Shared by every request of the process; all access goes through a lock.
    Keys whose attempts have all left the window are swept at most once per
    window while attempts are being registered.
    """

    def __init__(
        self,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        window: timedelta = DEFAULT_WINDOW,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if max_attempts <= 0:
            raise ValueError("max_attempts must be positive")
        if window <= timedelta(0):
            raise ValueError("window must be positive")
        self.max_attempts = max_attempts
        self.window = window
        self._clock = clock
        self._attempts: dict[str, list[datetime]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._attempts)

    def register_attempt(self, key: str) -> None:
        """Record an attempt for ``key``.

        Raises:
            RateLimitExceededError: when the window is already full; the
                rejected attempt is not recorded.
        """
        now = self._clock()
        normalized = key.strip().lower()
        with self._lock:
            if now - self._last_sweep >= self.window:
                self._sweep(now)
            recent = self._recent(normalized, now)
            if len(recent) >= self.max_attempts:
                raise RateLimitExceededError(self.max_attempts, self.window, recent[0] + self.window)
            recent.append(now)
            self._attempts[normalized] = recent

    def attempts(self, key: str) -> int:
        """Return the number of attempts for ``key`` still inside the window."""
        with self._lock:
            return len(self._recent(key.strip().lower(), self._clock()))

    def evict_expired(self) -> int:
        """Drop keys with no attempt inside the window; return how many were dropped."""
        now = self._clock()
        with self._lock:
            return self._sweep(now)

    def _sweep(self, now: datetime) -> int:
        self._last_sweep = now
        expired = [key for key in list(self._attempts) if not self._recent(key, now)]
        return len(expired)

    def _recent(self, key: str, now: datetime) -> list[datetime]:
        cutoff = now - self.window
        recent = [attempt for attempt in self._attempts.get(key, []) if attempt > cutoff]
        if recent:
            self._attempts[key] = recent
        else:
            self._attempts.pop(key, None)
        return recent
