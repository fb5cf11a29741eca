import threading
import time
from typing import Callable, Dict, List


class SlidingWindowLimiter:
    """Per-key request ceiling over a sliding time window: {key: [timestamps]}.

    Keys whose window has fully expired are swept at most once per window,
    so the map only holds clients seen recently.
    """

    def __init__(self, max_requests: int, window_sec: float, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_sec = window_sec
        self._clock = clock
        self._hits: Dict[str, List[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def allow(self, key: str) -> bool:
        """Record a hit for ``key`` unless it is already at the ceiling."""
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window_sec:
                self._sweep(now)
            recent = [t for t in self._hits.get(key, ()) if now - t < self.window_sec]
            if len(recent) >= self.max_requests:
                self._hits[key] = recent
                return False
            recent.append(now)
            self._hits[key] = recent
            return True

    def __len__(self) -> int:
        return len(self._hits)

    def _sweep(self, now: float) -> None:
        stale = [k for k, hits in self._hits.items() if not hits or now - hits[-1] >= self.window_sec]
        for k in stale:
            del self._hits[k]
        self._last_sweep = now
