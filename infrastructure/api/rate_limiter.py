"""Rate limiter matching Riot API's documented personal-key limits."""
import asyncio
import time
from collections import deque
from typing import Awaitable, Callable, Deque, Tuple
import logging

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]


class RateLimiter:
    """
    Sliding-window rate limiter shared by every call in a scan:
      - Short : N requests per 1 second
      - Long  : N requests per 120 seconds (Riot's 2-min window)

    The scan also sleeps a fixed delay after each call, so in normal
    operation this never waits; it guards bursts when the delays are
    tuned down.
    """

    SHORT_WINDOW_S = 1.0
    LONG_WINDOW_S = 120.0

    def __init__(
        self,
        requests_per_1_sec: int = 18,
        requests_per_2_min: int = 90,
        *,
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.requests_per_1_sec = requests_per_1_sec
        self.requests_per_2_min = requests_per_2_min

        self._clock = clock
        self._sleep = sleep
        self._times_1s:   Deque[float] = deque()
        self._times_2min: Deque[float] = deque()
        self._lock = asyncio.Lock()

    def _evict(self, now: float) -> None:
        while self._times_1s and now - self._times_1s[0] > self.SHORT_WINDOW_S:
            self._times_1s.popleft()
        while self._times_2min and now - self._times_2min[0] > self.LONG_WINDOW_S:
            self._times_2min.popleft()

    def _wait_time(self, now: float) -> float:
        """Seconds until a slot frees up; 0 when a request may go now."""
        ok_1s   = len(self._times_1s)   < self.requests_per_1_sec
        ok_2min = len(self._times_2min) < self.requests_per_2_min
        if ok_1s and ok_2min:
            return 0.0
        wait = 0.05
        if not ok_1s and self._times_1s:
            wait = max(wait, self.SHORT_WINDOW_S - (now - self._times_1s[0]) + 0.01)
        if not ok_2min and self._times_2min:
            wait = max(wait, self.LONG_WINDOW_S - (now - self._times_2min[0]) + 0.01)
        return wait

    async def acquire(self) -> None:
        async with self._lock:
            while True:
                now = self._clock()
                self._evict(now)
                wait = self._wait_time(now)
                if wait == 0.0:
                    self._times_1s.append(now)
                    self._times_2min.append(now)
                    return
                logger.debug(f"rate-limit wait={wait:.2f}s")
                await self._sleep(wait)

    def get_status(self) -> Tuple[int, int, int, int]:
        now = self._clock()
        used_1s   = sum(1 for t in self._times_1s   if now - t <= self.SHORT_WINDOW_S)
        used_2min = sum(1 for t in self._times_2min if now - t <= self.LONG_WINDOW_S)
        return used_1s, self.requests_per_1_sec, used_2min, self.requests_per_2_min

    async def reset(self) -> None:
        async with self._lock:
            self._times_1s.clear()
            self._times_2min.clear()
