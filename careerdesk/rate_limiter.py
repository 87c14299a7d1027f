"""
Per-model request throttling over a rolling one-minute window.

The limiter is advisory: it only stops a session from firing requests it can
already predict the provider will reject. It does not track the provider's
real quota.
"""
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .models import find_model

WINDOW_SECONDS = 60.0


@dataclass
class RateWindow:
    count: int
    window_reset_at: float


@dataclass(frozen=True)
class RateLimitCheck:
    can_proceed: bool
    wait_seconds: int = 0


@dataclass(frozen=True)
class RateUsage:
    count: int
    limit: int
    seconds_until_reset: int


class RateLimiter:
    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self.windows: Dict[str, RateWindow] = {}

    def _fresh_window(self, now: float) -> RateWindow:
        return RateWindow(count=0, window_reset_at=now + WINDOW_SECONDS)

    def check_rate_limit(self, model_id: str) -> RateLimitCheck:
        model = find_model(model_id)
        if model is None:
            return RateLimitCheck(can_proceed=True)

        now = self._clock()
        window = self.windows.get(model_id)
        if window is None or now >= window.window_reset_at:
            # prepare a new window without consuming it
            self.windows[model_id] = self._fresh_window(now)
            return RateLimitCheck(can_proceed=True)

        if window.count >= model.requests_per_minute:
            wait = math.ceil(window.window_reset_at - now)
            return RateLimitCheck(can_proceed=False, wait_seconds=wait)

        return RateLimitCheck(can_proceed=True)

    def record_usage(self, model_id: str) -> None:
        now = self._clock()
        window = self.windows.get(model_id)
        if window is None or now >= window.window_reset_at:
            window = self._fresh_window(now)
            self.windows[model_id] = window
        window.count += 1

    def usage(self, model_id: str) -> RateUsage:
        model = find_model(model_id)
        limit = model.requests_per_minute if model else 0
        now = self._clock()
        window = self.windows.get(model_id)
        if window is None or now >= window.window_reset_at:
            return RateUsage(count=0, limit=limit, seconds_until_reset=0)
        return RateUsage(
            count=window.count,
            limit=limit,
            seconds_until_reset=max(0, math.ceil(window.window_reset_at - now)),
        )
