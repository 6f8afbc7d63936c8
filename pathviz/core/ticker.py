#!/usr/bin/env python3
"""
Frame-driven ticking source.

The render loop calls pump() once per frame; the ticker fires the scheduled
callback at most once per pump, and only when the configured interval has
elapsed. Nothing runs in the background, so ticks can never overlap.
"""

import logging
import time
from typing import Callable, Optional

from pathviz.config import MAX_TICKS_PER_SEC, MIN_TICKS_PER_SEC, TICK_INTERVAL_MS

logger = logging.getLogger(__name__)


class FrameTicker:
    def __init__(self, interval_ms: float = TICK_INTERVAL_MS,
                 clock: Callable[[], float] = time.monotonic):
        self.interval_ms = interval_ms
        self._clock = clock
        self._callback: Optional[Callable[[], object]] = None
        self._last_fire = 0.0
        self._firing = False

    # -------------------- scheduling --------------------

    def schedule(self, callback: Callable[[], object]) -> None:
        """Start calling `callback` every interval; the first call is one interval away."""
        self._callback = callback
        self._last_fire = self._clock()

    def cancel(self, callback: Optional[Callable[[], object]] = None) -> None:
        """Drop the scheduled callback; with `callback`, only if it is the one scheduled."""
        if callback is None or callback == self._callback:
            self._callback = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def pump(self) -> bool:
        """Fire the callback if it is due. Returns True when it fired."""
        cb = self._callback
        if cb is None or self._firing:
            return False
        now = self._clock()
        if (now - self._last_fire) * 1000.0 < self.interval_ms:
            return False
        self._last_fire = now
        self._firing = True
        try:
            cb()
        finally:
            self._firing = False
        return True

    # -------------------- speed --------------------

    @property
    def ticks_per_sec(self) -> int:
        return max(1, round(1000.0 / self.interval_ms))

    def set_ticks_per_sec(self, rate: int) -> None:
        rate = int(max(MIN_TICKS_PER_SEC, min(MAX_TICKS_PER_SEC, rate)))
        self.interval_ms = 1000.0 / rate
        logger.debug("tick rate set to %d/s", rate)
