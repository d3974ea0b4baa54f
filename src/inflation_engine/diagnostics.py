"""Rate-limited data-quality warnings.

Inflation is recalculated after every pick and on UI refresh ticks, so a
single bad row upstream would otherwise repeat the same warning many times
per second. Calculators emit at most one warning per call; this filter then
throttles identical messages per logger to one per interval and reports how
many repeats were dropped when the next one goes through.
"""

import logging
import threading
import time
from typing import Callable, Dict, Tuple

from src.inflation_engine.config import DATA_QUALITY_WARNING_INTERVAL_SECONDS


class RateLimitFilter(logging.Filter):
    """Drop repeats of the same warning within *interval* seconds.

    Records below WARNING are never throttled.
    """

    def __init__(
        self,
        interval: float = DATA_QUALITY_WARNING_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__()
        self.interval = interval
        self._clock = clock
        self._lock = threading.Lock()
        self._last_emitted: Dict[Tuple[str, str], float] = {}
        self._suppressed: Dict[Tuple[str, str], int] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno < logging.WARNING:
            return True

        key = (record.name, str(record.msg))
        now = self._clock()
        with self._lock:
            last = self._last_emitted.get(key)
            if last is not None and now - last < self.interval:
                self._suppressed[key] = self._suppressed.get(key, 0) + 1
                return False
            self._last_emitted[key] = now
            suppressed = self._suppressed.pop(key, 0)

        if suppressed:
            record.msg = (
                f"{record.getMessage()} "
                f"({suppressed} similar warnings suppressed)"
            )
            record.args = None
        return True

    def reset(self) -> None:
        with self._lock:
            self._last_emitted.clear()
            self._suppressed.clear()


def get_diagnostics_logger(name: str) -> logging.Logger:
    """Return the logger for *name* with a :class:`RateLimitFilter` attached."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, RateLimitFilter) for f in logger.filters):
        logger.addFilter(RateLimitFilter())
    return logger
