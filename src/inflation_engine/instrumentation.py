"""Optional latency instrumentation for inflation calculations.

Wrapping a calculator never changes its return value, and a failing sink is
never allowed to reach the caller: recording errors are logged at DEBUG and
dropped.

Usage::

    tracked = with_performance_logging(
        overall_inflation,
        "basic",
        get_player_count=lambda purchases, projections: len(projections),
    )
    rate = tracked(purchases, projections)
"""

import functools
import logging
import queue
import threading
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from typing import Callable, Iterator, Optional, Protocol

import httpx

from src.inflation_engine.config import (
    METRICS_CLOSE_TIMEOUT_SECONDS,
    METRICS_MAX_PENDING,
    METRICS_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)

CALCULATION_KINDS = ("basic", "position", "tier", "budget_depletion")


@dataclass(frozen=True)
class PerformanceLogEntry:
    calculation_kind: str
    latency_ms: float
    population_size: Optional[int] = None
    draft_id: Optional[str] = None


class PerformanceSink(Protocol):
    def record(self, entry: PerformanceLogEntry) -> None:
        ...


class LoggingPerformanceSink:
    """Write performance entries through the standard logging module."""

    def __init__(self, level: int = logging.DEBUG):
        self.level = level
        self._logger = logging.getLogger(f"{__name__}.metrics")

    def record(self, entry: PerformanceLogEntry) -> None:
        self._logger.log(
            self.level,
            "%s calculation took %.2fms (players=%s, draft=%s)",
            entry.calculation_kind, entry.latency_ms,
            entry.population_size, entry.draft_id,
        )


class HttpPerformanceSink:
    """POST performance entries as JSON to a metrics endpoint.

    Entries wait in a bounded queue drained by one daemon thread, so the
    calculation that produced an entry never waits on the network. When the
    queue is full (endpoint slow or unreachable) new entries are dropped.
    Delivery failures are logged at DEBUG and dropped.
    """

    def __init__(
        self,
        url: str,
        client: Optional[httpx.Client] = None,
        timeout: float = METRICS_TIMEOUT_SECONDS,
        max_pending: int = METRICS_MAX_PENDING,
    ):
        self.url = url
        self.dropped = 0
        self._client = client or httpx.Client(timeout=timeout)
        self._owns_client = client is None
        self._queue: "queue.Queue[PerformanceLogEntry]" = queue.Queue(maxsize=max_pending)
        self._closing = threading.Event()
        self._abandon = threading.Event()
        self._worker = threading.Thread(
            target=self._drain, name="inflation-metrics", daemon=True
        )
        self._worker.start()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def record(self, entry: PerformanceLogEntry) -> None:
        if self._closing.is_set():
            self.dropped += 1
            return
        try:
            self._queue.put_nowait(entry)
        except queue.Full:
            self.dropped += 1
            logger.debug(
                "Metrics backlog full (%d entries); dropping %s entry",
                self._queue.maxsize, entry.calculation_kind,
            )

    def _drain(self) -> None:
        while not self._abandon.is_set():
            try:
                entry = self._queue.get(timeout=0.05)
            except queue.Empty:
                if self._closing.is_set():
                    return
                continue
            if self._abandon.is_set():
                return
            self._send(entry)

    def _send(self, entry: PerformanceLogEntry) -> None:
        try:
            resp = self._client.post(self.url, json=asdict(entry))
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.debug("Failed to deliver performance entry to %s: %s", self.url, exc)

    def close(self, timeout: float = METRICS_CLOSE_TIMEOUT_SECONDS) -> None:
        """Flush pending entries for at most *timeout* seconds, then give up."""
        self._closing.set()
        self._worker.join(timeout)
        if self._worker.is_alive():
            self._abandon.set()
            logger.debug(
                "Metrics sink closed with %d entries undelivered", self._queue.qsize()
            )
            # The worker may still be mid-request; leave the client to it.
            return
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


_default_sink = LoggingPerformanceSink()


def _safe_record(sink: PerformanceSink, entry: PerformanceLogEntry) -> None:
    try:
        sink.record(entry)
    except Exception:
        logger.debug("Performance sink raised; entry dropped", exc_info=True)


def with_performance_logging(
    calculation_fn: Callable,
    calculation_kind: str,
    get_player_count: Optional[Callable[..., int]] = None,
    get_draft_id: Optional[Callable[..., Optional[str]]] = None,
    sink: Optional[PerformanceSink] = None,
) -> Callable:
    """Wrap *calculation_fn* so each call records its latency.

    Args:
        calculation_fn: The calculator to time.
        calculation_kind: One of ``CALCULATION_KINDS``.
        get_player_count: Called with the wrapped call's arguments to
            report the population size.
        get_draft_id: Called with the wrapped call's arguments to report
            the draft being calculated.
        sink: Destination for entries; defaults to a logging sink.
    """
    target = sink if sink is not None else _default_sink

    @functools.wraps(calculation_fn)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = calculation_fn(*args, **kwargs)
        latency_ms = (time.perf_counter() - start) * 1000.0

        try:
            population_size = (
                get_player_count(*args, **kwargs) if get_player_count else None
            )
            draft_id = get_draft_id(*args, **kwargs) if get_draft_id else None
        except Exception:
            logger.debug("Instrumentation extractor raised", exc_info=True)
            population_size, draft_id = None, None

        _safe_record(
            target,
            PerformanceLogEntry(calculation_kind, latency_ms, population_size, draft_id),
        )
        return result

    return wrapper


@dataclass
class Measurement:
    """Mutable handle yielded by :func:`measure_performance`."""

    population_size: Optional[int] = None
    draft_id: Optional[str] = None
    latency_ms: Optional[float] = None


@contextmanager
def measure_performance(
    calculation_kind: str,
    sink: Optional[PerformanceSink] = None,
) -> Iterator[Measurement]:
    """Time a block spanning one or more calculations.

    Set ``population_size`` / ``draft_id`` on the yielded handle before the
    block ends; ``latency_ms`` is filled in on exit.
    """
    target = sink if sink is not None else _default_sink
    measurement = Measurement()
    start = time.perf_counter()
    try:
        yield measurement
    finally:
        measurement.latency_ms = (time.perf_counter() - start) * 1000.0
        _safe_record(
            target,
            PerformanceLogEntry(
                calculation_kind,
                measurement.latency_ms,
                measurement.population_size,
                measurement.draft_id,
            ),
        )
