"""Shared fixtures for the inflation engine test suite."""

import logging

import pytest

from src.inflation_engine.diagnostics import RateLimitFilter
from src.inflation_engine.engine import InflationEngine
from src.inflation_engine.models import DraftedPurchase, ProjectionEntry

_THROTTLED_LOGGERS = ("src.inflation_engine.inflation",)


@pytest.fixture(autouse=True)
def _reset_warning_throttle():
    """Each test starts with a clean data-quality warning throttle."""
    for name in _THROTTLED_LOGGERS:
        for f in logging.getLogger(name).filters:
            if isinstance(f, RateLimitFilter):
                f.reset()
    yield


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture
def engine():
    return InflationEngine()


@pytest.fixture
def sample_purchases():
    return [
        DraftedPurchase("p1", 25),
        DraftedPurchase("p2", 30),
        DraftedPurchase("p3", 15),
    ]


@pytest.fixture
def sample_projections():
    return [
        ProjectionEntry("p1", 20),
        ProjectionEntry("p2", 25),
        ProjectionEntry("p3", 10),
    ]


@pytest.fixture
def ranked_pool():
    """Twenty projections valued 20 down to 1, ids r1..r20."""
    return [ProjectionEntry(f"r{i}", float(21 - i)) for i in range(1, 21)]
