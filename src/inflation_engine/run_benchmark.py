"""Benchmark inflation calculator latency on a synthetic player pool.

Usage:
    python -m src.inflation_engine.run_benchmark [pool_size] [runs]

Examples:
    python -m src.inflation_engine.run_benchmark
    python -m src.inflation_engine.run_benchmark 800 10
"""

import logging
import random
import sys
from typing import List, Tuple

import pandas as pd

from src.inflation_engine.budget import budget_depletion
from src.inflation_engine.config import POSITIONS, TARGET_LATENCY_MS
from src.inflation_engine.inflation import (
    overall_inflation,
    position_inflation,
    tier_inflation,
)
from src.inflation_engine.instrumentation import (
    PerformanceLogEntry,
    with_performance_logging,
)
from src.inflation_engine.models import DraftedPurchase, ProjectionEntry
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)

# League shape used for the depletion calculation
_TEAMS = 12
_BUDGET_PER_TEAM = 260
_SLOTS_PER_TEAM = 23


class CollectingSink:
    """Keep performance entries in memory."""

    def __init__(self):
        self.entries: List[PerformanceLogEntry] = []

    def record(self, entry: PerformanceLogEntry) -> None:
        self.entries.append(entry)


def make_synthetic_pool(
    pool_size: int,
    drafted_fraction: float = 0.4,
    seed: int = 42,
) -> Tuple[List[DraftedPurchase], List[ProjectionEntry]]:
    """Build a projection pool and purchases for its top *drafted_fraction*.

    Projected values follow a long-tailed distribution similar to a real
    auction board; purchase prices scatter around projection.
    """
    rng = random.Random(seed)
    projections = []
    for i in range(pool_size):
        value = round(rng.paretovariate(1.5) * 3, 1)
        positions = tuple(rng.sample(POSITIONS, rng.choice((1, 1, 1, 2))))
        projections.append(ProjectionEntry(f"p{i}", min(value, 60.0), positions=positions))

    drafted = sorted(projections, key=lambda p: p.value, reverse=True)
    drafted = drafted[: int(pool_size * drafted_fraction)]
    purchases = [
        DraftedPurchase(p.player_id, max(1.0, round(p.value * rng.uniform(0.7, 1.4))))
        for p in drafted
    ]
    return purchases, projections


def run_benchmark(pool_size: int = 500, runs: int = 5, seed: int = 42) -> pd.DataFrame:
    """Time each calculator over *runs* invocations.

    Returns:
        DataFrame indexed by calculation kind with ``runs``, ``mean_ms``,
        ``max_ms`` and ``within_budget`` columns.
    """
    if pool_size <= 0 or runs <= 0:
        raise ValueError(f"pool_size and runs must be positive, got {pool_size}, {runs}")

    purchases, projections = make_synthetic_pool(pool_size, seed=seed)
    sink = CollectingSink()

    def pool_count(purchases, projections):
        return len(projections)

    calculators = {
        "basic": overall_inflation,
        "position": position_inflation,
        "tier": tier_inflation,
    }
    for kind, fn in calculators.items():
        tracked = with_performance_logging(fn, kind, get_player_count=pool_count, sink=sink)
        for _ in range(runs):
            tracked(purchases, projections)

    spent = sum(p.actual_price for p in purchases)
    tracked_depletion = with_performance_logging(budget_depletion, "budget_depletion", sink=sink)
    for _ in range(runs):
        tracked_depletion(
            _TEAMS * _BUDGET_PER_TEAM,
            spent,
            max(_TEAMS * _SLOTS_PER_TEAM - len(purchases), 0),
            _TEAMS * _SLOTS_PER_TEAM,
        )

    df = pd.DataFrame([
        {"kind": e.calculation_kind, "latency_ms": e.latency_ms} for e in sink.entries
    ])
    summary = df.groupby("kind", sort=False)["latency_ms"].agg(
        runs="count", mean_ms="mean", max_ms="max"
    )
    summary["within_budget"] = summary["mean_ms"] < TARGET_LATENCY_MS

    logger.info(
        "Benchmarked %d calculators over %d players (%d purchases), %d runs each",
        len(summary), pool_size, len(purchases), runs,
    )
    return summary


if __name__ == "__main__":
    setup_logging()

    pool_size = int(sys.argv[1]) if len(sys.argv) > 1 else 500
    runs = int(sys.argv[2]) if len(sys.argv) > 2 else 5

    try:
        summary = run_benchmark(pool_size, runs)
        print(summary.to_string(float_format=lambda v: f"{v:.3f}"))
    except Exception:
        logger.exception("Benchmark failed")
        sys.exit(1)

    if not summary["within_budget"].all():
        logger.warning("Mean latency above %.0fms target", TARGET_LATENCY_MS)
        sys.exit(2)
