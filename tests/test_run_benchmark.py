"""Latency tests for the inflation calculators (src.inflation_engine.run_benchmark)."""

import pytest

from src.inflation_engine.config import TARGET_LATENCY_MS
from src.inflation_engine.run_benchmark import make_synthetic_pool, run_benchmark


class TestSyntheticPool:
    def test_sizes(self):
        purchases, projections = make_synthetic_pool(500)
        assert len(projections) == 500
        assert len(purchases) == 200

    def test_deterministic_for_seed(self):
        assert make_synthetic_pool(100, seed=3) == make_synthetic_pool(100, seed=3)

    def test_purchases_reference_pool(self):
        purchases, projections = make_synthetic_pool(200)
        ids = {p.player_id for p in projections}
        assert all(p.player_id in ids for p in purchases)
        assert all(p.actual_price >= 1 for p in purchases)


class TestRunBenchmark:
    @pytest.fixture(scope="class")
    def summary(self):
        return run_benchmark(pool_size=500, runs=5)

    def test_every_calculator_timed(self, summary):
        assert set(summary.index) == {"basic", "position", "tier", "budget_depletion"}
        assert (summary["runs"] == 5).all()

    def test_mean_latency_under_target(self, summary):
        assert (summary["mean_ms"] < TARGET_LATENCY_MS).all(), summary.to_string()
        assert summary["within_budget"].all()

    def test_invalid_arguments_raise(self):
        with pytest.raises(ValueError, match="must be positive"):
            run_benchmark(pool_size=0)
