"""Tests for the stateless inflation engine."""

import pytest

from src.inflation_engine.config import POSITIONS
from src.inflation_engine.engine import InflationEngine
from src.inflation_engine.models import (
    BudgetContext,
    DraftedPurchase,
    InflationState,
    ProjectionEntry,
    ValueTier,
)


# ── Helpers ──────────────────────────────────────────────────────────


def _make_projections():
    specs = [
        # (id, value, positions)
        ("c1", 30.0, ("C",)), ("ss1", 28.0, ("SS",)),
        ("of1", 25.0, ("OF",)), ("of2", 22.0, ("OF",)),
        ("sp1", 20.0, ("SP",)), ("sp2", 18.0, ("SP",)),
        ("1b1", 15.0, ("1B",)), ("2b1", 12.0, ("2B", "SS")),
        ("rp1", 8.0, ("RP",)), ("ut1", 5.0, ("UT",)),
    ]
    return [ProjectionEntry(pid, v, positions=pos) for pid, v, pos in specs]


# ── Constructor Tests ────────────────────────────────────────────────


class TestInflationEngineInit:
    def test_default_bounds(self):
        engine = InflationEngine()
        assert engine.min_multiplier == 0.1
        assert engine.max_multiplier == 2.0

    @pytest.mark.parametrize("bounds", [(0.0, 2.0), (-1.0, 2.0), (2.0, 1.0)])
    def test_invalid_bounds_raise(self, bounds):
        with pytest.raises(ValueError, match="Invalid depletion bounds"):
            InflationEngine(*bounds)


# ── Calculation Tests ────────────────────────────────────────────────


class TestCalculate:
    def test_empty_draft(self, engine):
        projections = _make_projections()
        state = engine.calculate([], projections)

        assert isinstance(state, InflationState)
        assert state.overall_rate == 0.0
        assert set(state.tier_rates) == set(ValueTier)
        assert set(state.position_rates) == set(POSITIONS)
        assert state.budget_depletion is None
        assert state.budget_depleted == 0.0
        assert state.players_remaining == len(projections)
        assert state.adjusted_values["c1"] == 30

    def test_rates_match_individual_calculators(self, engine):
        projections = _make_projections()
        purchases = [
            DraftedPurchase("c1", 36, positions=("C",)),
            DraftedPurchase("of1", 25, positions=("OF",)),
        ]
        state = engine.calculate(purchases, projections)

        assert state.overall_rate == pytest.approx((61 - 55) / 55)
        assert state.position_rates["C"] == pytest.approx(0.2)
        assert state.position_rates["OF"] == pytest.approx(0.0)
        # c1 is the top 10% of 10 players -> ELITE; of1 ranks 20% -> MID
        assert state.tier_rates[ValueTier.ELITE] == pytest.approx(0.2)
        assert state.tier_rates[ValueTier.MID] == pytest.approx(0.0)

    def test_drafted_players_excluded_from_adjusted_values(self, engine):
        purchases = [DraftedPurchase("c1", 36)]
        state = engine.calculate(purchases, _make_projections())
        assert "c1" not in state.adjusted_values
        assert state.players_remaining == 9

    def test_budget_context_applied(self, engine):
        projections = _make_projections()
        budget = BudgetContext(total_budget=1000, spent=100, slots_remaining=80, total_slots=100)
        state = engine.calculate([], projections, budget)

        assert state.budget_depletion.multiplier == pytest.approx(1.125)
        assert state.budget_depleted == pytest.approx(0.1)
        # 20 * 1.125 = 22.5 -> 23
        assert state.adjusted_values["sp1"] == 23

    def test_custom_bounds_reach_depletion(self):
        engine = InflationEngine(min_multiplier=0.5, max_multiplier=1.5)
        budget = BudgetContext(total_budget=1000, spent=1000, slots_remaining=10, total_slots=100)
        state = engine.calculate([], _make_projections(), budget)
        assert state.budget_depletion.multiplier == 0.5

    def test_overspent_budget_reads_fully_depleted(self, engine):
        budget = BudgetContext(total_budget=260, spent=300, slots_remaining=3, total_slots=23)
        state = engine.calculate([], _make_projections(), budget)
        assert state.budget_depleted == 1.0
        assert state.budget_depletion.remaining == 0

    def test_undrafted_tiers_computed_from_pool(self, engine):
        # Only ELITE purchases: untagged LOWER players must not pick up the
        # ELITE rate or the MID default.
        projections = _make_projections()
        purchases = [DraftedPurchase("c1", 60)]
        state = engine.calculate(purchases, projections)

        assert state.tier_rates[ValueTier.ELITE] == pytest.approx(1.0)
        assert state.adjusted_values["ut1"] == 5
        assert state.adjusted_values["ss1"] == 28

    def test_does_not_mutate_inputs(self, engine):
        projections = _make_projections()
        purchases = [DraftedPurchase("c1", 36)]
        snapshot = list(projections)
        engine.calculate(purchases, projections)
        assert projections == snapshot
        assert all(p.tier is None for p in projections)

    def test_repeat_calls_are_identical(self, engine):
        projections = _make_projections()
        purchases = [DraftedPurchase("c1", 36), DraftedPurchase("rp1", 2)]
        assert engine.calculate(purchases, projections) == engine.calculate(purchases, projections)
