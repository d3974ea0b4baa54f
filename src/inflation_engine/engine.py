"""Full inflation recalculation for one point in a draft."""

import dataclasses
import logging
from typing import List, Optional, Sequence

from src.inflation_engine.adjusted_values import adjusted_values
from src.inflation_engine.budget import budget_depletion
from src.inflation_engine.config import (
    BUDGET_DEPLETION_MAX_MULTIPLIER,
    BUDGET_DEPLETION_MIN_MULTIPLIER,
)
from src.inflation_engine.inflation import (
    overall_inflation,
    position_inflation,
    tier_inflation,
)
from src.inflation_engine.models import (
    BudgetContext,
    DraftedPurchase,
    InflationState,
    ProjectionEntry,
)
from src.inflation_engine.tiers import resolve_tier, sorted_pool_values

logger = logging.getLogger(__name__)


class InflationEngine:
    """Compute every inflation signal for the current draft.

    The engine is stateless: purchases, projections and budget counters are
    passed in on every call and nothing is kept between calls. Inputs are
    never mutated.
    """

    def __init__(
        self,
        min_multiplier: float = BUDGET_DEPLETION_MIN_MULTIPLIER,
        max_multiplier: float = BUDGET_DEPLETION_MAX_MULTIPLIER,
    ):
        if not 0 < min_multiplier <= max_multiplier:
            raise ValueError(
                f"Invalid depletion bounds: [{min_multiplier!r}, {max_multiplier!r}]. "
                "Must satisfy 0 < min <= max."
            )
        self.min_multiplier = min_multiplier
        self.max_multiplier = max_multiplier

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def calculate(
        self,
        purchases: Sequence[DraftedPurchase],
        projections: Sequence[ProjectionEntry],
        budget: Optional[BudgetContext] = None,
    ) -> InflationState:
        """Recalculate overall, position and tier inflation.

        Args:
            purchases: Every purchase completed so far.
            projections: The full projection pool, drafted players included.
            budget: League budget counters. Without it no depletion
                multiplier is modeled (1.0 is used for adjusted values).

        Returns:
            :class:`InflationState` with adjusted values for every player
            not yet purchased.
        """
        overall = overall_inflation(purchases, projections)
        position_rates = position_inflation(purchases, projections)
        tier_rates = tier_inflation(purchases, projections)

        depletion = None
        budget_depleted = 0.0
        if budget is not None:
            depletion = budget_depletion(
                budget.total_budget,
                budget.spent,
                budget.slots_remaining,
                budget.total_slots,
                min_multiplier=self.min_multiplier,
                max_multiplier=self.max_multiplier,
            )
            if budget.total_budget > 0:
                # Overspent budgets read as fully depleted
                budget_depleted = min(max(budget.spent / budget.total_budget, 0.0), 1.0)

        undrafted = self._tag_undrafted(purchases, projections)
        values = adjusted_values(
            undrafted,
            position_rates,
            tier_rates,
            depletion.multiplier if depletion is not None else 1.0,
        )

        logger.debug(
            "Recalculated inflation: overall=%.4f, %d purchases, %d remaining",
            overall, len(purchases), len(undrafted),
        )

        return InflationState(
            overall_rate=overall,
            position_rates=position_rates,
            tier_rates=tier_rates,
            budget_depleted=budget_depleted,
            budget_depletion=depletion,
            players_remaining=len(undrafted),
            adjusted_values=values,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _tag_undrafted(
        purchases: Sequence[DraftedPurchase],
        projections: Sequence[ProjectionEntry],
    ) -> List[ProjectionEntry]:
        """Undrafted projections, each carrying its resolved tier.

        Tiers are ranked against the full pool so a player's tier does not
        drift as the players above them are bought.
        """
        drafted_ids = {p.player_id for p in purchases}
        ascending_values = sorted_pool_values(projections)
        return [
            dataclasses.replace(p, tier=resolve_tier(None, p, ascending_values))
            for p in projections
            if p.player_id not in drafted_ids
        ]
