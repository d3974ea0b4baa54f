"""Budget depletion modeling.

Compares how much money the room has left per open roster slot with the
draft's average budget per slot::

    multiplier = (remaining / slots_remaining) / (total_budget / total_slots)

Above 1.0 the room is holding more cash per open slot than average, so
prices should trend up; below 1.0 the opposite. The result is clamped to
``[BUDGET_DEPLETION_MIN_MULTIPLIER, BUDGET_DEPLETION_MAX_MULTIPLIER]``.
"""

import logging

from src.inflation_engine.config import (
    BUDGET_DEPLETION_MAX_MULTIPLIER,
    BUDGET_DEPLETION_MIN_MULTIPLIER,
)
from src.inflation_engine.models import BudgetDepletionResult

logger = logging.getLogger(__name__)


def budget_depletion(
    total_budget: float,
    spent_budget: float,
    slots_remaining: int,
    total_slots: int,
    *,
    min_multiplier: float = BUDGET_DEPLETION_MIN_MULTIPLIER,
    max_multiplier: float = BUDGET_DEPLETION_MAX_MULTIPLIER,
) -> BudgetDepletionResult:
    """Estimate the budget depletion multiplier.

    Degenerate inputs short-circuit, in this order:

    * no total budget -> 1.0
    * no roster slots -> 1.0
    * no slots left to fill -> 1.0
    * no budget left -> ``min_multiplier``

    Args:
        total_budget: Combined budget of every team.
        spent_budget: Amount spent so far.
        slots_remaining: Roster slots still open across the league.
        total_slots: Total roster slots across the league.

    Returns:
        :class:`BudgetDepletionResult`. ``remaining`` and
        ``slots_remaining`` are floored at 0.
    """
    remaining = max(total_budget - spent_budget, 0)
    slots_remaining = max(slots_remaining, 0)

    def result(multiplier: float) -> BudgetDepletionResult:
        return BudgetDepletionResult(
            multiplier=multiplier,
            spent=spent_budget,
            remaining=remaining,
            slots_remaining=slots_remaining,
        )

    if total_budget <= 0:
        return result(1.0)
    if total_slots <= 0:
        return result(1.0)
    if slots_remaining == 0:
        return result(1.0)
    if remaining == 0:
        return result(min_multiplier)

    current_per_slot = remaining / slots_remaining
    average_per_slot = total_budget / total_slots
    raw = current_per_slot / average_per_slot
    multiplier = min(max(raw, min_multiplier), max_multiplier)

    if multiplier != raw:
        logger.debug(
            "Depletion multiplier %.3f clamped to %.3f "
            "($%.0f left for %d slots)",
            raw, multiplier, remaining, slots_remaining,
        )
    return result(multiplier)
