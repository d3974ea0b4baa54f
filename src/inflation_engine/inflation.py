"""Inflation calculators.

Inflation compares what the room has actually paid with what the same
players were projected to be worth::

    rate = (actual_total - projected_total) / projected_total

Positive rates mean the market is paying above projection, negative rates
below it. Whenever the denominator is zero or negative the rate is 0, so
callers always receive a finite number. Tier and position rates are computed
from independent totals; one bucket's data never affects another's rate.

None of these functions raise on bad numeric data. Negative prices and
projections are used as given and reported as a data-quality warning.
"""

from typing import Dict, Iterable, List, Mapping, Sequence

from src.inflation_engine.config import POSITIONS
from src.inflation_engine.diagnostics import get_diagnostics_logger
from src.inflation_engine.models import (
    VALUE_TIERS,
    DraftedPurchase,
    ProjectionEntry,
    ValueTier,
)
from src.inflation_engine.tiers import resolve_tier, sorted_pool_values

logger = get_diagnostics_logger(__name__)


def _rate(actual: float, projected: float) -> float:
    if projected <= 0:
        return 0.0
    return (actual - projected) / projected


def _projection_index(
    projections: Iterable[ProjectionEntry],
) -> Dict[str, ProjectionEntry]:
    """Map ``player_id`` to its projection. Later duplicates win."""
    return {p.player_id: p for p in projections}


def _warn_on_negative_prices(purchases: Sequence[DraftedPurchase]) -> None:
    negative = sum(1 for p in purchases if p.actual_price < 0)
    if negative:
        logger.warning(
            "Negative auction price on %d purchase(s); "
            "upstream draft data may be corrupt",
            negative,
        )


def _warn_on_negative_projections(projections: Mapping[str, ProjectionEntry]) -> None:
    negative = sum(1 for p in projections.values() if p.value < 0)
    if negative:
        logger.warning(
            "Negative projected value on %d player(s); "
            "upstream projection data may be corrupt",
            negative,
        )


# ------------------------------------------------------------------
# Overall
# ------------------------------------------------------------------

def overall_inflation(
    purchases: Sequence[DraftedPurchase],
    projections: Sequence[ProjectionEntry],
) -> float:
    """Inflation rate across every completed purchase.

    A purchase with no projection adds its price to the actual total and
    nothing to the projected total.

    Returns:
        The signed rate, or 0 when there are no purchases or the matched
        projected total is not positive.
    """
    if not purchases:
        return 0.0

    by_player = _projection_index(projections)
    _warn_on_negative_prices(purchases)
    _warn_on_negative_projections(by_player)

    actual_total = 0.0
    projected_total = 0.0
    for purchase in purchases:
        actual_total += purchase.actual_price
        projection = by_player.get(purchase.player_id)
        if projection is not None:
            projected_total += projection.value

    return _rate(actual_total, projected_total)


# ------------------------------------------------------------------
# Tier-partitioned
# ------------------------------------------------------------------

def tier_inflation(
    purchases: Sequence[DraftedPurchase],
    projections: Sequence[ProjectionEntry],
) -> Dict[ValueTier, float]:
    """Inflation rate per value tier.

    Each purchase is placed in a tier by its own tag, else its projection's
    tag, else by ranking its projected value against the whole projection
    pool. A tier's rate compares the prices paid for its purchases with the
    projected values of those same players.

    Returns:
        Dict with every :class:`ValueTier` present; tiers without purchases
        are 0.
    """
    actuals = {tier: 0.0 for tier in VALUE_TIERS}
    projected = {tier: 0.0 for tier in VALUE_TIERS}

    if not purchases:
        return dict(actuals)

    by_player = _projection_index(projections)
    _warn_on_negative_prices(purchases)
    _warn_on_negative_projections(by_player)

    # Sort the reference pool once; each lookup is then a bisect.
    ascending_values = sorted_pool_values(projections)

    for purchase in purchases:
        projection = by_player.get(purchase.player_id)
        tier = resolve_tier(purchase, projection, ascending_values)
        actuals[tier] += purchase.actual_price
        if projection is not None:
            projected[tier] += projection.value

    return {tier: _rate(actuals[tier], projected[tier]) for tier in VALUE_TIERS}


# ------------------------------------------------------------------
# Position-partitioned
# ------------------------------------------------------------------

def _valid_positions(positions: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for pos in positions:
        if pos in POSITIONS and pos not in seen:
            seen.append(pos)
    return seen


def position_inflation(
    purchases: Sequence[DraftedPurchase],
    projections: Sequence[ProjectionEntry],
) -> Dict[str, float]:
    """Inflation rate per roster position.

    Positions come from the purchase, falling back to the player's
    projection when the purchase lists no recognised position. Multi-position players split both their price and their
    projected value evenly across their eligible positions. Purchases with
    no recognised position are skipped.

    Returns:
        Dict with every position in ``POSITIONS`` present.
    """
    actuals = {pos: 0.0 for pos in POSITIONS}
    projected = {pos: 0.0 for pos in POSITIONS}

    if not purchases:
        return dict(actuals)

    by_player = _projection_index(projections)
    _warn_on_negative_prices(purchases)
    _warn_on_negative_projections(by_player)

    for purchase in purchases:
        projection = by_player.get(purchase.player_id)
        valid = _valid_positions(purchase.positions)
        if not valid and projection is not None:
            valid = _valid_positions(projection.positions)

        if not valid:
            logger.debug(
                "Skipping purchase %s: no recognised position", purchase.player_id
            )
            continue

        share = len(valid)
        projected_value = projection.value if projection is not None else 0.0
        for pos in valid:
            actuals[pos] += purchase.actual_price / share
            projected[pos] += projected_value / share

    unprojected = [
        pos for pos in POSITIONS if projected[pos] <= 0 and actuals[pos] > 0
    ]
    if unprojected:
        logger.warning(
            "Actual spending but no projected value at %s; "
            "projection data may be missing",
            ", ".join(unprojected),
        )

    return {pos: _rate(actuals[pos], projected[pos]) for pos in POSITIONS}
