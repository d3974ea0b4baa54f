"""Value-tier classification.

A tier is never a stored property of a player: it is derived from where the
player's projected value ranks in the pool passed alongside it. Pre-assigned
tags on the input records take precedence over the computed tier, in the
order purchase tag > projection tag > percentile.
"""

import logging
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from src.inflation_engine.config import (
    ELITE_PERCENTILE_THRESHOLD,
    MID_PERCENTILE_THRESHOLD,
)
from src.inflation_engine.models import (
    VALUE_TIERS,
    DraftedPurchase,
    ProjectionEntry,
    ValueTier,
)
from src.inflation_engine.percentile import percentile_in_sorted

logger = logging.getLogger(__name__)

POOL_COLUMNS = ["player_id", "projected_value", "percentile", "tier"]


def tier_for_percentile(pct: float) -> ValueTier:
    """Map a percentile (0 = top) to its tier using strict thresholds."""
    if pct < ELITE_PERCENTILE_THRESHOLD:
        return ValueTier.ELITE
    if pct < MID_PERCENTILE_THRESHOLD:
        return ValueTier.MID
    return ValueTier.LOWER


def sorted_pool_values(projections: Iterable[ProjectionEntry]) -> List[float]:
    """Ascending projected values of *projections*, ``None`` counted as 0."""
    return sorted(p.value for p in projections)


def classify_tier(
    projected_value: float,
    reference_pool: Sequence[ProjectionEntry],
) -> ValueTier:
    """Classify *projected_value* against the projected values of *reference_pool*.

    An empty pool is classified LOWER and a single-member pool always
    ELITE, whatever the value.
    """
    return _tier_in_sorted(projected_value, sorted_pool_values(reference_pool))


def _tier_in_sorted(value: float, ascending_values: Sequence[float]) -> ValueTier:
    if not ascending_values:
        return ValueTier.LOWER
    if len(ascending_values) == 1:
        return ValueTier.ELITE
    return tier_for_percentile(percentile_in_sorted(value, ascending_values))


def resolve_tier(
    purchase: Optional[DraftedPurchase],
    projection: Optional[ProjectionEntry],
    ascending_values: Sequence[float],
) -> ValueTier:
    """Pick a tier using purchase tag > projection tag > computed percentile.

    *ascending_values* is the sorted reference pool, see
    :func:`sorted_pool_values`.
    """
    if purchase is not None:
        tier = ValueTier.parse(purchase.tier)
        if tier is not None:
            return tier
    if projection is not None:
        tier = ValueTier.parse(projection.tier)
        if tier is not None:
            return tier

    value = projection.value if projection is not None else 0.0
    return _tier_in_sorted(value, ascending_values)


def classify_pool(projections: Sequence[ProjectionEntry]) -> pd.DataFrame:
    """Classify every projection against the pool it belongs to.

    Returns a DataFrame with columns ``player_id``, ``projected_value``,
    ``percentile`` and ``tier``, in input order. Projection-level tier tags
    override the computed tier; ``percentile`` always reflects the pool rank.
    """
    if not projections:
        return pd.DataFrame(columns=POOL_COLUMNS)

    df = pd.DataFrame({
        "player_id": [p.player_id for p in projections],
        "projected_value": [float(p.value) for p in projections],
    })

    # rank(method="min") puts ties at the lowest rank, so rank - 1 is the
    # number of players strictly above.
    count_above = df["projected_value"].rank(method="min", ascending=False) - 1
    df["percentile"] = count_above / len(df) * 100.0

    overrides = [ValueTier.parse(p.tier) for p in projections]
    tiers = [
        override if override is not None else tier_for_percentile(pct)
        for override, pct in zip(overrides, df["percentile"])
    ]
    # object dtype keeps ValueTier members rather than plain strings
    df["tier"] = pd.Series(tiers, index=df.index, dtype=object)

    logger.debug(
        "Classified %d players (%d tier overrides)",
        len(df), sum(o is not None for o in overrides),
    )
    return df


def tier_breakdown(projections: Sequence[ProjectionEntry]) -> pd.DataFrame:
    """Per-tier player counts and projected-value totals.

    Indexed by :class:`ValueTier` with every tier present, columns
    ``players`` and ``projected_total``.
    """
    pool = classify_pool(projections)
    if pool.empty:
        return pd.DataFrame(
            {"players": 0, "projected_total": 0.0},
            index=pd.Index(list(VALUE_TIERS), name="tier", dtype=object),
        )

    summary = pool.groupby("tier").agg(
        players=("player_id", "count"),
        projected_total=("projected_value", "sum"),
    )
    summary = summary.reindex(pd.Index(list(VALUE_TIERS), dtype=object), fill_value=0)
    summary.index.name = "tier"
    return summary
