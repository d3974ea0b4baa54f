"""Inflation trend over a recent window of picks."""

from typing import Sequence

from src.inflation_engine.config import TREND_THRESHOLD, TREND_WINDOW_SIZE
from src.inflation_engine.models import (
    InflationHistoryEntry,
    TrendDirection,
    TrendResult,
)


def inflation_trend(
    history: Sequence[InflationHistoryEntry],
    current_pick: int,
    window_size: int = TREND_WINDOW_SIZE,
    threshold: float = TREND_THRESHOLD,
) -> TrendResult:
    """Compare current inflation with inflation *window_size* picks ago.

    *history* is ordered by pick with rates in percent. If there is no entry
    at exactly ``current_pick - window_size`` the closest earlier entry is
    used, and failing that the first entry.

    Raises:
        ValueError: If *window_size* is not positive.
    """
    if window_size <= 0:
        raise ValueError(f"window_size must be positive, got {window_size}")

    if len(history) < 2 or current_pick < window_size:
        return TrendResult(TrendDirection.STABLE, 0.0, current_pick)

    current_rate = history[-1].rate
    target_pick = current_pick - window_size

    previous = None
    for entry in history:
        if entry.pick_number == target_pick:
            previous = entry
            break
    if previous is None:
        earlier = [e for e in history if e.pick_number <= target_pick]
        previous = earlier[-1] if earlier else history[0]

    change = current_rate - previous.rate
    pick_window = current_pick - previous.pick_number

    if change >= threshold:
        direction = TrendDirection.HEATING
    elif change <= -threshold:
        direction = TrendDirection.COOLING
    else:
        direction = TrendDirection.STABLE

    return TrendResult(direction, change, pick_window)


def format_trend_tooltip(trend: TrendResult, window_size: int = TREND_WINDOW_SIZE) -> str:
    if trend.pick_window < window_size:
        return "Not enough draft history to calculate trend"

    change_text = f"{abs(trend.change):.1f}"
    if trend.direction is TrendDirection.HEATING:
        return (
            f"Inflation has increased {change_text}% "
            f"in the last {trend.pick_window} picks"
        )
    if trend.direction is TrendDirection.COOLING:
        return (
            f"Inflation has decreased {change_text}% "
            f"in the last {trend.pick_window} picks"
        )
    return (
        f"Inflation has changed by {change_text}% "
        f"in the last {trend.pick_window} picks (stable)"
    )
