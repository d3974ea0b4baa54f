from src.inflation_engine.adjusted_values import adjusted_value, adjusted_values
from src.inflation_engine.budget import budget_depletion
from src.inflation_engine.engine import InflationEngine
from src.inflation_engine.inflation import (
    overall_inflation,
    position_inflation,
    tier_inflation,
)
from src.inflation_engine.instrumentation import (
    HttpPerformanceSink,
    LoggingPerformanceSink,
    PerformanceLogEntry,
    measure_performance,
    with_performance_logging,
)
from src.inflation_engine.models import (
    BudgetContext,
    BudgetDepletionResult,
    DraftedPurchase,
    InflationHistoryEntry,
    InflationState,
    ProjectionEntry,
    TrendDirection,
    TrendResult,
    ValueTier,
)
from src.inflation_engine.percentile import percentile
from src.inflation_engine.tiers import classify_pool, classify_tier, tier_breakdown
from src.inflation_engine.trends import format_trend_tooltip, inflation_trend

__all__ = [
    "BudgetContext",
    "BudgetDepletionResult",
    "DraftedPurchase",
    "HttpPerformanceSink",
    "InflationEngine",
    "InflationHistoryEntry",
    "InflationState",
    "LoggingPerformanceSink",
    "PerformanceLogEntry",
    "ProjectionEntry",
    "TrendDirection",
    "TrendResult",
    "ValueTier",
    "adjusted_value",
    "adjusted_values",
    "budget_depletion",
    "classify_pool",
    "classify_tier",
    "format_trend_tooltip",
    "inflation_trend",
    "measure_performance",
    "overall_inflation",
    "percentile",
    "position_inflation",
    "tier_breakdown",
    "tier_inflation",
    "with_performance_logging",
]
