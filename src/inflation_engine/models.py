"""Data models for the inflation engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class ValueTier(str, Enum):
    """Percentile bucket of a player's projected value within a pool."""

    ELITE = "ELITE"
    MID = "MID"
    LOWER = "LOWER"

    @classmethod
    def parse(cls, value) -> Optional["ValueTier"]:
        """Coerce a tier tag from an upstream feed, or ``None`` if unknown."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                return None
        return None


VALUE_TIERS = (ValueTier.ELITE, ValueTier.MID, ValueTier.LOWER)


class TrendDirection(str, Enum):
    HEATING = "heating"
    COOLING = "cooling"
    STABLE = "stable"


@dataclass(frozen=True)
class DraftedPurchase:
    """A completed auction purchase."""

    player_id: str
    actual_price: float
    tier: Optional[ValueTier] = None
    positions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProjectionEntry:
    """A pre-draft valuation. ``projected_value=None`` counts as 0."""

    player_id: str
    projected_value: Optional[float]
    tier: Optional[ValueTier] = None
    positions: Tuple[str, ...] = ()

    @property
    def value(self) -> float:
        return self.projected_value if self.projected_value is not None else 0.0


@dataclass(frozen=True)
class BudgetDepletionResult:
    """Depletion multiplier plus the accounting figures behind it."""

    multiplier: float
    spent: float
    remaining: float
    slots_remaining: int


@dataclass(frozen=True)
class BudgetContext:
    """League-wide budget and roster-slot counters for one recalculation."""

    total_budget: float
    spent: float
    slots_remaining: int
    total_slots: int


@dataclass
class InflationState:
    """Every inflation signal produced by a single recalculation."""

    overall_rate: float
    position_rates: Dict[str, float]
    tier_rates: Dict[ValueTier, float]
    budget_depleted: float  # Fraction of total budget spent, clamped to 0.0-1.0
    budget_depletion: Optional[BudgetDepletionResult]
    players_remaining: int
    adjusted_values: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class InflationHistoryEntry:
    pick_number: int
    rate: float  # Overall inflation, in percent
    timestamp: float = 0.0


@dataclass(frozen=True)
class TrendResult:
    direction: TrendDirection
    change: float       # Percentage-point change over the window
    pick_window: int    # Picks actually spanned
