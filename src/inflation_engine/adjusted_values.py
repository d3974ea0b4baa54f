"""Inflation-adjusted values for players still on the board.

    adjusted = projected * (1 + position_rate) * (1 + tier_rate) * depletion

Rounded to whole dollars and never negative.
"""

import math
from typing import Dict, Mapping, Optional, Sequence

from src.inflation_engine.config import POSITIONS
from src.inflation_engine.models import ProjectionEntry, ValueTier


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _position_rate(
    positions: Sequence[str],
    position_rates: Mapping[str, float],
) -> float:
    for pos in positions:
        if pos in POSITIONS:
            return position_rates.get(pos, 0.0)
    return 0.0


def adjusted_value(
    player: ProjectionEntry,
    position_rates: Mapping[str, float],
    tier_rates: Mapping[ValueTier, float],
    depletion_multiplier: Optional[float] = 1.0,
) -> int:
    """Adjusted value for a single player.

    Uses the first recognised position; players without one get no position
    adjustment. Untagged players take the MID tier rate.
    """
    multiplier = 1.0 if depletion_multiplier is None else depletion_multiplier
    position_rate = _position_rate(player.positions, position_rates)
    tier = ValueTier.parse(player.tier) or ValueTier.MID
    tier_rate = tier_rates.get(tier, 0.0)

    raw = player.value * (1 + position_rate) * (1 + tier_rate) * multiplier
    return max(0, _round_half_up(raw))


def adjusted_values(
    players: Sequence[ProjectionEntry],
    position_rates: Mapping[str, float],
    tier_rates: Mapping[ValueTier, float],
    depletion_multiplier: Optional[float] = 1.0,
) -> Dict[str, int]:
    """Map each player's id to their adjusted value."""
    return {
        player.player_id: adjusted_value(
            player, position_rates, tier_rates, depletion_multiplier
        )
        for player in players
    }
