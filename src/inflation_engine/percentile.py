"""Percentile ranking against a reference population.

Percentile here is "how much of the pool sits strictly above this value",
scaled to 0-100, so 0 is the top rank. Ties never push a value down.
"""

from bisect import bisect_right
from typing import Iterable, Sequence


def percentile_in_sorted(value: float, ascending_values: Sequence[float]) -> float:
    """Percentile of *value* within an already ascending-sorted population.

    O(log n): lets callers that rank many values sort the pool only once.
    """
    total = len(ascending_values)
    if total == 0:
        return 0.0
    count_above = total - bisect_right(ascending_values, value)
    return count_above / total * 100.0


def percentile(value: float, reference_values: Iterable[float]) -> float:
    """Return the percentage of *reference_values* strictly greater than *value*.

    An empty population yields 0.
    """
    return percentile_in_sorted(value, sorted(reference_values))
