"""Running-sum and ratio primitives shared by the summary and EVM calculators.

Every helper returns ``0`` or ``None`` on a zero denominator instead of
raising or producing NaN/Infinity.
"""

from __future__ import annotations

from itertools import accumulate
from typing import Iterable, Optional, Sequence


def cumulative(values: Iterable[float]) -> list[float]:
    """Running sum: ``[1, 2, 3]`` → ``[1, 3, 6]``."""
    return list(accumulate(values))


def value_at(values: Sequence[float], index: int) -> float:
    """``values[index]`` or ``0`` when the index is out of range."""
    if 0 <= index < len(values):
        return values[index]
    return 0.0


def linear_forecast(current: float, elapsed: int, total: int) -> float:
    """Extrapolate ``current`` to ``total`` periods at the rate seen so far."""
    if current == 0:
        return 0.0
    if elapsed <= 0:
        return current
    remaining = total - elapsed
    return current + (current / elapsed) * remaining


def safe_ratio(part: float, whole: float) -> float:
    """Percentage of ``part`` in ``whole``; 0 when ``whole`` is 0."""
    if not whole:
        return 0.0
    return part / whole * 100


def safe_divide(numerator: float, denominator: Optional[float]) -> Optional[float]:
    if not denominator:
        return None
    return numerator / denominator
