# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Reconciliation helpers: spread between approach indications, the value range
around the reconciled estimate and rounding to customary appraisal increments.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from ..core.primitives import Model, SpreadRatingEnum, require_sequence

# (threshold, increment): values at or above threshold round to increment
_ROUNDING_INCREMENTS = (
    (10_000_000, 100_000),
    (1_000_000, 10_000),
    (100_000, 1_000),
    (10_000, 500),
)
_BASE_INCREMENT = 100

_SPREAD_RATINGS = (
    (0.10, SpreadRatingEnum.EXCELLENT),
    (0.20, SpreadRatingEnum.GOOD),
    (0.30, SpreadRatingEnum.ACCEPTABLE),
)


def appraisal_increment(value: float) -> int:
    """Rounding increment customary for a value of this size."""
    for threshold, increment in _ROUNDING_INCREMENTS:
        if value >= threshold:
            return increment
    return _BASE_INCREMENT


def round_to_appraisal_increment(value: Optional[float]) -> Optional[float]:
    """
    Round a value estimate to the customary reporting increment.

    $10M and above round to $100k, $1M to $10k, $100k to $1k, $10k to $500,
    anything smaller to $100. Halves round up.

    Example:
        ```python
        round_to_appraisal_increment(2_319_403.0)  # 2_320_000.0
        round_to_appraisal_increment(48_250.0)     # 48_500.0
        ```
    """
    if value is None:
        return None
    increment = appraisal_increment(value)
    return float(math.floor(value / increment + 0.5) * increment)


def rate_spread(spread: float) -> SpreadRatingEnum:
    for limit, rating in _SPREAD_RATINGS:
        if spread <= limit:
            return rating
    return SpreadRatingEnum.POOR


class SpreadAnalysis(Model):
    """
    Agreement between the available approach indications.

    Attributes:
        values: Indications compared
        mean: Mean of the indications
        spread: (max - min) / mean; 0 with fewer than two indications
        coefficient_of_variation: Population std dev / mean
        rating: Qualitative band for the spread
        acceptable: spread <= acceptable_spread
    """

    values: List[float] = []
    mean: float = 0.0
    spread: float = 0.0
    coefficient_of_variation: float = 0.0
    rating: SpreadRatingEnum = SpreadRatingEnum.EXCELLENT
    acceptable: bool = True


def analyze_approach_spread(
    values: Sequence[Optional[float]],
    acceptable_spread: float = 0.25,
) -> SpreadAnalysis:
    """
    Spread between approach indications.

    Missing indications are ignored. Fewer than two remaining values cannot
    disagree, so the result is an excellent, acceptable zero spread.

    Raises:
        TypeError: If values is not a list-like sequence
    """
    values = [v for v in require_sequence(values, "values") if v is not None]
    if len(values) < 2:
        return SpreadAnalysis(values=values)

    mean = math.fsum(values) / len(values)
    if mean <= 0:
        return SpreadAnalysis(values=values, mean=mean)

    std_dev = math.sqrt(math.fsum((v - mean) ** 2 for v in values) / len(values))
    spread = (max(values) - min(values)) / mean
    return SpreadAnalysis(
        values=values,
        mean=mean,
        spread=spread,
        coefficient_of_variation=std_dev / mean,
        rating=rate_spread(spread),
        acceptable=spread <= acceptable_spread,
    )


# Final value range: base width, widened at each spread threshold, capped
_RANGE_BASE = 0.05
_RANGE_STEP = 0.05
_RANGE_SPREAD_THRESHOLDS = (0.20, 0.30)
_RANGE_CAP = 0.20


class ValueRange(Model):
    """Low and high bracket around the reconciled value."""

    low: float
    high: float
    percent: float


def final_value_range_percent(spread: float) -> float:
    """
    Half-width of the reconciled value range as a fraction.

    5% base, plus 5% for each spread threshold (20%, 30%) exceeded, at most
    20%.
    """
    width = _RANGE_BASE + _RANGE_STEP * sum(1 for t in _RANGE_SPREAD_THRESHOLDS if spread > t)
    return min(_RANGE_CAP, width)


def final_value_range(final_estimate: Optional[float], spread: float) -> Optional[ValueRange]:
    """
    Bracket the reconciled value by the approach spread.

    Example:
        ```python
        final_value_range(2_000_000, spread=0.12)  # 1_900_000 - 2_100_000 (5%)
        final_value_range(2_000_000, spread=0.26)  # 1_800_000 - 2_200_000 (10%)
        ```
    """
    if final_estimate is None:
        return None
    percent = final_value_range_percent(spread)
    return ValueRange(
        low=final_estimate * (1 - percent),
        high=final_estimate * (1 + percent),
        percent=percent,
    )
