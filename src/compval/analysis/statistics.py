# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Statistics Engine - Comparable Value and Cap Rate Aggregates

Stateless aggregation over a set of adjusted comparables:
- Value statistics (mean, median, min, max) over adjusted values
- Cap rate statistics with the +/-2 sigma acceptance band used to flag an
  outlier subject cap rate

Standard deviations use the population formula (divide by N), matching the
banding convention of comparable cap rate analysis. Raw entries are
normalized with `coerce_number`; missing entries are dropped, unusable ones
are dropped and reported. An empty input yields all-zero statistics.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from ..comparables import AdjustedComparable
from ..core.primitives import (
    CapRateSettings,
    ComparableId,
    Diagnostic,
    Model,
    PositiveFloat,
    PositiveInt,
    coerce_number,
    require_sequence,
)

logger = logging.getLogger(__name__)


class ValueStatistics(Model):
    """Aggregate statistics over adjusted comparable values."""

    mean: float = 0.0
    median: float = 0.0
    min: float = 0.0
    max: float = 0.0
    std_dev: float = 0.0
    count: PositiveInt = 0
    diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def range(self) -> float:
        return self.max - self.min

    @property
    def coefficient_of_variation(self) -> float:
        return self.std_dev / self.mean if self.mean > 0 else 0.0


class CapRateStatistics(Model):
    """
    Comparable cap rate dispersion and the acceptance band around it.

    All rates are in percent units.

    Attributes:
        mean: Mean adjusted cap rate
        std_dev: Population standard deviation
        lower_bound: mean - band_sigma * std_dev
        upper_bound: mean + band_sigma * std_dev
        within_range: Whether the subject cap rate falls inside the band
            (True when there is no subject cap rate or no comparables)
        count: Number of comparables with a usable cap rate
        band_sigma: Width of the band in standard deviations
        subject_cap_rate: The subject cap rate tested, if any
        diagnostics: Entries dropped because they were not numeric
    """

    mean: float = 0.0
    std_dev: float = 0.0
    lower_bound: float = 0.0
    upper_bound: float = 0.0
    within_range: bool = True
    count: PositiveInt = 0
    band_sigma: PositiveFloat = 2.0
    subject_cap_rate: Optional[float] = None
    diagnostics: Tuple[Diagnostic, ...] = ()


def _clean_series(
    values: Iterable[Tuple[Any, Optional[ComparableId]]],
    field_name: str,
) -> Tuple[pd.Series, List[Diagnostic]]:
    """
    Numeric series of the usable entries.

    Every entry goes through `coerce_number`, so "$2,400,000" counts as a
    value. Missing entries are dropped silently; non-numeric and non-finite
    entries are dropped and reported.
    """
    numbers: List[float] = []
    diagnostics: List[Diagnostic] = []
    for value, comparable_id in values:
        number, issue = coerce_number(value, field_name, comparable_id=comparable_id)
        if issue is not None:
            diagnostics.append(issue)
        if number is not None:
            numbers.append(number)
    return pd.Series(numbers, dtype="float64"), diagnostics


def compute_value_stats(adjusted_values: Sequence[Any]) -> ValueStatistics:
    """
    Mean, median, min and max of adjusted values.

    Args:
        adjusted_values: Adjusted values (numbers or numeric strings), or
            AdjustedComparable objects whose `adjusted_value` is used

    Returns:
        ValueStatistics; all fields 0 when no usable values remain. Entries
        that could not be read as numbers are listed in `diagnostics`.

    Raises:
        TypeError: If adjusted_values is not a list-like sequence
    """
    adjusted_values = require_sequence(adjusted_values, "adjusted_values")
    series, diagnostics = _clean_series(
        (
            (v.adjusted_value, v.id) if isinstance(v, AdjustedComparable) else (v, None)
            for v in adjusted_values
        ),
        "adjusted_value",
    )

    if series.empty:
        return ValueStatistics(diagnostics=tuple(diagnostics))

    # pandas median averages the two middle values for even-length input
    return ValueStatistics(
        mean=float(series.mean()),
        median=float(series.median()),
        min=float(series.min()),
        max=float(series.max()),
        std_dev=float(series.std(ddof=0)),
        count=len(series),
        diagnostics=tuple(diagnostics),
    )


def compute_cap_rate_stats(
    comparables: Sequence[Any],
    subject_cap_rate: Any = None,
    settings: Optional[CapRateSettings] = None,
) -> CapRateStatistics:
    """
    Cap rate dispersion across comparables and the subject's band position.

    Args:
        comparables: AdjustedComparable objects (their adjusted cap rate is
            used) or plain cap rates in percent. Entries without a usable cap
            rate are excluded rather than treated as 0.
        subject_cap_rate: Proposed subject cap rate in percent; None, NaN or
            non-numeric means "not proposed" and is always within range
        settings: Cap rate rules (band width)

    Returns:
        CapRateStatistics; all numeric fields 0 and within_range True when
        no comparable has a usable cap rate

    Raises:
        TypeError: If comparables is not a list-like sequence

    Example:
        ```python
        stats = compute_cap_rate_stats([4.0, 5.0, 6.0], subject_cap_rate=7.0)
        stats.mean          # 5.0
        stats.upper_bound   # ~6.633
        stats.within_range  # False
        ```
    """
    comparables = require_sequence(comparables, "comparables")
    settings = settings or CapRateSettings()
    subject, subject_issue = coerce_number(subject_cap_rate, "subject_cap_rate")

    series, diagnostics = _clean_series(
        (
            (c.adjusted_cap_rate, c.id) if isinstance(c, AdjustedComparable) else (c, None)
            for c in comparables
        ),
        "cap_rate",
    )
    if subject_issue is not None:
        diagnostics.append(subject_issue)

    if series.empty:
        return CapRateStatistics(
            band_sigma=settings.band_sigma,
            subject_cap_rate=subject,
            diagnostics=tuple(diagnostics),
        )

    mean = float(series.mean())
    std_dev = float(series.std(ddof=0))
    lower_bound = mean - settings.band_sigma * std_dev
    upper_bound = mean + settings.band_sigma * std_dev
    within_range = True if subject is None else lower_bound <= subject <= upper_bound

    logger.debug(
        f"Cap rate band over {len(series)} comparables: "
        f"{lower_bound:.3f}% - {upper_bound:.3f}% (mean {mean:.3f}%, sd {std_dev:.3f}%)"
    )

    return CapRateStatistics(
        mean=mean,
        std_dev=std_dev,
        lower_bound=lower_bound,
        upper_bound=upper_bound,
        within_range=within_range,
        count=len(series),
        band_sigma=settings.band_sigma,
        subject_cap_rate=subject,
        diagnostics=tuple(diagnostics),
    )
