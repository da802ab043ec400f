# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Sales Comparison Approach - Comparable Sales Indication

Indicates value from the statistics of adjusted comparable values. The mean
is the canonical indication; the median can be selected instead.
"""

from __future__ import annotations

from typing import ClassVar, Literal

from pydantic import Field, model_validator

from ..analysis import ValueStatistics
from ..core.primitives import ApproachEnum, FloatBetween0And1, clamp
from .base.valuation import ApproachIndication, BaseApproach


class SalesComparisonApproach(BaseApproach):
    """
    Sales comparison approach over adjusted comparable values.

    Attributes:
        basis: Statistic used as the indicated value ("mean" or "median")
        minimum_range: Narrowest half-width of the value range (fraction)
        maximum_range: Widest half-width of the value range (fraction)

    The value range is the indicated value +/- the coefficient of variation
    of adjusted values, clamped to [minimum_range, maximum_range].

    Example:
        ```python
        stats = compute_value_stats([2_400_000, 2_500_000, 2_300_000])
        indication = SalesComparisonApproach().indicate(stats)
        indication.value  # 2_400_000.0
        indication.low    # 2_280_000.0 (5% floor)
        ```
    """

    approach: ClassVar[ApproachEnum] = ApproachEnum.SALES_COMPARISON

    basis: Literal["mean", "median"] = Field(
        default="mean", description="Adjusted-value statistic used as the indication"
    )
    minimum_range: FloatBetween0And1 = 0.05
    maximum_range: FloatBetween0And1 = 0.15

    @model_validator(mode="after")
    def validate_range(self) -> "SalesComparisonApproach":
        if self.minimum_range > self.maximum_range:
            raise ValueError(
                f"minimum_range ({self.minimum_range}) must not exceed "
                f"maximum_range ({self.maximum_range})"
            )
        return self

    def indicate(self, value_stats: ValueStatistics) -> ApproachIndication:
        """
        Indicated value from adjusted comparable statistics.

        Args:
            value_stats: Statistics over adjusted comparable values

        Returns:
            ApproachIndication; unavailable when there are no comparables or
            the indicated value is not positive

        Raises:
            TypeError: If value_stats is not a ValueStatistics
        """
        if not isinstance(value_stats, ValueStatistics):
            raise TypeError(
                f"value_stats must be ValueStatistics, got {type(value_stats).__name__}"
            )
        if value_stats.count == 0:
            return self._unavailable("No comparables with a usable adjusted value")

        value = value_stats.mean if self.basis == "mean" else value_stats.median
        if value <= 0:
            return self._unavailable(
                f"Comparable {self.basis} adjusted value is {value:,.0f}; no usable indication"
            )

        range_percent = clamp(
            value_stats.coefficient_of_variation, self.minimum_range, self.maximum_range
        )
        return ApproachIndication(
            approach=self.approach,
            value=value,
            available=True,
            low=value * (1 - range_percent),
            high=value * (1 + range_percent),
        )
