# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Read-only breakdowns of a valuation for report rendering.

Both breakdowns are projections of data already held by the adjusted
comparables and the approach indications; nothing here is stored
independently.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence

from ..comparables import AdjustedComparable
from ..core.primitives import ApproachEnum, Model, PositiveInt, require_sequence
from .base.valuation import ApproachIndication


class MethodBreakdown(Model):
    """One approach's share of the final estimate."""

    approach: ApproachEnum
    estimate: Optional[float] = None
    weight: float = 0.0
    contribution: float = 0.0
    available: bool = False
    reason: str = ""

    @classmethod
    def from_indication(cls, indication: ApproachIndication, weight: float) -> "MethodBreakdown":
        contribution = indication.value * weight if indication.available else 0.0
        return cls(
            approach=indication.approach,
            estimate=indication.value,
            weight=weight,
            contribution=contribution,
            available=indication.available,
            reason=indication.reason,
        )


class AdjustmentBreakdown(Model):
    """
    One adjustment factor aggregated across the comparable set.

    Attributes:
        factor: Factor name
        total_percent: Sum of the factor across comparables
        average_percent: Mean of the factor across comparables
        min_percent: Smallest value applied
        max_percent: Largest value applied
        dollar_impact: Sum of sale_price * factor / 100 across comparables
        nonzero_count: Comparables with a non-zero value for the factor
    """

    factor: str
    total_percent: float = 0.0
    average_percent: float = 0.0
    min_percent: float = 0.0
    max_percent: float = 0.0
    dollar_impact: float = 0.0
    nonzero_count: PositiveInt = 0


def _factor_names(
    adjusted_comparables: Sequence[AdjustedComparable], factors: Optional[Iterable[str]]
) -> List[str]:
    names: List[str] = list(factors or [])
    for adjusted in adjusted_comparables:
        for name in adjusted.applied_adjustments:
            if name not in names:
                names.append(name)
    return names


def summarize_adjustments(
    adjusted_comparables: Sequence[AdjustedComparable],
    factors: Optional[Iterable[str]] = None,
) -> List[AdjustmentBreakdown]:
    """
    Per-factor adjustment summary across the comparable set.

    Args:
        adjusted_comparables: Output of `compute_adjustment` per comparable
        factors: Factor order for the summary; factors applied but not listed
            are appended in first-seen order

    Returns:
        One AdjustmentBreakdown per factor, all zeros for an empty set

    Raises:
        TypeError: If adjusted_comparables is not a sequence of AdjustedComparable
    """
    adjusted_comparables = require_sequence(adjusted_comparables, "adjusted_comparables")
    for adjusted in adjusted_comparables:
        if not isinstance(adjusted, AdjustedComparable):
            raise TypeError(
                f"adjusted_comparables must contain AdjustedComparable, got {type(adjusted).__name__}"
            )

    summary = []
    for name in _factor_names(adjusted_comparables, factors):
        values = [a.applied_adjustments.get(name, 0.0) for a in adjusted_comparables]
        if not values:
            summary.append(AdjustmentBreakdown(factor=name))
            continue
        summary.append(
            AdjustmentBreakdown(
                factor=name,
                total_percent=math.fsum(values),
                average_percent=math.fsum(values) / len(values),
                min_percent=min(values),
                max_percent=max(values),
                dollar_impact=math.fsum(a.dollar_adjustment(name) for a in adjusted_comparables),
                nonzero_count=sum(1 for v in values if v != 0),
            )
        )
    return summary
