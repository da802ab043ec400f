# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Valuation Blender - Reconciliation of Approach Indications

Combines the sales comparison indication (from adjusted comparable
statistics) with the income approach indication (NOI / cap rate) into a
weighted final estimate:

    final = sum(weight_i * estimate_i) over available approaches

Weights are caller configuration, normalized to sum to 1 over the approaches
that produced a value. A single available approach carries 100% weight; with
none available the final estimate is None and the reason is reported rather
than raised.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Dict, List, Optional, Sequence, Tuple, Union

from pydantic import Field

from ..analysis import ValueStatistics
from ..comparables import AdjustedComparable
from ..core.primitives import (
    ApproachEnum,
    BlendSettings,
    Diagnostic,
    EngineSettings,
    Model,
    PositiveFloat,
    SeverityEnum,
    coerce_number,
    first_present,
)
from .base.valuation import ApproachIndication
from .breakdown import AdjustmentBreakdown, MethodBreakdown, summarize_adjustments
from .direct_cap import DirectCapApproach, IncomeInputs
from .reconciliation import (
    SpreadAnalysis,
    ValueRange,
    analyze_approach_spread,
    final_value_range,
    round_to_appraisal_increment,
)
from .sales_comp import SalesComparisonApproach

logger = logging.getLogger(__name__)

_WEIGHT_KEYS = {
    "sales_comparison": ("sales_comparison", "salesComparison"),
    "income_approach": ("income_approach", "incomeApproach"),
}

# Relative (sales comparison, income) weights by subject property type
_PROPERTY_TYPE_WEIGHTS = {
    "office": (0.5, 0.4),
    "retail": (0.4, 0.5),
    "industrial": (0.6, 0.3),
    "warehouse": (0.6, 0.3),
    "multifamily": (0.3, 0.6),
    "mixed use": (0.4, 0.5),
}
_DEFAULT_PROPERTY_TYPE_WEIGHTS = (0.5, 0.4)


class BlendWeights(Model):
    """
    Relative weights of the approaches.

    Any two non-negative numbers; they are normalized before blending, so
    (1, 3) and (0.25, 0.75) are equivalent.

    Example:
        ```python
        # Favor the income approach for an investment property
        weights = BlendWeights(sales_comparison=0.3, income_approach=0.7)
        ```
    """

    sales_comparison: PositiveFloat = 0.5
    income_approach: PositiveFloat = 0.5

    @classmethod
    def from_settings(cls, settings: BlendSettings) -> "BlendWeights":
        return cls(
            sales_comparison=settings.sales_comparison_weight,
            income_approach=settings.income_approach_weight,
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> "BlendWeights":
        """
        Build weights from a snake_case or camelCase mapping. An approach
        missing from the mapping gets weight 0.

        Raises:
            TypeError: If mapping is not a mapping
            ValueError: If a weight is non-numeric or negative
        """
        if not isinstance(mapping, Mapping):
            raise TypeError(f"weights must be a mapping, got {type(mapping).__name__}")
        values = {}
        for field, keys in _WEIGHT_KEYS.items():
            raw = first_present(mapping, *keys)
            if raw is None:
                values[field] = 0.0
                continue
            value, issue = coerce_number(raw, f"weights.{field}")
            if issue is not None:
                raise ValueError(issue.message)
            values[field] = value
        return cls(**values)

    @classmethod
    def for_property_type(cls, property_type: Optional[str]) -> "BlendWeights":
        """
        Customary weights for a subject property type.

        Matching ignores case, hyphens and underscores ("Mixed-Use" is
        "mixed use"). Unknown or missing types get 0.5 / 0.4.

        Example:
            ```python
            BlendWeights.for_property_type("Multifamily")  # 0.3 / 0.6
            ```
        """
        key = (property_type or "").strip().lower().replace("-", " ").replace("_", " ")
        sales, income = _PROPERTY_TYPE_WEIGHTS.get(key, _DEFAULT_PROPERTY_TYPE_WEIGHTS)
        return cls(sales_comparison=sales, income_approach=income)

    def get(self, approach: ApproachEnum) -> float:
        if approach == ApproachEnum.SALES_COMPARISON:
            return self.sales_comparison
        return self.income_approach

    def normalized(self) -> "BlendWeights":
        """Weights scaled to sum to 1; equal weights when both are 0."""
        total = self.sales_comparison + self.income_approach
        if total == 0:
            return BlendWeights(sales_comparison=0.5, income_approach=0.5)
        return BlendWeights(
            sales_comparison=self.sales_comparison / total,
            income_approach=self.income_approach / total,
        )


class ValuationEstimate(Model):
    """
    Reconciled value estimate with its supporting breakdowns.

    Attributes:
        sales_comparison_estimate: Sales comparison indication, None if unavailable
        sales_comparison_low: Low end of the sales comparison range
        sales_comparison_high: High end of the sales comparison range
        income_approach_estimate: Income approach indication, None if unavailable
        final_estimate: Weighted blend of the available indications, None
            when no approach produced a value
        rounded_final_estimate: Final estimate at the customary reporting
            increment (equal to final_estimate when rounding is disabled)
        value_range: Low/high bracket around the final estimate, widened as
            the approaches disagree; None without a final estimate
        weights: Effective weights applied (sum to 1 over available approaches)
        method_breakdown: One row per approach
        adjustment_breakdown: One row per adjustment factor
        spread: Agreement between the available indications
        value_per_sf: Final estimate per subject square foot, when known
        diagnostics: Findings raised while blending
        reason: Why no final estimate could be produced (empty otherwise)
    """

    sales_comparison_estimate: Optional[float] = None
    sales_comparison_low: Optional[float] = None
    sales_comparison_high: Optional[float] = None
    income_approach_estimate: Optional[float] = None
    final_estimate: Optional[float] = None
    rounded_final_estimate: Optional[float] = None
    value_range: Optional[ValueRange] = None
    weights: BlendWeights = Field(default_factory=BlendWeights)
    method_breakdown: List[MethodBreakdown] = Field(default_factory=list)
    adjustment_breakdown: List[AdjustmentBreakdown] = Field(default_factory=list)
    spread: SpreadAnalysis = Field(default_factory=SpreadAnalysis)
    value_per_sf: Optional[float] = None
    diagnostics: Tuple[Diagnostic, ...] = ()
    reason: str = ""

    @property
    def is_available(self) -> bool:
        return self.final_estimate is not None


def _effective_weights(
    weights: BlendWeights,
    indications: Sequence[ApproachIndication],
    diagnostics: List[Diagnostic],
) -> Dict[ApproachEnum, float]:
    available = [i.approach for i in indications if i.available]
    effective = {i.approach: 0.0 for i in indications}
    if not available:
        return effective
    if len(available) == 1:
        effective[available[0]] = 1.0
        return effective

    total = math.fsum(weights.get(a) for a in available)
    if total == 0:
        diagnostics.append(
            Diagnostic.data_quality(
                code="zero_blend_weights",
                message="Blend weights are all 0; available approaches weighted equally",
            )
        )
        for approach in available:
            effective[approach] = 1.0 / len(available)
        return effective

    for approach in available:
        effective[approach] = weights.get(approach) / total
    return effective


def _coerce_weights(
    weights: Union[BlendWeights, Mapping, None], settings: BlendSettings
) -> BlendWeights:
    if weights is None:
        return BlendWeights.from_settings(settings)
    if isinstance(weights, BlendWeights):
        return weights
    if isinstance(weights, Mapping):
        return BlendWeights.from_mapping(weights)
    raise TypeError(
        f"weights must be BlendWeights, a mapping or None, got {type(weights).__name__}"
    )


def _coerce_income(
    income_inputs: Union[IncomeInputs, Mapping, None], diagnostics: List[Diagnostic]
) -> Optional[IncomeInputs]:
    if isinstance(income_inputs, Mapping):
        income_inputs, issues = IncomeInputs.from_record(income_inputs)
        diagnostics.extend(issues)
    return income_inputs


def blend(
    value_stats: ValueStatistics,
    income_inputs: Union[IncomeInputs, Mapping, None] = None,
    weights: Union[BlendWeights, Mapping, None] = None,
    *,
    adjusted_comparables: Optional[Sequence[AdjustedComparable]] = None,
    subject_area_sqft: Optional[float] = None,
    settings: Optional[EngineSettings] = None,
) -> ValuationEstimate:
    """
    Reconcile the sales comparison and income approaches.

    Args:
        value_stats: Statistics over adjusted comparable values
        income_inputs: Subject NOI and proposed cap rate (typed or raw)
        weights: Relative approach weights; defaults to the configured 50/50
        adjusted_comparables: Adjusted comparables for the per-factor
            adjustment breakdown (empty breakdown when omitted)
        subject_area_sqft: Subject building area for value per square foot
        settings: Engine settings (blend defaults, basis, rounding)

    Returns:
        ValuationEstimate. Never raises for unusable business data: with no
        available approach, final_estimate is None and `reason` says why.

    Raises:
        TypeError: If an argument has an unsupported type
        ValueError: If weights are negative or non-numeric

    Example:
        ```python
        stats = compute_value_stats([2_400_000, 2_500_000, 2_300_000])
        estimate = blend(stats, IncomeInputs(net_operating_income=150_000, proposed_cap_rate=6.7))
        estimate.final_estimate          # ~2_319_403
        estimate.rounded_final_estimate  # 2_320_000.0
        ```
    """
    settings = settings or EngineSettings()
    diagnostics: List[Diagnostic] = []

    blend_weights = _coerce_weights(weights, settings.blend)
    income_inputs = _coerce_income(income_inputs, diagnostics)

    sales_indication = SalesComparisonApproach(
        basis=settings.blend.sales_comparison_basis
    ).indicate(value_stats)
    income_indication = DirectCapApproach().indicate(income_inputs)
    indications = [sales_indication, income_indication]

    for indication in indications:
        if not indication.available:
            diagnostics.append(
                Diagnostic.data_quality(
                    code="approach_unavailable",
                    message=f"{indication.approach.value} unavailable: {indication.reason}",
                    severity=SeverityEnum.INFO,
                )
            )

    effective = _effective_weights(blend_weights, indications, diagnostics)
    method_breakdown = [
        MethodBreakdown.from_indication(i, effective[i.approach]) for i in indications
    ]

    adjustment_breakdown = (
        summarize_adjustments(adjusted_comparables, settings.adjustments.factors)
        if adjusted_comparables is not None
        else []
    )

    available_values = [i.value for i in indications if i.available]
    spread = analyze_approach_spread(available_values, settings.blend.acceptable_spread)
    if not spread.acceptable:
        diagnostics.append(
            Diagnostic.policy_violation(
                code="approach_spread",
                message=(
                    f"Approach indications differ by {spread.spread:.1%} "
                    f"(acceptable up to {settings.blend.acceptable_spread:.0%})"
                ),
            )
        )

    final_estimate: Optional[float] = None
    reason = ""
    if available_values:
        final_estimate = math.fsum(b.contribution for b in method_breakdown)
        logger.info(
            f"Final estimate {final_estimate:,.0f} from "
            + ", ".join(f"{b.approach.value} {b.weight:.0%}" for b in method_breakdown if b.available)
        )
    else:
        reason = "No usable estimate: " + "; ".join(
            f"{i.approach.value}: {i.reason}" for i in indications
        )
        logger.warning(reason)
        diagnostics.append(Diagnostic.invalid_state(code="no_usable_estimate", message=reason))

    if final_estimate is not None and settings.reporting.round_final_estimate:
        rounded = round_to_appraisal_increment(final_estimate)
    else:
        rounded = final_estimate

    area, _ = coerce_number(subject_area_sqft, "subject_area_sqft")
    value_per_sf = final_estimate / area if final_estimate is not None and area and area > 0 else None

    return ValuationEstimate(
        sales_comparison_estimate=sales_indication.value,
        sales_comparison_low=sales_indication.low,
        sales_comparison_high=sales_indication.high,
        income_approach_estimate=income_indication.value,
        final_estimate=final_estimate,
        rounded_final_estimate=rounded,
        value_range=final_value_range(final_estimate, spread.spread),
        weights=BlendWeights(
            sales_comparison=effective[ApproachEnum.SALES_COMPARISON],
            income_approach=effective[ApproachEnum.INCOME],
        ),
        method_breakdown=method_breakdown,
        adjustment_breakdown=adjustment_breakdown,
        spread=spread,
        value_per_sf=value_per_sf,
        diagnostics=tuple(diagnostics),
        reason=reason,
    )
