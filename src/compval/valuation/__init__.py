# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
compval Valuation Module - Approach Indications and Reconciliation

Two approaches are reconciled into the final estimate:
1. Sales Comparison Approach - statistics of adjusted comparable values
2. Income Approach (DirectCap) - NOI / Cap Rate
"""

from .base.valuation import ApproachIndication, BaseApproach
from .blend import BlendWeights, ValuationEstimate, blend
from .breakdown import AdjustmentBreakdown, MethodBreakdown, summarize_adjustments
from .direct_cap import DirectCapApproach, IncomeInputs
from .reconciliation import (
    SpreadAnalysis,
    ValueRange,
    analyze_approach_spread,
    appraisal_increment,
    final_value_range,
    final_value_range_percent,
    rate_spread,
    round_to_appraisal_increment,
)
from .sales_comp import SalesComparisonApproach

__all__ = [
    # Base classes
    "BaseApproach",
    "ApproachIndication",
    # Approaches
    "SalesComparisonApproach",
    "DirectCapApproach",
    "IncomeInputs",
    # Blending
    "BlendWeights",
    "ValuationEstimate",
    "blend",
    # Breakdowns
    "MethodBreakdown",
    "AdjustmentBreakdown",
    "summarize_adjustments",
    # Reconciliation helpers
    "SpreadAnalysis",
    "analyze_approach_spread",
    "rate_spread",
    "appraisal_increment",
    "round_to_appraisal_increment",
    "ValueRange",
    "final_value_range",
    "final_value_range_percent",
]
