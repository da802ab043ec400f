# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Aggregate statistics over adjusted comparables and cap rate assessment.
"""

from .cap_rate import CapRateAssessment, assess_cap_rate
from .statistics import (
    CapRateStatistics,
    ValueStatistics,
    compute_cap_rate_stats,
    compute_value_stats,
)

__all__ = [
    "ValueStatistics",
    "CapRateStatistics",
    "compute_value_stats",
    "compute_cap_rate_stats",
    "CapRateAssessment",
    "assess_cap_rate",
]
