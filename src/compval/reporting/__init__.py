# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
compval Reporting Module

Report tables are reached through the fluent API on AppraisalResult:
    result = appraise(session)
    grid = result.reporting.comparable_grid()
    summary = result.reporting.adjustment_summary()

The base classes are exported for custom report development.
"""

from .appraisal_reports import (
    AdjustmentSummaryReport,
    ComparableGridReport,
    DiagnosticsReport,
    MethodSummaryReport,
)
from .base import BaseReport, ReportTemplate
from .interface import ReportingInterface

__all__ = [
    # Base classes for custom reports
    "BaseReport",
    "ReportTemplate",
    # Fluent interface (exposed via AppraisalResult.reporting)
    "ReportingInterface",
    # Core reports
    "ComparableGridReport",
    "AdjustmentSummaryReport",
    "MethodSummaryReport",
    "DiagnosticsReport",
]
