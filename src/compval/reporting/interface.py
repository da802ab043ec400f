# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Reporting Interface

Fluent access to report tables from AppraisalResult objects.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import pandas as pd

from .appraisal_reports import (
    AdjustmentSummaryReport,
    ComparableGridReport,
    DiagnosticsReport,
    MethodSummaryReport,
)
from .base import ReportTemplate

if TYPE_CHECKING:
    from ..appraisal.results import AppraisalResult


class ReportingInterface:
    """
    Fluent interface for accessing report tables.

    Exposed via the `reporting` property on AppraisalResult.

    Example:
        result = appraise(session)
        grid = result.reporting.comparable_grid()
        reconciliation = result.reporting.method_summary()
    """

    def __init__(self, result: "AppraisalResult"):
        self._result = result

    def comparable_grid(self, template: Optional[ReportTemplate] = None) -> pd.DataFrame:
        """
        Comparable adjustment grid.

        Returns:
            DataFrame indexed by comparable id with sale data, one column per
            adjustment factor, and the adjusted value and cap rate
        """
        return ComparableGridReport(self._result, template).generate()

    def adjustment_summary(self, template: Optional[ReportTemplate] = None) -> pd.DataFrame:
        """Per-factor totals, ranges and dollar impact, indexed by factor."""
        return AdjustmentSummaryReport(self._result, template).generate()

    def method_summary(
        self, include_total: bool = True, template: Optional[ReportTemplate] = None
    ) -> pd.DataFrame:
        """Approach indications, weights and the reconciled value."""
        return MethodSummaryReport(self._result, template).generate(include_total=include_total)

    def diagnostics(self) -> pd.DataFrame:
        return DiagnosticsReport(self._result).generate()
