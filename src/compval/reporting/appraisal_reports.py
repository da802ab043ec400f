# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Appraisal Reports

Tabular projections of an AppraisalResult: the comparable adjustment grid,
the per-factor adjustment summary, the reconciliation (method) table and a
diagnostics listing.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from .base import BaseReport


def _factor_label(factor: str) -> str:
    return f"{factor.replace('_', ' ').title()} Adj (%)"


class ComparableGridReport(BaseReport):
    """
    Comparable adjustment grid: one row per selected comparable, in
    selection order, with every factor as a column.
    """

    currency_columns = (
        "Sale Price",
        "Price/SF",
        "Net Adjustment ($)",
        "Adjusted Value",
        "Adjusted Price/SF",
    )

    def build(self, **kwargs: Any) -> pd.DataFrame:
        factors = list(self._result.session.settings.adjustments.factors)
        for adjusted in self._result.adjusted_comparables:
            for name in adjusted.applied_adjustments:
                if name not in factors:
                    factors.append(name)

        columns = [
            "Comparable",
            "Name",
            "Address",
            "Property Type",
            "Area (SF)",
            "Year Built",
            "Sale Price",
            "Price/SF",
            *[_factor_label(f) for f in factors],
            "Net Adjustment (%)",
            "Net Adjustment ($)",
            "Adjusted Value",
            "Adjusted Price/SF",
            "Cap Rate (%)",
            "Adjusted Cap Rate (%)",
        ]

        rows: List[Dict[str, Any]] = []
        for adjusted in self._result.adjusted_comparables:
            comparable = adjusted.comparable
            row = {
                "Comparable": comparable.id,
                "Name": comparable.name,
                "Address": comparable.address,
                "Property Type": comparable.property_type,
                "Area (SF)": comparable.total_area_sqft,
                "Year Built": comparable.year_built,
                "Sale Price": comparable.sale_price,
                "Price/SF": comparable.price_per_sf,
                "Net Adjustment (%)": adjusted.total_adjustment_percent,
                "Net Adjustment ($)": adjusted.total_dollar_adjustment,
                "Adjusted Value": adjusted.adjusted_value,
                "Adjusted Price/SF": adjusted.adjusted_price_per_sf,
                "Cap Rate (%)": comparable.cap_rate,
                "Adjusted Cap Rate (%)": adjusted.adjusted_cap_rate,
            }
            for factor in factors:
                row[_factor_label(factor)] = adjusted.applied_adjustments.get(factor, 0.0)
            rows.append(row)

        return self._frame(rows, columns, index="Comparable")


class AdjustmentSummaryReport(BaseReport):
    """Per-factor adjustment summary across the comparable set."""

    currency_columns = ("Dollar Impact",)

    def build(self, **kwargs: Any) -> pd.DataFrame:
        columns = [
            "Factor",
            "Total (%)",
            "Average (%)",
            "Min (%)",
            "Max (%)",
            "Dollar Impact",
            "Comparables Adjusted",
        ]
        rows = [
            {
                "Factor": b.factor,
                "Total (%)": b.total_percent,
                "Average (%)": b.average_percent,
                "Min (%)": b.min_percent,
                "Max (%)": b.max_percent,
                "Dollar Impact": b.dollar_impact,
                "Comparables Adjusted": b.nonzero_count,
            }
            for b in self._result.estimate.adjustment_breakdown
        ]
        return self._frame(rows, columns, index="Factor")


class MethodSummaryReport(BaseReport):
    """
    Reconciliation table: each approach's indication, weight and
    contribution, followed by the reconciled value.
    """

    currency_columns = ("Indicated Value", "Contribution")

    _LABELS = {
        "sales_comparison": "Sales Comparison Approach",
        "income_approach": "Income Approach",
    }

    def build(self, include_total: bool = True, **kwargs: Any) -> pd.DataFrame:
        columns = ["Approach", "Indicated Value", "Weight", "Contribution", "Available", "Note"]
        estimate = self._result.estimate
        rows: List[Dict[str, Any]] = [
            {
                "Approach": self._LABELS.get(b.approach.value, b.approach.value),
                "Indicated Value": b.estimate,
                "Weight": b.weight,
                "Contribution": b.contribution,
                "Available": b.available,
                "Note": b.reason,
            }
            for b in estimate.method_breakdown
        ]
        if include_total:
            rows.append(
                {
                    "Approach": "Reconciled Value",
                    "Indicated Value": estimate.final_estimate,
                    "Weight": sum(b.weight for b in estimate.method_breakdown),
                    "Contribution": estimate.final_estimate,
                    "Available": estimate.is_available,
                    "Note": estimate.reason,
                }
            )
        return self._frame(rows, columns, index="Approach")


class DiagnosticsReport(BaseReport):
    """All findings from the run, most serious first."""

    def build(self, **kwargs: Any) -> pd.DataFrame:
        columns = ["Severity", "Kind", "Code", "Comparable", "Field", "Message"]
        diagnostics = sorted(
            self._result.diagnostics, key=lambda d: d.severity.rank, reverse=True
        )
        rows = [
            {
                "Severity": d.severity.value,
                "Kind": d.kind.value,
                "Code": d.code,
                "Comparable": d.comparable_id,
                "Field": d.field,
                "Message": d.message,
            }
            for d in diagnostics
        ]
        return pd.DataFrame(rows, columns=columns)
