# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Appraisal results accessors.

Flat API over one run of the valuation pipeline. All numbers are computed by
`appraise()`; this module holds no business logic of its own.
"""

from __future__ import annotations

from functools import cached_property
from typing import List, Optional

from ..analysis import CapRateAssessment, CapRateStatistics, ValueStatistics
from ..comparables import AdjustedComparable
from ..core.primitives import (
    Diagnostic,
    DiagnosticKind,
    SeverityEnum,
    filter_diagnostics,
    max_severity,
)
from ..reporting.interface import ReportingInterface
from ..valuation import ValuationEstimate
from .session import AppraisalSession


class AppraisalResult:
    """
    Output of `appraise(session)`.

    Principles:
    - Flat accessors (e.g. `final_estimate`, `is_complete`)
    - Every intermediate stage is kept for inspection and reporting
    - Diagnostics from every stage are collected in pipeline order
    """

    def __init__(
        self,
        session: AppraisalSession,
        adjusted_comparables: List[AdjustedComparable],
        value_stats: ValueStatistics,
        cap_rate_stats: CapRateStatistics,
        cap_rate_assessment: CapRateAssessment,
        estimate: ValuationEstimate,
    ):
        self._session = session
        self._adjusted_comparables = adjusted_comparables
        self._value_stats = value_stats
        self._cap_rate_stats = cap_rate_stats
        self._cap_rate_assessment = cap_rate_assessment
        self._estimate = estimate

    # ==========================================================================
    # PIPELINE STAGES
    # ==========================================================================

    @property
    def session(self) -> AppraisalSession:
        """The inputs this result was computed from."""
        return self._session

    @property
    def adjusted_comparables(self) -> List[AdjustedComparable]:
        return list(self._adjusted_comparables)

    @property
    def value_stats(self) -> ValueStatistics:
        return self._value_stats

    @property
    def cap_rate_stats(self) -> CapRateStatistics:
        return self._cap_rate_stats

    @property
    def cap_rate_assessment(self) -> CapRateAssessment:
        return self._cap_rate_assessment

    @property
    def estimate(self) -> ValuationEstimate:
        return self._estimate

    # ==========================================================================
    # PRIMARY FIGURES
    # ==========================================================================

    @property
    def final_estimate(self) -> Optional[float]:
        return self._estimate.final_estimate

    @property
    def rounded_final_estimate(self) -> Optional[float]:
        return self._estimate.rounded_final_estimate

    @property
    def is_complete(self) -> bool:
        """True once the minimum comparable count is met."""
        return self._session.selected_comparables.is_complete

    # ==========================================================================
    # DIAGNOSTICS
    # ==========================================================================

    @cached_property
    def diagnostics(self) -> List[Diagnostic]:
        """Findings from input coercion, selection, adjustment, statistics, cap
        rate assessment and blending."""
        diagnostics: List[Diagnostic] = list(self._session.input_diagnostics)
        diagnostics.extend(self._session.selected_comparables.selection_diagnostics())
        for adjusted in self._adjusted_comparables:
            diagnostics.extend(adjusted.diagnostics)
        diagnostics.extend(self._value_stats.diagnostics)
        diagnostics.extend(self._cap_rate_stats.diagnostics)
        if self._cap_rate_assessment.severity != SeverityEnum.INFO:
            diagnostics.append(
                Diagnostic.policy_violation(
                    code=self._cap_rate_assessment.code,
                    message=self._cap_rate_assessment.message,
                    severity=self._cap_rate_assessment.severity,
                    field="subject_cap_rate",
                )
            )
        diagnostics.extend(self._estimate.diagnostics)
        return diagnostics

    @property
    def max_severity(self) -> Optional[SeverityEnum]:
        return max_severity(self.diagnostics)

    def diagnostics_of(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return filter_diagnostics(self.diagnostics, kind=kind)

    # ==========================================================================
    # REPORTING
    # ==========================================================================

    @cached_property
    def reporting(self) -> ReportingInterface:
        """Tabular projections for the report renderer."""
        return ReportingInterface(self)
