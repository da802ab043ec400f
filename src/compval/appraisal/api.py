# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Appraisal API

Public entry point running the full valuation pipeline for one subject:
Comparable Set -> Adjusted Comparables -> Statistics -> Cap Rate Assessment
-> Blended Estimate.
"""

from __future__ import annotations

import logging

from ..analysis import assess_cap_rate, compute_cap_rate_stats, compute_value_stats
from ..valuation import blend
from .results import AppraisalResult
from .session import AppraisalSession

logger = logging.getLogger(__name__)


def appraise(session: AppraisalSession) -> AppraisalResult:
    """
    Value the subject of an appraisal session.

    Stateless: every call recomputes from the session, so identical sessions
    give identical results and nothing carries over between calls.

    Workflow:
      1) Apply each comparable's adjustment set
      2) Aggregate adjusted values and adjusted cap rates
      3) Grade the proposed cap rate against the comparables
      4) Blend the sales comparison and income approaches

    Args:
        session: Subject, income inputs, comparables, weights and settings

    Returns:
        AppraisalResult with every stage, the collected diagnostics and
        report projections. An incomplete comparable set still produces a
        result, flagged through `is_complete` and a diagnostic.

    Raises:
        TypeError: If session is not an AppraisalSession

    Example:
        ```python
        result = appraise(session)
        result.final_estimate
        result.reporting.comparable_grid()
        ```
    """
    if not isinstance(session, AppraisalSession):
        raise TypeError(f"session must be an AppraisalSession, got {type(session).__name__}")

    settings = session.settings
    comparable_set = session.selected_comparables

    adjusted = comparable_set.adjusted(settings.adjustments)
    value_stats = compute_value_stats(adjusted)
    subject_cap_rate = session.income_inputs.proposed_cap_rate
    cap_rate_stats = compute_cap_rate_stats(adjusted, subject_cap_rate, settings.cap_rate)
    assessment = assess_cap_rate(subject_cap_rate, cap_rate_stats, settings.cap_rate)

    estimate = blend(
        value_stats,
        session.income_inputs,
        session.blend_weights,
        adjusted_comparables=adjusted,
        subject_area_sqft=session.subject_area_sqft,
        settings=settings,
    )

    if not comparable_set.is_complete:
        logger.info(
            f"Appraisal of '{session.subject_name}' uses {comparable_set.count} comparables; "
            f"{comparable_set.selection.minimum_comparables} required for a complete set"
        )
    logger.debug(
        f"Appraised '{session.subject_name}': final estimate {estimate.final_estimate}, "
        f"cap rate assessment {assessment.severity.value}"
    )

    return AppraisalResult(
        session=session,
        adjusted_comparables=adjusted,
        value_stats=value_stats,
        cap_rate_stats=cap_rate_stats,
        cap_rate_assessment=assessment,
        estimate=estimate,
    )
