# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Subject cap rate assessment against the absolute market range and the
comparable band.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..core.primitives import CapRateSettings, Model, SeverityEnum, coerce_number
from .statistics import CapRateStatistics

logger = logging.getLogger(__name__)


class CapRateAssessment(Model):
    """
    Alert band for a proposed subject cap rate.

    Attributes:
        severity: ERROR outside the absolute range, WARNING outside the
            comparable band, INFO otherwise
        code: Machine-readable finding
        message: Human-readable explanation
        subject_cap_rate: The rate assessed (None when not proposed)
        within_absolute_range: Inside [absolute_minimum, absolute_maximum]
        within_band: Inside the comparable mean +/- band_sigma * std_dev
    """

    severity: SeverityEnum = SeverityEnum.INFO
    code: str
    message: str
    subject_cap_rate: Optional[float] = None
    within_absolute_range: bool = True
    within_band: bool = True


def assess_cap_rate(
    subject_cap_rate: Any,
    stats: CapRateStatistics,
    settings: Optional[CapRateSettings] = None,
) -> CapRateAssessment:
    """
    Grade a proposed cap rate.

    The absolute range check takes precedence over the comparable band, so a
    rate outside 5-15% is an error even when the comparables agree with it.
    """
    settings = settings or CapRateSettings()
    subject, _ = coerce_number(subject_cap_rate, "subject_cap_rate")

    if subject is None:
        return CapRateAssessment(
            code="cap_rate_not_proposed",
            message="No subject cap rate proposed",
        )

    within_absolute = settings.absolute_minimum <= subject <= settings.absolute_maximum
    within_band = (
        True if stats.count == 0 else stats.lower_bound <= subject <= stats.upper_bound
    )

    if not within_absolute:
        assessment = CapRateAssessment(
            severity=SeverityEnum.ERROR,
            code="cap_rate_out_of_market_range",
            message=(
                f"Cap rate {subject:.2f}% is outside the acceptable market range "
                f"({settings.absolute_minimum:.0f}% - {settings.absolute_maximum:.0f}%)"
            ),
            subject_cap_rate=subject,
            within_absolute_range=False,
            within_band=within_band,
        )
    elif not within_band:
        assessment = CapRateAssessment(
            severity=SeverityEnum.WARNING,
            code="cap_rate_outside_comparable_band",
            message=(
                f"Cap rate {subject:.2f}% is outside the comparable range "
                f"({stats.lower_bound:.2f}% - {stats.upper_bound:.2f}%)"
            ),
            subject_cap_rate=subject,
            within_band=False,
        )
    else:
        assessment = CapRateAssessment(
            code="cap_rate_supported",
            message=f"Cap rate {subject:.2f}% is supported by comparable sales",
            subject_cap_rate=subject,
        )

    if assessment.severity != SeverityEnum.INFO:
        logger.warning(assessment.message)
    return assessment
