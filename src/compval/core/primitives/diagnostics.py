# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Diagnostics attached to engine outputs.

The engine never raises for incomplete appraisal data. Every coercion,
policy rejection or unavailable estimate becomes a `Diagnostic` on the
returned object so the caller can render inline warnings.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from pydantic import Field

from .enums import DiagnosticKind, SeverityEnum
from .model import Model
from .types import ComparableId


class Diagnostic(Model):
    """
    A single business-level finding.

    Attributes:
        kind: Taxonomy bucket (data quality, policy violation, invalid state)
        severity: Alert band used by the caller to style the message
        code: Stable machine-readable identifier (e.g. "non_numeric_value")
        message: Human-readable explanation
        comparable_id: Comparable the finding relates to, if any
        field: Input field the finding relates to, if any
    """

    kind: DiagnosticKind
    severity: SeverityEnum = SeverityEnum.WARNING
    code: str = Field(..., min_length=1)
    message: str
    comparable_id: Optional[ComparableId] = None
    field: Optional[str] = None

    @classmethod
    def data_quality(
        cls,
        code: str,
        message: str,
        severity: SeverityEnum = SeverityEnum.WARNING,
        **kwargs,
    ) -> "Diagnostic":
        return cls(
            kind=DiagnosticKind.DATA_QUALITY,
            severity=severity,
            code=code,
            message=message,
            **kwargs,
        )

    @classmethod
    def policy_violation(
        cls,
        code: str,
        message: str,
        severity: SeverityEnum = SeverityEnum.WARNING,
        **kwargs,
    ) -> "Diagnostic":
        return cls(
            kind=DiagnosticKind.POLICY_VIOLATION,
            severity=severity,
            code=code,
            message=message,
            **kwargs,
        )

    @classmethod
    def invalid_state(
        cls,
        code: str,
        message: str,
        severity: SeverityEnum = SeverityEnum.ERROR,
        **kwargs,
    ) -> "Diagnostic":
        return cls(
            kind=DiagnosticKind.INVALID_STATE,
            severity=severity,
            code=code,
            message=message,
            **kwargs,
        )


def max_severity(diagnostics: Iterable[Diagnostic]) -> Optional[SeverityEnum]:
    """Most serious severity among diagnostics, or None when there are none."""
    worst: Optional[SeverityEnum] = None
    for diagnostic in diagnostics:
        if worst is None or diagnostic.severity.rank > worst.rank:
            worst = diagnostic.severity
    return worst


def filter_diagnostics(
    diagnostics: Iterable[Diagnostic],
    kind: Optional[DiagnosticKind] = None,
    comparable_id: Optional[ComparableId] = None,
) -> List[Diagnostic]:
    """Select diagnostics by kind and/or comparable."""
    return [
        d
        for d in diagnostics
        if (kind is None or d.kind == kind)
        and (comparable_id is None or d.comparable_id == comparable_id)
    ]
