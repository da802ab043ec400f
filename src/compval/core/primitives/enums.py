# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class AdjustmentFactorEnum(str, Enum):
    """
    Standard vocabulary of comparable adjustment factors.

    Each factor holds a signed percentage correction applied to a comparable's
    sale price. The vocabulary is extensible through `AdjustmentSettings.factors`;
    these members are the defaults offered by the adjustment grid.

    Options:
        LOCATION: Neighborhood, access and distance-to-CBD differences
        SIZE: Economies of scale between building areas
        AGE: Effective age / year built differences
        QUALITY: Construction quality differences (also feeds the cap rate)
        CONDITION: Physical condition differences (also feeds the cap rate)
        OTHER: Anything not covered above
    """

    LOCATION = "location"
    SIZE = "size"
    AGE = "age"
    QUALITY = "quality"
    CONDITION = "condition"
    OTHER = "other"


class ApproachEnum(str, Enum):
    """Valuation approaches reconciled into the final estimate."""

    SALES_COMPARISON = "sales_comparison"
    INCOME = "income_approach"


class DiagnosticKind(str, Enum):
    """
    Taxonomy of business-level problems reported alongside results.

    Options:
        DATA_QUALITY: Missing or non-numeric input coerced to a safe default
        POLICY_VIOLATION: Selection count or adjustment limits not respected
        INVALID_STATE: No usable estimate could be produced
    """

    DATA_QUALITY = "data_quality"
    POLICY_VIOLATION = "policy_violation"
    INVALID_STATE = "invalid_state"


class SeverityEnum(str, Enum):
    """Alert band for a diagnostic or assessment, ordered by seriousness."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    SeverityEnum.INFO: 0,
    SeverityEnum.WARNING: 1,
    SeverityEnum.ERROR: 2,
}


class SelectionOutcomeEnum(str, Enum):
    """Result of a comparable set mutation."""

    ADDED = "added"
    UPDATED = "updated"
    REMOVED = "removed"
    NOT_SELECTED = "not_selected"  # remove() of an id that is not in the set
    ALREADY_SELECTED = "already_selected"
    LIMIT_REACHED = "limit_reached"

    @property
    def accepted(self) -> bool:
        return self in (
            SelectionOutcomeEnum.ADDED,
            SelectionOutcomeEnum.UPDATED,
            SelectionOutcomeEnum.REMOVED,
            SelectionOutcomeEnum.NOT_SELECTED,
        )


class CapRateUnitEnum(str, Enum):
    """
    Unit of an incoming cap rate value.

    The engine works in percent units (6.5 means 6.5%). Records stored as
    fractions (0.065) must say so explicitly at the boundary.
    """

    PERCENT = "percent"
    FRACTION = "fraction"


class SpreadRatingEnum(str, Enum):
    """Qualitative rating of the spread between approach estimates."""

    EXCELLENT = "excellent"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    POOR = "poor"
