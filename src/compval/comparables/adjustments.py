# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Adjustment Calculator - Percentage Adjustments to Comparable Sales

Each comparable carries one set of signed percentage adjustments (location,
size, age, quality, condition, other). The calculator turns a comparable and
its adjustment set into an adjusted value and adjusted cap rate:

    adjusted_value    = sale_price * (1 + total_adjustment / 100)
    adjusted_cap_rate = cap_rate * (1 + (quality + condition) / 200)

Individual factors are clamped to [-50, +50]; their sum is not. A factor
beyond 30% either way, or a total beyond 50%, is flagged but still applied.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Dict, List, Optional, Tuple, Union

from pydantic import Field

from ..core.primitives import (
    AdjustmentFactorEnum,
    AdjustmentSettings,
    ComparableId,
    Diagnostic,
    FiniteFloat,
    Model,
    SeverityEnum,
    clamp,
    coerce_number,
)
from .property import ComparableProperty

logger = logging.getLogger(__name__)


def _factor_name(key) -> str:
    return key.value if isinstance(key, AdjustmentFactorEnum) else str(key)


class AdjustmentSet(Model):
    """
    Named percentage adjustments for one comparable.

    Factors not present are treated as 0. Values are stored as given (finite
    floats); clamping to the configured bounds happens in `compute_adjustment`.

    Example:
        ```python
        adjustments = AdjustmentSet(factors={"location": 5.0, "condition": -2.5})
        adjustments.get("location")   # 5.0
        adjustments.get("size")       # 0.0
        ```
    """

    factors: Dict[str, FiniteFloat] = Field(default_factory=dict)

    def get(self, factor: Union[str, AdjustmentFactorEnum]) -> float:
        """Value of a factor in percent, 0 when unset."""
        return self.factors.get(_factor_name(factor), 0.0)

    @property
    def is_zero(self) -> bool:
        return all(value == 0 for value in self.factors.values())

    @classmethod
    def zero(cls) -> "AdjustmentSet":
        """All-zero adjustment set (the default for a newly selected comparable)."""
        return cls()

    @classmethod
    def from_mapping(
        cls,
        mapping: Optional[Mapping],
        comparable_id: Optional[ComparableId] = None,
    ) -> Tuple["AdjustmentSet", List[Diagnostic]]:
        """
        Build an adjustment set from loosely-typed input.

        Values may be numbers, numeric strings ("5", "-2.5%") or grid cells of
        the form {"value": 5, "notes": "..."}. Non-numeric values become 0 and
        are reported.

        Returns:
            Tuple of (adjustment set, diagnostics)

        Raises:
            TypeError: If mapping is neither None nor a mapping
        """
        if mapping is None:
            return cls(), []
        if not isinstance(mapping, Mapping):
            raise TypeError(
                f"adjustments must be a mapping, got {type(mapping).__name__}"
            )

        factors: Dict[str, float] = {}
        diagnostics: List[Diagnostic] = []
        for key, raw in mapping.items():
            name = _factor_name(key)
            if isinstance(raw, Mapping):
                raw = raw.get("value")
            value, issue = coerce_number(
                raw, f"adjustments.{name}", comparable_id=comparable_id
            )
            if issue is not None:
                diagnostics.append(issue)
            factors[name] = 0.0 if value is None else value

        return cls(factors=factors), diagnostics


class AdjustedComparable(Model):
    """
    A comparable with its adjustments applied.

    Derived on demand from a comparable and its adjustment set; never stored
    independently.

    Attributes:
        comparable: The underlying sale record
        applied_adjustments: Clamped factor values actually applied, covering
            the configured vocabulary plus any extra factors supplied
        total_adjustment_percent: Sum of the applied factor values
        adjusted_value: Sale price scaled by the total adjustment
        adjusted_cap_rate: Cap rate scaled by the cap-rate factors, None when
            the comparable has no cap rate
        diagnostics: Data-quality and policy findings for this comparable
    """

    comparable: ComparableProperty
    applied_adjustments: Dict[str, float] = Field(default_factory=dict)
    total_adjustment_percent: float = 0.0
    adjusted_value: float = 0.0
    adjusted_cap_rate: Optional[float] = None
    diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def id(self) -> ComparableId:
        return self.comparable.id

    @property
    def sale_price(self) -> float:
        """Sale price used in the calculation (0 when the record has none)."""
        return self.comparable.sale_price or 0.0

    @property
    def adjusted_price_per_sf(self) -> Optional[float]:
        if not self.comparable.total_area_sqft:
            return None
        return self.adjusted_value / self.comparable.total_area_sqft

    def dollar_adjustment(self, factor: Union[str, AdjustmentFactorEnum]) -> float:
        """Dollar impact of one factor on this comparable's value."""
        return self.sale_price * self.applied_adjustments.get(_factor_name(factor), 0.0) / 100.0

    @property
    def total_dollar_adjustment(self) -> float:
        return self.adjusted_value - self.sale_price


def _normalize_comparable(
    comparable: Union[ComparableProperty, Mapping],
) -> Tuple[ComparableProperty, List[Diagnostic]]:
    if isinstance(comparable, ComparableProperty):
        return comparable, []
    if isinstance(comparable, Mapping):
        return ComparableProperty.from_record(comparable)
    raise TypeError(
        f"comparable must be a ComparableProperty or mapping, got {type(comparable).__name__}"
    )


def _normalize_adjustments(
    adjustments: Union[AdjustmentSet, Mapping, None],
    comparable_id: ComparableId,
) -> Tuple[AdjustmentSet, List[Diagnostic]]:
    if adjustments is None:
        return AdjustmentSet.zero(), []
    if isinstance(adjustments, AdjustmentSet):
        return adjustments, []
    if isinstance(adjustments, Mapping):
        return AdjustmentSet.from_mapping(adjustments, comparable_id=comparable_id)
    raise TypeError(
        f"adjustments must be an AdjustmentSet or mapping, got {type(adjustments).__name__}"
    )


def compute_adjustment(
    comparable: Union[ComparableProperty, Mapping],
    adjustments: Union[AdjustmentSet, Mapping, None] = None,
    settings: Optional[AdjustmentSettings] = None,
) -> AdjustedComparable:
    """
    Apply an adjustment set to a comparable.

    Pure function: the same inputs always produce the same output.

    Args:
        comparable: Sale record, typed or raw
        adjustments: Adjustment set, raw mapping, or None for all-zero
        settings: Adjustment rules; defaults to +/-50% factors and the
            quality/condition half-weight cap rate adjustment

    Returns:
        AdjustedComparable with diagnostics for every coercion, clamp,
        missing value and limit breach encountered

    Raises:
        TypeError: If comparable or adjustments is of an unsupported type
    """
    settings = settings or AdjustmentSettings()

    comparable, diagnostics = _normalize_comparable(comparable)
    adjustment_set, adjustment_issues = _normalize_adjustments(adjustments, comparable.id)
    diagnostics.extend(adjustment_issues)
    reported_fields = {d.field for d in diagnostics if d.field}

    applied: Dict[str, float] = {name: 0.0 for name in settings.factors}
    for name, value in adjustment_set.factors.items():
        bounded = clamp(value, settings.factor_floor, settings.factor_ceiling)
        if bounded != value:
            diagnostics.append(
                Diagnostic.data_quality(
                    code="adjustment_clamped",
                    message=(
                        f"{name} adjustment {value:+.2f}% clamped to {bounded:+.2f}% "
                        f"(limits {settings.factor_floor:+.0f}% / {settings.factor_ceiling:+.0f}%)"
                    ),
                    severity=SeverityEnum.INFO,
                    comparable_id=comparable.id,
                    field=f"adjustments.{name}",
                )
            )
        if name not in applied:
            diagnostics.append(
                Diagnostic.data_quality(
                    code="unrecognized_factor",
                    message=f"Adjustment factor '{name}' is outside the standard vocabulary",
                    severity=SeverityEnum.INFO,
                    comparable_id=comparable.id,
                    field=f"adjustments.{name}",
                )
            )
        if abs(bounded) > settings.factor_warning_limit:
            diagnostics.append(
                Diagnostic.policy_violation(
                    code="factor_adjustment_limit",
                    message=(
                        f"{name} adjustment {bounded:+.1f}% exceeds the "
                        f"{settings.factor_warning_limit:.0f}% single-factor limit"
                    ),
                    comparable_id=comparable.id,
                    field=f"adjustments.{name}",
                )
            )
        applied[name] = bounded

    total_percent = math.fsum(applied.values())

    sale_price = comparable.sale_price
    if sale_price is None:
        sale_price = 0.0
        if "sale_price" not in reported_fields:
            diagnostics.append(
                Diagnostic.data_quality(
                    code="missing_sale_price",
                    message="Sale price is missing; adjusted value treated as 0",
                    comparable_id=comparable.id,
                    field="sale_price",
                )
            )
    adjusted_value = sale_price * (1 + total_percent / 100.0)

    adjusted_cap_rate: Optional[float] = None
    if comparable.cap_rate is None:
        if "cap_rate" not in reported_fields:
            diagnostics.append(
                Diagnostic.data_quality(
                    code="missing_cap_rate",
                    message="Cap rate is missing; comparable excluded from cap rate statistics",
                    comparable_id=comparable.id,
                    field="cap_rate",
                )
            )
    else:
        cap_rate_shift = math.fsum(applied.get(name, 0.0) for name in settings.cap_rate_factors)
        adjusted_cap_rate = comparable.cap_rate * (1 + cap_rate_shift / settings.cap_rate_divisor)

    if not comparable.total_area_sqft and "total_area_sqft" not in reported_fields:
        diagnostics.append(
            Diagnostic.data_quality(
                code="missing_area",
                message="Building area is missing or 0; price per square foot is undefined",
                severity=SeverityEnum.INFO,
                comparable_id=comparable.id,
                field="total_area_sqft",
            )
        )

    if abs(total_percent) > settings.net_adjustment_limit:
        diagnostics.append(
            Diagnostic.policy_violation(
                code="net_adjustment_limit",
                message=(
                    f"Total adjustment {total_percent:+.1f}% exceeds the "
                    f"{settings.net_adjustment_limit:.0f}% net adjustment limit"
                ),
                comparable_id=comparable.id,
            )
        )

    logger.debug(
        f"Adjusted comparable {comparable.id!r}: total {total_percent:+.2f}%, "
        f"value {adjusted_value:,.2f}, cap rate {adjusted_cap_rate}"
    )

    return AdjustedComparable(
        comparable=comparable,
        applied_adjustments=applied,
        total_adjustment_percent=total_percent,
        adjusted_value=adjusted_value,
        adjusted_cap_rate=adjusted_cap_rate,
        diagnostics=tuple(diagnostics),
    )
