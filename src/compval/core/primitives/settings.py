# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Literal, Tuple

from pydantic import Field, model_validator

from .enums import AdjustmentFactorEnum
from .model import Model
from .types import FloatBetween0And1, PositiveFloat, PositiveInt


class SelectionSettings(Model):
    """Comparable selection-count policy."""

    minimum_comparables: PositiveInt = Field(
        default=3,
        description="Comparables required before statistics and valuation are final.",
    )
    maximum_comparables: PositiveInt = Field(
        default=4,
        description="Upper bound enforced when adding comparables to a set.",
    )

    @model_validator(mode="after")
    def check_bounds(self) -> "SelectionSettings":
        """Ensure the bounds describe a non-empty range."""
        if self.minimum_comparables < 1:
            raise ValueError("minimum_comparables must be at least 1")
        if self.maximum_comparables < self.minimum_comparables:
            raise ValueError(
                f"maximum_comparables ({self.maximum_comparables}) must be >= "
                f"minimum_comparables ({self.minimum_comparables})"
            )
        return self


class AdjustmentSettings(Model):
    """
    Rules for percentage adjustments applied to comparables.

    All values are in percent units: +5 raises a comparable's sale price by 5%.

    Usage Examples:
        # Default grid (location, size, age, quality, condition, other)
        adjustment_settings = AdjustmentSettings()

        # Extended grid with a market-conditions factor
        adjustment_settings = AdjustmentSettings(
            factors=(*AdjustmentSettings().factors, "market_conditions")
        )
    """

    factor_floor: float = Field(
        default=-50.0, description="Lowest value a single factor may take (clamped)."
    )
    factor_ceiling: float = Field(
        default=50.0, description="Highest value a single factor may take (clamped)."
    )
    factors: Tuple[str, ...] = Field(
        default=tuple(f.value for f in AdjustmentFactorEnum),
        description="Adjustment vocabulary; unset factors default to 0.",
    )
    cap_rate_factors: Tuple[str, ...] = Field(
        default=(AdjustmentFactorEnum.QUALITY.value, AdjustmentFactorEnum.CONDITION.value),
        description="Factors that also move the comparable's cap rate.",
    )
    cap_rate_divisor: PositiveFloat = Field(
        default=200.0,
        description=(
            "Divisor applied to the cap-rate factor sum. 200 gives those factors "
            "half the weight they carry in the value adjustment."
        ),
    )
    net_adjustment_limit: PositiveFloat = Field(
        default=50.0,
        description="Absolute total adjustment (percent) above which a comparable is flagged.",
    )
    factor_warning_limit: PositiveFloat = Field(
        default=30.0,
        description="Absolute single-factor adjustment (percent) above which the factor is flagged.",
    )

    @model_validator(mode="after")
    def check_adjustment_rules(self) -> "AdjustmentSettings":
        """Validate bounds and vocabulary."""
        if self.factor_floor > self.factor_ceiling:
            raise ValueError(
                f"factor_floor ({self.factor_floor}) must not exceed "
                f"factor_ceiling ({self.factor_ceiling})"
            )
        if self.cap_rate_divisor == 0:
            raise ValueError("cap_rate_divisor must be greater than 0")
        missing = [f for f in self.cap_rate_factors if f not in self.factors]
        if missing:
            raise ValueError(f"cap_rate_factors {missing} are not in the factor vocabulary")
        return self


class CapRateSettings(Model):
    """Cap rate acceptance rules, in percent units."""

    band_sigma: PositiveFloat = Field(
        default=2.0,
        description="Population standard deviations either side of the comparable mean.",
    )
    absolute_minimum: PositiveFloat = Field(
        default=5.0, description="Lowest acceptable subject cap rate (percent)."
    )
    absolute_maximum: PositiveFloat = Field(
        default=15.0, description="Highest acceptable subject cap rate (percent)."
    )

    @model_validator(mode="after")
    def check_absolute_band(self) -> "CapRateSettings":
        if self.absolute_minimum > self.absolute_maximum:
            raise ValueError(
                f"absolute_minimum ({self.absolute_minimum}) must not exceed "
                f"absolute_maximum ({self.absolute_maximum})"
            )
        return self


class BlendSettings(Model):
    """Defaults for reconciling the sales comparison and income approaches."""

    sales_comparison_weight: PositiveFloat = Field(
        default=0.5, description="Default relative weight of the sales comparison approach."
    )
    income_approach_weight: PositiveFloat = Field(
        default=0.5, description="Default relative weight of the income approach."
    )
    sales_comparison_basis: Literal["mean", "median"] = Field(
        default="mean",
        description="Adjusted-value statistic used as the sales comparison indication.",
    )
    acceptable_spread: FloatBetween0And1 = Field(
        default=0.25,
        description="Relative spread between approaches considered acceptable.",
    )


class ReportingSettings(Model):
    """Settings related to report projections."""

    decimal_precision: PositiveInt = Field(
        default=2, description="Number of decimal places for currency values."
    )
    round_final_estimate: bool = Field(
        default=True,
        description="Round the final estimate to the customary appraisal increment.",
    )


class EngineSettings(Model):
    """
    Root configuration for the valuation engine.

    Every section has defaults, so `EngineSettings()` reproduces the standard
    3-4 comparable, +/-50% factor, +/-2 sigma, 50/50 blend policy. Nested
    sections can be given as models or plain dicts.

    Example:
        ```python
        settings = EngineSettings(
            selection={"maximum_comparables": 6},
            blend={"sales_comparison_weight": 0.3, "income_approach_weight": 0.7},
        )
        ```
    """

    selection: SelectionSettings = Field(default_factory=SelectionSettings)
    adjustments: AdjustmentSettings = Field(default_factory=AdjustmentSettings)
    cap_rate: CapRateSettings = Field(default_factory=CapRateSettings)
    blend: BlendSettings = Field(default_factory=BlendSettings)
    reporting: ReportingSettings = Field(default_factory=ReportingSettings)
