# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
DirectCap Approach - Income Approach

Single-period valuation by direct capitalization:
Value = NOI / (Cap_Rate / 100)

Cap rates are in percent units throughout the engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import ClassVar, List, Optional, Tuple, Union

from pydantic import Field

from ..core.primitives import (
    ApproachEnum,
    CapRateUnitEnum,
    Diagnostic,
    FiniteFloat,
    Model,
    coerce_number,
    first_present,
)
from .base.valuation import ApproachIndication, BaseApproach

_RECORD_KEYS = {
    "net_operating_income": ("net_operating_income", "netOperatingIncome", "noi", "NOI"),
    "proposed_cap_rate": (
        "proposed_cap_rate",
        "proposedCapRate",
        "proposedCapRatePercent",
        "cap_rate",
        "capRate",
    ),
}


class IncomeInputs(Model):
    """
    Subject income data for the income approach.

    Attributes:
        net_operating_income: Annual NOI of the subject
        proposed_cap_rate: Proposed subject cap rate in percent units

    Example:
        ```python
        inputs = IncomeInputs(net_operating_income=150_000, proposed_cap_rate=6.7)
        ```
    """

    net_operating_income: Optional[FiniteFloat] = Field(
        default=None, description="Annual net operating income"
    )
    proposed_cap_rate: Optional[FiniteFloat] = Field(
        default=None, description="Proposed subject cap rate in percent units"
    )

    @classmethod
    def from_record(
        cls,
        record: Optional[Mapping],
        cap_rate_unit: Union[CapRateUnitEnum, str] = CapRateUnitEnum.PERCENT,
    ) -> Tuple["IncomeInputs", List[Diagnostic]]:
        """
        Build income inputs from a loosely-typed record.

        Returns:
            Tuple of (inputs, diagnostics). Non-numeric values become None.

        Raises:
            TypeError: If record is neither None nor a mapping
        """
        if record is None:
            return cls(), []
        if not isinstance(record, Mapping):
            raise TypeError(f"income record must be a mapping, got {type(record).__name__}")

        diagnostics: List[Diagnostic] = []
        values = {}
        for field, keys in _RECORD_KEYS.items():
            value, issue = coerce_number(first_present(record, *keys), field)
            if issue is not None:
                diagnostics.append(issue)
            values[field] = value

        if values["proposed_cap_rate"] is not None and CapRateUnitEnum(cap_rate_unit) == CapRateUnitEnum.FRACTION:
            values["proposed_cap_rate"] *= 100.0

        return cls(**values), diagnostics


class DirectCapApproach(BaseApproach):
    """
    Income approach using direct capitalization of the subject's NOI.

    The indication is unavailable (not an error) when NOI is missing or not
    positive, or when the cap rate is missing, zero or negative.
    """

    approach: ClassVar[ApproachEnum] = ApproachEnum.INCOME

    def indicate(self, income_inputs: Optional[IncomeInputs]) -> ApproachIndication:
        """
        Capitalize NOI at the proposed cap rate.

        Raises:
            TypeError: If income_inputs is neither None nor IncomeInputs
        """
        if income_inputs is None:
            return self._unavailable("No income data provided")
        if not isinstance(income_inputs, IncomeInputs):
            raise TypeError(
                f"income_inputs must be IncomeInputs, got {type(income_inputs).__name__}"
            )

        noi = income_inputs.net_operating_income
        cap_rate = income_inputs.proposed_cap_rate
        if noi is None:
            return self._unavailable("Net operating income is not provided")
        if cap_rate is None:
            return self._unavailable("Proposed cap rate is not provided")
        if cap_rate <= 0:
            return self._unavailable(f"Proposed cap rate {cap_rate:.2f}% must be greater than 0")
        if noi <= 0:
            return self._unavailable(f"Net operating income {noi:,.0f} does not support a value")

        return ApproachIndication(
            approach=self.approach,
            value=noi / (cap_rate / 100.0),
            available=True,
        )
