# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Test utilities and fixtures for compval testing.

Builders for comparables and sessions so tests can state only the fields
they care about.
"""

from __future__ import annotations

from typing import Optional

import pytest

from compval.appraisal import AppraisalSession
from compval.comparables import ComparableProperty, ComparableSet
from compval.valuation import IncomeInputs


# Comparable Utilities
def make_comparable(
    comparable_id=1,
    sale_price: Optional[float] = 2_400_000.0,
    cap_rate: Optional[float] = 6.5,
    total_area_sqft: Optional[float] = 20_000.0,
    **kwargs,
) -> ComparableProperty:
    """Create a comparable sale with sensible defaults."""
    return ComparableProperty(
        id=comparable_id,
        name=kwargs.pop("name", f"Comparable {comparable_id}"),
        sale_price=sale_price,
        cap_rate=cap_rate,
        total_area_sqft=total_area_sqft,
        **kwargs,
    )


def make_comparable_set(*comparables, adjustments=None) -> ComparableSet:
    """Create a comparable set, adding comparables in order."""
    comparable_set = ComparableSet()
    for comparable in comparables:
        comparable_set = comparable_set.add_or_update(comparable, adjustments).comparable_set
    return comparable_set


@pytest.fixture
def three_comparables():
    """Three unadjusted sales at 2.4M, 2.5M and 2.3M."""
    return [
        make_comparable(1, sale_price=2_400_000, cap_rate=6.5),
        make_comparable(2, sale_price=2_500_000, cap_rate=6.8),
        make_comparable(3, sale_price=2_300_000, cap_rate=7.0),
    ]


@pytest.fixture
def income_inputs() -> IncomeInputs:
    return IncomeInputs(net_operating_income=150_000, proposed_cap_rate=6.7)


@pytest.fixture
def session(three_comparables, income_inputs) -> AppraisalSession:
    """Complete session: three comparables, NOI 150k at 6.7%."""
    return AppraisalSession(
        subject_name="100 Main St",
        subject_area_sqft=20_000,
        income_inputs=income_inputs,
        comparable_set=make_comparable_set(*three_comparables),
    )
