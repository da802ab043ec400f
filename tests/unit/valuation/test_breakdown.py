# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Tests for the per-factor adjustment summary."""

from __future__ import annotations

import pytest

from compval.comparables import compute_adjustment
from compval.valuation import summarize_adjustments
from tests.conftest import make_comparable


@pytest.fixture
def adjusted():
    return [
        compute_adjustment(make_comparable(1, sale_price=1_000_000), {"location": 10, "age": -5}),
        compute_adjustment(make_comparable(2, sale_price=2_000_000), {"location": 5}),
        compute_adjustment(make_comparable(3, sale_price=3_000_000), {"view": 2}),
    ]


def test_factor_totals(adjusted):
    summary = {b.factor: b for b in summarize_adjustments(adjusted)}
    location = summary["location"]

    assert location.total_percent == pytest.approx(15)
    assert location.average_percent == pytest.approx(5)
    assert location.min_percent == 0
    assert location.max_percent == 10
    assert location.dollar_impact == pytest.approx(200_000)
    assert location.nonzero_count == 2


def test_factor_order_follows_vocabulary_then_extras(adjusted):
    factors = [b.factor for b in summarize_adjustments(adjusted, ["location", "size", "age"])]
    assert factors[:3] == ["location", "size", "age"]
    assert factors[-1] == "view"


def test_empty_set_gives_zero_rows():
    summary = summarize_adjustments([], ["location", "size"])

    assert [b.factor for b in summary] == ["location", "size"]
    assert all(b.total_percent == 0 and b.nonzero_count == 0 for b in summary)


def test_rejects_raw_values():
    with pytest.raises(TypeError):
        summarize_adjustments([1_000_000])
