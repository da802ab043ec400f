# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Tests for spread analysis, the reconciled value range and appraisal rounding."""

from __future__ import annotations

import pytest

from compval.core.primitives import SpreadRatingEnum
from compval.valuation import (
    analyze_approach_spread,
    final_value_range,
    final_value_range_percent,
    round_to_appraisal_increment,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (12_345_678, 12_300_000),
        (2_319_403, 2_320_000),
        (2_315_000, 2_320_000),
        (456_789, 457_000),
        (48_250, 48_500),
        (48_200, 48_000),
        (9_949, 9_900),
        (9_950, 10_000),
    ],
)
def test_round_to_appraisal_increment(value, expected):
    assert round_to_appraisal_increment(value) == expected


def test_round_none():
    assert round_to_appraisal_increment(None) is None


def test_spread_between_approaches():
    analysis = analyze_approach_spread([2_400_000, 2_238_806])

    assert analysis.spread == pytest.approx(161_194 / 2_319_403, rel=1e-6)
    assert analysis.rating == SpreadRatingEnum.EXCELLENT
    assert analysis.acceptable


@pytest.mark.parametrize(
    "values, rating, acceptable",
    [
        ([100, 115], SpreadRatingEnum.GOOD, True),
        ([100, 130], SpreadRatingEnum.ACCEPTABLE, False),
        ([100, 200], SpreadRatingEnum.POOR, False),
    ],
)
def test_spread_rating(values, rating, acceptable):
    analysis = analyze_approach_spread(values)

    assert analysis.rating == rating
    assert analysis.acceptable is acceptable


def test_single_value_has_no_spread():
    analysis = analyze_approach_spread([2_400_000, None])

    assert analysis.spread == 0
    assert analysis.acceptable
    assert analysis.values == [2_400_000]


def test_acceptable_threshold_configurable():
    assert analyze_approach_spread([100, 130], acceptable_spread=0.3).acceptable


@pytest.mark.parametrize(
    "spread, expected",
    [
        (0.0, 0.05),
        (0.20, 0.05),
        (0.21, 0.10),
        (0.30, 0.10),
        (0.31, 0.15),
        (2.0, 0.15),
    ],
)
def test_final_value_range_percent(spread, expected):
    assert final_value_range_percent(spread) == pytest.approx(expected)


def test_final_value_range_brackets_estimate():
    value_range = final_value_range(2_000_000, spread=0.26)

    assert value_range.low == pytest.approx(1_800_000)
    assert value_range.high == pytest.approx(2_200_000)
    assert value_range.percent == pytest.approx(0.10)


def test_final_value_range_without_estimate():
    assert final_value_range(None, spread=0.5) is None
