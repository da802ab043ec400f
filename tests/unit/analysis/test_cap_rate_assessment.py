# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Tests for subject cap rate assessment."""

from __future__ import annotations

import pytest

from compval.analysis import assess_cap_rate, compute_cap_rate_stats
from compval.core.primitives import CapRateSettings, SeverityEnum


@pytest.fixture
def band():
    # mean 5.0, band ~3.37% - 6.63%
    return compute_cap_rate_stats([4.0, 5.0, 6.0])


def test_supported_rate_is_info(band):
    assessment = assess_cap_rate(5.5, band)

    assert assessment.severity == SeverityEnum.INFO
    assert assessment.within_band
    assert assessment.within_absolute_range


def test_outside_band_is_warning(band):
    assessment = assess_cap_rate(7.0, band)

    assert assessment.severity == SeverityEnum.WARNING
    assert assessment.code == "cap_rate_outside_comparable_band"
    assert not assessment.within_band


@pytest.mark.parametrize("rate", [4.5, 15.5])
def test_outside_market_range_is_error(rate):
    stats = compute_cap_rate_stats([4.0, 4.5, 5.0, 15.0, 16.0])
    assessment = assess_cap_rate(rate, stats)

    assert assessment.severity == SeverityEnum.ERROR
    assert assessment.code == "cap_rate_out_of_market_range"
    assert not assessment.within_absolute_range


def test_market_range_bounds_inclusive():
    stats = compute_cap_rate_stats([])
    assert assess_cap_rate(5.0, stats).severity == SeverityEnum.INFO
    assert assess_cap_rate(15.0, stats).severity == SeverityEnum.INFO


def test_no_comparables_only_market_range_applies():
    assessment = assess_cap_rate(9.0, compute_cap_rate_stats([]))
    assert assessment.severity == SeverityEnum.INFO


def test_not_proposed(band):
    assessment = assess_cap_rate(None, band)

    assert assessment.severity == SeverityEnum.INFO
    assert assessment.code == "cap_rate_not_proposed"


def test_custom_market_range(band):
    settings = CapRateSettings(absolute_minimum=6.0, absolute_maximum=10.0)
    assert assess_cap_rate(5.5, band, settings).severity == SeverityEnum.ERROR
