# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Tests for value and cap rate statistics."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from compval.analysis import (
    CapRateStatistics,
    ValueStatistics,
    compute_cap_rate_stats,
    compute_value_stats,
)
from compval.comparables import compute_adjustment
from compval.core.primitives import CapRateSettings, DiagnosticKind
from tests.conftest import make_comparable


class TestValueStatistics:
    def test_even_length_median_averages_middle(self):
        stats = compute_value_stats([400, 100, 300, 200])

        assert stats.median == 250
        assert stats.mean == 250
        assert stats.min == 100
        assert stats.max == 400
        assert stats.count == 4

    def test_odd_length_median(self):
        assert compute_value_stats([300, 100, 200]).median == 200

    def test_population_std_dev(self):
        stats = compute_value_stats([2, 4, 4, 4, 5, 5, 7, 9])
        assert stats.std_dev == pytest.approx(2.0)

    def test_missing_and_nan_filtered(self):
        stats = compute_value_stats([100, None, math.nan, 300])

        assert stats.count == 2
        assert stats.mean == 200

    def test_currency_strings_counted(self):
        stats = compute_value_stats(["$2,400,000", 2_500_000, 2_300_000])

        assert stats.count == 3
        assert stats.max == 2_500_000
        assert stats.mean == pytest.approx(2_400_000)
        assert stats.diagnostics == ()

    def test_non_numeric_entries_reported(self, caplog):
        with caplog.at_level(logging.WARNING, logger="compval"):
            stats = compute_value_stats(["n/a", 2_500_000, 2_300_000])

        assert stats.count == 2
        assert [d.code for d in stats.diagnostics] == ["non_numeric_value"]
        assert stats.diagnostics[0].kind == DiagnosticKind.DATA_QUALITY
        assert "n/a" in caplog.text

    def test_empty_returns_zeros(self):
        assert compute_value_stats([]) == ValueStatistics()
        assert compute_value_stats([None, math.nan]).mean == 0

    def test_accepts_adjusted_comparables(self):
        adjusted = [
            compute_adjustment(make_comparable(1, sale_price=1_000_000), {"location": 10}),
            compute_adjustment(make_comparable(2, sale_price=1_000_000), {"location": -10}),
        ]
        stats = compute_value_stats(adjusted)

        assert stats.mean == pytest.approx(1_000_000)
        assert stats.range == pytest.approx(200_000)

    def test_accepts_numpy_array(self):
        assert compute_value_stats(np.array([1.0, 2.0, 3.0])).median == 2.0

    def test_coefficient_of_variation(self):
        stats = compute_value_stats([90, 110])
        assert stats.coefficient_of_variation == pytest.approx(0.1)

    def test_non_sequence_raises(self):
        with pytest.raises(TypeError):
            compute_value_stats(100)


class TestCapRateStatistics:
    def test_two_sigma_band(self):
        stats = compute_cap_rate_stats([4.0, 5.0, 6.0], subject_cap_rate=7.0)

        assert stats.mean == pytest.approx(5.0)
        assert stats.std_dev == pytest.approx(0.8165, abs=1e-4)
        assert stats.lower_bound == pytest.approx(3.367, abs=1e-3)
        assert stats.upper_bound == pytest.approx(6.633, abs=1e-3)
        assert stats.within_range is False

    def test_subject_inside_band(self):
        assert compute_cap_rate_stats([4.0, 5.0, 6.0], subject_cap_rate=5.0).within_range

    def test_empty_set_is_safe(self):
        stats = compute_cap_rate_stats([])

        assert stats.mean == 0
        assert stats.std_dev == 0
        assert stats.lower_bound == 0
        assert stats.upper_bound == 0
        assert stats.within_range is True
        assert stats.count == 0

    def test_empty_set_with_subject_is_within_range(self):
        assert compute_cap_rate_stats([], subject_cap_rate=25).within_range

    @pytest.mark.parametrize("subject", [None, math.nan, "n/a"])
    def test_absent_subject_is_within_range(self, subject):
        assert compute_cap_rate_stats([4.0, 5.0, 6.0], subject_cap_rate=subject).within_range

    def test_percent_strings_counted(self):
        stats = compute_cap_rate_stats(["4.0%", "5.0", 6.0])

        assert stats.count == 3
        assert stats.mean == pytest.approx(5.0)

    def test_unusable_cap_rates_reported(self):
        stats = compute_cap_rate_stats([5.0, "tbd", 7.0], subject_cap_rate="high")

        assert stats.count == 2
        assert [d.field for d in stats.diagnostics] == ["cap_rate", "subject_cap_rate"]

    def test_comparables_without_cap_rate_excluded(self):
        adjusted = [
            compute_adjustment(make_comparable(1, cap_rate=5.0)),
            compute_adjustment(make_comparable(2, cap_rate=None)),
            compute_adjustment(make_comparable(3, cap_rate=7.0)),
        ]
        stats = compute_cap_rate_stats(adjusted)

        assert stats.count == 2
        assert stats.mean == pytest.approx(6.0)

    def test_uses_adjusted_cap_rates(self):
        adjusted = [compute_adjustment(make_comparable(1, cap_rate=6.0), {"quality": 10})]
        assert compute_cap_rate_stats(adjusted).mean == pytest.approx(6.3)

    def test_custom_band_width(self):
        stats = compute_cap_rate_stats(
            [4.0, 5.0, 6.0], subject_cap_rate=6.0, settings=CapRateSettings(band_sigma=1.0)
        )
        assert stats.upper_bound == pytest.approx(5.8165, abs=1e-4)
        assert not stats.within_range

    def test_single_comparable_band_collapses(self):
        stats = compute_cap_rate_stats([6.0], subject_cap_rate=6.0)

        assert stats.std_dev == 0
        assert stats.lower_bound == stats.upper_bound == 6.0
        assert stats.within_range

    def test_idempotent(self):
        first = compute_cap_rate_stats([4.0, 5.5, 6.1], subject_cap_rate=6.0)
        second = compute_cap_rate_stats([4.0, 5.5, 6.1], subject_cap_rate=6.0)
        assert first == second
        assert isinstance(first, CapRateStatistics)

    def test_non_sequence_raises(self):
        with pytest.raises(TypeError):
            compute_cap_rate_stats({"a": 5.0})
