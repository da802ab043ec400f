# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import math
from decimal import Decimal

import numpy as np
import pandas as pd
import pytest

from compval.core.primitives import (
    DiagnosticKind,
    SeverityEnum,
    clamp,
    coerce_number,
    first_present,
    is_missing,
    require_sequence,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (2_400_000, 2_400_000.0),
        (6.5, 6.5),
        ("6.5", 6.5),
        ("$2,400,000", 2_400_000.0),
        ("6.5%", 6.5),
        (" -2.5 ", -2.5),
        (Decimal("1.25"), 1.25),
        (np.float64(3.0), 3.0),
    ],
)
def test_coerce_number_accepts_numeric_input(raw, expected):
    value, issue = coerce_number(raw, "sale_price")
    assert value == expected
    assert issue is None


@pytest.mark.parametrize("raw", [None, "", "   ", float("nan")])
def test_coerce_number_missing_is_silent(raw):
    assert coerce_number(raw, "cap_rate") == (None, None)


@pytest.mark.parametrize("raw", ["n/a", "abc", float("inf"), True, [1, 2], object()])
def test_coerce_number_flags_unusable_input(raw):
    value, issue = coerce_number(raw, "sale_price", comparable_id="c-1")
    assert value is None
    assert issue.kind == DiagnosticKind.DATA_QUALITY
    assert issue.severity == SeverityEnum.WARNING
    assert issue.code == "non_numeric_value"
    assert issue.field == "sale_price"
    assert issue.comparable_id == "c-1"


def test_coerce_number_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="compval.core.primitives.validation"):
        coerce_number("garbage", "cap_rate", comparable_id=7)
    assert "cap_rate" in caplog.text
    assert "7" in caplog.text


def test_is_missing():
    assert is_missing(None)
    assert is_missing("")
    assert is_missing(math.nan)
    assert not is_missing(0)
    assert not is_missing("0")


def test_clamp():
    assert clamp(75, -50, 50) == 50
    assert clamp(-80, -50, 50) == -50
    assert clamp(12.5, -50, 50) == 12.5


def test_require_sequence_accepts_list_likes():
    assert require_sequence([1, 2], "values") == [1, 2]
    assert require_sequence((1, 2), "values") == (1, 2)
    assert require_sequence(np.array([1.0, 2.0]), "values") == [1.0, 2.0]
    assert require_sequence(pd.Series([1.0]), "values") == [1.0]


@pytest.mark.parametrize("bad", ["123", b"123", {"a": 1}, 42, None])
def test_require_sequence_rejects_non_sequences(bad):
    with pytest.raises(TypeError, match="values must be a list or tuple"):
        require_sequence(bad, "values")


def test_first_present_skips_blank_values():
    record = {"salePrice": "", "price": 100}
    assert first_present(record, "sale_price", "salePrice", "price") == 100
    assert first_present(record, "missing") is None
