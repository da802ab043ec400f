# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Tests for appraisal report projections."""

from __future__ import annotations

import pandas as pd
import pytest

from compval.appraisal import AppraisalSession, appraise
from compval.reporting import BaseReport, ComparableGridReport, ReportTemplate


@pytest.fixture
def result(session):
    session, _ = session.add_comparable(
        session.comparable_set.get(1).comparable, {"location": 5, "age": -2}, index=0
    )
    return appraise(session)


def test_comparable_grid(result):
    grid = result.reporting.comparable_grid()

    assert isinstance(grid, pd.DataFrame)
    assert list(grid.index) == [1, 2, 3]
    assert grid.loc[1, "Location Adj (%)"] == 5
    assert grid.loc[1, "Age Adj (%)"] == -2
    assert grid.loc[1, "Net Adjustment (%)"] == 3
    assert grid.loc[1, "Adjusted Value"] == pytest.approx(2_472_000)
    assert grid.loc[2, "Adjusted Value"] == pytest.approx(2_500_000)
    assert grid.loc[1, "Price/SF"] == pytest.approx(120.0)


def test_comparable_grid_empty_session():
    grid = appraise(AppraisalSession()).reporting.comparable_grid()

    assert grid.empty
    assert "Adjusted Value" in grid.columns


def test_adjustment_summary(result):
    summary = result.reporting.adjustment_summary()

    assert summary.loc["location", "Total (%)"] == 5
    assert summary.loc["location", "Dollar Impact"] == pytest.approx(120_000)
    assert summary.loc["location", "Comparables Adjusted"] == 1
    assert summary.loc["size", "Comparables Adjusted"] == 0


def test_method_summary(result):
    table = result.reporting.method_summary()

    assert list(table.index) == ["Sales Comparison Approach", "Income Approach", "Reconciled Value"]
    assert table.loc["Sales Comparison Approach", "Weight"] == 0.5
    assert table.loc["Reconciled Value", "Indicated Value"] == pytest.approx(
        round(result.final_estimate, 2)
    )


def test_method_summary_without_total(result):
    table = result.reporting.method_summary(include_total=False)
    assert "Reconciled Value" not in table.index


def test_currency_rounded_to_precision(session):
    session = session.model_copy(
        update={"settings": session.settings.model_copy(
            update={"reporting": session.settings.reporting.model_copy(update={"decimal_precision": 0})}
        )}
    )
    table = appraise(session).reporting.method_summary()

    income = table.loc["Income Approach", "Indicated Value"]
    assert income == round(income)


def test_template_relabels_columns(result):
    grid = result.reporting.comparable_grid(template=ReportTemplate(terminology={"Sale Price": "Price"}))

    assert "Price" in grid.columns
    assert "Sale Price" not in grid.columns


def test_diagnostics_table_sorted_by_severity():
    table = appraise(AppraisalSession()).reporting.diagnostics()

    assert table.iloc[0]["Severity"] == "error"
    assert set(table.columns) >= {"Severity", "Kind", "Code", "Message"}


def test_report_requires_result():
    with pytest.raises(TypeError):
        ComparableGridReport({"not": "a result"})
    assert issubclass(ComparableGridReport, BaseReport)
