# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Tests for the appraisal session and pipeline entry point."""

from __future__ import annotations

import pytest

from compval.appraisal import AppraisalResult, AppraisalSession, appraise
from compval.comparables import ComparableSet
from compval.core.primitives import (
    DiagnosticKind,
    EngineSettings,
    SelectionOutcomeEnum,
    SeverityEnum,
)
from compval.valuation import BlendWeights, IncomeInputs
from tests.conftest import make_comparable


class TestAppraisalSession:
    def test_default_comparable_set_uses_selection_settings(self):
        session = AppraisalSession(settings={"selection": {"maximum_comparables": 6}})

        assert isinstance(session.comparable_set, ComparableSet)
        assert session.comparable_set.selection.maximum_comparables == 6

    def test_add_and_remove_comparables(self):
        session = AppraisalSession()

        session, result = session.add_comparable({"id": "a", "salePrice": 1_000_000}, {"location": 5})
        assert result.outcome == SelectionOutcomeEnum.ADDED
        assert session.comparable_set.ids == ["a"]

        session, result = session.remove_comparable("a")
        assert result.outcome == SelectionOutcomeEnum.REMOVED
        assert session.comparable_set.count == 0

    def test_edits_return_new_sessions(self):
        original = AppraisalSession()
        updated, _ = original.add_comparable(make_comparable(1))

        assert original.comparable_set.count == 0
        assert updated.comparable_set.count == 1

    def test_with_income_from_record(self):
        session, diagnostics = AppraisalSession().with_income({"noi": 150_000, "capRate": "bad"})

        assert session.income_inputs.net_operating_income == 150_000
        assert session.income_inputs.proposed_cap_rate is None
        assert diagnostics[0].field == "proposed_cap_rate"

    def test_with_income_rejects_other_types(self):
        with pytest.raises(TypeError):
            AppraisalSession().with_income(150_000)

    def test_explicit_comparable_set_follows_selection_settings(self, income_inputs):
        session = AppraisalSession(
            income_inputs=income_inputs,
            settings={"selection": {"minimum_comparables": 1, "maximum_comparables": 6}},
            comparable_set=ComparableSet(),
        )
        session, _ = session.add_comparable(make_comparable(1))

        assert session.comparable_set.selection.maximum_comparables == 6
        assert appraise(session).is_complete

    def test_replaced_settings_govern_selection(self, session):
        session, _ = session.add_comparable(make_comparable(4, sale_price=2_450_000))
        session = session.model_copy(
            update={"settings": EngineSettings(selection={"maximum_comparables": 6})}
        )

        session, result = session.add_comparable(make_comparable(5, sale_price=2_350_000))

        assert result.outcome == SelectionOutcomeEnum.ADDED
        assert session.comparable_set.count == 5

    def test_property_type_selects_preset_weights(self, session):
        session = session.model_copy(update={"subject_property_type": "Multifamily"})

        estimate = appraise(session).estimate

        assert estimate.weights.sales_comparison == pytest.approx(1 / 3)
        assert estimate.weights.income_approach == pytest.approx(2 / 3)

    def test_explicit_weights_win_over_property_type(self, session):
        session = session.model_copy(
            update={
                "subject_property_type": "Multifamily",
                "weights": BlendWeights(sales_comparison=1, income_approach=1),
            }
        )

        estimate = appraise(session).estimate

        assert estimate.weights.sales_comparison == pytest.approx(0.5)

    def test_comparable_input_findings_kept_until_removed(self, session):
        session, _ = session.add_comparable(
            {"id": 9, "salePrice": 2_400_000, "capRate": 6.6}, {"location": "abc"}
        )

        fields = [d.field for d in appraise(session).diagnostics_of(DiagnosticKind.DATA_QUALITY)]
        assert "adjustments.location" in fields

        session, _ = session.remove_comparable(9)

        fields = [d.field for d in appraise(session).diagnostics_of(DiagnosticKind.DATA_QUALITY)]
        assert "adjustments.location" not in fields

    def test_income_input_findings_replaced_by_clean_income(self, session):
        session, _ = session.with_income({"noi": 150_000, "capRate": "bad"})

        fields = [d.field for d in appraise(session).diagnostics]
        assert "proposed_cap_rate" in fields

        session, diagnostics = session.with_income({"noi": 150_000, "capRate": 6.7})

        assert diagnostics == []
        assert session.input_diagnostics == ()


class TestAppraise:
    def test_end_to_end_scenario(self, session):
        result = appraise(session)

        assert isinstance(result, AppraisalResult)
        assert result.is_complete
        assert result.value_stats.mean == pytest.approx(2_400_000)
        assert result.estimate.sales_comparison_estimate == pytest.approx(2_400_000)
        assert result.estimate.income_approach_estimate == pytest.approx(2_238_806, abs=1)
        assert result.final_estimate == pytest.approx(2_319_403, abs=1)
        assert result.rounded_final_estimate == 2_320_000

    def test_cap_rate_statistics_and_assessment(self, session):
        result = appraise(session)

        # comparable cap rates 6.5, 6.8, 7.0; subject 6.7
        assert result.cap_rate_stats.count == 3
        assert result.cap_rate_stats.mean == pytest.approx(6.7667, abs=1e-4)
        assert result.cap_rate_stats.within_range
        assert result.cap_rate_assessment.severity == SeverityEnum.INFO

    def test_idempotent(self, session):
        first = appraise(session)
        second = appraise(session)

        assert first.final_estimate == second.final_estimate
        assert first.estimate == second.estimate
        assert first.cap_rate_stats == second.cap_rate_stats
        assert first.adjusted_comparables == second.adjusted_comparables

    def test_clean_session_has_no_warnings(self, session):
        result = appraise(session)

        assert result.max_severity in (None, SeverityEnum.INFO)

    def test_incomplete_set_still_valued(self, income_inputs):
        session = AppraisalSession(income_inputs=income_inputs)
        session, _ = session.add_comparable(make_comparable(1, sale_price=2_000_000))

        result = appraise(session)

        assert not result.is_complete
        assert result.final_estimate is not None
        policy = result.diagnostics_of(DiagnosticKind.POLICY_VIOLATION)
        assert "below_minimum_comparables" in [d.code for d in policy]

    def test_empty_session_reports_no_estimate(self):
        result = appraise(AppraisalSession())

        assert result.final_estimate is None
        assert result.max_severity == SeverityEnum.ERROR
        assert "no_usable_estimate" in [d.code for d in result.diagnostics]

    def test_outlier_cap_rate_warning_collected(self, session):
        session = session.model_copy(
            update={"income_inputs": IncomeInputs(net_operating_income=150_000, proposed_cap_rate=9.0)}
        )
        result = appraise(session)

        assert result.cap_rate_assessment.severity == SeverityEnum.WARNING
        assert "cap_rate_outside_comparable_band" in [d.code for d in result.diagnostics]

    def test_adjustments_flow_through(self, session):
        session, _ = session.add_comparable(
            make_comparable(1, sale_price=2_400_000, cap_rate=6.5), {"location": 10}, index=0
        )
        result = appraise(session)

        assert result.adjusted_comparables[0].adjusted_value == pytest.approx(2_640_000)
        assert result.value_stats.mean == pytest.approx(2_480_000)

    def test_session_weights_and_settings_applied(self, session):
        session = session.model_copy(
            update={
                "weights": BlendWeights(sales_comparison=1, income_approach=0),
                "settings": EngineSettings(reporting={"round_final_estimate": False}),
            }
        )
        result = appraise(session)

        assert result.final_estimate == pytest.approx(2_400_000)
        assert result.rounded_final_estimate == result.final_estimate

    def test_value_per_sf_uses_subject_area(self, session):
        result = appraise(session)
        assert result.estimate.value_per_sf == pytest.approx(result.final_estimate / 20_000)

    def test_rejects_non_session(self):
        with pytest.raises(TypeError):
            appraise({"subject_name": "x"})
