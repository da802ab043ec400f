# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Appraisal session value object.

Everything the engine needs for one subject appraisal, passed explicitly at
call time. The surrounding application owns persistence and threads the
session through; editing returns a new session.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import List, Optional, Tuple, Union

from pydantic import Field, model_validator

from ..comparables import AdjustmentSet, ComparableProperty, ComparableSet, SelectionResult
from ..core.primitives import (
    ComparableId,
    Diagnostic,
    DiagnosticKind,
    EngineSettings,
    Model,
    PositiveFloat,
    SelectionOutcomeEnum,
)
from ..valuation import BlendWeights, IncomeInputs


class AppraisalSession(Model):
    """
    Inputs for one subject appraisal.

    `settings.selection` is the only selection policy: the comparable set is
    always read through `selected_comparables`, which applies it, so a set
    passed in or carried over from earlier settings never keeps stale bounds.

    Attributes:
        subject_name: Subject property name
        subject_property_type: Subject property type ("Office", "Retail",
            ...); selects customary blend weights when `weights` is None
        subject_area_sqft: Subject building area (for value per square foot)
        income_inputs: Subject NOI and proposed cap rate
        comparable_set: Selected comparables and their adjustments
        weights: Approach weights; None uses the property type preset when a
            type is given, else `settings.blend`
        input_diagnostics: Data-quality findings from raw inputs accepted by
            `add_comparable` and `with_income`, kept until those inputs are
            replaced or removed
        settings: Engine configuration

    Example:
        ```python
        session = AppraisalSession(
            subject_name="100 Main St",
            income_inputs=IncomeInputs(net_operating_income=150_000, proposed_cap_rate=6.7),
        )
        session, result = session.add_comparable({"id": 1, "salePrice": 2_400_000})
        ```
    """

    subject_name: str = ""
    subject_property_type: Optional[str] = None
    subject_area_sqft: Optional[PositiveFloat] = None
    income_inputs: IncomeInputs = Field(default_factory=IncomeInputs)
    comparable_set: ComparableSet = Field(default_factory=ComparableSet)
    weights: Optional[BlendWeights] = None
    input_diagnostics: Tuple[Diagnostic, ...] = ()
    settings: EngineSettings = Field(default_factory=EngineSettings)

    @model_validator(mode="before")
    @classmethod
    def apply_selection_policy(cls, data):
        """Store the comparable set under the configured selection policy."""
        if not isinstance(data, dict):
            return data
        settings = data.get("settings")
        if settings is None:
            settings = EngineSettings()
        elif isinstance(settings, Mapping):
            settings = EngineSettings.model_validate(settings)
        if not isinstance(settings, EngineSettings):
            return data

        comparable_set = data.get("comparable_set")
        if comparable_set is None:
            comparable_set = ComparableSet(selection=settings.selection)
        elif isinstance(comparable_set, Mapping):
            comparable_set = {**comparable_set, "selection": settings.selection}
        elif isinstance(comparable_set, ComparableSet):
            comparable_set = comparable_set.model_copy(update={"selection": settings.selection})
        return {**data, "settings": settings, "comparable_set": comparable_set}

    @property
    def selected_comparables(self) -> ComparableSet:
        """The comparable set governed by `settings.selection`."""
        if self.comparable_set.selection == self.settings.selection:
            return self.comparable_set
        return self.comparable_set.model_copy(update={"selection": self.settings.selection})

    @property
    def blend_weights(self) -> Optional[BlendWeights]:
        """Weights handed to the blender; caller weights win over presets."""
        if self.weights is not None:
            return self.weights
        if self.subject_property_type:
            return BlendWeights.for_property_type(self.subject_property_type)
        return None

    def add_comparable(
        self,
        comparable: Union[ComparableProperty, Mapping],
        adjustments: Union[AdjustmentSet, Mapping, None] = None,
        index: Optional[int] = None,
    ) -> Tuple["AppraisalSession", SelectionResult]:
        """Add or replace a comparable; see `ComparableSet.add_or_update`."""
        result = self.selected_comparables.add_or_update(comparable, adjustments, index=index)
        if not result.accepted:
            return self, result

        comparable_set = result.comparable_set
        if result.outcome == SelectionOutcomeEnum.UPDATED:
            entry_id = comparable_set.ids[index]
        else:
            entry_id = comparable_set.ids[-1]

        # Findings for the entry and for a replaced comparable are superseded
        kept = [
            d
            for d in self.input_diagnostics
            if d.comparable_id is None
            or (d.comparable_id in comparable_set and d.comparable_id != entry_id)
        ]
        added = [d for d in result.diagnostics if d.kind == DiagnosticKind.DATA_QUALITY]
        return (
            self.model_copy(
                update={
                    "comparable_set": comparable_set,
                    "input_diagnostics": tuple(kept + added),
                }
            ),
            result,
        )

    def remove_comparable(
        self, comparable_id: ComparableId
    ) -> Tuple["AppraisalSession", SelectionResult]:
        result = self.selected_comparables.remove(comparable_id)
        kept = tuple(d for d in self.input_diagnostics if d.comparable_id != comparable_id)
        return (
            self.model_copy(
                update={"comparable_set": result.comparable_set, "input_diagnostics": kept}
            ),
            result,
        )

    def with_income(
        self, income_inputs: Union[IncomeInputs, Mapping]
    ) -> Tuple["AppraisalSession", List[Diagnostic]]:
        """
        Replace the income inputs.

        Raw mappings are coerced; unusable values become None, are returned
        as diagnostics, kept on the session, and surface as an unavailable
        income approach.
        """
        diagnostics: List[Diagnostic] = []
        if isinstance(income_inputs, Mapping):
            income_inputs, diagnostics = IncomeInputs.from_record(income_inputs)
        elif not isinstance(income_inputs, IncomeInputs):
            raise TypeError(
                f"income_inputs must be IncomeInputs or a mapping, got {type(income_inputs).__name__}"
            )
        kept = [d for d in self.input_diagnostics if d.comparable_id is not None]
        return (
            self.model_copy(
                update={
                    "income_inputs": income_inputs,
                    "input_diagnostics": tuple(kept + diagnostics),
                }
            ),
            diagnostics,
        )
