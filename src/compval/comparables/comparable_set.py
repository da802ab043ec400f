# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Comparable Set Manager

Ordered collection of selected comparables, each paired with exactly one
adjustment set, keyed by comparable id. Sets are immutable: every mutation
returns a `SelectionResult` carrying the new set (or the unchanged set when
the change was rejected) so in-progress work is never destroyed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Dict, List, Optional, Tuple, Union

from pydantic import Field, model_validator

from ..core.primitives import (
    AdjustmentSettings,
    ComparableId,
    Diagnostic,
    Model,
    SelectionOutcomeEnum,
    SelectionSettings,
    SeverityEnum,
)
from .adjustments import (
    AdjustedComparable,
    AdjustmentSet,
    _normalize_adjustments,
    _normalize_comparable,
    compute_adjustment,
)
from .property import ComparableProperty

logger = logging.getLogger(__name__)


class ComparableEntry(Model):
    """A selected comparable and its adjustment set."""

    comparable: ComparableProperty
    adjustments: AdjustmentSet = Field(default_factory=AdjustmentSet)

    @property
    def id(self) -> ComparableId:
        return self.comparable.id


class ComparableSet(Model):
    """
    Selected comparables for one subject appraisal.

    Invariants:
    - A comparable id appears at most once
    - Every comparable has exactly one adjustment set (all-zero by default)
    - Adding beyond `selection.maximum_comparables` is rejected; sets below
      `selection.minimum_comparables` are valid but incomplete

    Example:
        ```python
        comps = ComparableSet()
        result = comps.add_or_update(comp_a, {"location": 5})
        comps = result.comparable_set
        comps = comps.remove(comp_a.id).comparable_set
        ```
    """

    entries: Dict[ComparableId, ComparableEntry] = Field(default_factory=dict)
    selection: SelectionSettings = Field(default_factory=SelectionSettings)

    @model_validator(mode="after")
    def validate_keys(self) -> "ComparableSet":
        """Keys must match the id of the comparable they hold."""
        for key, entry in self.entries.items():
            if key != entry.comparable.id:
                raise ValueError(
                    f"Entry key {key!r} does not match comparable id {entry.comparable.id!r}"
                )
        return self

    # === ACCESSORS ===

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, comparable_id: object) -> bool:
        return comparable_id in self.entries

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def ids(self) -> List[ComparableId]:
        return list(self.entries)

    def list(self) -> List[ComparableEntry]:
        """Entries in selection order."""
        return list(self.entries.values())

    def get(self, comparable_id: ComparableId) -> Optional[ComparableEntry]:
        return self.entries.get(comparable_id)

    def index_of(self, comparable_id: ComparableId) -> Optional[int]:
        for position, key in enumerate(self.entries):
            if key == comparable_id:
                return position
        return None

    # === SELECTION POLICY ===

    @property
    def is_complete(self) -> bool:
        """True once the minimum comparable count is met."""
        return self.count >= self.selection.minimum_comparables

    @property
    def is_full(self) -> bool:
        return self.count >= self.selection.maximum_comparables

    def selection_diagnostics(self) -> List[Diagnostic]:
        """Policy findings for finalizing the set in its current state."""
        if self.is_complete:
            return []
        return [
            Diagnostic.policy_violation(
                code="below_minimum_comparables",
                message=(
                    f"At least {self.selection.minimum_comparables} comparables are required; "
                    f"{self.count} selected"
                ),
            )
        ]

    # === MUTATIONS (return new sets) ===

    def add_or_update(
        self,
        comparable: Union[ComparableProperty, Mapping],
        adjustments: Union[AdjustmentSet, Mapping, None] = None,
        index: Optional[int] = None,
    ) -> "SelectionResult":
        """
        Append a comparable, or replace the entry at `index`.

        Args:
            comparable: Sale record, typed or raw
            adjustments: Adjustment set or raw mapping; None means all-zero
            index: Position to replace. None, negative or out-of-range
                indexes append.

        Returns:
            SelectionResult with outcome ADDED or UPDATED, or ALREADY_SELECTED /
            LIMIT_REACHED with the set unchanged
        """
        comparable, diagnostics = _normalize_comparable(comparable)
        adjustment_set, adjustment_issues = _normalize_adjustments(adjustments, comparable.id)
        diagnostics.extend(adjustment_issues)
        entry = ComparableEntry(comparable=comparable, adjustments=adjustment_set)

        keys = list(self.entries)
        if index is not None and 0 <= index < len(keys):
            replaced_id = keys[index]
            if comparable.id != replaced_id and comparable.id in self.entries:
                return self._reject(
                    SelectionOutcomeEnum.ALREADY_SELECTED,
                    comparable.id,
                    f"Comparable {comparable.id!r} is already selected at position "
                    f"{self.index_of(comparable.id)}",
                    diagnostics,
                )
            entries = {
                (comparable.id if key == replaced_id else key): (
                    entry if key == replaced_id else existing
                )
                for key, existing in self.entries.items()
            }
            logger.debug(f"Replaced comparable {replaced_id!r} at position {index} with {comparable.id!r}")
            return SelectionResult(
                comparable_set=self.model_copy(update={"entries": entries}),
                outcome=SelectionOutcomeEnum.UPDATED,
                diagnostics=tuple(diagnostics),
            )

        if comparable.id in self.entries:
            return self._reject(
                SelectionOutcomeEnum.ALREADY_SELECTED,
                comparable.id,
                f"Comparable {comparable.id!r} is already selected",
                diagnostics,
            )
        if self.is_full:
            return self._reject(
                SelectionOutcomeEnum.LIMIT_REACHED,
                comparable.id,
                f"Cannot add comparable {comparable.id!r}: the maximum of "
                f"{self.selection.maximum_comparables} comparables is already selected",
                diagnostics,
            )

        entries = dict(self.entries)
        entries[comparable.id] = entry
        logger.debug(f"Added comparable {comparable.id!r} ({len(entries)} selected)")
        return SelectionResult(
            comparable_set=self.model_copy(update={"entries": entries}),
            outcome=SelectionOutcomeEnum.ADDED,
            diagnostics=tuple(diagnostics),
        )

    def remove(self, comparable_id: ComparableId) -> "SelectionResult":
        """Remove a comparable by id. Removing an unknown id is a no-op."""
        if comparable_id not in self.entries:
            return SelectionResult(
                comparable_set=self,
                outcome=SelectionOutcomeEnum.NOT_SELECTED,
            )
        entries = {key: entry for key, entry in self.entries.items() if key != comparable_id}
        logger.debug(f"Removed comparable {comparable_id!r} ({len(entries)} selected)")
        return SelectionResult(
            comparable_set=self.model_copy(update={"entries": entries}),
            outcome=SelectionOutcomeEnum.REMOVED,
        )

    def _reject(
        self,
        outcome: SelectionOutcomeEnum,
        comparable_id: ComparableId,
        message: str,
        diagnostics: List[Diagnostic],
    ) -> "SelectionResult":
        logger.info(message)
        diagnostics.append(
            Diagnostic.policy_violation(
                code=outcome.value,
                message=message,
                severity=SeverityEnum.WARNING,
                comparable_id=comparable_id,
            )
        )
        return SelectionResult(
            comparable_set=self,
            outcome=outcome,
            diagnostics=tuple(diagnostics),
        )

    # === DERIVED DATA ===

    def adjusted(self, settings: Optional[AdjustmentSettings] = None) -> List[AdjustedComparable]:
        """Adjusted comparables in selection order, recomputed on every call."""
        return [
            compute_adjustment(entry.comparable, entry.adjustments, settings)
            for entry in self.entries.values()
        ]

    # === FACTORY METHODS ===

    @classmethod
    def from_entries(
        cls,
        entries: List[Tuple[Union[ComparableProperty, Mapping], Union[AdjustmentSet, Mapping, None]]],
        selection: Optional[SelectionSettings] = None,
    ) -> Tuple["ComparableSet", List[Diagnostic]]:
        """
        Build a set from (comparable, adjustments) pairs, applying the same
        policy as repeated `add_or_update` calls.

        Returns:
            Tuple of (comparable set, diagnostics from every add)
        """
        comparable_set = cls(selection=selection or SelectionSettings())
        diagnostics: List[Diagnostic] = []
        for comparable, adjustments in entries:
            result = comparable_set.add_or_update(comparable, adjustments)
            comparable_set = result.comparable_set
            diagnostics.extend(result.diagnostics)
        return comparable_set, diagnostics


class SelectionResult(Model):
    """Outcome of a comparable set mutation."""

    comparable_set: ComparableSet
    outcome: SelectionOutcomeEnum
    diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.outcome.accepted
