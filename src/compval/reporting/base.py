# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Base reporting classes.

Reports translate an AppraisalResult into presentation-ready tables in
familiar appraisal terminology. They only format and present data; every
number comes from the pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

import pandas as pd
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from ..appraisal.results import AppraisalResult


class ReportTemplate(BaseModel):
    """
    Template configuration for report generation.

    Allows relabeling columns without changing the underlying data.

    Example:
        ```python
        template = ReportTemplate(terminology={"Sale Price": "Price"})
        result.reporting.comparable_grid(template=template)
        ```
    """

    name: str = "default"

    # Terminology mappings - translate default column labels to house terms
    terminology: Dict[str, str] = Field(default_factory=dict)


class BaseReport(ABC):
    """
    Abstract base class for all report formatters.

    Reports operate on AppraisalResult objects and transform them into
    DataFrames. Currency columns are rounded to the configured precision.
    """

    currency_columns: tuple = ()

    def __init__(self, result: "AppraisalResult", template: Optional[ReportTemplate] = None):
        """
        Initialize report with appraisal results.

        Args:
            result: AppraisalResult from compval.appraisal.appraise()
            template: Optional relabeling template
        """
        # Import at runtime to avoid circular dependencies
        from ..appraisal.results import AppraisalResult  # noqa: PLC0415

        if not isinstance(result, AppraisalResult):
            raise TypeError("BaseReport requires an AppraisalResult object")
        self._result = result
        self._template = template or ReportTemplate()

    @property
    def precision(self) -> int:
        return self._result.session.settings.reporting.decimal_precision

    @abstractmethod
    def build(self, **kwargs: Any) -> pd.DataFrame:
        """Assemble the report table with default labels."""
        pass

    def generate(self, **kwargs: Any) -> pd.DataFrame:
        """Build the table, round currency columns and apply the template."""
        frame = self.build(**kwargs)
        currency = [c for c in self.currency_columns if c in frame.columns]
        if currency and not frame.empty:
            frame[currency] = frame[currency].astype("float64").round(self.precision)
        if self._template.terminology:
            frame = frame.rename(columns=self._template.terminology)
        return frame

    @staticmethod
    def _frame(rows: Iterable[Dict[str, Any]], columns, index: str) -> pd.DataFrame:
        frame = pd.DataFrame(list(rows), columns=columns)
        return frame.set_index(index)
