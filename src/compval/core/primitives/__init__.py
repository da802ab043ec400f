# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
compval Core Primitives

Building blocks shared by every engine module: the immutable base model,
constrained numeric types, enums, settings, diagnostics and the boundary
input normalization.
"""

from .diagnostics import Diagnostic, filter_diagnostics, max_severity
from .enums import (
    AdjustmentFactorEnum,
    ApproachEnum,
    CapRateUnitEnum,
    DiagnosticKind,
    SelectionOutcomeEnum,
    SeverityEnum,
    SpreadRatingEnum,
)
from .model import Model
from .settings import (
    AdjustmentSettings,
    BlendSettings,
    CapRateSettings,
    EngineSettings,
    ReportingSettings,
    SelectionSettings,
)
from .types import (
    ComparableId,
    FiniteFloat,
    FloatBetween0And1,
    PositiveFloat,
    PositiveInt,
)
from .validation import (
    clamp,
    coerce_number,
    first_present,
    is_missing,
    require_sequence,
)

__all__ = [
    # Core models
    "Model",
    "Diagnostic",
    # Settings
    "EngineSettings",
    "SelectionSettings",
    "AdjustmentSettings",
    "CapRateSettings",
    "BlendSettings",
    "ReportingSettings",
    # Enums
    "AdjustmentFactorEnum",
    "ApproachEnum",
    "CapRateUnitEnum",
    "DiagnosticKind",
    "SelectionOutcomeEnum",
    "SeverityEnum",
    "SpreadRatingEnum",
    # Types
    "ComparableId",
    "FiniteFloat",
    "FloatBetween0And1",
    "PositiveFloat",
    "PositiveInt",
    # Normalization
    "clamp",
    "coerce_number",
    "first_present",
    "is_missing",
    "require_sequence",
    # Diagnostics helpers
    "filter_diagnostics",
    "max_severity",
]
