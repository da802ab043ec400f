# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Annotated, Union

from pydantic import Field

# Constrained numeric types shared across models
PositiveInt = Annotated[int, Field(ge=0, strict=True)]
PositiveFloat = Annotated[float, Field(ge=0.0, allow_inf_nan=False)]
FloatBetween0And1 = Annotated[float, Field(ge=0.0, le=1.0)]
FiniteFloat = Annotated[float, Field(allow_inf_nan=False)]

# Comparable identity: database ids arrive as ints, imported ids as strings.
# 1 and "1" are distinct identities.
ComparableId = Union[int, str]
