# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base Pydantic model with common configuration.

    Immutable models: every engine operation takes a snapshot of its inputs
    and returns new objects. Session continuity lives with the caller.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,  # Immutable models; callers thread new instances forward
        extra="forbid",  # Catches typos and missing field definitions immediately
    )
