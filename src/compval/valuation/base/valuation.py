# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Base Approach Classes - Appraisal Value Indications

Provides the foundation for the approaches reconciled into a final value
estimate. Each approach turns its inputs into an `ApproachIndication`: a
value, or an explicit "unavailable" with the reason, never NaN.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Optional

from pydantic import Field

from ...core.primitives import ApproachEnum, Model


class ApproachIndication(Model):
    """
    Value indicated by one approach.

    Attributes:
        approach: Which approach produced the indication
        value: Indicated value, None when unavailable
        available: Whether the approach produced a usable value
        reason: Why the approach is unavailable (empty when available)
        low: Low end of the indicated value range, if the approach has one
        high: High end of the indicated value range, if the approach has one
    """

    approach: ApproachEnum
    value: Optional[float] = None
    available: bool = False
    reason: str = ""
    low: Optional[float] = None
    high: Optional[float] = None

    @classmethod
    def unavailable(cls, approach: ApproachEnum, reason: str) -> "ApproachIndication":
        return cls(approach=approach, reason=reason)


class BaseApproach(Model, ABC):
    """
    Abstract base class for valuation approaches.

    Approaches are stateless and configured only through their fields, so the
    same instance may be reused across recomputations.
    """

    approach: ClassVar[ApproachEnum]

    name: str = Field(default="", description="Human-readable name for the approach")

    @abstractmethod
    def indicate(self, *args, **kwargs) -> ApproachIndication:
        """
        Produce this approach's value indication.

        Returns:
            ApproachIndication; unavailable (with a reason) rather than raising
            when the inputs cannot support a value
        """
        pass

    def _unavailable(self, reason: str) -> ApproachIndication:
        return ApproachIndication.unavailable(self.approach, reason)
