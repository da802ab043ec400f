# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Comparable sales, their percentage adjustments, and the selected set.
"""

from .adjustments import AdjustedComparable, AdjustmentSet, compute_adjustment
from .comparable_set import ComparableEntry, ComparableSet, SelectionResult
from .property import ComparableProperty

__all__ = [
    "ComparableProperty",
    "AdjustmentSet",
    "AdjustedComparable",
    "compute_adjustment",
    "ComparableEntry",
    "ComparableSet",
    "SelectionResult",
]
