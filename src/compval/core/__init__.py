# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
compval Core

Shared primitives (models, settings, diagnostics, normalization) used by the
comparables, analysis, valuation and appraisal layers.
"""

from . import primitives

__all__ = ["primitives"]
