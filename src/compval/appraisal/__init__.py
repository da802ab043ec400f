# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Appraisal sessions and the pipeline entry point.
"""

from .api import appraise
from .results import AppraisalResult
from .session import AppraisalSession

__all__ = ["AppraisalSession", "AppraisalResult", "appraise"]
