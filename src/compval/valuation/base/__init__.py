# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from .valuation import ApproachIndication, BaseApproach

__all__ = ["ApproachIndication", "BaseApproach"]
