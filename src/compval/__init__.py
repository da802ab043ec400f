# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
compval - Comparable-Sales Adjustment and Valuation Engine

Takes a subject property, a set of selected comparable sales and per-comparable
percentage adjustments, and produces adjusted comparable values, value and cap
rate statistics (with +/-2 sigma outlier detection), and a final value estimate
blended across the sales comparison and income approaches.

Key Entry Points:
- compval.appraisal.appraise() - Full pipeline with report projections
- compval.comparables.* - Comparable records, adjustments and the selected set
- compval.analysis.* - Value and cap rate statistics
- compval.valuation.* - Approach indications and blending

Example Usage:
    ```python
    from compval.appraisal import AppraisalSession, appraise
    from compval.valuation import IncomeInputs

    session = AppraisalSession(
        subject_name="100 Main St",
        income_inputs=IncomeInputs(net_operating_income=150_000, proposed_cap_rate=6.7),
    )
    for record in records:
        session, _ = session.add_comparable(record, {"location": 5})

    result = appraise(session)
    print(f"Final estimate: {result.rounded_final_estimate:,.0f}")
    ```
"""

import importlib
import logging

# Libraries leave handler configuration to the application.
logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "analysis",
    "appraisal",
    "comparables",
    "core",
    "reporting",
    "valuation",
]


_LAZY_MODULES = {
    "analysis": "compval.analysis",
    "appraisal": "compval.appraisal",
    "comparables": "compval.comparables",
    "core": "compval.core",
    "reporting": "compval.reporting",
    "valuation": "compval.valuation",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'compval' has no attribute '{name}'")
    module = importlib.import_module(module_path)
    globals()[name] = module
    return module
