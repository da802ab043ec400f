# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Input normalization at the engine boundary.

Appraisal inputs arrive loosely typed: numbers, numeric strings with currency
or percent symbols, blanks, or garbage. `coerce_number` is the single place
where such values become either a finite float or None (with a data-quality
diagnostic), so the arithmetic in the rest of the engine can assume clean
numeric types.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .diagnostics import Diagnostic
from .enums import SeverityEnum
from .types import ComparableId

logger = logging.getLogger(__name__)

_STRIP_CHARS = ("$", ",", "%", "_", " ")


def _parse_number(value: Any) -> Optional[float]:
    """Parse a value into a float, returning None when it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, Decimal):
        try:
            return float(value)
        except (InvalidOperation, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        for char in _STRIP_CHARS:
            text = text.replace(char, "")
        if not text:
            return None
        try:
            return float(text)
        except ValueError:
            return None
    return None


def is_missing(value: Any) -> bool:
    """True for None, blank strings and float NaN."""
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def coerce_number(
    value: Any,
    field_name: str,
    *,
    comparable_id: Optional[ComparableId] = None,
) -> Tuple[Optional[float], Optional[Diagnostic]]:
    """
    Coerce a loosely-typed input to a finite float.

    Args:
        value: Raw input (number, numeric string, None, ...)
        field_name: Name of the input field, used in diagnostics and logs
        comparable_id: Comparable the value belongs to, if any

    Returns:
        Tuple of (value, diagnostic). Missing inputs yield (None, None);
        non-numeric or non-finite inputs yield (None, Diagnostic). Callers
        decide whether None means "treat as 0" or "undefined metric".

    Example:
        ```python
        coerce_number("$2,400,000", "sale_price")   # (2400000.0, None)
        coerce_number("n/a", "sale_price")          # (None, Diagnostic(...))
        coerce_number(None, "cap_rate")             # (None, None)
        ```
    """
    if is_missing(value):
        return None, None

    parsed = _parse_number(value)
    if parsed is not None and math.isfinite(parsed):
        return parsed, None

    logger.warning(
        f"Non-numeric value {value!r} for '{field_name}'"
        + (f" on comparable {comparable_id!r}" if comparable_id is not None else "")
        + "; treating as missing"
    )
    return None, Diagnostic.data_quality(
        code="non_numeric_value",
        message=f"Value {value!r} for {field_name} is not a finite number",
        severity=SeverityEnum.WARNING,
        comparable_id=comparable_id,
        field=field_name,
    )


def clamp(value: float, floor: float, ceiling: float) -> float:
    """Clamp value into [floor, ceiling]."""
    return max(floor, min(ceiling, value))


def require_sequence(value: Any, name: str) -> Sequence:
    """
    Guard list arguments at the public API boundary.

    Raises:
        TypeError: If value is not a list-like sequence (strings, bytes and
            mappings are rejected). numpy arrays and pandas Series are
            accepted and returned as lists.
    """
    if isinstance(value, (np.ndarray, pd.Series)):
        return value.tolist()
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(
        value, (list, tuple, Sequence)
    ):
        raise TypeError(f"{name} must be a list or tuple, got {type(value).__name__}")
    return value


def first_present(record: Mapping, *keys: str) -> Any:
    """Return the first non-missing value found under any of the given keys."""
    for key in keys:
        if key in record and not is_missing(record[key]):
            return record[key]
    return None
