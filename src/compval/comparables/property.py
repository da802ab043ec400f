# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Comparable Sale Records

A comparable is a previously sold property used as a reference point for
valuing the subject. Records are immutable once selected; re-selecting a
property produces a new record.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import List, Optional, Tuple, Union

from pydantic import Field

from ..core.primitives import (
    CapRateUnitEnum,
    ComparableId,
    Diagnostic,
    Model,
    PositiveFloat,
    SeverityEnum,
    coerce_number,
    first_present,
)

# Accepted spellings for each field in raw records (API payloads, imports)
_RECORD_KEYS = {
    "id": ("id", "comparable_id", "property_id", "propertyId"),
    "name": ("name", "property_name", "propertyName"),
    "address": ("address", "property_address", "propertyAddress"),
    "property_type": ("property_type", "propertyType"),
    "total_area_sqft": (
        "total_area_sqft",
        "totalAreaSqFt",
        "total_sf",
        "totalSF",
        "building_size",
        "buildingSize",
    ),
    "year_built": ("year_built", "yearBuilt"),
    "sale_price": ("sale_price", "salePrice", "price", "Price"),
    "cap_rate": ("cap_rate", "capRate", "cap_rate_percent", "capRatePercent"),
}


class ComparableProperty(Model):
    """
    Individual comparable sale.

    Numeric fields are optional: appraisal data is frequently incomplete, and
    missing values are reported as diagnostics when the comparable is
    adjusted rather than rejected here.

    Attributes:
        id: Stable identity within the appraisal session
        name: Display name
        address: Street address
        property_type: Property type label (e.g. "Office", "Retail")
        total_area_sqft: Total building area in square feet
        year_built: Year of construction
        sale_price: Sale price (currency, >= 0)
        cap_rate: Cap rate at sale in percent units (6.5 means 6.5%)
    """

    id: ComparableId
    name: str = ""
    address: str = ""
    property_type: str = ""
    total_area_sqft: Optional[PositiveFloat] = None
    year_built: Optional[int] = Field(default=None, ge=0)
    sale_price: Optional[PositiveFloat] = None
    cap_rate: Optional[PositiveFloat] = Field(
        default=None, description="Cap rate in percent units"
    )

    @property
    def price_per_sf(self) -> Optional[float]:
        """Sale price per square foot; None when price or area is unknown or area is 0."""
        if self.sale_price is None or not self.total_area_sqft:
            return None
        return self.sale_price / self.total_area_sqft

    @classmethod
    def from_record(
        cls,
        record: Mapping,
        cap_rate_unit: Union[CapRateUnitEnum, str] = CapRateUnitEnum.PERCENT,
    ) -> Tuple["ComparableProperty", List[Diagnostic]]:
        """
        Build a comparable from a loosely-typed record.

        Accepts snake_case or camelCase keys. Numeric fields go through
        `coerce_number`; values that cannot be used become None and are
        reported in the returned diagnostics.

        Args:
            record: Mapping with at least an id
            cap_rate_unit: Unit of the record's cap rate. Use "fraction" for
                records that store 0.065 for 6.5%.

        Returns:
            Tuple of (comparable, diagnostics)

        Raises:
            TypeError: If record is not a mapping
            ValueError: If the record has no id
        """
        if not isinstance(record, Mapping):
            raise TypeError(f"record must be a mapping, got {type(record).__name__}")

        comparable_id = first_present(record, *_RECORD_KEYS["id"])
        if comparable_id is None:
            raise ValueError("Comparable record requires an 'id'")

        unit = CapRateUnitEnum(cap_rate_unit)
        diagnostics: List[Diagnostic] = []
        values = {}

        for field in ("total_area_sqft", "sale_price", "cap_rate"):
            raw = first_present(record, *_RECORD_KEYS[field])
            value, issue = coerce_number(raw, field, comparable_id=comparable_id)
            if issue is not None:
                diagnostics.append(issue)
            elif value is not None and value < 0:
                diagnostics.append(
                    Diagnostic.data_quality(
                        code="negative_value",
                        message=f"Negative {field} {value} is not usable",
                        comparable_id=comparable_id,
                        field=field,
                    )
                )
                value = None
            values[field] = value

        if values["cap_rate"] is not None and unit == CapRateUnitEnum.FRACTION:
            values["cap_rate"] = values["cap_rate"] * 100.0

        # Year built is informational; an unusable value is only an info finding
        year_raw = first_present(record, *_RECORD_KEYS["year_built"])
        year_value, _ = coerce_number(year_raw, "year_built", comparable_id=comparable_id)
        year_built = int(year_value) if year_value is not None and year_value >= 0 else None
        if year_raw is not None and year_built is None:
            diagnostics.append(
                Diagnostic.data_quality(
                    code="unknown_year_built",
                    message=f"Year built {year_raw!r} is not a year",
                    severity=SeverityEnum.INFO,
                    comparable_id=comparable_id,
                    field="year_built",
                )
            )

        def _text(field: str) -> str:
            raw = first_present(record, *_RECORD_KEYS[field])
            return "" if raw is None else str(raw)

        comparable = cls(
            id=comparable_id,
            name=_text("name"),
            address=_text("address"),
            property_type=_text("property_type"),
            total_area_sqft=values["total_area_sqft"],
            year_built=year_built,
            sale_price=values["sale_price"],
            cap_rate=values["cap_rate"],
        )
        return comparable, diagnostics
